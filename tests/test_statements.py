from plar import *


class TestConditionals:
    def test_if_else(self, run_plar):
        output, error = run_plar('''
            se (1 < 2) escrever("sim"); senao escrever("nao");
            se (1 > 2) { escrever("nunca"); }
        ''')
        assert error is None
        assert output == ['sim']

    def test_condition_must_be_logical(self, run_plar):
        _, error = run_plar('se (1) { }')
        assert isinstance(error, TipoError)
        assert error.details == "Condicao do 'se' deve ser logica, mas recebeu 'Inteiro'"


class TestLoops:
    def test_while_with_break_and_continue(self, run_plar):
        output, _ = run_plar('''
            var i = 0;
            var soma = 0;
            enquanto (verdadeiro) {
                i = i + 1;
                se (i > 7) quebrar;
                se (i % 2 == 0) continuar;
                soma = soma + i;
            }
            escrever(soma);
        ''')
        assert output == ['16']

    def test_while_stops_silently_at_ceiling(self, run_plar):
        output, error = run_plar('''
            var n = 0;
            enquanto (verdadeiro) { n = n + 1; }
            escrever(n);
        ''', max_iterations=50)
        assert error is None
        assert output == ['50']

    def test_do_while_runs_at_least_once(self, run_plar):
        output, _ = run_plar('''
            var n = 0;
            faca { n = n + 1; } enquanto (falso);
            escrever(n);
        ''')
        assert output == ['1']

    def test_do_while_shares_ceiling(self, run_plar):
        output, error = run_plar('''
            var n = 0;
            faça { n = n + 1; } enquanto (verdadeiro);
            escrever(n);
        ''', max_iterations=10)
        assert error is None
        assert output == ['10']

    def test_for_runs_step_after_continue(self, run_plar):
        output, _ = run_plar('''
            var soma = 0;
            para (var i = 0; i < 5; i = i + 1) {
                se (i == 2) continuar;
                soma = soma + i;
            }
            escrever(soma);
        ''')
        assert output == ['8']

    def test_for_break(self, run_plar):
        output, _ = run_plar('''
            para (var i = 0; i < 100; i = i + 1) {
                se (i == 3) quebrar;
                escrever(i);
            }
        ''')
        assert output == ['0', '1', '2']

    def test_for_variable_is_scoped_to_loop(self, run_plar):
        _, error = run_plar('para (var i = 0; i < 1; i = i + 1) { } escrever(i);')
        assert error.details == "Variavel 'i' nao definida"

    def test_for_with_expression_init(self, run_plar):
        output, _ = run_plar('''
            var i = 10;
            para (i = 0; i < 3; i = i + 1) { }
            escrever(i);
        ''')
        assert output == ['3']

    def test_for_has_no_ceiling(self, run_plar):
        output, _ = run_plar('''
            var n = 0;
            para (var i = 0; i < 20; i = i + 1) n = n + 1;
            escrever(n);
        ''', max_iterations=5)
        assert output == ['20']

    def test_return_leaves_loop(self, run_plar):
        output, _ = run_plar('''
            funcao primeiro_par(limite) {
                var i = 1;
                enquanto (i < limite) {
                    se (i % 2 == 0) retornar i;
                    i = i + 1;
                }
                retornar -1;
            }
            escrever(primeiro_par(10), primeiro_par(2));
        ''')
        assert output == ['2 -1']


class TestTryCatch:
    def test_catches_runtime_error(self, run_plar):
        output, error = run_plar('''
            tentar { var x = 1 / 0; } capturar (e) { escrever(e); }
        ''')
        assert error is None
        assert output == ['Divisão por zero']

    def test_catches_thrown_error(self, run_plar):
        output, _ = run_plar('''
            tentar { jogarError("falhou"); escrever("nunca"); } capturar (e) { escrever("pegou: " + e); }
        ''')
        assert output == ['pegou: falhou']

    def test_return_passes_through(self, run_plar):
        output, _ = run_plar('''
            funcao f() {
                tentar { retornar 1; } capturar (e) { retornar 2; }
            }
            escrever(f());
        ''')
        assert output == ['1']

    def test_break_passes_through(self, run_plar):
        output, _ = run_plar('''
            var n = 0;
            enquanto (verdadeiro) {
                tentar { n = n + 1; se (n == 3) quebrar; } capturar { escrever("nunca"); }
            }
            escrever(n);
        ''')
        assert output == ['3']

    def test_catch_variable_is_local(self, run_plar):
        _, error = run_plar('tentar { jogarError("x"); } capturar (e) { } escrever(e);')
        assert error.details == "Variavel 'e' nao definida"

    def test_error_in_catch_propagates(self, run_plar):
        _, error = run_plar('tentar { jogarError("um"); } capturar (e) { jogarError("dois"); }')
        assert error.details == 'dois'


class TestEscapedSignals:
    def test_break_outside_loop(self, run_plar):
        _, error = run_plar('quebrar;')
        assert isinstance(error, SemanticError)
        assert error.details == "'quebrar' fora de um laco"

    def test_continue_outside_loop(self, run_plar):
        _, error = run_plar('se (verdadeiro) { continuar; }')
        assert error.details == "'continuar' fora de um laco"

    def test_return_outside_function(self, run_plar):
        output, error = run_plar('escrever(1); retornar 2; escrever(3);')
        assert output[0] == '1'
        assert '3' not in output
        assert error.details == "'retornar' fora de uma funcao"


class TestOperators:
    def test_arithmetic(self, run_plar):
        output, _ = run_plar('escrever(7 / 2, 8 / 2, 7 % 3, -7 % 3, 7.5 % 2, 1 + 2 * 3);')
        assert output == ['3.5 4 1 -1 1.5 7']

    def test_logical_short_circuit(self, run_plar):
        output, error = run_plar('''
            escrever(falso e jogarError("nunca"), verdadeiro ou jogarError("nunca"));
            escrever(verdadeiro && falso, falso || verdadeiro);
        ''')
        assert error is None
        assert output == ['falso verdadeiro', 'falso verdadeiro']

    def test_logical_operands_must_be_logical(self, run_plar):
        _, error = run_plar('escrever(1 e verdadeiro);')
        assert isinstance(error, TipoError)
        assert error.details == "Operador 'e' requer operandos Logico, mas recebeu 'Inteiro'"

    def test_unary(self, run_plar):
        output, _ = run_plar('escrever(-5, !falso, -(1 + 2), -1.5);')
        assert output == ['-5 verdadeiro -3 -1.5']

    def test_not_requires_logical(self, run_plar):
        _, error = run_plar('escrever(!1);')
        assert isinstance(error, TipoError)

    def test_operator_errors_carry_position(self, run_plar):
        output, error = run_plar('var a = 1;\nvar b = a / 0;')
        assert isinstance(error, AritmeticaError)
        assert error.pos_start.ln == 1
        assert 'Erro Aritmetico: Divisão por zero' in output[0]

    def test_equality(self, run_plar):
        output, _ = run_plar('''
            var l = lista(1);
            escrever(nulo == nulo, nulo == 0, 1 == 1.0, "a" != "a", l == l, lista(1) == lista(1));
        ''')
        assert output == ['verdadeiro falso verdadeiro falso verdadeiro falso']

    def test_collections(self, run_plar):
        output, error = run_plar('''
            var l = lista(2);
            l[0] = "a";
            var m = mapa();
            m["k"] = l;
            m[1] = 2;
            escrever(l, m["k"][0], m["nada"], m);
        ''')
        assert error is None
        assert output == ['[a, nulo] a nulo [[k: [a, nulo], 1: 2]]']

    def test_list_out_of_bounds(self, run_plar):
        _, error = run_plar('var l = lista(2); l[2] = 1;')
        assert error.details == 'Indice 2 fora dos limites da lista de tamanho 2'

    def test_negative_list_size(self, run_plar):
        _, error = run_plar('var l = lista(-1);')
        assert error.details == 'Tamanho da lista deve ser um Inteiro nao negativo'
