from plar import *


class TestFunctions:
    def test_recursion(self, run_plar):
        output, _ = run_plar('''
            funcao fib(n) {
                se (n < 2) retornar n;
                retornar fib(n - 1) + fib(n - 2);
            }
            escrever(fib(10));
        ''')
        assert output == ['55']

    def test_too_many_arguments(self, run_plar):
        _, error = run_plar('funcao f(a) { } f(1, 2);')
        assert isinstance(error, SemanticError)
        assert error.details == "Funcao 'f' recebeu 2 parametros, mas espera 1"

    def test_missing_arguments_are_null(self, run_plar):
        output, _ = run_plar('funcao f(a, b) { escrever(a, b); } f(1);')
        assert output == ['1 nulo']

    def test_no_return_yields_null(self, run_plar):
        output, _ = run_plar('''
            funcao f() { }
            funcao g() { retornar; }
            escrever(f(), g());
        ''')
        assert output == ['nulo nulo']

    def test_function_literals_are_values(self, run_plar):
        output, error = run_plar('''
            var dobro = funcao(x) { retornar x * 2; };
            funcao aplicar(f, v) { retornar f(v); }
            escrever(dobro(4), aplicar(dobro, 5), dobro);
        ''')
        assert error is None
        assert output == ['8 10 <funcao <anonima>>']

    def test_function_return_type(self, run_plar):
        output, error = run_plar('''
            funcao pegar(): Funcao { retornar escrever; }
            var f = pegar();
            f("ok");
        ''')
        assert error is None
        assert output == ['ok']

    def test_calling_non_function(self, run_plar):
        _, error = run_plar('var x = 1; x();')
        assert error.details == 'Funcao nao encontrada ou nao seria funcao: x'

    def test_unknown_function(self, run_plar):
        _, error = run_plar('nada();')
        assert error.details == 'Funcao nao encontrada ou nao seria funcao: nada'

    def test_break_escaping_function_reaches_caller_loop(self, run_plar):
        output, _ = run_plar('''
            funcao interromper() { quebrar; }
            var n = 0;
            enquanto (verdadeiro) { n = n + 1; interromper(); }
            escrever(n);
        ''')
        assert output == ['1']

    def test_runaway_recursion_is_reported(self, run_plar):
        output, error = run_plar('funcao f() { retornar f(); } f();')
        assert isinstance(error, RTError)
        assert error.details == 'Limite de recursao excedido'
        assert len(output) == 1

    def test_traceback_names_frames(self, run_plar):
        output, _ = run_plar('funcao falha() {\n  retornar 1 / 0;\n}\nfalha();')
        assert 'em falha' in output[0]
        assert 'em <programa>' in output[0]


class TestNatives:
    def test_missing_argument(self, run_plar):
        _, error = run_plar('tamanho();')
        assert error.details == "Faltando argumento 'valor' para a funcao 'tamanho'"

    def test_too_many_arguments(self, run_plar):
        _, error = run_plar('tamanho(1, 2);')
        assert error.details == "Funcao 'tamanho' recebeu 2 parametros, mas espera 1"

    def test_natives_render_by_name(self, run_plar):
        output, _ = run_plar('escrever(escrever);')
        assert output == ['<funcao escrever>']

    def test_natives_can_be_shadowed(self, run_plar):
        output, _ = run_plar('funcao tamanho(x) { retornar 0; } escrever(tamanho("abc"));')
        assert output == ['0']

    def test_direct_execute(self):
        output = []
        interpreter = Interpreter(output=output.append)
        native = interpreter.global_symbol_table.get('escrever')
        res = native.execute([Integer(1), String('a')], interpreter.context)
        assert res.error is None
        assert res.value is Nulo.null
        assert output == ['1 a']
