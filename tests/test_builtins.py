import builtins

import plar
from plar import *


def with_path(text, path):
    return text.replace('CAMINHO', f'"{path}"')


class TestOutput:
    def test_escrever_joins_with_spaces(self, run_plar):
        output, _ = run_plar('escrever("a", 1, 2.5, verdadeiro, nulo); escrever(); imprimir("b");')
        assert output == ['a 1 2.5 verdadeiro nulo', '', 'b']


class TestTamanho:
    def test_sizes(self, run_plar):
        output, _ = run_plar('''
            var m = mapa();
            m["a"] = 1;
            escrever(tamanho(lista(3)), tamanho(m), tamanho("abc"), tamanho(""));
        ''')
        assert output == ['3 1 3 0']

    def test_rejects_other_types(self, run_plar):
        _, error = run_plar('tamanho(1);')
        assert isinstance(error, TipoError)
        assert error.details == 'Funcao tamanho só funciona com listas, mapas ou textos'


class TestFiles:
    def test_write_append_and_read(self, run_plar, tmp_path):
        path = tmp_path / 'saida.txt'
        output, error = run_plar(with_path('''
            writeFile(CAMINHO, "ola");
            writeFile(CAMINHO, " mundo", verdadeiro);
            escrever(readFile(CAMINHO));
        ''', path))
        assert error is None
        assert output == ['ola mundo']
        assert path.read_text(encoding='utf-8') == 'ola mundo'

    def test_write_truncates_by_default(self, run_plar, tmp_path):
        path = tmp_path / 'saida.txt'
        path.write_text('antigo', encoding='utf-8')
        run_plar(with_path('writeFile(CAMINHO, "novo");', path))
        assert path.read_text(encoding='utf-8') == 'novo'

    def test_read_missing_file(self, run_plar, tmp_path):
        _, error = run_plar(with_path('readFile(CAMINHO);', tmp_path / 'nada.txt'))
        assert isinstance(error, ArquivoError)

    def test_read_requires_text(self, run_plar):
        _, error = run_plar('readFile(1);')
        assert error.details == 'Argumento deve ser um texto (caminho do arquivo)'

    def test_write_requires_text(self, run_plar):
        _, error = run_plar('writeFile("x.txt", 1);')
        assert error.details == 'Os dois primeiros argumentos devem ser do tipo Texto'


class TestJogarError:
    def test_raises_generic_error(self, run_plar):
        output, error = run_plar('jogarError("boom");')
        assert error.error_name == 'Erro'
        assert error.details == 'boom'
        assert 'Erro: boom' in output[0]


class TestDormir:
    def test_sleeps_in_milliseconds(self, run_plar, monkeypatch):
        calls = []
        monkeypatch.setattr(plar.time, 'sleep', calls.append)
        _, error = run_plar('dormir(250);')
        assert error is None
        assert calls == [0.25]

    def test_requires_integer(self, run_plar):
        _, error = run_plar('dormir("x");')
        assert isinstance(error, TipoError)


class TestExecutar:
    def test_runs_function_and_waits(self, run_plar):
        output, error = run_plar('''
            var soma = funcao(a, b) { escrever(a + b); };
            executar(soma, 1, 2);
            escrever("depois");
        ''')
        assert error is None
        assert output == ['3', 'depois']

    def test_failures_are_reported_not_raised(self, run_plar):
        output, error = run_plar('''
            var falha = funcao() { jogarError("x"); };
            executar(falha);
            escrever("segue");
        ''')
        assert error is None
        assert output == ['Erro na execucao da thread: x', 'segue']

    def test_runaway_recursion_is_reported(self, run_plar):
        output, error = run_plar('''
            funcao r(n) { retornar r(n + 1); }
            executar(r, 0);
            escrever("depois");
        ''')
        assert error is None
        assert output == ['Erro na execucao da thread: Limite de recursao excedido', 'depois']

    def test_requires_function(self, run_plar):
        _, error = run_plar('executar(1);')
        assert isinstance(error, TipoError)


class TestLer:
    def test_reads_line(self, run_plar, monkeypatch):
        monkeypatch.setattr(builtins, 'input', lambda: 'linha')
        output, _ = run_plar('var s = ler(); escrever(s + "!");')
        assert output == ['linha!']

    def test_end_of_input(self, run_plar, monkeypatch):
        def closed():
            raise EOFError
        monkeypatch.setattr(builtins, 'input', closed)
        _, error = run_plar('ler();')
        assert isinstance(error, RTError)


class TestSockets:
    def test_escrever_socket_arity(self, run_plar):
        _, error = run_plar('escrever_socket(1, 2);')
        assert isinstance(error, SemanticError)
        assert error.details == 'Argumentos invalidos para escrever_socket'

    def test_escrever_socket_types(self, run_plar):
        _, error = run_plar('escrever_socket("localhost", "porta", "texto");')
        assert isinstance(error, TipoError)

    def test_ler_socket_types(self, run_plar):
        _, error = run_plar('ler_socket(1);')
        assert isinstance(error, TipoError)
