import pytest

from plar import *


@pytest.fixture
def modules():
    return {}


@pytest.fixture
def loader(modules):
    """Loader over an in-memory set of sources that records every call."""
    def load(file_literal):
        load.calls.append(file_literal)
        program_node, error = parse(file_literal, modules[file_literal])
        if error: raise ValueError(repr(error))
        return program_node
    load.calls = []
    return load


class TestInjectedLoader:
    def test_declarations_are_merged_into_globals(self, run_plar, modules, loader):
        modules['util.plar'] = 'var base = 10; funcao dobro(x) { retornar x * 2; }'
        output, error = run_plar('importar "util.plar"; escrever(dobro(base));', loader=loader)
        assert error is None
        assert output == ['20']

    def test_same_literal_is_processed_once(self, run_plar, modules, loader):
        modules['a.plar'] = 'importar "util.plar"; var a = 1;'
        modules['util.plar'] = 'var u = 2;'
        output, error = run_plar('''
            importar "util.plar";
            importar "a.plar";
            importar "util.plar";
            escrever(a + u);
        ''', loader=loader)
        assert error is None
        assert output == ['3']
        assert loader.calls == ['util.plar', 'a.plar']

    def test_different_literals_load_twice(self, run_plar, modules, loader):
        modules['util.plar'] = 'var u = 1;'
        modules['./util.plar'] = modules['util.plar']
        run_plar('importar "util.plar"; importar "./util.plar";', loader=loader)
        assert loader.calls == ['util.plar', './util.plar']

    def test_declarations_resolve_regardless_of_order(self, run_plar, modules, loader):
        modules['ordem.plar'] = '''
            var valor = calcular();
            var pet = novo Cachorro();
            funcao calcular() { retornar novo Cachorro().patas; }
            classe Cachorro estende Animal implementa Falante { funcao falar() { retornar "au"; } }
            classe Animal { var patas = 4; }
            interface Falante { funcao falar(); }
        '''
        output, error = run_plar('importar "ordem.plar"; escrever(valor, pet.falar());', loader=loader)
        assert error is None
        assert output == ['4 au']

    def test_top_level_statements_are_not_run(self, run_plar, modules, loader):
        modules['efeito.plar'] = 'escrever("efeito"); var x = 1;'
        output, error = run_plar('importar "efeito.plar"; escrever(x);', loader=loader)
        assert error is None
        assert output == ['1']

    def test_nested_imports_come_first(self, run_plar, modules, loader):
        modules['a.plar'] = 'importar "b.plar"; var a = b * 2;'
        modules['b.plar'] = 'var b = 21;'
        output, _ = run_plar('importar "a.plar"; escrever(a);', loader=loader)
        assert output == ['42']
        assert loader.calls == ['a.plar', 'b.plar']

    def test_runtime_error_is_wrapped(self, run_plar, modules, loader):
        modules['ruim.plar'] = 'var x = 1 / 0;'
        _, error = run_plar('importar "ruim.plar";', loader=loader)
        assert isinstance(error, ArquivoError)
        assert error.details == 'Divisão por zero'

    def test_import_file_entry_point(self, modules, loader):
        modules['util.plar'] = 'var base = 10;'
        output = []
        interpreter = Interpreter(loader=loader, output=output.append)

        res = interpreter.import_file('util.plar')
        assert res.error is None
        assert interpreter.global_symbol_table.get('base').value == 10

        res = interpreter.import_file('util.plar')
        assert res.error is None
        assert loader.calls == ['util.plar']
        assert output == []


class TestFileLoader:
    def test_loads_relative_to_base_path(self, run_plar, tmp_path):
        (tmp_path / 'util.plar').write_text('funcao oi() { retornar "oi"; }', encoding='utf-8')
        output, error = run_plar('importar "util.plar"; escrever(oi());', base_path=str(tmp_path))
        assert error is None
        assert output == ['oi']

    def test_missing_file(self, run_plar, tmp_path):
        _, error = run_plar('importar "nao_existe.plar";', base_path=str(tmp_path))
        assert isinstance(error, ArquivoError)
        assert error.details.startswith("Falha ao processar import 'nao_existe.plar'")

    def test_syntax_error_in_import(self, run_plar, tmp_path):
        (tmp_path / 'quebrado.plar').write_text('var x = ;', encoding='utf-8')
        output, error = run_plar('importar "quebrado.plar";', base_path=str(tmp_path))
        assert isinstance(error, ArquivoError)
        assert 'Sintaxe Invalida' in error.details
        assert 'Erro de Arquivo' in output[0]
