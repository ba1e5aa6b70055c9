from plar_lexer import *


def make_tokens(text):
    return Lexer('<teste>', text).make_tokens()


def types(tokens):
    return [tok.type for tok in tokens]


class TestTokens:
    def test_var_declaration(self):
        tokens, error = make_tokens('var x = 10;')
        assert error is None
        assert types(tokens) == [TT_KEYWORD, TT_IDENTIFIER, TT_EQ, TT_INT, TT_SEMICOLON, TT_EOF]
        assert tokens[0].matches(TT_KEYWORD, 'var')
        assert tokens[3].value == 10

    def test_real_literal(self):
        tokens, _ = make_tokens('3.5')
        assert tokens[0].type == TT_FLOAT
        assert tokens[0].value == 3.5

    def test_dot_without_digit_is_member_access(self):
        tokens, _ = make_tokens('1.x')
        assert types(tokens) == [TT_INT, TT_DOT, TT_IDENTIFIER, TT_EOF]

    def test_two_char_operators(self):
        tokens, _ = make_tokens('== != <= >= < > = !')
        assert types(tokens)[:-1] == [TT_EE, TT_NE, TT_LTE, TT_GTE, TT_LT, TT_GT, TT_EQ, TT_NOT]

    def test_logical_operators(self):
        tokens, _ = make_tokens('a && b || c')
        assert types(tokens) == [TT_IDENTIFIER, TT_AND, TT_IDENTIFIER, TT_OR, TT_IDENTIFIER, TT_EOF]

    def test_accented_aliases(self):
        tokens, _ = make_tokens('função senão faça')
        assert [tok.value for tok in tokens[:-1]] == ['funcao', 'senao', 'faca']
        assert all(tok.type == TT_KEYWORD for tok in tokens[:-1])

    def test_accented_identifier(self):
        tokens, _ = make_tokens('posição')
        assert tokens[0].type == TT_IDENTIFIER
        assert tokens[0].value == 'posição'

    def test_string_escapes(self):
        tokens, _ = make_tokens(r'"a\nb\"c\\"')
        assert tokens[0].type == TT_STRING
        assert tokens[0].value == 'a\nb"c\\'

    def test_comments_are_skipped(self):
        tokens, error = make_tokens('// linha\nx /* bloco\n varias */ y')
        assert error is None
        assert [tok.value for tok in tokens[:-1]] == ['x', 'y']

    def test_positions_track_lines(self):
        tokens, _ = make_tokens('a\n  b')
        assert tokens[1].pos_start.ln == 1
        assert tokens[1].pos_start.col == 2


class TestLexerErrors:
    def test_illegal_character(self):
        tokens, error = make_tokens('var x = @;')
        assert tokens == []
        assert isinstance(error, IllegalCharError)
        assert error.details == "'@'"

    def test_unterminated_string(self):
        _, error = make_tokens('"aberto')
        assert isinstance(error, IllegalCharError)
        assert error.details == 'Texto nao fechado'

    def test_unterminated_block_comment(self):
        _, error = make_tokens('/* sem fim')
        assert isinstance(error, IllegalCharError)

    def test_integer_literal_out_of_range(self):
        tokens, error = make_tokens('9223372036854775807')
        assert error is None
        assert tokens[0].value == 2 ** 63 - 1

        tokens, error = make_tokens('var x = 9223372036854775808;')
        assert tokens == []
        assert isinstance(error, InvalidSyntaxError)
        assert error.details == 'Inteiro fora do intervalo de 64 bits: 9223372036854775808'

    def test_single_ampersand(self):
        _, error = make_tokens('a & b')
        assert isinstance(error, IllegalCharError)

    def test_error_report_shows_caret(self):
        _, error = make_tokens('x = #')
        report = error.as_string()
        assert 'Caractere Ilegal' in report
        assert 'linha 1' in report
        assert '^' in report
