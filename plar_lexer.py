#######################################
# IMPORTS
#######################################

from string_with_arrows import string_with_arrows

import string

#######################################
# CONSTANTS
#######################################

DIGITS = '0123456789'
LETTERS = string.ascii_letters
LETTERS += 'áéíóúàãâêôõçÁÉÍÓÚÀÃÂÊÔÕÇ_'
LETTERS_DIGITS = LETTERS + DIGITS

INT_MAX = 2 ** 63 - 1

#######################################
# ERRORS
#######################################

class Error:
	def __init__(self, pos_start, pos_end, error_name, details):
		self.pos_start = pos_start
		self.pos_end = pos_end
		self.error_name = error_name
		self.details = details

	def as_string(self):
		result  = f'{self.error_name}: {self.details}\n'
		if self.pos_start:
			result += f'Arquivo {self.pos_start.fn}, linha {self.pos_start.ln + 1}'
			result += '\n\n' + string_with_arrows(self.pos_start.ftxt, self.pos_start, self.pos_end)
		return result

	def __repr__(self):
		return f'{self.error_name}: {self.details}'

class IllegalCharError(Error):
	def __init__(self, pos_start, pos_end, details):
		super().__init__(pos_start, pos_end, 'Caractere Ilegal', details)

class InvalidSyntaxError(Error):
	def __init__(self, pos_start, pos_end, details=''):
		super().__init__(pos_start, pos_end, 'Sintaxe Invalida', details)

class RTError(Error):
	def __init__(self, pos_start, pos_end, details, context, name=None):
		super().__init__(pos_start, pos_end, name or 'Erro de Execucao', details)
		self.context = context

	def locate(self, pos_start, pos_end, context):
		# Errors built by value operators and natives carry no position;
		# the innermost node that sees them fills it in.
		if self.pos_start is None:
			self.pos_start = pos_start
			self.pos_end = pos_end
		if self.context is None:
			self.context = context
		return self

	def as_string(self):
		result  = self.generate_traceback()
		result += f'{self.error_name}: {self.details}'
		if self.pos_start:
			result += '\n\n' + string_with_arrows(self.pos_start.ftxt, self.pos_start, self.pos_end)
		return result + '\n'

	def generate_traceback(self):
		result = ''
		pos = self.pos_start
		ctx = self.context

		while ctx and pos:
			result = f'  Arquivo {pos.fn}, linha {str(pos.ln + 1)}, em {ctx.display_name}\n' + result
			pos = ctx.parent_entry_pos
			ctx = ctx.parent

		return '\nErro Encontrado (Chamada mais recente):\n' + result

class SemanticError(RTError):
	def __init__(self, pos_start, pos_end, details, context):
		super().__init__(pos_start, pos_end, details, context, 'Erro Semantico')

class TipoError(RTError):
	def __init__(self, pos_start, pos_end, details, context):
		super().__init__(pos_start, pos_end, details, context, 'Erro de Tipo')

class AritmeticaError(RTError):
	def __init__(self, pos_start, pos_end, details, context):
		super().__init__(pos_start, pos_end, details, context, 'Erro Aritmetico')

class ArquivoError(RTError):
	def __init__(self, pos_start, pos_end, details, context):
		super().__init__(pos_start, pos_end, details, context, 'Erro de Arquivo')

#######################################
# POSITION
#######################################

class Position:
	def __init__(self, idx, ln, col, fn, ftxt):
		self.idx = idx
		self.ln = ln
		self.col = col
		self.fn = fn
		self.ftxt = ftxt

	def advance(self, current_char=None):
		self.idx += 1
		self.col += 1

		if current_char == '\n':
			self.ln += 1
			self.col = 0

		return self

	def copy(self):
		return Position(self.idx, self.ln, self.col, self.fn, self.ftxt)

#######################################
# TOKENS
#######################################

TT_INT          = 'INT'
TT_FLOAT        = 'FLOAT'
TT_STRING       = 'STRING'
TT_IDENTIFIER   = 'IDENTIFIER'
TT_KEYWORD      = 'KEYWORD'
TT_PLUS         = 'PLUS'
TT_MINUS        = 'MINUS'
TT_MUL          = 'MUL'
TT_DIV          = 'DIV'
TT_MOD          = 'MOD'
TT_EQ           = 'EQ'
TT_EE           = 'EE'
TT_NE           = 'NE'
TT_LT           = 'LT'
TT_LTE          = 'LTE'
TT_GT           = 'GT'
TT_GTE          = 'GTE'
TT_NOT          = 'NOT'
TT_AND          = 'AND'
TT_OR           = 'OR'
TT_LPAREN       = 'LPAREN'
TT_RPAREN       = 'RPAREN'
TT_LBRACE       = 'LBRACE'
TT_RBRACE       = 'RBRACE'
TT_LBRACKET     = 'LBRACKET'
TT_RBRACKET     = 'RBRACKET'
TT_COMMA        = 'COMMA'
TT_SEMICOLON    = 'SEMICOLON'
TT_DOT          = 'DOT'
TT_COLON        = 'COLON'
TT_EOF          = 'EOF'

KEYWORDS = [
	'importar',
	'interface',
	'classe',
	'estende',
	'implementa',
	'funcao',
	'var',
	'se',
	'senao',
	'enquanto',
	'para',
	'faca',
	'retornar',
	'quebrar',
	'continuar',
	'tentar',
	'capturar',
	'novo',
	'este',
	'nulo',
	'verdadeiro',
	'falso',
	'e',
	'ou',
	'lista',
	'mapa'
]

KEYWORD_ALIASES = {
	'função': 'funcao',
	'senão': 'senao',
	'faça': 'faca',
}

SINGLE_CHAR_TOKENS = {
	'+': TT_PLUS,
	'-': TT_MINUS,
	'*': TT_MUL,
	'%': TT_MOD,
	'(': TT_LPAREN,
	')': TT_RPAREN,
	'{': TT_LBRACE,
	'}': TT_RBRACE,
	'[': TT_LBRACKET,
	']': TT_RBRACKET,
	',': TT_COMMA,
	';': TT_SEMICOLON,
	'.': TT_DOT,
	':': TT_COLON,
}

ESCAPE_CHARACTERS = {
	'n': '\n', 't': '\t', 'r': '\r', '"': '"', '\\': '\\'
}

class Token:
	def __init__(self, type_, value=None, pos_start=None, pos_end=None):
		self.type = type_
		self.value = value

		if pos_start:
			self.pos_start = pos_start.copy()
			self.pos_end = pos_start.copy()
			self.pos_end.advance()

		if pos_end:
			self.pos_end = pos_end.copy()

	def matches(self, type_, value):
		return self.type == type_ and self.value == value

	def __repr__(self):
		if self.value is not None: return f'{self.type}:{self.value}'
		return f'{self.type}'

#######################################
# LEXER
#######################################

class Lexer:
	def __init__(self, fn, text):
		self.fn = fn
		self.text = text
		self.pos = Position(-1, 0, -1, fn, text)
		self.current_char = None
		self.advance()

	def advance(self):
		self.pos.advance(self.current_char)
		self.current_char = self.text[self.pos.idx] if self.pos.idx < len(self.text) else None

	def peek(self):
		peek_pos = self.pos.idx + 1
		return self.text[peek_pos] if peek_pos < len(self.text) else None

	def make_tokens(self):
		tokens = []

		while self.current_char != None:
			if self.current_char in ' \t\r\n':
				self.advance()
			elif self.current_char == '/' and self.peek() in ('/', '*'):
				error = self.skip_comment()
				if error: return [], error
			elif self.current_char in DIGITS:
				tok, error = self.make_number()
				if error: return [], error
				tokens.append(tok)
			elif self.current_char in LETTERS:
				tokens.append(self.make_identifier())
			elif self.current_char == '"':
				tok, error = self.make_string()
				if error: return [], error
				tokens.append(tok)
			elif self.current_char == '/':
				tokens.append(Token(TT_DIV, pos_start=self.pos))
				self.advance()
			elif self.current_char == '=':
				tokens.append(self.make_two_char('=', TT_EE, TT_EQ))
			elif self.current_char == '!':
				tokens.append(self.make_two_char('=', TT_NE, TT_NOT))
			elif self.current_char == '<':
				tokens.append(self.make_two_char('=', TT_LTE, TT_LT))
			elif self.current_char == '>':
				tokens.append(self.make_two_char('=', TT_GTE, TT_GT))
			elif self.current_char in '&|':
				tok, error = self.make_logical()
				if error: return [], error
				tokens.append(tok)
			elif self.current_char in SINGLE_CHAR_TOKENS:
				tokens.append(Token(SINGLE_CHAR_TOKENS[self.current_char], pos_start=self.pos))
				self.advance()
			else:
				pos_start = self.pos.copy()
				char = self.current_char
				self.advance()
				return [], IllegalCharError(pos_start, self.pos, "'" + char + "'")

		tokens.append(Token(TT_EOF, pos_start=self.pos))
		return tokens, None

	def make_number(self):
		num_str = ''
		dot_count = 0
		pos_start = self.pos.copy()

		while self.current_char != None and self.current_char in DIGITS + '.':
			if self.current_char == '.':
				if dot_count == 1 or self.peek() is None or self.peek() not in DIGITS: break
				dot_count += 1
			num_str += self.current_char
			self.advance()

		if dot_count == 0:
			value = int(num_str)
			if value > INT_MAX:
				return None, InvalidSyntaxError(pos_start, self.pos, f"Inteiro fora do intervalo de 64 bits: {num_str}")
			return Token(TT_INT, value, pos_start, self.pos), None
		else:
			return Token(TT_FLOAT, float(num_str), pos_start, self.pos), None

	def make_identifier(self):
		id_str = ''
		pos_start = self.pos.copy()

		while self.current_char != None and self.current_char in LETTERS_DIGITS:
			id_str += self.current_char
			self.advance()

		id_str = KEYWORD_ALIASES.get(id_str, id_str)
		tok_type = TT_KEYWORD if id_str in KEYWORDS else TT_IDENTIFIER
		return Token(tok_type, id_str, pos_start, self.pos)

	def make_two_char(self, second, double_type, single_type):
		pos_start = self.pos.copy()
		self.advance()

		if self.current_char == second:
			self.advance()
			return Token(double_type, pos_start=pos_start, pos_end=self.pos)
		return Token(single_type, pos_start=pos_start, pos_end=self.pos)

	def make_logical(self):
		pos_start = self.pos.copy()
		char = self.current_char
		self.advance()

		if self.current_char != char:
			return None, IllegalCharError(pos_start, self.pos, f"Esperava-se '{char}' depois de '{char}'")

		self.advance()
		tok_type = TT_AND if char == '&' else TT_OR
		return Token(tok_type, pos_start=pos_start, pos_end=self.pos), None

	def skip_comment(self):
		pos_start = self.pos.copy()
		self.advance()

		if self.current_char == '/':
			while self.current_char != '\n' and self.current_char:
				self.advance()
			return None

		self.advance()
		while self.current_char is not None:
			if self.current_char == '*' and self.peek() == '/':
				self.advance()
				self.advance()
				return None
			self.advance()

		return IllegalCharError(pos_start, self.pos, "Comentario nao fechado com '*/'")

	def make_string(self):
		text = ''
		pos_start = self.pos.copy()
		escape_char = False
		self.advance()

		while self.current_char is not None and (self.current_char != '"' or escape_char):
			if escape_char:
				text += ESCAPE_CHARACTERS.get(self.current_char, self.current_char)
				escape_char = False
			elif self.current_char == '\\':
				escape_char = True
			else:
				text += self.current_char
			self.advance()

		if self.current_char != '"':
			return None, IllegalCharError(pos_start, self.pos, 'Texto nao fechado')

		self.advance()
		return Token(TT_STRING, text, pos_start, self.pos), None
