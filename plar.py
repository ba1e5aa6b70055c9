#######################################
# IMPORTS
#######################################

from plar_lexer import *
from plar_parser import *

import math
import os
import socket
import sys
import threading
import time

#######################################
# CONSTANTS
#######################################

DEFAULT_CONFIG = {
	'version': "1.0.0",
	'interpreter': 'plar',
	'python': {
		'user-version': sys.version,
	},
	'description': 'Plar é o interpretador da linguagem Plar. Escrito em Python, ele executa scripts .plar e também pode ser usado como um shell interativo.',
	'extension': '.plar',
	'limite-iteracoes': 100000,
	'special-keys': {
		'__shell__': 'Shell interativo do Plar',
		'.config': 'Configuração do Plar',
		'setmain <arquivo>': 'Define o arquivo principal',
		'iniciar [arquivo]': 'Cria o arquivo .config',
		'.': 'Executar arquivo principal'
	}
}

TYPE_NAMES = ['Inteiro', 'Real', 'Texto', 'Logico', 'Nulo', 'Lista', 'Mapa', 'Funcao']
CONSTRUCTOR_NAME = 'inicializar'

INT_MIN = -2 ** 63
INT_RANGE = 2 ** 64

def wrap_int(value):
	return (value - INT_MIN) % INT_RANGE + INT_MIN

#######################################
# RUNTIME RESULT
#######################################

class RTResult:
	def __init__(self):
		self.reset()

	def reset(self):
		self.value = None
		self.error = None
		self.func_return_value = None
		self.loop_should_continue = False
		self.loop_should_break = False

	def register(self, res):
		self.func_return_value = res.func_return_value
		self.loop_should_break = res.loop_should_break
		self.loop_should_continue = res.loop_should_continue

		if res.error: self.error = res.error
		return res.value

	def success(self, value):
		self.reset()
		self.value = value
		return self

	def success_return(self, value):
		self.reset()
		self.func_return_value = value
		return self

	def success_continue(self):
		self.reset()
		self.loop_should_continue = True
		return self

	def success_break(self):
		self.reset()
		self.loop_should_break = True
		return self

	def should_return(self):
		return (
			self.error or
			self.func_return_value is not None or
			self.loop_should_break or
			self.loop_should_continue
		)

	def failure(self, error):
		self.reset()
		self.error = error
		return self

#######################################
# VALUES
#######################################

class Value:
	type_name = None

	def added_to(self, other):
		if isinstance(other, String):
			return String(str(self) + other.value), None
		return None, self.illegal_operation(other, '+')

	def subbed_by(self, other):
		return None, self.illegal_operation(other, '-')

	def multed_by(self, other):
		return None, self.illegal_operation(other, '*')

	def dived_by(self, other):
		return None, self.illegal_operation(other, '/')

	def moded_by(self, other):
		return None, self.illegal_operation(other, '%')

	def get_comparison_eq(self, other):
		return Boolean(self is other), None

	def get_comparison_ne(self, other):
		result, error = self.get_comparison_eq(other)
		if error: return None, error
		return result.notted()

	def get_comparison_lt(self, other):
		return None, self.illegal_operation(other, '<')

	def get_comparison_gt(self, other):
		return None, self.illegal_operation(other, '>')

	def get_comparison_lte(self, other):
		return None, self.illegal_operation(other, '<=')

	def get_comparison_gte(self, other):
		return None, self.illegal_operation(other, '>=')

	def notted(self):
		return None, TipoError(
			None, None,
			f"Operador '!' requer um valor Logico, mas recebeu '{self.type_name}'",
			None
		)

	def negated(self):
		return None, TipoError(
			None, None,
			f"Operador '-' requer um Inteiro ou Real, mas recebeu '{self.type_name}'",
			None
		)

	def illegal_operation(self, other, op):
		return TipoError(
			None, None,
			f"Operacao '{op}' invalida entre '{self.type_name}' e '{other.type_name}'",
			None
		)

	def __str__(self):
		return repr(self)

class Nulo(Value):
	type_name = 'Nulo'

	def get_comparison_eq(self, other):
		return Boolean(isinstance(other, Nulo)), None

	def __repr__(self):
		return 'nulo'

Nulo.null = Nulo()

class Number(Value):
	def __init__(self, value):
		self.value = value

	def added_to(self, other):
		if isinstance(other, Number):
			return make_number(self.value + other.value), None
		return super().added_to(other)

	def subbed_by(self, other):
		if isinstance(other, Number):
			return make_number(self.value - other.value), None
		return super().subbed_by(other)

	def multed_by(self, other):
		if isinstance(other, Number):
			return make_number(self.value * other.value), None
		return super().multed_by(other)

	def dived_by(self, other):
		if isinstance(other, Number):
			if other.value == 0:
				return None, AritmeticaError(None, None, 'Divisão por zero', None)

			if isinstance(self, Integer) and isinstance(other, Integer) and self.value % other.value == 0:
				return Integer(self.value // other.value), None
			return Real(self.value / other.value), None
		return super().dived_by(other)

	def moded_by(self, other):
		if isinstance(other, Number):
			if other.value == 0:
				return None, AritmeticaError(None, None, 'Módulo por zero', None)

			if isinstance(self, Integer) and isinstance(other, Integer):
				remainder = abs(self.value) % abs(other.value)
				return Integer(-remainder if self.value < 0 else remainder), None
			return Real(math.fmod(self.value, other.value)), None
		return super().moded_by(other)

	def promoted(self, other):
		if isinstance(self, Real) or isinstance(other, Real):
			return float(self.value), float(other.value)
		return self.value, other.value

	def get_comparison_eq(self, other):
		if isinstance(other, Number):
			left, right = self.promoted(other)
			return Boolean(left == right), None
		return Boolean(False), None

	def get_comparison_lt(self, other):
		if isinstance(other, Number):
			left, right = self.promoted(other)
			return Boolean(left < right), None
		return super().get_comparison_lt(other)

	def get_comparison_lte(self, other):
		if isinstance(other, Number):
			left, right = self.promoted(other)
			return Boolean(left <= right), None
		return super().get_comparison_lte(other)

	def get_comparison_gt(self, other):
		if isinstance(other, Number):
			left, right = self.promoted(other)
			return Boolean(left > right), None
		return super().get_comparison_gt(other)

	def get_comparison_gte(self, other):
		if isinstance(other, Number):
			left, right = self.promoted(other)
			return Boolean(left >= right), None
		return super().get_comparison_gte(other)

	def negated(self):
		return make_number(-self.value), None

	def __repr__(self):
		return str(self.value)

class Integer(Number):
	type_name = 'Inteiro'

	def __init__(self, value):
		super().__init__(wrap_int(value))

class Real(Number):
	type_name = 'Real'

	def __init__(self, value):
		super().__init__(float(value))

	def __repr__(self):
		return repr(self.value)

def make_number(value):
	if isinstance(value, int):
		return Integer(value)
	return Real(value)

class String(Value):
	type_name = 'Texto'

	def __init__(self, value):
		self.value = value

	def added_to(self, other):
		return String(self.value + str(other)), None

	def get_comparison_eq(self, other):
		if isinstance(other, String):
			return Boolean(self.value == other.value), None
		return Boolean(False), None

	def get_comparison_lt(self, other):
		if isinstance(other, String):
			return Boolean(self.value < other.value), None
		return super().get_comparison_lt(other)

	def get_comparison_lte(self, other):
		if isinstance(other, String):
			return Boolean(self.value <= other.value), None
		return super().get_comparison_lte(other)

	def get_comparison_gt(self, other):
		if isinstance(other, String):
			return Boolean(self.value > other.value), None
		return super().get_comparison_gt(other)

	def get_comparison_gte(self, other):
		if isinstance(other, String):
			return Boolean(self.value >= other.value), None
		return super().get_comparison_gte(other)

	def __repr__(self):
		return self.value

class Boolean(Value):
	type_name = 'Logico'

	def __init__(self, value):
		self.value = bool(value)

	def get_comparison_eq(self, other):
		if isinstance(other, Boolean):
			return Boolean(self.value == other.value), None
		return Boolean(False), None

	def notted(self):
		return Boolean(not self.value), None

	def __repr__(self):
		return 'verdadeiro' if self.value else 'falso'

def values_equal(left, right):
	result, _ = left.get_comparison_eq(right)
	return result.value

class List(Value):
	type_name = 'Lista'

	def __init__(self, elements):
		self.elements = elements

	def check_index(self, index):
		if not isinstance(index, Integer):
			return SemanticError(
				None, None,
				f"Indice de lista deve ser Inteiro, mas recebeu '{index.type_name}'",
				None
			)
		if index.value < 0 or index.value >= len(self.elements):
			return SemanticError(
				None, None,
				f"Indice {index.value} fora dos limites da lista de tamanho {len(self.elements)}",
				None
			)
		return None

	def get(self, index):
		error = self.check_index(index)
		if error: return None, error
		return self.elements[index.value], None

	def set(self, index, value):
		error = self.check_index(index)
		if error: return None, error
		self.elements[index.value] = value
		return value, None

	def __repr__(self):
		return f'[{", ".join([str(x) for x in self.elements])}]'

class Map(Value):
	type_name = 'Mapa'

	def __init__(self, elements=None):
		self.elements = elements if elements is not None else []

	def find(self, key):
		for entry in self.elements:
			if values_equal(entry[0], key):
				return entry
		return None

	def get(self, key):
		entry = self.find(key)
		return entry[1] if entry else Nulo.null

	def set(self, key, value):
		entry = self.find(key)
		if entry:
			entry[1] = value
		else:
			self.elements.append([key, value])
		return value

	def __repr__(self):
		return f'[[{", ".join([f"{k}: {v}" for k, v in self.elements])}]]'

class Instance(Value):
	def __init__(self, class_):
		self.class_ = class_
		self.fields = {}
		self.type_name = class_.name

	def get(self, name):
		return self.fields.get(name, Nulo.null)

	def set(self, name, value):
		self.fields[name] = value
		return value

	def __repr__(self):
		return f'<instancia de {self.class_.name}>'

class BaseFunction(Value):
	type_name = 'Funcao'

	def __init__(self, name, interpreter):
		self.name = name or '<anonima>'
		self.interpreter = interpreter

	def generate_new_context(self, context, entry_pos, parent_table):
		new_context = Context(self.name, context, entry_pos, self)
		new_context.symbol_table = SymbolTable(parent_table)
		return new_context

	def check_args(self, arg_names, args):
		if len(args) > len(arg_names):
			return SemanticError(
				None, None,
				f"Funcao '{self.name}' recebeu {len(args)} parametros, mas espera {len(arg_names)}",
				None
			)
		return None

	def __repr__(self):
		return f'<funcao {self.name}>'

class Function(BaseFunction):
	def __init__(self, name, body_node, arg_names, return_type, closure, interpreter):
		super().__init__(name, interpreter)
		self.body_node = body_node
		self.arg_names = arg_names
		self.return_type = return_type
		self.closure = closure
		self.obj = None

	def set_obj(self, obj):
		self.obj = obj
		return self

	def execute(self, args, context, entry_pos=None):
		res = RTResult()

		# Methods run against the global scope, never the call site.
		parent_table = self.interpreter.global_symbol_table if self.obj else self.closure
		exec_ctx = self.generate_new_context(context, entry_pos, parent_table)
		exec_ctx.symbol_table.this = self.obj

		error = self.check_args(self.arg_names, args)
		if error: return res.failure(error)

		for i, arg_name in enumerate(self.arg_names):
			exec_ctx.symbol_table.set(arg_name, args[i] if i < len(args) else Nulo.null)

		res.register(self.interpreter.visit(self.body_node, exec_ctx))
		if res.error: return res
		if res.func_return_value is not None:
			return res.success(res.func_return_value)
		if res.should_return(): return res

		return res.success(Nulo.null)

class BuiltInFunction(BaseFunction):
	def execute(self, args, context, entry_pos=None):
		res = RTResult()
		exec_ctx = self.generate_new_context(context, entry_pos, self.interpreter.global_symbol_table)

		method_name = f'execute_{self.name}'
		method = getattr(self, method_name, self.no_execute_method)
		default_args = getattr(method, 'default_args', [])
		var_args = getattr(method, 'var_args', None)

		if not var_args:
			error = self.check_args(method.arg_names, args)
			if error: return res.failure(error)

		for i, arg_name in enumerate(method.arg_names):
			if i < len(args):
				value = args[i]
			elif i < len(default_args) and default_args[i] is not None:
				value = default_args[i]
			else:
				return res.failure(SemanticError(
					None, None,
					f"Faltando argumento '{arg_name}' para a funcao '{self.name}'",
					exec_ctx
				))
			exec_ctx.symbol_table.set(arg_name, value)

		if var_args:
			exec_ctx.symbol_table.set(var_args, List(list(args[len(method.arg_names):])))

		return_value = res.register(method(exec_ctx))
		if res.should_return(): return res
		return res.success(return_value)

	def no_execute_method(self, exec_ctx):
		raise Exception(f'Nenhum metodo execute_{self.name} definido')

	###################################

	def execute_escrever(self, exec_ctx):
		valores = exec_ctx.symbol_table.get('valores')
		self.interpreter.output(' '.join([str(valor) for valor in valores.elements]))
		return RTResult().success(Nulo.null)
	execute_escrever.arg_names = []
	execute_escrever.var_args = 'valores'

	def execute_imprimir(self, exec_ctx):
		return self.execute_escrever(exec_ctx)
	execute_imprimir.arg_names = []
	execute_imprimir.var_args = 'valores'

	def execute_ler(self, exec_ctx):
		try:
			return RTResult().success(String(input()))
		except EOFError:
			return RTResult().failure(RTError(
				None, None,
				"Entrada encerrada antes de uma linha ser lida",
				exec_ctx
			))
	execute_ler.arg_names = []

	def execute_readFile(self, exec_ctx):
		caminho = exec_ctx.symbol_table.get('caminho')
		if not isinstance(caminho, String):
			return RTResult().failure(TipoError(
				None, None,
				"Argumento deve ser um texto (caminho do arquivo)",
				exec_ctx
			))

		try:
			with open(caminho.value, 'r', encoding='utf-8') as f:
				return RTResult().success(String(f.read()))
		except OSError as e:
			return RTResult().failure(ArquivoError(
				None, None,
				f"Erro ao ler arquivo '{caminho.value}': {e}",
				exec_ctx
			))
	execute_readFile.arg_names = ['caminho']

	def execute_writeFile(self, exec_ctx):
		caminho = exec_ctx.symbol_table.get('caminho')
		dados = exec_ctx.symbol_table.get('dados')
		anexar = exec_ctx.symbol_table.get('anexar')

		if not isinstance(caminho, String) or not isinstance(dados, String):
			return RTResult().failure(TipoError(
				None, None,
				"Os dois primeiros argumentos devem ser do tipo Texto",
				exec_ctx
			))
		if not isinstance(anexar, Boolean):
			return RTResult().failure(TipoError(
				None, None,
				"O terceiro argumento deve ser do tipo Logico",
				exec_ctx
			))

		try:
			with open(caminho.value, 'a' if anexar.value else 'w', encoding='utf-8') as f:
				f.write(dados.value)
		except OSError as e:
			return RTResult().failure(ArquivoError(
				None, None,
				f"Erro ao escrever arquivo '{caminho.value}': {e}",
				exec_ctx
			))
		return RTResult().success(Nulo.null)
	execute_writeFile.arg_names = ['caminho', 'dados', 'anexar']
	execute_writeFile.default_args = [None, None, Boolean(False)]

	def execute_tamanho(self, exec_ctx):
		valor = exec_ctx.symbol_table.get('valor')
		if isinstance(valor, (List, Map)):
			return RTResult().success(Integer(len(valor.elements)))
		elif isinstance(valor, String):
			return RTResult().success(Integer(len(valor.value)))
		return RTResult().failure(TipoError(
			None, None,
			"Funcao tamanho só funciona com listas, mapas ou textos",
			exec_ctx
		))
	execute_tamanho.arg_names = ['valor']

	def execute_jogarError(self, exec_ctx):
		mensagem = exec_ctx.symbol_table.get('mensagem')
		if not isinstance(mensagem, String):
			return RTResult().failure(TipoError(
				None, None,
				"Argumento deve ser um texto (mensagem de erro)",
				exec_ctx
			))
		return RTResult().failure(RTError(None, None, mensagem.value, exec_ctx, 'Erro'))
	execute_jogarError.arg_names = ['mensagem']

	def execute_dormir(self, exec_ctx):
		tempo = exec_ctx.symbol_table.get('milissegundos')
		if not isinstance(tempo, Integer):
			return RTResult().failure(TipoError(
				None, None,
				"Argumento deve ser um número inteiro (milissegundos)",
				exec_ctx
			))

		time.sleep(max(tempo.value, 0) / 1000)
		return RTResult().success(Nulo.null)
	execute_dormir.arg_names = ['milissegundos']

	def execute_executar(self, exec_ctx):
		funcao = exec_ctx.symbol_table.get('funcao')
		valores = exec_ctx.symbol_table.get('valores')
		if not isinstance(funcao, BaseFunction):
			return RTResult().failure(TipoError(
				None, None,
				"Argumento invalido para a funcao.",
				exec_ctx
			))

		def target():
			try:
				result = funcao.execute(valores.elements, exec_ctx)
			except RecursionError:
				self.interpreter.output('Erro na execucao da thread: Limite de recursao excedido')
				return
			except Exception as e:
				self.interpreter.output(f'Erro na execucao da thread: Erro interno do interpretador: {e}')
				return

			if result.error:
				self.interpreter.output(f'Erro na execucao da thread: {result.error.details}')

		thread = threading.Thread(target=target)
		thread.start()
		thread.join()
		return RTResult().success(Nulo.null)
	execute_executar.arg_names = ['funcao']
	execute_executar.var_args = 'valores'

	def execute_ler_socket(self, exec_ctx):
		host = exec_ctx.symbol_table.get('host')
		porta = exec_ctx.symbol_table.get('porta')
		if not isinstance(host, String) or not isinstance(porta, Integer):
			return RTResult().failure(TipoError(
				None, None,
				"Argumentos invalidos para ler_socket (host: Texto, porta: Inteiro)",
				exec_ctx
			))

		try:
			with socket.create_server((host.value, porta.value)) as server:
				conn, _ = server.accept()
				with conn, conn.makefile('r', encoding='utf-8') as reader:
					line = reader.readline()
		except OSError as e:
			return RTResult().failure(RTError(
				None, None,
				f"Nao foi possivel configurar o socket: {e}",
				exec_ctx
			))
		return RTResult().success(String(line.rstrip('\r\n')))
	execute_ler_socket.arg_names = ['host', 'porta']
	execute_ler_socket.default_args = [String('localhost'), Integer(8080)]

	def execute_escrever_socket(self, exec_ctx):
		valores = exec_ctx.symbol_table.get('valores').elements
		if len(valores) == 1:
			host, porta, texto = String('localhost'), Integer(8080), valores[0]
		elif len(valores) == 3:
			host, porta, texto = valores
		else:
			return RTResult().failure(SemanticError(
				None, None,
				"Argumentos invalidos para escrever_socket",
				exec_ctx
			))

		if not isinstance(host, String) or not isinstance(porta, Integer) or not isinstance(texto, String):
			return RTResult().failure(TipoError(
				None, None,
				"Argumentos invalidos para escrever_socket (host: Texto, porta: Inteiro, texto: Texto)",
				exec_ctx
			))

		try:
			with socket.create_server((host.value, porta.value)) as server:
				conn, _ = server.accept()
				with conn:
					conn.sendall((texto.value + '\n').encode('utf-8'))
		except OSError as e:
			return RTResult().failure(RTError(
				None, None,
				f"Nao foi possivel configurar o socket: {e}",
				exec_ctx
			))
		return RTResult().success(Nulo.null)
	execute_escrever_socket.arg_names = []
	execute_escrever_socket.var_args = 'valores'

BUILTIN_NAMES = [
	'escrever', 'imprimir', 'ler', 'readFile', 'writeFile', 'tamanho',
	'jogarError', 'dormir', 'executar', 'ler_socket', 'escrever_socket'
]

#######################################
# CLASSES AND INTERFACES
#######################################

class Class:
	def __init__(self, name, parent_name, interface_names, field_nodes, methods):
		self.name = name
		self.parent_name = parent_name
		self.interface_names = interface_names
		self.field_nodes = field_nodes
		self.methods = methods

	def __repr__(self):
		return f'<classe {self.name}>'

class Interface:
	def __init__(self, name, method_names):
		self.name = name
		self.method_names = method_names

	def __repr__(self):
		return f'<interface {self.name}>'

#######################################
# CONTEXT
#######################################

class Context:
	def __init__(self, display_name, parent=None, parent_entry_pos=None, function=None):
		self.display_name = display_name
		self.parent = parent
		self.parent_entry_pos = parent_entry_pos
		self.function = function
		self.symbol_table = None

	def new_scope(self):
		scope = Context(self.display_name, self.parent, self.parent_entry_pos, self.function)
		scope.symbol_table = SymbolTable(self.symbol_table, self.symbol_table.this)
		return scope

#######################################
# SYMBOL TABLE
#######################################

class SymbolTable:
	def __init__(self, parent=None, this=None):
		self.symbols = {}
		self.parent = parent
		self.this = this

		if parent is None:
			self.classes = {}
			self.interfaces = {}

	def find(self, name):
		table = self
		while table:
			if name in table.symbols:
				return table
			table = table.parent
		return None

	def get(self, name):
		table = self.find(name)
		return table.symbols[name] if table else None

	def set(self, name, value):
		self.symbols[name] = value

	def update_or_set(self, name, value):
		table = self.find(name) or self
		table.symbols[name] = value

#######################################
# INTERPRETER
#######################################

class Interpreter:
	def __init__(self, loader=None, output=print, max_iterations=DEFAULT_CONFIG['limite-iteracoes'], base_path=None):
		self.loader = loader or self.load_file
		self.output = output
		self.max_iterations = max_iterations
		self.base_path = base_path
		self.imported = set()

		self.global_symbol_table = SymbolTable()
		for name in BUILTIN_NAMES:
			self.global_symbol_table.set(name, BuiltInFunction(name, self))

		self.context = Context('<programa>')
		self.context.symbol_table = self.global_symbol_table

	def visit(self, node, context):
		method_name = f'visit_{type(node).__name__}'
		method = getattr(self, method_name, self.no_visit_method)
		res = method(node, context)
		if isinstance(res.error, RTError):
			res.error.locate(node.pos_start, node.pos_end, context)
		return res

	def no_visit_method(self, node, context):
		raise Exception(f'Nenhum metodo visit_{type(node).__name__} definido')

	###################################
	# ENTRY POINTS
	###################################

	def interpret(self, program_node):
		try:
			res = self.visit(program_node, self.context)
		except RecursionError:
			res = RTResult().failure(RTError(
				None, None,
				'Limite de recursao excedido',
				self.context
			))
		except Exception as e:
			res = RTResult().failure(RTError(
				None, None,
				f'Erro interno do interpretador: {e}',
				self.context
			))
		return self.report(res)

	def import_file(self, file_literal):
		try:
			res = self.process_import(file_literal, self.context)
		except RecursionError:
			res = RTResult().failure(ArquivoError(
				None, None,
				f"Limite de recursao excedido ao importar '{file_literal}'",
				self.context
			))
		except Exception as e:
			res = RTResult().failure(ArquivoError(
				None, None,
				f"Falha ao processar import '{file_literal}': {e}",
				self.context
			))
		return self.report(res)

	def report(self, res):
		if not res.error:
			if res.func_return_value is not None:
				res.failure(SemanticError(None, None, "'retornar' fora de uma funcao", self.context))
			elif res.loop_should_break:
				res.failure(SemanticError(None, None, "'quebrar' fora de um laco", self.context))
			elif res.loop_should_continue:
				res.failure(SemanticError(None, None, "'continuar' fora de um laco", self.context))

		if res.error:
			self.output(res.error.as_string())
		return res

	def load_file(self, file_literal):
		path = file_literal
		if not os.path.isabs(path):
			path = os.path.join(self.base_path or os.getcwd(), path)
		path = os.path.normpath(path)

		with open(path, 'r', encoding='utf-8') as f:
			text = f.read()

		program_node, error = parse(path, text)
		if error: raise ValueError(repr(error))
		return program_node

	def process_import(self, file_literal, context):
		res = RTResult()
		if file_literal in self.imported:
			return res.success(Nulo.null)
		self.imported.add(file_literal)

		try:
			program_node = self.loader(file_literal)
		except Exception as e:
			return res.failure(ArquivoError(
				None, None,
				f"Falha ao processar import '{file_literal}': {e}",
				context
			))

		for import_node in program_node.import_nodes:
			res.register(self.process_import(import_node.file_path_tok.value, context))
			if res.error: return res

		declarations = program_node.declaration_nodes
		self.declare_types(declarations)

		for node_type in (InterfaceNode, ClassNode, FuncDefNode, VarDeclNode):
			for node in declarations:
				if not isinstance(node, node_type): continue

				res.register(self.visit(node, context))
				if res.error:
					if isinstance(res.error, ArquivoError): return res
					return res.failure(ArquivoError(
						res.error.pos_start, res.error.pos_end,
						res.error.details,
						context
					))

		return res.success(Nulo.null)

	def declare_types(self, declarations):
		for node in declarations:
			if isinstance(node, InterfaceNode):
				self.global_symbol_table.interfaces[node.interface_name_tok.value] = self.make_interface(node)

		for node in declarations:
			if isinstance(node, ClassNode):
				self.global_symbol_table.classes[node.class_name_tok.value] = self.make_class(node)

	###################################
	# RESOLVER
	###################################

	def make_interface(self, node):
		return Interface(
			node.interface_name_tok.value,
			[tok.value for tok in node.method_name_toks]
		)

	def make_class(self, node):
		return Class(
			node.class_name_tok.value,
			node.parent_tok.value if node.parent_tok else None,
			[tok.value for tok in node.interface_toks],
			node.field_nodes,
			{method.var_name_tok.value: method for method in node.method_nodes}
		)

	def ancestors(self, class_):
		classes = self.global_symbol_table.classes
		seen = set()

		while class_ is not None and class_.name not in seen:
			seen.add(class_.name)
			yield class_
			class_ = classes.get(class_.parent_name) if class_.parent_name else None

	def find_method(self, class_, method_name):
		for ancestor in self.ancestors(class_):
			if method_name in ancestor.methods:
				return ancestor.methods[method_name]
		return None

	def is_instance_of(self, value, type_name):
		if value.type_name == type_name:
			return True

		if isinstance(value, Instance):
			for ancestor in self.ancestors(value.class_):
				if ancestor.name == type_name or type_name in ancestor.interface_names:
					return True
		return False

	def is_valid_type(self, type_name):
		return (
			type_name in TYPE_NAMES or
			type_name in self.global_symbol_table.classes or
			type_name in self.global_symbol_table.interfaces
		)

	def inherits_from_itself(self, class_name, parent_name):
		classes = self.global_symbol_table.classes
		seen = set()

		while parent_name and parent_name not in seen:
			if parent_name == class_name:
				return True
			seen.add(parent_name)
			parent = classes.get(parent_name)
			parent_name = parent.parent_name if parent else None
		return False

	###################################
	# DECLARATIONS
	###################################

	def visit_ProgramNode(self, node, context):
		res = RTResult()

		for import_node in node.import_nodes:
			res.register(self.visit(import_node, context))
			if res.should_return(): return res

		self.declare_types(node.declaration_nodes)

		for declaration in node.declaration_nodes:
			res.register(self.visit(declaration, context))
			if res.should_return(): return res

		return res.success(Nulo.null)

	def visit_ImportNode(self, node, context):
		return self.process_import(node.file_path_tok.value, context)

	def visit_InterfaceNode(self, node, context):
		interface = self.make_interface(node)
		self.global_symbol_table.interfaces[interface.name] = interface
		return RTResult().success(Nulo.null)

	def visit_ClassNode(self, node, context):
		res = RTResult()
		class_ = self.make_class(node)

		if class_.parent_name:
			if class_.parent_name not in self.global_symbol_table.classes:
				return res.failure(SemanticError(
					node.pos_start, node.pos_end,
					f"Classe base '{class_.parent_name}' não encontrada para a classe '{class_.name}'",
					context
				))
			if self.inherits_from_itself(class_.name, class_.parent_name):
				return res.failure(SemanticError(
					node.pos_start, node.pos_end,
					f"Heranca ciclica: a classe '{class_.name}' nao pode herdar de si mesma",
					context
				))

		for interface_name in class_.interface_names:
			interface = self.global_symbol_table.interfaces.get(interface_name)
			if not interface:
				return res.failure(SemanticError(
					node.pos_start, node.pos_end,
					f"Interface '{interface_name}' não encontrada",
					context
				))

			for method_name in interface.method_names:
				if not self.find_method(class_, method_name):
					return res.failure(SemanticError(
						node.pos_start, node.pos_end,
						f"A classe '{class_.name}' não implementa todos os metodos da interface '{interface_name}'",
						context
					))

		self.global_symbol_table.classes[class_.name] = class_
		return res.success(Nulo.null)

	def make_function(self, node, context):
		res = RTResult()
		return_type = node.return_type_tok.value if node.return_type_tok else None

		if return_type and not self.is_valid_type(return_type):
			return res.failure(SemanticError(
				node.return_type_tok.pos_start, node.return_type_tok.pos_end,
				f"Tipo de retorno invalido: {return_type}",
				context
			))

		func_name = node.var_name_tok.value if node.var_name_tok else None
		arg_names = [arg_name.value for arg_name in node.arg_name_toks]
		return res.success(Function(func_name, node.body_node, arg_names, return_type, context.symbol_table, self))

	def visit_FuncDefNode(self, node, context):
		res = RTResult()
		func_value = res.register(self.make_function(node, context))
		if res.error: return res

		context.symbol_table.set(func_value.name, func_value)
		return res.success(func_value)

	def visit_VarDeclNode(self, node, context):
		res = RTResult()
		var_name = node.var_name_tok.value

		if node.value_node is None:
			value = Nulo.null
		elif isinstance(node.value_node, FuncDefNode):
			value = res.register(self.make_function(node.value_node, context))
		else:
			value = res.register(self.visit(node.value_node, context))
		if res.should_return(): return res

		if node.type_tok and node.value_node is not None:
			declared_type = node.type_tok.value
			if not self.is_instance_of(value, declared_type):
				return res.failure(TipoError(
					node.pos_start, node.pos_end,
					f"Tipo da variavel '{var_name}' nao corresponde ao valor atribuido: esperado '{declared_type}', obtido '{value.type_name}'",
					context
				))

		context.symbol_table.set(var_name, value)
		return res.success(Nulo.null)

	###################################
	# STATEMENTS
	###################################

	def visit_BlockNode(self, node, context):
		res = RTResult()
		block_context = context.new_scope()

		for statement in node.statement_nodes:
			res.register(self.visit(statement, block_context))
			if res.should_return(): return res

		return res.success(Nulo.null)

	def check_condition(self, node, context, statement_name):
		res = RTResult()
		condition = res.register(self.visit(node, context))
		if res.should_return(): return res

		if not isinstance(condition, Boolean):
			return res.failure(TipoError(
				node.pos_start, node.pos_end,
				f"Condicao do '{statement_name}' deve ser logica, mas recebeu '{condition.type_name}'",
				context
			))
		return res.success(condition)

	def visit_IfNode(self, node, context):
		res = RTResult()
		condition = res.register(self.check_condition(node.condition_node, context, 'se'))
		if res.should_return(): return res

		if condition.value:
			res.register(self.visit(node.then_node, context))
		elif node.else_node:
			res.register(self.visit(node.else_node, context))
		if res.should_return(): return res

		return res.success(Nulo.null)

	def visit_WhileNode(self, node, context):
		res = RTResult()
		iterations = 0

		while iterations < self.max_iterations:
			condition = res.register(self.check_condition(node.condition_node, context, 'enquanto'))
			if res.should_return(): return res
			if not condition.value: break

			iterations += 1
			res.register(self.visit(node.body_node, context))
			if res.error or res.func_return_value is not None: return res

			if res.loop_should_break:
				break

		return res.success(Nulo.null)

	def visit_ForNode(self, node, context):
		res = RTResult()
		loop_context = context.new_scope()

		if node.init_node:
			res.register(self.visit(node.init_node, loop_context))
			if res.should_return(): return res

		while True:
			condition = res.register(self.check_condition(node.condition_node, loop_context, 'para'))
			if res.should_return(): return res
			if not condition.value: break

			res.register(self.visit(node.body_node, loop_context))
			if res.error or res.func_return_value is not None: return res

			if res.loop_should_break:
				break

			if node.step_node:
				res.register(self.visit(node.step_node, loop_context))
				if res.should_return(): return res

		return res.success(Nulo.null)

	def visit_DoWhileNode(self, node, context):
		res = RTResult()
		iterations = 0

		while True:
			iterations += 1
			res.register(self.visit(node.body_node, context))
			if res.error or res.func_return_value is not None: return res

			if res.loop_should_break:
				break

			condition = res.register(self.check_condition(node.condition_node, context, 'enquanto'))
			if res.should_return(): return res
			if not condition.value or iterations >= self.max_iterations: break

		return res.success(Nulo.null)

	def visit_ReturnNode(self, node, context):
		res = RTResult()

		if node.node_to_return is not None:
			value = res.register(self.visit(node.node_to_return, context))
			if res.should_return(): return res
		else:
			value = Nulo.null

		function = context.function
		if isinstance(function, Function) and function.return_type:
			if not self.is_instance_of(value, function.return_type):
				return res.failure(TipoError(
					node.pos_start, node.pos_end,
					f"Erro de tipo: funcao '{function.name}' deve retornar '{function.return_type}', mas esta retornando '{value.type_name}'",
					context
				))

		return res.success_return(value)

	def visit_ContinueNode(self, node, context):
		return RTResult().success_continue()

	def visit_BreakNode(self, node, context):
		return RTResult().success_break()

	def visit_TryCatchNode(self, node, context):
		res = RTResult()
		res.register(self.visit(node.try_body, context))
		if not res.error: return res

		catch_context = context.new_scope()
		if node.catch_var_tok:
			catch_context.symbol_table.set(node.catch_var_tok.value, String(res.error.details))

		res = RTResult()
		res.register(self.visit(node.catch_body, catch_context))
		if res.should_return(): return res

		return res.success(Nulo.null)

	###################################
	# ASSIGNMENT
	###################################

	def visit_VarAssignNode(self, node, context):
		res = RTResult()
		value = res.register(self.visit(node.value_node, context))
		if res.should_return(): return res

		context.symbol_table.update_or_set(node.var_name_tok.value, value)
		return res.success(value)

	def visit_AttrAssignNode(self, node, context):
		res = RTResult()
		obj = res.register(self.visit(node.obj_node, context))
		if res.should_return(): return res

		value = res.register(self.visit(node.value_node, context))
		if res.should_return(): return res

		attr_name = node.attr_name_tok.value
		if not isinstance(obj, Instance):
			return res.failure(SemanticError(
				node.pos_start, node.pos_end,
				f"Nao e possivel atribuir o campo '{attr_name}' em um valor do tipo '{obj.type_name}'",
				context
			))

		return res.success(obj.set(attr_name, value))

	def visit_IndexAssignNode(self, node, context):
		res = RTResult()
		obj = res.register(self.visit(node.obj_node, context))
		if res.should_return(): return res

		index = res.register(self.visit(node.index_node, context))
		if res.should_return(): return res

		value = res.register(self.visit(node.value_node, context))
		if res.should_return(): return res

		if isinstance(obj, List):
			value, error = obj.set(index, value)
			if error: return res.failure(error)
		elif isinstance(obj, Map):
			obj.set(index, value)
		elif isinstance(obj, Instance) and isinstance(index, String):
			obj.set(index.value, value)
		else:
			return res.failure(SemanticError(
				node.pos_start, node.pos_end,
				f"Nao e possivel indexar um valor do tipo '{obj.type_name}'",
				context
			))

		return res.success(value)

	###################################
	# EXPRESSIONS
	###################################

	def visit_NumberNode(self, node, context):
		if node.tok.type == TT_INT:
			return RTResult().success(Integer(node.tok.value))
		return RTResult().success(Real(node.tok.value))

	def visit_StringNode(self, node, context):
		return RTResult().success(String(node.tok.value))

	def visit_BoolNode(self, node, context):
		return RTResult().success(Boolean(node.tok.value == 'verdadeiro'))

	def visit_NullNode(self, node, context):
		return RTResult().success(Nulo.null)

	def visit_ThisNode(self, node, context):
		this = context.symbol_table.this
		if this is None:
			return RTResult().failure(SemanticError(
				node.pos_start, node.pos_end,
				"'este' fora de contexto de objeto",
				context
			))
		return RTResult().success(this)

	def visit_VarAccessNode(self, node, context):
		var_name = node.var_name_tok.value
		value = context.symbol_table.get(var_name)

		if value is None:
			return RTResult().failure(SemanticError(
				node.pos_start, node.pos_end,
				f"Variavel '{var_name}' nao definida",
				context
			))
		return RTResult().success(value)

	def visit_ListNode(self, node, context):
		res = RTResult()
		size = res.register(self.visit(node.size_node, context))
		if res.should_return(): return res

		if not isinstance(size, Integer) or size.value < 0:
			return res.failure(TipoError(
				node.pos_start, node.pos_end,
				"Tamanho da lista deve ser um Inteiro nao negativo",
				context
			))
		return res.success(List([Nulo.null] * size.value))

	def visit_MapNode(self, node, context):
		return RTResult().success(Map())

	def visit_IndexAccessNode(self, node, context):
		res = RTResult()
		obj = res.register(self.visit(node.obj_node, context))
		if res.should_return(): return res

		index = res.register(self.visit(node.index_node, context))
		if res.should_return(): return res

		if isinstance(obj, List):
			value, error = obj.get(index)
			if error: return res.failure(error)
			return res.success(value)
		elif isinstance(obj, Map):
			return res.success(obj.get(index))
		elif isinstance(obj, Instance) and isinstance(index, String):
			return res.success(obj.get(index.value))

		return res.failure(SemanticError(
			node.pos_start, node.pos_end,
			f"Nao e possivel indexar um valor do tipo '{obj.type_name}' com '{index.type_name}'",
			context
		))

	def visit_AttrAccessNode(self, node, context):
		res = RTResult()
		obj = res.register(self.visit(node.obj_node, context))
		if res.should_return(): return res

		if isinstance(obj, Nulo):
			return res.success(Nulo.null)
		if not isinstance(obj, Instance):
			return res.failure(SemanticError(
				node.pos_start, node.pos_end,
				f"Nao e possivel acessar propriedades de um nao-objeto: {obj}",
				context
			))

		return res.success(obj.get(node.attr_name_tok.value))

	def visit_args(self, arg_nodes, context):
		res = RTResult()
		args = []

		for arg_node in arg_nodes:
			args.append(res.register(self.visit(arg_node, context)))
			if res.should_return(): return res

		return res.success(args)

	def call_method(self, obj, method_node, args, context, entry_pos):
		return_type = method_node.return_type_tok.value if method_node.return_type_tok else None
		method = Function(
			method_node.var_name_tok.value, method_node.body_node,
			[arg_name.value for arg_name in method_node.arg_name_toks],
			return_type, self.global_symbol_table, self
		).set_obj(obj)
		return method.execute(args, context, entry_pos)

	def visit_MethodCallNode(self, node, context):
		res = RTResult()
		obj = res.register(self.visit(node.obj_node, context))
		if res.should_return(): return res

		if isinstance(obj, Nulo):
			return res.success(Nulo.null)

		method_name = node.method_name_tok.value
		if not isinstance(obj, Instance):
			return res.failure(SemanticError(
				node.pos_start, node.pos_end,
				f"Nao e possivel chamar o metodo '{method_name}' em um nao-objeto: {obj}",
				context
			))

		method_node = self.find_method(obj.class_, method_name)
		if not method_node:
			return res.failure(SemanticError(
				node.pos_start, node.pos_end,
				f"Metodo '{method_name}' nao encontrado na classe '{obj.class_.name}'",
				context
			))

		args = res.register(self.visit_args(node.arg_nodes, context))
		if res.should_return(): return res

		return_value = res.register(self.call_method(obj, method_node, args, context, node.pos_start))
		if res.should_return(): return res
		return res.success(return_value)

	def visit_CallNode(self, node, context):
		res = RTResult()
		func_name = node.func_name_tok.value

		args = res.register(self.visit_args(node.arg_nodes, context))
		if res.should_return(): return res

		this = context.symbol_table.this
		if isinstance(this, Instance):
			method_node = self.find_method(this.class_, func_name)
			if method_node:
				return_value = res.register(self.call_method(this, method_node, args, context, node.pos_start))
				if res.should_return(): return res
				return res.success(return_value)

		value_to_call = context.symbol_table.get(func_name)
		if not isinstance(value_to_call, BaseFunction):
			return res.failure(SemanticError(
				node.pos_start, node.pos_end,
				f"Funcao nao encontrada ou nao seria funcao: {func_name}",
				context
			))

		return_value = res.register(value_to_call.execute(args, context, node.pos_start))
		if res.should_return(): return res
		return res.success(return_value)

	def visit_NewNode(self, node, context):
		res = RTResult()
		class_name = node.class_name_tok.value

		class_ = self.global_symbol_table.classes.get(class_name)
		if not class_:
			return res.failure(SemanticError(
				node.pos_start, node.pos_end,
				f"Classe '{class_name}' nao encontrada",
				context
			))

		instance = Instance(class_)
		init_context = Context(class_name, context, node.pos_start)
		init_context.symbol_table = SymbolTable(self.global_symbol_table, instance)

		# Ancestor fields come first, base-most class first, and never overwrite.
		ancestors = list(self.ancestors(class_))[1:]
		for ancestor in reversed(ancestors):
			for field_node in ancestor.field_nodes:
				if field_node.var_name_tok.value in instance.fields: continue
				res.register(self.init_field(instance, field_node, init_context))
				if res.should_return(): return res

		for field_node in class_.field_nodes:
			res.register(self.init_field(instance, field_node, init_context))
			if res.should_return(): return res

		constructor = class_.methods.get(CONSTRUCTOR_NAME)
		if constructor:
			args = res.register(self.visit_args(node.arg_nodes, context))
			if res.should_return(): return res

			res.register(self.call_method(instance, constructor, args, context, node.pos_start))
			if res.error: return res

		return res.success(instance)

	def init_field(self, instance, field_node, context):
		res = RTResult()

		if field_node.value_node is None:
			value = Nulo.null
		elif isinstance(field_node.value_node, FuncDefNode):
			value = res.register(self.make_function(field_node.value_node, context))
		else:
			value = res.register(self.visit(field_node.value_node, context))
		if res.should_return(): return res

		instance.set(field_node.var_name_tok.value, value)
		return res.success(value)

	def visit_BinOpNode(self, node, context):
		res = RTResult()
		op_tok = node.op_tok

		if op_tok.type in (TT_AND, TT_OR) or op_tok.matches(TT_KEYWORD, 'e') or op_tok.matches(TT_KEYWORD, 'ou'):
			return self.visit_logical(node, context)

		left = res.register(self.visit(node.left_node, context))
		if res.should_return(): return res
		right = res.register(self.visit(node.right_node, context))
		if res.should_return(): return res

		if op_tok.type == TT_PLUS:
			result, error = left.added_to(right)
		elif op_tok.type == TT_MINUS:
			result, error = left.subbed_by(right)
		elif op_tok.type == TT_MUL:
			result, error = left.multed_by(right)
		elif op_tok.type == TT_DIV:
			result, error = left.dived_by(right)
		elif op_tok.type == TT_MOD:
			result, error = left.moded_by(right)
		elif op_tok.type == TT_EE:
			result, error = left.get_comparison_eq(right)
		elif op_tok.type == TT_NE:
			result, error = left.get_comparison_ne(right)
		elif op_tok.type == TT_LT:
			result, error = left.get_comparison_lt(right)
		elif op_tok.type == TT_LTE:
			result, error = left.get_comparison_lte(right)
		elif op_tok.type == TT_GT:
			result, error = left.get_comparison_gt(right)
		elif op_tok.type == TT_GTE:
			result, error = left.get_comparison_gte(right)

		if error:
			return res.failure(error)
		return res.success(result)

	def visit_logical(self, node, context):
		res = RTResult()
		is_or = node.op_tok.type == TT_OR or node.op_tok.matches(TT_KEYWORD, 'ou')
		op_name = 'ou' if is_or else 'e'

		for operand_node in (node.left_node, node.right_node):
			operand = res.register(self.visit(operand_node, context))
			if res.should_return(): return res

			if not isinstance(operand, Boolean):
				return res.failure(TipoError(
					operand_node.pos_start, operand_node.pos_end,
					f"Operador '{op_name}' requer operandos Logico, mas recebeu '{operand.type_name}'",
					context
				))
			if operand.value == is_or:
				return res.success(operand)

		return res.success(operand)

	def visit_UnaryOpNode(self, node, context):
		res = RTResult()
		value = res.register(self.visit(node.node, context))
		if res.should_return(): return res

		if node.op_tok.type == TT_MINUS:
			result, error = value.negated()
		else:
			result, error = value.notted()

		if error:
			return res.failure(error)
		return res.success(result)

#######################################
# RUN
#######################################

def run(fn, text, interpreter=None):
	interpreter = interpreter or Interpreter()

	program_node, error = parse(fn, text)
	if error:
		interpreter.output(error.as_string())
		return None, error, interpreter

	result = interpreter.interpret(program_node)
	return result.value, result.error, interpreter
