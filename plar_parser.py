#######################################
# IMPORTS
#######################################

from plar_lexer import *

#######################################
# NODES
#######################################

class ProgramNode:
	def __init__(self, import_nodes, declaration_nodes, pos_start, pos_end):
		self.import_nodes = import_nodes
		self.declaration_nodes = declaration_nodes

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'ProgramNode({self.import_nodes}, {self.declaration_nodes})'

class ImportNode:
	def __init__(self, file_path_tok, pos_start, pos_end):
		self.file_path_tok = file_path_tok

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'ImportNode({self.file_path_tok})'

class InterfaceNode:
	def __init__(self, interface_name_tok, method_name_toks, pos_start, pos_end):
		self.interface_name_tok = interface_name_tok
		self.method_name_toks = method_name_toks

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'InterfaceNode({self.interface_name_tok}, {self.method_name_toks})'

class ClassNode:
	def __init__(self, class_name_tok, parent_tok, interface_toks, field_nodes, method_nodes, pos_start, pos_end):
		self.class_name_tok = class_name_tok
		self.parent_tok = parent_tok
		self.interface_toks = interface_toks
		self.field_nodes = field_nodes
		self.method_nodes = method_nodes

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'ClassNode({self.class_name_tok}, {self.parent_tok}, {self.interface_toks})'

class FuncDefNode:
	def __init__(self, var_name_tok, arg_name_toks, body_node, return_type_tok, pos_start, pos_end):
		self.var_name_tok = var_name_tok
		self.arg_name_toks = arg_name_toks
		self.body_node = body_node
		self.return_type_tok = return_type_tok

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'FuncDefNode({self.var_name_tok}, {self.arg_name_toks}, {self.return_type_tok})'

class VarDeclNode:
	def __init__(self, var_name_tok, type_tok, value_node, pos_start, pos_end):
		self.var_name_tok = var_name_tok
		self.type_tok = type_tok
		self.value_node = value_node

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'VarDeclNode({self.var_name_tok}, {self.type_tok}, {self.value_node})'

class BlockNode:
	def __init__(self, statement_nodes, pos_start, pos_end):
		self.statement_nodes = statement_nodes

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'{{{", ".join([repr(x) for x in self.statement_nodes])}}}'

class IfNode:
	def __init__(self, condition_node, then_node, else_node, pos_start):
		self.condition_node = condition_node
		self.then_node = then_node
		self.else_node = else_node

		self.pos_start = pos_start
		self.pos_end = (else_node or then_node).pos_end

	def __repr__(self):
		return f'IfNode({self.condition_node}, {self.then_node}, {self.else_node})'

class WhileNode:
	def __init__(self, condition_node, body_node, pos_start):
		self.condition_node = condition_node
		self.body_node = body_node

		self.pos_start = pos_start
		self.pos_end = self.body_node.pos_end

	def __repr__(self):
		return f'WhileNode({self.condition_node}, {self.body_node})'

class ForNode:
	def __init__(self, init_node, condition_node, step_node, body_node, pos_start):
		self.init_node = init_node
		self.condition_node = condition_node
		self.step_node = step_node
		self.body_node = body_node

		self.pos_start = pos_start
		self.pos_end = self.body_node.pos_end

	def __repr__(self):
		return f'ForNode({self.init_node}, {self.condition_node}, {self.step_node}, {self.body_node})'

class DoWhileNode:
	def __init__(self, body_node, condition_node, pos_start, pos_end):
		self.body_node = body_node
		self.condition_node = condition_node

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'DoWhileNode({self.body_node}, {self.condition_node})'

class ReturnNode:
	def __init__(self, node_to_return, pos_start, pos_end):
		self.node_to_return = node_to_return

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'ReturnNode({self.node_to_return})'

class ContinueNode:
	def __init__(self, pos_start, pos_end):
		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return 'ContinueNode()'

class BreakNode:
	def __init__(self, pos_start, pos_end):
		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return 'BreakNode()'

class TryCatchNode:
	def __init__(self, try_body, catch_var_tok, catch_body, pos_start):
		self.try_body = try_body
		self.catch_var_tok = catch_var_tok
		self.catch_body = catch_body

		self.pos_start = pos_start
		self.pos_end = self.catch_body.pos_end

	def __repr__(self):
		return f'TryCatchNode({self.try_body}, {self.catch_var_tok}, {self.catch_body})'

class VarAssignNode:
	def __init__(self, var_name_tok, value_node):
		self.var_name_tok = var_name_tok
		self.value_node = value_node

		self.pos_start = self.var_name_tok.pos_start
		self.pos_end = self.value_node.pos_end

	def __repr__(self):
		return f'VarAssignNode({self.var_name_tok}, {self.value_node})'

class AttrAssignNode:
	def __init__(self, obj_node, attr_name_tok, value_node):
		self.obj_node = obj_node
		self.attr_name_tok = attr_name_tok
		self.value_node = value_node

		self.pos_start = obj_node.pos_start
		self.pos_end = value_node.pos_end

	def __repr__(self):
		return f'{self.obj_node}.{self.attr_name_tok} = {self.value_node}'

class IndexAssignNode:
	def __init__(self, obj_node, index_node, value_node):
		self.obj_node = obj_node
		self.index_node = index_node
		self.value_node = value_node

		self.pos_start = obj_node.pos_start
		self.pos_end = value_node.pos_end

	def __repr__(self):
		return f'{self.obj_node}[{self.index_node}] = {self.value_node}'

class BinOpNode:
	def __init__(self, left_node, op_tok, right_node):
		self.left_node = left_node
		self.op_tok = op_tok
		self.right_node = right_node

		self.pos_start = self.left_node.pos_start
		self.pos_end = self.right_node.pos_end

	def __repr__(self):
		return f'({self.left_node}, {self.op_tok}, {self.right_node})'

class UnaryOpNode:
	def __init__(self, op_tok, node):
		self.op_tok = op_tok
		self.node = node

		self.pos_start = self.op_tok.pos_start
		self.pos_end = node.pos_end

	def __repr__(self):
		return f'({self.op_tok}, {self.node})'

class NumberNode:
	def __init__(self, tok):
		self.tok = tok

		self.pos_start = self.tok.pos_start
		self.pos_end = self.tok.pos_end

	def __repr__(self):
		return f'{self.tok}'

class StringNode:
	def __init__(self, tok):
		self.tok = tok

		self.pos_start = tok.pos_start
		self.pos_end = tok.pos_end

	def __repr__(self):
		return f'{self.tok}'

class BoolNode:
	def __init__(self, tok):
		self.tok = tok

		self.pos_start = self.tok.pos_start
		self.pos_end = self.tok.pos_end

	def __repr__(self):
		return f'{self.tok}'

class NullNode:
	def __init__(self, tok):
		self.tok = tok

		self.pos_start = self.tok.pos_start
		self.pos_end = self.tok.pos_end

	def __repr__(self):
		return 'nulo'

class ThisNode:
	def __init__(self, tok):
		self.tok = tok

		self.pos_start = self.tok.pos_start
		self.pos_end = self.tok.pos_end

	def __repr__(self):
		return 'este'

class VarAccessNode:
	def __init__(self, var_name_tok):
		self.var_name_tok = var_name_tok

		self.pos_start = self.var_name_tok.pos_start
		self.pos_end = self.var_name_tok.pos_end

	def __repr__(self):
		return f'VarAccessNode({self.var_name_tok})'

class CallNode:
	def __init__(self, func_name_tok, arg_nodes, pos_end):
		self.func_name_tok = func_name_tok
		self.arg_nodes = arg_nodes

		self.pos_start = self.func_name_tok.pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'{self.func_name_tok.value}({[repr(arg) for arg in self.arg_nodes]})'

class MethodCallNode:
	def __init__(self, obj_node, method_name_tok, arg_nodes, pos_end):
		self.obj_node = obj_node
		self.method_name_tok = method_name_tok
		self.arg_nodes = arg_nodes

		self.pos_start = self.obj_node.pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'{self.obj_node}.{self.method_name_tok.value}({[repr(arg) for arg in self.arg_nodes]})'

class AttrAccessNode:
	def __init__(self, obj_node, attr_name_tok):
		self.obj_node = obj_node
		self.attr_name_tok = attr_name_tok

		self.pos_start = obj_node.pos_start
		self.pos_end = attr_name_tok.pos_end

	def __repr__(self):
		return f'{self.obj_node}.{self.attr_name_tok.value}'

class IndexAccessNode:
	def __init__(self, obj_node, index_node, pos_end):
		self.obj_node = obj_node
		self.index_node = index_node

		self.pos_start = obj_node.pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'{self.obj_node}[{self.index_node}]'

class NewNode:
	def __init__(self, class_name_tok, arg_nodes, pos_start, pos_end):
		self.class_name_tok = class_name_tok
		self.arg_nodes = arg_nodes

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'novo {self.class_name_tok.value}({[repr(arg) for arg in self.arg_nodes]})'

class ListNode:
	def __init__(self, size_node, pos_start, pos_end):
		self.size_node = size_node

		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return f'lista({self.size_node})'

class MapNode:
	def __init__(self, pos_start, pos_end):
		self.pos_start = pos_start
		self.pos_end = pos_end

	def __repr__(self):
		return 'mapa()'

#######################################
# PARSE RESULT
#######################################

class ParseResult:
	def __init__(self):
		self.error = None
		self.node = None
		self.advance_count = 0

	def register_advancement(self):
		self.advance_count += 1

	def register(self, res):
		self.advance_count += res.advance_count
		if res.error: self.error = res.error
		return res.node

	def success(self, node):
		self.node = node
		return self

	def failure(self, error):
		if not self.error or self.advance_count == 0:
			self.error = error
		return self

#######################################
# PARSER
#######################################

ASSIGNABLE_NODES = (VarAccessNode, AttrAccessNode, IndexAccessNode)

class Parser:
	def __init__(self, tokens):
		self.tokens = tokens
		self.tok_idx = -1
		self.advance()

	def advance(self, res=None):
		if res: res.register_advancement()
		self.tok_idx += 1
		self.update_current_tok()
		return self.current_tok

	def update_current_tok(self):
		if self.tok_idx >= 0 and self.tok_idx < len(self.tokens):
			self.current_tok = self.tokens[self.tok_idx]

	def peek(self):
		idx = self.tok_idx + 1
		return self.tokens[idx] if idx < len(self.tokens) else self.tokens[-1]

	def expect(self, res, type_, details, value=None):
		tok = self.current_tok
		if tok.type != type_ or (value is not None and tok.value != value):
			res.failure(InvalidSyntaxError(tok.pos_start, tok.pos_end, details))
			return None
		self.advance(res)
		return tok

	def parse(self):
		res = self.program()
		if not res.error and self.current_tok.type != TT_EOF:
			return res.failure(InvalidSyntaxError(
				self.current_tok.pos_start, self.current_tok.pos_end,
				"Sintaxe Invalida"
			))
		return res

	###################################

	def program(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		imports = []
		declarations = []

		while self.current_tok.matches(TT_KEYWORD, 'importar'):
			import_node = res.register(self.import_decl())
			if res.error: return res
			imports.append(import_node)

		while self.current_tok.type != TT_EOF:
			declaration = res.register(self.declaration())
			if res.error: return res
			declarations.append(declaration)

		return res.success(ProgramNode(imports, declarations, pos_start, self.current_tok.pos_end.copy()))

	def import_decl(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		file_path_tok = self.expect(res, TT_STRING, "Esperava-se o caminho do arquivo entre aspas")
		if res.error: return res

		semi = self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
		if res.error: return res

		return res.success(ImportNode(file_path_tok, pos_start, semi.pos_end))

	def declaration(self):
		tok = self.current_tok

		if tok.matches(TT_KEYWORD, 'interface'):
			return self.interface_def()
		if tok.matches(TT_KEYWORD, 'classe'):
			return self.class_def()
		if tok.matches(TT_KEYWORD, 'funcao') and self.peek().type == TT_IDENTIFIER:
			return self.func_def()
		if tok.matches(TT_KEYWORD, 'var'):
			return self.var_decl()
		return self.statement()

	def interface_def(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		name_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se o nome da interface")
		if res.error: return res
		self.expect(res, TT_LBRACE, "Esperava-se '{'")
		if res.error: return res

		method_name_toks = []
		while not self.current_tok.type == TT_RBRACE:
			self.expect(res, TT_KEYWORD, "Esperava-se 'funcao' ou '}'", 'funcao')
			if res.error: return res

			method_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se o nome do metodo")
			if res.error: return res

			res.register(self.param_list())
			if res.error: return res

			res.register(self.return_type())
			if res.error: return res

			self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
			if res.error: return res
			method_name_toks.append(method_tok)

		end_tok = self.current_tok
		self.advance(res)
		return res.success(InterfaceNode(name_tok, method_name_toks, pos_start, end_tok.pos_end))

	def class_def(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		class_name_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se o nome da classe")
		if res.error: return res

		parent_tok = None
		if self.current_tok.matches(TT_KEYWORD, 'estende'):
			self.advance(res)
			parent_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se o nome da classe base")
			if res.error: return res

		interface_toks = []
		if self.current_tok.matches(TT_KEYWORD, 'implementa'):
			self.advance(res)
			interface_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se o nome da interface")
			if res.error: return res
			interface_toks.append(interface_tok)

			while self.current_tok.type == TT_COMMA:
				self.advance(res)
				interface_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se o nome da interface")
				if res.error: return res
				interface_toks.append(interface_tok)

		self.expect(res, TT_LBRACE, "Esperava-se '{'")
		if res.error: return res

		field_nodes = []
		method_nodes = []
		while self.current_tok.type != TT_RBRACE:
			if self.current_tok.matches(TT_KEYWORD, 'var'):
				field_nodes.append(res.register(self.var_decl()))
			elif self.current_tok.matches(TT_KEYWORD, 'funcao'):
				method_nodes.append(res.register(self.func_def()))
			else:
				return res.failure(InvalidSyntaxError(
					self.current_tok.pos_start, self.current_tok.pos_end,
					"Esperava-se 'var', 'funcao' ou '}'"
				))
			if res.error: return res

		end_tok = self.current_tok
		self.advance(res)
		return res.success(ClassNode(
			class_name_tok, parent_tok, interface_toks, field_nodes, method_nodes,
			pos_start, end_tok.pos_end
		))

	def func_def(self, name_required=True):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		var_name_tok = None
		if self.current_tok.type == TT_IDENTIFIER:
			var_name_tok = self.current_tok
			self.advance(res)
		elif name_required:
			return res.failure(InvalidSyntaxError(
				self.current_tok.pos_start, self.current_tok.pos_end,
				"Esperava-se o nome da funcao"
			))

		arg_name_toks = res.register(self.param_list())
		if res.error: return res

		return_type_tok = res.register(self.return_type())
		if res.error: return res

		body = res.register(self.block())
		if res.error: return res

		return res.success(FuncDefNode(var_name_tok, arg_name_toks, body, return_type_tok, pos_start, body.pos_end))

	def param_list(self):
		res = ParseResult()
		arg_name_toks = []

		self.expect(res, TT_LPAREN, "Esperava-se '('")
		if res.error: return res

		if self.current_tok.type == TT_IDENTIFIER:
			arg_name_toks.append(self.current_tok)
			self.advance(res)

			while self.current_tok.type == TT_COMMA:
				self.advance(res)
				arg_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se um identificador")
				if res.error: return res
				arg_name_toks.append(arg_tok)

		self.expect(res, TT_RPAREN, "Esperava-se ',' ou ')'")
		if res.error: return res

		return res.success(arg_name_toks)

	def return_type(self):
		res = ParseResult()
		if self.current_tok.type != TT_COLON:
			return res.success(None)

		self.advance(res)
		type_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se um tipo")
		if res.error: return res
		return res.success(type_tok)

	def var_decl(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		var_name_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se o nome da variavel")
		if res.error: return res

		type_tok = res.register(self.return_type())
		if res.error: return res

		value_node = None
		if self.current_tok.type == TT_EQ:
			self.advance(res)
			if self.current_tok.matches(TT_KEYWORD, 'funcao'):
				value_node = res.register(self.func_def(name_required=False))
			else:
				value_node = res.register(self.expr())
			if res.error: return res

		semi = self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
		if res.error: return res

		return res.success(VarDeclNode(var_name_tok, type_tok, value_node, pos_start, semi.pos_end))

	def block(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()

		self.expect(res, TT_LBRACE, "Esperava-se '{'")
		if res.error: return res

		statements = []
		while self.current_tok.type not in (TT_RBRACE, TT_EOF):
			statement = res.register(self.declaration())
			if res.error: return res
			statements.append(statement)

		end_tok = self.expect(res, TT_RBRACE, "Esperava-se '}'")
		if res.error: return res

		return res.success(BlockNode(statements, pos_start, end_tok.pos_end))

	def statement(self):
		res = ParseResult()
		tok = self.current_tok
		pos_start = tok.pos_start.copy()

		if tok.type == TT_LBRACE:
			return self.block()
		elif tok.matches(TT_KEYWORD, 'se'):
			return self.if_stmt()
		elif tok.matches(TT_KEYWORD, 'enquanto'):
			return self.while_stmt()
		elif tok.matches(TT_KEYWORD, 'para'):
			return self.for_stmt()
		elif tok.matches(TT_KEYWORD, 'faca'):
			return self.do_while_stmt()
		elif tok.matches(TT_KEYWORD, 'tentar'):
			return self.try_stmt()

		elif tok.matches(TT_KEYWORD, 'retornar'):
			self.advance(res)
			expr = None
			if self.current_tok.type != TT_SEMICOLON:
				expr = res.register(self.expr())
				if res.error: return res
			semi = self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
			if res.error: return res
			return res.success(ReturnNode(expr, pos_start, semi.pos_end))

		elif tok.matches(TT_KEYWORD, 'continuar'):
			self.advance(res)
			semi = self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
			if res.error: return res
			return res.success(ContinueNode(pos_start, semi.pos_end))

		elif tok.matches(TT_KEYWORD, 'quebrar'):
			self.advance(res)
			semi = self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
			if res.error: return res
			return res.success(BreakNode(pos_start, semi.pos_end))

		expr = res.register(self.expr())
		if res.error: return res
		self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
		if res.error: return res
		return res.success(expr)

	def condition(self):
		res = ParseResult()
		self.expect(res, TT_LPAREN, "Esperava-se '('")
		if res.error: return res
		condition = res.register(self.expr())
		if res.error: return res
		self.expect(res, TT_RPAREN, "Esperava-se ')'")
		if res.error: return res
		return res.success(condition)

	def if_stmt(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		condition = res.register(self.condition())
		if res.error: return res

		then_node = res.register(self.statement())
		if res.error: return res

		else_node = None
		if self.current_tok.matches(TT_KEYWORD, 'senao'):
			self.advance(res)
			else_node = res.register(self.statement())
			if res.error: return res

		return res.success(IfNode(condition, then_node, else_node, pos_start))

	def while_stmt(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		condition = res.register(self.condition())
		if res.error: return res

		body = res.register(self.statement())
		if res.error: return res

		return res.success(WhileNode(condition, body, pos_start))

	def for_stmt(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		self.expect(res, TT_LPAREN, "Esperava-se '('")
		if res.error: return res

		init_node = None
		if self.current_tok.matches(TT_KEYWORD, 'var'):
			init_node = res.register(self.var_decl())
			if res.error: return res
		elif self.current_tok.type == TT_SEMICOLON:
			self.advance(res)
		else:
			init_node = res.register(self.expr())
			if res.error: return res
			self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
			if res.error: return res

		condition = res.register(self.expr())
		if res.error: return res
		self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
		if res.error: return res

		step_node = None
		if self.current_tok.type != TT_RPAREN:
			step_node = res.register(self.expr())
			if res.error: return res

		self.expect(res, TT_RPAREN, "Esperava-se ')'")
		if res.error: return res

		body = res.register(self.statement())
		if res.error: return res

		return res.success(ForNode(init_node, condition, step_node, body, pos_start))

	def do_while_stmt(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		body = res.register(self.statement())
		if res.error: return res

		self.expect(res, TT_KEYWORD, "Esperava-se 'enquanto'", 'enquanto')
		if res.error: return res

		condition = res.register(self.condition())
		if res.error: return res

		semi = self.expect(res, TT_SEMICOLON, "Esperava-se ';'")
		if res.error: return res

		return res.success(DoWhileNode(body, condition, pos_start, semi.pos_end))

	def try_stmt(self):
		res = ParseResult()
		pos_start = self.current_tok.pos_start.copy()
		self.advance(res)

		try_body = res.register(self.block())
		if res.error: return res

		self.expect(res, TT_KEYWORD, "Esperava-se 'capturar'", 'capturar')
		if res.error: return res

		catch_var_tok = None
		if self.current_tok.type == TT_LPAREN:
			self.advance(res)
			catch_var_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se um identificador")
			if res.error: return res
			self.expect(res, TT_RPAREN, "Esperava-se ')'")
			if res.error: return res

		catch_body = res.register(self.block())
		if res.error: return res

		return res.success(TryCatchNode(try_body, catch_var_tok, catch_body, pos_start))

	###################################

	def expr(self):
		res = ParseResult()
		node = res.register(self.or_expr())
		if res.error: return res

		if self.current_tok.type != TT_EQ:
			return res.success(node)

		eq_tok = self.current_tok
		if not isinstance(node, ASSIGNABLE_NODES):
			return res.failure(InvalidSyntaxError(
				node.pos_start, eq_tok.pos_end,
				"Alvo de atribuicao invalido"
			))

		self.advance(res)
		value = res.register(self.expr())
		if res.error: return res

		if isinstance(node, VarAccessNode):
			return res.success(VarAssignNode(node.var_name_tok, value))
		elif isinstance(node, AttrAccessNode):
			return res.success(AttrAssignNode(node.obj_node, node.attr_name_tok, value))
		return res.success(IndexAssignNode(node.obj_node, node.index_node, value))

	def or_expr(self):
		return self.bin_op(self.and_expr, (TT_OR, (TT_KEYWORD, 'ou')))

	def and_expr(self):
		return self.bin_op(self.equality_expr, (TT_AND, (TT_KEYWORD, 'e')))

	def equality_expr(self):
		return self.bin_op(self.comp_expr, (TT_EE, TT_NE))

	def comp_expr(self):
		return self.bin_op(self.arith_expr, (TT_LT, TT_LTE, TT_GT, TT_GTE))

	def arith_expr(self):
		return self.bin_op(self.term, (TT_PLUS, TT_MINUS))

	def term(self):
		return self.bin_op(self.factor, (TT_MUL, TT_DIV, TT_MOD))

	def factor(self):
		res = ParseResult()
		tok = self.current_tok

		if tok.type in (TT_NOT, TT_MINUS):
			self.advance(res)
			factor = res.register(self.factor())
			if res.error: return res
			return res.success(UnaryOpNode(tok, factor))

		return self.postfix()

	def postfix(self):
		res = ParseResult()
		node = res.register(self.atom())
		if res.error: return res

		while self.current_tok.type in (TT_DOT, TT_LBRACKET):
			if self.current_tok.type == TT_DOT:
				self.advance(res)
				name_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se um identificador depois de '.'")
				if res.error: return res

				if self.current_tok.type == TT_LPAREN:
					call_args = res.register(self.arguments())
					if res.error: return res
					arg_nodes, pos_end = call_args
					node = MethodCallNode(node, name_tok, arg_nodes, pos_end)
				else:
					node = AttrAccessNode(node, name_tok)
			else:
				self.advance(res)
				index = res.register(self.expr())
				if res.error: return res
				end_tok = self.expect(res, TT_RBRACKET, "Esperava-se ']'")
				if res.error: return res
				node = IndexAccessNode(node, index, end_tok.pos_end)

		return res.success(node)

	def arguments(self):
		res = ParseResult()
		arg_nodes = []

		self.expect(res, TT_LPAREN, "Esperava-se '('")
		if res.error: return res

		if self.current_tok.type != TT_RPAREN:
			arg_nodes.append(res.register(self.expr()))
			if res.error: return res

			while self.current_tok.type == TT_COMMA:
				self.advance(res)
				arg_nodes.append(res.register(self.expr()))
				if res.error: return res

		end_tok = self.expect(res, TT_RPAREN, "Esperava-se ',' ou ')'")
		if res.error: return res

		return res.success((arg_nodes, end_tok.pos_end))

	def atom(self):
		res = ParseResult()
		tok = self.current_tok

		if tok.type in (TT_INT, TT_FLOAT):
			self.advance(res)
			return res.success(NumberNode(tok))

		elif tok.type == TT_STRING:
			self.advance(res)
			return res.success(StringNode(tok))

		elif tok.matches(TT_KEYWORD, 'verdadeiro') or tok.matches(TT_KEYWORD, 'falso'):
			self.advance(res)
			return res.success(BoolNode(tok))

		elif tok.matches(TT_KEYWORD, 'nulo'):
			self.advance(res)
			return res.success(NullNode(tok))

		elif tok.matches(TT_KEYWORD, 'este'):
			self.advance(res)
			return res.success(ThisNode(tok))

		elif tok.type == TT_IDENTIFIER:
			self.advance(res)
			if self.current_tok.type == TT_LPAREN:
				call_args = res.register(self.arguments())
				if res.error: return res
				arg_nodes, pos_end = call_args
				return res.success(CallNode(tok, arg_nodes, pos_end))
			return res.success(VarAccessNode(tok))

		elif tok.matches(TT_KEYWORD, 'novo'):
			self.advance(res)
			class_name_tok = self.expect(res, TT_IDENTIFIER, "Esperava-se o nome da classe depois de 'novo'")
			if res.error: return res
			call_args = res.register(self.arguments())
			if res.error: return res
			arg_nodes, pos_end = call_args
			return res.success(NewNode(class_name_tok, arg_nodes, tok.pos_start, pos_end))

		elif tok.matches(TT_KEYWORD, 'lista'):
			self.advance(res)
			self.expect(res, TT_LPAREN, "Esperava-se '('")
			if res.error: return res
			size = res.register(self.expr())
			if res.error: return res
			end_tok = self.expect(res, TT_RPAREN, "Esperava-se ')'")
			if res.error: return res
			return res.success(ListNode(size, tok.pos_start, end_tok.pos_end))

		elif tok.matches(TT_KEYWORD, 'mapa'):
			self.advance(res)
			self.expect(res, TT_LPAREN, "Esperava-se '('")
			if res.error: return res
			end_tok = self.expect(res, TT_RPAREN, "Esperava-se ')'")
			if res.error: return res
			return res.success(MapNode(tok.pos_start, end_tok.pos_end))

		elif tok.type == TT_LPAREN:
			self.advance(res)
			expr = res.register(self.expr())
			if res.error: return res
			self.expect(res, TT_RPAREN, "Esperava-se ')'")
			if res.error: return res
			return res.success(expr)

		return res.failure(InvalidSyntaxError(
			tok.pos_start, tok.pos_end,
			"Esperava-se inteiro, real, texto, identificador, 'novo', 'lista', 'mapa' ou '('"
		))

	###################################

	def bin_op(self, func, ops):
		res = ParseResult()
		left = res.register(func())
		if res.error: return res

		while self.current_tok.type in ops or (self.current_tok.type, self.current_tok.value) in ops:
			op_tok = self.current_tok
			self.advance(res)
			right = res.register(func())
			if res.error: return res
			left = BinOpNode(left, op_tok, right)

		return res.success(left)

#######################################
# PARSE
#######################################

def parse(fn, text):
	lexer = Lexer(fn, text)
	tokens, error = lexer.make_tokens()
	if error: return None, error

	parser = Parser(tokens)
	ast = parser.parse()
	if ast.error: return None, ast.error
	return ast.node, None
