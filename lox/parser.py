"""
Recursive descent, one method per rung of the precedence ladder.

From loosest to tightest binding:

	comma > assignment > ternary > or > and > equality > comparison
	> term > factor > unary > call > primary

Syntax errors are written to the report at the offending token.
Then the parser panics: it throws away tokens until it finds a plausible
statement boundary, and carries on from there. That way one typo does not
hide the rest of a unit's problems. Any reported error means no program.
"""
from typing import Optional
from boozetools.parsing.interface import ParseError
from .ontology import Kind, Token, STATEMENT_STARTERS, Expression, Statement
from .diagnostics import Report
from . import syntax

MAX_ARITY = 255

# The static checks and the evaluator recurse once per level of tree.
MAX_NESTING = 200
TOO_DEEP = "Too much nesting."

class Panic(ParseError):
	""" Unwinds to the nearest statement boundary. Already reported by the time it is raised. """
	pass

class Parser:

	def __init__(self, tokens:list[Token], report:Report):
		assert tokens and tokens[-1].kind is Kind.EOF
		self._tokens = tokens
		self._report = report
		self._current = 0

	# Entry points:

	def parse(self) -> syntax.Program:
		program = []
		while not self._at_end():
			start = self._peek()
			stmt = self._declaration()
			if stmt is None: continue
			if syntax.depth(stmt) > MAX_NESTING: self._error(start, TOO_DEEP)
			else: program.append(stmt)
		return program

	def parse_expression(self) -> Optional[Expression]:
		""" The whole token stream must be exactly one expression. """
		start = self._peek()
		try:
			expr = self._expression()
			if not self._at_end():
				raise self._error(self._peek(), "Expect end of expression.")
		except Panic:
			return None
		except RecursionError:
			self._error(self._peek(), TOO_DEEP)
			return None
		if syntax.depth(expr) > MAX_NESTING:
			self._error(start, TOO_DEEP)
			return None
		return expr

	# Declarations and statements:

	def _declaration(self) -> Optional[Statement]:
		try:
			if self._match(Kind.CLASS): return self._class_declaration()
			if self._match(Kind.FUN): return self._function("function")
			if self._match(Kind.VAR): return self._var_declaration()
			return self._statement()
		except Panic:
			self._synchronize()
			return None
		except RecursionError:
			# Python ran out of stack partway down; that is a syntax error too.
			self._error(self._peek(), TOO_DEEP)
			self._synchronize()
			return None

	def _class_declaration(self) -> syntax.ClassDecl:
		name = self._consume(Kind.IDENTIFIER, "Expect class name.")
		superclass = None
		if self._match(Kind.LESS):
			superclass = syntax.Variable(self._consume(Kind.IDENTIFIER, "Expect superclass name."))
		self._consume(Kind.LEFT_BRACE, "Expect '{' before class body.")
		methods = []
		while not self._check(Kind.RIGHT_BRACE) and not self._at_end():
			methods.append(self._function("method"))
		self._consume(Kind.RIGHT_BRACE, "Expect '}' after class body.")
		return syntax.ClassDecl(name, superclass, methods)

	def _function(self, kind:str) -> syntax.FunctionDecl:
		name = self._consume(Kind.IDENTIFIER, "Expect %s name." % kind)
		self._consume(Kind.LEFT_PAREN, "Expect '(' after %s name." % kind)
		params = []
		if not self._check(Kind.RIGHT_PAREN):
			while True:
				if len(params) >= MAX_ARITY:
					self._error(self._peek(), "Can't have more than %d parameters." % MAX_ARITY)
				params.append(self._consume(Kind.IDENTIFIER, "Expect parameter name."))
				if not self._match(Kind.COMMA): break
		self._consume(Kind.RIGHT_PAREN, "Expect ')' after parameters.")
		self._consume(Kind.LEFT_BRACE, "Expect '{' before %s body." % kind)
		return syntax.FunctionDecl(name, params, self._block())

	def _var_declaration(self) -> syntax.VarDecl:
		name = self._consume(Kind.IDENTIFIER, "Expect variable name.")
		initializer = self._expression() if self._match(Kind.EQUAL) else None
		self._consume(Kind.SEMICOLON, "Expect ';' after variable declaration.")
		return syntax.VarDecl(name, initializer)

	def _statement(self) -> Statement:
		if self._match(Kind.FOR): return self._for_statement()
		if self._match(Kind.IF): return self._if_statement()
		if self._match(Kind.PRINT): return self._print_statement()
		if self._match(Kind.RETURN): return self._return_statement()
		if self._match(Kind.WHILE): return self._while_statement()
		if self._match(Kind.LEFT_BRACE): return syntax.Block(self._block())
		return self._expression_statement()

	def _for_statement(self) -> Statement:
		self._consume(Kind.LEFT_PAREN, "Expect '(' after 'for'.")
		if self._match(Kind.SEMICOLON): initializer = None
		elif self._match(Kind.VAR): initializer = self._var_declaration()
		else: initializer = self._expression_statement()

		condition = None if self._check(Kind.SEMICOLON) else self._expression()
		self._consume(Kind.SEMICOLON, "Expect ';' after loop condition.")

		increment = None if self._check(Kind.RIGHT_PAREN) else self._expression()
		self._consume(Kind.RIGHT_PAREN, "Expect ')' after for clauses.")

		body = self._statement()
		return syntax.desugar_for(initializer, condition, increment, body)

	def _if_statement(self) -> syntax.If:
		self._consume(Kind.LEFT_PAREN, "Expect '(' after 'if'.")
		condition = self._expression()
		self._consume(Kind.RIGHT_PAREN, "Expect ')' after if condition.")
		then_branch = self._statement()
		else_branch = self._statement() if self._match(Kind.ELSE) else None
		return syntax.If(condition, then_branch, else_branch)

	def _print_statement(self) -> syntax.PrintStmt:
		value = self._expression()
		self._consume(Kind.SEMICOLON, "Expect ';' after value.")
		return syntax.PrintStmt(value)

	def _return_statement(self) -> syntax.ReturnStmt:
		keyword = self._previous()
		value = None if self._check(Kind.SEMICOLON) else self._expression()
		self._consume(Kind.SEMICOLON, "Expect ';' after return value.")
		return syntax.ReturnStmt(keyword, value)

	def _while_statement(self) -> syntax.While:
		self._consume(Kind.LEFT_PAREN, "Expect '(' after 'while'.")
		condition = self._expression()
		self._consume(Kind.RIGHT_PAREN, "Expect ')' after condition.")
		return syntax.While(condition, self._statement())

	def _block(self) -> list[Statement]:
		statements = []
		while not self._check(Kind.RIGHT_BRACE) and not self._at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		self._consume(Kind.RIGHT_BRACE, "Expect '}' after block.")
		return statements

	def _expression_statement(self) -> syntax.ExpressionStmt:
		expr = self._expression()
		self._consume(Kind.SEMICOLON, "Expect ';' after expression.")
		return syntax.ExpressionStmt(expr)

	# Expressions, loosest first:

	def _expression(self) -> Expression:
		return self._comma()

	def _comma(self) -> Expression:
		expr = self._assignment()
		while self._match(Kind.COMMA):
			expr = syntax.Comma(expr, self._assignment())
		return expr

	def _assignment(self) -> Expression:
		expr = self._ternary()
		if self._match(Kind.EQUAL):
			equals = self._previous()
			value = self._assignment()
			if isinstance(expr, syntax.Variable):
				return syntax.Assign(expr.name, value)
			if isinstance(expr, syntax.Get):
				return syntax.Set(expr.object, expr.name, value)
			# Reported, but the parser is not confused about where it is.
			self._error(equals, "Invalid assignment target.")
		return expr

	def _ternary(self) -> Expression:
		condition = self._or()
		if self._match(Kind.QUESTION):
			then_branch = self._expression()
			self._consume(Kind.COLON, "Expect ':' after then branch of conditional expression.")
			else_branch = self._ternary()
			return syntax.Ternary(condition, then_branch, else_branch)
		return condition

	def _or(self) -> Expression:
		expr = self._and()
		while self._match(Kind.OR):
			operator = self._previous()
			expr = syntax.Logical(expr, operator, self._and())
		return expr

	def _and(self) -> Expression:
		expr = self._equality()
		while self._match(Kind.AND):
			operator = self._previous()
			expr = syntax.Logical(expr, operator, self._equality())
		return expr

	def _left_associative(self, operand, *kinds:Kind) -> Expression:
		expr = operand()
		while self._match(*kinds):
			operator = self._previous()
			expr = syntax.Binary(expr, operator, operand())
		return expr

	def _equality(self) -> Expression:
		return self._left_associative(self._comparison, Kind.BANG_EQUAL, Kind.EQUAL_EQUAL)

	def _comparison(self) -> Expression:
		return self._left_associative(self._term, Kind.GREATER, Kind.GREATER_EQUAL, Kind.LESS, Kind.LESS_EQUAL)

	def _term(self) -> Expression:
		return self._left_associative(self._factor, Kind.MINUS, Kind.PLUS)

	def _factor(self) -> Expression:
		return self._left_associative(self._unary, Kind.SLASH, Kind.STAR)

	def _unary(self) -> Expression:
		if self._match(Kind.BANG, Kind.MINUS):
			operator = self._previous()
			return syntax.Unary(operator, self._unary())
		return self._call()

	def _call(self) -> Expression:
		expr = self._primary()
		while True:
			if self._match(Kind.LEFT_PAREN):
				expr = self._finish_call(expr)
			elif self._match(Kind.DOT):
				name = self._consume(Kind.IDENTIFIER, "Expect property name after '.'.")
				expr = syntax.Get(expr, name)
			else:
				return expr

	def _finish_call(self, callee:Expression) -> syntax.Call:
		arguments = []
		if not self._check(Kind.RIGHT_PAREN):
			while True:
				if len(arguments) >= MAX_ARITY:
					self._error(self._peek(), "Can't have more than %d arguments." % MAX_ARITY)
				# Not _expression: within an argument list, commas separate.
				arguments.append(self._assignment())
				if not self._match(Kind.COMMA): break
		paren = self._consume(Kind.RIGHT_PAREN, "Expect ')' after arguments.")
		return syntax.Call(callee, arguments, paren)

	def _primary(self) -> Expression:
		if self._match(Kind.FALSE): return syntax.Literal(False)
		if self._match(Kind.TRUE): return syntax.Literal(True)
		if self._match(Kind.NIL): return syntax.Literal(None)
		if self._match(Kind.NUMBER, Kind.STRING): return syntax.Literal(self._previous().literal)
		if self._match(Kind.SUPER):
			keyword = self._previous()
			self._consume(Kind.DOT, "Expect '.' after 'super'.")
			method = self._consume(Kind.IDENTIFIER, "Expect superclass method name.")
			return syntax.Super(keyword, method)
		if self._match(Kind.THIS): return syntax.This(self._previous())
		if self._match(Kind.IDENTIFIER): return syntax.Variable(self._previous())
		if self._match(Kind.LEFT_PAREN):
			expr = self._expression()
			self._consume(Kind.RIGHT_PAREN, "Expect ')' after expression.")
			return syntax.Grouping(expr)
		raise self._error(self._peek(), "Expect expression.")

	# Error handling:

	def _error(self, token:Token, message:str) -> Panic:
		""" Report now; the caller decides whether to raise the panic. """
		self._report.syntax_error(token, message)
		return Panic(token, message)

	def _synchronize(self):
		self._advance()
		while not self._at_end():
			if self._previous().kind is Kind.SEMICOLON: return
			if self._peek().kind in STATEMENT_STARTERS: return
			self._advance()

	# Token-stream primitives:

	def _consume(self, kind:Kind, message:str) -> Token:
		if self._check(kind): return self._advance()
		raise self._error(self._peek(), message)

	def _match(self, *kinds:Kind) -> bool:
		if self._peek().kind in kinds:
			self._advance()
			return True
		return False

	def _check(self, kind:Kind) -> bool:
		return self._peek().kind is kind

	def _advance(self) -> Token:
		if not self._at_end(): self._current += 1
		return self._previous()

	def _at_end(self) -> bool:
		return self._peek().kind is Kind.EOF

	def _peek(self) -> Token:
		return self._tokens[self._current]

	def _previous(self) -> Token:
		return self._tokens[self._current - 1]
