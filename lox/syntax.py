"""
The set of parse-nodes in simple form.
The parser calls these constructors with the tokens and sub-trees it has recognized.
Nothing downstream of the parser changes a node once built:
the evaluator re-reads the same nodes every time a loop
goes around or a closure gets called.
"""
from typing import Optional, Sequence, Any
from .ontology import Token, Phrase, Expression, Statement

###############################################################################
#  Expressions

class Literal(Expression):
	value: Any  # float, str, bool, or None
	def __init__(self, value: Any): self.value = value

class Grouping(Expression):
	def __init__(self, expression: Expression): self.expression = expression

class Unary(Expression):
	def __init__(self, operator: Token, right: Expression):
		self.operator, self.right = operator, right

class Binary(Expression):
	def __init__(self, left: Expression, operator: Token, right: Expression):
		self.left, self.operator, self.right = left, operator, right

class Logical(Expression):
	""" Short-circuit `and` / `or`. """
	def __init__(self, left: Expression, operator: Token, right: Expression):
		self.left, self.operator, self.right = left, operator, right

class Ternary(Expression):
	def __init__(self, condition: Expression, then_branch: Expression, else_branch: Expression):
		self.condition, self.then_branch, self.else_branch = condition, then_branch, else_branch

class Comma(Expression):
	""" Evaluate left for effect, then produce right. """
	def __init__(self, left: Expression, right: Expression):
		self.left, self.right = left, right

class Variable(Expression):
	def __init__(self, name: Token): self.name = name

class Assign(Expression):
	def __init__(self, name: Token, value: Expression):
		self.name, self.value = name, value

class Call(Expression):
	def __init__(self, callee: Expression, arguments: Sequence[Expression], paren: Token):
		# The closing parenthesis is where call-site errors get reported.
		self.callee, self.arguments, self.paren = callee, tuple(arguments), paren

class Get(Expression):
	def __init__(self, object: Expression, name: Token):
		self.object, self.name = object, name

class Set(Expression):
	def __init__(self, object: Expression, name: Token, value: Expression):
		self.object, self.name, self.value = object, name, value

class This(Expression):
	def __init__(self, keyword: Token): self.keyword = keyword

class Super(Expression):
	def __init__(self, keyword: Token, method: Token):
		self.keyword, self.method = keyword, method

###############################################################################
#  Statements

class ExpressionStmt(Statement):
	def __init__(self, expression: Expression): self.expression = expression

class PrintStmt(Statement):
	def __init__(self, expression: Expression): self.expression = expression

class VarDecl(Statement):
	def __init__(self, name: Token, initializer: Optional[Expression]):
		self.name, self.initializer = name, initializer

class Block(Statement):
	def __init__(self, statements: Sequence[Statement]):
		self.statements = tuple(statements)

class If(Statement):
	def __init__(self, condition: Expression, then_branch: Statement, else_branch: Optional[Statement]):
		self.condition, self.then_branch, self.else_branch = condition, then_branch, else_branch

class While(Statement):
	def __init__(self, condition: Expression, body: Statement):
		self.condition, self.body = condition, body

class FunctionDecl(Statement):
	params: tuple[Token, ...]
	body: tuple[Statement, ...]
	def __init__(self, name: Token, params: Sequence[Token], body: Sequence[Statement]):
		self.name, self.params, self.body = name, tuple(params), tuple(body)
	def is_initializer(self) -> bool:
		return self.name.lexeme == "init"

class ReturnStmt(Statement):
	def __init__(self, keyword: Token, value: Optional[Expression]):
		self.keyword, self.value = keyword, value

class ClassDecl(Statement):
	superclass: Optional[Variable]
	methods: tuple[FunctionDecl, ...]
	def __init__(self, name: Token, superclass: Optional[Variable], methods: Sequence[FunctionDecl]):
		self.name, self.superclass, self.methods = name, superclass, tuple(methods)

###############################################################################

Program = list[Statement]

def truth() -> Literal: return Literal(True)

def desugar_for(initializer: Optional[Statement], condition: Optional[Expression], increment: Optional[Expression], body: Statement) -> Statement:
	"""
	A for-loop is a while-loop in a block:
	the initializer runs once, and the increment follows the body.
	"""
	if increment is not None:
		body = Block([body, ExpressionStmt(increment)])
	loop = While(truth() if condition is None else condition, body)
	if initializer is None: return loop
	return Block([initializer, loop])

def depth(root: Phrase) -> int:
	""" How many levels of nodes the tree has. Walks with a work-list, so any depth is fine. """
	deepest, work = 0, [(root, 1)]
	while work:
		node, level = work.pop()
		deepest = max(deepest, level)
		for part in vars(node).values():
			for child in (part if isinstance(part, tuple) else (part,)):
				if isinstance(child, Phrase): work.append((child, level + 1))
	return deepest

# The evaluator checks its dispatch tables against these for exhaustiveness.
EXPRESSION_TYPES = tuple(Expression.__subclasses__())
STATEMENT_TYPES = tuple(Statement.__subclasses__())
