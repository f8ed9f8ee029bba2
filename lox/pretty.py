"""
Debug-only rendering of expression trees as S-expressions.

	(* (- 123) (group 45.67))

The evaluator never calls this. It exists for the `--ast` switch and for tests
that want to say something about the shape of a parse.
"""
from boozetools.support.foundation import Visitor
from .ontology import Expression
from . import syntax

def _leaf(value) -> str:
	if value is None: return "nil"
	if value is True: return "true"
	if value is False: return "false"
	return str(value)

class SExpression(Visitor):

	def _wrap(self, head:str, *parts:Expression) -> str:
		return "(%s)" % " ".join([head] + [self.visit(p) for p in parts])

	def visit_Literal(self, expr: syntax.Literal): return _leaf(expr.value)
	def visit_Grouping(self, expr: syntax.Grouping): return self._wrap("group", expr.expression)
	def visit_Unary(self, expr: syntax.Unary): return self._wrap(expr.operator.lexeme, expr.right)
	def visit_Binary(self, expr: syntax.Binary): return self._wrap(expr.operator.lexeme, expr.left, expr.right)
	def visit_Logical(self, expr: syntax.Logical): return self._wrap(expr.operator.lexeme, expr.left, expr.right)
	def visit_Comma(self, expr: syntax.Comma): return self._wrap(",", expr.left, expr.right)
	def visit_Ternary(self, expr: syntax.Ternary):
		return self._wrap("?:", expr.condition, expr.then_branch, expr.else_branch)
	def visit_Variable(self, expr: syntax.Variable): return expr.name.lexeme
	def visit_Assign(self, expr: syntax.Assign): return self._wrap("= " + expr.name.lexeme, expr.value)
	def visit_Call(self, expr: syntax.Call): return self._wrap("call", expr.callee, *expr.arguments)
	def visit_Get(self, expr: syntax.Get):
		return "(. %s %s)" % (self.visit(expr.object), expr.name.lexeme)
	def visit_Set(self, expr: syntax.Set):
		return "(.= %s %s %s)" % (self.visit(expr.object), expr.name.lexeme, self.visit(expr.value))
	def visit_This(self, expr: syntax.This): return "this"
	def visit_Super(self, expr: syntax.Super): return "(super %s)" % expr.method.lexeme

_printer = SExpression()

def render(expr: Expression) -> str:
	return _printer.visit(expr)
