"""
Static checks: things we can reject before running anything.

This pass does not bind names. Lookup stays dynamic at run-time.
It only walks the tree with enough context to notice a `return` with
nowhere to return to, or a `this` with no instance to refer to.
"""
from typing import NamedTuple
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report

# What sort of function body we are in, if any.
NO_FUNCTION, FUNCTION, METHOD, INITIALIZER = "none", "function", "method", "initializer"
# What sort of class body we are in, if any.
NO_CLASS, CLASS, SUBCLASS = "none", "class", "subclass"

class Where(NamedTuple):
	function: str
	klass: str

TOP_LEVEL = Where(NO_FUNCTION, NO_CLASS)

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""

	def visit_Literal(self, expr: syntax.Literal, where): pass
	def visit_Variable(self, expr: syntax.Variable, where): pass

	def visit_Grouping(self, expr: syntax.Grouping, where):
		self.visit(expr.expression, where)

	def visit_Unary(self, expr: syntax.Unary, where):
		self.visit(expr.right, where)

	def visit_Binary(self, expr: syntax.Binary, where):
		self.visit(expr.left, where)
		self.visit(expr.right, where)

	def visit_Logical(self, expr: syntax.Logical, where):
		self.visit(expr.left, where)
		self.visit(expr.right, where)

	def visit_Comma(self, expr: syntax.Comma, where):
		self.visit(expr.left, where)
		self.visit(expr.right, where)

	def visit_Ternary(self, expr: syntax.Ternary, where):
		self.visit(expr.condition, where)
		self.visit(expr.then_branch, where)
		self.visit(expr.else_branch, where)

	def visit_Assign(self, expr: syntax.Assign, where):
		self.visit(expr.value, where)

	def visit_Call(self, expr: syntax.Call, where):
		self.visit(expr.callee, where)
		for arg in expr.arguments: self.visit(arg, where)

	def visit_Get(self, expr: syntax.Get, where):
		self.visit(expr.object, where)

	def visit_Set(self, expr: syntax.Set, where):
		self.visit(expr.object, where)
		self.visit(expr.value, where)

	def visit_This(self, expr: syntax.This, where): pass
	def visit_Super(self, expr: syntax.Super, where): pass

	def visit_ExpressionStmt(self, stmt: syntax.ExpressionStmt, where):
		self.visit(stmt.expression, where)

	def visit_PrintStmt(self, stmt: syntax.PrintStmt, where):
		self.visit(stmt.expression, where)

	def visit_VarDecl(self, stmt: syntax.VarDecl, where):
		if stmt.initializer is not None: self.visit(stmt.initializer, where)

	def visit_Block(self, stmt: syntax.Block, where):
		for s in stmt.statements: self.visit(s, where)

	def visit_If(self, stmt: syntax.If, where):
		self.visit(stmt.condition, where)
		self.visit(stmt.then_branch, where)
		if stmt.else_branch is not None: self.visit(stmt.else_branch, where)

	def visit_While(self, stmt: syntax.While, where):
		self.visit(stmt.condition, where)
		self.visit(stmt.body, where)

	def visit_FunctionDecl(self, stmt: syntax.FunctionDecl, where):
		for s in stmt.body: self.visit(s, where)

	def visit_ReturnStmt(self, stmt: syntax.ReturnStmt, where):
		if stmt.value is not None: self.visit(stmt.value, where)

	def visit_ClassDecl(self, stmt: syntax.ClassDecl, where):
		for method in stmt.methods: self.visit(method, where)

class StaticCheck(TopDown):
	def __init__(self, report:Report):
		self._report = report

	def visit_FunctionDecl(self, stmt: syntax.FunctionDecl, where:Where):
		super().visit_FunctionDecl(stmt, where._replace(function=FUNCTION))

	def visit_ReturnStmt(self, stmt: syntax.ReturnStmt, where:Where):
		if where.function == NO_FUNCTION:
			self._report.static_error(stmt.keyword, "Can't return from top-level code.")
		elif stmt.value is not None and where.function == INITIALIZER:
			self._report.static_error(stmt.keyword, "Can't return a value from an initializer.")
		super().visit_ReturnStmt(stmt, where)

	def visit_ClassDecl(self, stmt: syntax.ClassDecl, where:Where):
		klass = CLASS
		if stmt.superclass is not None:
			klass = SUBCLASS
			if stmt.superclass.name.lexeme == stmt.name.lexeme:
				self._report.static_error(stmt.superclass.name, "A class can't inherit from itself.")
		for method in stmt.methods:
			kind = INITIALIZER if method.is_initializer() else METHOD
			for s in method.body: self.visit(s, Where(kind, klass))

	def visit_This(self, expr: syntax.This, where:Where):
		if where.klass == NO_CLASS:
			self._report.static_error(expr.keyword, "Can't use 'this' outside of a class.")

	def visit_Super(self, expr: syntax.Super, where:Where):
		if where.klass == NO_CLASS:
			self._report.static_error(expr.keyword, "Can't use 'super' outside of a class.")
		elif where.klass == CLASS:
			self._report.static_error(expr.keyword, "Can't use 'super' in a class with no superclass.")

def check_program(program:syntax.Program, report:Report):
	checker = StaticCheck(report)
	for stmt in program: checker.visit(stmt, TOP_LEVEL)
