import math
import operator
from .. import syntax
from ..ontology import Kind, Token
from ..diagnostics import LoxRuntimeError
from .types import ENV, VALUE, Returning
from .evaluator import evaluate, execute, execute_block, attach_evaluation_methods
from .values import Callable, LoxFunction, LoxClass, LoxInstance, is_truthy, is_equal, stringify

def _divide(a:float, b:float) -> float:
	# IEEE-754 division: never an error.
	if b: return a / b
	if a == 0 or math.isnan(a): return math.nan
	return math.copysign(math.inf, a) * math.copysign(1.0, b)

ARITHMETIC = {
	Kind.MINUS: operator.sub,
	Kind.STAR: operator.mul,
	Kind.SLASH: _divide,
	Kind.GREATER: operator.gt,
	Kind.GREATER_EQUAL: operator.ge,
	Kind.LESS: operator.lt,
	Kind.LESS_EQUAL: operator.le,
}

def _is_number(x) -> bool:
	# bool is a subclass of int, but never of float.
	return isinstance(x, float)

def _plus(operator_token:Token, a:VALUE, b:VALUE) -> VALUE:
	if _is_number(a) and _is_number(b): return a + b
	if isinstance(a, str) and isinstance(b, str): return a + b
	raise LoxRuntimeError(operator_token, "Operands of '+' must be two numbers or two strings.")

###############################################################################

def _eval_literal(expr:syntax.Literal, env:ENV):
	return expr.value

def _eval_grouping(expr:syntax.Grouping, env:ENV):
	return evaluate(expr.expression, env)

def _eval_unary(expr:syntax.Unary, env:ENV):
	right = evaluate(expr.right, env)
	if expr.operator.kind is Kind.BANG:
		return not is_truthy(right)
	if not _is_number(right):
		raise LoxRuntimeError(expr.operator, "Operand of '-' must be a number.")
	return -right

def _eval_binary(expr:syntax.Binary, env:ENV):
	left = evaluate(expr.left, env)
	right = evaluate(expr.right, env)
	kind = expr.operator.kind
	if kind is Kind.EQUAL_EQUAL: return is_equal(left, right)
	if kind is Kind.BANG_EQUAL: return not is_equal(left, right)
	if kind is Kind.PLUS: return _plus(expr.operator, left, right)
	if not (_is_number(left) and _is_number(right)):
		raise LoxRuntimeError(expr.operator, "Operands of '%s' must be numbers." % expr.operator.lexeme)
	return ARITHMETIC[kind](left, right)

def _eval_logical(expr:syntax.Logical, env:ENV):
	left = evaluate(expr.left, env)
	if expr.operator.kind is Kind.OR:
		if is_truthy(left): return left
	elif not is_truthy(left): return left
	return evaluate(expr.right, env)

def _eval_ternary(expr:syntax.Ternary, env:ENV):
	if is_truthy(evaluate(expr.condition, env)):
		return evaluate(expr.then_branch, env)
	return evaluate(expr.else_branch, env)

def _eval_comma(expr:syntax.Comma, env:ENV):
	evaluate(expr.left, env)
	return evaluate(expr.right, env)

def _eval_variable(expr:syntax.Variable, env:ENV):
	return env.get(expr.name)

def _eval_assign(expr:syntax.Assign, env:ENV):
	value = evaluate(expr.value, env)
	env.assign(expr.name, value)
	return value

def _eval_call(expr:syntax.Call, env:ENV):
	callee = evaluate(expr.callee, env)
	args = [evaluate(a, env) for a in expr.arguments]
	if not isinstance(callee, Callable):
		raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
	if len(args) != callee.arity():
		raise LoxRuntimeError(expr.paren, "Expected %d arguments but got %d." % (callee.arity(), len(args)))
	try: return callee.call(args)
	except RecursionError:
		raise LoxRuntimeError(expr.paren, "Stack overflow.") from None

def _bound_property(instance:LoxInstance, name:Token):
	if name.lexeme in instance.fields:
		return instance.fields[name.lexeme]
	method = instance.klass.find_method(name.lexeme)
	if method is None:
		raise LoxRuntimeError(name, "Undefined property '%s'." % name.lexeme)
	return method.bind(instance)

def _eval_get(expr:syntax.Get, env:ENV):
	subject = evaluate(expr.object, env)
	if not isinstance(subject, LoxInstance):
		raise LoxRuntimeError(expr.name, "Only instances have properties.")
	return _bound_property(subject, expr.name)

def _eval_set(expr:syntax.Set, env:ENV):
	subject = evaluate(expr.object, env)
	if not isinstance(subject, LoxInstance):
		raise LoxRuntimeError(expr.name, "Only instances have fields.")
	value = evaluate(expr.value, env)
	subject.fields[expr.name.lexeme] = value
	return value

def _eval_this(expr:syntax.This, env:ENV):
	return env.fetch("this")

def _eval_super(expr:syntax.Super, env:ENV):
	superclass = env.fetch("super")
	instance = env.fetch("this")
	method = superclass.find_method(expr.method.lexeme)
	if method is None:
		raise LoxRuntimeError(expr.method, "Undefined property '%s'." % expr.method.lexeme)
	return method.bind(instance)

###############################################################################

def _exec_expression_stmt(stmt:syntax.ExpressionStmt, env:ENV):
	evaluate(stmt.expression, env)

def _exec_print_stmt(stmt:syntax.PrintStmt, env:ENV):
	print(stringify(evaluate(stmt.expression, env)))

def _exec_var_decl(stmt:syntax.VarDecl, env:ENV):
	value = None if stmt.initializer is None else evaluate(stmt.initializer, env)
	env.define(stmt.name.lexeme, value)

def _exec_block(stmt:syntax.Block, env:ENV):
	return execute_block(stmt.statements, env.child())

def _exec_if(stmt:syntax.If, env:ENV):
	if is_truthy(evaluate(stmt.condition, env)):
		return execute(stmt.then_branch, env)
	elif stmt.else_branch is not None:
		return execute(stmt.else_branch, env)

def _exec_while(stmt:syntax.While, env:ENV):
	while is_truthy(evaluate(stmt.condition, env)):
		signal = execute(stmt.body, env)
		if signal is not None: return signal

def _exec_function_decl(stmt:syntax.FunctionDecl, env:ENV):
	env.define(stmt.name.lexeme, LoxFunction(stmt, env))

def _exec_return_stmt(stmt:syntax.ReturnStmt, env:ENV):
	value = None if stmt.value is None else evaluate(stmt.value, env)
	return Returning(value)

def _exec_class_decl(stmt:syntax.ClassDecl, env:ENV):
	superclass = None
	if stmt.superclass is not None:
		superclass = evaluate(stmt.superclass, env)
		if not isinstance(superclass, LoxClass):
			raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")
	# The name is bound first, so methods may refer to their own class.
	env.define(stmt.name.lexeme, None)
	scope = env
	if superclass is not None:
		scope = env.child()
		scope.define("super", superclass)
	methods = {
		m.name.lexeme: LoxFunction(m, scope, m.is_initializer())
		for m in stmt.methods
	}
	klass = LoxClass(stmt.name.lexeme, superclass, methods)
	env.assign(stmt.name, klass)

attach_evaluation_methods(globals())
