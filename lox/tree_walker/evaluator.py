"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.

Every kind of node gets exactly one handler function. The handlers live in
the `runtime` module and announce which node type they handle by the type
annotation on their first parameter. Nodes know nothing of evaluation.
"""

from typing import Optional, Sequence
from .. import syntax
from ..ontology import Expression, Statement
from .types import VALUE, ENV, Returning

EVALUATE = {}
EXECUTE = {}

def evaluate(expr:Expression, env:ENV) -> VALUE:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, env)

def execute(stmt:Statement, env:ENV) -> Optional[Returning]:
	""" Returns None if the statement completes normally. """
	try: fn = EXECUTE[type(stmt)]
	except KeyError: raise NotImplementedError(type(stmt), stmt)
	return fn(stmt, env)

def execute_block(statements:Sequence[Statement], env:ENV) -> Optional[Returning]:
	""" Run statements in order in the given frame, stopping early for a `return`. """
	for stmt in statements:
		signal = execute(stmt, env)
		if signal is not None: return signal
	return None

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v
		elif _k.startswith("_exec_"):
			_t = _v.__annotations__["stmt"]
			assert isinstance(_t, type), (_k, _t)
			EXECUTE[_t] = _v
	_assert_exhaustive(EVALUATE, syntax.EXPRESSION_TYPES)
	_assert_exhaustive(EXECUTE, syntax.STATEMENT_TYPES)

def _assert_exhaustive(table, node_types):
	missing = [t.__name__ for t in node_types if t not in table]
	assert not missing, "No handler for: " + ", ".join(missing)
