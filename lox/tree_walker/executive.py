"""
I decided to factor out the run-time from the executive.
This is the overall control for the run-time: a session owns the globals and
the report, and each unit of source text runs against the same session.
"""
import time
from typing import Optional
from .. import syntax
from ..ontology import Expression
from ..diagnostics import Report, LoxRuntimeError
from ..environment import Environment
from ..front_end import parse_text
from .evaluator import evaluate, execute
from .values import NativeFunction, stringify
from . import runtime  # NOQA: fills in the dispatch tables.

class Session:
	"""
	One run of a script, or one whole REPL conversation.
	Global bindings survive from unit to unit; the report gets reset between them.
	"""
	report : Report
	globals : Environment

	def __init__(self, report:Optional[Report]=None, *, verbose:int=0):
		self.report = Report(verbose=verbose) if report is None else report
		self.globals = Environment()
		self.globals.define("clock", NativeFunction("clock", 0, time.time))

	def reset(self):
		""" Clear the error indicators, keeping whatever the globals hold. """
		self.report.reset()

def interpret(program:syntax.Program, session:Session) -> tuple[bool, bool]:
	"""
	Run top-level statements in order against the session's globals.
	Returns (completed, had_runtime_error). A runtime error stops the unit.
	"""
	try:
		for stmt in program:
			execute(stmt, session.globals)
	except LoxRuntimeError as ex:
		session.report.runtime_error(ex)
		return False, True
	return True, False

def interpret_expression(expr:Expression, session:Session) -> tuple[bool, bool]:
	""" Evaluate one expression and print its value, the way the REPL echoes. """
	try:
		value = evaluate(expr, session.globals)
	except LoxRuntimeError as ex:
		session.report.runtime_error(ex)
		return False, True
	print(stringify(value))
	return True, False

def run_source(text:str, session:Session) -> tuple[bool, bool]:
	"""
	The full pipeline for one unit. Nothing runs if scanning,
	parsing, or the static checks found anything wrong.
	"""
	program = parse_text(text, session.report)
	if program is None: return False, False
	session.report.info("Running.")
	return interpret(program, session)
