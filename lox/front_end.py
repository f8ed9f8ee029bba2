"""
Text in, syntax out: the scanner, the parser, and the static checks in one place.
Each entry point takes the report that should hear about any trouble.
"""
from typing import Optional
from .ontology import Token, Expression
from .diagnostics import Report
from .scanner import scan
from .parser import Parser
from .resolution import check_program
from . import syntax

__all__ = ["scan", "parse", "parse_expression", "parse_text", "parse_expression_text"]

def parse(tokens:list[Token], report:Report) -> tuple[syntax.Program, bool]:
	"""
	Returns the program and whether the unit has any compile-time error so far,
	counting the scanner's. A program that comes with an error must not be run.
	"""
	program = Parser(tokens, report).parse()
	return program, report.had_error

def parse_expression(tokens:list[Token], report:Report) -> Optional[Expression]:
	return Parser(tokens, report).parse_expression()

def parse_text(text:str, report:Report) -> Optional[syntax.Program]:
	""" Submit text to scanner and parser; submit the resulting tree to the static checks. """
	report.read(text)
	tokens = scan(text, report)
	report.info("Scanned %d tokens." % len(tokens))
	program, _ = parse(tokens, report)
	if report.had_error: return None
	check_program(program, report)
	if report.had_error: return None
	report.info("Parsed %d top-level statements." % len(program))
	return program

def parse_expression_text(text:str, report:Report) -> Optional[Expression]:
	report.read(text)
	tokens = scan(text, report)
	expr = parse_expression(tokens, report)
	if report.had_error: return None
	check_program([syntax.ExpressionStmt(expr)], report)
	if report.had_error: return None
	return expr
