"""
This is an interpreter for the Lox programming language.

For example:

    lox program.lox

will run program.lox if possible, or else try to explain why not.

    lox

with no script starts an interactive prompt. Each line you type is one unit:
a lone expression gets its value printed, and anything else runs as statements.

    lox -h

will explain all the arguments.
"""
import sys, argparse

# Exit codes, after the BSD sysexits convention.
EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70

# Lox recursion rides on Python recursion; give it some room.
RECURSION_LIMIT = 10_000

class _Arguments(argparse.ArgumentParser):
	def error(self, message):
		self.print_usage(sys.stderr)
		print("%s: error: %s" % (self.prog, message), file=sys.stderr)
		sys.exit(EX_USAGE)

parser = _Arguments(
	prog="lox",
	description="Interpreter for the Lox programming language.",
)
parser.add_argument("script", nargs="?", help="try examples/closures.lox for example.")
parser.add_argument('-v', "--verbose", action="count", default=0, help="Say more about what is going on, and illustrate each error.")
parser.add_argument('-a', "--ast", action="store_true", help="Print each unit's expression tree instead of evaluating it.")

def show_ast(text:str, report) -> bool:
	from .front_end import parse_expression_text
	from .pretty import render
	expr = parse_expression_text(text, report)
	if expr is None: return False
	print(render(expr))
	return True

def run_file(path:str, args) -> int:
	from .tree_walker.executive import Session, run_source
	with open(path, encoding="utf-8") as fh:
		text = fh.read()
	session = Session(verbose=args.verbose)
	report = session.report
	report.info("Read %d characters from %s" % (len(text), path))
	if args.ast: show_ast(text, report)
	else: run_source(text, session)
	if report.sick():
		report.complain_to_console()
	if report.had_error: return EX_DATAERR
	if report.had_runtime_error: return EX_SOFTWARE
	return 0

def run_line(text:str, session):
	"""
	A lone expression gets its value echoed. Anything else runs as a program.
	Errors are reported through the session and never end the conversation.
	"""
	from .diagnostics import Report
	from .front_end import parse_expression_text
	from .tree_walker.executive import interpret_expression, run_source
	trial = Report()
	expr = parse_expression_text(text, trial)
	if trial.ok():
		session.report.read(text)
		interpret_expression(expr, session)
	elif all(i.phase == "check" for i in trial.issues):
		# It is an expression, just not a meaningful one.
		session.report.read(text)
		for i in trial.issues: session.report.issue(i)
	else:
		run_source(text, session)

def run_prompt(args):
	from .tree_walker.executive import Session
	session = Session(verbose=args.verbose)
	while True:
		try: line = input("> ")
		except EOFError:
			print()
			break
		session.reset()
		if args.ast: show_ast(line, session.report)
		else: run_line(line, session)
		if session.report.sick():
			session.report.complain_to_console()

def run(args) -> int:
	sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))
	if args.script is None:
		run_prompt(args)
		return 0
	return run_file(args.script, args)

def main():
	sys.exit(run(parser.parse_args()))
