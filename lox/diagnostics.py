"""
Everything that can go wrong gets written down here, and only here.

The scanner, the parser, the static checks, and the run-time each get a
handle on the same Report. Nobody prints complaints directly, and nobody
sets process-wide flags: the driver decides what to do with a sick report.
"""
import sys, random
from typing import Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Token

# The phases that can reject a unit before it runs.
COMPILE_PHASES = frozenset(("scan", "parse", "check"))

class LoxRuntimeError(Exception):
	""" Raised within the evaluator; caught once per unit by the executive. """
	def __init__(self, token:Token, message:str):
		super().__init__(token, message)
		self.token = token
		self.message = message

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott", 'Heavens',
		"Mercy", 'Nuts', 'Rats',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

def _evidence(token:Token) -> Optional[slice]:
	if token.spot is None: return None
	return slice(token.spot, token.spot + len(token.lexeme))

class Issue:
	""" One reported problem: where it happened, and what went wrong. """
	def __init__(self, phase:str, line:int, where:str, message:str, evidence:Optional[slice]=None):
		self.phase = phase
		self.line = line
		self.where = where
		self.message = message
		self.evidence = evidence
		self.source : Optional[SourceText] = None

	def is_compile_time(self): return self.phase in COMPILE_PHASES

	def as_text(self):
		return "[line %d] Error%s: %s" % (self.line, self.where, self.message)

	def illustrate(self) -> Optional[str]:
		""" A picture of the offending spot, if we know where it is. """
		if self.source is None or self.evidence is None: return None
		row, col = self.source.find_row_col(self.evidence.start)
		single_line = self.source.line_of_text(row)
		width = self.evidence.stop - self.evidence.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.message)

	def __repr__(self): return "<Issue %s: %s>" % (self.phase, self.as_text())

class Report:
	""" Collects the issues for one unit of source text; doubles as the error indicators. """
	issues : list[Issue]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self.issues = []
		self._source = None

	def ok(self): return not self.issues
	def sick(self): return bool(self.issues)

	@property
	def had_error(self) -> bool:
		""" True if anything should stop the unit from running. """
		return any(i.is_compile_time() for i in self.issues)

	@property
	def had_runtime_error(self) -> bool:
		return any(not i.is_compile_time() for i in self.issues)

	def reset(self):
		self.issues.clear()

	def read(self, text:str, filename:str=None):
		""" Remember the text of the current unit so verbose complaints can show it. """
		self._source = SourceText(text, filename=filename)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def issue(self, it:Issue):
		it.source = self._source
		self.issues.append(it)

	# Methods the scanner calls:
	def unexpected_character(self, line:int, spot:int, char:str):
		self.issue(Issue("scan", line, " at '%s'"%char, "Unexpected character.", slice(spot, spot+1)))

	def unterminated_string(self, line:int, spot:int):
		self.issue(Issue("scan", line, " at end", "Unterminated string.", slice(spot, spot+1)))

	# Methods the parser and the static checks call:
	def syntax_error(self, token:Token, message:str, phase="parse"):
		self.issue(Issue(phase, token.line, token.where(), message, _evidence(token)))

	def static_error(self, token:Token, message:str):
		self.syntax_error(token, message, phase="check")

	# Method the executive calls:
	def runtime_error(self, ex:LoxRuntimeError):
		token = ex.token
		self.issue(Issue("run", token.line, "", ex.message, _evidence(token)))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for i in self.issues:
			print(i.as_text(), file=sys.stderr)
			if self._verbose:
				picture = i.illustrate()
				if picture: print(picture, file=sys.stderr)
		sys.stderr.flush()

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self.issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)
