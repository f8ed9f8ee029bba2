"""
Lexical analysis: one left-to-right pass from text to tokens.

The scanner never gives up. Characters it cannot make sense of get reported
and skipped, so that a single unit can surface all its lexical problems at once.
"""
from .ontology import Kind, Token, KEYWORDS
from .diagnostics import Report

_SINGLE = {
	'(': Kind.LEFT_PAREN, ')': Kind.RIGHT_PAREN,
	'{': Kind.LEFT_BRACE, '}': Kind.RIGHT_BRACE,
	',': Kind.COMMA, '.': Kind.DOT, ';': Kind.SEMICOLON,
	'-': Kind.MINUS, '+': Kind.PLUS, '*': Kind.STAR,
	'?': Kind.QUESTION, ':': Kind.COLON,
}

# A one-character operator, and what it becomes when followed by '='.
_MAYBE_EQUAL = {
	'!': (Kind.BANG, Kind.BANG_EQUAL),
	'=': (Kind.EQUAL, Kind.EQUAL_EQUAL),
	'<': (Kind.LESS, Kind.LESS_EQUAL),
	'>': (Kind.GREATER, Kind.GREATER_EQUAL),
}

_WHITESPACE = frozenset(" \r\t")

def _is_digit(c:str): return '0' <= c <= '9'
def _is_alpha(c:str): return 'a' <= c <= 'z' or 'A' <= c <= 'Z' or c == '_'
def _is_alphanumeric(c:str): return _is_alpha(c) or _is_digit(c)

class Scanner:
	tokens: list[Token]

	def __init__(self, source:str, report:Report):
		self._source = source
		self._report = report
		self._start = 0
		self._current = 0
		self._line = 1
		self.tokens = []

	def scan_tokens(self) -> list[Token]:
		while not self._at_end():
			self._start = self._current
			self._scan_token()
		self.tokens.append(Token(Kind.EOF, "", None, self._line, len(self._source)))
		return self.tokens

	def _scan_token(self):
		c = self._advance()
		if c in _SINGLE: self._add(_SINGLE[c])
		elif c in _MAYBE_EQUAL:
			plain, with_equal = _MAYBE_EQUAL[c]
			self._add(with_equal if self._match('=') else plain)
		elif c == '/':
			if self._match('/'): self._line_comment()
			elif self._match('*'): self._block_comment()
			else: self._add(Kind.SLASH)
		elif c in _WHITESPACE: pass
		elif c == '\n': self._line += 1
		elif c == '"': self._string()
		elif _is_digit(c): self._number()
		elif _is_alpha(c): self._identifier()
		else: self._report.unexpected_character(self._line, self._start, c)

	def _line_comment(self):
		while self._peek() != '\n' and not self._at_end():
			self._advance()

	def _block_comment(self):
		# Block comments do not nest: the first "*/" ends it.
		while not self._at_end():
			if self._peek() == '*' and self._peek_next() == '/':
				self._current += 2
				return
			if self._peek() == '\n': self._line += 1
			self._advance()

	def _string(self):
		while self._peek() != '"' and not self._at_end():
			if self._peek() == '\n': self._line += 1
			self._advance()
		if self._at_end():
			self._report.unterminated_string(self._line, self._start)
			return
		self._advance()  # The closing quote.
		self._add(Kind.STRING, self._source[self._start+1 : self._current-1])

	def _number(self):
		while _is_digit(self._peek()): self._advance()
		# A fractional part needs at least one digit after the dot.
		if self._peek() == '.' and _is_digit(self._peek_next()):
			self._advance()
			while _is_digit(self._peek()): self._advance()
		self._add(Kind.NUMBER, float(self._source[self._start:self._current]))

	def _identifier(self):
		while _is_alphanumeric(self._peek()): self._advance()
		text = self._source[self._start:self._current]
		self._add(KEYWORDS.get(text, Kind.IDENTIFIER))

	def _at_end(self):
		return self._current >= len(self._source)

	def _advance(self) -> str:
		c = self._source[self._current]
		self._current += 1
		return c

	def _match(self, expected:str) -> bool:
		if self._at_end() or self._source[self._current] != expected: return False
		self._current += 1
		return True

	def _peek(self) -> str:
		return '' if self._at_end() else self._source[self._current]

	def _peek_next(self) -> str:
		nxt = self._current + 1
		return '' if nxt >= len(self._source) else self._source[nxt]

	def _add(self, kind:Kind, literal=None):
		lexeme = self._source[self._start:self._current]
		self.tokens.append(Token(kind, lexeme, literal, self._line, self._start))

def scan(source:str, report:Report) -> list[Token]:
	""" Turn source text into tokens, ending with exactly one EOF token. """
	return Scanner(source, report).scan_tokens()
