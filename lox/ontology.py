"""
These most-fundamental classes are separate from the rest to avoid various
circular-import scenarios: the token model that the scanner produces and
the parser consumes, plus the abstract roots of the syntax-class hierarchy.
The concrete AST types live in `syntax`, but the diagnostics and the
run-time both need to talk about tokens without importing the whole tree.
"""
from enum import Enum
from typing import Optional, Union

class Kind(Enum):
	# Single-character tokens.
	LEFT_PAREN = "("
	RIGHT_PAREN = ")"
	LEFT_BRACE = "{"
	RIGHT_BRACE = "}"
	COMMA = ","
	DOT = "."
	MINUS = "-"
	PLUS = "+"
	SEMICOLON = ";"
	SLASH = "/"
	STAR = "*"
	QUESTION = "?"
	COLON = ":"

	# One or two character tokens.
	BANG = "!"
	BANG_EQUAL = "!="
	EQUAL = "="
	EQUAL_EQUAL = "=="
	GREATER = ">"
	GREATER_EQUAL = ">="
	LESS = "<"
	LESS_EQUAL = "<="

	# Literals.
	IDENTIFIER = "identifier"
	STRING = "string"
	NUMBER = "number"

	# Keywords.
	AND = "and"
	CLASS = "class"
	ELSE = "else"
	FALSE = "false"
	FOR = "for"
	FUN = "fun"
	IF = "if"
	NIL = "nil"
	OR = "or"
	PRINT = "print"
	RETURN = "return"
	SUPER = "super"
	THIS = "this"
	TRUE = "true"
	VAR = "var"
	WHILE = "while"

	EOF = "<END>"

KEYWORDS = {
	k.value: k for k in (
		Kind.AND, Kind.CLASS, Kind.ELSE, Kind.FALSE, Kind.FOR, Kind.FUN,
		Kind.IF, Kind.NIL, Kind.OR, Kind.PRINT, Kind.RETURN, Kind.SUPER,
		Kind.THIS, Kind.TRUE, Kind.VAR, Kind.WHILE,
	)
}

# Tokens that begin a declaration or statement.
# Panic-mode recovery in the parser resumes at any of these.
STATEMENT_STARTERS = frozenset((
	Kind.CLASS, Kind.FUN, Kind.VAR, Kind.FOR,
	Kind.IF, Kind.WHILE, Kind.PRINT, Kind.RETURN,
))

LITERAL = Optional[Union[float, str]]

class Token:
	"""
	One lexeme, as the scanner saw it. Equality is structural over
	kind, lexeme, literal and line. The spot (character offset of the
	lexeme in its source text) only serves to illustrate errors,
	so hand-made tokens may leave it out.
	"""
	__slots__ = ("kind", "lexeme", "literal", "line", "spot")
	kind: Kind
	lexeme: str
	literal: LITERAL
	line: int
	spot: Optional[int]

	def __init__(self, kind:Kind, lexeme:str, literal:LITERAL, line:int, spot:Optional[int]=None):
		assert isinstance(kind, Kind), kind
		self.kind, self.lexeme, self.literal, self.line, self.spot = kind, lexeme, literal, line, spot

	def _key(self): return self.kind, self.lexeme, self.literal, self.line
	def __eq__(self, other): return isinstance(other, Token) and self._key() == other._key()
	def __hash__(self): return hash(self._key())
	def __repr__(self): return "<%s %r line %d>" % (self.kind.name, self.lexeme, self.line)

	def where(self) -> str:
		""" The location hint that error messages use for this token. """
		if self.kind is Kind.EOF: return " at end"
		return " at '%s'" % self.lexeme

class Phrase:
	"""
	Root of the syntax-class hierarchy. Syntax nodes are built once and
	only read afterwards. Two nodes are equal when they are the same kind
	of node with equal parts, so parsing the same text twice gives equal trees.
	"""
	def __eq__(self, other):
		return type(self) is type(other) and vars(self) == vars(other)

	__hash__ = None

	def __repr__(self):
		parts = ", ".join("%s=%r" % kv for kv in vars(self).items())
		return "%s(%s)" % (type(self).__name__, parts)

class Expression(Phrase): pass

class Statement(Phrase): pass
