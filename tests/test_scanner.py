import unittest

from lox.ontology import Kind, Token
from lox.diagnostics import Report
from lox.front_end import scan

def _kinds(tokens):
	return [t.kind for t in tokens]

class ScannerTests(unittest.TestCase):

	def setUp(self) -> None:
		self.report = Report()

	def test_empty_source_is_just_eof(self):
		tokens = scan("", self.report)
		self.assertEqual([Token(Kind.EOF, "", None, 1)], tokens)
		self.report.assert_no_issues("Nothing to complain about.")

	def test_punctuation_and_operators(self):
		tokens = scan("(){},.-+; / * ?: ! != = == > >= < <=", self.report)
		self.assertEqual([
			Kind.LEFT_PAREN, Kind.RIGHT_PAREN, Kind.LEFT_BRACE, Kind.RIGHT_BRACE,
			Kind.COMMA, Kind.DOT, Kind.MINUS, Kind.PLUS, Kind.SEMICOLON, Kind.SLASH,
			Kind.STAR, Kind.QUESTION, Kind.COLON,
			Kind.BANG, Kind.BANG_EQUAL, Kind.EQUAL, Kind.EQUAL_EQUAL,
			Kind.GREATER, Kind.GREATER_EQUAL, Kind.LESS, Kind.LESS_EQUAL,
			Kind.EOF,
		], _kinds(tokens))
		self.report.assert_no_issues("Operators are fine.")

	def test_slash_star_only_opens_a_comment_when_adjacent(self):
		self.assertEqual([Kind.SLASH, Kind.STAR, Kind.EOF], _kinds(scan("/ *", self.report)))
		self.assertEqual([Kind.LEFT_PAREN, Kind.EOF], _kinds(scan("(/* * / */", self.report)))
		self.assertEqual([Kind.EOF], _kinds(scan("/*", self.report)))
		self.report.assert_no_issues("No complaints about comments.")

	def test_keywords_and_identifiers(self):
		tokens = scan("var classy = class; orchid or _x1", self.report)
		self.assertEqual([
			Kind.VAR, Kind.IDENTIFIER, Kind.EQUAL, Kind.CLASS, Kind.SEMICOLON,
			Kind.IDENTIFIER, Kind.OR, Kind.IDENTIFIER, Kind.EOF,
		], _kinds(tokens))
		self.assertEqual("classy", tokens[1].lexeme)
		self.assertIsNone(tokens[1].literal)

	def test_numbers(self):
		tokens = scan("123 45.67 8.", self.report)
		self.assertEqual(Token(Kind.NUMBER, "123", 123.0, 1), tokens[0])
		self.assertEqual(Token(Kind.NUMBER, "45.67", 45.67, 1), tokens[1])
		# A trailing dot is not part of the number.
		self.assertEqual([Kind.NUMBER, Kind.DOT, Kind.EOF], _kinds(tokens[2:]))
		self.assertIsInstance(tokens[0].literal, float)

	def test_string_literal_excludes_quotes(self):
		tokens = scan('"hello, world"', self.report)
		self.assertEqual(Token(Kind.STRING, '"hello, world"', "hello, world", 1), tokens[0])

	def test_multi_line_string_takes_the_closing_line(self):
		tokens = scan('"one\ntwo"\nx', self.report)
		self.assertEqual("one\ntwo", tokens[0].literal)
		self.assertEqual(2, tokens[0].line)
		self.assertEqual(3, tokens[1].line)

	def test_comments(self):
		tokens = scan("a // the rest is ignored ( \"\nb /* block\n comment */ c", self.report)
		self.assertEqual(["a", "b", "c", ""], [t.lexeme for t in tokens])
		self.assertEqual([1, 2, 3, 3], [t.line for t in tokens])
		self.report.assert_no_issues("Comments are fine.")

	def test_unterminated_block_comment_runs_to_end(self):
		tokens = scan("a /* never closed\n b", self.report)
		self.assertEqual([Kind.IDENTIFIER, Kind.EOF], _kinds(tokens))
		self.assertTrue(self.report.ok())

	def test_unexpected_character_is_reported_and_skipped(self):
		tokens = scan("a @ b", self.report)
		self.assertEqual(["a", "b", ""], [t.lexeme for t in tokens])
		self.assertEqual(1, len(self.report.issues))
		self.assertEqual("[line 1] Error at '@': Unexpected character.", self.report.issues[0].as_text())
		self.assertTrue(self.report.had_error)
		self.assertFalse(self.report.had_runtime_error)

	def test_unterminated_string(self):
		tokens = scan('print "oops\n', self.report)
		self.assertEqual([Kind.PRINT, Kind.EOF], _kinds(tokens))
		self.assertEqual("[line 2] Error at end: Unterminated string.", self.report.issues[0].as_text())

	def test_lexemes_appear_in_source_order(self):
		source = 'class Point {\n  init(x) { this.x = x * 2.5; }\n}\nprint "done"; // bye\n'
		tokens = scan(source, self.report)
		position, line = 0, 1
		for token in tokens[:-1]:
			found = source.index(token.lexeme, position)
			self.assertEqual(found, token.spot)
			position = found + len(token.lexeme)
			self.assertGreaterEqual(token.line, line)
			line = token.line
		self.assertIs(Kind.EOF, tokens[-1].kind)

	def test_scanning_is_repeatable(self):
		source = 'var x = "a" + 1.5; // note'
		self.assertEqual(scan(source, Report()), scan(source, Report()))

if __name__ == '__main__':
	unittest.main()
