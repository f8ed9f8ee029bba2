import unittest

from lox.ontology import Kind, Token
from lox.diagnostics import Report
from lox.front_end import scan, parse, parse_expression, parse_text, parse_expression_text
from lox.pretty import render
from lox import syntax

def _shape(text):
	report = Report()
	expr = parse_expression_text(text, report)
	report.assert_no_issues("Expected %r to parse." % text)
	return render(expr)

def _complaints(text):
	report = Report()
	program = parse_text(text, report)
	assert program is None, "Expected %r to be rejected." % text
	return [i.as_text() for i in report.issues]

class PrettyPrinterTests(unittest.TestCase):

	def test_hand_built_tree(self):
		expr = syntax.Binary(
			syntax.Unary(Token(Kind.MINUS, "-", None, 1), syntax.Literal(123)),
			Token(Kind.STAR, "*", None, 1),
			syntax.Grouping(syntax.Literal(45.67)),
		)
		self.assertEqual("(* (- 123) (group 45.67))", render(expr))

	def test_leaves(self):
		self.assertEqual("(, (, (, nil true) false) hello)", _shape('nil, true, false, "hello"'))

	def test_comma_is_loosest(self):
		self.assertEqual(
			"(, (, 1.0 (+ 2.0 (group (, 3.0 4.0)))) (== a 6.0))",
			_shape('1, 2 + (3, 4), "a" == 6'),
		)

	def test_arithmetic_precedence(self):
		self.assertEqual("(- (+ 1.0 (* 2.0 3.0)) (/ 4.0 (- 5.0)))", _shape("1 + 2 * 3 - 4 / -5"))
		self.assertEqual("(== (< 1.0 2.0) (! true))", _shape("1 < 2 == !true"))

	def test_logical_operators(self):
		self.assertEqual("(or a (and b c))", _shape("a or b and c"))

	def test_ternary_is_right_associative(self):
		self.assertEqual("(?: true 1.0 (?: false 2.0 3.0))", _shape("true ? 1 : false ? 2 : 3"))

	def test_ternary_condition_binds_tighter_than_branches(self):
		self.assertEqual("(?: (== 1.0 2.0) (+ 3.0 4.0) (* 5.0 6.0))", _shape("1 == 2 ? 3 + 4 : 5 * 6"))

	def test_ternary_middle_is_a_full_expression(self):
		self.assertEqual("(?: c (, a b) d)", _shape("c ? a, b : d"))

	def test_assignment_is_right_associative(self):
		self.assertEqual("(= a (= b 1.0))", _shape("a = b = 1"))

	def test_calls_and_properties(self):
		self.assertEqual("(call (call f 1.0 2.0) 3.0)", _shape("f(1, 2)(3)"))
		self.assertEqual("(.= (. a b) c 1.0)", _shape("a.b.c = 1"))

	def test_super_renders_with_its_method(self):
		report = Report()
		tokens = scan("super.cook", report)
		self.assertEqual("(super cook)", render(parse_expression(tokens, report)))

class ParserTests(unittest.TestCase):

	def test_statements(self):
		report = Report()
		program, failed = parse(scan("var a = 1; print a; { a = 2; } if (a) print 1; else print 2;", report), report)
		self.assertFalse(failed)
		self.assertEqual(
			[syntax.VarDecl, syntax.PrintStmt, syntax.Block, syntax.If],
			[type(s) for s in program],
		)
		self.assertIsInstance(program[3].else_branch, syntax.PrintStmt)

	def test_var_without_initializer(self):
		report = Report()
		program, _ = parse(scan("var a;", report), report)
		self.assertIsNone(program[0].initializer)

	def test_for_loop_becomes_while_in_block(self):
		report = Report()
		program = parse_text("for (var i = 0; i < 3; i = i + 1) print i;", report)
		loop = program[0]
		self.assertIsInstance(loop, syntax.Block)
		init, body = loop.statements
		self.assertIsInstance(init, syntax.VarDecl)
		self.assertIsInstance(body, syntax.While)
		self.assertEqual("(< i 3.0)", render(body.condition))
		self.assertIsInstance(body.body.statements[1], syntax.ExpressionStmt)

	def test_bare_for_loop_is_always_true(self):
		report = Report()
		program = parse_text("for (;;) print 1;", report)
		self.assertEqual(syntax.While(syntax.Literal(True), syntax.PrintStmt(syntax.Literal(1.0))), program[0])

	def test_class_declaration(self):
		report = Report()
		program = parse_text("class B < A { init(x) { this.x = x; } get() { return this.x; } }", report)
		klass = program[0]
		self.assertEqual("B", klass.name.lexeme)
		self.assertEqual("A", klass.superclass.name.lexeme)
		self.assertEqual(["init", "get"], [m.name.lexeme for m in klass.methods])
		self.assertTrue(klass.methods[0].is_initializer())
		self.assertFalse(klass.methods[1].is_initializer())

	def test_parsing_is_repeatable(self):
		text = "fun f(a, b) { return a ? b : -a; } print f(1, 2);"
		self.assertEqual(parse_text(text, Report()), parse_text(text, Report()))

	def test_expression_mode_wants_exactly_one_expression(self):
		report = Report()
		self.assertIsNone(parse_expression(scan("1 2", report), report))
		self.assertEqual("[line 1] Error at '2': Expect end of expression.", report.issues[0].as_text())

class SyntaxErrorTests(unittest.TestCase):

	def test_missing_expression(self):
		self.assertEqual(["[line 1] Error at ';': Expect expression."], _complaints("print 1 + ;"))

	def test_error_at_end(self):
		self.assertEqual(["[line 2] Error at end: Expect ';' after value."], _complaints("print 1\n"))

	def test_invalid_assignment_target(self):
		self.assertEqual(["[line 1] Error at '=': Invalid assignment target."], _complaints("1 = 2;"))

	def test_recovery_finds_later_errors(self):
		self.assertEqual([
			"[line 1] Error at '1': Expect variable name.",
			"[line 3] Error at '=': Expect variable name.",
		], _complaints("var 1;\nprint 2;\nvar = 3;"))

	def test_recovery_inside_blocks(self):
		self.assertEqual([
			"[line 1] Error at ')': Expect expression.",
			"[line 1] Error at end: Expect '}' after block.",
		], _complaints("{ print ); print 1;"))

	def test_too_many_arguments(self):
		text = "f(%s);" % ", ".join(["1"] * 256)
		self.assertEqual(["[line 1] Error at '1': Can't have more than 255 arguments."], _complaints(text))

	def test_too_many_parameters(self):
		text = "fun f(%s) {}" % ", ".join("p%d" % i for i in range(256))
		self.assertEqual(["[line 1] Error at 'p255': Can't have more than 255 parameters."], _complaints(text))

	def test_deep_grouping_is_a_syntax_error(self):
		text = "print %s1%s;\nprint 2;" % ("(" * 2000, ")" * 2000)
		self.assertEqual(["[line 1] Error at '(': Too much nesting."], _complaints(text))

	def test_long_operator_chain_is_too_deep(self):
		text = "print 0;\nprint %s;" % " + ".join(["1"] * 300)
		self.assertEqual(["[line 2] Error at 'print': Too much nesting."], _complaints(text))

	def test_too_deep_in_expression_mode(self):
		report = Report()
		self.assertIsNone(parse_expression(scan("-" * 300 + "1", report), report))
		self.assertEqual(["[line 1] Error at '-': Too much nesting."], [i.as_text() for i in report.issues])

	def test_moderate_nesting_is_fine(self):
		report = Report()
		self.assertIsNotNone(parse_text("print %s1;" % ("-" * 150), report))
		report.assert_no_issues("Modest nesting should parse.")

	def test_scan_errors_prevent_a_program(self):
		report = Report()
		self.assertIsNone(parse_text("print 1 # 2;", report))
		self.assertEqual("scan", report.issues[0].phase)

class StaticCheckTests(unittest.TestCase):

	def test_top_level_return(self):
		self.assertEqual(["[line 1] Error at 'return': Can't return from top-level code."], _complaints("return 1;"))

	def test_return_inside_function_is_fine(self):
		report = Report()
		self.assertIsNotNone(parse_text("fun f() { if (true) { return 1; } }", report))
		report.assert_no_issues("A return inside a function is fine.")

	def test_return_value_from_initializer(self):
		self.assertEqual(
			["[line 1] Error at 'return': Can't return a value from an initializer."],
			_complaints("class A { init() { return 1; } }"),
		)

	def test_bare_return_from_initializer_is_fine(self):
		report = Report()
		self.assertIsNotNone(parse_text("class A { init() { return; } }", report))

	def test_initializer_rule_does_not_reach_nested_functions(self):
		report = Report()
		self.assertIsNotNone(parse_text("class A { init() { fun f() { return 1; } } }", report))

	def test_this_outside_class(self):
		self.assertEqual(["[line 1] Error at 'this': Can't use 'this' outside of a class."], _complaints("print this;"))

	def test_this_in_function_nested_in_method_is_fine(self):
		report = Report()
		self.assertIsNotNone(parse_text("class A { m() { fun f() { return this; } return f; } }", report))

	def test_super_outside_class(self):
		self.assertEqual(
			["[line 1] Error at 'super': Can't use 'super' outside of a class."],
			_complaints("fun f() { super.g(); }"),
		)

	def test_super_without_superclass(self):
		self.assertEqual(
			["[line 1] Error at 'super': Can't use 'super' in a class with no superclass."],
			_complaints("class A { f() { super.f(); } }"),
		)

	def test_inherit_from_self(self):
		self.assertEqual(["[line 1] Error at 'A': A class can't inherit from itself."], _complaints("class A < A {}"))

if __name__ == '__main__':
	unittest.main()
