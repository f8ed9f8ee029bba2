import io
from pathlib import Path
import unittest
from unittest import mock

from lox.tree_walker.executive import Session, run_source

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"

def _good(path:Path) -> str:
	session = Session()
	with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
		run_source(path.read_text(encoding="utf-8"), session)
	session.report.assert_no_issues("Ostensibly-good example %s failed." % path.name)
	return out.getvalue()

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke, and for the expected output. """

	def test_examples(self):
		specimens = sorted(examples.glob("*.lox"))
		self.assertTrue(specimens)
		for path in specimens:
			with self.subTest(path.stem):
				expected = path.with_name(path.name + ".out").read_text(encoding="utf-8")
				self.assertEqual(expected, _good(path))

if __name__ == '__main__':
	unittest.main()
