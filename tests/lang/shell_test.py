import io
import unittest

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.out, self.err = io.StringIO(), io.StringIO()
        self.sess = Session(ErrorHandler(stream=self.err, color=False), out=self.out)

    def shell(self, lines):
        return Shell(self.sess, stdin=io.StringIO("".join(line + "\n" for line in lines)), stdout=self.out)

    def test_entries_share_globals(self):
        self.shell(["var a = 1;", "print a + 1;"]).cmdloop(intro="")
        self.assertIn("2\n", self.out.getvalue())

    def test_errors_reset_between_entries(self):
        self.shell(["print missing;", "print 1 +;", 'print "ok";']).cmdloop(intro="")
        self.assertIn("ok\n", self.out.getvalue())
        self.assertFalse(self.sess.error_handler.had_error)
        self.assertFalse(self.sess.error_handler.had_runtime_error)
        self.assertIn("Undefined variable 'missing'.", self.err.getvalue())
        self.assertIn("Expect expression.", self.err.getvalue())

    def test_line_continuation(self):
        shell = self.shell([])
        shell.onecmd("fun twice(x) {")
        self.assertEqual(Shell.secondary_prompt, shell.prompt)
        shell.onecmd("  return x * 2;")
        shell.onecmd("}")
        self.assertEqual(Shell._tmp_prompt, shell.prompt)
        shell.onecmd("print twice(21);")
        self.assertEqual("42\n", self.out.getvalue())

    def test_brackets_in_strings_and_comments_do_not_continue(self):
        shell = self.shell([])
        shell.onecmd('print "{";')
        self.assertEqual(Shell._tmp_prompt, shell.prompt)
        shell.onecmd('print ":)"; // (')
        self.assertEqual(Shell._tmp_prompt, shell.prompt)
        self.assertEqual("{\n:)\n", self.out.getvalue())

    def test_end_of_input_inside_an_entry(self):
        self.shell(["{", "print 1;"]).cmdloop(intro="")
        self.assertNotIn("1\n", self.out.getvalue(), "the unfinished entry is dropped")
        self.assertTrue(self.out.getvalue().endswith(". \n"))

    def test_exit(self):
        self.assertTrue(self.shell([]).onecmd("exit"))
        self.assertTrue(self.shell([]).onecmd("EOF"))

    def test_command_words_can_be_lox(self):
        shell = self.shell([])
        self.assertFalse(shell.onecmd("var exit = 1;"))
        self.assertFalse(shell.onecmd("exit = exit + 1;"))
        shell.onecmd("print exit;")
        self.assertEqual("2\n", self.out.getvalue())

    def test_eof_can_be_lox(self):
        shell = self.shell([])
        self.assertFalse(shell.onecmd("var EOF = 1;"))
        self.assertFalse(shell.onecmd("EOF = 2;"))
        shell.onecmd("print EOF;")
        self.assertEqual("2\n", self.out.getvalue())

    def test_help(self):
        self.shell([]).onecmd("help")
        self.assertIn("Welcome to the Lox interpreter!", self.out.getvalue())


if __name__ == '__main__':
    unittest.main()
