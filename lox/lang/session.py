"""Session control for the Lox language. Runs source text through the scanner, parser and interpreter, either from a
file or one prompt entry at a time.
"""

import sys

from lox.lang.error import ErrorHandler
from lox.lang.interpreter import Interpreter
from lox.syntax.parser import Parser
from lox.syntax.scanner import Scanner


class Session:
    """Governs a Lox session. The global environment lives as long as the session, so prompt entries can see the
    variables and functions declared by earlier ones.
    """
    EX_OK = 0
    EX_DATAERR = 65      # syntax error in the input
    EX_NOINPUT = 66      # script could not be read
    EX_SOFTWARE = 70     # runtime error
    RECURSION_LIMIT = 10_000  # Python frames; each Lox call takes several

    def __init__(self, error_handler=None, out=None):
        if sys.getrecursionlimit() < Session.RECURSION_LIMIT:
            sys.setrecursionlimit(Session.RECURSION_LIMIT)

        self.error_handler = error_handler if error_handler is not None else ErrorHandler()
        self.interpreter = Interpreter(out)
        self._unreadable = False

    @staticmethod
    def scan(source, error_handler):
        """Returns the tokens of source, reporting any lexical errors to error_handler."""
        scanner = Scanner(source)
        tokens = scanner.scan_tokens()
        error_handler.report_all(scanner.errors)
        return tokens

    @staticmethod
    def parse(tokens, error_handler):
        """Returns the statements parsed from tokens, reporting any syntax errors to error_handler."""
        parser = Parser(tokens)
        statements = parser.parse()
        error_handler.report_all(parser.errors)
        return statements

    def run(self, source):
        """Runs source. Nothing is executed if it has a lexical or syntax error; a runtime error is reported and ends
        the run. Returns whether the run succeeded.
        """
        tokens = Session.scan(source, self.error_handler)
        statements = Session.parse(tokens, self.error_handler)

        if self.error_handler.had_error:
            return False

        with self.error_handler:
            self.interpreter.interpret(statements)

        return not self.error_handler.had_runtime_error

    def run_file(self, path):
        """Runs the script at path. Returns the process exit code."""
        try:
            with open(path, "r", encoding="utf-8") as file:
                source = file.read()
        except OSError:
            self.error_handler.warn(f"'{path}' could not be opened")
            self._unreadable = True
            return self.exit_code

        self.run(source)
        return self.exit_code

    @property
    def exit_code(self):
        if self._unreadable:
            return Session.EX_NOINPUT
        if self.error_handler.had_error:
            return Session.EX_DATAERR
        if self.error_handler.had_runtime_error:
            return Session.EX_SOFTWARE
        return Session.EX_OK

    def reset(self):
        """Clears error state, keeping the global environment. Called after each prompt entry."""
        self.error_handler.reset()
        self._unreadable = False
