"""Error handling for the Lox language. There are three kinds of failure, which are never mixed up:

- LoxSyntaxError: lexical and parse errors. Collected by the scanner/parser, all reported before the run is abandoned.
- LoxRuntimeError: raised by the interpreter, unwinds to the session and ends the current run.
- `return` is not an error at all (see ReturnValue in interpreter.py).

If any other exception makes it all the way to ErrorHandler, it is assumed to be an internal issue and is re-raised.
"""

import sys

from termcolor import colored

from lox.syntax.tokens import TokenType


class LoxSyntaxError(Exception):
    """A lexical or syntax error at a source line. where is "", " at end" or " at 'LEXEME'"."""

    def __init__(self, line, message, where=""):
        super().__init__(message)
        self.line = line
        self.message = message
        self.where = where

    @classmethod
    def at_token(cls, token, message):
        """Builds an error located at token, using the token's lexeme as context."""
        if token.type is TokenType.EOF:
            return cls(token.line, message, " at end")
        return cls(token.line, message, f" at '{token.lexeme}'")

    def __str__(self):
        return f"[line {self.line}] Error{self.where}: {self.message}"

    def __eq__(self, other):
        return isinstance(other, type(self)) and str(self) == str(other)

    def __hash__(self):
        return hash(str(self))


class LoxRuntimeError(Exception):
    """Runtime failure. token is the offending token, used for line reporting."""

    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message

    def __str__(self):
        return f"{self.message}\n[line {self.token.line}]"


class ErrorHandler:
    """Context manager that reports Lox errors instead of letting them escape, and remembers whether a run failed."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, stream=None, color=True):
        self.stream = stream  # None means sys.stderr at the time of writing
        self.color = color

        self.had_error = False
        self.had_runtime_error = False

    def _paint(self, text, color):
        if not self.color:
            return text
        return colored(text, color, attrs=["bold"])

    def _write(self, text):
        print(text, file=self.stream if self.stream is not None else sys.stderr)

    def report(self, error):
        """Reports a LoxSyntaxError. The run will not be executed."""
        self._write(self._paint(str(error), ErrorHandler.ERROR))
        self.had_error = True

    def report_all(self, errors):
        for error in errors:
            self.report(error)

    def runtime_error(self, error):
        """Reports a LoxRuntimeError. The remainder of the run has already been abandoned."""
        self._write(self._paint(str(error), ErrorHandler.ERROR))
        self.had_runtime_error = True

    def warn(self, msg):
        """Prints a non-fatal notice."""
        self._write(self._paint("warning: ", ErrorHandler.WARNING) + msg)

    def reset(self):
        """Forgets previous failures. Called between prompt entries."""
        self.had_error = False
        self.had_runtime_error = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            return False

        if issubclass(exc_type, LoxRuntimeError):
            self.runtime_error(exc_val)
        elif issubclass(exc_type, RecursionError):
            self._write(self._paint("Stack overflow.", ErrorHandler.ERROR))
            self.had_runtime_error = True
        elif issubclass(exc_type, KeyboardInterrupt):
            self.warn("keyboard interrupt")
            self.had_runtime_error = True
        else:
            return False  # internal error, let it propagate

        return True
