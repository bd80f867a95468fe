"""Handles interactive mode for the Lox interpreter. Uses cmd as backend."""

import cmd

from lox.syntax.scanner import Scanner
from lox.syntax.tokens import TokenType


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information, 'exit' to leave."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if kwargs.get("stdin") is not None:
            self.use_rawinput = False

        self.sess = sess
        self._tmp_line = ""

    @staticmethod
    def is_open(source):
        """Whether source has unclosed braces or parentheses, meaning the entry continues on the next line."""
        types = [token.type for token in Scanner(source).scan_tokens()]  # braces in strings and comments do not count
        return (types.count(TokenType.LEFT_BRACE) > types.count(TokenType.RIGHT_BRACE)
                or types.count(TokenType.LEFT_PAREN) > types.count(TokenType.RIGHT_PAREN))

    def default(self, line):
        """Runs an arbitrary Lox entry, which may span several lines."""
        source = self._tmp_line + line + "\n"

        if Shell.is_open(source):
            self._tmp_line = source
            self.prompt = self.secondary_prompt
            return

        self._tmp_line = ""
        self.prompt = self._tmp_prompt

        self.sess.run(source)
        self.sess.reset()  # every entry starts with a clean error state

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg or self._tmp_line:
            return self.default(f"help {arg}")

        self.stdout.write("Welcome to the Lox interpreter!\n\n"
                          "Lox is a small, dynamically typed scripting language with C-like syntax, \n"
                          "closures, and first-class functions.\n\n"
                          "Try it out by typing 'var greeting = \"hello\";' and then 'print greeting;'. \n"
                          "Entries with unclosed braces continue on the next line.\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"EOF {arg}")  # end of input itself never has an argument
        self.stdout.write("\n")
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg or self._tmp_line:
            return self.default(f"exit {arg}")  # e.g. `exit = 1;` is Lox, not a command
        return True
