"""Lexical analysis for Lox. Converts raw source text into a flat list of tokens.

Tokens are recognised by maximal munch:

```
<token>      ::= "(" | ")" | "{" | "}" | "," | "." | "-" | "+" | ";" | "*" | "/"
               | "!" | "!=" | "=" | "==" | ">" | ">=" | "<" | "<="  ; two-character operators win
<string>     ::= '"' <char>* '"'                                    ; may span lines, no escapes
<number>     ::= <digit>+ ("." <digit>+)?                           ; always a float
<identifier> ::= [A-Za-z_] [A-Za-z0-9_]*                            ; keywords are reclassified
<comment>    ::= "//" <char>* <newline>                             ; ignored
```

Scanning never stops at an error: every bad character is recorded in Scanner.errors and scanning carries on.
"""

from lox.lang.error import LoxSyntaxError
from lox.syntax.tokens import KEYWORDS, Token, TokenType


class Scanner:
    SINGLE = {
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        "{": TokenType.LEFT_BRACE,
        "}": TokenType.RIGHT_BRACE,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        "-": TokenType.MINUS,
        "+": TokenType.PLUS,
        ";": TokenType.SEMICOLON,
        "*": TokenType.STAR,
    }
    # char: (type if followed by "=", type otherwise)
    DOUBLE = {
        "!": (TokenType.BANG_EQUAL, TokenType.BANG),
        "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
        "<": (TokenType.LESS_EQUAL, TokenType.LESS),
        ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
    }
    WHITESPACE = {" ", "\r", "\t"}

    def __init__(self, source):
        self.source = source
        self.tokens = []
        self.errors = []

        self._start = 0    # first char of the lexeme being scanned
        self._current = 0  # char currently being looked at
        self._line = 1

    def scan_tokens(self):
        """Scans the whole source. The result always ends with a single EOF token."""
        while not self._at_end():
            self._start = self._current
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self._line))
        return self.tokens

    def _scan_token(self):
        char = self._advance()

        if char in Scanner.SINGLE:
            self._add_token(Scanner.SINGLE[char])
        elif char in Scanner.DOUBLE:
            two, one = Scanner.DOUBLE[char]
            self._add_token(two if self._match("=") else one)
        elif char == "/":
            if self._match("/"):
                while self._peek() != "\n" and not self._at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
        elif char in Scanner.WHITESPACE:
            pass
        elif char == "\n":
            self._line += 1
        elif char == "\"":
            self._string()
        elif Scanner.is_digit(char):
            self._number()
        elif Scanner.is_alpha(char):
            self._identifier()
        else:
            self._error("Unexpected character.")

    def _string(self):
        while self._peek() != "\"" and not self._at_end():
            if self._peek() == "\n":
                self._line += 1
            self._advance()

        if self._at_end():
            self._error("Unterminated string.")
            return

        self._advance()  # closing "
        self._add_token(TokenType.STRING, self.source[self._start + 1:self._current - 1])

    def _number(self):
        while Scanner.is_digit(self._peek()):
            self._advance()

        # a fractional part needs at least one digit after the "."
        if self._peek() == "." and Scanner.is_digit(self._peek_next()):
            self._advance()
            while Scanner.is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self._start:self._current]))

    def _identifier(self):
        while Scanner.is_alphanumeric(self._peek()):
            self._advance()

        text = self.source[self._start:self._current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def _at_end(self):
        return self._current >= len(self.source)

    def _advance(self):
        self._current += 1
        return self.source[self._current - 1]

    def _match(self, expected):
        if self._at_end() or self.source[self._current] != expected:
            return False
        self._current += 1
        return True

    def _peek(self):
        return "" if self._at_end() else self.source[self._current]

    def _peek_next(self):
        if self._current + 1 >= len(self.source):
            return ""
        return self.source[self._current + 1]

    def _add_token(self, typ, literal=None):
        text = self.source[self._start:self._current]
        self.tokens.append(Token(typ, text, literal, self._line))

    def _error(self, message):
        self.errors.append(LoxSyntaxError(self._line, message))

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def is_alpha(char):
        return char != "" and ("a" <= char <= "z" or "A" <= char <= "Z" or char == "_")

    @staticmethod
    def is_alphanumeric(char):
        return Scanner.is_alpha(char) or Scanner.is_digit(char)
