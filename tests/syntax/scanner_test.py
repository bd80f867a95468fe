import unittest

from lox.lang.error import LoxSyntaxError
from lox.syntax.scanner import Scanner
from lox.syntax.tokens import Token, TokenType


def types(source):
    return [token.type for token in Scanner(source).scan_tokens()]


class PunctuationTestCase(unittest.TestCase):

    def test_single_characters(self):
        cases = {
            "(": TokenType.LEFT_PAREN, ")": TokenType.RIGHT_PAREN, "{": TokenType.LEFT_BRACE,
            "}": TokenType.RIGHT_BRACE, ",": TokenType.COMMA, ".": TokenType.DOT, "-": TokenType.MINUS,
            "+": TokenType.PLUS, ";": TokenType.SEMICOLON, "*": TokenType.STAR, "/": TokenType.SLASH,
            "!": TokenType.BANG, "=": TokenType.EQUAL, "<": TokenType.LESS, ">": TokenType.GREATER,
        }
        for case, expected in cases.items():
            self.assertEqual([expected, TokenType.EOF], types(case), case)

    def test_maximal_munch(self):
        cases = {
            "!=": [TokenType.BANG_EQUAL],
            "==": [TokenType.EQUAL_EQUAL],
            "<=": [TokenType.LESS_EQUAL],
            ">=": [TokenType.GREATER_EQUAL],
            "===": [TokenType.EQUAL_EQUAL, TokenType.EQUAL],
            "! =": [TokenType.BANG, TokenType.EQUAL],
            "<>": [TokenType.LESS, TokenType.GREATER],
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenType.EOF], types(case), case)

    def test_always_ends_with_single_eof(self):
        for case in ["", "   ", "// only a comment", "var a = 1;"]:
            tokens = Scanner(case).scan_tokens()
            self.assertIs(TokenType.EOF, tokens[-1].type, case)
            self.assertEqual(1, [token.type for token in tokens].count(TokenType.EOF), case)


class CommentTestCase(unittest.TestCase):

    def test_comments_are_ignored(self):
        self.assertEqual([TokenType.EOF], types("// this is a comment"))

    def test_inline_comments_are_ignored(self):
        self.assertEqual([TokenType.NUMBER, TokenType.SLASH, TokenType.NUMBER, TokenType.EOF],
                         types("1 / 2 // halve it"))

    def test_comment_ends_at_newline(self):
        tokens = Scanner("// first\nprint").scan_tokens()
        self.assertEqual(TokenType.PRINT, tokens[0].type)
        self.assertEqual(2, tokens[0].line)


class LiteralTestCase(unittest.TestCase):

    def test_numbers(self):
        cases = {"0": 0.0, "123": 123.0, "3.25": 3.25, "007": 7.0}
        for case, expected in cases.items():
            token = Scanner(case).scan_tokens()[0]
            self.assertEqual(TokenType.NUMBER, token.type, case)
            self.assertEqual(expected, token.literal, case)
            self.assertIsInstance(token.literal, float, case)

    def test_no_leading_or_trailing_dot(self):
        self.assertEqual([TokenType.NUMBER, TokenType.DOT, TokenType.EOF], types("1."))
        self.assertEqual([TokenType.DOT, TokenType.NUMBER, TokenType.EOF], types(".5"))
        self.assertEqual([TokenType.NUMBER, TokenType.DOT, TokenType.IDENTIFIER, TokenType.EOF], types("1.e"))

    def test_strings(self):
        token = Scanner('"hello, world!"').scan_tokens()[0]
        self.assertEqual(Token(TokenType.STRING, '"hello, world!"', "hello, world!", 1), token)

    def test_multiline_strings_count_lines(self):
        tokens = Scanner('"one\ntwo"\nx').scan_tokens()
        self.assertEqual("one\ntwo", tokens[0].literal)
        self.assertEqual(2, tokens[0].line)
        self.assertEqual(3, tokens[1].line)

    def test_unterminated_string(self):
        scanner = Scanner('print "oops\n;')
        tokens = scanner.scan_tokens()
        self.assertEqual([TokenType.PRINT, TokenType.EOF], [token.type for token in tokens])
        self.assertEqual([LoxSyntaxError(2, "Unterminated string.")], scanner.errors)


class IdentifierTestCase(unittest.TestCase):

    def test_identifiers(self):
        should_pass = ["a", "_", "snake_case", "camelCase", "x1", "_private2"]
        for case in should_pass:
            token = Scanner(case).scan_tokens()[0]
            self.assertEqual(TokenType.IDENTIFIER, token.type, case)
            self.assertEqual(case, token.lexeme, case)

    def test_keywords(self):
        key_words = ["and", "class", "else", "false", "for", "fun", "if", "nil", "or", "print", "return", "super",
                     "this", "true", "var", "while"]
        tokens = Scanner(" ".join(key_words)).scan_tokens()[:-1]
        self.assertEqual(key_words, [token.type.name.lower() for token in tokens])

    def test_keyword_prefixes_are_identifiers(self):
        for case in ["orchid", "variable", "fundamental", "nil_", "If"]:
            self.assertEqual([TokenType.IDENTIFIER, TokenType.EOF], types(case), case)


class ErrorTestCase(unittest.TestCase):

    def test_unexpected_characters_do_not_stop_scanning(self):
        scanner = Scanner("a @ b\n# c")
        tokens = scanner.scan_tokens()
        self.assertEqual(["a", "b", "c", ""], [token.lexeme for token in tokens])
        self.assertEqual([LoxSyntaxError(1, "Unexpected character."), LoxSyntaxError(2, "Unexpected character.")],
                         scanner.errors)

    def test_error_format(self):
        self.assertEqual("[line 4] Error: Unexpected character.", str(LoxSyntaxError(4, "Unexpected character.")))


class WhitespaceTestCase(unittest.TestCase):

    def test_newlines_are_counted(self):
        tokens = Scanner("0\n1\r\n\t2\n\n3").scan_tokens()[:-1]
        self.assertEqual([1, 2, 3, 5], [token.line for token in tokens])

    def test_token_str(self):
        self.assertEqual("NUMBER 1 1.0", str(Scanner("1").scan_tokens()[0]))
        self.assertEqual("SEMICOLON ; null", str(Scanner(";").scan_tokens()[0]))


if __name__ == '__main__':
    unittest.main()
