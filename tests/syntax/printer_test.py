import unittest

from lox.syntax import nodes
from lox.syntax.printer import AstPrinter
from lox.syntax.tokens import Token, TokenType


def token(typ, lexeme):
    return Token(typ, lexeme, None, 1)


class AstPrinterTestCase(unittest.TestCase):

    def test_expression(self):
        expr = nodes.Binary(
            nodes.Unary(token(TokenType.MINUS, "-"), nodes.Literal(123.0)),
            token(TokenType.STAR, "*"),
            nodes.Grouping(nodes.Literal(45.67)))
        self.assertEqual("(* (- 123) (group 45.67))", AstPrinter().print(expr))

    def test_literals(self):
        # a list, since True and 1.0 would collide as dict keys
        cases = [(None, "nil"), (True, "true"), (False, "false"), (1.0, "1"), (0.5, "0.5"), ("text", "text")]
        for case, expected in cases:
            self.assertEqual(expected, AstPrinter().print(nodes.Literal(case)), case)

    def test_assign_and_call(self):
        name = token(TokenType.IDENTIFIER, "a")
        paren = token(TokenType.RIGHT_PAREN, ")")
        expr = nodes.Assign(name, nodes.Call(nodes.Variable(token(TokenType.IDENTIFIER, "f")), paren,
                                             (nodes.Literal(1.0), nodes.Variable(name))))
        self.assertEqual("(= a (f 1 a))", AstPrinter().print(expr))

    def test_rejects_non_nodes(self):
        self.assertRaises(TypeError, AstPrinter().print, "not a node")


if __name__ == '__main__':
    unittest.main()
