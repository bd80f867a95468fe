"""Renders syntax trees in a parenthesized, prefix form, e.g. `-123 * (45.67)` becomes `(* (- 123) (group 45.67))`.

Only used for debugging (see the --ast flag in main.py).
"""

from lox.syntax import nodes


class AstPrinter:

    def print(self, node):
        """Returns the string form of an expression or statement node."""
        if isinstance(node, nodes.Stmt):
            return self._stmt(node)
        return self._expr(node)

    def _expr(self, expr):
        match expr:
            case nodes.Literal(value):
                return AstPrinter.literal(value)
            case nodes.Grouping(expression):
                return self._parenthesize("group", expression)
            case nodes.Unary(operator, right):
                return self._parenthesize(operator.lexeme, right)
            case nodes.Binary(left, operator, right) | nodes.Logical(left, operator, right):
                return self._parenthesize(operator.lexeme, left, right)
            case nodes.Variable(name):
                return name.lexeme
            case nodes.Assign(name, value):
                return self._parenthesize(f"= {name.lexeme}", value)
            case nodes.Call(callee, _, arguments):
                return self._parenthesize(self._expr(callee), *arguments)
        raise TypeError(f"not an expression node: {expr!r}")

    def _stmt(self, stmt):
        match stmt:
            case nodes.Expression(expression):
                return self._parenthesize(";", expression)
            case nodes.Print(expression):
                return self._parenthesize("print", expression)
            case nodes.Var(name, None):
                return f"(var {name.lexeme})"
            case nodes.Var(name, initializer):
                return self._parenthesize(f"var {name.lexeme}", initializer)
            case nodes.Block(statements):
                return self._parenthesize("block", *statements)
            case nodes.If(condition, then_branch, None):
                return self._parenthesize("if", condition, then_branch)
            case nodes.If(condition, then_branch, else_branch):
                return self._parenthesize("if", condition, then_branch, else_branch)
            case nodes.While(condition, body):
                return self._parenthesize("while", condition, body)
            case nodes.Function(name, params, body):
                params = " ".join(param.lexeme for param in params)
                return self._parenthesize(f"fun {name.lexeme} ({params})", *body)
            case nodes.Return(_, None):
                return "(return)"
            case nodes.Return(_, value):
                return self._parenthesize("return", value)
        raise TypeError(f"not a statement node: {stmt!r}")

    def _parenthesize(self, name, *parts):
        return "(" + " ".join([name] + [self.print(part) for part in parts]) + ")"

    @staticmethod
    def literal(value):
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            text = repr(value)
            return text[:-2] if text.endswith(".0") else text
        return str(value)
