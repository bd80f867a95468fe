"""Tree-walking evaluator for Lox.

The active environment is passed explicitly to execute/evaluate rather than kept as mutable state, so leaving a block
(normally, by `return`, or by a runtime error) can never leave the wrong scope active.

`return` is not an exception: execute returns None when a statement completes normally, or a ReturnValue when a
`return` ran. Blocks, ifs and loops hand the ReturnValue straight back to their caller without running anything else,
until LoxFunction.call consumes it. Runtime errors, on the other hand, are LoxRuntimeErrors that unwind to the session.
"""

import sys
from dataclasses import dataclass

from lox.lang.callable import LoxCallable, LoxFunction, natives
from lox.lang.environment import Environment
from lox.lang.error import LoxRuntimeError
from lox.syntax import nodes
from lox.syntax.tokens import TokenType


@dataclass(frozen=True)
class ReturnValue:
    """Signal produced by a `return` statement, carrying the returned value up to the function call boundary."""
    value: object


class Interpreter:

    def __init__(self, out=None):
        self.out = out  # None means sys.stdout at the time of printing
        self.globals = Environment()
        for native in natives():
            self.globals.define(native.name, native)

    def interpret(self, statements):
        """Executes statements in the global scope. LoxRuntimeErrors are left for the caller to report."""
        for stmt in statements:
            self.execute(stmt, self.globals)

    # ==================== STATEMENTS ====================

    def execute(self, stmt, env):
        """Executes stmt in env. Returns a ReturnValue if a `return` ran, otherwise None."""
        match stmt:
            case nodes.Expression(expression):
                self.evaluate(expression, env)

            case nodes.Print(expression):
                value = self.evaluate(expression, env)
                print(Interpreter.stringify(value), file=self.out if self.out is not None else sys.stdout)

            case nodes.Var(name, initializer):
                value = None if initializer is None else self.evaluate(initializer, env)
                env.define(name.lexeme, value)

            case nodes.Block(statements):
                return self.execute_block(statements, Environment(env))

            case nodes.If(condition, then_branch, else_branch):
                if Interpreter.is_truthy(self.evaluate(condition, env)):
                    return self.execute(then_branch, env)
                if else_branch is not None:
                    return self.execute(else_branch, env)

            case nodes.While(condition, body):
                while Interpreter.is_truthy(self.evaluate(condition, env)):
                    signal = self.execute(body, env)
                    if signal is not None:
                        return signal

            case nodes.Function(name):
                env.define(name.lexeme, LoxFunction(stmt, env))

            case nodes.Return(_, value):
                return ReturnValue(None if value is None else self.evaluate(value, env))

            case _:
                raise TypeError(f"not a statement node: {stmt!r}")

        return None

    def execute_block(self, statements, env):
        """Executes statements in env, stopping at the first `return`."""
        for stmt in statements:
            signal = self.execute(stmt, env)
            if signal is not None:
                return signal
        return None

    # ==================== EXPRESSIONS ====================

    def evaluate(self, expr, env):
        match expr:
            case nodes.Literal(value):
                return value

            case nodes.Grouping(expression):
                return self.evaluate(expression, env)

            case nodes.Variable(name):
                return env.get(name)

            case nodes.Assign(name, value):
                value = self.evaluate(value, env)
                env.assign(name, value)
                return value

            case nodes.Logical(left, operator, right):
                left = self.evaluate(left, env)
                if operator.type is TokenType.OR:
                    if Interpreter.is_truthy(left):
                        return left
                elif not Interpreter.is_truthy(left):
                    return left
                return self.evaluate(right, env)

            case nodes.Unary(operator, right):
                return self._unary(operator, self.evaluate(right, env))

            case nodes.Binary(left, operator, right):
                left = self.evaluate(left, env)
                right = self.evaluate(right, env)
                return self._binary(operator, left, right)

            case nodes.Call(callee, paren, arguments):
                callee = self.evaluate(callee, env)
                arguments = [self.evaluate(argument, env) for argument in arguments]
                return self._call(paren, callee, arguments)

        raise TypeError(f"not an expression node: {expr!r}")

    def _unary(self, operator, right):
        if operator.type is TokenType.BANG:
            return not Interpreter.is_truthy(right)

        # TokenType.MINUS
        Interpreter.check_number_operand(operator, right)
        return -right

    def _binary(self, operator, left, right):
        typ = operator.type

        if typ is TokenType.EQUAL_EQUAL:
            return Interpreter.is_equal(left, right)
        if typ is TokenType.BANG_EQUAL:
            return not Interpreter.is_equal(left, right)

        if typ is TokenType.PLUS:
            if Interpreter.is_number(left) and Interpreter.is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")

        Interpreter.check_number_operands(operator, left, right)

        if typ is TokenType.MINUS:
            return left - right
        if typ is TokenType.STAR:
            return left * right
        if typ is TokenType.SLASH:
            if right == 0:
                raise LoxRuntimeError(operator, "Division by zero.")
            return left / right
        if typ is TokenType.GREATER:
            return left > right
        if typ is TokenType.GREATER_EQUAL:
            return left >= right
        if typ is TokenType.LESS:
            return left < right
        if typ is TokenType.LESS_EQUAL:
            return left <= right

        raise LoxRuntimeError(operator, f"Unknown binary operator '{operator.lexeme}'.")

    def _call(self, paren, callee, arguments):
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(paren, "Can only call functions and classes.")

        if len(arguments) != callee.arity:
            raise LoxRuntimeError(paren, f"Expected {callee.arity} arguments but got {len(arguments)}.")

        return callee.call(self, arguments)

    # ==================== VALUES ====================

    @staticmethod
    def is_number(value):
        return isinstance(value, float)

    @staticmethod
    def check_number_operand(operator, operand):
        if not Interpreter.is_number(operand):
            raise LoxRuntimeError(operator, "Operand must be a number.")

    @staticmethod
    def check_number_operands(operator, left, right):
        if not (Interpreter.is_number(left) and Interpreter.is_number(right)):
            raise LoxRuntimeError(operator, "Operands must be numbers.")

    @staticmethod
    def is_truthy(value):
        """nil and false are falsy, everything else (including 0 and "") is truthy."""
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        return True

    @staticmethod
    def is_equal(left, right):
        """Lox equality: no coercion between types, so true != 1 even though Python says otherwise."""
        if left is None or right is None:
            return left is None and right is None
        if type(left) is not type(right):
            return False
        return left == right

    @staticmethod
    def stringify(value):
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            text = repr(value)
            return text[:-2] if text.endswith(".0") else text
        return str(value)
