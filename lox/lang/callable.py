"""Callable values: user-defined functions (closures) and native functions provided by the host."""

import time
from abc import ABC, abstractmethod

from lox.lang.environment import Environment


class LoxCallable(ABC):
    """Anything that can be invoked with a call expression."""

    @property
    @abstractmethod
    def arity(self):
        """Exact number of arguments the callable accepts."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Invokes the callable with already-evaluated arguments (len(arguments) == arity) and returns a value."""


class LoxFunction(LoxCallable):
    """A function declaration paired with the environment that was active when it was declared."""

    def __init__(self, declaration, closure):
        self.declaration = declaration
        self.closure = closure

    @property
    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        # parameters live in a fresh scope chained to the closure, not to the caller's scope
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        signal = interpreter.execute_block(self.declaration.body, environment)
        return None if signal is None else signal.value

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"

    def __repr__(self):
        return f"LoxFunction({self.declaration.name.lexeme!r}, arity={self.arity})"


class NativeFunction(LoxCallable):
    """A function implemented in Python. fn receives the arguments positionally."""

    def __init__(self, name, arity, fn):
        self.name = name
        self._arity = arity
        self.fn = fn

    @property
    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.fn(*arguments)

    def __str__(self):
        return "<native fn>"

    def __repr__(self):
        return f"NativeFunction({self.name!r}, arity={self.arity})"


def natives():
    """Returns the native functions every global environment starts with."""
    return [
        NativeFunction("clock", 0, lambda: float(time.time())),
    ]
