"""Lexical scopes. Each Environment maps names to values and links to the scope that encloses it.

Lookups are dynamic: nothing is resolved ahead of time, get/assign simply walk the chain outward to the globals.
Environments are plain objects shared by reference, so a closure keeps its defining scope alive for as long as the
function value itself is reachable.
"""

from lox.lang.error import LoxRuntimeError


class Environment:

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing  # None only for the global scope

    def define(self, name, value):
        """Binds name in this scope. Redeclaring an existing name simply overwrites it."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to token name in the nearest scope that has it."""
        env = self._find(name)
        return env.values[name.lexeme]

    def assign(self, name, value):
        """Rebinds an existing variable in the nearest scope that has it. Never creates a new binding."""
        env = self._find(name)
        env.values[name.lexeme] = value

    def _find(self, name):
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env
            env = env.enclosing
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def __repr__(self):
        depth, env = 0, self.enclosing
        while env is not None:
            depth, env = depth + 1, env.enclosing
        return f"Environment(depth={depth}, names={sorted(self.values)})"
