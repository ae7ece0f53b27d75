from __future__ import annotations

from typing import Any, Dict, Optional

from lox.errors import LoxRuntimeError
from lox.tokens import Token


class _Unset:
    """Slot marker for a variable declared without an initializer."""
    def __repr__(self) -> str:
        return '<unset>'


UNSET = _Unset()


class Environment:
    """One lexical scope mapping variable names to values.

    Scopes form a chain through `enclosing`; lookups and assignments walk
    outward until a scope declares the name. A declared name may hold
    `UNSET`, which is distinct from holding nil (`None`).
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any = UNSET):
        # redefinition in the same scope overwrites
        self.values[name] = value

    def get(self, name: Token) -> Any:
        env = self.resolve(name.lexeme)
        if env is None:
            raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
        value = env.values[name.lexeme]
        if value is UNSET:
            raise LoxRuntimeError(
                name, f"Variable '{name.lexeme}' cannot be accessed before initialization."
            )
        return value

    def assign(self, name: Token, value: Any):
        env = self.resolve(name.lexeme)
        if env is None:
            raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
        env.values[name.lexeme] = value

    def resolve(self, name: str) -> Optional['Environment']:
        """Return the innermost scope declaring `name`, or None."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env.enclosing
        return None

    def depth(self) -> int:
        n = 0
        env = self.enclosing
        while env is not None:
            n += 1
            env = env.enclosing
        return n
