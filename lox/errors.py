"""Error types and the diagnostic channel shared by every stage."""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from lox.tokens import Token, TokenType


class LoxRuntimeError(Exception):
    """Raised while evaluating a program; names the offending token."""
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class ParseError(Exception):
    """Internal exception used to unwind the parser to a statement boundary."""
    pass


class ErrorReporter:
    """Collects lexical, parse and runtime diagnostics.

    Every diagnostic is written to `stream` (standard error unless one is
    given) and remembered in `diagnostics`. The driver inspects `had_error`
    and `had_runtime_error` to decide whether to go on and which exit
    status to use.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.had_error = False
        self.had_runtime_error = False
        self.diagnostics: List[str] = []

    def error(self, line: int, message: str):
        self.report(line, '', message)

    def token_error(self, token: Token, message: str):
        if token.type == TokenType.EOF:
            self.report(token.line, ' at end', message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def report(self, line: int, where: str, message: str):
        self._emit(f"[line {line}] Error{where}: {message}")
        self.had_error = True

    def runtime_error(self, error: LoxRuntimeError):
        self._emit(f"{error.message}\n[line {error.token.line}]")
        self.had_runtime_error = True

    def reset(self):
        # REPL: a bad line must not poison the next one
        self.had_error = False
        self.had_runtime_error = False
        self.diagnostics.clear()

    def _emit(self, text: str):
        self.diagnostics.append(text)
        print(text, file=self.stream if self.stream is not None else sys.stderr)
