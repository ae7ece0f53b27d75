"""Tree-walking interpreter for the Lox language.

The interpreter executes the statements produced by the parser directly.
The current scope is passed explicitly to `execute` and `evaluate`, so a
block's scope only lives for the duration of the call that runs it and the
caller's scope is back in effect however that call ends. A runtime error
aborts every remaining statement of the current `interpret` call and is
reported once.
"""

from __future__ import annotations

import sys
from dataclasses import fields, is_dataclass
from typing import Any, List, Optional, TextIO

from .ast import (
    Assign, Binary, Ternary, Grouping, Literal, Unary, Variable,
    Expression, Print, Var, Block, Expr, Stmt,
)
from .environment import Environment
from .errors import ErrorReporter, LoxRuntimeError
from .parser import Parser
from .scanner import Scanner
from .tokens import Token, TokenType
from .types import is_equal, is_number, is_truthy, stringify


class Interpreter:
    """Executes Lox statements against a persistent global scope."""
    def __init__(
        self,
        reporter: Optional[ErrorReporter] = None,
        out: Optional[TextIO] = None,
        debug_level: int = 0,
        debug_file: str = 'debug.txt',
    ):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.out = out
        self.globals = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, statements: List[Stmt], repl: bool = False):
        if self.debug_level >= 1:
            self.debug(f"interpret {len(statements)} statement(s) repl={repl}")
        executed = 0
        try:
            for stmt in statements:
                try:
                    if repl and isinstance(stmt, Expression):
                        self.emit(stringify(self.evaluate(stmt.expression, self.globals)))
                    else:
                        self.execute(stmt, self.globals)
                except RecursionError:
                    raise LoxRuntimeError(first_token(stmt), "Expression nested too deeply.")
                executed += 1
        except LoxRuntimeError as e:
            if self.debug_level >= 1:
                self.debug(f"runtime error at line {e.token.line}: {e.message}")
            self.reporter.runtime_error(e)
        if self.debug_level >= 1:
            self.debug(f"executed {executed} of {len(statements)} statement(s)")

    def emit(self, text: str):
        print(text, file=self.out if self.out is not None else sys.stdout)

    # Statements
    def execute(self, stmt: Stmt, env: Environment):
        if isinstance(stmt, Expression):
            self.evaluate(stmt.expression, env)
            return
        if isinstance(stmt, Print):
            self.emit(stringify(self.evaluate(stmt.expression, env)))
            return
        if isinstance(stmt, Var):
            if stmt.initializer is not None:
                value = self.evaluate(stmt.initializer, env)
                env.define(stmt.name.lexeme, value)
                if self.debug_level >= 2:
                    self.debug(f"define {stmt.name.lexeme} = {stringify(value)}")
            else:
                env.define(stmt.name.lexeme)
                if self.debug_level >= 2:
                    self.debug(f"declare {stmt.name.lexeme} (unset)")
            return
        if isinstance(stmt, Block):
            self.execute_block(stmt.statements, Environment(enclosing=env))
            return
        raise NotImplementedError(f"execute: unexpected node type {type(stmt)}")

    def execute_block(self, statements: List[Stmt], env: Environment):
        if self.debug_level >= 3:
            self.debug(f"enter block depth {env.depth()}")
        try:
            for stmt in statements:
                self.execute(stmt, env)
        finally:
            if self.debug_level >= 3:
                self.debug(f"leave block depth {env.depth()}")

    # Expressions
    def evaluate(self, expr: Expr, env: Environment) -> Any:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression, env)
        if isinstance(expr, Variable):
            return env.get(expr.name)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value, env)
            env.assign(expr.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {expr.name.lexeme} = {stringify(value)}")
            return value
        if isinstance(expr, Unary):
            right = self.evaluate(expr.right, env)
            if expr.operator.type == TokenType.MINUS:
                self.check_number_operand(expr.operator, right)
                return -right
            if expr.operator.type == TokenType.BANG:
                return not is_truthy(right)
            raise NotImplementedError(f"unknown unary operator {expr.operator.lexeme}")
        if isinstance(expr, Ternary):
            # only the chosen branch is evaluated
            if is_truthy(self.evaluate(expr.condition, env)):
                return self.evaluate(expr.then_branch, env)
            return self.evaluate(expr.else_branch, env)
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left, env)
            right = self.evaluate(expr.right, env)
            return self.apply_binary_op(expr.operator, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(expr)}")

    def apply_binary_op(self, operator: Token, left: Any, right: Any) -> Any:
        op = operator.type
        if op == TokenType.COMMA:
            return right
        if op == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        self.check_number_operands(operator, left, right)
        if op == TokenType.MINUS:
            return left - right
        if op == TokenType.STAR:
            return left * right
        if op == TokenType.SLASH:
            if right == 0.0:
                raise LoxRuntimeError(operator, "Division by zero.")
            return left / right
        if op == TokenType.GREATER:
            return left > right
        if op == TokenType.GREATER_EQUAL:
            return left >= right
        if op == TokenType.LESS:
            return left < right
        if op == TokenType.LESS_EQUAL:
            return left <= right
        raise NotImplementedError(f"unknown binary operator {operator.lexeme}")

    def check_number_operand(self, operator: Token, operand: Any):
        if is_number(operand):
            return
        raise LoxRuntimeError(operator, "Operand must be a number.")

    def check_number_operands(self, operator: Token, left: Any, right: Any):
        if is_number(left) and is_number(right):
            return
        raise LoxRuntimeError(operator, "Operands must be numbers.")


def first_token(node: Any) -> Token:
    """Return the first token found in `node`, searching without recursion."""
    pending = [node]
    while pending:
        current = pending.pop(0)
        if isinstance(current, Token):
            return current
        if isinstance(current, list):
            pending.extend(current)
        elif is_dataclass(current):
            pending.extend(getattr(current, f.name) for f in fields(current))
    return Token(TokenType.EOF, '', None, 0)


def run_source(
    source: str,
    repl: bool = False,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    interpreter: Optional[Interpreter] = None,
) -> ErrorReporter:
    """Scan, parse and run `source`; return the reporter holding diagnostics.

    Nothing is executed if scanning or parsing reported an error. Pass an
    existing `interpreter` to keep its global scope between calls.
    """
    if interpreter is None:
        reporter = ErrorReporter(err)
        interpreter = Interpreter(reporter, out=out)
    else:
        reporter = interpreter.reporter
    tokens = Scanner(source, reporter).scan_tokens()
    statements = Parser(tokens, reporter).parse()
    if reporter.had_error:
        return reporter
    interpreter.interpret(statements, repl=repl)
    return reporter
