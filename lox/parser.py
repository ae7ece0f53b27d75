"""Recursive-descent parser for the Lox language.

Grammar, lowest to highest precedence::

    program     -> declaration* EOF
    declaration -> "var" IDENTIFIER ( "=" expression )? ";" | statement
    statement   -> exprStmt | printStmt | block
    block       -> "{" declaration* "}"
    expression  -> assignment ( "," assignment )*
    assignment  -> IDENTIFIER "=" assignment | ternary
    ternary     -> equality ( "?" ternary ":" ternary )?
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | "(" expression ")" | IDENTIFIER

Errors are reported to the `ErrorReporter` where they are found. A
`ParseError` then unwinds to the enclosing declaration, which skips ahead to
the next statement boundary and resumes, so one bad statement does not stop
the rest of the program from being checked. `parse` itself never raises.

The four binary levels (equality to factor) are parsed by precedence
climbing over `BINARY_PRECEDENCE`, which keeps the Python stack shallow for
deeply parenthesized input. Input nested past the interpreter stack is
reported as "Expression nested too deeply." like any other parse error.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Assign, Binary, Ternary, Grouping, Literal, Unary, Variable,
    Expression, Print, Var, Block, Expr, Stmt,
)
from .errors import ErrorReporter, ParseError
from .scanner import Scanner
from .tokens import Token, TokenType


# Tokens that start a statement; synchronization stops in front of them.
STATEMENT_STARTERS = {
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
}

# equality < comparison < term < factor
BINARY_PRECEDENCE = {
    TokenType.BANG_EQUAL: 1,
    TokenType.EQUAL_EQUAL: 1,
    TokenType.GREATER: 2,
    TokenType.GREATER_EQUAL: 2,
    TokenType.LESS: 2,
    TokenType.LESS_EQUAL: 2,
    TokenType.MINUS: 3,
    TokenType.PLUS: 3,
    TokenType.SLASH: 4,
    TokenType.STAR: 4,
}


class Parser:
    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.current = 0

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # Statements

    def parse_declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenType.VAR):
                return self.parse_var_declaration()
            return self.parse_statement()
        except ParseError:
            self.synchronize()
            return None
        except RecursionError:
            self.error(self.peek(), "Expression nested too deeply.")
            self.synchronize()
            return None

    def parse_var_declaration(self) -> Var:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer: Optional[Expr] = None
        if self.match(TokenType.EQUAL):
            initializer = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def parse_statement(self) -> Stmt:
        if self.match(TokenType.PRINT):
            return self.parse_print_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.parse_block())
        return self.parse_expression_statement()

    def parse_print_statement(self) -> Print:
        value = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def parse_expression_statement(self) -> Expression:
        value = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Expression(value)

    def parse_block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    # Expressions

    def parse_expression(self) -> Expr:
        # comma operator: evaluate left to right, keep the last value
        expr = self.parse_assignment()
        while self.match(TokenType.COMMA):
            comma = self.previous()
            right = self.parse_assignment()
            expr = Binary(expr, comma, right)
        return expr

    def parse_assignment(self) -> Expr:
        expr = self.parse_ternary()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.parse_assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # report but keep going; the tokens are well formed
            self.error(equals, "Invalid assignment target.")
        return expr

    def parse_ternary(self) -> Expr:
        expr = self.parse_binary()
        if self.match(TokenType.QUESTION):
            question = self.previous()
            then_branch = self.parse_ternary()
            colon = self.consume(TokenType.COLON, "Expect ':' after then branch of conditional expression.")
            else_branch = self.parse_ternary()
            expr = Ternary(expr, question, then_branch, colon, else_branch)
        return expr

    def parse_binary(self, min_precedence: int = 1) -> Expr:
        # precedence climbing over equality, comparison, term and factor;
        # operators of one level are folded left to right
        expr = self.parse_unary()
        while True:
            precedence = BINARY_PRECEDENCE.get(self.peek().type)
            if precedence is None or precedence < min_precedence:
                return expr
            operator = self.advance()
            right = self.parse_binary(precedence + 1)
            expr = Binary(expr, operator, right)

    def parse_unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.parse_unary()
            return Unary(operator, right)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.parse_expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), "Expect expression.")

    # Token stream helpers

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> ParseError:
        self.reporter.token_error(token, message)
        return ParseError(message)

    def synchronize(self):
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTERS:
                return
            self.advance()

    def match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == token_type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]


def parse_program(source: str, reporter: Optional[ErrorReporter] = None) -> List[Stmt]:
    """Scan and parse `source` into a list of statements."""
    reporter = reporter if reporter is not None else ErrorReporter()
    tokens = Scanner(source, reporter).scan_tokens()
    return Parser(tokens, reporter).parse()
