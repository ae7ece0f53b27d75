"""Abstract Syntax Tree (AST) definitions for the Lox language.

Expressions and statements are two closed families of frozen dataclasses.
The parser is the only producer of these nodes; the interpreter dispatches
on the concrete class. Nodes keep the tokens they were built from so that
runtime errors can report a line number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from .tokens import Token


###############################################################################
# Expressions
###############################################################################

@dataclass(frozen=True)
class Assign:
    name: Token
    value: 'Expr'


@dataclass(frozen=True)
class Binary:
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Ternary:
    condition: 'Expr'
    question: Token
    then_branch: 'Expr'
    colon: Token
    else_branch: 'Expr'


@dataclass(frozen=True)
class Grouping:
    expression: 'Expr'


@dataclass(frozen=True)
class Literal:
    value: Any  # None, bool, float or str


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Variable:
    name: Token


Expr = Union[Assign, Binary, Ternary, Grouping, Literal, Unary, Variable]


###############################################################################
# Statements
###############################################################################

@dataclass(frozen=True)
class Expression:
    expression: Expr


@dataclass(frozen=True)
class Print:
    expression: Expr


@dataclass(frozen=True)
class Var:
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block:
    statements: List['Stmt']


Stmt = Union[Expression, Print, Var, Block]
