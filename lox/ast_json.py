"""JSON serialization for the Lox AST.

Converts statement and expression dataclasses into plain dict/list
structures suitable for JSON encoding, so that `python -m lox --emit-ast`
can show what the parser built.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Dict

from .tokens import Token


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "type": token.type.name,
        "lexeme": token.lexeme,
        "literal": token.literal,
        "line": token.line,
    }


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (bool, float, int, str)):
        return node

    if isinstance(node, Token):
        return token_to_obj(node)

    if isinstance(node, (list, tuple)):
        return [ast_to_obj(n) for n in node]

    # Node types
    if is_dataclass(node):
        obj: Dict[str, Any] = {"__node__": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj

    raise TypeError(f"Unsupported AST node type: {type(node)}")
