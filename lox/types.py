"""Runtime value helpers for Lox.

Lox values are represented directly by Python objects: `None` is nil, and
`bool`, `float` and `str` stand for booleans, numbers and strings. This
module holds the rules that give those objects Lox semantics: truthiness,
equality without coercion, and the text a value prints as.
"""

from __future__ import annotations

from typing import Any


def is_number(value: Any) -> bool:
    # bool is a subclass of int, never of float
    return isinstance(value, float)


def is_truthy(value: Any) -> bool:
    """nil and false are falsy; everything else, 0 and "" included, is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    # no coercion between kinds: 0 == false is false
    if type(a) is not type(b):
        return False
    return a == b


def stringify(value: Any) -> str:
    """Text a value prints as.

    Numbers use Python's shortest round-trip `repr` with a trailing `.0`
    dropped, so `6.0` prints as `6` and `1e7` as `10000000`. Magnitudes that
    `repr` writes in exponent form keep it (`1e+16`, `1e-05`); this is not
    the `1.0E7` style of Java's `Double.toString`.
    """
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    return str(value)
