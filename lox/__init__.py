# Lox language package
# This package provides the scanner, parser and tree-walking interpreter for Lox.
from .errors import ErrorReporter, LoxRuntimeError
from .interpreter import Interpreter, run_source
from .parser import Parser, parse_program
from .scanner import Scanner

__all__ = [
    'ErrorReporter',
    'Interpreter',
    'LoxRuntimeError',
    'Parser',
    'Scanner',
    'parse_program',
    'run_source',
]
