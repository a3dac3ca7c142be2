# FPS Lang package
# This package provides a parser, frame allocator and interpreter for FPS Lang.
from .interpreter import run_program, Interpreter
from .errors import FpsError, InvariantViolation, ParseError
from .parser import parse_program

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'FpsError',
    'InvariantViolation',
    'ParseError',
]
