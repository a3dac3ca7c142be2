"""Interpreter for FPS Lang.

Running a program happens in two strictly ordered phases:

1. allocation: ``FrameAllocator`` turns the flat statement stream into a
   frame map (frame index -> statements), evaluating ``for`` bounds against
   the live environment along the way;
2. execution: frames run in ascending order against one shared root scope,
   and every ``print`` writes a line tagged with the current frame.

Errors in either phase propagate as ``FpsError``; lines already printed stay
printed.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional, TextIO

from .ast import (
    Program, Node, Binary, Logical, Unary, Grouping, Literal, Variable,
    Assign, Ignore, ExprStmt, PrintStmt, VarDecl, Block, IfStmt,
    ForStmt, WhileStmt, TIMELINE_STATEMENTS,
)
from .environment import Environment
from .errors import FpsError, InvariantViolation
from .frames import FrameAllocator, FrameMap
from .operators import apply_binary_op, apply_unary_op, is_true
from .parser import parse_program
from .types import NULL, ErrorVal, kind_of, to_string


class Interpreter:
    """Core interpreter that allocates and runs FPS programs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 out: Optional[TextIO] = None, environment: Optional[Environment] = None):
        self.environment = environment if environment is not None else Environment()
        self.out = out
        self.current_frame = 0
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program) -> FrameMap:
        try:
            return self.interpret(program)
        finally:
            self.close()

    def interpret(self, program: Program) -> FrameMap:
        frames = self.allocate(program.body)
        self.drive(frames)
        return frames

    def allocate(self, statements: List[Node]) -> FrameMap:
        return FrameAllocator(self).allocate(statements)

    def drive(self, frames: FrameMap):
        for frame in sorted(frames):
            self.current_frame = frame
            self.debug(f"frame {frame}: {len(frames[frame])} statements")
            for stmt in frames[frame]:
                self.execute(stmt)

    def emit(self, value: Any):
        print(f"FPS {self.current_frame} -> {to_string(value)}", file=self.out or sys.stdout)

    def execute_block(self, statements: List[Node]):
        with self.environment.child_scope():
            for stmt in statements:
                self.execute(stmt)

    def execute(self, node: Node):
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr)
            return
        if isinstance(node, PrintStmt):
            self.emit(self.evaluate(node.expr))
            return
        if isinstance(node, VarDecl):
            value = self.evaluate(node.init) if node.init is not None else NULL
            self.environment.declare(node.name, value)
            self.debug(f"declare {node.name}: {kind_of(value)} = {to_string(value)}", level=2)
            return
        if isinstance(node, Block):
            self.execute_block(node.statements)
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition)
            truthy = is_true(cond)
            self.debug(f"if condition {to_string(cond)} -> {truthy}", level=3)
            if truthy:
                self.execute(node.then_block)
            elif node.else_block is not None:
                self.execute(node.else_block)
            return
        if isinstance(node, (ForStmt, WhileStmt)):
            raise InvariantViolation(f"{type(node).__name__} reached frame {self.current_frame} unallocated")
        if isinstance(node, TIMELINE_STATEMENTS):
            return
        raise InvariantViolation(f"execute: unexpected node type {type(node).__name__}")

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.inner)
        if isinstance(node, Variable):
            return self.environment.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.environment.assign(node.name, value)
            self.debug(f"assign {node.name} = {to_string(value)}", level=2)
            return self.environment.get(node.name)
        if isinstance(node, Unary):
            return apply_unary_op(node.op, self.evaluate(node.right))
        if isinstance(node, Logical):
            left = self.evaluate(node.left)
            # Short-circuit: the right operand only runs when it decides the result
            if node.op == '&&':
                return self.evaluate(node.right) if is_true(left) else left
            if node.op == '||':
                return left if is_true(left) else self.evaluate(node.right)
            raise FpsError(ErrorVal('InvalidOperator', f'unknown logical operator {node.op}'))
        if isinstance(node, Binary):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return apply_binary_op(node.op, left, right)
        if isinstance(node, Ignore):
            return NULL
        raise InvariantViolation(f"evaluate: unexpected node type {type(node).__name__}")


def run_program(source: str, debug_level: int = 0, out: Optional[TextIO] = None) -> FrameMap:
    """Convenience function to parse and run an FPS program from a source string."""
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, out=out)
    return interpreter.run(program)
