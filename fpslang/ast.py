"""Abstract Syntax Tree (AST) definitions for FPS Lang.

The parser produces a ``Program`` whose body is the flat statement stream,
frame markers included. Statements fall into two groups:

* frame-ready statements (``ExprStmt``, ``PrintStmt``, ``VarDecl``,
  ``Block`` and ``IfStmt``), which the interpreter runs inside a frame;
* timeline statements (``FrameMarker``, ``FrameEnd``, ``Comment``,
  ``ForStmt`` and ``WhileStmt``), which only the frame allocator consumes.

The allocator translates the first group into frame lists and resolves the
second group away, so a frame never contains a timeline statement.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


# Expressions

@dataclass
class Binary(Node):
    left: Node
    op: str
    right: Node


@dataclass
class Logical(Node):
    left: Node
    op: str  # '&&' or '||'
    right: Node


@dataclass
class Unary(Node):
    op: str
    right: Node


@dataclass
class Grouping(Node):
    inner: Node


@dataclass
class Literal(Node):
    value: Any


@dataclass
class Variable(Node):
    name: str


@dataclass
class Assign(Node):
    name: str
    value: Node


@dataclass
class Ignore(Node):
    """Stands in for a token that carries no value; evaluates to null."""
    pass


# Frame-ready statements

@dataclass
class ExprStmt(Node):
    expr: Node


@dataclass
class PrintStmt(Node):
    expr: Node


@dataclass
class VarDecl(Node):
    name: str
    init: Optional[Node] = None


@dataclass
class Block(Node):
    statements: List[Node]


@dataclass
class IfStmt(Node):
    condition: Node
    then_block: Block
    else_block: Optional[Node] = None  # Block or a chained IfStmt


# Timeline statements

@dataclass
class FrameMarker(Node):
    duration: int = 1


@dataclass
class FrameEnd(Node):
    pass


@dataclass
class Comment(Node):
    text: str = ''


@dataclass
class ForStmt(Node):
    bound: Node
    body: Block


@dataclass
class WhileStmt(Node):
    condition: Node
    body: Block


@dataclass
class Program(Node):
    body: List[Node]


FrameStatement = Union[ExprStmt, PrintStmt, VarDecl, Block, IfStmt]

FRAME_STATEMENTS = (ExprStmt, PrintStmt, VarDecl, Block, IfStmt)
TIMELINE_STATEMENTS = (FrameMarker, FrameEnd, Comment, ForStmt, WhileStmt)
