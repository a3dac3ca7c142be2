"""Frame allocation for FPS Lang.

The allocator walks the flat statement stream of a program and builds a
frame map: frame index (1-based) -> ordered list of statements to run in that
frame. It never executes statements. The only evaluation it performs is
resolving ``for`` bounds through the interpreter, against the live
environment.

Allocation is a small state machine over an active window of zero-based tick
positions ``[start, end)`` and a buffer of pending statements:

* plain statements are buffered;
* ``#n`` flushes the buffer into every tick of the window, then moves the
  window to ``[end, end + n)``;
* ``##`` flushes, then collapses the window to ``[end, end)``;
* ``for`` flushes what came before it, flushes its body into an expanded
  window anchored at the current start, and restores the window afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from .ast import (
    FRAME_STATEMENTS, FrameStatement, Node, Block, IfStmt, FrameMarker,
    FrameEnd, Comment, ForStmt, WhileStmt,
)
from .errors import FpsError, InvariantViolation
from .types import ErrorVal, RangeVal, RangeInclusiveVal, kind_of, to_string

if TYPE_CHECKING:
    from .interpreter import Interpreter


FrameMap = Dict[int, List[Node]]

# Loop expansion constants. A Range(s, e) bound schedules e - s - 1 extra
# spans, a RangeInclusive(s, e) bound e - s. When the window still ends at
# the first tick the expansion keeps that tick; otherwise it drops one.
FIRST_WINDOW_END = 1
RANGE_ITERATION_OFFSET = 1
INCLUSIVE_ITERATION_OFFSET = 0


@dataclass
class Window:
    start: int
    end: int

    def ticks(self) -> range:
        return range(self.start, self.end)


def loop_iterations(bound: Any) -> int:
    """Number of extra spans a ``for`` bound adds to the window."""
    if isinstance(bound, (RangeVal, RangeInclusiveVal)):
        if bound.end < bound.start:
            raise FpsError(ErrorVal('InvalidLoopBound', f'loop bound {to_string(bound)} runs backwards'))
        if isinstance(bound, RangeInclusiveVal):
            return bound.end - bound.start - INCLUSIVE_ITERATION_OFFSET
        return bound.end - bound.start - RANGE_ITERATION_OFFSET
    raise FpsError(ErrorVal('InvalidLoopBound', f'loop bound must be a range, got {kind_of(bound)} {to_string(bound)!r}'))


def expand_window(window: Window, iterations: int) -> Window:
    if window.end == FIRST_WINDOW_END:
        end = window.end + window.end * iterations
    else:
        end = window.end + window.end * iterations - 1
    return Window(window.start, end)


def require_frame_end(statements: List[Node]):
    """The last statement that is not a comment must be ``##``."""
    for stmt in reversed(statements):
        if isinstance(stmt, Comment):
            continue
        if isinstance(stmt, FrameEnd):
            return
        break
    raise FpsError(ErrorVal('MissingFrameEnd', "program must end with '##'"))


def lower(stmt: Node) -> FrameStatement:
    """Translate a statement into its frame-ready form.

    Block and if bodies are lowered recursively with their comments dropped.
    Markers and loops have no meaning inside a body and are rejected.
    """
    if isinstance(stmt, Block):
        return Block([lower(s) for s in stmt.statements if not isinstance(s, Comment)])
    if isinstance(stmt, IfStmt):
        else_block = lower(stmt.else_block) if stmt.else_block is not None else None
        return IfStmt(stmt.condition, lower(stmt.then_block), else_block)
    if isinstance(stmt, FRAME_STATEMENTS):
        return stmt
    raise FpsError(ErrorVal('MisplacedStatement', f'{type(stmt).__name__} cannot appear inside a block'))


@dataclass
class FrameAllocator:
    """Distributes a program's statements over frames."""
    interpreter: 'Interpreter'
    window: Window = field(default_factory=lambda: Window(0, FIRST_WINDOW_END))
    buffer: List[Node] = field(default_factory=list)
    frames: FrameMap = field(default_factory=dict)

    def allocate(self, statements: List[Node]) -> FrameMap:
        require_frame_end(statements)
        self.window = Window(0, FIRST_WINDOW_END)
        self.buffer = []
        self.frames = {}
        for stmt in statements:
            self.allocate_statement(stmt)
        return self.frames

    def allocate_statement(self, stmt: Node):
        if isinstance(stmt, Comment):
            return
        if isinstance(stmt, FrameMarker):
            self.flush(self.window)
            self.window = Window(self.window.end, self.window.end + stmt.duration)
            self.interpreter.debug(f"window -> [{self.window.start}, {self.window.end})", level=2)
            return
        if isinstance(stmt, FrameEnd):
            self.flush(self.window)
            self.window = Window(self.window.end, self.window.end)
            self.interpreter.debug(f"timeline closed at tick {self.window.end}", level=2)
            return
        if isinstance(stmt, ForStmt):
            self.allocate_loop(stmt)
            return
        if isinstance(stmt, WhileStmt):
            raise FpsError(ErrorVal('UnsupportedLoop', 'while loops cannot be scheduled onto frames'))
        if isinstance(stmt, FRAME_STATEMENTS):
            self.buffer.append(lower(stmt))
            return
        raise InvariantViolation(f"allocate: unexpected node type {type(stmt).__name__}")

    def allocate_loop(self, stmt: ForStmt):
        self.flush(self.window)
        saved_window = self.window
        bound = self.interpreter.evaluate(stmt.bound)
        iterations = loop_iterations(bound)
        self.interpreter.debug(f"for {to_string(bound)}: {iterations} iterations", level=3)
        self.buffer = [lower(s) for s in stmt.body.statements if not isinstance(s, Comment)]
        expanded = expand_window(saved_window, iterations)
        self.interpreter.debug(f"loop window [{expanded.start}, {expanded.end})", level=2)
        self.flush(expanded)
        self.window = saved_window

    def flush(self, window: Window):
        # every tick of the window gets an entry, even when nothing is buffered
        for tick in window.ticks():
            self.frames.setdefault(tick + 1, []).extend(self.buffer)
        self.interpreter.debug(
            f"flushed {len(self.buffer)} statements into ticks [{window.start}, {window.end})")
        self.buffer = []
