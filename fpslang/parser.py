"""Parser for FPS Lang.

The source text is fed into a Lark LALR parser configured with the grammar
below, and the resulting parse tree is transformed into the AST defined in
``fpslang.ast`` by ``ASTTransformer``.

Frame markers and comments are ordinary statements here: the parser keeps
them in the flat statement stream and leaves their meaning to the frame
allocator. A comment that interrupts an expression is skipped by the
lexer instead. ``parse_program`` is the public entry point.
"""

from __future__ import annotations

import re
from typing import List

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from .ast import (
    Program, FrameMarker, FrameEnd, Comment, VarDecl, PrintStmt, IfStmt,
    ForStmt, WhileStmt, Block, ExprStmt, Assign, Logical, Binary, Unary,
    Literal, Variable, Grouping, Ignore, Node,
)
from .errors import ParseError
from .types import NULL, RangeVal, RangeInclusiveVal


FPS_GRAMMAR = r"""
    ?start: program
    program: statement*

    // Statements
    ?statement: FRAME_END                          -> frame_end
              | FRAME                              -> frame_marker
              | COMMENT                            -> comment
              | "let" IDENT ["=" expression] ";"   -> declaration
              | ("print" | "println") expression ";" -> print_stmt
              | if_stmt
              | "for" expression block             -> for_stmt
              | "while" expression block           -> while_stmt
              | block
              | expression ";"                     -> expr_stmt
              | ";"                                -> empty_stmt

    if_stmt: "if" expression block ["else" (block | if_stmt)]
    block: "{" statement* "}"

    // Expressions with precedence
    ?expression: assignment
    ?assignment: IDENT "=" assignment  -> assign
               | logic_or
    ?logic_or: logic_and (OR logic_and)*
    ?logic_and: equality (AND equality)*
    ?equality: comparison ((EQ | NE) comparison)*
    ?comparison: term ((GT | GE | LT | LE) term)*
    ?term: factor ((PLUS | MINUS) factor)*
    ?factor: unary ((STAR | SLASH) unary)*
    ?unary: (BANG | MINUS) unary
          | primary
    ?primary: NUMBER              -> number
            | STRING              -> string
            | RANGE               -> range_literal
            | "true"              -> true
            | "false"             -> false
            | "null"              -> null
            | IDENT               -> variable
            | "(" expression ")"  -> grouping

    // Tokens
    FRAME_END.2: "##"
    FRAME: /#[0-9]*/
    COMMENT.2: /\/\/[^\n]*/
    INLINE_COMMENT: /\/\/[^\n]*/
    RANGE.3: /[0-9]+\.\.=?[0-9]+/
    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/

    OR: "||"
    AND: "&&"
    EQ: "=="
    NE: "!="
    GE: ">="
    LE: "<="
    GT: ">"
    LT: "<"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    BANG: "!"

    %import common.WS
    %ignore WS
    %ignore INLINE_COMMENT
"""


FPS_PARSER = Lark(
    FPS_GRAMMAR,
    parser='lalr',
    lexer='contextual',
    propagate_positions=True,
    maybe_placeholders=False,
)

RANGE_RE = re.compile(r'(\d+)\.\.(=?)(\d+)')

# Loops have no counter variable; this name is kept out of user code.
RESERVED_NAMES = {'it'}


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def _name(self, token) -> str:
        name = str(token)
        if name in RESERVED_NAMES:
            raise ParseError(
                f"syntax error at line {token.line}, column {token.column}: '{name}' is reserved and not supported")
        return name

    def program(self, items):
        return Program(body=list(items))

    # Statements
    def frame_marker(self, items):
        digits = str(items[0])[1:]
        return FrameMarker(duration=int(digits) if digits else 1)

    def frame_end(self, items):
        return FrameEnd()

    def comment(self, items):
        return Comment(text=str(items[0])[2:].strip())

    def declaration(self, items):
        name = self._name(items[0])
        init = items[1] if len(items) > 1 else None
        return VarDecl(name=name, init=init)

    def print_stmt(self, items):
        return PrintStmt(items[0])

    def if_stmt(self, items):
        condition = items[0]
        then_block = items[1]
        else_block = items[2] if len(items) > 2 else None
        return IfStmt(condition, then_block, else_block)

    def for_stmt(self, items):
        return ForStmt(bound=items[0], body=items[1])

    def while_stmt(self, items):
        return WhileStmt(condition=items[0], body=items[1])

    def block(self, items):
        return Block(statements=list(items))

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    def empty_stmt(self, items):
        return ExprStmt(Ignore())  # no-op

    # Expressions
    def assign(self, items):
        return Assign(name=self._name(items[0]), value=items[1])

    def _fold(self, items: List, node_cls) -> Node:
        # items pattern: expr (op expr)*, folded left-associatively
        left = items[0]
        i = 1
        while i < len(items):
            left = node_cls(left, str(items[i]), items[i + 1])
            i += 2
        return left

    def logic_or(self, items):
        return self._fold(items, Logical)

    def logic_and(self, items):
        return self._fold(items, Logical)

    def equality(self, items):
        return self._fold(items, Binary)

    def comparison(self, items):
        return self._fold(items, Binary)

    def term(self, items):
        return self._fold(items, Binary)

    def factor(self, items):
        return self._fold(items, Binary)

    def unary(self, items):
        return Unary(op=str(items[0]), right=items[1])

    def number(self, items):
        return Literal(float(items[0]))

    def string(self, items):
        return Literal(str(items[0])[1:-1])

    def range_literal(self, items):
        start, inclusive, end = RANGE_RE.fullmatch(str(items[0])).groups()
        if inclusive:
            return Literal(RangeInclusiveVal(int(start), int(end)))
        return Literal(RangeVal(int(start), int(end)))

    def true(self, items):
        return Literal(True)

    def false(self, items):
        return Literal(False)

    def null(self, items):
        return Literal(NULL)

    def variable(self, items):
        return Variable(self._name(items[0]))

    def grouping(self, items):
        return Grouping(items[0])


def parse_program(source: str) -> Program:
    """Parse FPS source code into an AST Program.

    Syntax errors are raised as ``ParseError`` carrying the line and column
    reported by Lark.
    """
    try:
        tree = FPS_PARSER.parse(source)
    except UnexpectedInput as e:
        detail = str(e).strip().splitlines()[0]
        raise ParseError(f"syntax error at line {e.line}, column {e.column}: {detail}") from e
    try:
        return ASTTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        raise
