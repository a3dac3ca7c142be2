"""JSON serialization/deserialization for the FPS AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. It supports a full round-trip for
every node type and every literal value kind, and renders frame maps for
inspection.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Program,
    FrameMarker,
    FrameEnd,
    Comment,
    ExprStmt,
    PrintStmt,
    VarDecl,
    Block,
    IfStmt,
    ForStmt,
    WhileStmt,
    Binary,
    Logical,
    Unary,
    Grouping,
    Literal,
    Variable,
    Assign,
    Ignore,
)
from .types import NULL, NullVal, RangeVal, RangeInclusiveVal


def value_to_obj(value: Any) -> Any:
    if isinstance(value, NullVal):
        return {"__value__": "Null"}
    if isinstance(value, RangeVal):
        return {"__value__": "Range", "start": value.start, "end": value.end}
    if isinstance(value, RangeInclusiveVal):
        return {"__value__": "RangeInclusive", "start": value.start, "end": value.end}
    return value


def value_from_obj(o: Any) -> Any:
    if isinstance(o, dict):
        kind = o["__value__"]
        if kind == "Null":
            return NULL
        if kind == "Range":
            return RangeVal(o["start"], o["end"])
        if kind == "RangeInclusive":
            return RangeInclusiveVal(o["start"], o["end"])
        raise ValueError(f"unknown value kind: {kind}")
    if isinstance(o, int) and not isinstance(o, bool):
        return float(o)
    return o


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    # Statements
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, FrameMarker):
        return {"type": "FrameMarker", "duration": node.duration}
    if isinstance(node, FrameEnd):
        return {"type": "FrameEnd"}
    if isinstance(node, Comment):
        return {"type": "Comment", "text": node.text}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, VarDecl):
        return {"type": "VarDecl", "name": node.name, "init": ast_to_obj(node.init)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_block": ast_to_obj(node.then_block),
            "else_block": ast_to_obj(node.else_block),
        }
    if isinstance(node, ForStmt):
        return {"type": "ForStmt", "bound": ast_to_obj(node.bound), "body": ast_to_obj(node.body)}
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}

    # Expressions
    if isinstance(node, Binary):
        return {"type": "Binary", "left": ast_to_obj(node.left), "op": node.op, "right": ast_to_obj(node.right)}
    if isinstance(node, Logical):
        return {"type": "Logical", "left": ast_to_obj(node.left), "op": node.op, "right": ast_to_obj(node.right)}
    if isinstance(node, Unary):
        return {"type": "Unary", "op": node.op, "right": ast_to_obj(node.right)}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "inner": ast_to_obj(node.inner)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": value_to_obj(node.value)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.name}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, Ignore):
        return {"type": "Ignore"}

    raise TypeError(f"Unsupported node for serialization: {type(node)}")


def ast_from_obj(o: Any) -> Any:
    if o is None:
        return None
    t = o.get("type")
    if t == "Program":
        return Program([ast_from_obj(n) for n in o["body"]])
    if t == "FrameMarker":
        return FrameMarker(o["duration"])
    if t == "FrameEnd":
        return FrameEnd()
    if t == "Comment":
        return Comment(o.get("text", ""))
    if t == "ExprStmt":
        return ExprStmt(ast_from_obj(o["expr"]))
    if t == "PrintStmt":
        return PrintStmt(ast_from_obj(o["expr"]))
    if t == "VarDecl":
        return VarDecl(o["name"], ast_from_obj(o.get("init")))
    if t == "Block":
        return Block([ast_from_obj(s) for s in o["statements"]])
    if t == "IfStmt":
        return IfStmt(ast_from_obj(o["condition"]), ast_from_obj(o["then_block"]), ast_from_obj(o.get("else_block")))
    if t == "ForStmt":
        return ForStmt(ast_from_obj(o["bound"]), ast_from_obj(o["body"]))
    if t == "WhileStmt":
        return WhileStmt(ast_from_obj(o["condition"]), ast_from_obj(o["body"]))
    if t == "Binary":
        return Binary(ast_from_obj(o["left"]), o["op"], ast_from_obj(o["right"]))
    if t == "Logical":
        return Logical(ast_from_obj(o["left"]), o["op"], ast_from_obj(o["right"]))
    if t == "Unary":
        return Unary(o["op"], ast_from_obj(o["right"]))
    if t == "Grouping":
        return Grouping(ast_from_obj(o["inner"]))
    if t == "Literal":
        return Literal(value_from_obj(o["value"]))
    if t == "Variable":
        return Variable(o["name"])
    if t == "Assign":
        return Assign(o["name"], ast_from_obj(o["value"]))
    if t == "Ignore":
        return Ignore()
    raise ValueError(f"Unknown AST node type: {t}")


def frames_to_obj(frames: Dict[int, List[Any]]) -> Dict[str, Any]:
    """Render a frame map with string keys in ascending frame order."""
    return {str(frame): [ast_to_obj(s) for s in frames[frame]] for frame in sorted(frames)}
