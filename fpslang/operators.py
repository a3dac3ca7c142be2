"""Operator table and truthiness rules.

Binary operators are looked up by the runtime kinds of both operands. A
missing kind pair is an ``InvalidOperation``; a kind pair that exists but
lacks the operator is an ``InvalidOperator``.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Dict, Tuple

from .errors import FpsError
from .types import ErrorVal, NullVal, kind_of, to_string


def _divide(a: float, b: float) -> float:
    if b == 0.0:
        raise FpsError(ErrorVal('DivisionByZero', f'cannot divide {to_string(a)} by zero'))
    return a / b


def _arith(fn: Callable[[Any, Any], Any]) -> Callable[[Any, Any], float]:
    return lambda a, b: float(fn(a, b))


NUMBER_OPS: Dict[str, Callable[[Any, Any], Any]] = {
    '+': _arith(operator.add),
    '-': _arith(operator.sub),
    '*': _arith(operator.mul),
    '/': _divide,
    '>': operator.gt,
    '>=': operator.ge,
    '<': operator.lt,
    '<=': operator.le,
    '==': operator.eq,
    '!=': operator.ne,
}

STRING_OPS: Dict[str, Callable[[Any, Any], Any]] = {
    '>': operator.gt,
    '>=': operator.ge,
    '<': operator.lt,
    '<=': operator.le,
    '==': operator.eq,
    '!=': operator.ne,
}

BOOLEAN_OPS: Dict[str, Callable[[Any, Any], Any]] = {
    '==': operator.eq,
    '!=': operator.ne,
}

OPERATOR_TABLE: Dict[Tuple[str, str], Dict[str, Callable[[Any, Any], Any]]] = {
    ('Number', 'Number'): NUMBER_OPS,
    ('String', 'String'): STRING_OPS,
    ('Boolean', 'Boolean'): BOOLEAN_OPS,
}


def apply_binary_op(op: str, left: Any, right: Any) -> Any:
    table = OPERATOR_TABLE.get((kind_of(left), kind_of(right)))
    if table is None:
        raise FpsError(ErrorVal(
            'InvalidOperation',
            f'cannot apply {op} to {kind_of(left)} {to_string(left)!r} and {kind_of(right)} {to_string(right)!r}',
        ))
    fn = table.get(op)
    if fn is None:
        raise FpsError(ErrorVal('InvalidOperator', f'operator {op} is not defined for {kind_of(left)}'))
    return fn(left, right)


def is_true(value: Any) -> bool:
    """Truthiness: 0, "" and null are false; ranges have no truth value."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return len(value) > 0
    if isinstance(value, NullVal):
        return False
    raise FpsError(ErrorVal('NotComparable', f'{kind_of(value)} has no truth value'))


def is_false(value: Any) -> bool:
    return not is_true(value)


def apply_unary_op(op: str, operand: Any) -> Any:
    if op == '-':
        if kind_of(operand) == 'Number':
            return -float(operand)
        raise FpsError(ErrorVal('Unimplemented', f'unary - is not implemented for {kind_of(operand)} {to_string(operand)!r}'))
    if op == '!':
        return is_false(operand)
    raise FpsError(ErrorVal('InvalidOperator', f'unknown unary operator {op}'))
