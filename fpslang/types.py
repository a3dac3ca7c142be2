"""Runtime values for FPS Lang.

Numbers, strings and booleans are carried as plain Python ``float``, ``str``
and ``bool`` objects. The remaining kinds (``Null`` and the two range
flavours) have small classes of their own. Every value is immutable, so the
interpreter can hand the same object to as many frames as it likes.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any
import math


class NullVal:
    """Marker object for the FPS ``null`` value."""
    def __repr__(self) -> str:
        return 'Null'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NullVal)

    def __hash__(self) -> int:
        return hash(NullVal)


NULL = NullVal()


@dataclass(frozen=True)
class RangeVal:
    """Half-open range ``start..end``."""
    start: int
    end: int

    def __repr__(self) -> str:
        return f"Range({self.start}..{self.end})"


@dataclass(frozen=True)
class RangeInclusiveVal:
    """Closed range ``start..=end``."""
    start: int
    end: int

    def __repr__(self) -> str:
        return f"RangeInclusive({self.start}..={self.end})"


@dataclass
class ErrorVal:
    """Describes an FPS error: a kind name plus a human readable message."""
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


def kind_of(value: Any) -> str:
    """Return the FPS kind name of a runtime value."""
    # bool must be tested before the numeric kinds
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, (int, float)):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, NullVal):
        return 'Null'
    if isinstance(value, RangeVal):
        return 'Range'
    if isinstance(value, RangeInclusiveVal):
        return 'RangeInclusive'
    return type(value).__name__


def format_number(x: float) -> str:
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return 'inf' if x > 0 else '-inf'
    # shortest round-trip digits, written out without an exponent
    text = format(Decimal(repr(float(x))), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def to_string(value: Any) -> str:
    """Convert a value to the text written by ``print``."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NullVal):
        return 'Null'
    if isinstance(value, RangeVal):
        return f"{value.start}..{value.end}"
    if isinstance(value, RangeInclusiveVal):
        return f"{value.start}..={value.end}"
    return str(value)
