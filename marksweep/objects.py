"""Heap object model used by the mark-and-sweep virtual machine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


class ObjectType(enum.Enum):
    """Kinds of values that live on the managed heap."""

    INT = "INT"
    PAIR = "PAIR"
    STRING = "STRING"


@dataclass(eq=False)
class HeapObject:
    """A single heap cell: an integer, a string, or a pair of references."""

    type: ObjectType
    value: int = 0
    head: Optional["HeapObject"] = field(default=None, repr=False)
    tail: Optional["HeapObject"] = field(default=None, repr=False)
    chars: str = ""
    marked: bool = False

    @property
    def length(self) -> int:
        """Number of characters held by a string object."""
        return len(self.chars)

    def address(self) -> str:
        """A stable, unique hexadecimal identifier for this object."""
        return f"0x{id(self):x}"

    def children(self) -> tuple[Optional["HeapObject"], ...]:
        """Objects directly referenced by this one."""
        if self.type is ObjectType.PAIR:
            return (self.head, self.tail)
        return ()


def format_object(obj: Optional[HeapObject]) -> str:
    """Render an object the way it would be printed as a value."""
    if obj is None:
        return "NULL"
    if obj.type is ObjectType.INT:
        return str(obj.value)
    if obj.type is ObjectType.STRING:
        return f'"{obj.chars}"'
    return f"({format_object(obj.head)}, {format_object(obj.tail)})"


def format_pointer(obj: Optional[HeapObject]) -> str:
    """Render a reference as an address, or ``(nil)`` for no object."""
    return "(nil)" if obj is None else obj.address()