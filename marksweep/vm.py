"""A small virtual machine with a mark-and-sweep garbage collector."""

from __future__ import annotations

import io
import sys
from typing import Iterator, Optional, TextIO

from .objects import HeapObject, ObjectType, format_pointer

GC_POOL_SIZE = 1024
GC_GROWTH_FACTOR = 2
GC_MAX_THRESHOLD = 1024 * 1024


class RootStackOverflow(RuntimeError):
    """Raised when more roots are pushed than the root stack can hold."""


class RootStackUnderflow(RuntimeError):
    """Raised when a root is popped from an empty root stack."""


def _describe_freed(obj: HeapObject) -> str:
    if obj.type is ObjectType.INT:
        return f"INT with value {obj.value}"
    if obj.type is ObjectType.STRING:
        return f"STRING with value '{obj.chars}'"
    return f"PAIR at {obj.address()}"


def _describe_live(obj: HeapObject) -> str:
    if obj.type is ObjectType.INT:
        return f"INT, value = {obj.value}"
    if obj.type is ObjectType.STRING:
        return f"STRING, value = '{obj.chars}'"
    return f"PAIR, head = {format_pointer(obj.head)}, tail = {format_pointer(obj.tail)}"


class VM:
    """Owns the heap and root stack, and collects unreachable objects."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self._out = out if out is not None else sys.stdout
        self._heap: list[HeapObject] = []  # oldest first
        self._roots: list[Optional[HeapObject]] = []
        self.gc_threshold = GC_POOL_SIZE
        self.total_allocated = 0
        self.total_freed = 0

    @property
    def num_objects(self) -> int:
        return len(self._heap)

    @property
    def roots(self) -> tuple[Optional[HeapObject], ...]:
        return tuple(self._roots)

    def push_root(self, obj: Optional[HeapObject]) -> None:
        """Make an object reachable until its root is popped."""
        if len(self._roots) >= GC_POOL_SIZE:
            raise RootStackOverflow("Root stack overflow")
        self._roots.append(obj)

    def pop_root(self) -> Optional[HeapObject]:
        """Remove and return the most recently pushed root."""
        if not self._roots:
            raise RootStackUnderflow("Root stack underflow")
        return self._roots.pop()

    def new_object(self, type_: ObjectType) -> HeapObject:
        """Allocate an object, collecting garbage first if the threshold is reached."""
        if self.num_objects >= self.gc_threshold or self.num_objects >= GC_MAX_THRESHOLD:
            self.gc()
        obj = HeapObject(type_)
        self._heap.append(obj)
        self.total_allocated += 1
        return obj

    def push_int(self, value: int) -> HeapObject:
        obj = self.new_object(ObjectType.INT)
        obj.value = value
        return obj

    def push_pair(self) -> HeapObject:
        return self.new_object(ObjectType.PAIR)

    def push_string(self, chars: str) -> HeapObject:
        obj = self.new_object(ObjectType.STRING)
        obj.chars = chars
        return obj

    def mark_all(self) -> None:
        """Mark every object reachable from the root stack."""
        pending = [root for root in self._roots if root is not None]
        while pending:
            obj = pending.pop()
            if obj.marked:
                continue
            obj.marked = True
            pending.extend(child for child in obj.children() if child is not None)

    def sweep(self) -> int:
        """Free unmarked objects, clear marks on survivors and return the count freed."""
        survivors: list[HeapObject] = []
        freed = 0
        # Walk newest first so messages come out in list order.
        for obj in reversed(self._heap):
            if obj.marked:
                obj.marked = False
                survivors.append(obj)
            else:
                print(
                    f"GC: Freeing object at {obj.address()} of type {_describe_freed(obj)}",
                    file=self._out,
                )
                freed += 1
        survivors.reverse()
        self._heap = survivors
        self.total_freed += freed
        if self._heap:
            self.gc_threshold = self.num_objects * GC_GROWTH_FACTOR
        return freed

    def gc(self) -> int:
        """Run a full collection and return how many objects were freed."""
        before = self.num_objects
        self.mark_all()
        self.sweep()
        collected = before - self.num_objects
        print(
            f"GC: Collected {collected} objects, {self.num_objects} remaining. "
            f"Total allocated: {self.total_allocated}, freed: {self.total_freed}",
            file=self._out,
        )
        return collected

    def objects(self) -> Iterator[HeapObject]:
        """Iterate over live objects, most recently allocated first."""
        return reversed(self._heap)

    def describe_heap(self) -> str:
        """Text listing every object currently on the heap."""
        lines = [f"Current objects in heap ({self.num_objects}):"]
        lines.extend(
            f"  [{idx}] at {obj.address()}: {_describe_live(obj)}"
            for idx, obj in enumerate(self.objects())
        )
        if not self._heap:
            lines.append("  (none)")
        return "\n".join(lines) + "\n"

    def print_all_objects(self) -> None:
        self._out.write(self.describe_heap())

    def close(self) -> None:
        """Release every object and root."""
        self._heap.clear()
        self._roots.clear()

    def __enter__(self) -> "VM":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def run_gc_test(out: Optional[TextIO] = None) -> int:
    """Exercise the collector with a reference cycle; return the final object count."""
    out = out if out is not None else sys.stdout
    print("=== Starting GC Test ===", file=out)
    with VM(out) as vm:
        vm.push_root(None)
        root1 = vm.push_int(42)
        vm.push_pair()
        vm.push_string("Hello, GC!")
        vm.pop_root()
        vm.push_root(root1)

        for i in range(100):
            vm.push_int(i)

        a = vm.push_pair()
        b = vm.push_pair()
        c = vm.push_pair()
        a.head, a.tail = b, c
        b.head, b.tail = a, c
        c.head, c.tail = a, b

        vm.push_root(a)
        print(f"Objects before GC: {vm.num_objects}", file=out)
        vm.gc()
        print(f"Objects after GC: {vm.num_objects}", file=out)
        vm.pop_root()
        vm.gc()
        remaining = vm.num_objects
        print(f"Objects after removing root and GC: {remaining}", file=out)
    print("=== GC Test Complete ===", file=out)
    return remaining


__all__ = [
    "GC_GROWTH_FACTOR",
    "GC_MAX_THRESHOLD",
    "GC_POOL_SIZE",
    "RootStackOverflow",
    "RootStackUnderflow",
    "VM",
    "run_gc_test",
]

_ = io  # text streams are accepted wherever ``out`` is taken