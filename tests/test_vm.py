import io
import re

import pytest

from marksweep.objects import ObjectType
from marksweep.vm import (
    GC_POOL_SIZE,
    VM,
    RootStackOverflow,
    RootStackUnderflow,
    run_gc_test,
)


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def vm(out):
    return VM(out)


def test_allocation_counts(vm):
    vm.push_int(1)
    vm.push_string("a")
    vm.push_pair()
    assert vm.num_objects == 3
    assert vm.total_allocated == 3
    assert vm.total_freed == 0


def test_allocated_values(vm):
    i = vm.push_int(42)
    s = vm.push_string("hello")
    p = vm.push_pair()
    assert (i.type, i.value) == (ObjectType.INT, 42)
    assert (s.type, s.chars, s.length) == (ObjectType.STRING, "hello", 5)
    assert (p.type, p.head, p.tail) == (ObjectType.PAIR, None, None)


def test_objects_newest_first(vm):
    a = vm.push_int(1)
    b = vm.push_int(2)
    c = vm.push_int(3)
    assert list(vm.objects()) == [c, b, a]


def test_pop_root_returns_last(vm):
    a = vm.push_int(1)
    b = vm.push_int(2)
    vm.push_root(a)
    vm.push_root(b)
    assert vm.pop_root() is b
    assert vm.roots == (a,)


def test_pop_root_underflow(vm):
    with pytest.raises(RootStackUnderflow):
        vm.pop_root()


def test_push_root_overflow(vm):
    for _ in range(GC_POOL_SIZE):
        vm.push_root(None)
    with pytest.raises(RootStackOverflow):
        vm.push_root(None)


def test_gc_frees_unrooted(vm):
    kept = vm.push_int(1)
    vm.push_int(2)
    vm.push_int(3)
    vm.push_root(kept)
    assert vm.gc() == 2
    assert list(vm.objects()) == [kept]
    assert vm.total_freed == 2


def test_gc_keeps_pair_children(vm):
    head = vm.push_int(42)
    tail = vm.push_string("hello")
    pair = vm.push_pair()
    pair.head, pair.tail = head, tail
    vm.push_int(7)
    vm.push_root(pair)
    vm.gc()
    assert set(vm.objects()) == {head, tail, pair}


def test_gc_collects_unrooted_cycle(vm):
    a = vm.push_pair()
    b = vm.push_pair()
    a.head, a.tail = b, b
    b.head, b.tail = a, a
    vm.push_root(a)
    vm.gc()
    assert vm.num_objects == 2
    vm.pop_root()
    vm.gc()
    assert vm.num_objects == 0


def test_null_root_is_ignored(vm):
    vm.push_root(None)
    vm.push_int(1)
    vm.gc()
    assert vm.num_objects == 0


def test_marks_cleared_after_gc(vm):
    a = vm.push_int(1)
    vm.push_root(a)
    vm.gc()
    assert all(not obj.marked for obj in vm.objects())


def test_threshold_doubles_survivors(vm):
    for value in range(3):
        vm.push_root(vm.push_int(value))
    vm.gc()
    assert vm.gc_threshold == vm.num_objects * 2


def test_threshold_unchanged_when_heap_empty(vm):
    vm.push_int(1)
    vm.gc()
    assert vm.gc_threshold == GC_POOL_SIZE


def test_automatic_gc_on_threshold(vm, out):
    for value in range(GC_POOL_SIZE):
        vm.push_int(value)
    assert vm.num_objects == GC_POOL_SIZE
    vm.push_int(-1)
    assert vm.num_objects == 1
    assert vm.total_freed == GC_POOL_SIZE
    assert vm.total_allocated == GC_POOL_SIZE + 1
    assert "GC: Collected" in out.getvalue()


def test_sweep_messages(vm, out):
    vm.push_int(5)
    vm.push_string("hi")
    assert vm.gc() == 2
    assert vm.num_objects == 0
    text = out.getvalue()
    assert "GC: Freeing object at" in text
    assert "of type INT with value 5" in text
    assert "of type STRING with value 'hi'" in text


def test_gc_summary_line(vm, out):
    kept = vm.push_int(1)
    vm.push_root(kept)
    vm.push_int(2)
    assert vm.gc() == 1
    assert list(vm.objects()) == [kept]
    assert "GC: Collected 1 objects, 1 remaining. Total allocated: 2, freed: 1" in out.getvalue()


def test_describe_empty_heap(vm):
    assert vm.describe_heap() == "Current objects in heap (0):\n  (none)\n"


def test_describe_heap_entries(vm):
    i = vm.push_int(42)
    s = vm.push_string("hello")
    p = vm.push_pair()
    p.head = i
    lines = vm.describe_heap().splitlines()
    assert lines[0] == "Current objects in heap (3):"
    assert lines[1] == f"  [0] at {p.address()}: PAIR, head = {i.address()}, tail = (nil)"
    assert lines[2] == f"  [1] at {s.address()}: STRING, value = 'hello'"
    assert lines[3] == f"  [2] at {i.address()}: INT, value = 42"


def test_print_all_objects_writes_description(vm, out):
    vm.push_int(3)
    vm.print_all_objects()
    assert out.getvalue() == vm.describe_heap()


def test_context_manager_closes(out):
    with VM(out) as machine:
        machine.push_root(machine.push_int(1))
        machine.push_int(2)
    assert machine.num_objects == 0
    assert machine.roots == ()


def test_run_gc_test_output(out):
    remaining = run_gc_test(out)
    text = out.getvalue()
    assert remaining == 1
    assert text.startswith("=== Starting GC Test ===\n")
    assert text.endswith("=== GC Test Complete ===\n")
    before = int(re.search(r"Objects before GC: (\d+)", text).group(1))
    after = int(re.search(r"Objects after GC: (\d+)", text).group(1))
    assert after < before
    assert f"Objects after removing root and GC: {remaining}" in text