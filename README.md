# marksweep

A tiny virtual machine heap with a mark-and-sweep garbage collector. The heap
holds three kinds of object: integers, strings and pairs. A pair refers to two
other objects through its `head` and `tail`. An object stays alive while it can
be reached from the root stack. The collector frees every other object. It also
runs on its own when an allocation finds the heap at its threshold. The
threshold starts at 1024 objects. After each collection that leaves objects
alive, it is reset to twice the number of survivors.

## Installing

```
pip install .
```

## Using the library

```python
import sys
from marksweep.vm import VM

with VM(sys.stdout) as vm:
    number = vm.push_int(42)
    vm.push_root(number)

    text = vm.push_string("hello")
    vm.push_root(text)

    pair = vm.push_pair()
    pair.head = number
    pair.tail = text
    vm.push_root(pair)

    for i in range(100):
        vm.push_int(i)          # unrooted, so garbage

    vm.gc()                     # frees the 100 temporary integers
    vm.print_all_objects()

    vm.pop_root()               # pair
    vm.pop_root()               # string
    vm.gc()                     # frees the pair and the string
```

The VM writes its reports to the text stream it is given. When no stream is
given, it writes to standard output. These reports are a line for each object
freed and a summary after each collection. The summary gives the number
collected, the number remaining, and the running totals allocated and freed.

`VM.gc()` returns the number of objects it freed. `VM.num_objects`,
`VM.total_allocated`, `VM.total_freed` and `VM.gc_threshold` give the VM's
counters.

`VM.objects()` yields the live objects, newest first. `VM.describe_heap()`
returns the heap listing as text, and `VM.print_all_objects()` writes that
listing to the stream.

The object model is in `marksweep.objects`: `ObjectType` and `HeapObject`.
`marksweep.objects.format_object` renders an object as a value, following pairs
down through their heads and tails.

The root stack holds at most 1024 entries, and `None` may be pushed as a root.
`VM.push_root` raises `RootStackOverflow` when the stack is full. `VM.pop_root`
returns the root it removes, and raises `RootStackUnderflow` when the stack is
empty.

`marksweep.vm.run_gc_test(out)` runs a self-check. It builds a cycle of three
pairs, roots it and collects. It then unroots the cycle, collects again and
returns the number of objects left.

## Commands

Run the scripted demonstration. It allocates, collects, drops roots and
collects again:

```
marksweep-demo
```

Run the interactive session:

```
marksweep
```

The session asks how many integers to allocate and reads each one. It then asks
how many strings to allocate and reads each one. Input is read as tokens
separated by whitespace, so each string is a single word. Every value is
rooted.

The session then lists the heap and asks whether to run the collector; an
answer starting with `y` or `Y` runs it. If the input runs out, a number is not
a valid integer, or the root stack overflows, the command prints an error and
exits with status 1.

## What it does not do

The package models a heap and its collector only. It has no instruction set,
no bytecode and no language to run. Objects are created and linked through the
Python API or the two commands above.

## Running the tests

```
pip install .[test]
pytest
```