"""Scripted walkthrough of rooting, allocation and collection."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from .vm import VM


def run_demo(out: Optional[TextIO] = None) -> tuple[int, int, int]:
    """Run the scripted scenario and return the object count after each stage."""
    out = out if out is not None else sys.stdout
    with VM(out) as vm:
        int_obj = vm.push_int(42)
        vm.push_root(int_obj)

        str_obj = vm.push_string("hello")
        vm.push_root(str_obj)

        pair_obj = vm.push_pair()
        pair_obj.head = int_obj
        pair_obj.tail = str_obj
        vm.push_root(pair_obj)

        # Unrooted temporaries; enough of them would trigger a collection.
        for i in range(100):
            vm.push_int(i)

        print("\n--- Objects after allocations and automatic GC ---", file=out)
        vm.print_all_objects()
        after_allocations = vm.num_objects
        print(f"Objects after allocations: {after_allocations}", file=out)

        vm.pop_root()  # the pair
        vm.pop_root()  # the string
        vm.gc()

        print("\n--- Objects after removing roots and manual GC ---", file=out)
        vm.print_all_objects()
        after_manual = vm.num_objects
        print(f"Objects after manual GC: {after_manual}", file=out)

        vm.pop_root()  # the integer
        vm.gc()

        print("\n--- Objects after removing all roots and final GC ---", file=out)
        vm.print_all_objects()
        after_final = vm.num_objects
        print(f"Objects after final GC: {after_final}", file=out)

    return after_allocations, after_manual, after_final


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point for the scripted walkthrough."""
    parser = argparse.ArgumentParser(
        prog="marksweep-demo",
        description="Allocate objects, drop roots and show what the collector frees.",
    )
    parser.parse_args(argv)
    run_demo(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())