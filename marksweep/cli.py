"""Interactive command: allocate user-supplied values and optionally collect."""

from __future__ import annotations

import argparse
import sys
from typing import Iterator, Optional, Sequence, TextIO

from .vm import VM, RootStackOverflow


class _TokenReader:
    """Reads whitespace-separated tokens from a text stream on demand."""

    def __init__(self, stream: TextIO) -> None:
        self._tokens = self._generate(stream)

    @staticmethod
    def _generate(stream: TextIO) -> Iterator[str]:
        for line in stream:
            yield from line.split()

    def word(self) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise EOFError("unexpected end of input") from None

    def integer(self) -> int:
        token = self.word()
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected an integer, got {token!r}") from None


def _prompt(out: TextIO, text: str) -> None:
    out.write(text)
    out.flush()


def run_interactive(stdin: Optional[TextIO] = None, out: Optional[TextIO] = None) -> int:
    """Ask for integers and strings, root them all, and report the heap.

    Returns the number of objects on the heap when the session ends.
    """
    stdin = stdin if stdin is not None else sys.stdin
    out = out if out is not None else sys.stdout
    reader = _TokenReader(stdin)

    with VM(out) as vm:
        _prompt(out, "Enter number of integers to allocate: ")
        for i in range(reader.integer()):
            _prompt(out, f"Enter integer {i + 1}: ")
            vm.push_root(vm.push_int(reader.integer()))

        _prompt(out, "Enter number of strings to allocate: ")
        for i in range(reader.integer()):
            _prompt(out, f"Enter string {i + 1}: ")
            vm.push_root(vm.push_string(reader.word()))

        print("\n--- Objects before GC ---", file=out)
        vm.print_all_objects()
        print(f"Objects before GC: {vm.num_objects}", file=out)

        _prompt(out, "Run garbage collector now? (y/n): ")
        answer = reader.word()
        if answer[0] in "yY":
            vm.gc()
            print("\n--- Objects after GC ---", file=out)
            vm.print_all_objects()
            print(f"Objects after GC: {vm.num_objects}", file=out)

        remaining = vm.num_objects
        print("Freeing VM...", file=out)
    return remaining


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point for the interactive session."""
    parser = argparse.ArgumentParser(
        prog="marksweep",
        description="Allocate integers and strings on a managed heap and collect garbage.",
    )
    parser.parse_args(argv)
    try:
        run_interactive(sys.stdin, sys.stdout)
    except (EOFError, ValueError, RootStackOverflow) as exc:
        print(f"\nerror: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())