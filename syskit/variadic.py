"""Functions whose behaviour depends on how many arguments they get."""

from __future__ import annotations

import argparse
import sys
from typing import Any, TextIO


def combine(*args: Any) -> Any:
    """Three values are summed; two values give the first minus the second."""
    if len(args) == 3:
        a, b, c = args
        return a + b + c
    if len(args) == 2:
        a, b = args
        return a - b
    raise TypeError(f"combine() takes 2 or 3 arguments ({len(args)} given)")


def print_values(*args: Any, stream: TextIO | None = None) -> None:
    """Print one to three values, each on its own line."""
    if not 1 <= len(args) <= 3:
        raise TypeError(f"print_values() takes 1 to 3 values ({len(args)} given)")
    out = sys.stdout if stream is None else stream
    for value in args:
        print(value, file=out)


def main(argv: list[str] | None = None) -> int:
    argparse.ArgumentParser(description="Variable argument demonstration.").parse_args(
        argv
    )
    print("Hello, World!")
    print(combine(1, 2, 3))
    print(combine(1, 2))
    print_values(1)
    print("==========")
    print_values(1, 2)
    print("==========")
    print_values(1, 2, 3)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())