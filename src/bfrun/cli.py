from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

from .api import RunOptions, compile_string, run_program
from .errors import BFError


def _dump_memory(tape, count: int) -> None:
    cells = [int(b) for b in tape[:count]]
    for i in range(0, len(cells), 8):
        print(" ".join(f"{v:3d}" for v in cells[i:i + 8]), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfrun",
        description="Compile and run a Brainfuck program.",
    )
    parser.add_argument("filename", help="Brainfuck source file")
    parser.add_argument("--dump", action="store_true", help="Print the compiled instruction listing and exit")
    parser.add_argument("--time", action="store_true", help="Report compile and execution time on stderr")
    parser.add_argument("--memory", type=int, default=0, metavar="N",
                        help="Print the first N tape cells on stderr after the run")
    args = parser.parse_args(argv)
    if args.memory < 0:
        parser.error("--memory must not be negative")

    try:
        with open(args.filename, "rb") as f:
            code = f.read()
    except FileNotFoundError:
        print(f"Couldn't find file: {args.filename}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Couldn't read file: {exc}", file=sys.stderr)
        return 1

    try:
        start = time.time()
        program = compile_string(code)
        end = time.time()
        if args.time:
            print(f"Compilation took {(end - start) * 1000:.2f} ms", file=sys.stderr)

        if args.dump:
            print(program.listing())
            return 0

        start = time.time()
        result = run_program(
            program,
            stdin=sys.stdin.buffer,
            stdout=sys.stdout.buffer,
            options=RunOptions(),
        )
        end = time.time()
    except BFError as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.time:
        print(f"Execution took {(end - start) * 1000:.2f} ms", file=sys.stderr)
    if args.memory > 0:
        _dump_memory(result.tape, args.memory)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
