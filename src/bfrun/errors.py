from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _line_and_column(source: str, position: int) -> Tuple[int, int]:
    if position < 0:
        position = len(source)
    before = source[:position]
    line = before.count('\n') + 1
    column = position - (before.rfind('\n') + 1) + 1
    return line, column


def _build_context(lines: List[str], line_no_1: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
    return "\n".join(out)


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'compile':
        if "unmatched ']'" in msg:
            return "Remove the extra ']' or add the '[' that should open this loop."
        if "unmatched '['" in msg:
            return "Every '[' needs a matching ']' later in the program."
        return None
    if kind == 'runtime':
        if 'moving left' in msg:
            return 'The program moved left of cell 0. The tape does not wrap.'
        if 'moving right' in msg:
            return 'The program moved past the last tape cell. The tape does not grow.'
        return None
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFCompileError(BFError):
    position: int
    line: int
    column: int
    context: str


@dataclass
class BFRuntimeError(BFError):
    pc: int
    pointer: int


@dataclass
class BFIOError(BFError):
    pc: int


def make_compile_error(*, message: str, source: str, position: int) -> BFCompileError:
    line, column = _line_and_column(source, position)
    lines = source.split('\n')
    ctx = _build_context(lines, line)
    hint = _hint_for(message, kind='compile')
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFCompileError(
        message=f"CompileError: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        position=position,
        line=line,
        column=column,
        context=ctx,
    )


def make_runtime_error(*, message: str, pc: int, pointer: int) -> BFRuntimeError:
    hint = _hint_for(message, kind='runtime')
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFRuntimeError(
        message=f"RuntimeError: {message} (instruction {pc}, pointer {pointer}){hint_block}",
        pc=pc,
        pointer=pointer,
    )


def make_io_error(*, action: str, pc: int, exc: OSError) -> BFIOError:
    return BFIOError(message=f"IOError: {action} failed at instruction {pc}: {exc}", pc=pc)
