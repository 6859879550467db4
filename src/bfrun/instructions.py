from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple, Union

# ---------------- Instruction nodes ----------------
@dataclass(frozen=True)
class Add:
    count: int  # '+' run length

@dataclass(frozen=True)
class Sub:
    count: int  # '-' run length

@dataclass(frozen=True)
class Left:
    count: int  # '<' run length

@dataclass(frozen=True)
class Right:
    count: int  # '>' run length

@dataclass(frozen=True)
class Output:
    count: int  # '.' run length

@dataclass(frozen=True)
class Input:
    count: int  # ',' run length

@dataclass(frozen=True)
class JumpIfZero:
    target: int  # index of the matching JumpIfNonZero

@dataclass(frozen=True)
class JumpIfNonZero:
    target: int  # index of the matching JumpIfZero

Instruction = Union[Add, Sub, Left, Right, Output, Input, JumpIfZero, JumpIfNonZero]

RUN_NODES = {
    '+': Add,
    '-': Sub,
    '<': Left,
    '>': Right,
    '.': Output,
    ',': Input,
}
SYMBOLS = {node: ch for ch, node in RUN_NODES.items()}
SYMBOLS[JumpIfZero] = '['
SYMBOLS[JumpIfNonZero] = ']'


class Program:
    """
    Compiled instruction list.

    Immutable once built: the executor only ever indexes into it. Jump
    targets are indices into this same list.
    """

    __slots__ = ('_instructions',)

    def __init__(self, instructions: Sequence[Instruction] = ()):
        self._instructions: Tuple[Instruction, ...] = tuple(instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self._instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return self._instructions == other._instructions

    def __hash__(self) -> int:
        return hash(self._instructions)

    def __repr__(self) -> str:
        return f"Program({list(self._instructions)!r})"

    @property
    def instructions(self) -> Tuple[Instruction, ...]:
        return self._instructions

    def to_source(self) -> str:
        """Emit canonical instruction text, expanding every run."""
        out: List[str] = []
        for ins in self._instructions:
            ch = SYMBOLS[type(ins)]
            if isinstance(ins, (JumpIfZero, JumpIfNonZero)):
                out.append(ch)
            else:
                out.append(ch * ins.count)
        return ''.join(out)

    def listing(self) -> str:
        width = len(str(max(len(self._instructions) - 1, 0)))
        lines: List[str] = []
        for i, ins in enumerate(self._instructions):
            if isinstance(ins, (JumpIfZero, JumpIfNonZero)):
                arg = f"-> {ins.target}"
            else:
                arg = f"x{ins.count}"
            lines.append(f"{i:>{width}}  {SYMBOLS[type(ins)]}  {type(ins).__name__:<13} {arg}")
        return '\n'.join(lines)
