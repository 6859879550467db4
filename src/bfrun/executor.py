from __future__ import annotations

from typing import BinaryIO

from .errors import make_io_error, make_runtime_error
from .instructions import (
    Add,
    Input,
    JumpIfNonZero,
    JumpIfZero,
    Left,
    Output,
    Program,
    Right,
    Sub,
)
from .state import TAPE_SIZE, MachineState


class Executor:
    """
    Runs a compiled Program against a fixed-size byte tape.

    Each call to run() starts from a fresh tape with the pointer and cursor
    at 0, so one Executor can run its program repeatedly without state
    leaking between runs. There is no step limit: a program that loops
    forever runs forever.
    """

    def __init__(self, program: Program, stdin: BinaryIO, stdout: BinaryIO, *, tape_size: int = TAPE_SIZE):
        if tape_size < 1:
            raise ValueError(f"tape_size must be at least 1, got {tape_size}")
        self.program = program
        self.stdin = stdin
        self.stdout = stdout
        self.tape_size = tape_size

    def run(self) -> MachineState:
        """
        Execute the program to completion and return the final machine state.

        Raises:
            BFRuntimeError: a move would leave the tape.
            BFIOError: the input or output stream raised OSError.
        """
        m = MachineState.fresh(self.tape_size)
        program = self.program
        tape = m.tape
        size = self.tape_size
        n = len(program)
        ptr = 0
        i = 0
        steps = 0

        try:
            while i < n:
                ins = program[i]
                steps += 1

                if isinstance(ins, Add):
                    tape[ptr] = (int(tape[ptr]) + ins.count) & 0xFF
                elif isinstance(ins, Sub):
                    tape[ptr] = (int(tape[ptr]) - ins.count) & 0xFF
                elif isinstance(ins, Right):
                    if ptr + ins.count >= size:
                        raise make_runtime_error(
                            message=f"pointer out of bounds moving right by {ins.count} (tape size {size})",
                            pc=i,
                            pointer=ptr,
                        )
                    ptr += ins.count
                elif isinstance(ins, Left):
                    if ptr < ins.count:
                        raise make_runtime_error(
                            message=f"pointer out of bounds moving left by {ins.count}",
                            pc=i,
                            pointer=ptr,
                        )
                    ptr -= ins.count
                elif isinstance(ins, JumpIfZero):
                    if tape[ptr] == 0:
                        i = ins.target
                elif isinstance(ins, JumpIfNonZero):
                    if tape[ptr] != 0:
                        i = ins.target
                elif isinstance(ins, Output):
                    self._write(int(tape[ptr]), ins.count, i)
                elif isinstance(ins, Input):
                    tape[ptr] = self._read_last(ins.count, i)

                i += 1
        finally:
            m.pointer = ptr
            m.pc = i
            m.steps = steps

        return m

    def _write(self, value: int, count: int, pc: int) -> None:
        try:
            if count == 1:
                self.stdout.write(bytes((value,)))
            else:
                self.stdout.write(bytes((value,)) * count)
        except OSError as exc:
            raise make_io_error(action='write', pc=pc, exc=exc) from exc

    def _read_last(self, count: int, pc: int) -> int:
        # Consume `count` bytes, keep only the last; exhaustion reads as 0.
        remaining = count
        last = 0
        try:
            while remaining:
                chunk = self.stdin.read(remaining)
                if not chunk:
                    return 0
                last = chunk[-1]
                remaining -= len(chunk)
        except OSError as exc:
            raise make_io_error(action='read', pc=pc, exc=exc) from exc
        return last
