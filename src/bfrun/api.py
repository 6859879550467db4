from __future__ import annotations

import contextlib
import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

import numpy as np

from .compiler import RunLengthCompiler
from .errors import BFError, make_io_error
from .executor import Executor
from .instructions import Program
from .state import TAPE_SIZE


@dataclass(frozen=True)
class RunOptions:
    tape_size: int = TAPE_SIZE

    def __post_init__(self) -> None:
        if self.tape_size < 1:
            raise ValueError(f"tape_size must be at least 1, got {self.tape_size}")


@dataclass(frozen=True)
class RunResult:
    tape: np.ndarray
    pointer: int
    steps: int
    output: Optional[bytes] = None


def compile_string(source: Union[str, bytes, bytearray]) -> Program:
    return RunLengthCompiler().compile(source)


def compile_file(path: str | Path) -> Program:
    p = Path(path)
    return compile_string(p.read_bytes())


def run_program(
    program: Program,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    input_data: bytes = b"",
    options: Optional[RunOptions] = None,
) -> RunResult:
    """
    Execute a compiled program on a fresh tape.

    When stdin is omitted, input comes from input_data. When stdout is
    omitted, output is collected and returned in RunResult.output.
    """
    opts = options or RunOptions()
    in_stream = stdin if stdin is not None else io.BytesIO(input_data)
    collected = io.BytesIO() if stdout is None else None
    out_stream = stdout if stdout is not None else collected

    executor = Executor(program, in_stream, out_stream, tape_size=opts.tape_size)
    try:
        m = executor.run()
    except BFError:
        # the run failure wins over a failing flush
        if stdout is not None:
            with contextlib.suppress(OSError):
                stdout.flush()
        raise

    if stdout is not None:
        try:
            stdout.flush()
        except OSError as exc:
            raise make_io_error(action="flush", pc=m.pc, exc=exc) from exc

    output = collected.getvalue() if collected is not None else None
    return RunResult(tape=m.tape, pointer=m.pointer, steps=m.steps, output=output)


def run_string(source: Union[str, bytes, bytearray], **kwargs) -> RunResult:
    return run_program(compile_string(source), **kwargs)


def run_file(path: str | Path, **kwargs) -> RunResult:
    return run_program(compile_file(path), **kwargs)
