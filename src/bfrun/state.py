from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .instructions import Instruction

TAPE_SIZE = 65536


@dataclass
class CompilerState:
    program: List[Instruction] = field(default_factory=list)
    # (output index of the reserved '[' slot, offset of '[' in the raw source)
    loop_stack: List[Tuple[int, int]] = field(default_factory=list)
    run_char: Optional[str] = None
    run_count: int = 0

    def reset(self) -> None:
        self.program.clear()
        self.loop_stack.clear()
        self.run_char = None
        self.run_count = 0


@dataclass
class MachineState:
    tape: np.ndarray
    pointer: int = 0
    pc: int = 0
    steps: int = 0

    @classmethod
    def fresh(cls, tape_size: int = TAPE_SIZE) -> "MachineState":
        return cls(tape=np.zeros(tape_size, dtype=np.uint8))
