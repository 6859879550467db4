from __future__ import annotations

from typing import Union

from .errors import make_compile_error
from .instructions import RUN_NODES, JumpIfNonZero, JumpIfZero, Program
from .lexer import as_text, filter_source
from .state import CompilerState


class RunLengthCompiler:
    """
    Brainfuck compiler with run-length compression.

    Pipeline:
    - Filter: drop every character outside the eight-symbol alphabet
    - Compress: consecutive identical symbols (brackets excepted) become one
      instruction carrying a repeat count
    - Resolve: each bracket pair is matched at its ']' so both jumps hold
      indices into the final, compressed instruction list

    A '[' reserves its slot in the output list as soon as it is seen and is
    patched with the real target when its ']' is appended. Nothing is ever
    inserted into the list, so targets resolved earlier stay valid.
    """

    def __init__(self):
        self.state = CompilerState()

    def compile(self, source: Union[str, bytes, bytearray]) -> Program:
        """
        Compile raw source into a Program.

        Raises:
            BFCompileError: on an unmatched ']' or an unclosed '['.
        """
        text = as_text(source)
        state = self.state
        state.reset()

        for pos, ch in filter_source(text):
            if ch == '[':
                self._flush_run()
                state.loop_stack.append((len(state.program), pos))
                state.program.append(JumpIfZero(-1))
            elif ch == ']':
                self._flush_run()
                if not state.loop_stack:
                    raise make_compile_error(message="unmatched ']'", source=text, position=pos)
                open_index, _open_pos = state.loop_stack.pop()
                close_index = len(state.program)
                state.program.append(JumpIfNonZero(open_index))
                state.program[open_index] = JumpIfZero(close_index)
            elif ch == state.run_char:
                state.run_count += 1
            else:
                self._flush_run()
                state.run_char = ch
                state.run_count = 1

        self._flush_run()

        if state.loop_stack:
            _open_index, open_pos = state.loop_stack[-1]
            raise make_compile_error(message="unmatched '['", source=text, position=open_pos)

        program = Program(state.program)
        state.reset()
        return program

    def _flush_run(self) -> None:
        state = self.state
        if state.run_char is None:
            return
        state.program.append(RUN_NODES[state.run_char](state.run_count))
        state.run_char = None
        state.run_count = 0

