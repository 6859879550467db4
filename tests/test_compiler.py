#!/usr/bin/env python3
"""
Tests for run-length compression and bracket resolution.
"""

import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfrun import BFCompileError, RunLengthCompiler
from bfrun.instructions import (
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


def compile_(src):
    return RunLengthCompiler().compile(src)


def assert_jumps_paired(program):
    for i, ins in enumerate(program):
        if isinstance(ins, JumpIfZero):
            partner = program[ins.target]
            assert isinstance(partner, JumpIfNonZero)
            assert partner.target == i
            assert ins.target > i
        elif isinstance(ins, JumpIfNonZero):
            partner = program[ins.target]
            assert isinstance(partner, JumpIfZero)
            assert partner.target == i


def test_runs_are_compressed():
    assert compile_("+++++").instructions == (Add(5),)
    assert compile_("+++++-").instructions == (Add(5), Sub(1))
    assert compile_(">>><<..,,,").instructions == (Right(3), Left(2), Output(2), Input(3))


def test_comments_between_identical_symbols_do_not_split_runs():
    assert compile_("+ a +\n+").instructions == (Add(3),)


def test_empty_source_gives_empty_program():
    program = compile_("no code here")
    assert len(program) == 0
    assert program == Program()


def test_simple_loop_targets():
    program = compile_("+[-]+")
    assert program.instructions == (Add(1), JumpIfZero(3), Sub(1), JumpIfNonZero(1), Add(1))


def test_nested_loops_keep_valid_targets():
    program = compile_("[[-]]")
    assert program.instructions == (
        JumpIfZero(4),
        JumpIfZero(3),
        Sub(1),
        JumpIfNonZero(1),
        JumpIfNonZero(0),
    )


def test_brackets_are_never_merged():
    program = compile_("+[[[]]]")
    assert len(program) == 7
    assert_jumps_paired(program)


@pytest.mark.parametrize("src", [
    "[]",
    "[>+<-]",
    "++[>++[>+<-]<-]",
    "[[[]][]]",
    "+[->>[-]<<]>[.]",
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++.",
])
def test_jump_targets_are_mutual(src):
    assert_jumps_paired(compile_(src))


def test_extra_close_bracket_fails():
    with pytest.raises(BFCompileError) as info:
        compile_("+]")
    err = info.value
    assert err.position == 1
    assert err.line == 1
    assert err.column == 2
    assert "unmatched ']'" in str(err)


def test_missing_close_bracket_fails():
    with pytest.raises(BFCompileError) as info:
        compile_("+\n[[-]")
    err = info.value
    assert err.position == 2
    assert err.line == 2
    assert err.column == 1
    assert "unmatched '['" in str(err)
    assert "Hint:" in str(err)


def test_close_before_open_fails():
    with pytest.raises(BFCompileError):
        compile_("][")


def test_compiler_is_reusable_after_failure():
    compiler = RunLengthCompiler()
    with pytest.raises(BFCompileError):
        compiler.compile("[[")
    assert compiler.compile("+").instructions == (Add(1),)


def test_to_source_round_trip():
    src = "++[->+<]>.,,"
    program = compile_("  " + src + " comment")
    assert program.to_source() == src
    assert compile_(program.to_source()) == program


def test_listing():
    listing = compile_("++[-]").listing().splitlines()
    assert len(listing) == 4
    assert "Add" in listing[0] and "x2" in listing[0]
    assert "JumpIfZero" in listing[1] and "-> 3" in listing[1]
    assert "JumpIfNonZero" in listing[3] and "-> 1" in listing[3]
