#!/usr/bin/env python3
"""
Whole-program runs through the interpreter driver.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bfvm import (
    ExecutionCancelled,
    Interpreter,
    Machine,
    OutOfBounds,
    Program,
    StepLimitExceeded,
    Tape,
    UnmatchedCloseBracket,
    UnmatchedOpenBracket,
    UnrecognizedInstruction,
)
from bfvm.interpreter import FINISHED, RUNNING

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def run(code, input_data=b"", tape_size=64, jump_table=False, **kwargs):
    out = io.BytesIO()
    machine = Machine(
        Program(code, jump_table=jump_table),
        Tape(tape_size),
        input=io.BytesIO(input_data),
        output=out,
    )
    interp = Interpreter(machine, **kwargs)
    return interp, out


@pytest.mark.parametrize("n", [0, 1, 255, 256, 300])
def test_repeated_increment_is_mod_256(n):
    interp, _ = run("+" * n)
    interp.run()
    assert interp.machine.tape.read_cell() == n % 256


def test_output_two():
    interp, out = run("++.")
    interp.run()
    assert out.getvalue() == bytes([2])


@pytest.mark.parametrize("jump_table", [False, True])
def test_multiply_loop(jump_table):
    interp, out = run("++[>++<-]>.", jump_table=jump_table)
    interp.run()
    assert out.getvalue() == bytes([4])


def test_clear_loop_terminates():
    interp, _ = run("+[-]")
    state = interp.run()
    assert state.finished
    assert state.cell == 0
    assert state.ip == 4


@pytest.mark.parametrize("jump_table", [False, True])
def test_hello_world(jump_table):
    interp, out = run(HELLO_WORLD, jump_table=jump_table)
    interp.run()
    assert out.getvalue() == b"Hello World!\n"


def test_echo_until_input_exhausted():
    interp, out = run(",[.,]", b"abc")
    interp.machine.eof = 'zero'
    interp.run()
    assert out.getvalue() == b"abc"


def test_output_before_error_is_kept():
    interp, out = run("+++.#.")
    with pytest.raises(UnrecognizedInstruction) as exc:
        interp.run()
    assert exc.value.symbol == ord('#')
    assert out.getvalue() == bytes([3])


def test_unmatched_brackets_abort_run():
    interp, _ = run("[+")
    with pytest.raises(UnmatchedOpenBracket):
        interp.run()
    interp, _ = run("+]")
    with pytest.raises(UnmatchedCloseBracket):
        interp.run()


def test_pointer_leaving_tape_aborts_run():
    interp, _ = run("<")
    with pytest.raises(OutOfBounds):
        interp.run()
    interp, _ = run(">>>>", tape_size=4)
    with pytest.raises(OutOfBounds):
        interp.run()


def test_states():
    interp, _ = run("+")
    assert interp.state == RUNNING
    assert interp.step() is False
    assert interp.state == FINISHED
    assert interp.step() is False


def test_step_limit():
    interp, _ = run("+[]", max_steps=50)
    with pytest.raises(StepLimitExceeded) as exc:
        interp.run()
    assert exc.value.steps == 50


def test_step_limit_not_hit_by_exact_budget():
    interp, _ = run("+++", max_steps=3)
    assert interp.run().steps == 3


def test_should_stop_cancels_infinite_loop():
    seen = []

    def should_stop(state):
        seen.append(state.steps)
        return state.steps >= 40

    interp, _ = run("+[]", should_stop=should_stop, poll_interval=10)
    with pytest.raises(ExecutionCancelled) as exc:
        interp.run()
    assert exc.value.steps == 40
    assert seen == [10, 20, 30, 40]


def test_invalid_driver_configuration():
    machine = Machine(Program(""))
    with pytest.raises(ValueError):
        Interpreter(machine, max_steps=-1)
    with pytest.raises(ValueError):
        Interpreter(machine, poll_interval=0)
