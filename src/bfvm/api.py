from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

from .errors import BFVMError
from .interpreter import DEFAULT_POLL_INTERVAL, Interpreter
from .machine import EOF_UNCHANGED, Machine
from .program import load_program, read_program_file
from .state import MachineState
from .tape import BOUNDS_ERROR, DEFAULT_TAPE_SIZE, Tape


@dataclass(frozen=True)
class RunOptions:
    tape_size: int = DEFAULT_TAPE_SIZE
    bounds: str = BOUNDS_ERROR
    eof: str = EOF_UNCHANGED
    jump_table: bool = False
    strip_comments: bool = False
    max_steps: Optional[int] = None
    should_stop: Optional[Callable[[MachineState], bool]] = None
    poll_interval: int = DEFAULT_POLL_INTERVAL


@dataclass(frozen=True)
class RunResult:
    output: bytes
    state: MachineState
    tape: bytes


def build_interpreter(
    source: Union[bytes, str],
    *,
    options: Optional[RunOptions] = None,
    input: Optional[BinaryIO] = None,
    output: Optional[BinaryIO] = None,
) -> Interpreter:
    opts = options or RunOptions()
    program = load_program(source, strip_comments=opts.strip_comments, jump_table=opts.jump_table)
    tape = Tape(opts.tape_size, bounds=opts.bounds)
    machine = Machine(program, tape, input=input, output=output, eof=opts.eof)
    return Interpreter(
        machine,
        max_steps=opts.max_steps,
        should_stop=opts.should_stop,
        poll_interval=opts.poll_interval,
    )


def run_bytes(
    source: Union[bytes, str],
    input_data: bytes = b"",
    *,
    options: Optional[RunOptions] = None,
) -> RunResult:
    """Run a program against in-memory input and collect everything it writes.

    Errors propagate to the caller with the bytes written so far attached
    as ``err.output``.
    """
    out = io.BytesIO()
    interp = build_interpreter(source, options=options, input=io.BytesIO(input_data), output=out)
    try:
        state = interp.run()
    except BFVMError as err:
        err.output = out.getvalue()
        raise
    return RunResult(output=out.getvalue(), state=state, tape=interp.machine.tape.cells.tobytes())


def run_string(source: str, input_data: str = "", *, options: Optional[RunOptions] = None) -> RunResult:
    return run_bytes(source, input_data.encode('utf-8'), options=options)


def run_file(
    path: Union[str, Path],
    input_data: bytes = b"",
    *,
    options: Optional[RunOptions] = None,
) -> RunResult:
    return run_bytes(read_program_file(path), input_data, options=options)
