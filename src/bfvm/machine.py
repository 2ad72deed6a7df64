from __future__ import annotations

from typing import BinaryIO, Callable, Dict, Optional

from .errors import (
    make_input_exhausted_error,
    make_unmatched_close_error,
    make_unmatched_open_error,
    make_unrecognized_error,
)
from .program import CLOSE, OPEN, Program
from .state import MachineState
from .tape import Tape


EOF_UNCHANGED = 'unchanged'
EOF_ZERO = 'zero'
EOF_ERROR = 'error'
EOF_POLICIES = (EOF_UNCHANGED, EOF_ZERO, EOF_ERROR)


class Machine:
    """A tape, a program and an instruction pointer.

    Every instruction method moves ``ip`` forward by one, except the two
    bracket methods which may jump. Loops are resolved by scanning the
    program for the matching bracket each time a jump is taken, unless the
    program carries a precomputed jump table.
    """

    def __init__(
        self,
        program: Program,
        tape: Optional[Tape] = None,
        *,
        input: Optional[BinaryIO] = None,
        output: Optional[BinaryIO] = None,
        eof: str = EOF_UNCHANGED,
    ):
        if eof not in EOF_POLICIES:
            raise ValueError(f"Unknown EOF policy: {eof!r}")
        self.program = program
        self.tape = tape if tape is not None else Tape()
        self.input = input
        self.output = output
        self.eof = eof
        self.ip = 0
        self.steps = 0
        self.output_bytes = 0

        self._dispatch: Dict[int, Callable[[], None]] = {
            ord('>'): self.move_right,
            ord('<'): self.move_left,
            ord('+'): self.increment,
            ord('-'): self.decrement,
            ord('.'): self.write_output,
            ord(','): self.read_input,
            OPEN: self.jump_forward,
            CLOSE: self.jump_backward,
        }

    @property
    def finished(self) -> bool:
        return self.ip >= len(self.program)

    # data ops

    def move_right(self) -> None:
        self.tape.advance()
        self.ip += 1

    def move_left(self) -> None:
        self.tape.retreat()
        self.ip += 1

    def increment(self) -> None:
        self.tape.increment_cell()
        self.ip += 1

    def decrement(self) -> None:
        self.tape.decrement_cell()
        self.ip += 1

    # I/O ops

    def write_output(self) -> None:
        if self.output is not None:
            self.output.write(bytes((self.tape.read_cell(),)))
            self.output.flush()
        self.output_bytes += 1
        self.ip += 1

    def read_input(self) -> None:
        data = self.input.read(1) if self.input is not None else b''
        if data:
            self.tape.write_cell(data[0])
        elif self.eof == EOF_ZERO:
            self.tape.write_cell(0)
        elif self.eof == EOF_ERROR:
            raise make_input_exhausted_error(program=self.program.code, position=self.ip)
        self.ip += 1

    # control ops

    def jump_forward(self) -> None:
        if self.tape.read_cell() != 0:
            self.ip += 1
            return
        if self.program.jump_table is not None:
            match = self.program.jump_table[self.ip]
            if match is None:
                raise make_unmatched_open_error(program=self.program.code, position=self.ip)
            self.ip = match + 1
            return

        code = self.program.code
        end = len(code)
        scan = self.ip
        level = 0
        while True:
            if scan == end:
                raise make_unmatched_open_error(program=code, position=self.ip)
            b = code[scan]
            if b == OPEN:
                level += 1
            elif b == CLOSE:
                level -= 1
                if level == 0:
                    self.ip = scan + 1
                    return
            scan += 1

    def jump_backward(self) -> None:
        if self.tape.read_cell() == 0:
            self.ip += 1
            return
        if self.program.jump_table is not None:
            match = self.program.jump_table[self.ip]
            if match is None:
                raise make_unmatched_close_error(program=self.program.code, position=self.ip)
            self.ip = match + 1
            return

        code = self.program.code
        scan = self.ip
        level = 0
        while True:
            b = code[scan]
            if b == CLOSE:
                level += 1
            elif b == OPEN:
                level -= 1
                if level == 0:
                    self.ip = scan + 1
                    return
            if scan == 0:
                raise make_unmatched_close_error(program=code, position=self.ip)
            scan -= 1

    def step(self) -> None:
        """Execute the instruction at ``ip``. Does nothing once the program has finished."""
        if self.finished:
            return
        symbol = self.program[self.ip]
        op = self._dispatch.get(symbol)
        if op is None:
            raise make_unrecognized_error(symbol=symbol, program=self.program.code, position=self.ip)
        op()
        self.steps += 1

    def snapshot(self) -> MachineState:
        return MachineState(
            ip=self.ip,
            pointer=self.tape.pointer,
            cell=self.tape.read_cell(),
            steps=self.steps,
            output_bytes=self.output_bytes,
            finished=self.finished,
        )
