from __future__ import annotations

import logging
from typing import Callable, Optional

from .errors import ExecutionCancelled, StepLimitExceeded
from .machine import Machine
from .state import MachineState

logger = logging.getLogger(__name__)

RUNNING = 'running'
FINISHED = 'finished'

DEFAULT_POLL_INTERVAL = 1024


class Interpreter:
    """Drives a Machine until its instruction pointer reaches the end of the program.

    Errors raised by the machine are not caught here; they end the run.
    ``max_steps`` bounds the number of executed instructions and
    ``should_stop`` is polled every ``poll_interval`` steps so a caller can
    cancel a long-running program.
    """

    def __init__(
        self,
        machine: Machine,
        *,
        max_steps: Optional[int] = None,
        should_stop: Optional[Callable[[MachineState], bool]] = None,
        poll_interval: int = DEFAULT_POLL_INTERVAL,
    ):
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")
        if poll_interval < 1:
            raise ValueError(f"poll_interval must be at least 1, got {poll_interval}")
        self.machine = machine
        self.max_steps = max_steps
        self.should_stop = should_stop
        self.poll_interval = poll_interval

    @property
    def state(self) -> str:
        return FINISHED if self.machine.finished else RUNNING

    def step(self) -> bool:
        """Execute one instruction. Returns False once the program has finished."""
        if self.machine.finished:
            return False
        self.machine.step()
        return not self.machine.finished

    def run(self) -> MachineState:
        machine = self.machine
        max_steps = self.max_steps
        should_stop = self.should_stop
        poll_interval = self.poll_interval

        logger.debug(
            "run start: program=%d bytes tape=%d cells",
            len(machine.program), len(machine.tape),
        )
        while not machine.finished:
            if max_steps is not None and machine.steps >= max_steps:
                raise StepLimitExceeded(
                    message=f"StepLimitExceeded: stopped after {machine.steps} steps at position {machine.ip}",
                    steps=machine.steps,
                )
            if should_stop is not None and machine.steps % poll_interval == 0 and machine.steps:
                if should_stop(machine.snapshot()):
                    raise ExecutionCancelled(
                        message=f"ExecutionCancelled: cancelled after {machine.steps} steps at position {machine.ip}",
                        steps=machine.steps,
                    )
            machine.step()

        logger.debug("run finished: steps=%d output=%d bytes", machine.steps, machine.output_bytes)
        return machine.snapshot()
