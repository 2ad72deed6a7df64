from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MachineState:
    ip: int
    pointer: int
    cell: int
    steps: int
    output_bytes: int
    finished: bool
