from .api import RunOptions, RunResult, build_interpreter, run_bytes, run_file, run_string
from .errors import (
    BFVMError,
    ExecutionCancelled,
    InputExhausted,
    OutOfBounds,
    StepLimitExceeded,
    UnmatchedCloseBracket,
    UnmatchedOpenBracket,
    UnrecognizedInstruction,
)
from .interpreter import Interpreter
from .machine import Machine
from .program import Program, clean_source, load_program
from .state import MachineState
from .tape import Tape

__all__ = [
    'Tape',
    'Program',
    'Machine',
    'Interpreter',
    'MachineState',
    'clean_source',
    'load_program',
    'RunOptions',
    'RunResult',
    'build_interpreter',
    'run_bytes',
    'run_string',
    'run_file',
    'BFVMError',
    'UnrecognizedInstruction',
    'UnmatchedOpenBracket',
    'UnmatchedCloseBracket',
    'OutOfBounds',
    'InputExhausted',
    'StepLimitExceeded',
    'ExecutionCancelled',
]
