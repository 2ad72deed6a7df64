from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def _build_context(program: bytes, position: int, *, context: int = 12) -> str:
    start = max(0, position - context)
    end = min(len(program), position + context + 1)

    window = program[start:end].decode('latin-1')
    window = ''.join(ch if ch.isprintable() else '?' for ch in window)
    lead = '...' if start > 0 else ''
    tail = '...' if end < len(program) else ''
    caret = ' ' * (len(lead) + position - start) + '^'
    return f"  {lead}{window}{tail}\n  {caret}"


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'unrecognized':
        return 'Only the eight symbols ><+-.,[] are valid. Use --strip-comments to ignore everything else.'
    if kind == 'open':
        return 'Check for a missing "]" after this "[".'
    if kind == 'close':
        return 'Check for a missing "[" before this "]" or an extra "]".'
    if kind == 'bounds':
        return 'The data pointer left the tape. Use a larger --tape-size or --bounds wrap.'
    if kind == 'eof':
        return 'The program read past the end of its input. Use --eof unchanged or --eof zero to tolerate this.'
    return None


def _render(message: str, *, program: Optional[bytes], position: Optional[int], kind: str) -> str:
    parts = [message]
    if program is not None and position is not None and 0 <= position <= len(program):
        parts.append(_build_context(program, position))
    hint = _hint_for(kind)
    if hint:
        parts.append(f"Hint: {hint}")
    return "\n".join(parts)


@dataclass
class BFVMError(Exception):
    message: str

    # Bytes written to the output sink before the error, filled in by run_bytes.
    output = b""

    def __str__(self) -> str:
        return self.message


@dataclass
class UnrecognizedInstruction(BFVMError):
    symbol: int
    position: int


@dataclass
class UnmatchedOpenBracket(BFVMError):
    position: int


@dataclass
class UnmatchedCloseBracket(BFVMError):
    position: int


@dataclass
class OutOfBounds(BFVMError):
    pointer: int
    size: int


@dataclass
class InputExhausted(BFVMError):
    position: int


@dataclass
class StepLimitExceeded(BFVMError):
    steps: int


@dataclass
class ExecutionCancelled(BFVMError):
    steps: int


def _describe_symbol(symbol: int) -> str:
    ch = chr(symbol)
    if ch.isprintable() and symbol < 0x80:
        return repr(ch)
    return f"0x{symbol:02x}"


def make_unrecognized_error(*, symbol: int, program: bytes, position: int) -> UnrecognizedInstruction:
    msg = f"UnrecognizedInstruction: {_describe_symbol(symbol)} at position {position}"
    return UnrecognizedInstruction(
        message=_render(msg, program=program, position=position, kind='unrecognized'),
        symbol=symbol,
        position=position,
    )


def make_unmatched_open_error(*, program: bytes, position: int) -> UnmatchedOpenBracket:
    msg = f"UnmatchedOpenBracket: no matching ']' for '[' at position {position}"
    return UnmatchedOpenBracket(
        message=_render(msg, program=program, position=position, kind='open'),
        position=position,
    )


def make_unmatched_close_error(*, program: bytes, position: int) -> UnmatchedCloseBracket:
    msg = f"UnmatchedCloseBracket: no matching '[' for ']' at position {position}"
    return UnmatchedCloseBracket(
        message=_render(msg, program=program, position=position, kind='close'),
        position=position,
    )


def make_out_of_bounds_error(*, pointer: int, size: int) -> OutOfBounds:
    msg = f"OutOfBounds: data pointer moved to {pointer}, tape has cells 0..{size - 1}"
    return OutOfBounds(
        message=_render(msg, program=None, position=None, kind='bounds'),
        pointer=pointer,
        size=size,
    )


def make_input_exhausted_error(*, program: bytes, position: int) -> InputExhausted:
    msg = f"InputExhausted: ',' at position {position} found no more input"
    return InputExhausted(
        message=_render(msg, program=program, position=position, kind='eof'),
        position=position,
    )
