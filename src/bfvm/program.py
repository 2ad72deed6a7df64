from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

VALID_SYMBOLS = b'><+-.,[]'

OPEN = ord('[')
CLOSE = ord(']')


def is_code_byte(b: int) -> bool:
    return b in VALID_SYMBOLS


def clean_source(source: bytes) -> bytes:
    """Strip out every byte that is not one of the eight instruction symbols."""
    return bytes(b for b in source if is_code_byte(b))


def build_jump_table(code: bytes) -> Dict[int, Optional[int]]:
    """Map every bracket position to its partner, or None when it has none.

    Unmatched brackets are recorded rather than rejected so that the machine
    can raise the same error at the same moment a runtime scan would.
    """
    table: Dict[int, Optional[int]] = {}
    stack = []
    for pos, b in enumerate(code):
        if b == OPEN:
            stack.append(pos)
        elif b == CLOSE:
            if stack:
                start = stack.pop()
                table[start] = pos
                table[pos] = start
            else:
                table[pos] = None
    for pos in stack:
        table[pos] = None
    return table


class Program:
    """Immutable instruction sequence, optionally with precomputed bracket matches."""

    __slots__ = ('code', 'jump_table')

    def __init__(self, code: Union[bytes, bytearray, str], *, jump_table: bool = False):
        if isinstance(code, str):
            code = code.encode('utf-8')
        self.code = bytes(code)
        self.jump_table = build_jump_table(self.code) if jump_table else None

    def __len__(self) -> int:
        return len(self.code)

    def __getitem__(self, index: int) -> int:
        return self.code[index]

    def __repr__(self) -> str:
        return f"Program({len(self.code)} bytes, jump_table={self.jump_table is not None})"


def load_program(
    source: Union[bytes, bytearray, str],
    *,
    strip_comments: bool = False,
    jump_table: bool = False,
) -> Program:
    if isinstance(source, str):
        source = source.encode('utf-8')
    if strip_comments:
        source = clean_source(source)
    return Program(source, jump_table=jump_table)


def read_program_file(path: Union[str, Path]) -> bytes:
    # Leading/trailing whitespace (e.g. a final newline) is not part of the program.
    return Path(path).read_bytes().strip()
