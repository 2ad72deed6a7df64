from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from .api import RunOptions, build_interpreter
from .errors import BFVMError
from .machine import EOF_POLICIES, EOF_UNCHANGED
from .program import read_program_file
from .tape import BOUNDS_ERROR, BOUNDS_POLICIES, DEFAULT_TAPE_SIZE


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bfvm", description="Run a brainfuck program.")
    parser.add_argument("program", nargs="?", help="Path to the program file")
    parser.add_argument("--tape-size", type=int, default=DEFAULT_TAPE_SIZE, help="Number of tape cells (default 30000)")
    parser.add_argument("--bounds", choices=BOUNDS_POLICIES, default=BOUNDS_ERROR,
                        help="What happens when the data pointer leaves the tape")
    parser.add_argument("--eof", choices=EOF_POLICIES, default=EOF_UNCHANGED,
                        help="What ',' does once input is exhausted")
    parser.add_argument("--jump-table", action="store_true", help="Precompute bracket matches before running")
    parser.add_argument("--strip-comments", action="store_true", help="Ignore bytes that are not instructions")
    parser.add_argument("--max-steps", type=int, default=None, help="Abort after this many instructions")
    parser.add_argument("--stats", action="store_true", help="Report step count and timing on stderr")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.program is None:
        print("Usage: bfvm <filename>")
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        source = read_program_file(args.program)
    except OSError as e:
        sys.stderr.write(f"Couldn't read file {args.program}: {e.strerror}\n")
        return 1

    options = RunOptions(
        tape_size=args.tape_size,
        bounds=args.bounds,
        eof=args.eof,
        jump_table=args.jump_table,
        strip_comments=args.strip_comments,
        max_steps=args.max_steps,
    )

    try:
        interp = build_interpreter(source, options=options, input=sys.stdin.buffer, output=sys.stdout.buffer)
    except ValueError as e:
        sys.stderr.write(f"fatal: {e}\n")
        return 1

    start = time.time()
    try:
        state = interp.run()
    except BFVMError as err:
        sys.stdout.flush()
        sys.stderr.write(f"fatal: {err}\n")
        return 1
    end = time.time()

    if args.stats:
        sys.stderr.write(f"\nExecution took {(end - start) * 1000:.2f} ms, {state.steps} steps\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
