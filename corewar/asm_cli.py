"""Command-line assembler: turns a champion's .s source into a .cor bytecode file."""

from __future__ import annotations

import sys
from typing import Sequence

from .asm_errors import OPEN_INFILE_ERR_MSG, OPEN_OUTFILE_ERR_MSG, READ_FILE_ERR_MSG
from .assembler import Program, assemble, to_bytes
from .common import ASM_FILENAME_SUFFIX, BYTECODE_FILENAME_SUFFIX, CorewarError, is_filename
from .lexer import tokenize
from .op import COMMENT_LENGTH, COREWAR_EXEC_MAGIC, PROG_NAME_LENGTH

EXEC_MAGIC_SIZE = 4
NULL_SIZE = 4
EXEC_CODE_SIZE = 4

USAGE = (
    "Usage: ./asm <sourcefile.s>\n"
    "\t <sourcefile> - source file for assemble to bytecode"
)


def output_filename(filename: str) -> str:
    """Replace everything from the first ".s" on with ".cor"."""
    index = filename.find(ASM_FILENAME_SUFFIX)
    if index < 0:
        raise ValueError(f"{filename!r} has no {ASM_FILENAME_SUFFIX} suffix")
    return filename[:index] + BYTECODE_FILENAME_SUFFIX


def _text_field(text: str | None, length: int) -> bytes:
    raw = (text or "").encode("latin-1", errors="replace")
    return raw[:length].ljust(length, b"\0")


def build_bytecode(program: Program) -> bytes:
    """Return the complete .cor file contents for a compiled program."""
    code = bytes(program.code)
    return b"".join(
        (
            to_bytes(COREWAR_EXEC_MAGIC, EXEC_MAGIC_SIZE),
            _text_field(program.name, PROG_NAME_LENGTH),
            bytes(NULL_SIZE),
            to_bytes(len(code), EXEC_CODE_SIZE),
            _text_field(program.comment, COMMENT_LENGTH),
            bytes(NULL_SIZE),
            code,
        )
    )


def translate(filename: str) -> str:
    """Assemble filename and write the bytecode next to it; return the output path."""
    try:
        handle = open(filename, encoding="latin-1", newline="")
    except OSError as exc:
        raise CorewarError(OPEN_INFILE_ERR_MSG) from exc
    with handle:
        try:
            source = handle.read()
        except OSError as exc:
            raise CorewarError(READ_FILE_ERR_MSG) from exc
    program = assemble(tokenize(source))
    target = output_filename(filename)
    try:
        out = open(target, "wb")
    except OSError as exc:
        raise CorewarError(OPEN_OUTFILE_ERR_MSG) from exc
    with out:
        out.write(build_bytecode(program))
    print(f"SUCCESS: bytecode successfully written to {target}")
    return target


def print_help() -> None:
    """Print the usage text."""
    print(USAGE)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the assembler on the single source file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1 or not is_filename(args[0], ASM_FILENAME_SUFFIX):
        print_help()
        return 1
    try:
        translate(args[0])
    except CorewarError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())