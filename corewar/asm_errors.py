"""Errors reported by the assembler, with the messages it prints."""

from __future__ import annotations

from typing import Any

from .common import CorewarError

OPEN_INFILE_ERR_MSG = "ERROR: Can't open input file"
OPEN_OUTFILE_ERR_MSG = "ERROR: Can't open output file"
READ_FILE_ERR_MSG = "ERROR: Read error"
LOST_DATA_ERR_MSG = "ERROR: Lost data error"

PROGRAM_NAME_FAIL_MSG = "FAIL: Wrong program name"
PROGRAM_COMMENT_FAIL_MSG = "FAIL: Wrong programm comment"
UNEXP_TOKEN_MSG = "Unexpected token"
INVALID_ARG_MSG = "Invalid argument"
UNDEC_LABEL_MSG = "Undeclared label"
WRONG_REG_NBR_MSG = "Wrong register number"
LEXICAL_ERR_MSG = "Lexical error"


def _position(row: int, col: int) -> str:
    return f"[{row}, {col}]\t"


class AsmError(CorewarError):
    """Any error that stops the assembler."""


class LexicalError(AsmError):
    """The source text holds something that is not a token."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"{_position(row, col)}{LEXICAL_ERR_MSG}")
        self.row = row
        self.col = col


class ProgramError(AsmError):
    """The program header is unusable, for instance a name that is too long."""


class TokenError(AsmError):
    """A token turned up where the grammar does not allow it."""

    def __init__(self, token: Any) -> None:
        value = token.value if token.value else ""
        super().__init__(
            f'{_position(token.row, token.col)}{UNEXP_TOKEN_MSG} "{value}" ({token.type.name})'
        )
        self.token = token


class InvalidArgumentError(AsmError):
    """An argument has a type the operation does not accept at that place."""

    def __init__(self, token: Any, op: Any, arg_index: int) -> None:
        super().__init__(
            f"{_position(token.row, token.col)}{INVALID_ARG_MSG} ({token.value}) "
            f"for {op.name} at {arg_index + 1} position"
        )
        self.token = token
        self.op = op
        self.arg_index = arg_index


class LabelError(AsmError):
    """A label is used but never declared."""

    def __init__(self, name: str, row: int | None = None, col: int | None = None) -> None:
        prefix = _position(row, col) if row is not None and col is not None else ""
        super().__init__(f'{prefix}{UNDEC_LABEL_MSG} "{name}"')
        self.name = name
        self.row = row
        self.col = col


class RegisterError(AsmError):
    """A register number is outside the register bank."""

    def __init__(self, token: Any) -> None:
        value = token.value or ""
        super().__init__(
            f"{_position(token.row, token.col)}{WRONG_REG_NBR_MSG} {value[1:]} ({value})"
        )
        self.token = token