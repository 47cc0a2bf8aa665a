"""Compile a token stream into a champion: header fields, code and resolved labels."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .asm_errors import (
    LOST_DATA_ERR_MSG,
    PROGRAM_COMMENT_FAIL_MSG,
    PROGRAM_NAME_FAIL_MSG,
    AsmError,
    InvalidArgumentError,
    LabelError,
    ProgramError,
    RegisterError,
    TokenError,
)
from .lexer import Token, TokenType
from .op import (
    COMMENT_CMD_STRING,
    COMMENT_LENGTH,
    DIR_CODE,
    IND_CODE,
    IND_SIZE,
    NAME_CMD_STRING,
    PROG_NAME_LENGTH,
    REG_CODE,
    REG_NUMBER,
    T_DIR,
    T_IND,
    T_REG,
    Op,
    get_op,
)

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)?")

_ARG_TYPES = {
    TokenType.REG: T_REG,
    TokenType.DIR: T_DIR,
    TokenType.DIRL: T_DIR,
    TokenType.IND: T_IND,
    TokenType.INDL: T_IND,
}


def _atoi(text: str) -> int:
    """Parse a leading, optionally signed, decimal number; 0 when there is none."""
    number = _ATOI.match(text).group(1)
    return int(number) if number else 0


def to_bytes(value: int, size: int) -> bytes:
    """Return the low size bytes of value, big-endian."""
    return (value & ((1 << (8 * size)) - 1)).to_bytes(size, "big")


def is_cmd(arg: str | None, command: str | None) -> bool:
    """Tell whether arg names the command (given with its leading dot)."""
    if not arg or not command:
        return False
    return arg == command[1:]


def register_valid(value: str) -> bool:
    """Tell whether a register token such as "r3" names an existing register."""
    return 0 < _atoi(value[1:]) <= REG_NUMBER


@dataclass
class Call:
    """A place in the code that refers to a label and must be filled in later."""

    row: int
    col: int
    position: int
    instruction_position: int
    size: int


@dataclass
class Label:
    """A label with its code position (None until declared) and its uses."""

    name: str
    position: int | None = None
    calls: list[Call] = field(default_factory=list)


@dataclass
class Program:
    """A compiled champion."""

    name: str | None = None
    comment: str | None = None
    code: bytearray = field(default_factory=bytearray)
    labels: dict[str, Label] = field(default_factory=dict)

    @property
    def position(self) -> int:
        """Number of code bytes emitted so far."""
        return len(self.code)

    def write(self, value: int, size: int) -> None:
        """Append value as a big-endian integer of size bytes."""
        self.code += to_bytes(value, size)

    def label(self, name: str) -> Label:
        """Return the label of that name, creating an undeclared one if needed."""
        if name not in self.labels:
            self.labels[name] = Label(name)
        return self.labels[name]

    def fill_calls(self) -> None:
        """Write every label's relative offset into the places that use it."""
        for label in self.labels.values():
            if label.position is None:
                first = label.calls[0] if label.calls else None
                raise LabelError(
                    label.name,
                    first.row if first else None,
                    first.col if first else None,
                )
            for call in label.calls:
                offset = label.position - call.instruction_position
                self.code[call.position:call.position + call.size] = to_bytes(offset, call.size)


class _Compiler:
    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self.program = Program()

    def _next(self) -> Token:
        token = next(self._tokens, None)
        if token is None:
            raise AsmError(LOST_DATA_ERR_MSG)
        return token

    # Header

    def _header_string(self, limit: int, message: str) -> str:
        token = self._next()
        if token.type is not TokenType.STR:
            raise TokenError(token)
        value = token.value or ""
        if len(value) > limit:
            raise ProgramError(message)
        return value

    def read_info(self) -> None:
        program = self.program
        while program.name is None or program.comment is None:
            token = self._next()
            if program.name is None and token.type is TokenType.CMD and is_cmd(
                token.value, NAME_CMD_STRING
            ):
                program.name = self._header_string(PROG_NAME_LENGTH, PROGRAM_NAME_FAIL_MSG)
            elif program.comment is None and token.type is TokenType.CMD and is_cmd(
                token.value, COMMENT_CMD_STRING
            ):
                program.comment = self._header_string(COMMENT_LENGTH, PROGRAM_COMMENT_FAIL_MSG)
            else:
                raise TokenError(token)
            if self._next().type is not TokenType.ENDLN:
                raise TokenError(token)

    # Code

    def read_code(self) -> None:
        empty = True
        while (token := self._next()).type is not TokenType.END:
            empty = False
            if token.type is TokenType.LBL:
                self._declare_label(token)
                token = self._next()
            if token.type is TokenType.OPR:
                self._instruction(token)
            elif token.type is not TokenType.ENDLN:
                raise TokenError(token)
        if empty:
            raise TokenError(token)

    def _declare_label(self, token: Token) -> None:
        label = self.program.label(token.value or "")
        if label.position is None:
            label.position = self.program.position

    def _instruction(self, token: Token) -> None:
        op = get_op(token.value or "")
        if op is None:
            raise TokenError(token)
        program = self.program
        start = program.position
        program.code.append(op.code)
        typescode_at = program.position
        if op.args_typescode:
            program.code.append(0)
        typescode = self._arguments(op, start)
        if op.args_typescode:
            program.code[typescode_at] = typescode

    def _arguments(self, op: Op, start: int) -> int:
        typescode = 0
        index = 0
        while True:
            token = self._next()
            if token.type not in _ARG_TYPES:
                raise TokenError(token)
            if not op.args_types[index] & _ARG_TYPES[token.type]:
                raise InvalidArgumentError(token, op, index)
            typescode |= self._argument(op, token, start) << (2 * (3 - index))
            index += 1
            token = self._next()
            if token.type is TokenType.SEP and index < op.args_n:
                continue
            if token.type is TokenType.ENDLN and index == op.args_n:
                return typescode
            raise TokenError(token)

    def _argument(self, op: Op, token: Token, start: int) -> int:
        program = self.program
        value = token.value or ""
        kind = token.type
        if kind in (TokenType.DIR, TokenType.IND):
            size = op.tdir_size if kind is TokenType.DIR else IND_SIZE
            program.write(_atoi(value), size)
        elif kind is TokenType.REG:
            if not register_valid(value):
                raise RegisterError(token)
            program.write(_atoi(value[1:]), 1)
        else:
            size = op.tdir_size if kind is TokenType.DIRL else IND_SIZE
            col = token.col - (1 if kind is TokenType.DIRL else 2)
            program.label(value).calls.append(
                Call(token.row, col, program.position, start, size)
            )
            program.code += bytes(size)
        if kind in (TokenType.DIR, TokenType.DIRL):
            return DIR_CODE
        if kind in (TokenType.IND, TokenType.INDL):
            return IND_CODE
        return REG_CODE


def assemble(tokens: Iterable[Token]) -> Program:
    """Compile tokens into a Program with every label reference resolved.

    Raises an AsmError subclass describing the first problem found.
    """
    tokens = list(tokens)
    if not tokens:
        raise AsmError(LOST_DATA_ERR_MSG)
    compiler = _Compiler(iter(tokens))
    compiler.read_info()
    compiler.read_code()
    compiler.program.fill_calls()
    return compiler.program