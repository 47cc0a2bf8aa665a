"""Tokenizer for champion assembly source."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator

from .asm_errors import LexicalError
from .op import COMMENT_CHAR, DIRECT_CHAR, LABEL_CHAR, LABEL_CHARS, SEPARATOR_CHAR

REG_CHAR = "r"
CMD_CHAR = "."
STRING_CHAR = '"'
ALT_COMMENT_CHAR = ";"

_WHITESPACE = " \t\v\f\r"
_SPECIAL = "\n" + STRING_CHAR + DIRECT_CHAR + SEPARATOR_CHAR + COMMENT_CHAR + ALT_COMMENT_CHAR
_DIGITS = "0123456789"


class TokenType(enum.IntEnum):
    """Kinds of token the assembler understands."""

    NONE = 0
    CMD = 1
    STR = 2
    LBL = 3
    OPR = 4
    REG = 5
    DIR = 6
    DIRL = 7
    IND = 8
    INDL = 9
    SEP = 10
    ENDLN = 11
    END = 12


@dataclass
class Token:
    """One token with its 1-based row and column."""

    value: str | None
    type: TokenType
    row: int
    col: int


_NAMED = frozenset(
    {TokenType.CMD, TokenType.DIRL, TokenType.INDL, TokenType.LBL, TokenType.OPR, TokenType.REG}
)


def is_whitespace(char: str) -> bool:
    """Tell whether char is blank space other than a newline."""
    return len(char) == 1 and char in _WHITESPACE


def is_special(char: str) -> bool:
    """Tell whether char ends a number or name; "" stands for the end of the line."""
    return char == "" or (len(char) == 1 and char in _SPECIAL) or is_whitespace(char)


def _is_digit(char: str) -> bool:
    return len(char) == 1 and char in _DIGITS


def _is_label_char(char: str) -> bool:
    return len(char) == 1 and char in LABEL_CHARS


def _is_register(text: str) -> bool:
    if not 1 < len(text) <= 3 or text[0] != REG_CHAR:
        return False
    digits = text[1:]
    return all(_is_digit(c) for c in digits) and int(digits) > 0


def _new_token(value: str | None, kind: TokenType, row: int, col: int) -> Token:
    return Token(value, kind, row or 1, col + 1 - (kind is TokenType.DIRL))


def _split_lines(source: str) -> list[str]:
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class _Scanner:
    def __init__(self, source: str) -> None:
        self._lines = iter(_split_lines(source))
        self.line = ""
        self.row = 0
        self.col = 0

    def _char(self, index: int | None = None) -> str:
        index = self.col if index is None else index
        return self.line[index] if index < len(self.line) else ""

    def tokens(self) -> Iterator[Token]:
        for line in self._lines:
            self.row += 1
            self.line = line
            self.col = 0
            while self.col < len(self.line):
                while is_whitespace(self._char()):
                    self.col += 1
                if self._char() in (COMMENT_CHAR, ALT_COMMENT_CHAR) and self._char():
                    self.col = len(self.line)
                if self.col < len(self.line):
                    yield self._chunk()
            if self.line and self.col == len(self.line):
                yield _new_token(None, TokenType.ENDLN, self.row, self.col)
        yield _new_token(None, TokenType.END, self.row + 1, 0)

    def _chunk(self) -> Token:
        kind = self._kind()
        token = _new_token(None, kind, self.row, self.col)
        if kind is TokenType.SEP:
            return token
        if kind in _NAMED:
            value = self._parse_name(kind)
        elif kind is TokenType.STR:
            value = self._parse_str()
        elif kind in (TokenType.DIR, TokenType.IND):
            value = self._parse_num()
        else:
            value = None
        if value is None:
            raise LexicalError(token.row, token.col)
        token.value = value
        return token

    def _kind(self) -> TokenType:
        char = self._char()
        if char == SEPARATOR_CHAR:
            self.col += 1
            return TokenType.SEP
        if char == CMD_CHAR:
            self.col += 1
            return TokenType.CMD
        if char == DIRECT_CHAR:
            self.col += 1
            if self._char() == LABEL_CHAR:
                self.col += 1
                return TokenType.DIRL
            return TokenType.DIR
        if char == STRING_CHAR:
            self.col += 1
            return TokenType.STR
        if char == LABEL_CHAR:
            self.col += 1
            return TokenType.INDL
        return self._classify()

    def _classify(self) -> TokenType:
        start = self.col
        sign = False
        if self._char(start) == "-":
            # A minus in the very first column is not taken as a sign.
            sign = start != 0
            start += 1
        while _is_digit(self._char(start)):
            start += 1
        if is_special(self._char(start)):
            return TokenType.IND
        if sign:
            return TokenType.NONE
        if self._char(start) == LABEL_CHAR:
            return TokenType.LBL
        while _is_label_char(self._char(start)):
            start += 1
        if self._char(start) == LABEL_CHAR:
            return TokenType.LBL
        if _is_register(self.line[self.col:start]):
            return TokenType.REG
        return TokenType.OPR

    def _parse_name(self, kind: TokenType) -> str | None:
        start = self.col
        while _is_label_char(self._char()):
            self.col += 1
        if self.col == start:
            return None
        value = self.line[start:self.col]
        if kind is TokenType.LBL and self._char() == LABEL_CHAR:
            self.col += 1
        return value

    def _parse_num(self) -> str | None:
        start = self.col
        if self._char() == "-":
            self.col += 1
        while _is_digit(self._char()):
            self.col += 1
        if not is_special(self._char()):
            return None
        return self.line[start:self.col]

    def _parse_str(self) -> str | None:
        start = self.col
        while (end := self.line.find(STRING_CHAR, self.col)) == -1:
            following = next(self._lines, None)
            if following is None:
                return None
            self.line = f"{self.line}\n{following}"
            self.row += 1
        self.col = end + 1
        return self.line[start:end]


def tokenize(source: str) -> list[Token]:
    """Split assembly source into tokens, ending with an END token.

    Raises LexicalError at the first piece of text that is not a token.
    """
    return list(_Scanner(source).tokens())