"""Helpers and errors shared by the assembler and the virtual machine."""

from __future__ import annotations

ASM_FILENAME_SUFFIX = ".s"
BYTECODE_FILENAME_SUFFIX = ".cor"


class CorewarError(Exception):
    """A fatal error; its text is what the program reports before exiting."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        cause = self.__cause__
        if isinstance(cause, OSError) and cause.strerror:
            return f"{self.message}: {cause.strerror}"
        return self.message


class UsageError(CorewarError):
    """The command line could not be understood."""


def is_filename(filename: str | None, suffix: str | None) -> bool:
    """Tell whether the first occurrence of suffix ends a non-empty stem."""
    if not filename or not suffix:
        return False
    index = filename.find(suffix)
    return index > 0 and filename[index:] == suffix