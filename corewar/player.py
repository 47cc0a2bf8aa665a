"""Champions: reading .cor files and assigning player numbers."""

from __future__ import annotations

import io
import sys
from dataclasses import dataclass

from .common import CorewarError
from .op import CHAMP_MAX_SIZE, COMMENT_LENGTH, COREWAR_EXEC_MAGIC, MAX_PLAYERS, PROG_NAME_LENGTH

OPEN_PLAYER_ERR_MSG = "ERROR: Can't open player file"
READ_PLAYER_ERR_MSG = "ERROR: Can't read player file"
INVALID_FILE_ERR_MSG = "ERROR: Invalid player file"
WARNING = "WARNING"


@dataclass
class Player:
    """A champion loaded from bytecode."""

    id: int = 0
    name: str = ""
    comment: str = ""
    code_size: int = -1
    code: bytes | None = None


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._stream = io.BytesIO(data)

    def number(self) -> int:
        chunk = self._stream.read(4)
        if len(chunk) < 4:
            return -1
        return int.from_bytes(chunk, "big", signed=True)

    def text(self, length: int) -> str:
        chunk = self._stream.read(length)
        if len(chunk) < length:
            raise CorewarError(INVALID_FILE_ERR_MSG)
        return chunk.split(b"\0", 1)[0].decode("utf-8", errors="replace")

    def read(self, size: int) -> bytes:
        return self._stream.read(size)


def parse_player(data: bytes) -> Player:
    """Parse .cor contents; code is None when it is empty or cut short."""
    reader = _Reader(data)
    if reader.number() != COREWAR_EXEC_MAGIC:
        raise CorewarError(INVALID_FILE_ERR_MSG)
    name = reader.text(PROG_NAME_LENGTH)
    if reader.number() != 0:
        raise CorewarError(INVALID_FILE_ERR_MSG)
    code_size = reader.number()
    if not 0 <= code_size <= CHAMP_MAX_SIZE:
        raise CorewarError(INVALID_FILE_ERR_MSG)
    comment = reader.text(COMMENT_LENGTH)
    if reader.number() != 0:
        raise CorewarError(INVALID_FILE_ERR_MSG)
    code = None
    if code_size:
        chunk = reader.read(code_size)
        if len(chunk) == code_size:
            code = chunk
    if reader.read(1):
        raise CorewarError(INVALID_FILE_ERR_MSG)
    return Player(name=name, comment=comment, code_size=code_size, code=code)


def load_player(path: str) -> Player | None:
    """Load a champion file; warn and return None when it carries no code."""
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise CorewarError(OPEN_PLAYER_ERR_MSG) from exc
    with handle:
        try:
            data = handle.read()
        except OSError as exc:
            raise CorewarError(READ_PLAYER_ERR_MSG) from exc
    player = parse_player(data)
    if not player.code or player.code_size == 0:
        print(
            f"{WARNING}: Player {player.name} ({player.comment}) "
            "has empty code and was deleted from competition",
            file=sys.stderr,
        )
        return None
    return player


def get_player(players: list[Player], player_id: int) -> Player | None:
    """Return the player holding a valid player number, or None."""
    if not 1 <= player_id <= MAX_PLAYERS:
        return None
    return next((player for player in players if player.id == player_id), None)


def next_player(players: list[Player], player_id: int) -> Player | None:
    """Take out the player numbered player_id, or else the first unnumbered one.

    An unnumbered player taken this way is given player_id.
    """
    for wanted in (player_id, 0):
        for index, player in enumerate(players):
            if player.id == wanted:
                del players[index]
                player.id = player_id
                return player
    return None