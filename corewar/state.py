"""State of the virtual machine and the messages it prints."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import TextIO

from .cursor import Cursor
from .memory import mem_addr
from .op import CYCLE_TO_DIE, MEM_SIZE
from .player import Player


class LogLevel(enum.IntFlag):
    """What the machine reports while it runs; levels can be combined."""

    NONE = 0
    LIVES = 1
    CYCLES = 2
    OPER = 4
    DEATHS = 8
    MOVE = 16


@dataclass
class VM:
    """Arena, players and processes of one game.

    Cursors are kept newest first, the order in which they are executed.
    """

    arena: bytearray = field(default_factory=lambda: bytearray(MEM_SIZE))
    players: list[Player] = field(default_factory=list)
    cursors: list[Cursor] = field(default_factory=list)
    cycles_count: int = 0
    cycles_to_die: int = CYCLE_TO_DIE
    last_alive_player: Player | None = None
    live_count: int = 0
    dump_cycles: int | None = None
    aff: bool = False
    log_level: LogLevel = LogLevel.NONE
    pending_players: list[Player] = field(default_factory=list)
    out: TextIO = field(default_factory=lambda: sys.stdout)
    _next_cursor_id: int = field(default=0, init=False, repr=False)

    @property
    def players_num(self) -> int:
        """Number of players taking part."""
        return len(self.players)

    @property
    def cursors_count(self) -> int:
        """Number of living cursors."""
        return len(self.cursors)

    def _take_id(self) -> int:
        cursor_id = self._next_cursor_id
        self._next_cursor_id += 1
        return cursor_id

    def _emit(self, text: str) -> None:
        print(text, file=self.out)

    def new_cursor(self, player: Player, pc: int) -> Cursor:
        """Create a cursor for player at pc and put it first in line."""
        cursor = Cursor(id=self._take_id(), pc=pc, parent=player)
        self.cursors.insert(0, cursor)
        return cursor

    def fork_cursor(self, cursor: Cursor, offset: int) -> Cursor:
        """Copy cursor to pc + offset and put the copy first in line."""
        child = cursor.duplicate(self._take_id(), offset)
        self.cursors.insert(0, child)
        return child

    def log_pc_move(self, cursor: Cursor, offset: int) -> None:
        """Report a program counter move with the bytes it skips."""
        dump = "".join(
            f"{self.arena[mem_addr(cursor.pc + i)]:02x} " for i in range(offset)
        )
        self._emit(f"ADV {offset} ({cursor.pc:#06x} -> {cursor.pc + offset:#06x}) {dump}")

    def log_cycle(self) -> None:
        """Report the current cycle."""
        self._emit(f"It is now cycle {self.cycles_count}")

    def log_die_cycles(self) -> None:
        """Report the new cycles-to-die value."""
        self._emit(f"Cycle to die is now {self.cycles_to_die}")

    def log_cursor_death(self, cursor: Cursor) -> None:
        """Report a cursor killed for not reporting live in time."""
        self._emit(
            f"Process {cursor.id + 1} hasn't lived for "
            f"{self.cycles_count - cursor.alive_cycle} cycles (CTD {self.cycles_to_die})"
        )

    def introduce(self) -> None:
        """Print the list of contestants."""
        self._emit("Introducing contestants...")
        for player in self.players:
            self._emit(
                f'* Player {player.id}, weighing {player.code_size} bytes, '
                f'"{player.name}" ("{player.comment}") !'
            )

    def announce_winner(self) -> None:
        """Print the last player reported alive, or else the last player."""
        winner = self.last_alive_player or self.players[-1]
        self._emit(f'Contestant {winner.id}, "{winner.name}", has won !')