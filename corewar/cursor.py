"""Execution cursors (processes) running in the arena."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .memory import mem_addr
from .op import REG_NUMBER, Op


@dataclass
class Cursor:
    """One process: program counter, registers and pending operation."""

    id: int
    pc: int
    parent: Any
    reg: list[int] = field(default_factory=list)
    cycles_to_exec: int = 0
    oper: Op | None = None
    oper_args_types: list[int] = field(default_factory=lambda: [0, 0, 0])
    carry: bool = False
    alive_cycle: int = 0

    def __post_init__(self) -> None:
        if not self.reg:
            self.reg = [-self.parent.id] + [0] * (REG_NUMBER - 1)

    def duplicate(self, new_id: int, offset: int) -> Cursor:
        """Return a copy placed offset bytes away, sharing registers, carry and last live."""
        return Cursor(
            id=new_id,
            pc=mem_addr(self.pc + offset),
            parent=self.parent,
            reg=list(self.reg),
            carry=self.carry,
            alive_cycle=self.alive_cycle,
        )