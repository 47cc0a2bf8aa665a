"""Handlers for the operations that address the arena through a sum of two values.

Like the other handlers, each one returns how far the program counter must
move once the operation is done.
"""

from __future__ import annotations

from .cursor import Cursor
from .memory import bcode_to_int, get_avalue, get_byte, write_int
from .op import DIR_SIZE, IDX_MOD
from .state import VM, LogLevel


def _int32(value: int) -> int:
    """Wrap value to a signed 32-bit integer."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _trunc_mod(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def _start(cursor: Cursor) -> int:
    return 1 + int(cursor.oper.args_typescode)


def _log(vm: VM, *lines: str) -> None:
    if vm.log_level & LogLevel.OPER:
        for line in lines:
            print(line, file=vm.out)


def _load(vm: VM, cursor: Cursor, name: str, limited: bool) -> int:
    first, offset = get_avalue(vm.arena, cursor, _start(cursor), 0)
    second, offset = get_avalue(vm.arena, cursor, offset, 1)
    reg = get_byte(vm.arena, cursor.pc + offset)
    offset += 1
    total = _int32(first + second)
    target = _trunc_mod(total, IDX_MOD) if limited else total
    cursor.reg[reg - 1] = bcode_to_int(vm.arena, cursor.pc + target, DIR_SIZE)
    detail = "with pc and mod" if limited else "with pc"
    _log(
        vm,
        f"P {cursor.id + 1:4d} | {name} {first} {second} r{reg}",
        f"       | -> load from {first} + {second} = {total} ({detail} {cursor.pc + target})",
    )
    return offset


def op_ldi(vm: VM, cursor: Cursor) -> int:
    """Load into a register the four bytes at pc + (a + b) % IDX_MOD."""
    return _load(vm, cursor, "ldi", limited=True)


def op_lldi(vm: VM, cursor: Cursor) -> int:
    """Load into a register the four bytes at pc + a + b, at any distance."""
    return _load(vm, cursor, "lldi", limited=False)


def op_sti(vm: VM, cursor: Cursor) -> int:
    """Store a register's four bytes at pc + (a + b) % IDX_MOD."""
    offset = _start(cursor)
    reg = get_byte(vm.arena, cursor.pc + offset)
    offset += 1
    value = cursor.reg[reg - 1]
    first, offset = get_avalue(vm.arena, cursor, offset, 1)
    second, offset = get_avalue(vm.arena, cursor, offset, 2)
    total = _int32(first + second)
    target = _trunc_mod(total, IDX_MOD)
    write_int(vm.arena, cursor.pc + target, DIR_SIZE, value)
    _log(
        vm,
        f"P {cursor.id + 1:4d} | sti r{reg} {first} {second}",
        f"       | -> store to {first} + {second} = {total} (with pc and mod {cursor.pc + target})",
    )
    return offset