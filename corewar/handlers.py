"""Handlers for the operations that read, write and branch without index arithmetic.

Each handler runs the cursor's current operation, whose argument types have
already been decoded and validated. It returns how far the program counter
must move afterwards. A value of 0 means the handler set the counter itself.
"""

from __future__ import annotations

from .cursor import Cursor
from .memory import get_addr, get_avalue, get_byte, get_value, mem_addr, write_int
from .op import DIR_SIZE, IDX_MOD, IND_MEM_SIZE, REG_MEM_SIZE, T_DIR, T_IND
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


def _log(vm: VM, cursor: Cursor, text: str) -> None:
    if vm.log_level & LogLevel.OPER:
        print(f"P {cursor.id + 1:4d} | {text}", file=vm.out)


def op_live(vm: VM, cursor: Cursor) -> int:
    """Report the cursor alive and, for a valid player number, that player too."""
    arg, offset = get_avalue(vm.arena, cursor, _start(cursor), 0)
    cursor.alive_cycle = vm.cycles_count
    vm.live_count += 1
    player = None
    if arg < 0 and 1 <= abs(arg) <= vm.players_num:
        player = vm.players[abs(arg) - 1]
        vm.last_alive_player = player
    _log(vm, cursor, f"live {arg}")
    if vm.log_level & LogLevel.LIVES and player is not None:
        print(f"Player {abs(arg)} ({player.name}) is said to be alive", file=vm.out)
    return offset


def op_ld(vm: VM, cursor: Cursor) -> int:
    """Load a value into a register and set carry when it is zero."""
    value, offset = get_avalue(vm.arena, cursor, _start(cursor), 0)
    reg = get_byte(vm.arena, cursor.pc + offset)
    offset += 1
    cursor.reg[reg - 1] = value
    cursor.carry = value == 0
    _log(vm, cursor, f"ld {value} r{reg}")
    return offset


def op_st(vm: VM, cursor: Cursor) -> int:
    """Store a register into another register or into the arena."""
    offset = _start(cursor)
    source = get_byte(vm.arena, cursor.pc + offset)
    offset += 1
    value = cursor.reg[source - 1]
    if cursor.oper_args_types[1] == T_IND:
        target = get_addr(vm.arena, cursor.pc + offset)
        write_int(vm.arena, cursor.pc + _trunc_mod(target, IDX_MOD), DIR_SIZE, value)
        offset += IND_MEM_SIZE
    else:
        target = get_byte(vm.arena, cursor.pc + offset)
        cursor.reg[target - 1] = value
        offset += REG_MEM_SIZE
    _log(vm, cursor, f"st r{source} {target}")
    return offset


def _three_registers(vm: VM, cursor: Cursor) -> tuple[list[int], int]:
    offset = _start(cursor)
    regs = []
    for _ in range(3):
        regs.append(get_byte(vm.arena, cursor.pc + offset))
        offset += 1
    return regs, offset


def op_add(vm: VM, cursor: Cursor) -> int:
    """Add two registers into a third; carry is set when the sum is zero."""
    regs, offset = _three_registers(vm, cursor)
    value = _int32(cursor.reg[regs[0] - 1] + cursor.reg[regs[1] - 1])
    cursor.reg[regs[2] - 1] = value
    cursor.carry = value == 0
    _log(vm, cursor, f"add r{regs[0]} r{regs[1]} r{regs[2]}")
    return offset


def op_sub(vm: VM, cursor: Cursor) -> int:
    """Subtract two registers into a third; carry is set when the result is zero."""
    regs, offset = _three_registers(vm, cursor)
    value = _int32(cursor.reg[regs[0] - 1] - cursor.reg[regs[1] - 1])
    cursor.reg[regs[2] - 1] = value
    cursor.carry = value == 0
    _log(vm, cursor, f"sub r{regs[0]} r{regs[1]} r{regs[2]}")
    return offset


def _bitwise(vm: VM, cursor: Cursor, name: str, operation) -> int:
    first, offset = get_avalue(vm.arena, cursor, _start(cursor), 0)
    second, offset = get_avalue(vm.arena, cursor, offset, 1)
    reg = get_byte(vm.arena, cursor.pc + offset)
    offset += 1
    result = _int32(operation(first, second))
    cursor.reg[reg - 1] = result
    cursor.carry = result == 0
    _log(vm, cursor, f"{name} {first} {second} r{reg}")
    return offset


def op_and(vm: VM, cursor: Cursor) -> int:
    """Bitwise AND of two values into a register."""
    return _bitwise(vm, cursor, "and", lambda a, b: a & b)


def op_or(vm: VM, cursor: Cursor) -> int:
    """Bitwise OR of two values into a register."""
    return _bitwise(vm, cursor, "or", lambda a, b: a | b)


def op_xor(vm: VM, cursor: Cursor) -> int:
    """Bitwise XOR of two values into a register."""
    return _bitwise(vm, cursor, "xor", lambda a, b: a ^ b)


def op_zjmp(vm: VM, cursor: Cursor) -> int:
    """Jump within IDX_MOD when carry is set; otherwise step over the instruction."""
    addr, offset = get_avalue(vm.arena, cursor, _start(cursor), 0)
    if cursor.carry:
        cursor.pc = mem_addr(cursor.pc + _trunc_mod(addr, IDX_MOD))
        offset = 0
    _log(vm, cursor, f"zjmp {addr} {'OK' if cursor.carry else 'FAILED'}")
    return offset


def op_fork(vm: VM, cursor: Cursor) -> int:
    """Copy the cursor to an address within IDX_MOD of it."""
    addr, offset = get_avalue(vm.arena, cursor, _start(cursor), 0)
    vm.fork_cursor(cursor, _trunc_mod(addr, IDX_MOD))
    _log(vm, cursor, f"fork {addr} ({cursor.pc + _trunc_mod(addr, IDX_MOD)})")
    return offset


def op_lfork(vm: VM, cursor: Cursor) -> int:
    """Copy the cursor to an address at any distance from it."""
    addr, offset = get_avalue(vm.arena, cursor, _start(cursor), 0)
    vm.fork_cursor(cursor, addr)
    _log(vm, cursor, f"lfork {addr} ({cursor.pc + addr})")
    return offset


def op_lld(vm: VM, cursor: Cursor) -> int:
    """Load a value into a register without limiting indirect reach."""
    offset = _start(cursor)
    if cursor.oper_args_types[0] == T_DIR:
        value = get_value(vm.arena, cursor.pc + offset, cursor.oper.tdir_size)
        offset += cursor.oper.tdir_size
    else:
        target = get_addr(vm.arena, cursor.pc + offset)
        value = get_value(vm.arena, cursor.pc + target, DIR_SIZE)
        offset += IND_MEM_SIZE
    cursor.carry = value == 0
    reg = get_byte(vm.arena, cursor.pc + offset)
    offset += 1
    cursor.reg[reg - 1] = value
    _log(vm, cursor, f"lld {value} r{reg}")
    return offset


def op_aff(vm: VM, cursor: Cursor) -> int:
    """Print a register's low byte as a character when aff output is enabled."""
    value, offset = get_avalue(vm.arena, cursor, _start(cursor), 0)
    if vm.aff:
        print(f"Aff: {chr(value & 0xFF)}", file=vm.out)
    return offset