"""Arena access: circular addressing, big-endian integers and argument decoding."""

from __future__ import annotations

from typing import Any, MutableSequence, Sequence

from .op import DIR_SIZE, IDX_MOD, IND_MEM_SIZE, IND_SIZE, MEM_SIZE, REG_MEM_SIZE, REG_NUMBER, T_DIR, T_IND, T_REG

_TYPE_CODES = (0, T_REG, T_DIR, T_IND)


def _trunc_mod(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend, as machine division gives it."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def is_int(s: str) -> bool:
    """Tell whether every character of s is a decimal digit."""
    return all(c in "0123456789" for c in s)


def mem_addr(addr: int) -> int:
    """Map any address onto the circular arena."""
    return addr % MEM_SIZE


def type_size(arg_type: int, tdir_size: int) -> int:
    """Return how many arena bytes an argument of the given type takes."""
    if arg_type & T_REG:
        return REG_MEM_SIZE
    if arg_type & T_DIR:
        return tdir_size
    if arg_type & T_IND:
        return IND_MEM_SIZE
    return 0


def bcode_to_int(mem: Sequence[int], addr: int, size: int) -> int:
    """Read a signed big-endian integer of size bytes starting at addr."""
    raw = bytes(mem[mem_addr(addr + i)] for i in range(size))
    return int.from_bytes(raw, "big", signed=True)


def write_int(mem: MutableSequence[int], addr: int, size: int, value: int) -> None:
    """Store the low size bytes of value big-endian starting at addr."""
    for i in range(size):
        mem[mem_addr(addr + i)] = (value >> (8 * (size - 1 - i))) & 0xFF


def get_byte(mem: Sequence[int], addr: int) -> int:
    """Return the unsigned byte at addr."""
    return mem[mem_addr(addr)]


def get_value(mem: Sequence[int], addr: int, size: int) -> int:
    """Return the signed integer of size bytes at addr."""
    return bcode_to_int(mem, addr, size)


def get_addr(mem: Sequence[int], addr: int) -> int:
    """Return the signed indirect offset stored at addr."""
    return get_value(mem, addr, IND_SIZE)


def get_avalue(mem: Sequence[int], cursor: Any, offset: int, index: int) -> tuple[int, int]:
    """Decode argument index of the cursor's operation found at pc + offset.

    Returns the argument's value and the offset just past it.
    """
    arg_type = cursor.oper_args_types[index]
    tdir_size = cursor.oper.tdir_size
    value = 0
    if arg_type == T_REG:
        value = cursor.reg[get_byte(mem, cursor.pc + offset) - 1]
    elif arg_type == T_DIR:
        value = get_value(mem, cursor.pc + offset, tdir_size)
    elif arg_type == T_IND:
        target = _trunc_mod(get_addr(mem, cursor.pc + offset), IDX_MOD)
        value = get_value(mem, cursor.pc + target, DIR_SIZE)
    return value, offset + type_size(arg_type, tdir_size)


def get_types(mem: Sequence[int], cursor: Any) -> None:
    """Fill the cursor's argument types from the type code byte or the op table."""
    op = cursor.oper
    if op.args_typescode:
        code = mem[mem_addr(cursor.pc + 1)]
        cursor.oper_args_types = [_TYPE_CODES[(code >> shift) & 0x3] for shift in (6, 4, 2)]
    else:
        cursor.oper_args_types = [op.args_types[0], *list(cursor.oper_args_types)[1:3]]


def valid_args(mem: Sequence[int], cursor: Any) -> bool:
    """Check argument types against the operation and register numbers against the bank."""
    op = cursor.oper
    offset = 1 + int(op.args_typescode)
    for arg_type, allowed in zip(cursor.oper_args_types[: op.args_n], op.args_types):
        if not arg_type & allowed:
            return False
        if arg_type == T_REG and not 1 <= get_byte(mem, cursor.pc + offset) <= REG_NUMBER:
            return False
        offset += type_size(arg_type, op.tdir_size)
    return True