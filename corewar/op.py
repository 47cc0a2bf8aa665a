"""Virtual machine constants and the operation table shared by the assembler and the VM."""

from __future__ import annotations

from dataclasses import dataclass

IND_SIZE = 2
REG_SIZE = 4
DIR_SIZE = REG_SIZE

REG_CODE = 1
DIR_CODE = 2
IND_CODE = 3

MAX_ARGS_NUMBER = 4
MAX_PLAYERS = 4
MEM_SIZE = 4 * 1024
IDX_MOD = MEM_SIZE // 8
CHAMP_MAX_SIZE = MEM_SIZE // 6

COMMENT_CHAR = "#"
LABEL_CHAR = ":"
DIRECT_CHAR = "%"
SEPARATOR_CHAR = ","

LABEL_CHARS = "abcdefghijklmnopqrstuvwxyz_0123456789"

NAME_CMD_STRING = ".name"
COMMENT_CMD_STRING = ".comment"

REG_NUMBER = 16

CYCLE_TO_DIE = 1536
CYCLE_DELTA = 50
NBR_LIVE = 21
MAX_CHECKS = 10

T_REG = 1
T_DIR = 2
T_IND = 4
T_LAB = 8

PROG_NAME_LENGTH = 128
COMMENT_LENGTH = 2048
COREWAR_EXEC_MAGIC = 0xEA83F3

# Sizes that arguments occupy in the arena.
REG_MEM_SIZE = 1
IND_MEM_SIZE = 2
DIR_MEM_SIZE = 4


@dataclass(frozen=True)
class Op:
    """Description of one machine operation."""

    name: str
    code: int
    args_n: int
    args_typescode: bool
    args_types: tuple[int, int, int]
    tdir_size: int
    cycles_to_exec: int


OPS: tuple[Op, ...] = (
    Op("live", 0x01, 1, False, (T_DIR, 0, 0), 4, 10),
    Op("ld", 0x02, 2, True, (T_DIR | T_IND, T_REG, 0), 4, 5),
    Op("st", 0x03, 2, True, (T_REG, T_IND | T_REG, 0), 4, 5),
    Op("add", 0x04, 3, True, (T_REG, T_REG, T_REG), 4, 10),
    Op("sub", 0x05, 3, True, (T_REG, T_REG, T_REG), 4, 10),
    Op("and", 0x06, 3, True,
       (T_REG | T_DIR | T_IND, T_REG | T_IND | T_DIR, T_REG), 4, 6),
    Op("or", 0x07, 3, True,
       (T_REG | T_IND | T_DIR, T_REG | T_IND | T_DIR, T_REG), 4, 6),
    Op("xor", 0x08, 3, True,
       (T_REG | T_IND | T_DIR, T_REG | T_IND | T_DIR, T_REG), 4, 6),
    Op("zjmp", 0x09, 1, False, (T_DIR, 0, 0), 2, 20),
    Op("ldi", 0x0A, 3, True,
       (T_REG | T_DIR | T_IND, T_DIR | T_REG, T_REG), 2, 25),
    Op("sti", 0x0B, 3, True,
       (T_REG, T_REG | T_DIR | T_IND, T_DIR | T_REG), 2, 25),
    Op("fork", 0x0C, 1, False, (T_DIR, 0, 0), 2, 800),
    Op("lld", 0x0D, 2, True, (T_DIR | T_IND, T_REG, 0), 4, 10),
    Op("lldi", 0x0E, 3, True,
       (T_REG | T_DIR | T_IND, T_DIR | T_REG, T_REG), 2, 50),
    Op("lfork", 0x0F, 1, False, (T_DIR, 0, 0), 2, 1000),
    Op("aff", 0x10, 1, True, (T_REG, 0, 0), 4, 2),
)

_BY_NAME = {op.name: op for op in OPS}
_BY_CODE = {op.code: op for op in OPS}


def get_op(name: str) -> Op | None:
    """Return the operation with the given mnemonic, or None."""
    return _BY_NAME.get(name)


def op_by_code(code: int) -> Op | None:
    """Return the operation with the given opcode, or None."""
    return _BY_CODE.get(code)