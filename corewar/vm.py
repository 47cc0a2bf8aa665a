"""Command-line virtual machine: sets a game up from its arguments and runs it."""

from __future__ import annotations

import sys
from typing import Callable, Sequence

from .common import BYTECODE_FILENAME_SUFFIX, CorewarError, UsageError, is_filename
from .cursor import Cursor
from .handlers import (
    op_add,
    op_aff,
    op_and,
    op_fork,
    op_ld,
    op_lfork,
    op_live,
    op_lld,
    op_or,
    op_st,
    op_sub,
    op_xor,
    op_zjmp,
)
from .indexed import op_ldi, op_lldi, op_sti
from .memory import get_types, is_int, mem_addr, type_size, valid_args
from .op import CYCLE_DELTA, MAX_CHECKS, MAX_PLAYERS, MEM_SIZE, NBR_LIVE, op_by_code
from .player import get_player, load_player, next_player
from .state import VM, LogLevel

MAX_PLAYERS_ERR_MSG = "ERROR: Too much players"
MIN_PLAYERS_ERR_MSG = "ERROR: No active players"

DUMP_ROW = 32

USAGE = (
    "Usage: ./corewar [-a] [-dump nbr_cycles] [-s N] [-l log_level]"
    " [[-n number champion1.cor] ...\n"
    '\t-a - Prints output from "aff" (Default is to hide it)\n'
    "\t-dump nbr_cycles - Dumps memory after N cycles then exits\n"
    "\t-l log_level - Logging levels, can be added together to enable several\n"
    "\t\t- 0 - Show only essentials\n"
    "\t\t- 1 - Show lives\n"
    "\t\t- 2 - Show cycles\n"
    "\t\t- 4 - Show operations (Params are NOT litteral ...)\n"
    "\t\t- 8 - Show deaths\n"
    "\t\t- 16 - Show PC movements (Except for jumps)\n"
    "\t-n number - Sets the number of the next player"
)

HANDLERS: dict[int, Callable[[VM, Cursor], int]] = {
    0x01: op_live,
    0x02: op_ld,
    0x03: op_st,
    0x04: op_add,
    0x05: op_sub,
    0x06: op_and,
    0x07: op_or,
    0x08: op_xor,
    0x09: op_zjmp,
    0x0A: op_ldi,
    0x0B: op_sti,
    0x0C: op_fork,
    0x0D: op_lld,
    0x0E: op_lldi,
    0x0F: op_lfork,
    0x10: op_aff,
}


def _number(value: str) -> int:
    return int(value) if value else 0


def _at(args: Sequence[str], index: int) -> str | None:
    return args[index] if index < len(args) else None


def _set_dump(vm: VM, value: str | None) -> int:
    if value is None or not is_int(value):
        return 0
    vm.dump_cycles = _number(value)
    return 2


def _set_loglevel(vm: VM, value: str | None) -> int:
    if value is None or not is_int(value):
        return 0
    # The level is kept in a signed byte; a negative one means no logging.
    level = _number(value) & 0xFF
    vm.log_level = LogLevel(0 if level >= 0x80 else level)
    return 2


def _set_champ(vm: VM, set_id: bool, value: str | None, champ_name: str | None) -> int:
    player_id = 0
    if set_id:
        if value is None or not is_int(value):
            return 0
        player_id = _number(value)
        if not 1 <= player_id <= MAX_PLAYERS or get_player(vm.pending_players, player_id):
            return 0
    if not is_filename(champ_name, BYTECODE_FILENAME_SUFFIX):
        return 0
    player = load_player(champ_name)
    if player is not None:
        player.id = player_id
        vm.pending_players.append(player)
    return 3 if set_id else 1


def _parse_args(vm: VM, args: Sequence[str]) -> None:
    index = 0
    while index < len(args):
        arg = args[index]
        used = 0
        if arg == "-dump":
            used = _set_dump(vm, _at(args, index + 1))
        elif arg == "-a":
            vm.aff = True
            used = 1
        elif arg == "-l":
            used = _set_loglevel(vm, _at(args, index + 1))
        elif arg == "-n":
            used = _set_champ(vm, True, _at(args, index + 1), _at(args, index + 2))
        elif is_filename(arg, BYTECODE_FILENAME_SUFFIX):
            used = _set_champ(vm, False, None, arg)
        if not used:
            raise UsageError(f"Unexpected argument: {arg}")
        index += used


def _set_players(vm: VM) -> None:
    pending = vm.pending_players
    if not pending:
        raise CorewarError(MIN_PLAYERS_ERR_MSG)
    if len(pending) > MAX_PLAYERS:
        raise CorewarError(MAX_PLAYERS_ERR_MSG)
    for index in range(1, MAX_PLAYERS + 1):
        if not pending:
            break
        player = next_player(pending, index)
        if player is None:
            raise UsageError(f"No player can take number {index}")
        vm.players.append(player)


def configure(vm: VM, argv: Sequence[str]) -> None:
    """Read the options and champions, then lay out the arena and the cursors."""
    _parse_args(vm, list(argv))
    _set_players(vm)
    step = MEM_SIZE // vm.players_num
    for number, player in enumerate(vm.players):
        start = number * step
        vm.arena[start:start + player.code_size] = player.code or b""
    for number, player in enumerate(vm.players):
        vm.new_cursor(player, number * step)


def next_oper(vm: VM, cursor: Cursor) -> None:
    """Fetch the operation under the cursor and start its countdown."""
    op = op_by_code(vm.arena[cursor.pc])
    if op is not None:
        cursor.oper = op
        cursor.cycles_to_exec = op.cycles_to_exec


def _instruction_length(cursor: Cursor) -> int:
    op = cursor.oper
    return 1 + int(op.args_typescode) + sum(
        type_size(arg_type, op.tdir_size) for arg_type in cursor.oper_args_types[: op.args_n]
    )


def exec_oper(vm: VM, cursor: Cursor) -> None:
    """Run the fetched operation, or skip it when its arguments are invalid, and move on."""
    offset = 1
    if cursor.oper is not None:
        get_types(vm.arena, cursor)
        if valid_args(vm.arena, cursor):
            offset = HANDLERS[cursor.oper.code](vm, cursor)
        else:
            offset = _instruction_length(cursor)
        if vm.log_level & LogLevel.MOVE and offset:
            vm.log_pc_move(cursor, offset)
    cursor.pc = mem_addr(cursor.pc + offset)
    cursor.oper_args_types = [0, 0, 0]
    cursor.oper = None


def cycles_to_die_check(vm: VM, checks: int) -> int:
    """Kill cursors that have not lived in time and adjust cycles-to-die.

    Returns the updated count of checks since cycles-to-die last changed.
    """
    checks += 1
    survivors = []
    for cursor in vm.cursors:
        if vm.cycles_to_die <= 0 or vm.cycles_count - cursor.alive_cycle >= vm.cycles_to_die:
            if vm.log_level & LogLevel.CYCLES:
                vm.log_cursor_death(cursor)
        else:
            survivors.append(cursor)
    vm.cursors = survivors
    if checks == MAX_CHECKS or vm.live_count >= NBR_LIVE:
        vm.cycles_to_die -= CYCLE_DELTA
        if vm.log_level & LogLevel.CYCLES:
            vm.log_die_cycles()
        checks = 0
    vm.live_count = 0
    return checks


def dump_arena(arena: Sequence[int]) -> str:
    """Return the arena as hex rows of DUMP_ROW bytes."""
    rows = []
    for start in range(0, MEM_SIZE, DUMP_ROW):
        cells = "".join(f"{arena[start + i]:02x} " for i in range(DUMP_ROW))
        rows.append(f"{start:#06x} : {cells}\n")
    return "".join(rows)


def _exec_cursor(vm: VM, cursor: Cursor) -> None:
    if cursor.cycles_to_exec == 0:
        next_oper(vm, cursor)
    if cursor.cycles_to_exec > 0:
        cursor.cycles_to_exec -= 1
    if cursor.cycles_to_exec == 0:
        exec_oper(vm, cursor)


def _next_cycle(vm: VM) -> None:
    vm.cycles_count += 1
    if vm.log_level & LogLevel.CYCLES:
        vm.log_cycle()
    # Cursors forked during this cycle start running on the next one.
    for cursor in list(vm.cursors):
        _exec_cursor(vm, cursor)


def run(vm: VM) -> bool:
    """Play until no cursor is left; return True if stopped early to dump the arena."""
    check_cycles = 0
    checks = 0
    while vm.cursors:
        if vm.dump_cycles is not None and vm.cycles_count == vm.dump_cycles:
            vm.out.write(dump_arena(vm.arena))
            return True
        _next_cycle(vm)
        check_cycles += 1
        if check_cycles == vm.cycles_to_die or vm.cycles_to_die <= 0:
            checks = cycles_to_die_check(vm, checks)
            check_cycles = 0
    return False


def print_help() -> None:
    """Print the usage text."""
    print(USAGE)


def main(argv: Sequence[str] | None = None) -> int:
    """Run a game with the champions and options given on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print_help()
        return 1
    vm = VM()
    try:
        configure(vm, args)
    except UsageError:
        print_help()
        return 1
    except CorewarError as exc:
        print(exc, file=sys.stderr)
        return 1
    vm.introduce()
    if not run(vm):
        vm.announce_winner()
    return 0


if __name__ == "__main__":
    sys.exit(main())