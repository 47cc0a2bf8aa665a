from types import SimpleNamespace

from corewar.cursor import Cursor
from corewar.op import MEM_SIZE, REG_NUMBER, get_op


def make_cursor(pc=0, player_id=2):
    return Cursor(id=0, pc=pc, parent=SimpleNamespace(id=player_id))


def test_first_register_holds_negated_player_id():
    cursor = make_cursor(player_id=3)
    assert cursor.reg[0] == -3
    assert len(cursor.reg) == REG_NUMBER
    assert cursor.reg[1:] == [0] * (REG_NUMBER - 1)


def test_new_cursor_state():
    cursor = make_cursor()
    assert cursor.carry is False
    assert cursor.cycles_to_exec == 0
    assert cursor.oper is None
    assert cursor.oper_args_types == [0, 0, 0]


def test_duplicate_copies_state():
    cursor = make_cursor(pc=10)
    cursor.reg[5] = 42
    cursor.carry = True
    cursor.alive_cycle = 77
    cursor.oper = get_op("live")
    cursor.cycles_to_exec = 3
    child = cursor.duplicate(9, 5)
    assert child.id == 9
    assert child.pc == cursor.pc + 5
    assert child.reg == cursor.reg
    assert child.carry is True
    assert child.alive_cycle == cursor.alive_cycle
    assert child.parent is cursor.parent
    assert child.oper is None
    assert child.cycles_to_exec == 0


def test_duplicate_registers_are_independent():
    cursor = make_cursor()
    child = cursor.duplicate(1, 0)
    child.reg[2] = 99
    assert cursor.reg[2] == 0


def test_duplicate_wraps_backwards():
    cursor = make_cursor(pc=0)
    assert cursor.duplicate(1, -1).pc == MEM_SIZE - 1


def test_duplicate_wraps_forwards():
    cursor = make_cursor(pc=MEM_SIZE - 1)
    assert cursor.duplicate(1, 1).pc == 0