import pytest

from corewar.op import (
    OPS,
    T_DIR,
    T_IND,
    T_REG,
    get_op,
    op_by_code,
)


def test_live_is_first_operation():
    op = get_op("live")
    assert op.code == 0x01
    assert op.args_types[0] == T_DIR
    assert op.args_typescode is False


def test_aff_by_code():
    op = op_by_code(0x10)
    assert op.name == "aff"
    assert op.args_typescode is True


def test_zjmp_uses_short_direct():
    op = get_op("zjmp")
    assert op.tdir_size == 2
    assert op.cycles_to_exec == 20


@pytest.mark.parametrize("name", ["nope", "", "LIVE"])
def test_unknown_name(name):
    assert get_op(name) is None


@pytest.mark.parametrize("code", [0, 17, -1, 255])
def test_unknown_code(code):
    assert op_by_code(code) is None


def test_table_lookups_agree():
    assert len(OPS) == 16
    for op in OPS:
        assert get_op(op.name) is op
        assert op_by_code(op.code) is op


def test_codes_map_to_names_in_order():
    names = [op_by_code(code).name for code in range(1, 17)]
    assert names == [
        "live", "ld", "st", "add", "sub", "and", "or", "xor",
        "zjmp", "ldi", "sti", "fork", "lld", "lldi", "lfork", "aff",
    ]


def test_ld_argument_types():
    op = get_op("ld")
    assert op.args_types == (T_DIR | T_IND, T_REG, 0)