import pytest

from corewar.asm_errors import LexicalError
from corewar.lexer import Token, TokenType, is_special, is_whitespace, tokenize

T = TokenType


def kinds(tokens):
    return [token.type for token in tokens]


def values(tokens):
    return [token.value for token in tokens]


def test_empty_source_gives_only_end():
    tokens = tokenize("")
    assert kinds(tokens) == [T.END]
    assert tokens[0].row == 1


def test_header_line():
    tokens = tokenize('.name "zork"\n')
    assert kinds(tokens) == [T.CMD, T.STR, T.ENDLN, T.END]
    assert values(tokens) == ["name", "zork", None, None]


def test_instruction_with_registers_and_directs():
    tokens = tokenize("sti r1, %:live, %1\n")
    assert kinds(tokens) == [T.OPR, T.REG, T.SEP, T.DIRL, T.SEP, T.DIR, T.ENDLN, T.END]
    assert values(tokens)[:6] == ["sti", "r1", None, "live", None, "1"]


def test_label_before_instruction():
    tokens = tokenize("loop: live %1")
    assert kinds(tokens) == [T.LBL, T.OPR, T.DIR, T.ENDLN, T.END]
    assert values(tokens)[:3] == ["loop", "live", "1"]


def test_numeric_label():
    tokens = tokenize("42:")
    assert kinds(tokens)[0] is T.LBL
    assert tokens[0].value == "42"


def test_indirect_arguments():
    tokens = tokenize("ld -5, r2\nld 34, r3\nld :lbl, r4\n")
    indirects = [t for t in tokens if t.type in (T.IND, T.INDL)]
    assert [(t.type, t.value) for t in indirects] == [
        (T.IND, "-5"),
        (T.IND, "34"),
        (T.INDL, "lbl"),
    ]


@pytest.mark.parametrize(
    "word, kind",
    [("r1", T.REG), ("r16", T.REG), ("r0", T.OPR), ("r123", T.OPR), ("rx", T.OPR)],
)
def test_register_detection(word, kind):
    tokens = tokenize(word)
    assert tokens[0].type is kind
    assert tokens[0].value == word


def test_comments_are_skipped():
    tokens = tokenize("live %1 # done\n; whole line\n")
    assert kinds(tokens) == [T.OPR, T.DIR, T.ENDLN, T.ENDLN, T.END]


def test_blank_lines_give_no_end_of_line():
    tokens = tokenize("\n\nlive %1\n")
    assert kinds(tokens) == [T.OPR, T.DIR, T.ENDLN, T.END]
    assert tokens[0].row == 3
    assert tokens[-1].row == tokens[0].row + 1


def test_whitespace_only_line_gives_end_of_line():
    assert kinds(tokenize("   \t\n")) == [T.ENDLN, T.END]


def test_multiline_string():
    tokens = tokenize('.comment "first\nsecond"\n')
    assert kinds(tokens) == [T.CMD, T.STR, T.ENDLN, T.END]
    assert tokens[1].value == "first\nsecond"
    assert tokens[1].row == tokens[0].row
    assert tokens[-1].row == tokens[-2].row + 1


def test_columns_are_one_based():
    tokens = tokenize("live %1")
    assert tokens[0].col == 1
    assert tokens[1].col == 7


def test_unterminated_string_is_lexical_error():
    with pytest.raises(LexicalError):
        tokenize('.name "never closed\n')


def test_letters_after_direct_char_are_lexical_error():
    with pytest.raises(LexicalError) as info:
        tokenize("live %abc")
    assert info.value.row == 1
    assert info.value.col == 7


@pytest.mark.parametrize("source", ["!", "ld -5a, r1", "live %1x"])
def test_garbage_is_lexical_error(source):
    with pytest.raises(LexicalError):
        tokenize(source)


def test_tokens_are_ordered_by_row():
    tokens = tokenize('.name "a"\n.comment "b"\nlive %1\n')
    rows = [t.row for t in tokens]
    assert rows == sorted(rows)
    assert all(isinstance(t, Token) and t.col >= 1 for t in tokens)


@pytest.mark.parametrize("char", [" ", "\t", "\v", "\f", "\r"])
def test_is_whitespace_true(char):
    assert is_whitespace(char) is True


@pytest.mark.parametrize("char", ["", "\n", "a", ","])
def test_is_whitespace_false(char):
    assert is_whitespace(char) is False


@pytest.mark.parametrize("char", ["", "\n", '"', "%", ",", "#", ";", " "])
def test_is_special_true(char):
    assert is_special(char) is True


@pytest.mark.parametrize("char", ["a", "1", ":", "-", "r"])
def test_is_special_false(char):
    assert is_special(char) is False