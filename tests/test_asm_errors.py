from corewar.asm_errors import (
    INVALID_ARG_MSG,
    PROGRAM_NAME_FAIL_MSG,
    UNDEC_LABEL_MSG,
    UNEXP_TOKEN_MSG,
    WRONG_REG_NBR_MSG,
    AsmError,
    InvalidArgumentError,
    LabelError,
    LexicalError,
    ProgramError,
    RegisterError,
    TokenError,
)
from corewar.common import CorewarError
from corewar.lexer import Token, TokenType
from corewar.op import get_op


def test_token_error_message():
    token = Token("live", TokenType.OPR, 3, 5)
    err = TokenError(token)
    assert str(err) == '[3, 5]\tUnexpected token "live" (OPR)'
    assert err.token is token


def test_token_error_without_value_prints_empty_quotes():
    err = TokenError(Token(None, TokenType.ENDLN, 2, 9))
    assert '"" (ENDLN)' in str(err)
    assert UNEXP_TOKEN_MSG in str(err)


def test_invalid_argument_message():
    op = get_op("live")
    err = InvalidArgumentError(Token("r1", TokenType.REG, 1, 6), op, 0)
    assert str(err) == "[1, 6]\tInvalid argument (r1) for live at 1 position"
    assert err.arg_index == 0
    assert err.op is op


def test_invalid_argument_counts_from_one():
    err = InvalidArgumentError(Token("5", TokenType.IND, 1, 1), get_op("add"), 2)
    assert str(err).endswith("for add at 3 position")
    assert INVALID_ARG_MSG in str(err)


def test_label_error_with_position():
    err = LabelError("loop", 4, 7)
    assert str(err) == '[4, 7]\tUndeclared label "loop"'
    assert err.name == "loop"


def test_label_error_without_position():
    text = str(LabelError("loop"))
    assert text.startswith(UNDEC_LABEL_MSG)
    assert text.endswith('"loop"')
    assert "[" not in text


def test_register_error_shows_number_and_token():
    err = RegisterError(Token("r0", TokenType.REG, 2, 3))
    assert f"{WRONG_REG_NBR_MSG} 0 (r0)" in str(err)
    assert str(err).startswith("[2, 3]\t")


def test_lexical_error_keeps_position():
    err = LexicalError(2, 4)
    assert (err.row, err.col) == (2, 4)
    assert str(err).startswith("[2, 4]\t")
    assert str(err).endswith("Lexical error")


def test_program_error_is_plain_message():
    err = ProgramError(PROGRAM_NAME_FAIL_MSG)
    assert str(err) == PROGRAM_NAME_FAIL_MSG
    assert isinstance(err, AsmError) and isinstance(err, CorewarError)


def test_token_error_is_asm_error():
    err = TokenError(Token(",", TokenType.SEP, 1, 1))
    assert isinstance(err, AsmError)
    assert str(err) == '[1, 1]\tUnexpected token "," (SEP)'