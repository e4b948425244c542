import math

import pytest

from calculator_errors import ExpressionSyntaxError
from formula_parser import BinaryOp, Call, FormulaParser, Number, UnaryOp, tokenize


def parse(expr):
    return FormulaParser().parse(expr)


def test_tokenize_skips_whitespace():
    tokens = tokenize(" 1.5 ** calc.pi ")
    assert [(t.kind, t.text) for t in tokens] == [
        ("number", "1.5"),
        ("op", "**"),
        ("name", "calc.pi"),
        ("end", ""),
    ]


def test_tokenize_rejects_comparison_characters():
    with pytest.raises(ExpressionSyntaxError):
        tokenize("1 < 2")


def test_precedence_and_left_associativity():
    assert parse("1 - 2 - 3") == BinaryOp("-", BinaryOp("-", Number(1.0), Number(2.0)), Number(3.0))
    assert parse("1 + 2 * 3") == BinaryOp("+", Number(1.0), BinaryOp("*", Number(2.0), Number(3.0)))


def test_power_is_right_associative():
    assert parse("2**3**2") == BinaryOp("**", Number(2.0), BinaryOp("**", Number(3.0), Number(2.0)))


def test_unary_minus_binds_looser_than_power():
    # Convención matemática: -2**2 es -(2**2), no un error de sintaxis
    assert parse("-2**2") == UnaryOp("-", BinaryOp("**", Number(2.0), Number(2.0)))
    assert parse("2**-1") == BinaryOp("**", Number(2.0), UnaryOp("-", Number(1.0)))


def test_constants_and_calls():
    assert parse("calc.pi") == Number(math.pi)
    assert parse("calc.max(1, 2, 3)") == Call("max", (Number(1.0), Number(2.0), Number(3.0)))
    assert parse("calc.min()") == Call("min", ())


def test_decimal_literals():
    assert parse(".5") == Number(0.5)
    assert parse("3.") == Number(3.0)


@pytest.mark.parametrize("expr", [
    "(1 + 2",
    "1 + 2)",
    "1 +",
    "* 2",
    "calc.sin 1",
    "calc.sin(1, 2)",
    "calc.pow(2)",
    "calc.unknown(1)",
    "alert(1)",
    "sin(1)",
    "2 calc.pi",
    "()",
    "1,2",
])
def test_syntax_errors(expr):
    with pytest.raises(ExpressionSyntaxError):
        parse(expr)


def test_empty_expression_is_syntax_error():
    with pytest.raises(ExpressionSyntaxError):
        parse("   ")


def test_deep_nesting_is_parsed():
    assert parse("(" * 5000 + "1" + ")" * 5000) == Number(1.0)


def test_long_chain_is_left_associative():
    tree = parse("-".join(["1"] * 2000))
    depth = 0
    while isinstance(tree, BinaryOp):
        assert tree.op == "-"
        assert tree.right == Number(1.0)
        tree = tree.left
        depth += 1
    assert depth == 1999
    assert tree == Number(1.0)


def test_mixed_precedence():
    assert parse("2 * -3 ** 2") == BinaryOp(
        "*", Number(2.0), UnaryOp("-", BinaryOp("**", Number(3.0), Number(2.0)))
    )
    assert parse("-2 ** 2 * 3") == BinaryOp(
        "*", UnaryOp("-", BinaryOp("**", Number(2.0), Number(2.0))), Number(3.0)
    )
    assert parse("calc.max(1, (2 + 3) * 4)") == Call(
        "max", (Number(1.0), BinaryOp("*", BinaryOp("+", Number(2.0), Number(3.0)), Number(4.0)))
    )
