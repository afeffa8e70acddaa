import pytest

from calc import (
    Reducer, reduce, tokenize, TokenType, NumberToken, ExpressionNode,
    MalformedExpressionError
)


@pytest.mark.parametrize("expression, index", [
    ("2*3+4*5", 3),
    ("8-3-2", 3),
    ("2*3/4", 3),
    ("1+2*3", 1),
    ("42", None),
])
def test_select_split_operator(expression, index):
    assert Reducer.select_split_operator(tokenize(expression)) == index


@pytest.mark.parametrize("expression, tree", [
    ("8 - 3 - 2", "((8.0 - 3.0) - 2.0)"),
    ("2*3+4*5", "((2.0 * 3.0) + (4.0 * 5.0))"),
    ("1+2*3-4", "((1.0 + (2.0 * 3.0)) - 4.0)"),
    ("100/10/5", "((100.0 / 10.0) / 5.0)"),
    ("2*(3+4)", "(2.0 * (3.0 + 4.0))"),
    ("(1+2)*(3-4)", "((1.0 + 2.0) * (3.0 - 4.0))"),
    ("-(4)", "(-1.0 * 4.0)"),
])
def test_reduce_shapes(expression, tree):
    assert str(reduce(tokenize(expression))) == tree


def test_reduce_returns_expression_node():
    tree = reduce(tokenize("1+2"))
    assert isinstance(tree, ExpressionNode)
    assert tree.type == TokenType.EXPRESSION
    assert tree.operator.symbol == '+'
    assert tree.left.value == 1.0
    assert tree.right.value == 2.0


def test_single_literal_is_trivial_tree():
    token = NumberToken(42, 0)
    assert reduce([token]) is token


def test_long_chain_does_not_recurse():
    tree = reduce(tokenize("+".join(["1"] * 5000)))
    depth = 0
    while isinstance(tree, ExpressionNode):
        assert tree.right.value == 1.0
        tree = tree.left
        depth += 1
    assert depth == 4999


@pytest.mark.parametrize("expression", [
    "",
    "   ",
    "3+",
    "+3",
    "3 + * 4",
    "3 4",
    "()",
    "1+()",
    "(2)(3)",
    "2(+3)",
    "-",
    "-*3",
    "1 - 2 -",
])
def test_malformed(expression):
    with pytest.raises(MalformedExpressionError):
        reduce(tokenize(expression))


def test_missing_operator_position():
    with pytest.raises(MalformedExpressionError) as exc_info:
        reduce(tokenize("3 4"))
    assert exc_info.value.position == 2
