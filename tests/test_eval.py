import pytest
from hypothesis import given
from hypothesis import strategies as st

from simplexpr.simplexpr_ast import ASTNode, NodeKind
from simplexpr.simplexpr_eval import Evaluator, int_pow
from simplexpr.simplexpr_lexer import Token, TokenCategory


def int_node(value: str) -> ASTNode:
    return ASTNode(NodeKind.INT, token=Token(TokenCategory.INT, value))


def test_int_pow_small() -> None:
    assert int_pow(2, 10) == 1024
    assert int_pow(3, 1) == 3
    assert int_pow(0, 0) == 1
    assert int_pow(0, 5) == 0


def test_int_pow_is_exact_for_large_results() -> None:
    assert int_pow(3, 100) == 515377520732011331036461129765621272702107522001
    assert int_pow(7, 64) % 10 == 1


def test_int_pow_negative_exponent_raises() -> None:
    with pytest.raises(ValueError, match="Negative exponent"):
        int_pow(2, -1)


def test_int_pow_limit() -> None:
    assert int_pow(2, 8, max_exponent=8) == 256
    with pytest.raises(OverflowError, match="exceeds the configured limit of 8"):
        int_pow(2, 9, max_exponent=8)


@given(st.integers(min_value=-50, max_value=50), st.integers(min_value=0, max_value=40))  # type: ignore[misc]
def test_int_pow_matches_builtin(base: int, exponent: int) -> None:
    assert int_pow(base, exponent) == base**exponent


def test_evaluate_each_kind() -> None:
    two, three = int_node("2"), int_node("3")
    evaluator = Evaluator()
    assert evaluator.evaluate(two) == 2
    assert evaluator.evaluate(
        ASTNode(NodeKind.PLUS, [two, three], Token(TokenCategory.PLUS, "+"))
    ) == 5
    assert evaluator.evaluate(
        ASTNode(NodeKind.TIMES, [two, three], Token(TokenCategory.TIMES, "*"))
    ) == 6
    assert evaluator.evaluate(
        ASTNode(NodeKind.POW, [two, three], Token(TokenCategory.POW, "^"))
    ) == 8
    assert evaluator.evaluate(ASTNode(NodeKind.PROG, [three])) == 3


def test_evaluator_respects_limit() -> None:
    node = ASTNode(NodeKind.POW, [int_node("2"), int_node("50")], Token(TokenCategory.POW, "^"))
    with pytest.raises(OverflowError):
        Evaluator(max_exponent=10).evaluate(node)


def test_evaluator_missing_method_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delattr(Evaluator, "eval_times")
    node = ASTNode(NodeKind.TIMES, [int_node("1"), int_node("2")], Token(TokenCategory.TIMES, "*"))
    with pytest.raises(NotImplementedError, match="No evaluator method"):
        Evaluator().evaluate(node)
