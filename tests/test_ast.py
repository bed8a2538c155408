import pytest
from hypothesis import given
from hypothesis import strategies as st

from simplexpr.simplexpr_ast import ASTNode, NodeKind
from simplexpr.simplexpr_lexer import Token, TokenCategory


def int_node(value: str) -> ASTNode:
    return ASTNode(NodeKind.INT, token=Token(TokenCategory.INT, value))


def plus(left: ASTNode, right: ASTNode) -> ASTNode:
    return ASTNode(NodeKind.PLUS, [left, right], Token(TokenCategory.PLUS, "+"))


def test_astnode_repr() -> None:
    node = plus(int_node("1"), int_node("2"))
    assert repr(node) == (
        "ASTNode(Plus, token='+', children=[ASTNode(Int, token='1'), "
        "ASTNode(Int, token='2')])"
    )


def test_astnode_eq_equal() -> None:
    assert plus(int_node("1"), int_node("2")) == plus(int_node("1"), int_node("2"))


def test_astnode_eq_not_equal_children() -> None:
    assert plus(int_node("1"), int_node("2")) != plus(int_node("2"), int_node("1"))


def test_astnode_eq_not_equal_kind() -> None:
    left, right = int_node("1"), int_node("2")
    times = ASTNode(NodeKind.TIMES, [left, right], Token(TokenCategory.TIMES, "*"))
    assert plus(left, right) != times


def test_astnode_eq_non_astnode() -> None:
    assert int_node("1") != "not an ast"


def test_astnode_is_immutable() -> None:
    node = int_node("1")
    with pytest.raises(AttributeError, match="immutable"):
        node.kind = NodeKind.PROG  # type: ignore[misc]
    assert isinstance(node.children, tuple)


@pytest.mark.parametrize(  # type: ignore[misc]
    "kind,count",
    [
        (NodeKind.PROG, 0),
        (NodeKind.PROG, 2),
        (NodeKind.PLUS, 1),
        (NodeKind.TIMES, 3),
        (NodeKind.POW, 0),
    ],
)
def test_arity_is_enforced(kind: NodeKind, count: int) -> None:
    children = [int_node(str(i)) for i in range(count)]
    with pytest.raises(ValueError, match="requires"):
        ASTNode(kind, children)


def test_int_requires_int_anchor_token() -> None:
    with pytest.raises(ValueError, match="INT anchor token"):
        ASTNode(NodeKind.INT)
    with pytest.raises(ValueError, match="INT anchor token"):
        ASTNode(NodeKind.INT, token=Token(TokenCategory.PLUS, "+"))


def test_int_rejects_children() -> None:
    with pytest.raises(ValueError, match="requires 0 children"):
        ASTNode(NodeKind.INT, [int_node("1")], Token(TokenCategory.INT, "1"))


def test_label() -> None:
    assert ASTNode(NodeKind.PROG, [int_node("7")]).label == "Prog"
    assert int_node("7").label == 'Int [INT, "7"]'


def test_render_nested_tree() -> None:
    tree = ASTNode(NodeKind.PROG, [plus(plus(int_node("2"), int_node("3")), int_node("4"))])
    assert tree.render() == "\n".join(
        [
            "Prog",
            '  Plus [PLUS, "+"]',
            '    Plus [PLUS, "+"]',
            '      Int [INT, "2"]',
            '      Int [INT, "3"]',
            '    Int [INT, "4"]',
        ]
    )
    assert str(tree) == tree.render()


def test_render_deep_tree_does_not_recurse() -> None:
    node = int_node("1")
    for _ in range(5000):
        node = plus(node, int_node("1"))
    lines = node.render().splitlines()
    assert len(lines) == 10001
    assert lines[-1] == '  Int [INT, "1"]'


def test_to_dict() -> None:
    d = ASTNode(NodeKind.PROG, [int_node("5")]).to_dict()
    assert d == {
        "kind": "Prog",
        "token": None,
        "children": [
            {
                "kind": "Int",
                "token": {"category": "INT", "lexeme": "5"},
                "children": [],
            }
        ],
    }


@given(st.integers(min_value=0, max_value=10**6), st.integers(min_value=0, max_value=10**6))  # type: ignore[misc]
def test_hash_consistent_with_eq(a: int, b: int) -> None:
    n1 = plus(int_node(str(a)), int_node(str(b)))
    n2 = plus(int_node(str(a)), int_node(str(b)))
    assert n1 == n2
    assert hash(n1) == hash(n2)
