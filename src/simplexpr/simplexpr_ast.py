"""
Defines the abstract syntax tree (AST) produced by the SIMPLEXPR tree builder.

Classes:
    NodeKind:
        The closed set of node kinds: Prog, Plus, Times, Pow, Int.

    ASTNode:
        An immutable tree node with an ordered tuple of owned children and an
        optional anchor token recording the lexeme or operator that produced it.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain
        Python dictionaries, suitable for JSON output or debugging.

Arity is checked when a node is built:
    Prog   exactly one child (the top-level expression)
    Plus   exactly two children (left, right)
    Times  exactly two children (left, right)
    Pow    exactly two children (base, exponent)
    Int    no children and an INT anchor token

Example:
    >>> two = ASTNode(NodeKind.INT, token=Token(TokenCategory.INT, "2"))
    >>> print(ASTNode(NodeKind.PROG, [two]).render())
    Prog
      Int [INT, "2"]
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any, TypedDict

from simplexpr.simplexpr_lexer import Token, TokenCategory


class NodeKind(Enum):
    PROG = "Prog"
    PLUS = "Plus"
    TIMES = "Times"
    POW = "Pow"
    INT = "Int"

    def __str__(self) -> str:
        return self.value


_ARITY: dict[NodeKind, int] = {
    NodeKind.PROG: 1,
    NodeKind.PLUS: 2,
    NodeKind.TIMES: 2,
    NodeKind.POW: 2,
    NodeKind.INT: 0,
}


class ASTDict(TypedDict):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The node kind name (e.g., "Plus", "Int").
        token (dict[str, Any] | None): The anchor token's category and lexeme.
        children (list[ASTDict]): Child nodes in order.
    """

    kind: str
    token: dict[str, Any] | None
    children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the SIMPLEXPR abstract syntax tree.

    Args:
        kind (NodeKind): The node kind.
        children (Iterable[ASTNode], optional): Child nodes in evaluation order.
        token (Token, optional): The anchor token.

    Attributes:
        kind (NodeKind): The node kind.
        children (tuple[ASTNode, ...]): Owned child nodes.
        token (Token | None): The anchor token, if any.

    Raises:
        ValueError: If the number of children or the anchor token does not
            fit the node kind.
    """

    __slots__ = ("kind", "children", "token")

    def __init__(
        self,
        kind: NodeKind,
        children: Iterable["ASTNode"] | None = None,
        token: Token | None = None,
    ):
        kids = tuple(children or ())
        expected = _ARITY[kind]
        if len(kids) != expected:
            raise ValueError(
                f"{kind} node requires {expected} children, got {len(kids)}"
            )
        if kind is NodeKind.INT and (
            token is None or token.category is not TokenCategory.INT
        ):
            raise ValueError(f"Int node requires an INT anchor token, got {token}")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "children", kids)
        object.__setattr__(self, "token", token)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"ASTNode is immutable; cannot set {name!r}")

    @property
    def label(self) -> str:
        """The node's rendering label: its kind followed by its anchor token."""
        if self.token is None:
            return str(self.kind)
        return f"{self.kind} {self.token}"

    def render(self) -> str:
        """Renders the tree depth-first, pre-order, two spaces per level."""
        lines: list[str] = []
        stack: list[tuple[ASTNode, int]] = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            lines.append("  " * depth + node.label)
            stack.extend((child, depth + 1) for child in reversed(node.children))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.token is not None:
            parts.append(f"token={self.token.lexeme!r}")
        if self.children:
            parts.append(f"children=[{', '.join(repr(c) for c in self.children)}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.token == other.token
            and self.children == other.children
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.token, self.children))

    def to_dict(self) -> ASTDict:
        token = None
        if self.token is not None:
            token = {"category": str(self.token.category), "lexeme": self.token.lexeme}
        return {
            "kind": str(self.kind),
            "token": token,
            "children": [c.to_dict() for c in self.children],
        }


__all__ = ["ASTDict", "ASTNode", "NodeKind"]
