"""
SIMPLEXPR Language Parser

Predictive (LL(1)) recursive-descent parser for SIMPLEXPR, driven by one token
of lookahead pulled on demand from a `Scanner`.

Grammar
-------
    Prog ::= Exp EOF
    Exp  ::= Term ("+" Term)*        left-associative
    Term ::= Pow  ("*" Pow)*         left-associative
    Pow  ::= Fact ("^" Pow)?         right-associative
    Fact ::= INT | "(" Exp ")"

Each rule is one method. The reductions themselves are delegated to a
builder selected by target name:

- ``"eval"``: `EvalBuilder` folds the input to an integer as it is parsed.
- ``"ast"``: `TreeBuilder` returns an `ASTNode` tree rooted at a `Prog` node.

Parentheses only affect precedence; they never produce a node.

Entry Points
------------
- `Parser(tokens, target).parse()`: parse a whole program, raising on error.
- `parse_source(source, target)`: returns a `ParseResult` instead of raising.
- `evaluate(source)` / `build_tree(source)`: convenience wrappers.

Raises
------
SyntaxError
    As soon as the lookahead does not match what the current rule requires.
    There is no recovery; parsing stops at the first error.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, NamedTuple, Protocol, TypeVar

from simplexpr.simplexpr_ast import ASTNode, NodeKind
from simplexpr.simplexpr_eval import int_pow
from simplexpr.simplexpr_lexer import Scanner, Token, TokenCategory

T = TypeVar("T")


class Builder(Protocol[T]):  # pragma: no cover
    """Protocol for the reductions performed by the parser.

    The operator token passed to the binary reductions is the anchor token
    of the construct being reduced.
    """

    def prog(self, exp: T) -> T: ...

    def plus(self, op: Token, left: T, right: T) -> T: ...

    def times(self, op: Token, left: T, right: T) -> T: ...

    def pow(self, op: Token, base: T, exponent: T) -> T: ...

    def int(self, token: Token) -> T: ...


class EvalBuilder:
    """Reduces each construct to its integer value."""

    def __init__(self, max_exponent: int | None = None) -> None:
        self.max_exponent = max_exponent

    def prog(self, exp: int) -> int:
        return exp

    def plus(self, op: Token, left: int, right: int) -> int:
        return left + right

    def times(self, op: Token, left: int, right: int) -> int:
        return left * right

    def pow(self, op: Token, base: int, exponent: int) -> int:
        return int_pow(base, exponent, self.max_exponent)

    def int(self, token: Token) -> int:
        assert token.lexeme is not None
        return int(token.lexeme)


class TreeBuilder:
    """Builds a fresh `ASTNode` for each construct."""

    def prog(self, exp: ASTNode) -> ASTNode:
        return ASTNode(NodeKind.PROG, [exp])

    def plus(self, op: Token, left: ASTNode, right: ASTNode) -> ASTNode:
        return ASTNode(NodeKind.PLUS, [left, right], op)

    def times(self, op: Token, left: ASTNode, right: ASTNode) -> ASTNode:
        return ASTNode(NodeKind.TIMES, [left, right], op)

    def pow(self, op: Token, base: ASTNode, exponent: ASTNode) -> ASTNode:
        return ASTNode(NodeKind.POW, [base, exponent], op)

    def int(self, token: Token) -> ASTNode:
        return ASTNode(NodeKind.INT, token=token)


def make_builder(target: str, max_exponent: int | None = None) -> Builder[Any]:
    """Returns the builder for `target` ("eval" or "ast").

    Raises:
        ValueError: If the target is not supported.
    """
    builders: dict[str, Any] = {
        "eval": lambda: EvalBuilder(max_exponent),
        "ast": TreeBuilder,
        "tree": TreeBuilder,
    }
    key = target.lower()
    if key not in builders:
        raise ValueError(f"Unknown parser target: {target!r}")
    builder: Builder[Any] = builders[key]()
    return builder


class Parser:
    """
    SIMPLEXPR Parser Class

    Attributes
    ----------
    tokens : Iterator[Token]
        The token source; pulled one token at a time.
    current : Token
        The lookahead token.
    builder : Builder
        Performs the reductions (integer folding or tree building).
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        target: str = "eval",
        max_exponent: int | None = None,
    ) -> None:
        self.tokens = iter(tokens)
        self.builder: Builder[Any] = make_builder(target, max_exponent)
        self.current: Token = next(self.tokens, Token(TokenCategory.EOF))

    def expect(self, category: TokenCategory) -> Token:
        """Consumes the lookahead if it has `category` and returns it.

        Raises:
            SyntaxError: If the lookahead has a different category.
        """
        token = self.current
        if token.category is not category:
            raise SyntaxError(
                f"Expected {category}, got {token} at line {token.line}, col {token.col}"
            )
        # once EOF is consumed the lookahead stays on it
        self.current = next(self.tokens, token)
        return token

    def parse(self) -> Any:
        """Parses a whole program: `Prog ::= Exp EOF`."""
        return self.prog()

    def prog(self) -> Any:
        result = self.exp()
        self.expect(TokenCategory.EOF)
        return self.builder.prog(result)

    def exp(self) -> Any:
        result = self.term()
        while self.current.category is TokenCategory.PLUS:
            op = self.expect(TokenCategory.PLUS)
            result = self.builder.plus(op, result, self.term())
        return result

    def term(self) -> Any:
        result = self.pow()
        while self.current.category is TokenCategory.TIMES:
            op = self.expect(TokenCategory.TIMES)
            result = self.builder.times(op, result, self.pow())
        return result

    def pow(self) -> Any:
        result = self.fact()
        if self.current.category is TokenCategory.POW:
            op = self.expect(TokenCategory.POW)
            result = self.builder.pow(op, result, self.pow())
        return result

    def fact(self) -> Any:
        token = self.current
        if token.category is TokenCategory.INT:
            return self.builder.int(self.expect(TokenCategory.INT))
        if token.category is TokenCategory.PAR_OPEN:
            self.expect(TokenCategory.PAR_OPEN)
            result = self.exp()
            self.expect(TokenCategory.PAR_CLOSED)
            return result
        raise SyntaxError(
            f"Expected one of ({TokenCategory.INT}, {TokenCategory.PAR_OPEN}), "
            f"got {token} at line {token.line}, col {token.col}"
        )


class ParseResult(NamedTuple):
    """Outcome of `parse_source`: exactly one of `value` and `error` is set."""

    value: Any
    error: SyntaxError | None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_source(
    source: str, target: str = "eval", max_exponent: int | None = None
) -> ParseResult:
    """Scans and parses `source`, returning the value or the first syntax error."""
    parser = Parser(Scanner(source), target, max_exponent)
    try:
        return ParseResult(parser.parse(), None)
    except SyntaxError as e:
        return ParseResult(None, e)


def evaluate(source: str, max_exponent: int | None = None) -> int:
    """Returns the integer value of `source`; raises `SyntaxError` on bad input."""
    result: int = Parser(Scanner(source), "eval", max_exponent).parse()
    return result


def build_tree(source: str) -> ASTNode:
    """Returns the `Prog` root for `source`; raises `SyntaxError` on bad input."""
    root: ASTNode = Parser(Scanner(source), "ast").parse()
    return root


__all__ = [
    "Builder",
    "EvalBuilder",
    "ParseResult",
    "Parser",
    "TreeBuilder",
    "build_tree",
    "evaluate",
    "make_builder",
    "parse_source",
]
