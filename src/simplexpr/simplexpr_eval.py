"""
Integer arithmetic and tree evaluation for SIMPLEXPR.

Functions:
    int_pow(base, exponent, max_exponent=None) -> int:
        Exact integer power by repeated squaring.

Classes:
    Evaluator:
        Reduces an `ASTNode` tree to an integer by dispatching each node to an
        `eval_<kind>` method, using the same precedence and associativity as
        the parser's evaluating builder.

Numeric semantics:
    Python integers are arbitrary precision, so sums, products and powers never
    wrap around. Powers are computed exactly, never through floating point.
    Because a short input such as "9^9^9" asks for a number with hundreds of
    millions of digits, callers may pass `max_exponent`; an exponent above the
    limit raises `OverflowError` before any multiplication happens.

Example:
    >>> int_pow(2, 10)
    1024
"""

from simplexpr.simplexpr_ast import ASTNode


def int_pow(base: int, exponent: int, max_exponent: int | None = None) -> int:
    """Computes `base ** exponent` exactly by repeated squaring.

    Args:
        base (int): The base.
        exponent (int): A non-negative exponent.
        max_exponent (int | None): Largest exponent allowed; None for no limit.

    Returns:
        int: The exact power. `0 ^ 0` is 1.

    Raises:
        ValueError: If `exponent` is negative.
        OverflowError: If `exponent` exceeds `max_exponent`.
    """
    if exponent < 0:
        raise ValueError(f"Negative exponent not supported: {exponent}")
    if max_exponent is not None and exponent > max_exponent:
        raise OverflowError(
            f"Exponent {exponent} exceeds the configured limit of {max_exponent}"
        )
    result = 1
    while exponent:
        if exponent & 1:
            result *= base
        exponent >>= 1
        if exponent:
            base *= base
    return result


class Evaluator:
    """Evaluates SIMPLEXPR syntax trees.

    Attributes:
        max_exponent (int | None): Largest exponent `Pow` nodes may use.
    """

    def __init__(self, max_exponent: int | None = None) -> None:
        self.max_exponent = max_exponent

    def evaluate(self, node: ASTNode) -> int:
        """Evaluates `node` and its subtree.

        Raises:
            NotImplementedError: If there is no `eval_<kind>` method for a node.
        """
        method_name = f"eval_{node.kind.name.lower()}"
        method = getattr(self, method_name, None)
        if method is None:
            raise NotImplementedError(f"No evaluator method for node kind '{node.kind}'")
        result: int = method(node)
        return result

    def eval_prog(self, node: ASTNode) -> int:
        return self.evaluate(node.children[0])

    def eval_plus(self, node: ASTNode) -> int:
        left, right = node.children
        return self.evaluate(left) + self.evaluate(right)

    def eval_times(self, node: ASTNode) -> int:
        left, right = node.children
        return self.evaluate(left) * self.evaluate(right)

    def eval_pow(self, node: ASTNode) -> int:
        base, exponent = node.children
        return int_pow(self.evaluate(base), self.evaluate(exponent), self.max_exponent)

    def eval_int(self, node: ASTNode) -> int:
        assert node.token is not None and node.token.lexeme is not None
        return int(node.token.lexeme)


__all__ = ["Evaluator", "int_pow"]
