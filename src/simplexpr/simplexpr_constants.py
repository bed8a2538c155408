"""
Token categories and scanner rules for the SIMPLEXPR language.

The scanner rules are listed in priority order. At each position of the
input the first rule that matches wins, and the `INT` rule is greedy.
Whitespace matches a rule with no category and is skipped.

Exports:
    - TokenCategory
    - token_rules
    - token_regex
"""

import re
from enum import Enum


class TokenCategory(Enum):
    """The closed set of token categories produced by the scanner."""

    INT = "INT"
    PLUS = "PLUS"
    TIMES = "TIMES"
    POW = "POW"
    PAR_OPEN = "PAR_OPEN"
    PAR_CLOSED = "PAR_CLOSED"
    EOF = "EOF"
    BAD_TOKEN = "BAD_TOKEN"

    def __str__(self) -> str:
        return self.value


# (pattern, category); a category of None means "consume and skip"
token_rules: list[tuple[str, TokenCategory | None]] = [
    (r"[0-9]+", TokenCategory.INT),
    (r"\+", TokenCategory.PLUS),
    (r"\*", TokenCategory.TIMES),
    (r"\(", TokenCategory.PAR_OPEN),
    (r"\)", TokenCategory.PAR_CLOSED),
    (r"\s", None),
    (r"\^", TokenCategory.POW),
    (r".", TokenCategory.BAD_TOKEN),
]

# One capture group per rule; match.lastindex identifies the winning rule.
token_regex: re.Pattern[str] = re.compile(
    "|".join(f"({pattern})" for pattern, _ in token_rules), re.DOTALL
)


__all__ = ["TokenCategory", "token_regex", "token_rules"]
