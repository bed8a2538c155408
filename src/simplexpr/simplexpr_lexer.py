"""
Lexical analyzer for the SIMPLEXPR arithmetic expression language.

This module converts raw source text into a lazy stream of tokens:

Classes:
    CharacterStream: Cursor over a source string with line/column tracking.
    Token: Immutable token with a category, lexeme, and source location.
    Scanner: Pull-based token iterator driven by ordered alternative patterns.

Features:
    - Ordered-alternative matching (see `simplexpr_constants.token_rules`);
      digit runs are greedy, the first listed rule wins.
    - Whitespace is consumed one character at a time and never emitted.
    - Unknown characters become `BAD_TOKEN` tokens; the scanner never raises.
    - Exactly one `EOF` token terminates every sequence.

Example:
    >>> [str(tok) for tok in Scanner("2+3")]
    ['[INT, "2"]', '[PLUS, "+"]', '[INT, "3"]', '[EOF, ""]']

Exports:
    - CharacterStream
    - Token
    - Scanner
    - tokenize
    - TokenCategory
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from simplexpr.simplexpr_constants import TokenCategory, token_regex, token_rules


class CharacterStream:
    """
    A cursor over a source string with line and column tracking.

    The scanner matches patterns directly against `source` at `position` and
    reports how many characters each match consumed.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def consume(self, count: int) -> str:
        """
        Consumes `count` characters and returns them.

        Args:
            count (int): Number of characters to consume.

        Returns:
            str: The consumed text.

        Raises:
            Exception: If reading past the end of the source.
        """
        end = self.position + count
        if end > len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        text = self.source[self.position : end]
        for char in text:
            if char == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.position = end
        return text

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        category (TokenCategory): The token category.
        lexeme (str | None): The matched text; None for `EOF`.
        line (int): 1-based line where the token starts (not compared).
        col (int): 1-based column where the token starts (not compared).
    """

    category: TokenCategory
    lexeme: str | None = None
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f'[{self.category}, "{self.lexeme or ""}"]'

    def __repr__(self) -> str:
        return f"Token({self.category}, {self.lexeme!r})"


class Scanner:
    """Pull-based scanner for SIMPLEXPR source text.

    A Scanner is a one-pass, non-restartable iterator: each call to
    `next_token()` (or `next()`) scans just far enough to produce one token.

    Attributes:
        stream (CharacterStream): The cursor over the source text.
        finished (bool): True once the `EOF` token has been produced.
    """

    def __init__(self, source: str | CharacterStream) -> None:
        if isinstance(source, str):
            source = CharacterStream(source)
        self.stream = source
        self.finished = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Token | None:
        """Scans and returns the next token.

        Returns:
            Token | None: The next token, the single `EOF` token once input is
            exhausted, or None after `EOF` has already been produced.
        """
        stream = self.stream
        while not stream.end_of_file():
            match = token_regex.match(stream.source, stream.position)
            # the final "." rule (DOTALL) matches any character
            assert match is not None and match.lastindex is not None
            category = token_rules[match.lastindex - 1][1]
            line, col = stream.line, stream.column
            lexeme = stream.consume(match.end() - match.start())
            if category is None:
                continue
            return Token(category, lexeme, line, col)

        if self.finished:
            return None
        self.finished = True
        return Token(TokenCategory.EOF, None, stream.line, stream.column)


def tokenize(source: str) -> list[Token]:
    """Scans `source` completely, returning every token including the final `EOF`."""
    return list(Scanner(source))


__all__ = ["CharacterStream", "Scanner", "Token", "TokenCategory", "tokenize"]
