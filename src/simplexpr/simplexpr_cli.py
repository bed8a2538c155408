"""
SIMPLEXPR CLI Entrypoint.

This module provides the command-line interface for SIMPLEXPR expressions.
It supports evaluation, tree rendering, and an interactive REPL.

Features:
    - Read source from `.sexpr` files or inline strings.
    - Scan and parse the source, then print the integer value or the syntax tree.
    - Optionally print the token stream.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    simplexpr -s "2+3*4"
    simplexpr -s "2^3^2" -t ast
    simplexpr input.sexpr --tokens
    simplexpr --repl --verbose

Environment:
    SIMPLEXPR_MAX_EXPONENT: default for `--max-exponent` (unset means no limit).

Functions:
    run_simplexpr(source: str, is_string: bool = False, target: str = "eval",
                  show_tokens: bool = False, max_exponent: int | None = None) -> None:
        Executes the full pipeline (scan → parse → print).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or run).
"""

import argparse
import os
import sys

from simplexpr.simplexpr_lexer import tokenize
from simplexpr.simplexpr_parser import Parser

MAX_EXPONENT_ENV = "SIMPLEXPR_MAX_EXPONENT"


def run_simplexpr(
    source: str,
    is_string: bool = False,
    target: str = "eval",
    show_tokens: bool = False,
    max_exponent: int | None = None,
) -> None:
    """
    Run the SIMPLEXPR pipeline: scan, parse, and print the result.

    Args:
        source (str): The expression text or path to a `.sexpr` file.
        is_string (bool): If True, treats `source` as raw text instead of a file path.
        target (str): "eval" prints the integer value, "ast" prints the tree.
        show_tokens (bool): If True, prints the token stream first.
        max_exponent (int | None): Largest exponent allowed during evaluation.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.sexpr'.
        SyntaxError: If the source is not a valid expression.
    """
    if not is_string and not source.endswith(".sexpr"):
        raise ValueError("Only .sexpr files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    tokens = tokenize(source)
    if show_tokens:
        print("[tokens] >>> " + " ".join(str(tok) for tok in tokens))

    result = Parser(tokens, target, max_exponent).parse()
    if target == "eval":
        print(result)
    else:
        print(result.render())


def env_max_exponent() -> int | None:
    """Reads the default exponent limit from the environment."""
    raw = os.getenv(MAX_EXPONENT_ENV)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{MAX_EXPONENT_ENV} must be an integer, got {raw!r}") from e


def main() -> None:
    """
    Entry point for the SIMPLEXPR CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified;
    otherwise runs the pipeline on the given source. Exits with status 1
    after printing a diagnostic when the input is malformed or cannot be
    evaluated.
    """
    if len(sys.argv) == 1:
        from simplexpr.simplexpr_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="simplexpr")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-t",
        "--target",
        choices=("eval", "ast"),
        default="eval",
        help="Print the value or the syntax tree (default: eval)",
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream before the result"
    )
    parser.add_argument(
        "--max-exponent",
        type=int,
        metavar="N",
        default=None,
        help=f"Reject powers with exponents above N (default: ${MAX_EXPONENT_ENV})",
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of evaluating",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()
    max_exponent = (
        args.max_exponent if args.max_exponent is not None else env_max_exponent()
    )

    if args.repl or args.source is None:
        from simplexpr.simplexpr_repl import start_repl

        start_repl(target=args.target, verbose=args.verbose, max_exponent=max_exponent)
        return
    try:
        run_simplexpr(
            source=args.source,
            is_string=args.string,
            target=args.target,
            show_tokens=args.tokens,
            max_exponent=max_exponent,
        )
    except SyntaxError as e:
        print(f"[error] >>> Bad syntax! {e}", file=sys.stderr)
        sys.exit(1)
    except (OverflowError, ValueError) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
