"""
Interactive read-eval-print loop for SIMPLEXPR.

Each line is scanned and parsed on its own. Commands:
    exit, quit      leave the REPL
    verbose-mode    toggle printing the token stream
    tree-mode       toggle between printing values and syntax trees
"""

import io
import traceback

from simplexpr.simplexpr_lexer import tokenize
from simplexpr.simplexpr_parser import Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def eval_line(
    src: str, target: str = "eval", verbose: bool = False, max_exponent: int | None = None
) -> None:
    """Scans, parses and prints one line of input."""
    tokens = tokenize(src)
    if verbose:
        print("[tokens] >>> " + " ".join(str(tok) for tok in tokens))
    try:
        result = Parser(tokens, target, max_exponent).parse()
    except SyntaxError as e:
        print("Bad syntax!")
        if verbose:
            print(f"[error] >>> {e}")
        return
    print(result if target == "eval" else result.render())


def start_repl(
    target: str = "eval", verbose: bool = False, max_exponent: int | None = None
) -> None:
    print(f"SIMPLEXPR REPL [target={target}]. Type 'exit' or 'quit' to leave.")
    while True:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            print("Exiting SIMPLEXPR REPL.")
            return

        src = line.strip()
        if not src:
            continue
        if src in ("exit", "quit"):
            print("Exiting SIMPLEXPR REPL.")
            return
        if src.lower() == "verbose-mode":
            verbose = not verbose
            print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
            continue
        if src.lower() == "tree-mode":
            target = "eval" if target == "ast" else "ast"
            print(f"[mode] >>> Target {target}")
            continue

        try:
            eval_line(src, target, verbose, max_exponent)
        except (OverflowError, ValueError) as e:
            print(f"[error] >>> {e}")
        except Exception:
            print_traceback()


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
