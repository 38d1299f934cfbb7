"""
Moca CLI Entrypoint.

This module provides the command-line interface for parsing Moca source code.
It supports printing the parsed program, dumping it as JSON, listing the token
stream, and an interactive REPL mode.

Features:
    - Read source from `.moca` files or inline strings.
    - Lex and parse code, printing the canonical rendering of every statement.
    - Report parse errors on stderr, one per failed statement.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    moca hello.moca
    moca -s "let x = 1 + 2 * 3;"
    moca hello.moca --json
    moca --repl --verbose

Functions:
    run_moca(source: str, is_string: bool = False, as_json: bool = False,
             show_tokens: bool = False) -> int:
        Runs the pipeline (lex → parse → output) and returns an exit status.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import sys

from moca.moca_lexer import Lexer
from moca.moca_parser import Parser


def run_moca(
    source: str,
    is_string: bool = False,
    as_json: bool = False,
    show_tokens: bool = False,
) -> int:
    """
    Run the Moca toolchain: lex, parse, and print the result.

    Args:
        source (str): The Moca source code or path to a `.moca` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        as_json (bool): If True, prints the program as indented JSON instead of source text.
        show_tokens (bool): If True, prints the token stream and skips parsing.

    Returns:
        int: 0 when every statement parsed, 1 when at least one statement failed.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.moca'.
    """
    if not is_string and not source.endswith(".moca"):
        raise ValueError("Only .moca files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    lexer = Lexer.from_source(source)

    # 2. Token listing
    if show_tokens:
        for tok in lexer:
            print(f"{tok.line}:{tok.col}\t{tok.type}\t{tok.value}")
        return 0

    # 3. Parsing
    result = Parser(lexer).parse_program()

    # 4. Output result
    if as_json:
        print(json.dumps(result.program.to_dict(), indent=2))
    elif result.program.statements:
        print(result.program)

    for err in result.errors:
        print(f"[error] >>> {err}", file=sys.stderr)

    return 0 if result.ok else 1


def main() -> None:
    """
    Entry point for the Moca CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified,
    otherwise parses the given source and exits with `run_moca()`'s status.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from moca.moca_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="moca")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument(
        "--tokens",
        dest="show_tokens",
        action="store_true",
        help="Print the token stream instead of parsing",
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from moca.moca_repl import start_repl

        start_repl(verbose=args.verbose, show_tokens=args.show_tokens)
        return

    try:
        status = run_moca(
            source=args.source,
            is_string=args.string,
            as_json=args.as_json,
            show_tokens=args.show_tokens,
        )
    except (ValueError, OSError) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        status = 2
    sys.exit(status)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
