import io
import json
import traceback

from moca.moca_ast import Statement
from moca.moca_lexer import Lexer
from moca.moca_parser import ParseError, Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def print_tokens(src: str) -> None:
    tokens = list(Lexer.from_source(src))
    print("[tokens] >>> " + " ".join(repr(tok) for tok in tokens))


def print_statement(stmt: Statement, verbose: bool = False) -> None:
    print(stmt)
    if verbose:
        print(json.dumps(stmt.to_dict(), indent=2))


def print_error(err: ParseError) -> None:
    print(f"[error] >>> {err}")


def read_source() -> str | None:
    """Reads one REPL entry, continuing while braces are unbalanced.

    Returns None when the user asks to leave.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">> " if not src_lines else ".. "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


def start_repl(verbose: bool = False, show_tokens: bool = False) -> None:
    print("Moca REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_source()
            if src is None:
                print("Exiting Moca REPL.")
                return
            if not src or src.startswith("//"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            if src.lower() == "tokens-mode":
                show_tokens = not show_tokens
                print(f"[mode] >>> Tokens mode {'ON' if show_tokens else 'OFF'}")
                continue

            if show_tokens:
                print_tokens(src)

            try:
                result = Parser(Lexer.from_source(src)).parse_program()
            except Exception:
                print_traceback()
                continue

            for stmt in result.program.statements:
                print_statement(stmt, verbose)
            for err in result.errors:
                print_error(err)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Moca REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
