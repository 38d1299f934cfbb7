"""
Lexical analyzer for the Moca language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Immutable token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace and single-line comments (`//`)
    - Supports longest-match recognition of operators and separators
    - Recognizes:
        * Identifiers, keywords and boolean literals
        * Numbers (integer and float)
        * Strings (double-quoted)
        * Operators and punctuation

Unrecognized characters and unterminated strings never raise: they come back as
`ILLEGAL` tokens so that the parser can report them against the statement they
appear in.

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, 'let')

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Iterator
from typing import NamedTuple

from moca.moca_constants import EOF, FLOAT, IDENT, ILLEGAL, INT, STRING, token_hashmap

# Longest fixed spelling of an operator or separator (`==`, `!=`, `&&`, `||`).
MAX_SYMBOL_LENGTH = 2


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

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

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Returns:
            str: The next character.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)

    def rewind(self) -> None:
        """Moves the stream back to the first character of the source."""
        self.position = 0
        self.line = 1
        self.column = 1


class Token(NamedTuple):
    """Represents a single lexical token in the Moca language.

    Attributes:
        type (str): The token kind (e.g. 'IDENT', 'INT', 'PLUS', 'EOF').
        value (str): The literal text of the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    type: str
    value: str
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r})"


class Lexer:
    """Lexical analyzer for the Moca language.

    The Lexer pulls characters from a CharacterStream on demand and hands out one
    Token per `next_token()` call. Once the input is exhausted every further call
    returns an `EOF` token.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    @classmethod
    def from_source(cls, source: str) -> "Lexer":
        return cls(CharacterStream(source))

    def __iter__(self) -> Iterator[Token]:
        """Yields the remaining tokens, stopping before `EOF`."""
        while True:
            tok = self.next_token()
            if tok.type == EOF:
                return
            yield tok

    def reset(self) -> None:
        """Restarts tokenization from the beginning of the source."""
        self.stream.rewind()

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek().isspace():
                self.advance()
            elif self.peek() == "/" and self.stream.peek(1) == "/":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances through the stream until the end of a comment line."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_symbol(self) -> Token | None:
        """Attempts to match the longest operator or separator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(MAX_SYMBOL_LENGTH):
            ch = self.stream.peek(i)
            if ch == "" or ch.isalnum() or ch.isspace():
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an `EOF` token once the source is exhausted.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(EOF, "", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier, keyword or boolean literal
        if ch.isalpha() or ch == "_":
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isalnum() or self.peek() == "_"
            ):
                ident += self.advance()
            return Token(token_hashmap.get(ident, IDENT), ident, line, col)

        # 2. Number or float; a second dot ends the literal
        if ch.isdigit():
            num = ""
            has_dot = False
            while not self.stream.end_of_file():
                nxt = self.peek()
                if nxt.isdigit():
                    num += self.advance()
                elif nxt == "." and not has_dot:
                    has_dot = True
                    num += self.advance()
                else:
                    break
            return Token(FLOAT if has_dot else INT, num, line, col)

        # 3. String
        if ch == '"':
            self.advance()
            val = ""
            while not self.stream.end_of_file() and self.peek() != '"':
                val += self.advance()
            if self.stream.end_of_file():
                return Token(ILLEGAL, '"' + val, line, col)
            self.advance()
            return Token(STRING, val, line, col)

        # 4. Operator or separator
        token = self.match_symbol()
        if token:
            return token

        # 5. Unknown character, left for the parser to report
        return Token(ILLEGAL, self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Tokenizes a whole source string; the final element is always the `EOF` token."""
    lexer = Lexer.from_source(source)
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == EOF:
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
