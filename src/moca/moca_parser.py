"""
Moca Language Parser

Parses a stream of Moca tokens into an abstract syntax tree.

The parser is a recursive-descent statement parser combined with a Pratt
(precedence-climbing) expression parser. It keeps exactly one token of
lookahead and never rewinds: tokens are pulled from the lexer one at a time as
the cursor advances.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expr>;`
    * `return <expr>;`
    * expression statements, with an optional trailing `;`
    * `{ ... }` blocks as bodies of conditionals and functions
- Expressions:
    * identifiers, 32-bit integer literals, `true` / `false`
    * prefix `!` and `-`
    * infix `+ - * / == != < >` with the usual precedence, left associative
    * grouping with `( ... )`
    * `if (<cond>) { ... } else { ... }`
    * function literals `fn (a, b) { ... }` and calls `f(x, y)`

Parser Behavior
---------------
- A malformed statement raises `ParseError` inside the parser. `parse_program()`
  catches it, records it, skips to the end of the failed statement and carries
  on with the next one, so one bad statement never hides the rest of the program.
- The precedence table in `moca.moca_constants` decides both where an
  expression stops and which continuation handles the next token.

Entry Points
------------
- `parse_program(source)`: Parse source text or any token source.
- `Parser(lexer).parse_program()`: Same, with an explicit parser instance.
- `Parser.from_tokens(tokens)`: Parse a ready-made list of tokens.

Returns
-------
ParseResult
    The `Program` of successfully parsed statements plus the ordered list of
    per-statement `ParseError`s.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol

from moca.moca_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from moca.moca_constants import (
    ASSIGN,
    BOOLEAN,
    COMMA,
    ELSE,
    EOF,
    FUNCTION,
    IDENT,
    IF,
    INT,
    LBRACE,
    LET,
    LPAREN,
    RBRACE,
    RETURN,
    RPAREN,
    SEMICOLON,
    Priority,
    infix_ops,
    prefix_ops,
    priority,
)
from moca.moca_lexer import Lexer, Token

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class TokenSource(Protocol):
    """Anything that hands out tokens one at a time and repeats `EOF` at the end."""

    def next_token(self) -> Token: ...  # pragma: no cover


class TokenListSource:
    """Adapts a list of tokens to the `TokenSource` interface."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._eof = Token(EOF, "")

    def next_token(self) -> Token:
        tok = next(self._tokens, self._eof)
        if tok.type == EOF:
            self._eof = tok
        return tok


class ParseError(SyntaxError):
    """Raised when a statement cannot be parsed.

    Attributes:
        message (str): Human readable description of the problem.
        token (Token | None): The token the problem was detected at.
    """

    def __init__(self, message: str, token: Token | None = None):
        super().__init__(message)
        self.message = message
        self.token = token
        if token is not None:
            self.lineno = token.line
            self.offset = token.col

    def __str__(self) -> str:
        if self.token is not None and self.token.line:
            return f"ParseError: {self.message} (line {self.token.line}, col {self.token.col})"
        return f"ParseError: {self.message}"


class ParseResult:
    """Outcome of parsing a whole program.

    Attributes:
        program (Program): The successfully parsed statements, in source order.
        errors (list[ParseError]): One error per statement that failed, in source order.
    """

    def __init__(self, program: Program, errors: list[ParseError]) -> None:
        self.program = program
        self.errors = errors

    @property
    def ok(self) -> bool:
        return not self.errors

    def __repr__(self) -> str:
        return f"ParseResult(statements={len(self.program)}, errors={len(self.errors)})"


class Parser:
    """
    Moca Parser Class

    Cursor over a token source with one token of lookahead.

    Attributes
    ----------
    lexer : TokenSource
        Where tokens are pulled from.
    token : Token
        The current token.
    peek : Token
        The next token, already fetched but not yet consumed.
    block_depth : int
        Number of `{ ... }` blocks currently open; used to resynchronize after
        an error.
    """

    def __init__(self, lexer: TokenSource) -> None:
        self.lexer = lexer
        self.token: Token = Token(EOF, "")
        self.peek: Token = lexer.next_token()
        self.block_depth: int = 0

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token]) -> Parser:
        return cls(TokenListSource(tokens))

    # Cursor

    def advance(self) -> bool:
        """Shifts the lookahead into the current token.

        Returns False, leaving the cursor unchanged, when no tokens remain.
        """
        if self.peek.type == EOF:
            return False
        self.token = self.peek
        self.peek = self.lexer.next_token()
        return True

    def advance_or_fail(self, what: str) -> None:
        if not self.advance():
            raise ParseError(f"expected {what}, got end of input", self.peek)

    def peek_is(self, kind: str) -> bool:
        return self.peek.type == kind

    def expect_next(self, kind: str) -> Token:
        """Advances onto the lookahead token if it has the given kind."""
        if self.peek.type == kind:
            self.advance()
            return self.token
        if self.peek.type == EOF:
            raise ParseError(f"expected next token to be {kind}, got end of input", self.peek)
        raise ParseError(
            f"expected next token to be {kind}, got {self.peek.type} instead", self.peek
        )

    def peek_priority(self) -> Priority:
        return priority(self.peek.type)

    # Program and statements

    def parse_program(self) -> ParseResult:
        """Parse every statement in the token source."""
        program = Program()
        errors: list[ParseError] = []
        while self.advance():
            try:
                program.statements.append(self.parse_statement())
            except ParseError as e:
                errors.append(e)
                self.synchronize()
            except RecursionError:
                errors.append(ParseError("expression nested too deeply", self.token))
                self.synchronize()
        return ParseResult(program, errors)

    def synchronize(self) -> None:
        """Skips the rest of a failed statement.

        Stops on a `;` outside any block, or on a `}` that leaves every block
        open at the error closed. In the latter case the skip goes on when the
        next token continues the statement (`else`, `,`, `)`, an infix
        operator or a call), so `if (x) { 1 + } else { 2 };` is one failure.
        """
        depth = self.block_depth
        self.block_depth = 0
        while True:
            kind = self.token.type
            if kind == LBRACE:
                depth += 1
            elif kind == RBRACE and depth > 0:
                depth -= 1
                if depth == 0:
                    if self.peek_is(SEMICOLON):
                        self.advance()
                        return
                    if not self.continues_statement():
                        return
            elif kind in (SEMICOLON, RBRACE) and depth == 0:
                return
            if not self.advance():
                return

    def continues_statement(self) -> bool:
        kind = self.peek.type
        return kind in (ELSE, COMMA, RPAREN) or priority(kind) > Priority.LOWEST

    def parse_statement(self) -> Statement:
        kind = self.token.type
        if kind == LET:
            return self.parse_let_statement()
        if kind == RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        ident = self.expect_next(IDENT)
        self.expect_next(ASSIGN)
        self.advance_or_fail("an expression after '='")
        value = self.parse_expression(Priority.LOWEST)
        if self.peek_is(SEMICOLON):
            self.advance()
        return LetStatement(Identifier(ident.value), value)

    def parse_return_statement(self) -> ReturnStatement:
        self.advance_or_fail("an expression after 'return'")
        value = self.parse_expression(Priority.LOWEST)
        if self.peek_is(SEMICOLON):
            self.advance()
        return ReturnStatement(value)

    def parse_expression_statement(self) -> ExpressionStatement:
        value = self.parse_expression(Priority.LOWEST)
        if self.peek_is(SEMICOLON):
            self.advance()
        return ExpressionStatement(value)

    def parse_block_statement(self) -> BlockStatement:
        """Parse a `{}`-enclosed block; the current token is the `{`."""
        open_tok = self.token
        self.block_depth += 1
        statements: list[Statement] = []
        if not self.advance():
            raise ParseError("expected '}' to close block, got end of input", open_tok)
        while self.token.type != RBRACE:
            statements.append(self.parse_statement())
            if not self.advance():
                raise ParseError("expected '}' to close block, got end of input", open_tok)
        self.block_depth -= 1
        return BlockStatement(statements)

    # Expressions

    def parse_expression(self, min_priority: Priority) -> Expression:
        """Precedence climbing from the current token.

        Keeps folding infix continuations into the left operand while the next
        token binds tighter than `min_priority`.
        """
        left = self.parse_prefix()
        while not self.peek_is(SEMICOLON) and min_priority < self.peek_priority():
            infix = self.infix_parser(self.peek.type)
            if infix is None:
                return left
            self.advance()
            left = infix(left)
        return left

    def parse_prefix(self) -> Expression:
        kind = self.token.type
        if kind == IDENT:
            return Identifier(self.token.value)
        if kind == INT:
            return self.parse_integer_literal()
        if kind == BOOLEAN:
            return BooleanLiteral(self.token.value == "true")
        if kind in prefix_ops:
            return self.parse_prefix_expression()
        if kind == LPAREN:
            return self.parse_grouped_expression()
        if kind == IF:
            return self.parse_if_expression()
        if kind == FUNCTION:
            return self.parse_function_literal()
        raise ParseError(
            f"no prefix parse function for {kind} {self.token.value!r}", self.token
        )

    def infix_parser(self, kind: str) -> Callable[[Expression], Expression] | None:
        """Returns the continuation for a token in infix position, if it has one."""
        if kind in infix_ops:
            return self.parse_infix_expression
        if kind == LPAREN:
            return self.parse_call_expression
        return None

    def parse_integer_literal(self) -> IntegerLiteral:
        text = self.token.value
        try:
            value = int(text)
        except ValueError:
            raise ParseError(f"could not parse {text!r} as integer", self.token) from None
        if not INT32_MIN <= value <= INT32_MAX:
            raise ParseError(
                f"could not parse {text!r} as integer: out of 32-bit range", self.token
            )
        return IntegerLiteral(value)

    def parse_prefix_expression(self) -> PrefixExpression:
        operator = self.token.value
        self.advance_or_fail(f"an operand after {operator!r}")
        right = self.parse_expression(Priority.PREFIX)
        return PrefixExpression(operator, right)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        operator = self.token.value
        op_priority = priority(self.token.type)
        self.advance_or_fail(f"an operand after {operator!r}")
        right = self.parse_expression(op_priority)
        return InfixExpression(left, operator, right)

    def parse_grouped_expression(self) -> Expression:
        open_tok = self.token
        self.advance_or_fail("an expression after '('")
        expr = self.parse_expression(Priority.LOWEST)
        if not self.peek_is(RPAREN):
            raise ParseError(
                f"expected ')' to close '(' opened at line {open_tok.line}, col {open_tok.col}, "
                f"got {self.peek.type}",
                self.peek,
            )
        self.advance()
        return expr

    def parse_if_expression(self) -> IfExpression:
        self.expect_next(LPAREN)
        self.advance_or_fail("a condition after 'if ('")
        condition = self.parse_expression(Priority.LOWEST)
        self.expect_next(RPAREN)
        self.expect_next(LBRACE)
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_is(ELSE):
            self.advance()
            self.expect_next(LBRACE)
            alternative = self.parse_block_statement()

        return IfExpression(condition, consequence, alternative)

    def parse_function_literal(self) -> FunctionLiteral:
        self.expect_next(LPAREN)
        parameters = self.parse_function_parameters()
        self.expect_next(LBRACE)
        body = self.parse_block_statement()
        return FunctionLiteral(parameters, body)

    def parse_function_parameters(self) -> list[Identifier]:
        """Parse `a, b, c)`; the current token is the opening `(`."""
        if self.peek_is(RPAREN):
            self.advance()
            return []

        params = [Identifier(self.expect_next(IDENT).value)]
        while self.peek_is(COMMA):
            self.advance()
            params.append(Identifier(self.expect_next(IDENT).value))
        self.expect_next(RPAREN)
        return params

    def parse_call_expression(self, function: Expression) -> CallExpression:
        return CallExpression(function, self.parse_call_arguments())

    def parse_call_arguments(self) -> list[Expression]:
        """Parse `x, y + 1)`; the current token is the opening `(`."""
        if self.peek_is(RPAREN):
            self.advance()
            return []

        self.advance_or_fail("an argument after '('")
        args = [self.parse_expression(Priority.LOWEST)]
        while self.peek_is(COMMA):
            self.advance()
            self.advance_or_fail("an argument after ','")
            args.append(self.parse_expression(Priority.LOWEST))
        self.expect_next(RPAREN)
        return args


def parse_program(source: str | TokenSource) -> ParseResult:
    """Parse Moca source text, or the tokens of any token source, into a program."""
    lexer = Lexer.from_source(source) if isinstance(source, str) else source
    return Parser(lexer).parse_program()


__all__ = ["ParseError", "ParseResult", "Parser", "TokenSource", "parse_program"]
