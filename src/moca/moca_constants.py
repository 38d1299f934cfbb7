"""
Token vocabulary and operator precedence for the Moca language.

Token kinds are plain upper-case strings. `token_hashmap` maps every fixed
spelling (operators, separators, keywords, boolean literals) to its kind and
is used by the lexer for longest-match recognition.

`priority()` is the precedence table shared by the parser's prefix/infix
dispatch and its precedence-climbing loop.

Exports:
    - token_hashmap
    - TOKEN_TYPES
    - Priority
    - priority
"""

from enum import IntEnum

# Operators
PLUS = "PLUS"
MINUS = "MINUS"
ASTERISK = "ASTERISK"
SLASH = "SLASH"
BANG = "BANG"
ASSIGN = "ASSIGN"
EQ = "EQ"
NOT_EQ = "NOT_EQ"
LT = "LT"
GT = "GT"
AND = "AND"
OR = "OR"

# Separators
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"
LBRACKET = "LBRACKET"
RBRACKET = "RBRACKET"
COMMA = "COMMA"
SEMICOLON = "SEMICOLON"
COLON = "COLON"

# Keywords
LET = "LET"
RETURN = "RETURN"
IF = "IF"
ELSE = "ELSE"
FUNCTION = "FUNCTION"

# Literals and others
INT = "INT"
FLOAT = "FLOAT"
STRING = "STRING"
BOOLEAN = "BOOLEAN"
IDENT = "IDENT"
ILLEGAL = "ILLEGAL"
EOF = "EOF"

operator_tokens: dict[str, str] = {
    "+": PLUS,
    "-": MINUS,
    "*": ASTERISK,
    "/": SLASH,
    "!": BANG,
    "=": ASSIGN,
    "==": EQ,
    "!=": NOT_EQ,
    "<": LT,
    ">": GT,
    "&&": AND,
    "||": OR,
}

separator_tokens: dict[str, str] = {
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
    "[": LBRACKET,
    "]": RBRACKET,
    ",": COMMA,
    ";": SEMICOLON,
    ":": COLON,
}

keyword_tokens: dict[str, str] = {
    "let": LET,
    "return": RETURN,
    "if": IF,
    "else": ELSE,
    "fn": FUNCTION,
    "true": BOOLEAN,
    "false": BOOLEAN,
}

token_hashmap: dict[str, str] = {
    **operator_tokens,
    **separator_tokens,
    **keyword_tokens,
}

TOKEN_TYPES: frozenset[str] = frozenset(token_hashmap.values()) | {
    INT,
    FLOAT,
    STRING,
    IDENT,
    ILLEGAL,
    EOF,
}

# TOKEN GROUPS (PARSER)

prefix_ops: frozenset[str] = frozenset({BANG, MINUS})

infix_ops: frozenset[str] = frozenset({PLUS, MINUS, ASTERISK, SLASH, EQ, NOT_EQ, LT, GT})


class Priority(IntEnum):
    """Binding strength of an operator, weakest first."""

    LOWEST = 1
    EQUALS = 2
    LESSGREATER = 3
    SUM = 4
    PRODUCT = 5
    PREFIX = 6
    CALL = 7


_priorities: dict[str, Priority] = {
    EQ: Priority.EQUALS,
    NOT_EQ: Priority.EQUALS,
    LT: Priority.LESSGREATER,
    GT: Priority.LESSGREATER,
    PLUS: Priority.SUM,
    MINUS: Priority.SUM,
    ASTERISK: Priority.PRODUCT,
    SLASH: Priority.PRODUCT,
    LPAREN: Priority.CALL,
}


def priority(kind: str) -> Priority:
    """Returns the binding strength of a token kind in infix position.

    Args:
        kind (str): A token kind such as ``"PLUS"`` or ``"LPAREN"``.

    Returns:
        Priority: The kind's priority, or ``Priority.LOWEST`` for any kind that
        never continues an expression.
    """
    return _priorities.get(kind, Priority.LOWEST)


__all__ = ["TOKEN_TYPES", "Priority", "priority", "token_hashmap"]
