"""
Defines the abstract syntax tree (AST) node types for the Moca language.

The tree has two sum types, `Expression` (produces a value) and `Statement`
(produces an effect or binding), with one class per syntactic form. Each class
carries a `kind` tag used by `to_dict()` and by the emitters to dispatch on the
variant. The two families are mutually recursive: function literals and if
expressions own `BlockStatement`s, and statements own expressions.

Classes:
    Node: Common base with structural equality, serialization and rendering.
    Expression: Identifier, IntegerLiteral, BooleanLiteral, FunctionLiteral,
        PrefixExpression, InfixExpression, IfExpression, CallExpression.
    Statement: LetStatement, ReturnStatement, ExpressionStatement, BlockStatement.
    Program: The parse root, an ordered list of top-level statements.

    ASTDict:
        TypedDict representation for serializing nodes to plain Python dictionaries,
        suitable for JSON output or debugging.

Every parent exclusively owns its children; nodes are never shared between two
parents, and the parser never mutates a node once it has been returned.

Example:
    >>> expr = InfixExpression(Identifier("a"), "+", IntegerLiteral(1))
    >>> str(expr)
    '(a + 1)'
"""

from typing import Any, TypedDict


class ASTDict(TypedDict, total=False):
    """
    Serialized form of a node, as produced by `Node.to_dict()`.

    Only `kind` is always present; the remaining keys are the fields of the
    variant named by `kind`.
    """

    kind: str
    name: Any
    value: Any
    operator: str
    left: "ASTDict"
    right: "ASTDict"
    condition: "ASTDict"
    consequence: "ASTDict"
    alternative: "ASTDict | None"
    function: "ASTDict"
    arguments: list["ASTDict"]
    parameters: list["ASTDict"]
    body: "ASTDict"
    statements: list["ASTDict"]


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


class Node:
    """
    Base class of every AST node.

    Subclasses set `kind` and list their data attributes in `fields`, in
    rendering order. Equality, `repr()` and `to_dict()` are derived from those
    fields; `str()` gives the canonical source rendering.
    """

    kind: str = "node"
    fields: tuple[str, ...] = ()

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return False
        return all(getattr(self, f) == getattr(other, f) for f in self.fields)

    def __repr__(self) -> str:
        parts = ", ".join(f"{f}={getattr(self, f)!r}" for f in self.fields)
        return f"{type(self).__name__}({parts})"

    def __str__(self) -> str:
        from moca.emitters.source_emitter import SourceEmitter

        return SourceEmitter().emit(self)

    def to_dict(self) -> ASTDict:
        data: dict[str, Any] = {"kind": self.kind}
        for f in self.fields:
            data[f] = _serialize(getattr(self, f))
        return data  # type: ignore[return-value]

    def children(self) -> list["Node"]:
        """Returns the direct child nodes, in field order."""
        found: list[Node] = []
        for f in self.fields:
            value = getattr(self, f)
            if isinstance(value, Node):
                found.append(value)
            elif isinstance(value, list):
                found.extend(v for v in value if isinstance(v, Node))
        return found


class Expression(Node):
    """A node that produces a value."""


class Statement(Node):
    """A node that produces an effect or a binding."""


# Expressions


class Identifier(Expression):
    kind = "identifier"
    fields = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name


class IntegerLiteral(Expression):
    """A signed 32-bit integer constant."""

    kind = "integer"
    fields = ("value",)

    def __init__(self, value: int) -> None:
        self.value = value


class BooleanLiteral(Expression):
    kind = "boolean"
    fields = ("value",)

    def __init__(self, value: bool) -> None:
        self.value = value


class FunctionLiteral(Expression):
    """`fn (<parameters>) { <body> }`"""

    kind = "function"
    fields = ("parameters", "body")

    def __init__(self, parameters: list[Identifier], body: "BlockStatement") -> None:
        self.parameters = parameters
        self.body = body


class PrefixExpression(Expression):
    kind = "prefix"
    fields = ("operator", "right")

    def __init__(self, operator: str, right: Expression) -> None:
        self.operator = operator
        self.right = right


class InfixExpression(Expression):
    kind = "infix"
    fields = ("left", "operator", "right")

    def __init__(self, left: Expression, operator: str, right: Expression) -> None:
        self.left = left
        self.operator = operator
        self.right = right


class IfExpression(Expression):
    """`if (<condition>) { ... }` with an optional `else { ... }` branch."""

    kind = "if"
    fields = ("condition", "consequence", "alternative")

    def __init__(
        self,
        condition: Expression,
        consequence: "BlockStatement",
        alternative: "BlockStatement | None" = None,
    ) -> None:
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative


class CallExpression(Expression):
    """A call; `function` is usually an Identifier or a FunctionLiteral."""

    kind = "call"
    fields = ("function", "arguments")

    def __init__(self, function: Expression, arguments: list[Expression]) -> None:
        self.function = function
        self.arguments = arguments


# Statements


class LetStatement(Statement):
    kind = "let"
    fields = ("name", "value")

    def __init__(self, name: Identifier, value: Expression) -> None:
        self.name = name
        self.value = value


class ReturnStatement(Statement):
    kind = "return"
    fields = ("value",)

    def __init__(self, value: Expression) -> None:
        self.value = value


class ExpressionStatement(Statement):
    """An expression evaluated for its effect, e.g. a bare call."""

    kind = "expression"
    fields = ("value",)

    def __init__(self, value: Expression) -> None:
        self.value = value


class BlockStatement(Statement):
    kind = "block"
    fields = ("statements",)

    def __init__(self, statements: list[Statement] | None = None) -> None:
        self.statements: list[Statement] = statements or []


class Program(Node):
    """
    Root of a parsed source file.

    Created empty and filled with top-level statements by the parser, in source
    order. Statements that failed to parse are not part of the program; the
    parser reports them separately.
    """

    kind = "program"
    fields = ("statements",)

    def __init__(self, statements: list[Statement] | None = None) -> None:
        self.statements: list[Statement] = statements or []

    def __len__(self) -> int:
        return len(self.statements)


__all__ = [
    "ASTDict",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
