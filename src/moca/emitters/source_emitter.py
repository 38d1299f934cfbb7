"""
Renders Moca AST nodes back into canonical Moca source text.

This module defines the `SourceEmitter` class, which produces the deterministic
textual form of every node. The rendering is what `str(node)` returns, what the
REPL and CLI print, and what golden-output tests compare against.

Canonical forms:
    - `let <id> = <expr>;` and `return <expr>;`
    - infix `(<left> <op> <right>)`, prefix `(<op><right>)`
    - `if (<cond>) <block>` optionally followed by ` else <block>`
    - call `<fn>(<arg>, <arg>)`, function literal `fn (<param>, <param>) <block>`
    - block `{ <stmt> <stmt> }`, or `{ }` when empty

A bare expression statement renders as its expression. Inside a block or a
program listing it is terminated with `;`, so that re-parsing the output of a
parsed tree gives back a tree with the same rendering.

Raises:
    - `NotImplementedError`: If a node kind has no corresponding `emit_<kind>` method.
"""

from moca.moca_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)


class SourceEmitter:
    """Emits canonical Moca source from AST nodes.

    Methods:
        emit(node): Dispatches to the `emit_<kind>` method for the node's kind.
        emit_program(node): Renders a program, one statement per line.
    """

    def emit(self, node: Node) -> str:
        """
        Dispatches emission based on node kind.

        Raises
        ------
        NotImplementedError
            If no emitter exists for the node kind.
        """
        method = getattr(self, f"emit_{node.kind}", None)
        if callable(method):
            return str(method(node))
        raise NotImplementedError(f"No source emitter for kind '{node.kind}'")

    def emit_terminated(self, stmt: Statement) -> str:
        """Renders a statement so that it ends at a statement boundary."""
        text = self.emit(stmt)
        if isinstance(stmt, ExpressionStatement):
            return f"{text};"
        return text

    # Expressions

    def emit_identifier(self, node: Identifier) -> str:
        return node.name

    def emit_integer(self, node: IntegerLiteral) -> str:
        return str(node.value)

    def emit_boolean(self, node: BooleanLiteral) -> str:
        return "true" if node.value else "false"

    def emit_prefix(self, node: PrefixExpression) -> str:
        return f"({node.operator}{self.emit(node.right)})"

    def emit_infix(self, node: InfixExpression) -> str:
        return f"({self.emit(node.left)} {node.operator} {self.emit(node.right)})"

    def emit_if(self, node: IfExpression) -> str:
        text = f"if ({self.emit(node.condition)}) {self.emit(node.consequence)}"
        if node.alternative is not None:
            text += f" else {self.emit(node.alternative)}"
        return text

    def emit_function(self, node: FunctionLiteral) -> str:
        params = ", ".join(self.emit(p) for p in node.parameters)
        return f"fn ({params}) {self.emit(node.body)}"

    def emit_call(self, node: CallExpression) -> str:
        args = ", ".join(self.emit(a) for a in node.arguments)
        return f"{self.emit(node.function)}({args})"

    # Statements

    def emit_let(self, node: LetStatement) -> str:
        return f"let {self.emit(node.name)} = {self.emit(node.value)};"

    def emit_return(self, node: ReturnStatement) -> str:
        return f"return {self.emit(node.value)};"

    def emit_expression(self, node: ExpressionStatement) -> str:
        return self.emit(node.value)

    def emit_block(self, node: BlockStatement) -> str:
        if not node.statements:
            return "{ }"
        body = " ".join(self.emit_terminated(s) for s in node.statements)
        return f"{{ {body} }}"

    def emit_program(self, node: Program) -> str:
        return "\n".join(self.emit_terminated(s) for s in node.statements)
