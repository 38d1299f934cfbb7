import hypothesis.strategies as st
from hypothesis import given

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
    PrefixExpression,
    Program,
    ReturnStatement,
)


def test_identifier_repr() -> None:
    assert repr(Identifier("x")) == "Identifier(name='x')"


def test_infix_repr() -> None:
    node = InfixExpression(Identifier("a"), "+", IntegerLiteral(1))
    assert (
        repr(node)
        == "InfixExpression(left=Identifier(name='a'), operator='+', right=IntegerLiteral(value=1))"
    )


def test_eq_equal() -> None:
    n1 = LetStatement(Identifier("x"), IntegerLiteral(5))
    n2 = LetStatement(Identifier("x"), IntegerLiteral(5))
    assert n1 == n2


def test_eq_not_equal_children() -> None:
    n1 = PrefixExpression("-", Identifier("x"))
    n2 = PrefixExpression("-", Identifier("y"))
    assert n1 != n2


def test_eq_different_variant() -> None:
    assert ReturnStatement(Identifier("x")) != ExpressionStatement(Identifier("x"))
    assert BooleanLiteral(True) != IntegerLiteral(1)


def test_eq_non_node() -> None:
    assert Identifier("x") != "x"


def test_to_dict_let() -> None:
    node = LetStatement(Identifier("x"), IntegerLiteral(5))
    assert node.to_dict() == {
        "kind": "let",
        "name": {"kind": "identifier", "name": "x"},
        "value": {"kind": "integer", "value": 5},
    }


def test_to_dict_if_without_alternative() -> None:
    node = IfExpression(Identifier("c"), BlockStatement([]))
    d = node.to_dict()
    assert d["kind"] == "if"
    assert d["consequence"] == {"kind": "block", "statements": []}
    assert d["alternative"] is None


def test_to_dict_function_and_call() -> None:
    fn = FunctionLiteral(
        [Identifier("a")],
        BlockStatement([ReturnStatement(Identifier("a"))]),
    )
    call = CallExpression(fn, [BooleanLiteral(False)])
    d = call.to_dict()
    assert d["function"]["kind"] == "function"
    assert d["function"]["parameters"] == [{"kind": "identifier", "name": "a"}]
    assert d["arguments"] == [{"kind": "boolean", "value": False}]


def test_program_to_dict_and_len() -> None:
    program = Program([ExpressionStatement(Identifier("x"))])
    assert len(program) == 1
    assert program.to_dict() == {
        "kind": "program",
        "statements": [
            {"kind": "expression", "value": {"kind": "identifier", "name": "x"}}
        ],
    }


def test_children_in_field_order() -> None:
    left, right = Identifier("a"), Identifier("b")
    assert InfixExpression(left, "*", right).children() == [left, right]
    assert IfExpression(left, BlockStatement()).children() == [left, BlockStatement()]


def test_block_statements_not_shared() -> None:
    assert BlockStatement().statements is not BlockStatement().statements
    assert Program().statements is not Program().statements


@given(st.text(min_size=1))  # type: ignore[misc]
def test_identifier_eq_same_name(name: str) -> None:
    assert Identifier(name) == Identifier(name)


@given(st.text(min_size=1), st.text(min_size=1))  # type: ignore[misc]
def test_identifier_eq_different_name(a: str, b: str) -> None:
    assert Identifier(a) != Identifier(a + b)


@given(st.integers(min_value=-(2**31), max_value=2**31 - 1))  # type: ignore[misc]
def test_integer_to_dict(value: int) -> None:
    assert IntegerLiteral(value).to_dict() == {"kind": "integer", "value": value}
