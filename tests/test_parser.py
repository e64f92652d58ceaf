import pytest

from simplex_optimizer.errors import MalformedConstraint, MalformedTerm
from simplex_optimizer.lp.parser import (
    parse_constraint_block,
    parse_equation,
    parse_objective,
    parse_term,
)
from simplex_optimizer.schemas import Constant, VariableTerm


def test_parser_splits_sides_on_operator():
    equation = parse_equation("3x + 2y <= 10")

    assert equation.operator == "<="
    assert equation.lhs == [
        VariableTerm(coefficient=3.0, name="x"),
        VariableTerm(coefficient=2.0, name="y"),
    ]
    assert equation.rhs == [Constant(value=10.0)]


def test_parser_handles_negative_terms_and_whitespace():
    equation = parse_equation("  x1 +x2   - x3>= -3 ")

    assert equation.operator == ">="
    assert equation.lhs[2] == VariableTerm(coefficient=-1.0, name="x3")
    assert equation.rhs == [Constant(value=-3.0)]


def test_parser_reads_decimal_coefficients_on_either_side():
    equation = parse_equation("bcp = 293.04cp")

    assert equation.operator == "="
    assert equation.lhs == [VariableTerm(coefficient=1.0, name="bcp")]
    assert equation.rhs == [VariableTerm(coefficient=293.04, name="cp")]


def test_parser_sign_resets_after_each_term():
    equation = parse_equation(".5a - -2 - b <= 4")

    assert equation.lhs == [
        VariableTerm(coefficient=0.5, name="a"),
        Constant(value=2.0),
        VariableTerm(coefficient=-1.0, name="b"),
    ]


def test_parser_prefers_two_character_operators():
    assert parse_equation("a >= b").operator == ">="
    assert parse_equation("a <= b").operator == "<="
    assert parse_equation("a = b").operator == "="


def test_parser_allows_empty_side():
    equation = parse_equation("<= 5")
    assert equation.lhs == []
    assert equation.rhs == [Constant(value=5.0)]


@pytest.mark.parametrize("text", ["3x + 2y", "x < 3", "a <= b <= c"])
def test_parser_rejects_missing_or_repeated_operator(text):
    with pytest.raises(MalformedConstraint):
        parse_equation(text)


@pytest.mark.parametrize("text", ["2*x <= 5", "x + <= 3", "x <= 3 -", "_x <= 1", "1.2.3 <= x"])
def test_parser_rejects_malformed_terms(text):
    with pytest.raises(MalformedTerm):
        parse_equation(text)


def test_parse_term_grammar():
    assert parse_term("x2y") == VariableTerm(coefficient=1.0, name="x2y")
    assert parse_term("2x2") == VariableTerm(coefficient=2.0, name="x2")
    assert parse_term("7", sign=-1) == Constant(value=-7.0)


def test_parse_objective_has_terms_only():
    objective = parse_objective("2x + 3y - 4z + 1")

    assert [term.kind for term in objective.terms] == ["variable", "variable", "variable", "constant"]
    assert objective.terms[2] == VariableTerm(coefficient=-4.0, name="z")


def test_parse_objective_rejects_operators():
    with pytest.raises(MalformedTerm):
        parse_objective("x <= 3")


def test_constraint_block_drops_blank_lines():
    block = "a + b <= 1000\n\n   b >= 20  \n"
    assert parse_constraint_block(block) == ["a + b <= 1000", "b >= 20"]
