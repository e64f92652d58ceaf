from simplex_optimizer.lp.normalize import normalize, objective_equation, to_maximizations
from simplex_optimizer.lp.parser import parse_equation, parse_objective
from simplex_optimizer.schemas import Constant, VariableTerm


def test_normalize_moves_variables_left_and_constants_right():
    equation = normalize(parse_equation("x + 5 <= 3 + y - 1"))

    assert equation.lhs == [
        VariableTerm(coefficient=1.0, name="x"),
        VariableTerm(coefficient=-1.0, name="y"),
    ]
    assert equation.rhs == [Constant(value=-3.0)]
    assert equation.operator == "<="


def test_normalize_sums_to_zero_without_constants():
    equation = normalize(parse_equation("b = 2c"))

    assert equation.lhs == [
        VariableTerm(coefficient=1.0, name="b"),
        VariableTerm(coefficient=-2.0, name="c"),
    ]
    assert equation.rhs == [Constant(value=0.0)]


def test_normalize_is_idempotent():
    once = normalize(parse_equation("bcp + 5489699 + bfo + 16838158 <= 474168386"))
    twice = normalize(once)

    assert twice.lhs == once.lhs
    assert twice.constant() == once.constant() == 451840529.0


def test_normalize_leaves_input_untouched():
    original = parse_equation("x <= y + 1")
    normalize(original)
    assert original.rhs[0] == VariableTerm(coefficient=1.0, name="y")


def test_less_than_is_kept():
    equation = parse_equation("a + b <= 1000")
    assert to_maximizations(equation) == [equation]


def test_greater_than_is_negated():
    (flipped,) = to_maximizations(parse_equation("a >= 600"))

    assert flipped.operator == "<="
    assert flipped.lhs == [VariableTerm(coefficient=-1.0, name="a")]
    assert flipped.rhs == [Constant(value=-600.0)]


def test_equality_expands_into_two_halves():
    less_than, greater_than = to_maximizations(parse_equation("b = 2c"))

    assert less_than.operator == greater_than.operator == "<="
    assert normalize(less_than).lhs == [
        VariableTerm(coefficient=1.0, name="b"),
        VariableTerm(coefficient=-2.0, name="c"),
    ]
    assert normalize(greater_than).lhs == [
        VariableTerm(coefficient=-1.0, name="b"),
        VariableTerm(coefficient=2.0, name="c"),
    ]


def test_objective_row_equation():
    equation = normalize(objective_equation(parse_objective("3x + y + 2"), "max"))

    assert equation.lhs == [
        VariableTerm(coefficient=1.0, name="max"),
        VariableTerm(coefficient=-3.0, name="x"),
        VariableTerm(coefficient=-1.0, name="y"),
    ]
    assert equation.constant() == 2.0
