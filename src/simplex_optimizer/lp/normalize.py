from typing import List

from ..schemas import Constant, Equation, Objective, Term, VariableTerm


def normalize(equation: Equation) -> Equation:
    """
    Put all variables on the left and a single summed constant on the right.
    Returns a new equation; the input is left untouched.
    """

    lhs: List[Term] = [term for term in equation.lhs if isinstance(term, VariableTerm)]
    lhs.extend(_negate(term) for term in equation.rhs if isinstance(term, VariableTerm))

    constants = [term.value for term in equation.rhs if isinstance(term, Constant)]
    constants.extend(-term.value for term in equation.lhs if isinstance(term, Constant))
    total = sum(constants, 0.0)

    return Equation(lhs=lhs, operator=equation.operator, rhs=[Constant(value=total)])


def to_maximizations(equation: Equation) -> List[Equation]:
    """Rewrite a constraint as one or two ``<=`` constraints."""
    if equation.operator == "<=":
        return [equation]
    if equation.operator == ">=":
        return [_flip(equation)]
    less_than = equation.model_copy(update={"operator": "<="})
    return [less_than, _flip(less_than)]


def objective_equation(objective: Objective, name: str) -> Equation:
    """``name = objective``; normalizes into the objective row of the tableau."""
    return Equation(
        lhs=[VariableTerm(coefficient=1.0, name=name)],
        operator="=",
        rhs=list(objective.terms),
    )


def _flip(equation: Equation) -> Equation:
    # a >= b  <=>  -a <= -b
    return Equation(
        lhs=[_negate(term) for term in equation.lhs],
        operator="<=",
        rhs=[_negate(term) for term in equation.rhs],
    )


def _negate(term: Term) -> Term:
    if isinstance(term, VariableTerm):
        return VariableTerm(coefficient=-term.coefficient, name=term.name)
    return Constant(value=-term.value)
