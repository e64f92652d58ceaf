import numpy as np
import pytest

from simplex_optimizer.lp.instances import generate_random_problem
from simplex_optimizer.lp.normalize import normalize
from simplex_optimizer.lp.parser import parse_equation, parse_objective
from simplex_optimizer.lp.simplex import simplex_solve
from simplex_optimizer.schemas import SolveOptions

linprog = pytest.importorskip("scipy.optimize").linprog


def to_arrays(problem):
    objective = parse_objective(problem.objective)
    names = [term.name for term in objective.terms]
    c = np.array([term.coefficient for term in objective.terms])
    A, b = [], []
    for text in problem.constraints:
        equation = normalize(parse_equation(text))
        coefs = {term.name: term.coefficient for term in equation.variables()}
        A.append([coefs.get(name, 0.0) for name in names])
        b.append(equation.constant())
    return names, c, np.array(A), np.array(b)


@pytest.mark.parametrize("seed", range(8))
@pytest.mark.parametrize("pivot_rule", ["dantzig", "bland"])
def test_random_problems_match_highs(seed, pivot_rule):
    problem = generate_random_problem(4, 3, seed)
    names, c, A, b = to_arrays(problem)

    solution = simplex_solve(problem, SolveOptions(pivot_rule=pivot_rule))
    reference = linprog(-c, A_ub=A, b_ub=b, bounds=[(0, None)] * len(names), method="highs")

    assert reference.success
    assert solution.status == "optimal"
    assert solution.objective_value == pytest.approx(-reference.fun, rel=1e-6)

    x = np.array([solution.x[name] for name in names])
    assert np.all(x >= -1e-9)
    assert np.all(A @ x <= b + 1e-6)


def test_generator_is_reproducible():
    assert generate_random_problem(3, 2, 7) == generate_random_problem(3, 2, 7)
    assert generate_random_problem(3, 2, 7) != generate_random_problem(3, 2, 8)
