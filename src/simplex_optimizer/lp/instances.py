import random
from typing import List, Optional

from ..schemas import LPProblem


def generate_random_problem(num_vars: int, num_constraints: int, seed: Optional[int] = None) -> LPProblem:
    """
    Random bounded, feasible problem: positive coefficients on ``<=`` rows
    with positive right-hand sides, so the origin is always feasible.
    """

    rng = random.Random(seed)
    names = [f"x{i}" for i in range(1, num_vars + 1)]
    constraints: List[str] = []
    for _ in range(num_constraints):
        terms = [f"{rng.uniform(0.5, 5.0):.3f}{name}" for name in names]
        rhs = rng.uniform(num_vars * 2.0, num_vars * 6.0)
        constraints.append(f"{' + '.join(terms)} <= {rhs:.3f}")
    objective = " + ".join(f"{rng.uniform(1.0, 4.0):.3f}{name}" for name in names)
    return LPProblem(name=f"random-{seed}", objective=objective, constraints=constraints)
