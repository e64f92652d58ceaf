import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from .normalize import normalize, objective_equation, to_maximizations
from .parser import parse_equation, parse_objective
from .tableau import RecordingTracer, Tableau, build_tableau
from ..errors import Infeasible
from ..schemas import Equation, LPProblem, LPSolution, SolveOptions

logger = logging.getLogger(__name__)


def simplex_solve(problem: LPProblem, opts: SolveOptions) -> LPSolution:
    """
    Two-phase tableau simplex over the text form of a maximisation problem.

    Phase I pivots negative right-hand sides (introduced by ``>=`` and ``=``
    rows) away; Phase II applies Dantzig's rule until the objective row has
    no negative entry. Parse errors propagate to the caller.
    """

    tracer = RecordingTracer() if opts.record_tableaus else None
    tableau = prepare_tableau(problem.objective, problem.constraints, opts, tracer)
    if tracer is not None:
        tracer.record(tableau, "initial")
    logger.debug("Initial tableau for '%s':\n%s", problem.name, tableau.format())

    phase1 = _phase_I(tableau, opts)
    iterations = phase1["iterations"]
    snapshots = tracer.snapshots if tracer is not None else None

    if phase1["status"] == "infeasible":
        return _failed("infeasible", iterations, iterations, "Infeasible.", snapshots, problem)
    if phase1["status"] == "iteration_limit":
        return _failed(
            "iteration_limit", iterations, iterations, "Hit iteration limit in Phase I.", snapshots, problem
        )

    remaining_iters = opts.max_iters - iterations
    phase2 = _phase_II(tableau, opts, remaining_iters)
    iterations += phase2["iterations"]
    status = phase2["status"]

    if status == "iteration_limit":
        return _failed(
            "iteration_limit", iterations, phase1["iterations"], "Hit iteration limit in Phase II.", snapshots, problem
        )
    if status == "unbounded":
        return _failed("unbounded", iterations, phase1["iterations"], "Unbounded.", snapshots, problem)

    x = extract_solution(tableau, opts.tol)
    objective_value = tableau.rhs(0)
    logger.info("Solved '%s': optimal %g after %d pivots", problem.name, objective_value, iterations)

    return LPSolution(
        status="optimal",
        objective_value=objective_value,
        x=x,
        iterations=iterations,
        phase1_iterations=phase1["iterations"],
        message="",
        tableaus=snapshots,
    )


def maximize(
    objective: str,
    constraints: Iterable[str],
    options: Optional[SolveOptions] = None,
) -> Optional[Dict[str, float]]:
    """
    Maximise ``objective`` subject to ``constraints``.

    Returns the value of every variable plus the objective value under
    ``options.objective_name`` (``"max"`` by default), or ``None`` when the
    constraints admit no solution. Raises ``Unbounded`` or
    ``IterationLimit`` for the other non-optimal outcomes.
    """

    opts = options or SolveOptions()
    problem = LPProblem(objective=objective, constraints=list(constraints))
    solution = simplex_solve(problem, opts)
    try:
        return solution.values()
    except Infeasible:
        return None


def prepare_tableau(
    objective: str,
    constraints: Iterable[str],
    opts: SolveOptions,
    tracer: Optional[RecordingTracer] = None,
) -> Tableau:
    """Parse, expand and normalize the problem text, then build its tableau."""
    objective_eq = normalize(objective_equation(parse_objective(objective), opts.objective_name))
    constraint_eqs: List[Equation] = []
    for text in constraints:
        if not text.strip():
            continue
        for expanded in to_maximizations(parse_equation(text)):
            constraint_eqs.append(normalize(expanded))
    return build_tableau(objective_eq, constraint_eqs, opts.objective_name, tracer)


def _phase_I(tableau: Tableau, opts: SolveOptions) -> Dict[str, Any]:
    iterations = 0
    while True:
        pivot_row = find_infeasible_row(tableau, opts.tol)
        if pivot_row is None:
            return {"status": "feasible", "iterations": iterations}

        pivot_column = find_infeasible_column(tableau, pivot_row, opts.tol)
        if pivot_column is None:
            logger.debug("Row %d cannot be made feasible", pivot_row)
            return {"status": "infeasible", "iterations": iterations}

        if iterations >= opts.max_iters:
            return {"status": "iteration_limit", "iterations": iterations}

        tableau.pivot(pivot_row, pivot_column, "phase1")
        iterations += 1


def _phase_II(tableau: Tableau, opts: SolveOptions, max_iterations: int) -> Dict[str, Any]:
    use_bland = opts.pivot_rule == "bland"
    iterations = 0
    while True:
        pivot_column = determine_pivot_column(tableau, opts.tol, use_bland)
        if pivot_column is None:
            return {"status": "optimal", "iterations": iterations}

        pivot_row = determine_pivot_row(tableau, pivot_column, opts.tol, use_bland)
        if pivot_row is None:
            logger.debug("Column %s has no leaving row", tableau.labels[pivot_column])
            return {"status": "unbounded", "iterations": iterations}

        if iterations >= max_iterations:
            return {"status": "iteration_limit", "iterations": iterations}

        tableau.pivot(pivot_row, pivot_column, "phase2")
        iterations += 1


def find_infeasible_row(tableau: Tableau, tol: float = 0.0) -> Optional[int]:
    for row in range(1, tableau.rows):
        if tableau.rhs(row) < -tol:
            return row
    return None


def find_infeasible_column(tableau: Tableau, row: int, tol: float = 0.0) -> Optional[int]:
    for column in tableau.decision_columns():
        if tableau.matrix[row, column] < -tol:
            return column
    return None


def determine_pivot_column(tableau: Tableau, tol: float = 0.0, use_bland: bool = False) -> Optional[int]:
    """Entering column: most negative objective-row entry, first one on ties."""
    best: Optional[Tuple[int, float]] = None
    for column in range(tableau.rhs_column):
        coefficient = tableau.matrix[0, column]
        if coefficient >= -tol:
            continue
        if use_bland:
            return column
        if best is None or coefficient < best[1]:
            best = (column, coefficient)
    return best[0] if best is not None else None


def determine_pivot_row(
    tableau: Tableau,
    pivot_column: int,
    tol: float = 0.0,
    use_bland: bool = False,
) -> Optional[int]:
    """Leaving row by the minimum ratio test; ``None`` means unbounded."""
    ratios: List[Tuple[float, int]] = []
    for row in range(1, tableau.rows):
        coefficient = tableau.matrix[row, pivot_column]
        if coefficient <= tol:
            continue
        # Phase I accepts rhs >= -tol as feasible.
        ratios.append((max(tableau.rhs(row), 0.0) / coefficient, row))
    if not ratios:
        return None

    if use_bland:
        smallest = min(ratio for ratio, _ in ratios)
        tied = [row for ratio, row in ratios if ratio - smallest <= tol]
        return min(tied, key=lambda row: _basis_index(tableau, row, tol))

    best_ratio, best_row = ratios[0]
    for ratio, row in ratios[1:]:
        if ratio < best_ratio:
            best_ratio, best_row = ratio, row
    return best_row


def extract_solution(tableau: Tableau, tol: float = 0.0) -> Dict[str, float]:
    """
    Value of each registered variable; non-basic columns read as 0.

    Each row is claimed by the first unit-vector column in registry order;
    later columns with their 1 in a claimed row are non-basic.
    """
    result: Dict[str, float] = {}
    claimed_rows: Set[int] = set()
    for column, name in enumerate(tableau.variables):
        row = tableau.basic_row(column, tol)
        if row is not None and row in claimed_rows:
            row = None
        if row is not None:
            claimed_rows.add(row)
        value = tableau.rhs(row) if row is not None else 0.0
        if abs(value) < 1e-12:
            value = 0.0
        result[name] = value
    return result


def _basis_index(tableau: Tableau, row: int, tol: float) -> int:
    column = tableau.basic_column(row, tol)
    return column if column is not None else tableau.columns


def _failed(
    status: str,
    iterations: int,
    phase1_iterations: int,
    message: str,
    snapshots,
    problem: LPProblem,
) -> LPSolution:
    logger.info("Solve of '%s' ended %s after %d pivots", problem.name, status, iterations)
    return LPSolution(
        status=status,
        objective_value=None,
        x=None,
        iterations=iterations,
        phase1_iterations=phase1_iterations,
        message=message,
        tableaus=snapshots,
    )
