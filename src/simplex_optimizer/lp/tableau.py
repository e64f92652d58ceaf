import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..errors import DegeneratePivot, MalformedTerm
from ..schemas import Equation, TableauSnapshot

logger = logging.getLogger(__name__)


class PivotTracer:
    """Sink notified after every pivot. The base class ignores everything."""

    def on_pivot(self, tableau: "Tableau", row: int, column: int, phase: str) -> None:
        return None


NullTracer = PivotTracer


class RecordingTracer(PivotTracer):
    def __init__(self) -> None:
        self.snapshots: List[TableauSnapshot] = []

    def record(self, tableau: "Tableau", phase: str, row: Optional[int] = None, column: Optional[int] = None) -> None:
        self.snapshots.append(
            TableauSnapshot(
                phase=phase,
                row=row,
                column=column,
                labels=list(tableau.labels),
                values=tableau.matrix.tolist(),
            )
        )

    def on_pivot(self, tableau: "Tableau", row: int, column: int, phase: str) -> None:
        self.record(tableau, phase, row, column)


class Tableau:
    """
    Dense simplex tableau.

    Row 0 is the objective row, rows 1..m are the constraints. Columns are
    the registered variables (objective column first), one slack column per
    constraint, then the right-hand side.
    """

    def __init__(self, matrix: np.ndarray, variables: Sequence[str], tracer: Optional[PivotTracer] = None) -> None:
        self.matrix = matrix
        self.tracer = tracer or NullTracer()
        self.variables = list(variables)
        self.num_constraints = matrix.shape[0] - 1
        slacks = [f"s{idx}" for idx in range(1, self.num_constraints + 1)]
        self.labels = self.variables + slacks + ["rhs"]

    @property
    def rows(self) -> int:
        return self.matrix.shape[0]

    @property
    def columns(self) -> int:
        return self.matrix.shape[1]

    @property
    def rhs_column(self) -> int:
        return self.columns - 1

    def rhs(self, row: int) -> float:
        return float(self.matrix[row, -1])

    def decision_columns(self) -> range:
        # Skips the objective column at index 0.
        return range(1, len(self.variables))

    def pivot(self, pivot_row: int, pivot_column: int, phase: str = "pivot") -> None:
        value = self.matrix[pivot_row, pivot_column]
        if value == 0:
            raise DegeneratePivot(
                f"Pivot entry at row {pivot_row}, column {self.labels[pivot_column]} is zero."
            )

        logger.debug("Pivot row %d column %s", pivot_row, self.labels[pivot_column])
        self.matrix[pivot_row] = self.matrix[pivot_row] / value

        for row in range(self.rows):
            if row == pivot_row:
                continue
            ratio = self.matrix[row, pivot_column]
            if ratio == 0:
                continue
            self.matrix[row] = self.matrix[row] - ratio * self.matrix[pivot_row]

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Tableau after pivot:\n%s", self.format())

        self.tracer.on_pivot(self, pivot_row, pivot_column, phase)

    def basic_row(self, column: int, tol: float = 0.0) -> Optional[int]:
        """Row holding the 1 if ``column`` is a unit vector, else ``None``."""
        values = self.matrix[:, column]
        ones = np.flatnonzero(np.abs(values - 1.0) <= tol)
        zeros = np.count_nonzero(np.abs(values) <= tol)
        if len(ones) == 1 and zeros == self.rows - 1:
            return int(ones[0])
        return None

    def basic_column(self, row: int, tol: float = 0.0) -> Optional[int]:
        for column in range(self.rhs_column):
            if self.basic_row(column, tol) == row:
                return column
        return None

    def format(self, width: int = 10) -> str:
        def cell(text: str) -> str:
            return text[:width].ljust(width)

        lines = [" ".join(cell(label) for label in self.labels)]
        for values in self.matrix:
            lines.append(" ".join(cell(f"{value:.6g}") for value in values))
        return "\n".join(lines)


def determine_variables(equations: Sequence[Equation]) -> List[str]:
    """Distinct variable names in first-seen order across the equations' lhs."""
    seen: Dict[str, None] = {}
    for equation in equations:
        for term in equation.variables():
            seen.setdefault(term.name, None)
    return list(seen.keys())


def build_tableau(
    objective: Equation,
    constraints: Sequence[Equation],
    objective_name: str = "max",
    tracer: Optional[PivotTracer] = None,
) -> Tableau:
    """
    Assemble the tableau from a normalized objective row equation and
    normalized ``<=`` constraints.
    """

    if sum(term.name == objective_name for term in objective.variables()) != 1:
        raise MalformedTerm(f"'{objective_name}' is reserved for the objective value.")
    for equation in constraints:
        if any(term.name == objective_name for term in equation.variables()):
            raise MalformedTerm(f"'{objective_name}' is reserved for the objective value.")

    equations = [objective, *constraints]
    variables = determine_variables(equations)
    index = {name: idx for idx, name in enumerate(variables)}

    rows = len(equations)
    num_constraints = len(constraints)
    matrix = np.zeros((rows, len(variables) + num_constraints + 1), dtype=float)

    for row, equation in enumerate(equations):
        for term in equation.variables():
            matrix[row, index[term.name]] += term.coefficient
        if row > 0:
            matrix[row, len(variables) + row - 1] = 1.0
        matrix[row, -1] = equation.constant()

    return Tableau(matrix, variables, tracer)
