from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Literal, List, Dict, Optional, Union

from .errors import Infeasible, IterationLimit, Unbounded

Cmp = Literal["<=", ">=", "="]
PivotRule = Literal["dantzig", "bland"]
Status = Literal["optimal", "infeasible", "unbounded", "iteration_limit"]


class Constant(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["constant"] = "constant"
    value: float


class VariableTerm(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["variable"] = "variable"
    coefficient: float
    name: str


Term = Annotated[Union[Constant, VariableTerm], Field(discriminator="kind")]


class Equation(BaseModel):
    lhs: List[Term] = Field(default_factory=list)
    operator: Cmp
    rhs: List[Term] = Field(default_factory=list)

    def variables(self) -> List[VariableTerm]:
        return [term for term in self.lhs if isinstance(term, VariableTerm)]

    def constant(self) -> float:
        """Sum of the right-hand constants (a single value once normalized)."""
        return sum(term.value for term in self.rhs if isinstance(term, Constant))


class Objective(BaseModel):
    terms: List[Term] = Field(default_factory=list)


class LPProblem(BaseModel):
    name: str = "problem"
    objective: str
    constraints: List[str] = Field(default_factory=list)


class SolveOptions(BaseModel):
    max_iters: int = 10_000
    tol: float = 1e-9
    pivot_rule: PivotRule = "dantzig"
    objective_name: str = "max"
    record_tableaus: bool = False


class TableauSnapshot(BaseModel):
    phase: str
    row: Optional[int] = None
    column: Optional[int] = None
    labels: List[str]
    values: List[List[float]]


class LPSolution(BaseModel):
    status: Status
    objective_value: Optional[float]
    x: Dict[str, float] | None
    iterations: int
    phase1_iterations: int = 0
    message: str = ""
    tableaus: List[TableauSnapshot] | None = None

    def values(self) -> Dict[str, float]:
        """Return the variable mapping, raising the error matching a non-optimal status."""
        if self.status == "infeasible":
            raise Infeasible(self.message or "Infeasible.")
        if self.status == "unbounded":
            raise Unbounded(self.message or "Unbounded.")
        if self.status == "iteration_limit":
            raise IterationLimit(self.message or "Hit iteration limit.")
        return dict(self.x or {})
