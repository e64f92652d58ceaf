"""Simplex Optimizer: two-phase simplex for text linear programs."""

from .errors import (
    DegeneratePivot,
    Infeasible,
    IterationLimit,
    MalformedConstraint,
    MalformedTerm,
    SimplexError,
    Unbounded,
)
from .lp.simplex import maximize, simplex_solve
from .schemas import LPProblem, LPSolution, SolveOptions

__all__ = [
    "maximize",
    "simplex_solve",
    "LPProblem",
    "LPSolution",
    "SolveOptions",
    "SimplexError",
    "MalformedConstraint",
    "MalformedTerm",
    "Infeasible",
    "Unbounded",
    "IterationLimit",
    "DegeneratePivot",
]
