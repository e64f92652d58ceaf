"""Tableau simplex over linear expressions written as text."""

from .simplex import simplex_solve, maximize
from .parser import parse_equation, parse_objective

__all__ = ["simplex_solve", "maximize", "parse_equation", "parse_objective"]
