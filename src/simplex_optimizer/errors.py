class SimplexError(Exception):
    """Base class for everything the solver raises on purpose."""


class MalformedConstraint(SimplexError, ValueError):
    """A constraint line without exactly one recognised operator."""


class MalformedTerm(SimplexError, ValueError):
    """A token that is neither a constant nor a coefficient/variable pair."""


class Infeasible(SimplexError):
    pass


class Unbounded(SimplexError):
    pass


class IterationLimit(SimplexError):
    pass


class DegeneratePivot(SimplexError, ArithmeticError):
    """Pivot attempted on a zero entry; the phase drivers never select one."""
