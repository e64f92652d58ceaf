import re
from typing import List, NamedTuple, Tuple

from ..errors import MalformedConstraint, MalformedTerm
from ..schemas import Constant, Equation, Objective, Term, VariableTerm

OPERATORS = (">=", "<=", "=")

_WHITESPACE = re.compile(r"\s+")
_SIGN_SPLIT = re.compile(r"([+-])")
_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_VARIABLE_PATTERN = re.compile(rf"({_NUMBER})?([A-Za-z][A-Za-z0-9]*)")
_CONSTANT_PATTERN = re.compile(_NUMBER)


class _Fold(NamedTuple):
    sign: int
    terms: Tuple[Term, ...]
    dangling: bool


def parse_equation(text: str) -> Equation:
    """
    Parse one constraint line such as ``"3x + 2y <= 10"`` or ``"b = 2c"``.

    Operators are looked up in the order ``>=``, ``<=``, ``=`` so the
    two-character forms win over the bare equals sign.
    """

    condensed = _WHITESPACE.sub("", text)
    operator = next((op for op in OPERATORS if op in condensed), None)
    if operator is None:
        raise MalformedConstraint(f"No '<=', '>=' or '=' found in constraint '{text}'.")

    sides = condensed.split(operator)
    if len(sides) != 2:
        raise MalformedConstraint(f"Constraint '{text}' has more than one '{operator}'.")

    lhs_text, rhs_text = sides
    return Equation(lhs=parse_side(lhs_text), operator=operator, rhs=parse_side(rhs_text))


def parse_objective(text: str) -> Objective:
    return Objective(terms=parse_side(_WHITESPACE.sub("", text)))


def parse_side(text: str) -> List[Term]:
    tokens = [tok for tok in _SIGN_SPLIT.split(text) if tok]
    folded = _Fold(sign=1, terms=(), dangling=False)
    for token in tokens:
        folded = _fold_token(folded, token)
    if folded.dangling:
        raise MalformedTerm(f"Expression '{text}' ends with a sign but no term.")
    return list(folded.terms)


def _fold_token(state: _Fold, token: str) -> _Fold:
    if token == "-":
        return state._replace(sign=-state.sign, dangling=True)
    if token == "+":
        return state._replace(dangling=True)
    term = parse_term(token, state.sign)
    return _Fold(sign=1, terms=state.terms + (term,), dangling=False)


def parse_term(token: str, sign: int = 1) -> Term:
    match = _VARIABLE_PATTERN.fullmatch(token)
    if match:
        coef_text, name = match.groups()
        coefficient = float(coef_text) if coef_text else 1.0
        return VariableTerm(coefficient=sign * coefficient, name=name)
    if _CONSTANT_PATTERN.fullmatch(token):
        return Constant(value=sign * float(token))
    raise MalformedTerm(f"Could not parse term '{token}'.")


def parse_constraint_block(text: str) -> List[str]:
    """Split a multi-line block into constraint lines, dropping blank ones."""
    return [line.strip() for line in text.splitlines() if line.strip()]
