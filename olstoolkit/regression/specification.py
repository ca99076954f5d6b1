"""
Model specification.

A typed replacement for formula strings: the response name, an ordered
tuple of predictor terms, and whether to add an intercept. Column names are
plain strings resolved against the observation table when the design is
built; nothing is parsed or evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass

from olstoolkit.core.exceptions import ValidationError
from olstoolkit.core.table import NUMERIC, CATEGORICAL, KINDS


@dataclass(frozen=True)
class Term:
    """
    One predictor in a model specification.

    Attributes:
        name: Column name in the observation table
        kind: 'numeric' or 'categorical'
        center: Subtract the column mean before fitting (numeric only)
    """
    name: str
    kind: str = NUMERIC
    center: bool = False

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValidationError(f"Term name must be a non-empty string, got {self.name!r}")
        if self.kind not in KINDS:
            raise ValidationError(
                f"{self.name}: unknown kind {self.kind!r}, expected one of {KINDS}"
            )
        if self.center and self.kind == CATEGORICAL:
            raise ValidationError(f"{self.name}: only numeric terms can be centered")

    @classmethod
    def numeric(cls, name: str, *, center: bool = False) -> Term:
        return cls(name, NUMERIC, center)

    @classmethod
    def categorical(cls, name: str) -> Term:
        return cls(name, CATEGORICAL)


@dataclass(frozen=True)
class ModelSpec:
    """
    Regression model specification: response ~ terms (+ intercept).

    Construction:
        ModelSpec('y', [Term('x')])
        ModelSpec('y', ['x1', 'x2'])                        # strings -> numeric terms
        ModelSpec('wage', [Term('educ', center=True), Term.categorical('race')])
        ModelSpec('y', ['x'], intercept=False)
    """
    response: str
    terms: tuple[Term, ...]
    intercept: bool = True

    def __init__(self, response: str, terms=(), *, intercept: bool = True):
        resolved = tuple(t if isinstance(t, Term) else Term(t) for t in terms)

        if not isinstance(response, str) or not response:
            raise ValidationError(f"response must be a non-empty string, got {response!r}")
        names = [t.name for t in resolved]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValidationError(f"terms: duplicate predictor names {duplicates}")
        if response in names:
            raise ValidationError(f"terms: response {response!r} also listed as a predictor")
        if not resolved and not intercept:
            raise ValidationError("ModelSpec needs at least one term or an intercept")

        object.__setattr__(self, 'response', response)
        object.__setattr__(self, 'terms', resolved)
        object.__setattr__(self, 'intercept', bool(intercept))

    @property
    def predictor_names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.terms)

    @property
    def required_columns(self) -> tuple[str, ...]:
        """Response followed by every predictor column."""
        return (self.response,) + self.predictor_names
