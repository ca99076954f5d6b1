"""
Synthetic data generators.

Reproducible test fixtures for the regression code: a single-predictor
linear model under three noise models, and a response with a block of
predictors that have no relationship to it.

Seeding contract:
    Draws come from numpy.random.default_rng(seed) (PCG64). For
    generate_linear the draw order is n uniforms for x, then n standard
    normals for the noise; for generate_irrelevant_covariates it is n
    standard normals for y, then an (n, k) block for X (row-major). Any
    seeded numpy.random.Generator may be passed as rng instead of seed;
    the same draw order applies. Same seed, same parameters, same bits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from olstoolkit.core.exceptions import ValidationError
from olstoolkit.core.table import ObservationTable
from olstoolkit.core.validation import check_positive_int


NOISE_MODELS = ('constant', 'heteroscedastic', 'nonlinear')


@dataclass(frozen=True)
class SyntheticDataset:
    """
    Generated (x, y) pairs together with the parameters that produced them.

    Attributes:
        x: Predictor values, uniform on x_range
        y: Response values
        intercept, slope: Linear mean parameters
        noise: 'constant', 'heteroscedastic' or 'nonlinear'
        noise_scale: Noise standard deviation (per unit sqrt|x| when heteroscedastic)
        curvature: Quadratic coefficient of the mean ('nonlinear' only)
        x_range: (low, high) of the predictor
        seed: Seed used, or None when a caller-supplied generator was used
    """
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    intercept: float
    slope: float
    noise: str
    noise_scale: float
    curvature: float
    x_range: tuple[float, float]
    seed: int | None

    @property
    def n(self) -> int:
        return len(self.x)

    @property
    def mean(self) -> NDArray[np.floating[Any]]:
        """True conditional mean E[y | x]."""
        mean = self.intercept + self.slope * self.x
        if self.noise == 'nonlinear':
            mean = mean + self.curvature * self.x ** 2
        return mean

    def to_table(self) -> ObservationTable:
        """Columns 'x' and 'y' as an ObservationTable."""
        return ObservationTable.from_columns(
            {'x': self.x, 'y': self.y},
            kinds={'x': 'numeric', 'y': 'numeric'},
        )


@dataclass(frozen=True)
class IrrelevantCovariates:
    """Independent standard-normal response and predictors."""
    y: NDArray[np.floating[Any]]
    X: NDArray[np.floating[Any]]
    seed: int | None

    @property
    def n(self) -> int:
        return len(self.y)

    @property
    def k(self) -> int:
        return self.X.shape[1]


def _generator(seed: int | None, rng: np.random.Generator | None) -> np.random.Generator:
    if rng is not None:
        if seed is not None:
            raise ValidationError("pass either seed or rng, not both")
        if not isinstance(rng, np.random.Generator):
            raise ValidationError(
                f"rng: expected numpy.random.Generator, got {type(rng).__name__}"
            )
        return rng
    return np.random.default_rng(seed)


def generate_linear(
    n: int,
    intercept: float,
    slope: float,
    *,
    noise: str = 'constant',
    noise_scale: float = 1.0,
    curvature: float = 0.5,
    x_range: tuple[float, float] = (0.0, 10.0),
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> SyntheticDataset:
    """
    Simulate y = intercept + slope·x + ε.

    Noise models:
        'constant':        ε ~ N(0, noise_scale²)
        'heteroscedastic': ε ~ N(0, noise_scale²·|x|)   (variance ∝ x)
        'nonlinear':       mean gains curvature·x², ε ~ N(0, noise_scale²)

    Args:
        n: Sample size
        intercept: True intercept
        slope: True slope
        noise: Noise model name
        noise_scale: Noise standard deviation (>= 0)
        curvature: Quadratic term for the nonlinear model
        x_range: Predictor drawn uniformly on [low, high)
        seed: Seed for numpy.random.default_rng
        rng: Alternative to seed: a caller-owned seeded Generator

    Returns:
        SyntheticDataset
    """
    n = check_positive_int(n, 'n')
    if noise not in NOISE_MODELS:
        raise ValidationError(f"noise: expected one of {NOISE_MODELS}, got {noise!r}")
    if not noise_scale >= 0:
        raise ValidationError(f"noise_scale: must be >= 0, got {noise_scale}")
    low, high = (float(v) for v in x_range)
    if not low < high:
        raise ValidationError(f"x_range: low must be < high, got {x_range}")

    gen = _generator(seed, rng)
    x = gen.uniform(low, high, size=n)
    z = gen.standard_normal(n)

    mean = intercept + slope * x
    if noise == 'nonlinear':
        mean = mean + curvature * x ** 2
    if noise == 'heteroscedastic':
        sd = noise_scale * np.sqrt(np.abs(x))
    else:
        sd = noise_scale

    return SyntheticDataset(
        x=x,
        y=mean + sd * z,
        intercept=float(intercept),
        slope=float(slope),
        noise=noise,
        noise_scale=float(noise_scale),
        curvature=float(curvature),
        x_range=(low, high),
        seed=seed,
    )


def generate_irrelevant_covariates(
    n: int,
    k: int,
    *,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> IrrelevantCovariates:
    """
    Simulate a response with k predictors unrelated to it.

    y and every column of X are independent N(0, 1).
    """
    n = check_positive_int(n, 'n')
    k = check_positive_int(k, 'k')
    gen = _generator(seed, rng)
    y = gen.standard_normal(n)
    X = gen.standard_normal((n, k))
    return IrrelevantCovariates(y=y, X=X, seed=seed)
