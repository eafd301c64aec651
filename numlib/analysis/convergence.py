"""Convergence studies comparing quadrature rules against a known integral.

study_convergence() runs each requested rule at a series of step counts and
records the estimate, its error and the number of integrand evaluations.
The result can be printed, converted to a dict or a pandas DataFrame, or
plotted as error against step count on log-log axes.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pandas as pd

from numlib.numerics.comparison import is_close
from numlib.numerics.gauss_legendre import integrate_gauss_legendre
from numlib.numerics.integration import (
    integrate_romberg,
    integrate_simpson,
    integrate_trapezoidal,
)

if TYPE_CHECKING:
    from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

DEFAULT_STEPS = (1, 2, 4, 8, 16)

METHODS: dict[str, Callable[[float, float, int, Callable[[float], float]], float]] = {
    "trapezoidal": integrate_trapezoidal,
    "simpson": integrate_simpson,
    "romberg": lambda x1, x2, n, f: integrate_romberg(x1, x2, n, f).estimate,
    "gauss_legendre": integrate_gauss_legendre,
}


class _CountingIntegrand:
    """Wraps an integrand and counts how often it is called."""

    def __init__(self, f: Callable[[float], float]):
        self._f = f
        self.calls = 0

    def __call__(self, x: float) -> float:
        self.calls += 1
        return self._f(x)


@dataclass
class ConvergencePoint:
    """One rule evaluated at one step count."""
    method: str
    steps: int
    estimate: float
    exact: float
    evaluations: int

    @property
    def abs_error(self) -> float:
        return abs(self.estimate - self.exact)

    @property
    def rel_error(self) -> float:
        if self.exact == 0.0:
            return self.abs_error
        return self.abs_error / abs(self.exact)

    def within(self, epsilon: float) -> bool:
        return is_close(self.estimate, self.exact, epsilon)

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "steps": self.steps,
            "estimate": self.estimate,
            "abs_error": self.abs_error,
            "rel_error": self.rel_error,
            "evaluations": self.evaluations,
        }


@dataclass
class ConvergenceStudy:
    """All points of a convergence study."""
    x1: float
    x2: float
    exact: float
    points: list[ConvergencePoint] = field(default_factory=list)

    @property
    def methods(self) -> list[str]:
        return list(dict.fromkeys(point.method for point in self.points))

    def for_method(self, method: str) -> list[ConvergencePoint]:
        return [point for point in self.points if point.method == method]

    def best(self, method: str) -> ConvergencePoint:
        """Point of ``method`` with the smallest absolute error.

        Raises:
            KeyError: If the study has no points for ``method``.
        """
        points = self.for_method(method)
        if not points:
            raise KeyError(method)
        return min(points, key=lambda point: point.abs_error)

    def to_dict(self) -> dict[str, Any]:
        return {
            "interval": [self.x1, self.x2],
            "exact": self.exact,
            "points": [point.to_dict() for point in self.points],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """One row per point, with the columns of ConvergencePoint.to_dict()."""
        return pd.DataFrame(
            [point.to_dict() for point in self.points],
            columns=["method", "steps", "estimate", "abs_error", "rel_error", "evaluations"],
        )

    def __str__(self) -> str:
        lines = [f"Convergence study on [{self.x1:g}, {self.x2:g}] (exact={self.exact:.15g})"]
        for method in self.methods:
            lines.append(f"  {method}:")
            for point in self.for_method(method):
                lines.append(
                    f"    n={point.steps:<5d} estimate={point.estimate:.15g}"
                    f"  rel_error={point.rel_error:.3e}  evals={point.evaluations}"
                )
        return "\n".join(lines)


def study_convergence(
    f: Callable[[float], float],
    x1: float,
    x2: float,
    exact: float,
    steps: Iterable[int] = DEFAULT_STEPS,
    methods: Sequence[str] | None = None,
) -> ConvergenceStudy:
    """Evaluate quadrature rules at increasing step counts.

    Args:
        f: Integrand.
        x1: Lower bound.
        x2: Upper bound.
        exact: Known value of the integral.
        steps: Step counts to evaluate. For Romberg this is the table size
            (``2**(n-1) + 1`` evaluations) and for Gauss-Legendre the number
            of points.
        methods: Names from METHODS; all of them when None.

    Returns:
        ConvergenceStudy with one point per (method, step count).

    Raises:
        ValueError: If a method name is unknown.
    """
    methods = list(METHODS) if methods is None else list(methods)
    unknown = [name for name in methods if name not in METHODS]
    if unknown:
        raise ValueError(f"Unknown quadrature method(s) {unknown}; expected one of {list(METHODS)}")

    steps = list(steps)
    study = ConvergenceStudy(x1=x1, x2=x2, exact=exact)

    for method in methods:
        rule = METHODS[method]
        for n in steps:
            counted = _CountingIntegrand(f)
            estimate = rule(x1, x2, n, counted)
            study.points.append(ConvergencePoint(
                method=method,
                steps=n,
                estimate=estimate,
                exact=exact,
                evaluations=counted.calls,
            ))
        logger.debug("Studied %s at %d step counts", method, len(steps))

    return study


def plot_convergence(study: ConvergenceStudy, path: str | Path | None = None) -> Figure:
    """Plot relative error against step count for every method.

    Zero errors are drawn at machine epsilon so they stay on the log axis.

    Args:
        study: Result of study_convergence().
        path: If given, the figure is saved there.

    Returns:
        The matplotlib Figure.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots()
    for method in study.methods:
        points = study.for_method(method)
        errors = [max(point.rel_error, sys.float_info.epsilon) for point in points]
        ax.loglog([point.steps for point in points], errors, "o-", label=method)

    ax.set_xlabel("steps")
    ax.set_ylabel("relative error")
    ax.set_title(f"Convergence on [{study.x1:g}, {study.x2:g}]")
    ax.legend()
    ax.grid(True, which="both", alpha=0.3)

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=150)
        logger.info("Saved convergence plot to %s", path)

    return fig
