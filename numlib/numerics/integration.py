"""Newton-Cotes integration and Romberg extrapolation.

Provides the composite trapezoidal and Simpson rules over equal subintervals,
and Romberg integration built on repeated trapezoidal refinement.

All rules share the same calling convention ``(x1, x2, n, f)``:
    - ``f is None`` gives a zero result instead of an error.
    - ``n < 1`` is treated as ``n = 1``.
    - Reversed bounds flip the sign of the result; equal bounds give 0.

Sums are accumulated sequentially from ``x1`` towards ``x2``, so repeated
calls with the same inputs produce bit-identical results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from numlib.numerics.integrand import Integrand, coerce_steps

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def integrate_trapezoidal(x1: float, x2: float, n: int, f: Integrand) -> float:
    """Composite trapezoidal rule over ``n`` equal subintervals.

    Each subinterval ``[x_i, x_{i+1}]`` contributes
    ``0.5 * (x_{i+1} - x_i) * (f(x_i) + f(x_{i+1}))``.

    Args:
        x1: Lower bound.
        x2: Upper bound.
        n: Number of subintervals.
        f: Function to integrate, or None.

    Returns:
        Integral approximation.
    """
    if f is None:
        return 0.0

    n = coerce_steps(n)
    logger.debug("Trapezoidal rule on [%r, %r] with n=%d", x1, x2, n)
    width = (x2 - x1) / n

    total = 0.0
    for step in range(n):
        x_i = x1 + step * width
        x_i1 = x1 + (step + 1) * width
        total += 0.5 * (x_i1 - x_i) * (f(x_i) + f(x_i1))

    return total


def integrate_simpson(x1: float, x2: float, n: int, f: Integrand) -> float:
    """Composite Simpson's rule over ``n`` equal subintervals.

    Each subinterval is integrated with its own midpoint, so the rule costs
    three function evaluations per subinterval:
    ``(x_{i+1} - x_i) / 6 * (f(x_i) + 4*f(m) + f(x_{i+1}))``.

    Args:
        x1: Lower bound.
        x2: Upper bound.
        n: Number of subintervals.
        f: Function to integrate, or None.

    Returns:
        Integral approximation.
    """
    if f is None:
        return 0.0

    n = coerce_steps(n)
    logger.debug("Simpson rule on [%r, %r] with n=%d", x1, x2, n)
    width = (x2 - x1) / n

    total = 0.0
    for step in range(n):
        x_i = x1 + step * width
        x_i1 = x1 + (step + 1) * width
        midpoint = 0.5 * (x_i + x_i1)
        total += (x_i1 - x_i) / 6.0 * (f(x_i) + 4.0 * f(midpoint) + f(x_i1))

    return total


@dataclass(frozen=True)
class RombergTable:
    """Square Romberg extrapolation table.

    ``table[level][order]`` holds the estimate after ``level`` halvings of the
    step size and ``order`` Richardson extrapolations. Cells above the
    diagonal are unused and stay 0.0.

    Attributes:
        rows: One tuple per refinement level, each of length ``size``.
    """

    rows: tuple[tuple[float, ...], ...]

    @classmethod
    def zeros(cls, size: int) -> RombergTable:
        """Zero-filled table of ``size`` x ``size``."""
        return cls(tuple((0.0,) * size for _ in range(size)))

    @property
    def size(self) -> int:
        return len(self.rows)

    @property
    def estimate(self) -> float:
        """Best estimate, the bottom-right cell."""
        return self.rows[-1][-1]

    def diagonal(self) -> tuple[float, ...]:
        """Highest-order estimate at each refinement level."""
        return tuple(row[level] for level, row in enumerate(self.rows))

    def column(self, order: int) -> tuple[float, ...]:
        """Estimates of a given extrapolation order, from level ``order`` down."""
        return tuple(row[order] for row in self.rows[order:])

    def to_list(self) -> list[list[float]]:
        return [list(row) for row in self.rows]

    def to_dataframe(self) -> pd.DataFrame:
        """Table as a DataFrame indexed by level with one column per order."""
        import pandas as pd

        frame = pd.DataFrame(
            self.to_list(),
            columns=[f"order_{order}" for order in range(self.size)],
        )
        frame.index.name = "level"
        return frame

    def __getitem__(self, level: int) -> tuple[float, ...]:
        return self.rows[level]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple[float, ...]]:
        return iter(self.rows)

    def __str__(self) -> str:
        lines = [f"RombergTable ({self.size}x{self.size})"]
        for level, row in enumerate(self.rows):
            cells = "  ".join(f"{value:.12g}" for value in row[: level + 1])
            lines.append(f"  {level}: {cells}")
        return "\n".join(lines)


def _extrapolate(previous: Sequence[float], trapezoid: float, level: int) -> list[float]:
    """Build row ``level`` of the table from the row above it.

    Order ``m`` cancels the ``h^(2m)`` error term; order 1 reproduces
    Simpson's rule and order 2 Boole's rule.
    """
    row = [0.0] * len(previous)
    row[0] = trapezoid
    for order in range(1, level + 1):
        k = 4.0**order
        row[order] = (k * row[order - 1] - previous[order - 1]) / (k - 1.0)
    return row


def integrate_romberg(x1: float, x2: float, n: int, f: Integrand) -> RombergTable:
    """Romberg integration.

    Starts from a single trapezoid over ``[x1, x2]`` and halves the step
    ``n - 1`` times. Each halving only evaluates ``f`` at the new midpoints
    and reuses the coarser estimate. Every level is then refined by
    Richardson extrapolation.

    Args:
        x1: Lower bound.
        x2: Upper bound.
        n: Table size (number of refinement levels).
        f: Function to integrate, or None.

    Returns:
        The full ``n`` x ``n`` table. ``table[n-1][n-1]`` is the estimate.
        An absent ``f`` gives a zero table of the same shape.
    """
    n = coerce_steps(n)
    if f is None:
        return RombergTable.zeros(n)

    logger.debug("Romberg integration on [%r, %r] with n=%d", x1, x2, n)

    first = [0.0] * n
    first[0] = integrate_trapezoidal(x1, x2, 1, f)
    rows = [first]

    h = x2 - x1
    for level in range(1, n):
        h *= 0.5
        correction = 0.0
        for k in range(1, 2 ** (level - 1) + 1):
            correction += f(x1 + (2 * k - 1) * h)

        previous = rows[level - 1]
        trapezoid = 0.5 * previous[0] + correction * h
        rows.append(_extrapolate(previous, trapezoid, level))

    return RombergTable(tuple(tuple(row) for row in rows))
