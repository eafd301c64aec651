"""Root finding for Gauss-Legendre quadrature.

Provides Newton-Raphson iteration and the solver that uses it to find the
nodes and weights of the Gauss-Legendre rule of a given degree.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from functools import lru_cache

from numlib.numerics.integrand import coerce_steps

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-15
DEFAULT_MAX_ITERATIONS = 100


class ConvergenceError(RuntimeError):
    """Raised when an iteration fails to converge within its budget."""


@dataclass
class RootResult:
    """Result of root finding.

    Attributes:
        root: The found root value.
        converged: Whether the algorithm converged.
        iterations: Number of iterations used.
        function_calls: Number of function evaluations.
        last_step: Size of the final Newton step.
        value: Function value at ``root`` (nan if never evaluated there).
        derivative: Derivative at ``root`` (nan if never evaluated there).
    """

    root: float
    converged: bool
    iterations: int
    function_calls: int
    last_step: float = math.inf
    value: float = math.nan
    derivative: float = math.nan


def newton_raphson(
    f: Callable[[float], tuple[float, float]],
    x0: float,
    tol: float = DEFAULT_TOLERANCE,
    maxiter: int = DEFAULT_MAX_ITERATIONS,
) -> RootResult:
    """Find a root of a function with Newton-Raphson iteration.

    Iterates ``x <- x - f(x)/f'(x)`` and stops once the step is no larger
    than ``tol``. The step that meets the tolerance is still applied, and
    ``f`` is evaluated once more at the converged root so its value and
    derivative there come back with the result.

    Args:
        f: Returns the pair ``(f(x), f'(x))`` for a given ``x``.
        x0: Initial guess.
        tol: Absolute tolerance on the Newton step.
        maxiter: Maximum number of iterations.

    Returns:
        RootResult with the root and convergence info. A vanishing derivative
        stops the iteration unconverged.
    """
    func_calls = 0

    def eval_f(x: float) -> tuple[float, float]:
        nonlocal func_calls
        func_calls += 1
        return f(x)

    x = x0
    step = math.inf

    for iteration in range(1, maxiter + 1):
        value, derivative = eval_f(x)
        if derivative == 0.0:
            return RootResult(
                root=x, converged=False, iterations=iteration,
                function_calls=func_calls, last_step=step,
                value=value, derivative=derivative,
            )

        step = value / derivative
        x -= step

        if abs(step) <= tol:
            value, derivative = eval_f(x)
            return RootResult(
                root=x, converged=True, iterations=iteration,
                function_calls=func_calls, last_step=abs(step),
                value=value, derivative=derivative,
            )

    return RootResult(
        root=x, converged=False, iterations=maxiter,
        function_calls=func_calls, last_step=abs(step),
    )


def legendre(degree: int, x: float) -> tuple[float, float, float]:
    """Evaluate the Legendre polynomial of ``degree`` at ``x``.

    Uses the three-term recurrence
    ``P_k = ((2k - 1) x P_{k-1} - (k - 1) P_{k-2}) / k``.

    Returns:
        ``(P_n(x), P_{n-1}(x), P_n'(x))``.
    """
    p_n, p_prev = 1.0, 0.0
    for k in range(1, degree + 1):
        p_prev, p_older = p_n, p_prev
        p_n = ((2 * k - 1) * x * p_prev - (k - 1) * p_older) / k

    denominator = x * x - 1.0
    if denominator == 0.0:
        # P_n'(+-1) = (+-1)^(n-1) n(n+1)/2
        return p_n, p_prev, x ** (degree - 1) * degree * (degree + 1) / 2.0
    return p_n, p_prev, degree / denominator * (x * p_n - p_prev)


@dataclass(frozen=True)
class LegendreRule:
    """Nodes and weights of an n-point Gauss-Legendre rule on ``[-1, 1]``.

    Both sequences are 0-based and of length ``degree``, ordered from the
    largest root to the smallest.
    """

    degree: int
    roots: tuple[float, ...]
    weights: tuple[float, ...]

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return iter(zip(self.roots, self.weights))

    def __len__(self) -> int:
        return self.degree


def _initial_guess(index: int, degree: int) -> float:
    """Chebyshev-based seed for the ``index``-th root (1-based)."""
    return math.cos(math.pi * (index - 0.25) / (degree + 0.5))


@lru_cache(maxsize=64)
def _solve(degree: int, tol: float, max_iterations: int) -> LegendreRule:
    def polynomial(x: float) -> tuple[float, float]:
        p_n, _, dp_n = legendre(degree, x)
        return p_n, dp_n

    roots = []
    weights = []
    total_iterations = 0

    for index in range(1, degree + 1):
        result = newton_raphson(polynomial, _initial_guess(index, degree), tol, max_iterations)
        if not result.converged:
            logger.error(
                "Legendre root %d of degree %d did not converge after %d iterations (last step %g)",
                index, degree, result.iterations, result.last_step,
            )
            raise ConvergenceError(
                f"Legendre root {index} of degree {degree} did not converge "
                f"after {result.iterations} iterations (last step {result.last_step:g})"
            )
        total_iterations += result.iterations

        root, derivative = result.root, result.derivative
        roots.append(root)
        weights.append(2.0 / ((1.0 - root * root) * derivative * derivative))

    logger.debug(
        "Solved Legendre rule of degree %d in %d Newton iterations", degree, total_iterations
    )
    return LegendreRule(degree=degree, roots=tuple(roots), weights=tuple(weights))


def legendre_rule(
    degree: int,
    tol: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> LegendreRule:
    """Compute Gauss-Legendre nodes and weights for ``degree`` points.

    Each root of ``P_degree`` is found by Newton-Raphson from a Chebyshev
    seed. The weight of root ``x`` is ``2 / ((1 - x^2) P'(x)^2)``. Results are
    cached per argument set; the returned rule is immutable.

    Args:
        degree: Number of points. Values below 1 are treated as 1.
        tol: Newton step tolerance.
        max_iterations: Iteration budget per root.

    Returns:
        LegendreRule with ``degree`` roots and weights.

    Raises:
        ConvergenceError: If any root fails to converge.
    """
    return _solve(coerce_steps(degree), float(tol), int(max_iterations))
