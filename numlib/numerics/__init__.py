"""Quadrature rules for definite integrals of real functions.

This module provides pure Python implementations of:
- Composite trapezoidal and Simpson rules
- Romberg extrapolation
- Gauss-Legendre quadrature (Newton-Raphson on Legendre polynomials)
"""

from numlib.numerics.comparison import is_close
from numlib.numerics.gauss_legendre import GaussLegendreIntegrator, integrate_gauss_legendre
from numlib.numerics.integrand import Integrand, coerce_steps
from numlib.numerics.integration import (
    RombergTable,
    integrate_romberg,
    integrate_simpson,
    integrate_trapezoidal,
)
from numlib.numerics.root_finding import (
    ConvergenceError,
    LegendreRule,
    RootResult,
    legendre,
    legendre_rule,
    newton_raphson,
)

__all__ = [
    "ConvergenceError",
    "GaussLegendreIntegrator",
    "Integrand",
    "LegendreRule",
    "RombergTable",
    "RootResult",
    "coerce_steps",
    "integrate_gauss_legendre",
    "integrate_romberg",
    "integrate_simpson",
    "integrate_trapezoidal",
    "is_close",
    "legendre",
    "legendre_rule",
    "newton_raphson",
]
