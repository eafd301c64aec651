"""Integrate 5/(e^pi - 2) * e^(2x) * cos(x) over [0, pi/2] with every rule.

The exact value is 1. Prints the estimate of each rule, the full Romberg
table, and a convergence study; the study plot is written next to this file.
"""

import math
from pathlib import Path

import numlib
from numlib import (
    GaussLegendreIntegrator,
    integrate_romberg,
    integrate_simpson,
    integrate_trapezoidal,
)
from numlib.analysis import plot_convergence, study_convergence

X1 = 0.0
X2 = 0.5 * math.pi
STEPS = 100
ROMBERG_SIZE = 4
GAUSS_POINTS = 5

SCALE = 5.0 / (math.exp(math.pi) - 2.0)


def integrand(x):
    return SCALE * math.exp(2.0 * x) * math.cos(x)


numlib.configure_from_env()

print(f"trapezoidal    n={STEPS:<4d} {integrate_trapezoidal(X1, X2, STEPS, integrand):.15f}")
print(f"simpson        n={STEPS:<4d} {integrate_simpson(X1, X2, STEPS, integrand):.15f}")

table = integrate_romberg(X1, X2, ROMBERG_SIZE, integrand)
print(f"romberg        n={ROMBERG_SIZE:<4d} {table.estimate:.15f}")

gauss = GaussLegendreIntegrator(X1, X2, GAUSS_POINTS)
print(f"gauss-legendre n={GAUSS_POINTS:<4d} {gauss(integrand):.15f}")

print()
print(table)
print()

study = study_convergence(integrand, X1, X2, exact=1.0, steps=[1, 2, 4, 8, 16])
print(study)

plot_convergence(study, Path(__file__).parent / "reference_integral_convergence.png")
