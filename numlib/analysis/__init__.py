"""Accuracy analysis of the quadrature rules.

Provides:
- study_convergence(): run rules at increasing step counts against a known value
- plot_convergence(): log-log error plot of a study
"""

from numlib.analysis.convergence import (
    METHODS,
    ConvergencePoint,
    ConvergenceStudy,
    plot_convergence,
    study_convergence,
)

__all__ = [
    "METHODS",
    "ConvergencePoint",
    "ConvergenceStudy",
    "plot_convergence",
    "study_convergence",
]
