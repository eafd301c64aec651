"""numlib - classical quadrature rules for definite integrals.

Example:
    import math
    from numlib import integrate_simpson, integrate_romberg

    area = integrate_simpson(0.0, math.pi, 100, math.sin)
    table = integrate_romberg(0.0, math.pi, 5, math.sin)
    print(table.estimate)
"""

import logging

__version__ = "0.1.0"

# Library is silent by default; see numlib.logging_config to enable output.
logging.getLogger("numlib").addHandler(logging.NullHandler())

from numlib.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_file_logging,
    enable_json_logging,
    enable_timed_file_logging,
    set_level,
    set_module_level,
)
from numlib.numerics import (
    ConvergenceError,
    GaussLegendreIntegrator,
    Integrand,
    LegendreRule,
    RombergTable,
    RootResult,
    integrate_gauss_legendre,
    integrate_romberg,
    integrate_simpson,
    integrate_trapezoidal,
    is_close,
    legendre_rule,
    newton_raphson,
)

__all__ = [
    "__version__",
    # Quadrature
    "integrate_trapezoidal",
    "integrate_simpson",
    "integrate_romberg",
    "integrate_gauss_legendre",
    "GaussLegendreIntegrator",
    "RombergTable",
    "Integrand",
    # Root finding
    "legendre_rule",
    "newton_raphson",
    "LegendreRule",
    "RootResult",
    "ConvergenceError",
    "is_close",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "enable_timed_file_logging",
    "set_level",
    "set_module_level",
]
