"""Integrand type shared by all quadrature rules.

An integrand is any callable mapping a float to a float. ``None`` stands for
"no function provided"; every integrator checks for it once on entry and
returns a zero result instead of raising.
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Callable

logger = logging.getLogger(__name__)

Integrand = Callable[[float], float] | None

MIN_STEPS = 1


def coerce_steps(n: int) -> int:
    """Return ``n`` as a step count of at least ``MIN_STEPS``.

    Zero and negative counts are raised to the minimum instead of rejected.

    Raises:
        TypeError: If ``n`` is not an integer (``bool`` included).
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise TypeError(f"step count must be an integer, got {type(n).__name__}")

    n = int(n)
    if n < MIN_STEPS:
        logger.debug("Step count %d raised to %d", n, MIN_STEPS)
        return MIN_STEPS
    return n
