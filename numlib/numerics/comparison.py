"""Relative-tolerance comparison of quadrature results."""

import sys

# Smallest positive normal float; magnitudes below it count as zero.
CLOSEST_TO_ZERO = sys.float_info.min


def is_close(result: float, expected: float, epsilon: float) -> bool:
    """Check that ``result`` matches ``expected`` to a relative ``epsilon``.

    Two values that are both effectively zero compare equal. A zero and a
    non-zero value never do, whatever the tolerance.

    Args:
        result: Computed value.
        expected: Reference value.
        epsilon: Allowed relative deviation, ``|result/expected - 1|``.

    Returns:
        True if the values agree within the tolerance.
    """
    result_is_zero = abs(result) < CLOSEST_TO_ZERO
    expected_is_zero = abs(expected) < CLOSEST_TO_ZERO

    if not result_is_zero and not expected_is_zero:
        return abs(result / expected - 1.0) <= epsilon
    return result_is_zero and expected_is_zero
