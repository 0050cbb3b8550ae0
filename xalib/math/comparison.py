"""Floating point comparison with relative tolerance."""

import sys

QL_EPSILON = sys.float_info.epsilon


def close_enough(x: float, y: float, n: int = 42) -> bool:
    """True if ``x`` and ``y`` agree to within ``n`` machine epsilons.

    Uses the relative tolerance ``n * eps`` against either operand; when one
    of them is zero the absolute difference is compared with ``(n * eps)**2``.
    """
    if x == y:
        return True
    diff = abs(x - y)
    tolerance = n * QL_EPSILON
    if x * y == 0.0:
        return diff < tolerance * tolerance
    return diff <= tolerance * abs(x) or diff <= tolerance * abs(y)
