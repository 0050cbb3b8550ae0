"""Root-finding utilities (bracket expansion followed by Brent's method)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

import logging

from scipy.optimize import brentq

logger = logging.getLogger(__name__)

Func = Callable[[float], float]

GROWTH_FACTOR = 1.6
MAX_EVALUATIONS = 100


@dataclass
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str


class RootFindingError(RuntimeError):
    """Raised when root-finding fails to bracket or converge."""


def _expand_bracket(
    func: Func,
    guess: float,
    step: float,
    max_evaluations: int = MAX_EVALUATIONS,
) -> Tuple[float, float, float, float, int]:
    """Grow an interval around ``guess`` until ``func`` changes sign.

    The first step is taken downhill from the guess; afterwards the edge
    with the smaller absolute value is pushed out by ``GROWTH_FACTOR``
    times the current width.

    Returns:
        ``(x_min, x_max, f_min, f_max, evaluations)`` with
        ``f_min * f_max <= 0``
    """
    root = guess
    f_max = func(root)
    evaluations = 1
    if f_max == 0.0:
        return root, root, f_max, f_max, evaluations

    if f_max > 0.0:
        x_min = root - step
        f_min = func(x_min)
        x_max = root
    else:
        x_min = root
        f_min = f_max
        x_max = root + step
        f_max = func(x_max)
    evaluations += 1

    while evaluations <= max_evaluations:
        if f_min * f_max <= 0.0:
            logger.debug(
                "Bracket [%s, %s] found after %s evaluations", x_min, x_max, evaluations
            )
            return x_min, x_max, f_min, f_max, evaluations
        if abs(f_min) < abs(f_max):
            x_min += GROWTH_FACTOR * (x_min - x_max)
            f_min = func(x_min)
        else:
            x_max += GROWTH_FACTOR * (x_max - x_min)
            f_max = func(x_max)
        evaluations += 1

    raise RootFindingError(
        f"unable to bracket root in {max_evaluations} function evaluations "
        f"(last bracket attempt: f[{x_min},{x_max}] -> [{f_min},{f_max}])"
    )


def brent_solve(
    func: Func,
    accuracy: float,
    guess: float,
    step: float,
    *,
    max_evaluations: int = MAX_EVALUATIONS,
) -> RootResult:
    """Find a root of ``func`` starting from ``guess``.

    Parameters
    ----------
    func:
        Scalar function whose root is wanted.
    accuracy:
        Absolute tolerance on the root.
    guess:
        Starting point for the bracket search.
    step:
        Width of the first bracket attempt.
    max_evaluations:
        Budget of function evaluations for the bracket search.
    """
    if accuracy <= 0.0:
        raise ValueError(f"accuracy ({accuracy}) must be positive")
    if step <= 0.0:
        raise ValueError(f"step ({step}) must be positive")

    x_min, x_max, f_min, f_max, evaluations = _expand_bracket(
        func, guess, step, max_evaluations
    )
    if f_min == 0.0:
        return RootResult(x_min, evaluations, True, "bracket")
    if f_max == 0.0:
        return RootResult(x_max, evaluations, True, "bracket")

    try:
        root, info = brentq(func, x_min, x_max, xtol=accuracy, full_output=True)
    except (ValueError, RuntimeError) as exc:
        raise RootFindingError(f"Brent solver failed on [{x_min}, {x_max}]: {exc}") from exc
    if not info.converged:
        raise RootFindingError(f"Brent solver did not converge: {info.flag}")
    return RootResult(root, evaluations + info.function_calls, True, "brent")
