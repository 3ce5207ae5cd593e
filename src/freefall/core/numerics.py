# src/freefall/core/numerics.py
"""
Scalar numerical kernels: composite Simpson integration and bisection.

Both are deterministic and bounded: integration does a fixed amount of work
and bisection stops after `max_iterations` halvings at most.
"""

import warnings
from typing import Callable, NamedTuple

import numpy as np
from numba import njit

from freefall.core.exceptions import LowConfidenceWarning
from freefall.core.logging import logger

__all__ = [
    "RootEstimate",
    "integrate",
    "bisect",
    "bisection_search",
]


@njit(cache=True)
def _simpson_sum(ys: np.ndarray, h: float) -> float:
    """Composite Simpson weights (1, 4, 2, 4, ..., 4, 1) * h / 3 applied to `ys`."""
    n = ys.shape[0] - 1
    total = ys[0] + ys[n]
    for i in range(1, n, 2):
        total += 4.0 * ys[i]
    for i in range(2, n, 2):
        total += 2.0 * ys[i]
    return total * h / 3.0


def integrate(
    a: float,
    b: float,
    n_steps: int,
    f: Callable,
    vectorized: bool = True,
) -> float:
    """
    Composite Simpson's-rule approximation of the integral of `f` over [a, b].

    Parameters
    ----------
    a, b : float
        Integration limits. `a > b` yields the negated integral over [b, a].
    n_steps : int
        Number of equal subintervals. Must be even and positive; callers
        round up themselves.
    f : callable
        Integrand. With `vectorized=True` it is called once on the array of
        all nodes and must return an array of the same length.
    vectorized : bool
        Set False for scalar-only callables (evaluated node by node).

    Returns
    -------
    float
    """
    if n_steps <= 0 or n_steps % 2:
        raise ValueError(f"n_steps must be a positive even integer, got {n_steps}")
    if a == b:
        return 0.0
    xs = np.linspace(a, b, n_steps + 1)
    if vectorized:
        ys = np.asarray(f(xs), dtype=np.float64)
    else:
        ys = np.fromiter((f(x) for x in xs), dtype=np.float64, count=n_steps + 1)
    return float(_simpson_sum(ys, (b - a) / n_steps))


class RootEstimate(NamedTuple):
    value: float
    converged: bool
    iterations: int


def bisect(
    target: float,
    lo: float,
    hi: float,
    tolerance: float,
    max_iterations: int,
    f: Callable[[float], float],
) -> RootEstimate:
    """
    Find x in [lo, hi] with f(x) ~= target by interval halving.

    `f` must be monotonic on the interval (increasing or decreasing); this is
    not checked. If it is not, or the root lies outside [lo, hi], the result
    is an arbitrary point of the interval (usually an end point).

    The search stops when the bracket is narrower than `tolerance`, when f hits
    the target exactly, or when the bracket can no longer be halved in floating
    point; all three count as converged. Running out of iterations does not.
    """
    increasing = f(hi) >= f(lo)
    for iteration in range(max_iterations):
        if hi - lo < tolerance:
            return RootEstimate(0.5 * (lo + hi), True, iteration)
        mid = 0.5 * (lo + hi)
        if mid <= lo or mid >= hi:
            return RootEstimate(mid, True, iteration)
        f_mid = f(mid)
        if f_mid == target:
            return RootEstimate(mid, True, iteration + 1)
        if (f_mid < target) == increasing:
            lo = mid
        else:
            hi = mid
    return RootEstimate(0.5 * (lo + hi), hi - lo < tolerance, max_iterations)


def bisection_search(
    target: float,
    lo: float,
    hi: float,
    tolerance: float,
    max_iterations: int,
    f: Callable[[float], float],
) -> float:
    """
    Like `bisect` but returns the estimate as a plain float.

    A search that runs out of iterations still returns its best estimate, and
    emits a LowConfidenceWarning.
    """
    estimate = bisect(target, lo, hi, tolerance, max_iterations, f)
    if not estimate.converged:
        logger.debug(
            "Bisection for target {} on [{}, {}] stopped after {} iterations without reaching tolerance {}",
            target, lo, hi, estimate.iterations, tolerance,
        )
        warnings.warn(
            f"bisection did not converge within {max_iterations} iterations "
            f"(target={target!r}, tolerance={tolerance!r})",
            LowConfidenceWarning,
            stacklevel=2,
        )
    return estimate.value
