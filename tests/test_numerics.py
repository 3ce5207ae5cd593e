import math

import numpy as np
import pytest

from freefall.core.exceptions import LowConfidenceWarning
from freefall.core.numerics import bisect, bisection_search, integrate


def test_simpson_is_exact_for_cubics():
    assert integrate(0.0, 2.0, 4, lambda x: x**3 - x) == pytest.approx(2.0, abs=1e-12)


def test_simpson_converges_for_smooth_integrand():
    assert integrate(0.0, math.pi, 100, np.sin) == pytest.approx(2.0, rel=1e-7)


def test_integrate_empty_interval_is_zero():
    assert integrate(3.0, 3.0, 10, np.exp) == 0.0


def test_integrate_reversed_limits_negates():
    forward = integrate(0.0, 1.0, 10, np.exp)
    assert integrate(1.0, 0.0, 10, np.exp) == pytest.approx(-forward, rel=1e-14)


@pytest.mark.parametrize("n_steps", [0, 3, -2])
def test_integrate_rejects_bad_step_counts(n_steps):
    with pytest.raises(ValueError):
        integrate(0.0, 1.0, n_steps, np.exp)


def test_integrate_scalar_callable():
    result = integrate(0.0, 1.0, 20, math.exp, vectorized=False)
    assert result == pytest.approx(math.e - 1.0, rel=1e-6)


def test_bisect_increasing_function():
    est = bisect(2.0, 0.0, 2.0, 1e-12, 200, lambda x: x * x)
    assert est.converged
    assert est.value == pytest.approx(math.sqrt(2.0), abs=1e-11)


def test_bisect_decreasing_function():
    est = bisect(0.5, 0.0, 2.0, 1e-12, 200, lambda x: math.exp(-x))
    assert est.converged
    assert est.value == pytest.approx(math.log(2.0), abs=1e-11)


def test_bisect_target_at_lower_end():
    est = bisect(0.0, 0.0, 10.0, 1e-9, 200, lambda x: x)
    assert est.value == pytest.approx(0.0, abs=1e-9)


def test_bisect_root_outside_interval_returns_end_point():
    est = bisect(10.0, 0.0, 2.0, 1e-9, 200, lambda x: x * x)
    assert est.value == pytest.approx(2.0, abs=1e-8)


def test_bisect_reports_exhausted_budget():
    est = bisect(2.0, 0.0, 2.0, 1e-12, 5, lambda x: x * x)
    assert not est.converged
    assert est.iterations == 5
    assert abs(est.value - math.sqrt(2.0)) < 2.0 / 2**5


def test_bisection_search_warns_on_low_confidence():
    with pytest.warns(LowConfidenceWarning):
        value = bisection_search(2.0, 0.0, 2.0, 1e-12, 5, lambda x: x * x)
    assert value == pytest.approx(math.sqrt(2.0), abs=0.07)


def test_bisect_zero_tolerance_runs_to_float_precision():
    est = bisect(2.0, 0.0, 2.0, 0.0, 200, lambda x: x * x)
    assert est.converged
    assert est.iterations < 200
    assert est.value == pytest.approx(math.sqrt(2.0), rel=1e-15)
