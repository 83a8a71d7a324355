"""Property-based checks for coordinate mapping and viewport control."""

from __future__ import annotations

import pytest

from graphcalc import CanvasGeometry, CoordinateMapper, Viewport, ViewportController

try:
    from hypothesis import given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


BOUNDS = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
SPANS = st.floats(min_value=1e-3, max_value=1e6, allow_nan=False, allow_infinity=False)
SIZES = st.integers(min_value=1, max_value=4000)


@given(lo=BOUNDS, span=SPANS, width=SIZES, height=SIZES, t=st.floats(min_value=-2.0, max_value=3.0))
def test_x_round_trip_law(lo: float, span: float, width: int, height: int, t: float) -> None:
    """``to_domain_x(to_pixel_x(x))`` recovers ``x`` for any valid window."""
    mapper = CoordinateMapper(Viewport(lo, lo + span, -1.0, 1.0), CanvasGeometry(width, height))
    x = lo + t * span
    tol = 1e-9 * (abs(lo) + span + abs(x)) + 1e-12
    assert mapper.to_domain_x(mapper.to_pixel_x(x)) == pytest.approx(x, abs=tol)


@given(lo=BOUNDS, span=SPANS, width=SIZES, height=SIZES, t=st.floats(min_value=-2.0, max_value=3.0))
def test_y_round_trip_law(lo: float, span: float, width: int, height: int, t: float) -> None:
    mapper = CoordinateMapper(Viewport(-1.0, 1.0, lo, lo + span), CanvasGeometry(width, height))
    y = lo + t * span
    tol = 1e-9 * (abs(lo) + span + abs(y)) + 1e-12
    assert mapper.to_domain_y(mapper.to_pixel_y(y)) == pytest.approx(y, abs=tol)


@given(lo=BOUNDS, span=SPANS, ylo=BOUNDS, yspan=SPANS)
def test_zoom_preserves_ordering(lo: float, span: float, ylo: float, yspan: float) -> None:
    controller = ViewportController(Viewport(lo, lo + span, ylo, ylo + yspan))
    for _ in range(3):
        assert controller.zoom_in().is_valid
        assert controller.zoom_out().is_valid


@given(ops=st.lists(st.sampled_from(["in", "out", "edit"]), max_size=12), value=BOUNDS)
def test_reset_always_restores_default_window(ops: list[str], value: float) -> None:
    controller = ViewportController()
    for op in ops:
        if op == "in":
            controller.zoom_in()
        elif op == "out":
            controller.zoom_out()
        else:
            controller.set_bound("y_max", value)
    assert controller.reset() == Viewport(-10.0, 10.0, -10.0, 10.0)
