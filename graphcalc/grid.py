"""Axis and gridline planning.

Purely geometric: given a viewport and canvas, compute where the axes and the
integer gridlines fall in pixel space. No user expression is evaluated here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .coordinates import CanvasGeometry, CoordinateMapper
from .viewport import Viewport


@dataclass(frozen=True)
class GridLine:
    """One gridline: its integer domain value and pixel position."""

    value: int
    position: float


@dataclass(frozen=True)
class GridPlan:
    """Pixel layout of axes and gridlines for one redraw.

    Parameters
    ----------
    x_axis : float
        Pixel row of the x-axis (``y = 0``). May lie outside ``[0, H]``.
    y_axis : float
        Pixel column of the y-axis (``x = 0``). May lie outside ``[0, W]``.
    vertical : tuple[GridLine, ...]
        Gridlines at integer ``x`` values (pixel columns), zero excluded.
    horizontal : tuple[GridLine, ...]
        Gridlines at integer ``y`` values (pixel rows), zero excluded.
    geometry : CanvasGeometry
        Canvas the plan was computed for.
    """

    x_axis: float
    y_axis: float
    vertical: tuple[GridLine, ...]
    horizontal: tuple[GridLine, ...]
    geometry: CanvasGeometry

    @property
    def x_axis_visible(self) -> bool:
        return 0 <= self.x_axis <= self.geometry.height

    @property
    def y_axis_visible(self) -> bool:
        return 0 <= self.y_axis <= self.geometry.width


def integer_ticks(lo: float, hi: float) -> list[int]:
    """Return integers from ``ceil(lo)`` to ``floor(hi)`` inclusive, without zero."""
    return [v for v in range(math.ceil(lo), math.floor(hi) + 1) if v != 0]


def plan_grid(viewport: Viewport, geometry: CanvasGeometry) -> GridPlan:
    """Compute the :class:`GridPlan` for ``viewport`` on ``geometry``.

    Raises
    ------
    InvalidViewport
        If the viewport is degenerate, inverted or non-finite.
    """
    mapper = CoordinateMapper(viewport, geometry)
    return GridPlan(
        x_axis=mapper.to_pixel_y(0.0),
        y_axis=mapper.to_pixel_x(0.0),
        vertical=tuple(
            GridLine(value=v, position=mapper.to_pixel_x(v))
            for v in integer_ticks(viewport.x_min, viewport.x_max)
        ),
        horizontal=tuple(
            GridLine(value=v, position=mapper.to_pixel_y(v))
            for v in integer_ticks(viewport.y_min, viewport.y_max)
        ),
        geometry=geometry,
    )


__all__ = ["GridLine", "GridPlan", "integer_ticks", "plan_grid"]
