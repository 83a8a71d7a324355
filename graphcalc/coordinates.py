"""Affine mapping between the domain window and the pixel surface.

``CoordinateMapper`` is a pure transform built from one :class:`Viewport` and
one :class:`CanvasGeometry`. Domain ``y`` grows upward while pixel ``y`` grows
downward, so the vertical map is flipped.

Examples
--------
>>> from graphcalc.viewport import Viewport
>>> mapper = CoordinateMapper(Viewport.default(), CanvasGeometry(500, 300))
>>> mapper.to_pixel_x(0.0)
250.0
>>> mapper.to_pixel_y(10.0)
0.0
"""

from __future__ import annotations

from dataclasses import dataclass

from .defaults import CANVAS_ASPECT
from .viewport import Viewport


@dataclass(frozen=True)
class CanvasGeometry:
    """Pixel size of the drawing surface.

    Parameters
    ----------
    width : int
        Pixel width ``W`` (positive).
    height : int
        Pixel height ``H`` (positive).
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"CanvasGeometry.{name} must be an int, got {value!r}")
            if value <= 0:
                raise ValueError(f"CanvasGeometry.{name} must be > 0, got {value}")

    @classmethod
    def from_width(cls, width: int, *, aspect: float = CANVAS_ASPECT) -> "CanvasGeometry":
        """Build a geometry whose height is ``int(aspect * width)`` (at least 1)."""
        return cls(width=int(width), height=max(1, int(width * aspect)))


class CoordinateMapper:
    """Map domain coordinates to pixel coordinates and back.

    Raises
    ------
    InvalidViewport
        On construction, if the viewport is degenerate, inverted or non-finite.
    """

    __slots__ = ("_viewport", "_geometry")

    def __init__(self, viewport: Viewport, geometry: CanvasGeometry) -> None:
        self._viewport = viewport.require_valid()
        self._geometry = geometry

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def geometry(self) -> CanvasGeometry:
        return self._geometry

    def to_pixel_x(self, x: float) -> float:
        vp = self._viewport
        return self._geometry.width * (x - vp.x_min) / (vp.x_max - vp.x_min)

    def to_pixel_y(self, y: float) -> float:
        vp = self._viewport
        return self._geometry.height * (vp.y_max - y) / (vp.y_max - vp.y_min)

    def to_domain_x(self, px: float) -> float:
        vp = self._viewport
        return vp.x_min + (px / self._geometry.width) * (vp.x_max - vp.x_min)

    def to_domain_y(self, py: float) -> float:
        vp = self._viewport
        return vp.y_max - (py / self._geometry.height) * (vp.y_max - vp.y_min)

    def column_x(self, column: int) -> float:
        """Return the domain ``x`` sampled at pixel column ``column``."""
        return self.to_domain_x(float(column))

    def __repr__(self) -> str:
        return f"CoordinateMapper(viewport={self._viewport!r}, geometry={self._geometry!r})"


__all__ = ["CanvasGeometry", "CoordinateMapper"]
