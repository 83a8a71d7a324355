"""Domain-window model for the plotting engine.

Purpose
-------
Defines ``Viewport``, the rectangle of mathematical ``(x, y)`` space that is
currently visible, and ``InvalidViewport``, the fault raised whenever a
degenerate or inverted window reaches a component that needs it.

Notes
-----
``Viewport`` is frozen. Only :class:`graphcalc.viewport_controller.ViewportController`
produces new instances; every other component treats it as read-only input.
Construction does not validate ordering because manual bound edits are stored
verbatim and reported on next use (see :meth:`Viewport.require_valid`).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .defaults import DEFAULT_X_RANGE, DEFAULT_Y_RANGE

BOUND_NAMES: tuple[str, ...] = ("x_min", "x_max", "y_min", "y_max")


class InvalidViewport(ValueError):
    """Raised when a viewport violates ``x_min < x_max`` or ``y_min < y_max``."""


@dataclass(frozen=True)
class Viewport:
    """Immutable domain window.

    Parameters
    ----------
    x_min, x_max : float
        Horizontal domain bounds.
    y_min, y_max : float
        Vertical domain bounds.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @classmethod
    def default(cls) -> "Viewport":
        """Return the fixed default window ``[-10, 10] x [-10, 10]``."""
        return cls(
            x_min=float(DEFAULT_X_RANGE[0]),
            x_max=float(DEFAULT_X_RANGE[1]),
            y_min=float(DEFAULT_Y_RANGE[0]),
            y_max=float(DEFAULT_Y_RANGE[1]),
        )

    @property
    def x_range(self) -> tuple[float, float]:
        return (self.x_min, self.x_max)

    @property
    def y_range(self) -> tuple[float, float]:
        return (self.y_min, self.y_max)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def problems(self) -> list[str]:
        """Return human-readable invariant violations (empty when valid)."""
        issues: list[str] = []
        for name in BOUND_NAMES:
            value = getattr(self, name)
            if not math.isfinite(value):
                issues.append(f"{name}={value!r} is not finite")
        if not self.x_min < self.x_max:
            issues.append(f"x_min={self.x_min!r} must be < x_max={self.x_max!r}")
        if not self.y_min < self.y_max:
            issues.append(f"y_min={self.y_min!r} must be < y_max={self.y_max!r}")
        return issues

    @property
    def is_valid(self) -> bool:
        return not self.problems()

    def require_valid(self) -> "Viewport":
        """Return ``self`` or raise :class:`InvalidViewport`."""
        issues = self.problems()
        if issues:
            raise InvalidViewport("Invalid viewport: " + "; ".join(issues))
        return self

    def scaled(self, factor: float) -> "Viewport":
        """Return a copy with every bound multiplied by ``factor``."""
        return Viewport(
            x_min=self.x_min * factor,
            x_max=self.x_max * factor,
            y_min=self.y_min * factor,
            y_max=self.y_max * factor,
        )

    def with_bound(self, which: str, value: float) -> "Viewport":
        """Return a copy with one named bound replaced."""
        if which not in BOUND_NAMES:
            raise KeyError(f"Unknown viewport bound: {which!r}")
        return replace(self, **{which: float(value)})


__all__ = ["BOUND_NAMES", "InvalidViewport", "Viewport"]
