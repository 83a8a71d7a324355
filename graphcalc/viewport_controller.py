"""Viewport ownership and zoom/reset/edit policy.

This module centralizes every mutation of the domain window so the rest of the
engine can treat :class:`~graphcalc.viewport.Viewport` as read-only input. The
controller owns:

- the current window,
- fixed-factor zoom (each bound scaled independently, not around the center),
- reset to the default window,
- raw manual bound edits.

Manual edits are not auto-corrected. An edit that breaks ``min < max`` is
stored as given and surfaces as :class:`~graphcalc.viewport.InvalidViewport`
the next time the window is used.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .defaults import ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR
from .InputConvert import InputConvert
from .viewport import BOUND_NAMES, Viewport

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class ViewportController:
    """Own the current :class:`Viewport` and apply window operations."""

    def __init__(
        self,
        viewport: Optional[Viewport] = None,
        *,
        zoom_in_factor: float = ZOOM_IN_FACTOR,
        zoom_out_factor: float = ZOOM_OUT_FACTOR,
    ) -> None:
        if zoom_in_factor <= 0 or zoom_out_factor <= 0:
            raise ValueError("zoom factors must be > 0")
        self._viewport = viewport if viewport is not None else Viewport.default()
        self._zoom_in_factor = float(zoom_in_factor)
        self._zoom_out_factor = float(zoom_out_factor)

    @property
    def viewport(self) -> Viewport:
        """Return the current window."""
        return self._viewport

    @property
    def is_valid(self) -> bool:
        return self._viewport.is_valid

    def zoom_in(self) -> Viewport:
        """Scale every bound by the zoom-in factor (``0.8`` by default)."""
        return self._scale(self._zoom_in_factor)

    def zoom_out(self) -> Viewport:
        """Scale every bound by the zoom-out factor (``1.2`` by default)."""
        return self._scale(self._zoom_out_factor)

    def _scale(self, factor: float) -> Viewport:
        self._viewport = self._viewport.scaled(factor)
        logger.debug("viewport scaled by %s -> %s", factor, self._viewport)
        return self._viewport

    def reset(self) -> Viewport:
        """Restore the default window ``[-10, 10] x [-10, 10]``."""
        self._viewport = Viewport.default()
        return self._viewport

    def set_bound(self, which: str, value: Any) -> Viewport:
        """Store a raw edit of one bound.

        Parameters
        ----------
        which : str
            One of ``"x_min"``, ``"x_max"``, ``"y_min"``, ``"y_max"``.
        value : number or str
            New value; strings such as ``"-2*pi"`` are accepted.

        Raises
        ------
        KeyError
            If ``which`` is not a bound name.
        ValueError
            If ``value`` is not a finite real number.
        """
        if which not in BOUND_NAMES:
            raise KeyError(f"Unknown viewport bound: {which!r}")
        self._viewport = self._viewport.with_bound(which, InputConvert(value))
        if not self._viewport.is_valid:
            logger.debug("viewport edit left an invalid window: %s", self._viewport)
        return self._viewport

    def set_x_range(self, x_min: Any, x_max: Any) -> Viewport:
        """Set both horizontal bounds; neither is stored if either fails to convert."""
        lo, hi = InputConvert(x_min), InputConvert(x_max)
        self._viewport = self._viewport.with_bound("x_min", lo).with_bound("x_max", hi)
        return self._viewport

    def set_y_range(self, y_min: Any, y_max: Any) -> Viewport:
        """Set both vertical bounds; neither is stored if either fails to convert."""
        lo, hi = InputConvert(y_min), InputConvert(y_max)
        self._viewport = self._viewport.with_bound("y_min", lo).with_bound("y_max", hi)
        return self._viewport


__all__ = ["ViewportController"]
