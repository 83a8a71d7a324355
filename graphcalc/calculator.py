"""Graphing-calculator facade.

Purpose
-------
``GraphingCalculator`` is the coordinator a UI layer talks to. It owns the
function list, the viewport controller, the canvas geometry and the plot
orchestrator, and exposes the user-level operations of a graphing calculator:
add/edit/remove functions, presets, zoom buttons, manual bound edits, reset
and redraw.

Architecture notes
------------------
The facade holds state; the heavy lifting is delegated:

- ``function_list.py`` for entry bookkeeping,
- ``viewport_controller.py`` for window operations,
- ``orchestrator.py`` for one redraw,
- ``sinks.py`` for drawing backends.

Redraws are explicit: call :meth:`GraphingCalculator.render` after changing
state (or wrap it in :class:`graphcalc.debouncing.RedrawDebouncer`).

Examples
--------
>>> from graphcalc import GraphingCalculator, RecordingSink
>>> calc = GraphingCalculator(width=500)
>>> sink = RecordingSink()
>>> result = calc.render(sink)
>>> len(result.segments["func-1"])
1
"""

from __future__ import annotations

from typing import Any, Optional, Union

from .coordinates import CanvasGeometry
from .defaults import DEFAULT_WIDTH
from .expression import ExpressionEvaluator
from .function_list import FunctionEntry, FunctionList
from .orchestrator import FunctionStatus, PlotOrchestrator, RedrawResult
from .sinks import RenderSink
from .viewport import Viewport
from .viewport_controller import ViewportController


class GraphingCalculator:
    """Stateful calculator model composed of the plotting components.

    Parameters
    ----------
    width : int, optional
        Canvas width in pixels; height is ``0.6 * width``.
    geometry : CanvasGeometry, optional
        Explicit geometry; overrides ``width``.
    sink : RenderSink, optional
        Default sink used by :meth:`render` when none is passed.
    evaluator : ExpressionEvaluator, optional
        Shared evaluation backend.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        *,
        geometry: Optional[CanvasGeometry] = None,
        sink: Optional[RenderSink] = None,
        evaluator: Optional[ExpressionEvaluator] = None,
    ) -> None:
        self._geometry = geometry or CanvasGeometry.from_width(width)
        self._functions = FunctionList()
        self._viewport = ViewportController()
        self._orchestrator = PlotOrchestrator(evaluator)
        self._sink = sink

    # --- state accessors -------------------------------------------------

    @property
    def geometry(self) -> CanvasGeometry:
        return self._geometry

    @property
    def viewport(self) -> Viewport:
        return self._viewport.viewport

    @property
    def functions(self) -> FunctionList:
        return self._functions

    @property
    def statuses(self) -> dict[str, FunctionStatus]:
        return self._orchestrator.statuses

    @property
    def errors(self) -> dict[str, str]:
        """Return ``{id: message}`` for functions whose last parse failed."""
        return self._orchestrator.errors

    # --- canvas ----------------------------------------------------------

    def resize(self, width: int) -> CanvasGeometry:
        """Resize the canvas to ``width`` keeping the 3:5 aspect."""
        self._geometry = CanvasGeometry.from_width(width)
        return self._geometry

    # --- functions -------------------------------------------------------

    def add_function(self, expression: str = "", *, color: Optional[str] = None) -> FunctionEntry:
        return self._functions.add(expression, color=color)

    def remove_function(self, function_id: str) -> FunctionEntry:
        """Remove an entry and forget its status."""
        entry = self._functions.remove(function_id)
        self._orchestrator.forget(function_id)
        return entry

    def update_expression(self, function_id: str, expression: str) -> FunctionEntry:
        return self._functions.update_expression(function_id, expression)

    def update_color(self, function_id: str, color: str) -> FunctionEntry:
        return self._functions.update_color(function_id, color)

    def toggle_visibility(self, function_id: str) -> FunctionEntry:
        return self._functions.toggle_visibility(function_id)

    def set_preset(self, expression: str) -> FunctionEntry:
        return self._functions.set_preset(expression)

    def add_custom_log(self, base: Union[int, float]) -> FunctionEntry:
        return self._functions.add_custom_log(base)

    # --- viewport --------------------------------------------------------

    def zoom_in(self) -> Viewport:
        return self._viewport.zoom_in()

    def zoom_out(self) -> Viewport:
        return self._viewport.zoom_out()

    def set_bound(self, which: str, value: Any) -> Viewport:
        return self._viewport.set_bound(which, value)

    def set_x_range(self, x_min: Any, x_max: Any) -> Viewport:
        return self._viewport.set_x_range(x_min, x_max)

    def set_y_range(self, y_min: Any, y_max: Any) -> Viewport:
        return self._viewport.set_y_range(y_min, y_max)

    def reset(self) -> None:
        """Restore the default window, the default function and clear all errors."""
        self._viewport.reset()
        self._functions.reset()
        self._orchestrator.clear()

    # --- rendering -------------------------------------------------------

    def render(self, sink: Optional[RenderSink] = None) -> RedrawResult:
        """Redraw every visible function into ``sink`` (or the default sink)."""
        return self._orchestrator.redraw(
            self._functions.snapshot(),
            self._viewport.viewport,
            self._geometry,
            sink if sink is not None else self._sink,
        )


__all__ = ["GraphingCalculator"]
