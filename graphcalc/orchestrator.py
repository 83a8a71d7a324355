"""Redraw orchestration.

Purpose
-------
Drives one redraw of the calculator surface: plan the axes and gridlines,
then for every visible function validate, sample and forward its segments to
the rendering sink. Per-function outcomes are recorded as
:class:`FunctionStatus` values keyed by function id.

Architecture notes
------------------
``PlotOrchestrator`` holds only the status map between redraws. Entries,
viewport and geometry are passed in on every call, so a redraw is a pure
function of its inputs plus the sink and status side effects. There is no
sample caching; each redraw resamples every visible function.

Important gotchas
-----------------
- Hidden entries are skipped entirely and keep whatever status they had.
- Visible entries with a blank expression draw nothing and have no status.
- Statuses of ids that are no longer in the snapshot are dropped.
- One function failing to parse never prevents the others from drawing.

Logging
-------
Uses a module logger with a ``NullHandler``; configure ``logging`` to see
``redraw(...)`` summaries at INFO and parse failures at DEBUG.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from .coordinates import CanvasGeometry, CoordinateMapper
from .expression import ExpressionEvaluator, default_evaluator
from .function_list import FunctionEntry
from .grid import GridPlan, plan_grid
from .sampling import CurveSampler, Segment
from .sinks import RenderSink
from .viewport import Viewport

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class FunctionStatus:
    """Outcome of the last redraw attempt for one function.

    Use :meth:`success` and :meth:`parse_failed` to build instances.
    """

    ok: bool
    message: Optional[str] = None

    @classmethod
    def success(cls) -> "FunctionStatus":
        return cls(ok=True)

    @classmethod
    def parse_failed(cls, message: str) -> "FunctionStatus":
        return cls(ok=False, message=message)

    @property
    def failed(self) -> bool:
        return not self.ok

    def __repr__(self) -> str:
        return "Ok" if self.ok else f"ParseFailed({self.message!r})"


@dataclass(frozen=True)
class RedrawResult:
    """Everything one redraw produced.

    Parameters
    ----------
    grid : GridPlan
        Axis and gridline layout.
    segments : Mapping[str, tuple[Segment, ...]]
        Segments per drawn function id (only ids that validated).
    statuses : Mapping[str, FunctionStatus]
        Status map after the redraw.
    """

    grid: GridPlan
    segments: Mapping[str, tuple[Segment, ...]] = field(default_factory=dict)
    statuses: Mapping[str, FunctionStatus] = field(default_factory=dict)

    @property
    def errors(self) -> dict[str, str]:
        return {fid: s.message or "" for fid, s in self.statuses.items() if s.failed}


class PlotOrchestrator:
    """Compose grid planning, validation and sampling for each redraw.

    Parameters
    ----------
    evaluator : ExpressionEvaluator, optional
        Evaluation backend shared with the sampler.
    """

    def __init__(self, evaluator: Optional[ExpressionEvaluator] = None) -> None:
        self._evaluator = evaluator or default_evaluator()
        self._sampler = CurveSampler(self._evaluator)
        self._statuses: dict[str, FunctionStatus] = {}

    @property
    def statuses(self) -> dict[str, FunctionStatus]:
        """Return a copy of the current status map."""
        return dict(self._statuses)

    def status(self, function_id: str) -> Optional[FunctionStatus]:
        return self._statuses.get(function_id)

    @property
    def errors(self) -> dict[str, str]:
        """Return ``{id: message}`` for every function whose last parse failed."""
        return {fid: s.message or "" for fid, s in self._statuses.items() if s.failed}

    def forget(self, function_id: str) -> None:
        """Drop the status of a removed function (no-op if unknown)."""
        self._statuses.pop(function_id, None)

    def clear(self) -> None:
        self._statuses.clear()

    def redraw(
        self,
        entries: Sequence[FunctionEntry],
        viewport: Viewport,
        geometry: CanvasGeometry,
        sink: Optional[RenderSink] = None,
    ) -> RedrawResult:
        """Run one redraw.

        Raises
        ------
        InvalidViewport
            If ``viewport`` is degenerate or inverted; nothing is drawn and no
            status changes.
        """
        mapper = CoordinateMapper(viewport, geometry)
        grid = plan_grid(viewport, geometry)

        live_ids = {entry.id for entry in entries}
        for stale in [fid for fid in self._statuses if fid not in live_ids]:
            del self._statuses[stale]

        if sink is not None:
            sink.clear(geometry)
            self._draw_grid(grid, sink)

        segments: dict[str, tuple[Segment, ...]] = {}
        visible = 0
        for entry in entries:
            if not entry.is_visible:
                continue
            visible += 1
            if entry.is_blank:
                self._statuses.pop(entry.id, None)
                continue

            validation = self._evaluator.validate(entry.expression)
            if not validation.ok:
                logger.debug("function %s failed to parse: %s", entry.id, validation.message)
                self._statuses[entry.id] = FunctionStatus.parse_failed(validation.message)
                continue

            self._statuses[entry.id] = FunctionStatus.success()
            drawn = tuple(self._sampler.walk(entry.expression, mapper))
            if sink is not None:
                for segment in drawn:
                    sink.draw_polyline(segment.points, entry.color)
            segments[entry.id] = drawn

        logger.info(
            "redraw(functions=%d, visible=%d, failed=%d) viewport=%s",
            len(entries),
            visible,
            len(self.errors),
            viewport,
        )
        return RedrawResult(grid=grid, segments=segments, statuses=self.statuses)

    @staticmethod
    def _draw_grid(grid: GridPlan, sink: RenderSink) -> None:
        width = float(grid.geometry.width)
        height = float(grid.geometry.height)
        for line in grid.vertical:
            sink.draw_line((line.position, 0.0), (line.position, height), "grid")
        for line in grid.horizontal:
            sink.draw_line((0.0, line.position), (width, line.position), "grid")
        if grid.x_axis_visible:
            sink.draw_line((0.0, grid.x_axis), (width, grid.x_axis), "axis")
        if grid.y_axis_visible:
            sink.draw_line((grid.y_axis, 0.0), (grid.y_axis, height), "axis")


__all__ = ["FunctionStatus", "PlotOrchestrator", "RedrawResult"]
