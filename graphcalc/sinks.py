"""Rendering sinks consumed by the plot orchestrator.

A sink is the boundary to the drawing backend. The engine only needs three
primitives:

- ``clear(geometry)`` at the start of a redraw,
- ``draw_line(start, end, kind)`` for axes (``kind="axis"``) and gridlines
  (``kind="grid"``),
- ``draw_polyline(points, color)`` for one curve segment.

Two implementations ship here: :class:`RecordingSink` keeps calls in memory,
and :class:`PlotlySink` builds a ``plotly.graph_objects.Figure`` in pixel
space.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Protocol, Sequence, runtime_checkable

import plotly.graph_objects as go

from .coordinates import CanvasGeometry
from .defaults import AXIS_COLOR, AXIS_WIDTH, CURVE_WIDTH, GRID_COLOR, GRID_WIDTH

LineKind = Literal["axis", "grid"]
PixelPoint = tuple[float, float]


@runtime_checkable
class RenderSink(Protocol):
    """Drawing primitives required by :class:`~graphcalc.orchestrator.PlotOrchestrator`."""

    def clear(self, geometry: CanvasGeometry) -> None: ...

    def draw_line(self, start: PixelPoint, end: PixelPoint, kind: LineKind) -> None: ...

    def draw_polyline(self, points: Sequence[PixelPoint], color: str) -> None: ...


@dataclass(frozen=True)
class LineCall:
    start: PixelPoint
    end: PixelPoint
    kind: LineKind


@dataclass(frozen=True)
class PolylineCall:
    points: tuple[PixelPoint, ...]
    color: str


@dataclass
class RecordingSink:
    """In-memory sink that records every drawing call."""

    geometry: Optional[CanvasGeometry] = None
    lines: list[LineCall] = field(default_factory=list)
    polylines: list[PolylineCall] = field(default_factory=list)
    clears: int = 0

    def clear(self, geometry: CanvasGeometry) -> None:
        self.geometry = geometry
        self.lines.clear()
        self.polylines.clear()
        self.clears += 1

    def draw_line(self, start: PixelPoint, end: PixelPoint, kind: LineKind) -> None:
        self.lines.append(LineCall(start=start, end=end, kind=kind))

    def draw_polyline(self, points: Sequence[PixelPoint], color: str) -> None:
        self.polylines.append(PolylineCall(points=tuple(points), color=color))

    def lines_of(self, kind: LineKind) -> list[LineCall]:
        return [line for line in self.lines if line.kind == kind]

    def polylines_in(self, color: str) -> list[PolylineCall]:
        return [poly for poly in self.polylines if poly.color == color]


class PlotlySink:
    """Build a Plotly figure from drawing calls.

    Axes and gridlines become layout shapes drawn below the data; each segment
    becomes one ``Scatter`` trace with ``mode="lines"``. The y axis is
    reversed so pixel rows grow downward as on a canvas.

    Examples
    --------
    >>> from graphcalc import GraphingCalculator, PlotlySink  # doctest: +SKIP
    >>> sink = PlotlySink()  # doctest: +SKIP
    >>> GraphingCalculator().render(sink)  # doctest: +SKIP
    >>> sink.figure.show()  # doctest: +SKIP
    """

    def __init__(
        self,
        *,
        axis_color: str = AXIS_COLOR,
        axis_width: float = AXIS_WIDTH,
        grid_color: str = GRID_COLOR,
        grid_width: float = GRID_WIDTH,
        curve_width: float = CURVE_WIDTH,
    ) -> None:
        self._styles = {
            "axis": dict(color=axis_color, width=axis_width),
            "grid": dict(color=grid_color, width=grid_width),
        }
        self._curve_width = curve_width
        self._figure = go.Figure()

    @property
    def figure(self) -> go.Figure:
        return self._figure

    def clear(self, geometry: CanvasGeometry) -> None:
        fig = go.Figure()
        fig.update_layout(
            width=geometry.width,
            height=geometry.height,
            margin=dict(l=0, r=0, t=0, b=0),
            showlegend=False,
            plot_bgcolor="white",
        )
        fig.update_xaxes(range=[0, geometry.width], visible=False)
        fig.update_yaxes(range=[geometry.height, 0], visible=False)
        self._figure = fig

    def draw_line(self, start: PixelPoint, end: PixelPoint, kind: LineKind) -> None:
        self._figure.add_shape(
            type="line",
            x0=start[0],
            y0=start[1],
            x1=end[0],
            y1=end[1],
            line=self._styles[kind],
            layer="below",
        )

    def draw_polyline(self, points: Sequence[PixelPoint], color: str) -> None:
        self._figure.add_trace(
            go.Scatter(
                x=[p[0] for p in points],
                y=[p[1] for p in points],
                mode="lines",
                line=dict(color=color, width=self._curve_width),
                hoverinfo="skip",
            )
        )


__all__ = [
    "LineCall",
    "LineKind",
    "PixelPoint",
    "PlotlySink",
    "PolylineCall",
    "RecordingSink",
    "RenderSink",
]
