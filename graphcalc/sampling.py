"""Per-pixel-column curve sampling.

Purpose
-------
Turns one expression into the polyline segments that are visible for one
viewport/canvas pair. The algorithm takes one sample per pixel column:

1. For column ``i`` in ``0 .. W-1`` compute ``x = x_min + (i / W) * (x_max - x_min)``.
2. Evaluate the expression at ``x``.
3. If evaluation fails, or the pixel row falls outside ``[0, H]``, close the
   open segment (if any) and add no point.
4. Otherwise append ``(i, py)`` to the open segment, opening one if needed.
5. After the last column, emit the open segment if it is non-empty.

Breaks in step 3 are how singularities (``1/x`` at ``0``) and off-screen
excursions split a curve into independent strokes.

Important gotchas
-----------------
- Sampling is one point per column. A vertical asymptote can look cut short
  near the transition column. This is accepted.
- ``sample_segments`` is a generator with no state between calls; calling it
  again restarts from column ``0``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .coordinates import CanvasGeometry, CoordinateMapper
from .expression import ExpressionEvaluator, default_evaluator
from .viewport import Viewport

Point = tuple[float, float]


@dataclass(frozen=True)
class Segment:
    """One continuous stroke of pixel-space points for one function."""

    points: tuple[Point, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @property
    def first(self) -> Point:
        return self.points[0]

    @property
    def last(self) -> Point:
        return self.points[-1]

    @property
    def columns(self) -> tuple[int, ...]:
        """Pixel columns covered by this segment, in order."""
        return tuple(int(px) for px, _ in self.points)


class CurveSampler:
    """Sample expressions into visible :class:`Segment` polylines.

    Parameters
    ----------
    evaluator : ExpressionEvaluator, optional
        Evaluation backend. Defaults to the shared module-level evaluator.
    """

    def __init__(self, evaluator: Optional[ExpressionEvaluator] = None) -> None:
        self._evaluator = evaluator or default_evaluator()

    @property
    def evaluator(self) -> ExpressionEvaluator:
        return self._evaluator

    def iter_segments(
        self,
        expression: str,
        viewport: Viewport,
        geometry: CanvasGeometry,
    ) -> Iterator[Segment]:
        """Yield the visible segments of ``expression``.

        Validation runs first; an invalid expression yields nothing and is not
        sampled. Raises :class:`~graphcalc.viewport.InvalidViewport` before the
        first segment if the viewport is unusable.
        """
        mapper = CoordinateMapper(viewport, geometry)
        if not self._evaluator.validate(expression).ok:
            return
        yield from self.walk(expression, mapper)

    def walk(self, expression: str, mapper: CoordinateMapper) -> Iterator[Segment]:
        """Yield segments column by column; ``expression`` must already be valid."""
        height = mapper.geometry.height
        evaluate_at = self._evaluator.evaluate_at
        open_points: list[Point] = []

        for column in range(mapper.geometry.width):
            result = evaluate_at(expression, mapper.column_x(column))
            py = mapper.to_pixel_y(result.y) if result.ok else None
            if py is None or py < 0 or py > height:
                if open_points:
                    yield Segment(tuple(open_points))
                    open_points = []
                continue
            open_points.append((float(column), py))

        if open_points:
            yield Segment(tuple(open_points))

    def sample(
        self,
        expression: str,
        viewport: Viewport,
        geometry: CanvasGeometry,
    ) -> list[Segment]:
        """Return all segments of ``expression`` as a list."""
        return list(self.iter_segments(expression, viewport, geometry))


def sample_segments(
    expression: str,
    viewport: Viewport,
    geometry: CanvasGeometry,
    *,
    evaluator: Optional[ExpressionEvaluator] = None,
) -> Iterator[Segment]:
    """Module-level shortcut for :meth:`CurveSampler.iter_segments`."""
    return CurveSampler(evaluator).iter_segments(expression, viewport, geometry)


__all__ = ["CurveSampler", "Point", "Segment", "sample_segments"]
