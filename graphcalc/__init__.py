"""Top-level public API for the ``graphcalc`` package.

This module re-exports the plotting engine so callers can import from a single
namespace, for example:

>>> from graphcalc import GraphingCalculator, RecordingSink  # doctest: +SKIP

It exposes both the high-level calculator facade and the lower-level
building blocks (coordinate mapping, expression evaluation, sampling, grid
planning and viewport control) for custom front ends.
"""

from .calculator import GraphingCalculator
from .coordinates import CanvasGeometry, CoordinateMapper
from .debouncing import RedrawDebouncer
from .expression import (
    EvalFailure,
    Evaluated,
    ExpressionEvaluator,
    SyntaxFailure,
    ValidExpression,
    evaluate_at,
    validate,
)
from .function_list import FunctionEntry, FunctionList
from .grid import GridLine, GridPlan, plan_grid
from .numpify import NumpifiedFunction, numpify, numpify_cached
from .orchestrator import FunctionStatus, PlotOrchestrator, RedrawResult
from .sampling import CurveSampler, Segment, sample_segments
from .sinks import PlotlySink, RecordingSink, RenderSink
from .viewport import InvalidViewport, Viewport
from .viewport_controller import ViewportController

__all__ = [
    "CanvasGeometry",
    "CoordinateMapper",
    "CurveSampler",
    "EvalFailure",
    "Evaluated",
    "ExpressionEvaluator",
    "FunctionEntry",
    "FunctionList",
    "FunctionStatus",
    "GraphingCalculator",
    "GridLine",
    "GridPlan",
    "InvalidViewport",
    "NumpifiedFunction",
    "PlotOrchestrator",
    "PlotlySink",
    "RecordingSink",
    "RedrawDebouncer",
    "RedrawResult",
    "RenderSink",
    "Segment",
    "SyntaxFailure",
    "ValidExpression",
    "Viewport",
    "ViewportController",
    "evaluate_at",
    "numpify",
    "numpify_cached",
    "plan_grid",
    "sample_segments",
    "validate",
]
