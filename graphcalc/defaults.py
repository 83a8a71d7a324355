"""Default constants shared by the plotting engine.

Everything the calculator hard-wires (initial window, zoom
factors, canvas aspect, preset colors and preset expressions) lives here so
that tests and callers can refer to one place. Constructors accept keyword
overrides where per-instance tuning makes sense.
"""

from __future__ import annotations

DEFAULT_X_RANGE: tuple[float, float] = (-10.0, 10.0)
DEFAULT_Y_RANGE: tuple[float, float] = (-10.0, 10.0)

ZOOM_IN_FACTOR = 0.8
ZOOM_OUT_FACTOR = 1.2

# Height is derived from width with a 3:5 aspect ratio.
CANVAS_ASPECT = 0.6
DEFAULT_WIDTH = 500

DEFAULT_FUNCTION_ID = "func-1"
DEFAULT_EXPRESSION = "x^2"

PRESET_COLORS: tuple[str, ...] = (
    "#0070f3",  # blue
    "#ff0080",  # pink
    "#00cc88",  # green
    "#f5a623",  # orange
    "#7928ca",  # purple
    "#ff4d4f",  # red
    "#00b8d9",  # cyan
    "#8c8c8c",  # gray
)

PRESET_EXPRESSIONS: tuple[str, ...] = (
    "x^2",
    "x^3",
    "sin(x)",
    "cos(x)",
    "tan(x)",
    "sqrt(x)",
    "abs(x)",
    "1/x",
    "log(x)",
    "log(x, 10)",
    "log(x, 2)",
)

AXIS_COLOR = "#666"
AXIS_WIDTH = 1.0
GRID_COLOR = "#ddd"
GRID_WIDTH = 0.5
CURVE_WIDTH = 2.0


__all__ = [
    "AXIS_COLOR",
    "AXIS_WIDTH",
    "CANVAS_ASPECT",
    "CURVE_WIDTH",
    "DEFAULT_EXPRESSION",
    "DEFAULT_FUNCTION_ID",
    "DEFAULT_WIDTH",
    "DEFAULT_X_RANGE",
    "DEFAULT_Y_RANGE",
    "GRID_COLOR",
    "GRID_WIDTH",
    "PRESET_COLORS",
    "PRESET_EXPRESSIONS",
    "ZOOM_IN_FACTOR",
    "ZOOM_OUT_FACTOR",
]
