from __future__ import annotations

import logging

import pytest

from graphcalc import (
    FunctionEntry,
    FunctionStatus,
    InvalidViewport,
    PlotOrchestrator,
    RecordingSink,
    Viewport,
)


def _entry(fid: str, expression: str, color: str = "#000", visible: bool = True) -> FunctionEntry:
    return FunctionEntry(id=fid, expression=expression, color=color, is_visible=visible)


def test_parse_failure_is_isolated_to_its_function(default_window, canvas) -> None:
    entries = (
        _entry("a", "x^2", "#0070f3"),
        _entry("b", "x+", "#ff0080"),
        _entry("c", "sin(x)", "#00cc88"),
    )
    sink = RecordingSink()
    result = PlotOrchestrator().redraw(entries, default_window, canvas, sink)

    assert result.statuses["a"] == FunctionStatus.success()
    assert result.statuses["c"].ok
    assert result.statuses["b"].failed
    assert result.statuses["b"].message
    assert set(result.errors) == {"b"}

    assert "b" not in result.segments
    assert len(result.segments["a"]) == 1
    assert sink.polylines_in("#ff0080") == []
    assert len(sink.polylines_in("#0070f3")) == 1
    assert len(sink.polylines_in("#00cc88")) == len(result.segments["c"]) >= 1


def test_segments_are_forwarded_with_entry_color(default_window, canvas) -> None:
    sink = RecordingSink()
    result = PlotOrchestrator().redraw((_entry("r", "1/x", "red"),), default_window, canvas, sink)

    assert len(sink.polylines) == 2
    assert all(call.color == "red" for call in sink.polylines)
    assert [call.points for call in sink.polylines] == [seg.points for seg in result.segments["r"]]


def test_grid_and_axes_are_drawn_before_curves(default_window, canvas) -> None:
    sink = RecordingSink()
    PlotOrchestrator().redraw((_entry("a", "x"),), default_window, canvas, sink)

    assert len(sink.lines_of("grid")) == 40
    axes = sink.lines_of("axis")
    assert len(axes) == 2
    assert axes[0].start == (0.0, 150.0) and axes[0].end == (500.0, 150.0)
    assert axes[1].start == (250.0, 0.0) and axes[1].end == (250.0, 300.0)
    assert sink.clears == 1


def test_off_screen_axes_are_not_drawn(canvas) -> None:
    sink = RecordingSink()
    PlotOrchestrator().redraw((), Viewport(1.0, 5.0, 1.0, 5.0), canvas, sink)

    assert sink.lines_of("axis") == []


def test_eval_failures_do_not_set_parse_failed(default_window, canvas) -> None:
    result = PlotOrchestrator().redraw(
        (_entry("log", "log(x, -1)"), _entry("sqrt", "sqrt(x)")), default_window, canvas
    )

    assert result.statuses["log"].ok
    assert result.statuses["sqrt"].ok
    assert result.errors == {}


def test_hidden_entries_keep_prior_status(default_window, canvas) -> None:
    orchestrator = PlotOrchestrator()
    orchestrator.redraw((_entry("a", "x+"),), default_window, canvas)
    assert orchestrator.status("a").failed

    sink = RecordingSink()
    result = orchestrator.redraw((_entry("a", "x^2", visible=False),), default_window, canvas, sink)
    assert orchestrator.status("a").failed
    assert "a" not in result.segments
    assert sink.polylines == []

    orchestrator.redraw((_entry("a", "x^2"),), default_window, canvas)
    assert orchestrator.status("a") == FunctionStatus.success()


def test_blank_entries_have_no_status_and_draw_nothing(default_window, canvas) -> None:
    orchestrator = PlotOrchestrator()
    orchestrator.redraw((_entry("a", "x+"),), default_window, canvas)

    sink = RecordingSink()
    result = orchestrator.redraw((_entry("a", "   "), _entry("b", "")), default_window, canvas, sink)

    assert result.statuses == {}
    assert result.segments == {}
    assert sink.polylines == []


def test_removed_entries_lose_their_status(default_window, canvas) -> None:
    orchestrator = PlotOrchestrator()
    orchestrator.redraw((_entry("a", "x+"), _entry("b", "x")), default_window, canvas)

    result = orchestrator.redraw((_entry("b", "x"),), default_window, canvas)
    assert set(result.statuses) == {"b"}

    orchestrator.forget("b")
    assert orchestrator.status("b") is None


def test_invalid_viewport_aborts_redraw_without_side_effects(canvas) -> None:
    orchestrator = PlotOrchestrator()
    orchestrator.redraw((_entry("a", "x+"),), Viewport.default(), canvas)
    before = orchestrator.statuses

    sink = RecordingSink()
    with pytest.raises(InvalidViewport):
        orchestrator.redraw((_entry("a", "x"),), Viewport(3.0, 1.0, -1.0, 1.0), canvas, sink)

    assert orchestrator.statuses == before
    assert sink.clears == 0


def test_redraw_is_idempotent(default_window, canvas) -> None:
    orchestrator = PlotOrchestrator()
    entries = (_entry("a", "tan(x)"), _entry("b", "x^3"))

    first = orchestrator.redraw(entries, default_window, canvas)
    second = orchestrator.redraw(entries, default_window, canvas)

    assert first.segments == second.segments
    assert first.statuses == second.statuses


def test_status_repr_reads_like_a_result() -> None:
    assert repr(FunctionStatus.success()) == "Ok"
    assert repr(FunctionStatus.parse_failed("bad")) == "ParseFailed('bad')"


def test_redraw_logs_summary(default_window, canvas, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="graphcalc.orchestrator"):
        PlotOrchestrator().redraw((_entry("a", "x"), _entry("b", "x+")), default_window, canvas)

    assert "redraw(functions=2, visible=2, failed=1)" in caplog.text
