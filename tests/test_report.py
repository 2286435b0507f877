"""Tests for text and console report rendering."""

import io

from rich.console import Console

from instgraph_cli.analyzer import analyze_lines
from instgraph_cli.report import format_flat_report, render_console, write_report


def test_flat_report_layout(msvc_enter):
    result = analyze_lines([msvc_enter("a.cpp(10)"), msvc_enter("a.cpp(10)")], "msvc", call_graph=False)
    lines = format_flat_report(result.frequency)
    assert lines[0] == "Total instantiations: 2"
    assert lines[1] == " Location     count      cum."
    assert lines[2] == "-" * 29
    assert lines[3] == "a.cpp(10)         2         2"


def test_write_report_with_call_graph(msvc_lines):
    result = analyze_lines(msvc_lines, "msvc")
    sink = io.StringIO()
    write_report(result, sink)
    text = sink.getvalue()

    assert text.startswith("Total instantiations: 5\n")
    assert "\nCall Graph\n\n" in text
    assert "c:/proj/vector.hpp(10) (2)\n  Parents:\n  Children:\n    c:/proj/alloc.hpp(20) (2/3)\n" in text
    assert "c:/proj/alloc.hpp(20) (3)\n  Parents:\n    c:/proj/vector.hpp(10) (2)\n  Children:\n" in text
    assert text.index("vector.hpp(10) (2)") < text.index("alloc.hpp(20) (3)")


def test_write_report_without_call_graph(msvc_lines):
    result = analyze_lines(msvc_lines, "msvc")
    sink = io.StringIO()
    write_report(result, sink, call_graph=False)
    assert "Call Graph" not in sink.getvalue()


def test_render_console(msvc_lines):
    result = analyze_lines(msvc_lines, "msvc")
    console = Console(file=io.StringIO(), width=200, color_system=None)
    render_console(result, console, top=5)
    output = console.file.getvalue()
    assert "Total instantiations: 5" in output
    assert "Instantiation sites" in output
    assert "Call graph" in output
    assert "c:/proj/alloc.hpp(20)" in output
    assert "(2/3)" in output
    assert "backtrace depth 3" in output


def test_render_console_empty():
    result = analyze_lines([], "msvc")
    console = Console(file=io.StringIO(), width=120, color_system=None)
    render_console(result, console)
    output = console.file.getvalue()
    assert "Total instantiations: 0" in output
    assert "Call graph" not in output
