"""Tests for compiler dialect line classification."""

import pytest

from instgraph_cli.dialects import (
    GCC,
    GCC_LEGACY,
    MSVC,
    UnknownDialectError,
    available_dialects,
    get_dialect,
)
from instgraph_cli.models import CommitPolicy, EventKind, ExitDepthPolicy


class TestMsvcDialect:
    """Tests for the msvc (enter-first) patterns."""

    def test_enter_extracts_location_text(self, msvc_enter):
        event = MSVC.classify(msvc_enter("c:/proj/a.cpp(10)"))
        assert event.kind is EventKind.ENTER
        assert event.fragment == "c:/proj/a.cpp(10)"

    def test_exit(self, msvc_exit):
        assert MSVC.classify(msvc_exit("a.cpp(10)")).kind is EventKind.EXIT

    def test_backtrace_frame(self):
        line = "        c:/proj/main.cpp(5) : see reference to class template instantiation 'vec<int>' being compiled"
        event = MSVC.classify(line)
        assert event.kind is EventKind.BACKTRACE
        assert event.fragment == "c:/proj/main.cpp(5)"

    def test_backtrace_needs_indentation(self):
        line = "c:/proj/main.cpp(5) : see reference to class template instantiation 'vec<int>'"
        assert MSVC.classify(line).kind is EventKind.UNMATCHED

    def test_trailing_newline_is_ignored(self, msvc_enter):
        assert MSVC.classify(msvc_enter("a.cpp(10)") + "\r\n").kind is EventKind.ENTER

    def test_unrelated_warning_is_unmatched(self):
        line = "a.cpp(10) : warning C4996: 'strcpy': This function or variable may be unsafe."
        assert MSVC.classify(line).kind is EventKind.UNMATCHED

    def test_split_file_and_line(self):
        assert MSVC.split_file_and_line("c:/proj/a.cpp(10)") == ("c:/proj/a.cpp", 10)

    def test_split_rejects_non_numeric_line(self):
        assert MSVC.split_file_and_line("a.cpp(ten)") is None
        assert MSVC.split_file_and_line("a.cpp") is None

    def test_policies(self):
        assert MSVC.commit_policy is CommitPolicy.DEFERRED
        assert MSVC.exit_depth_policy is ExitDepthPolicy.DECREMENT


class TestGccDialect:
    """Tests for the gcc (backtrace-first) patterns."""

    def test_enter_extracts_location_text(self, gcc_enter):
        event = GCC.classify(gcc_enter("/proj/a.cpp:10"))
        assert event.kind is EventKind.ENTER
        assert event.fragment == "/proj/a.cpp:10"

    def test_exit(self, gcc_exit):
        assert GCC.classify(gcc_exit("/proj/a.cpp:10")).kind is EventKind.EXIT

    def test_enter_with_other_warning_text(self):
        line = "a.cpp:3: warning: integer division by zero in 'static int template_profiler::enter(int)' [-Wdiv-by-zero]"
        assert GCC.classify(line).kind is EventKind.ENTER

    def test_backtrace_frame(self):
        event = GCC.classify("/proj/main.cpp:5:   instantiated from here")
        assert event.kind is EventKind.BACKTRACE
        assert event.fragment == "/proj/main.cpp:5"

    def test_split_file_and_line(self):
        assert GCC.split_file_and_line("/proj/a.cpp:10") == ("/proj/a.cpp", 10)
        assert GCC.split_file_and_line("/proj/a.cpp") is None

    def test_policies(self):
        assert GCC.commit_policy is CommitPolicy.EAGER
        assert GCC.exit_depth_policy is ExitDepthPolicy.RESET


class TestGccLegacyDialect:
    def test_enter_and_exit(self):
        enter = "a.cpp:3: warning: division by zero in `template_profiler::enter_value / 0'"
        exit_ = "a.cpp:3: warning: division by zero in `template_profiler::exit_value / 0'"
        assert GCC_LEGACY.classify(enter).kind is EventKind.ENTER
        assert GCC_LEGACY.classify(enter).fragment == "a.cpp:3"
        assert GCC_LEGACY.classify(exit_).kind is EventKind.EXIT

    def test_modern_gcc_line_is_unmatched(self, gcc_enter):
        assert GCC_LEGACY.classify(gcc_enter("a.cpp:3")).kind is EventKind.UNMATCHED


class TestDialectLookup:
    def test_lookup_by_name(self):
        assert get_dialect("msvc") is MSVC
        assert get_dialect("GCC") is GCC
        assert get_dialect("gcc-legacy") is GCC_LEGACY

    def test_aliases(self):
        assert get_dialect("clang") is GCC
        assert get_dialect("cl") is MSVC

    def test_unknown_dialect(self):
        with pytest.raises(UnknownDialectError, match="Known dialects"):
            get_dialect("borland")

    def test_unknown_dialect_is_value_error(self):
        with pytest.raises(ValueError):
            get_dialect("")

    def test_available_dialects(self):
        names = [d.name for d in available_dialects()]
        assert names == ["msvc", "gcc", "gcc-legacy"]
