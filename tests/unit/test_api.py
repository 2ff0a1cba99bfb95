"""Tests for the composable API functions."""

import pytest

from algotrace.api import dump_trace, generate_trace, prepare_input, render_at, trace_stats
from algotrace.input_types import ArrayInput
from algotrace.trace_types import Trace
from algotrace.validation import ValidationError


class TestGenerateTrace:
    def test_returns_trace(self):
        trace = generate_trace("bubble_sort", "5,3,8,1,9")
        assert isinstance(trace, Trace)
        assert trace.algorithm_id == "bubble_sort"
        assert trace.result == [1, 3, 5, 8, 9]

    def test_validates_by_default(self):
        with pytest.raises(ValidationError):
            generate_trace("bubble_sort", [1, 5000])

    def test_skip_validation(self):
        trace = generate_trace("bubble_sort", ArrayInput(values=[5000, 1]), validate=False)
        assert trace.result == [1, 5000]

    def test_prepare_input(self):
        assert prepare_input("insertion_sort", "2 1") == ArrayInput(values=[2, 1])


class TestRenderAt:
    def test_zero_steps_is_input(self):
        assert render_at("quick_sort", [3, 1, 2], 0).data == [3, 1, 2]

    def test_all_steps(self):
        state = render_at("edit_distance", {"source": "", "target": "abc"})
        assert state.result == 3


class TestDumpTrace:
    def test_one_line_per_step(self):
        dump = dump_trace("bubble_sort", [2, 1])
        lines = dump.splitlines()

        assert len(lines) == len(generate_trace("bubble_sort", [2, 1]))
        assert "compare [0, 1]" in lines[0]
        assert "  # " in lines[0]

    def test_lines_are_numbered(self):
        lines = dump_trace("selection_sort", [3, 2, 1]).splitlines()
        assert lines[0].split()[0] == "0"
        assert lines[-1].split()[0] == str(len(lines) - 1)


class TestTraceStats:
    def test_kinds_sum_to_total(self):
        stats = trace_stats("merge_sort", [4, 3, 2, 1])
        assert sum(stats["kinds"].values()) == stats["operations"]["total"]
        assert stats["result"] == [1, 2, 3, 4]

    def test_counts_comparisons(self):
        stats = trace_stats("bubble_sort", [1, 2, 3])
        assert stats["operations"]["comparisons"] == 2
        assert stats["operations"]["writes"] == 0
