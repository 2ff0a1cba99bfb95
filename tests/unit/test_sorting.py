"""Tests for comparison and distribution sorts: traces, replay and edge cases."""

import pytest

from algotrace.algorithms import get_algorithm
from algotrace.input_types import ArrayInput
from algotrace.render import render, render_trace
from algotrace.step_types import StepKind

SORTING_ALGORITHMS = (
    "bubble_sort",
    "selection_sort",
    "insertion_sort",
    "shell_sort",
    "merge_sort",
    "quick_sort",
    "heap_sort",
    "counting_sort",
    "radix_sort",
    "bucket_sort",
)


def _kinds(trace):
    return [step.kind for step in trace.steps]


def _replay_origins(trace):
    """Follow each input position through the element-moving steps."""
    origins = list(range(len(trace.input.values)))
    for step in trace.steps:
        if step.kind == StepKind.SWAP:
            i, j = step.indices
            origins[i], origins[j] = origins[j], origins[i]
        elif step.kind == StepKind.SHIFT:
            src, dst = step.indices
            origins[dst] = origins[src]
        elif step.kind in (StepKind.PLACE, StepKind.INSERT, StepKind.BUCKET_COLLECT):
            (k,) = step.indices
            origins[k] = step.value["origin"]
    return origins


STABLE_ALGORITHMS = tuple(a for a in SORTING_ALGORITHMS if get_algorithm(a).STABLE)
DUPLICATE_HEAVY = [3, 1, 3, 2, 1, 3, 0, 2, 1]
DISTRIBUTION_SORTS = ("counting_sort", "radix_sort", "bucket_sort")
# steps that only move highlights or side channels, never array elements
ANNOTATION_KINDS = {
    StepKind.MARK_ACTIVE,
    StepKind.PASS_START,
    StepKind.SET_VARIABLE,
    StepKind.PIVOT,
}


class TestSortedResult:
    @pytest.mark.parametrize("algorithm_id", SORTING_ALGORITHMS)
    def test_scenario_sorts_and_marks_everything(self, algorithm_id):
        trace = get_algorithm(algorithm_id).generate([5, 3, 8, 1, 9])
        state = render_trace(trace)

        assert trace.result == [1, 3, 5, 8, 9]
        assert state.data == [1, 3, 5, 8, 9]
        assert sorted(state.done) == [0, 1, 2, 3, 4]

    @pytest.mark.parametrize("algorithm_id", SORTING_ALGORITHMS)
    def test_duplicates_and_reverse_order(self, algorithm_id):
        values = [9, 7, 7, 5, 3, 3, 1, 0]
        trace = get_algorithm(algorithm_id).generate(values)

        assert render_trace(trace).data == sorted(values)

    @pytest.mark.parametrize("algorithm_id", SORTING_ALGORITHMS)
    def test_input_is_not_mutated(self, algorithm_id):
        data = ArrayInput(values=[4, 2, 3])
        get_algorithm(algorithm_id).generate(data)
        assert data.values == [4, 2, 3]


class TestEdgeCases:
    @pytest.mark.parametrize("algorithm_id", SORTING_ALGORITHMS)
    def test_empty_input_has_no_steps(self, algorithm_id):
        trace = get_algorithm(algorithm_id).generate([])
        assert len(trace) == 0
        assert trace.result == []

    @pytest.mark.parametrize("algorithm_id", SORTING_ALGORITHMS)
    def test_single_element_is_marked_without_comparisons(self, algorithm_id):
        trace = get_algorithm(algorithm_id).generate([42])

        assert len(trace) == 1
        assert trace.steps[0].kind == StepKind.MARK_SORTED
        assert trace.steps[0].indices == (0,)
        assert render_trace(trace).done == [0]

    @pytest.mark.parametrize("algorithm_id", SORTING_ALGORITHMS)
    def test_all_equal_input_never_swaps(self, algorithm_id):
        trace = get_algorithm(algorithm_id).generate([4, 4, 4, 4])

        assert StepKind.SWAP not in _kinds(trace)
        assert render_trace(trace).data == [4, 4, 4, 4]


class TestComparisonPayloads:
    def test_bubble_sort_records_greater_than(self):
        trace = get_algorithm("bubble_sort").generate([3, 1, 2])
        ops = {s.value["op"] for s in trace.steps if s.kind == StepKind.COMPARE}
        assert ops == {">"}

    def test_merge_sort_records_less_or_equal(self):
        trace = get_algorithm("merge_sort").generate([3, 1, 2, 2])
        ops = {s.value["op"] for s in trace.steps if s.kind == StepKind.COMPARE}
        assert ops == {"<="}

    def test_compare_outcome_matches_operands(self):
        trace = get_algorithm("selection_sort").generate([5, 3, 8, 1, 9])
        for step in trace.steps:
            if step.kind == StepKind.COMPARE:
                assert step.value["outcome"] == (step.value["left"] < step.value["right"])

    def test_bubble_sort_early_exit_on_sorted_input(self):
        trace = get_algorithm("bubble_sort").generate([1, 2, 3, 4])
        compares = [s for s in trace.steps if s.kind == StepKind.COMPARE]
        assert len(compares) == 3
        assert trace.steps[-1].kind == StepKind.MARK_SORTED
        assert trace.steps[-1].indices == (0, 1, 2, 3)


class TestIntermediateStates:
    def test_swap_changes_data_compare_does_not(self):
        algorithm = get_algorithm("bubble_sort")
        trace = algorithm.generate([2, 1])
        # compare, swap, mark sorted ...
        assert trace.steps[0].kind == StepKind.COMPARE
        assert trace.steps[1].kind == StepKind.SWAP

        after_compare = render(algorithm, trace.input, trace.prefix(1))
        after_swap = render(algorithm, trace.input, trace.prefix(2))
        assert after_compare.data == [2, 1]
        assert after_compare.comparing == [0, 1]
        assert after_swap.data == [1, 2]

    def test_insertion_sort_tracks_key_while_shifting(self):
        algorithm = get_algorithm("insertion_sort")
        trace = algorithm.generate([3, 1])
        shift_index = next(i for i, s in enumerate(trace.steps) if s.kind == StepKind.SHIFT)

        state = render(algorithm, trace.input, trace.prefix(shift_index + 1))
        assert state.data == [3, 3]
        assert state.aux["key"] == 1

    def test_quick_sort_pivot_side_channel(self):
        algorithm = get_algorithm("quick_sort")
        trace = algorithm.generate([3, 1, 2])
        assert trace.steps[0].kind == StepKind.PIVOT

        state = render(algorithm, trace.input, trace.prefix(1))
        assert state.aux["pivot"] == 2
        assert state.active == [2]

    def test_shell_sort_reports_gaps(self):
        trace = get_algorithm("shell_sort").generate([9, 8, 7, 6, 5, 4, 3, 2])
        gaps = [s.value["gap"] for s in trace.steps if s.kind == StepKind.PASS_START]
        assert gaps == [4, 2, 1]

    def test_heap_sort_heap_size_shrinks(self):
        trace = get_algorithm("heap_sort").generate([4, 10, 3, 5, 1])
        sizes = [
            s.value["heap_size"] for s in trace.steps if s.kind == StepKind.SET_VARIABLE
        ]
        assert sizes == [5, 4, 3, 2, 1]


class TestElementOrder:
    @pytest.mark.parametrize("algorithm_id", SORTING_ALGORITHMS)
    def test_replayed_origins_match_final_values(self, algorithm_id):
        trace = get_algorithm(algorithm_id).generate(DUPLICATE_HEAVY)
        origins = _replay_origins(trace)

        assert sorted(origins) == list(range(len(DUPLICATE_HEAVY)))
        assert [DUPLICATE_HEAVY[o] for o in origins] == trace.result

    def test_stable_set(self):
        assert set(STABLE_ALGORITHMS) == {
            "bubble_sort",
            "insertion_sort",
            "merge_sort",
            "counting_sort",
            "radix_sort",
            "bucket_sort",
        }

    @pytest.mark.parametrize("algorithm_id", STABLE_ALGORITHMS)
    def test_stable_sorts_keep_equal_elements_in_input_order(self, algorithm_id):
        trace = get_algorithm(algorithm_id).generate(DUPLICATE_HEAVY)
        origins = _replay_origins(trace)

        for value in set(DUPLICATE_HEAVY):
            positions = [o for o in origins if DUPLICATE_HEAVY[o] == value]
            assert positions == sorted(positions)

    def test_writes_carry_value_and_origin(self):
        trace = get_algorithm("merge_sort").generate([2, 1])
        place = next(s for s in trace.steps if s.kind == StepKind.PLACE)
        assert place.value == {"value": 1, "origin": 1}


class TestAllEqualInput:
    @pytest.mark.parametrize(
        "algorithm_id", [a for a in SORTING_ALGORITHMS if a not in DISTRIBUTION_SORTS]
    )
    def test_comparison_sorts_move_nothing(self, algorithm_id):
        trace = get_algorithm(algorithm_id).generate([4, 4, 4, 4])
        kinds = set(_kinds(trace))

        assert StepKind.COMPARE in kinds
        assert not kinds & {StepKind.SWAP, StepKind.SHIFT, StepKind.INSERT, StepKind.PLACE}
        assert kinds <= {StepKind.COMPARE, StepKind.MARK_SORTED} | ANNOTATION_KINDS
