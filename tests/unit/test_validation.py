"""Tests for boundary validation messages and model construction."""

import pytest

from algotrace.input_types import (
    ArrayInput,
    IntervalInput,
    PatternInput,
    TextPairInput,
    WindowInput,
)
from algotrace.validation import (
    ValidationError,
    parse_int_list,
    parse_intervals,
    validate_input,
)


class TestParseIntList:
    def test_commas_and_whitespace(self):
        assert parse_int_list("5, 3 8,1") == [5, 3, 8, 1]

    def test_negative_numbers(self):
        assert parse_int_list("-2,1,-3") == [-2, 1, -3]

    def test_empty(self):
        with pytest.raises(ValidationError, match="Please enter at least one number"):
            parse_int_list(" , ")

    def test_non_numeric_token(self):
        with pytest.raises(ValidationError, match="All values must be numbers"):
            parse_int_list("1, two, 3")

    def test_is_value_error(self):
        assert issubclass(ValidationError, ValueError)


class TestArrayFamilies:
    def test_sorting_from_text(self):
        assert validate_input("bubble_sort", {"values": "5,3,8"}) == ArrayInput(values=[5, 3, 8])

    def test_shorthand_list(self):
        assert validate_input("heap_sort", [1, 2]) == ArrayInput(values=[1, 2])

    def test_too_long(self):
        with pytest.raises(ValidationError, match="Array length must be between 1 and 20"):
            validate_input("bubble_sort", list(range(21)))

    def test_value_out_of_range(self):
        with pytest.raises(ValidationError, match="Values must be between 0 and 999"):
            validate_input("counting_sort", [1, 1000])

    def test_negative_values_rejected_for_sorting(self):
        with pytest.raises(ValidationError, match="Values must be between 0 and 999"):
            validate_input("radix_sort", [-1, 3])

    def test_signed_values_allowed_for_kadane(self):
        assert validate_input("maximum_subarray", "-2,1,-3").values == [-2, 1, -3]

    def test_non_numeric_list_element(self):
        with pytest.raises(ValidationError, match="All values must be numbers"):
            validate_input("bubble_sort", [1, "x"])

    def test_missing_values(self):
        with pytest.raises(ValidationError, match="Please enter at least one number"):
            validate_input("bubble_sort", {})

    def test_window(self):
        model = validate_input("sliding_window_maximum", {"values": "1,2,3", "window": "2"})
        assert model == WindowInput(values=[1, 2, 3], window=2)

    @pytest.mark.parametrize("window", [0, 4])
    def test_window_out_of_range(self, window):
        with pytest.raises(ValidationError, match="Window size must be between 1 and 3"):
            validate_input("sliding_window_maximum", {"values": [1, 2, 3], "window": window})

    def test_two_sum_needs_two_values(self):
        with pytest.raises(ValidationError, match="Array length must be between 2 and 20"):
            validate_input("two_sum", {"values": [1], "target": 2})

    def test_target_range(self):
        with pytest.raises(ValidationError, match="Target must be between -200 and 200"):
            validate_input("two_sum", {"values": [1, 2], "target": 500})

    def test_rotation_steps_must_be_number(self):
        with pytest.raises(ValidationError, match="Rotation steps must be a number"):
            validate_input("rotate_array", {"values": [1, 2], "steps": "many"})


class TestStrings:
    def test_empty_palindrome_text(self):
        with pytest.raises(ValidationError, match="Text must not be empty"):
            validate_input("longest_palindromic_substring", "")

    def test_edit_distance_allows_empty_strings(self):
        model = validate_input("edit_distance", {"source": "", "target": "abc"})
        assert model == TextPairInput(source="", target="abc")

    def test_string_too_long(self):
        with pytest.raises(ValidationError, match="First string must be at most 15 characters"):
            validate_input("longest_common_subsequence", {"source": "a" * 16, "target": "b"})

    def test_pattern_required(self):
        with pytest.raises(ValidationError, match="Pattern must not be empty"):
            validate_input("kmp_search", "AAAA")

    def test_pattern_too_long(self):
        with pytest.raises(ValidationError, match="Pattern must be at most 10 characters"):
            validate_input("kmp_search", {"text": "A" * 20, "pattern": "A" * 11})

    def test_pattern_input(self):
        model = validate_input("kmp_search", {"text": "AAAA", "pattern": "AA"})
        assert model == PatternInput(text="AAAA", pattern="AA")


class TestIntervals:
    def test_parse(self):
        assert parse_intervals("1,3; 2,6 ;8 10") == [(1, 3), (2, 6), (8, 10)]

    def test_parse_rejects_triples(self):
        with pytest.raises(ValidationError, match="must be a start,end pair"):
            parse_intervals("1,2,3")

    def test_start_after_end(self):
        with pytest.raises(ValidationError, match="starts after it ends"):
            validate_input("merge_intervals", "3,1")

    def test_model(self):
        model = validate_input("merge_intervals", {"intervals": "1,3; 2,6"})
        assert model == IntervalInput(intervals=[(1, 3), (2, 6)])

    def test_too_many(self):
        with pytest.raises(ValidationError, match="Number of intervals must be between 1 and 15"):
            validate_input("merge_intervals", [(i, i + 1) for i in range(16)])

    def test_empty(self):
        with pytest.raises(ValidationError, match="Please enter at least one interval"):
            validate_input("merge_intervals", " ; ")


class TestUnknownAlgorithm:
    def test_raises_value_error(self):
        with pytest.raises(ValueError, match="Unknown algorithm: bogo_sort"):
            validate_input("bogo_sort", [1])
