"""Named constants — algorithm ids, families and input bounds."""

from __future__ import annotations

from dataclasses import dataclass

FAMILY_SORTING = "sorting"
FAMILY_ARRAY = "array"
FAMILY_HEIGHTS = "heights"
FAMILY_WINDOW = "window"
FAMILY_TARGET = "target"
FAMILY_SEARCH = "search"
FAMILY_ROTATION = "rotation"
FAMILY_INTERVALS = "intervals"
FAMILY_TEXT = "text"
FAMILY_TEXT_PAIR = "text_pair"
FAMILY_PATTERN = "pattern"

BUBBLE_SORT = "bubble_sort"
SELECTION_SORT = "selection_sort"
INSERTION_SORT = "insertion_sort"
SHELL_SORT = "shell_sort"
MERGE_SORT = "merge_sort"
QUICK_SORT = "quick_sort"
HEAP_SORT = "heap_sort"
COUNTING_SORT = "counting_sort"
RADIX_SORT = "radix_sort"
BUCKET_SORT = "bucket_sort"
EDIT_DISTANCE = "edit_distance"
LONGEST_COMMON_SUBSEQUENCE = "longest_common_subsequence"
LONGEST_PALINDROMIC_SUBSTRING = "longest_palindromic_substring"
KMP_SEARCH = "kmp_search"
MAXIMUM_SUBARRAY = "maximum_subarray"
SLIDING_WINDOW_MAXIMUM = "sliding_window_maximum"
MERGE_INTERVALS = "merge_intervals"
TRAPPING_RAIN_WATER = "trapping_rain_water"
TWO_SUM = "two_sum"
ROTATE_ARRAY = "rotate_array"
LINEAR_SEARCH = "linear_search"
BINARY_SEARCH = "binary_search"

RADIX_BASE = 10

DEFAULT_SPEED_MS = 500
MIN_SPEED_MS = 10
MAX_SPEED_MS = 5000


@dataclass(frozen=True)
class InputBounds:
    """Length and per-element bounds enforced at the validation boundary."""

    min_length: int
    max_length: int
    min_value: int = 0
    max_value: int = 0


ARRAY_BOUNDS: dict[str, InputBounds] = {
    FAMILY_SORTING: InputBounds(min_length=1, max_length=20, min_value=0, max_value=999),
    FAMILY_ARRAY: InputBounds(min_length=1, max_length=20, min_value=-100, max_value=100),
    FAMILY_HEIGHTS: InputBounds(min_length=1, max_length=20, min_value=0, max_value=100),
    FAMILY_WINDOW: InputBounds(min_length=1, max_length=20, min_value=-100, max_value=100),
    FAMILY_TARGET: InputBounds(min_length=2, max_length=20, min_value=-100, max_value=100),
    FAMILY_SEARCH: InputBounds(min_length=1, max_length=20, min_value=-100, max_value=100),
    FAMILY_ROTATION: InputBounds(min_length=1, max_length=20, min_value=-100, max_value=100),
    FAMILY_INTERVALS: InputBounds(min_length=1, max_length=15, min_value=0, max_value=100),
}

TEXT_BOUNDS: dict[str, InputBounds] = {
    FAMILY_TEXT: InputBounds(min_length=1, max_length=20),
    FAMILY_TEXT_PAIR: InputBounds(min_length=0, max_length=15),
}

SEARCH_TEXT_BOUNDS = InputBounds(min_length=1, max_length=40)
SEARCH_PATTERN_BOUNDS = InputBounds(min_length=1, max_length=10)

TARGET_RANGE: tuple[int, int] = (-200, 200)
ROTATION_RANGE: tuple[int, int] = (0, 100)
