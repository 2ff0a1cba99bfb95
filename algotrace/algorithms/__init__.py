"""Traced algorithm implementations (generator + step interpreter per algorithm)."""

from __future__ import annotations

from ._base import BaseAlgorithm
from .sorting import BubbleSort

# Lazy imports to avoid loading every algorithm family at startup
_ALGORITHM_CLASSES: dict[str, str] = {
    "bubble_sort": "sorting.BubbleSort",
    "selection_sort": "sorting.SelectionSort",
    "insertion_sort": "sorting.InsertionSort",
    "shell_sort": "sorting.ShellSort",
    "merge_sort": "sorting.MergeSort",
    "quick_sort": "sorting.QuickSort",
    "heap_sort": "sorting.HeapSort",
    "counting_sort": "distribution.CountingSort",
    "radix_sort": "distribution.RadixSort",
    "bucket_sort": "distribution.BucketSort",
    "edit_distance": "dynamic.EditDistance",
    "longest_common_subsequence": "dynamic.LongestCommonSubsequence",
    "longest_palindromic_substring": "dynamic.LongestPalindromicSubstring",
    "kmp_search": "matching.KMPSearch",
    "maximum_subarray": "arrays.MaximumSubarray",
    "sliding_window_maximum": "arrays.SlidingWindowMaximum",
    "merge_intervals": "arrays.MergeIntervals",
    "trapping_rain_water": "arrays.TrappingRainWater",
    "two_sum": "arrays.TwoSum",
    "rotate_array": "arrays.RotateArray",
    "linear_search": "searching.LinearSearch",
    "binary_search": "searching.BinarySearch",
}


def get_algorithm(algorithm_id: str) -> BaseAlgorithm:
    """Instantiate the traced algorithm registered under *algorithm_id*.

    Raises ``ValueError`` if *algorithm_id* is not registered.
    """
    location = _ALGORITHM_CLASSES.get(algorithm_id)
    if location is None:
        raise ValueError(f"Unknown algorithm: {algorithm_id}")
    module_name, class_name = location.split(".")
    import importlib

    mod = importlib.import_module(f".{module_name}", package=__package__)
    cls = getattr(mod, class_name)
    return cls()


SUPPORTED_ALGORITHMS: tuple[str, ...] = tuple(_ALGORITHM_CLASSES.keys())

__all__ = [
    "BaseAlgorithm",
    "BubbleSort",
    "get_algorithm",
    "SUPPORTED_ALGORITHMS",
]
