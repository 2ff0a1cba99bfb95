"""Comparison sorts — bubble, selection, insertion, shell, merge, quick, heap."""

from __future__ import annotations

from abc import abstractmethod

from ._base import BaseAlgorithm
from ..input_types import ArrayInput
from ..render_types import RenderState
from ..step_types import Step, StepKind
from .. import constants


class SortingAlgorithm(BaseAlgorithm):
    """Shared driver for in-place array sorts.

    Empty input records nothing; a single element is marked sorted without
    any comparison. ``STABLE`` documents whether equal elements keep their
    relative order.

    Alongside the values the driver tracks each slot's origin, the input
    position of the element it holds. Steps that write an element carry
    that origin, so the element order can be replayed from the trace alone.
    """

    FAMILY = constants.FAMILY_SORTING
    STABLE: bool = False

    def __init__(self):
        super().__init__()
        self._origins: list[int] = []
        self._INTERPRET_DISPATCH[StepKind.PASS_START] = self._apply_pass_start

    def _run(self, data: ArrayInput) -> list[int]:
        arr = list(data.values)
        self._origins = list(range(len(arr)))
        if not arr:
            return arr
        if len(arr) == 1:
            self._emit(
                StepKind.MARK_SORTED,
                indices=(0,),
                description="A single element is already sorted",
            )
            return arr
        self._sort(arr)
        return arr

    @abstractmethod
    def _sort(self, arr: list[int]) -> None: ...

    def _swap(self, arr: list, i: int, j: int, description: str = "") -> bool:
        swapped = super()._swap(arr, i, j, description)
        if swapped:
            self._origins[i], self._origins[j] = self._origins[j], self._origins[i]
        return swapped

    def _shift(self, arr: list[int], src: int, dst: int, description: str) -> None:
        arr[dst] = arr[src]
        self._origins[dst] = self._origins[src]
        self._emit(StepKind.SHIFT, indices=(src, dst), description=description)

    def _place(
        self,
        arr: list[int],
        k: int,
        value: int,
        origin: int,
        description: str,
        kind: StepKind = StepKind.PLACE,
    ) -> bool:
        """Write the element from input position *origin* to slot *k*; no-op writes are skipped."""
        if arr[k] == value and self._origins[k] == origin:
            return False
        arr[k] = value
        self._origins[k] = origin
        self._emit(
            kind,
            indices=(k,),
            value={"value": value, "origin": origin},
            description=description,
        )
        return True

    def _mark_all_sorted(self, n: int) -> None:
        self._emit(
            StepKind.MARK_SORTED,
            indices=range(n),
            description="The array is sorted",
        )

    def _apply_mark_active(self, step: Step, state: RenderState) -> None:
        super()._apply_mark_active(step, state)
        if isinstance(step.value, dict) and "key" in step.value:
            state.aux["key"] = step.value["key"]

    def _apply_pass_start(self, step: Step, state: RenderState) -> None:
        state.aux.update(step.value)
        state.highlight()


class BubbleSort(SortingAlgorithm):
    ALGORITHM_ID = constants.BUBBLE_SORT
    DISPLAY_NAME = "Bubble Sort"
    STABLE = True

    def _sort(self, arr: list[int]) -> None:
        n = len(arr)
        for i in range(n - 1):
            swapped = False
            last = n - 1 - i
            for j in range(last):
                if self._compare((j, j + 1), arr[j], arr[j + 1], ">"):
                    swapped = self._swap(arr, j, j + 1) or swapped
            if not swapped:
                self._emit(
                    StepKind.MARK_SORTED,
                    indices=range(last + 1),
                    description="No swaps in this pass, the rest is already sorted",
                )
                return
            self._emit(
                StepKind.MARK_SORTED,
                indices=(last,),
                description=f"{arr[last]} bubbled up to position {last}",
            )
        self._emit(
            StepKind.MARK_SORTED,
            indices=(0,),
            description=f"{arr[0]} is the smallest element",
        )


class SelectionSort(SortingAlgorithm):
    ALGORITHM_ID = constants.SELECTION_SORT
    DISPLAY_NAME = "Selection Sort"

    def _sort(self, arr: list[int]) -> None:
        n = len(arr)
        for i in range(n - 1):
            min_idx = i
            self._emit(
                StepKind.MARK_ACTIVE,
                indices=(i,),
                description=f"Find the minimum of positions {i}..{n - 1}",
            )
            for j in range(i + 1, n):
                if self._compare((j, min_idx), arr[j], arr[min_idx], "<"):
                    min_idx = j
                    self._emit(
                        StepKind.SET_VARIABLE,
                        indices=(j,),
                        value={"min_index": j},
                        description=f"New minimum {arr[j]} at position {j}",
                    )
            self._swap(arr, i, min_idx, f"Move minimum {arr[min_idx]} to position {i}")
            self._emit(
                StepKind.MARK_SORTED,
                indices=(i,),
                description=f"{arr[i]} is in its final position",
            )
        self._emit(
            StepKind.MARK_SORTED,
            indices=(n - 1,),
            description=f"{arr[n - 1]} is the largest element",
        )


class InsertionSort(SortingAlgorithm):
    ALGORITHM_ID = constants.INSERTION_SORT
    DISPLAY_NAME = "Insertion Sort"
    STABLE = True

    def _sort(self, arr: list[int]) -> None:
        n = len(arr)
        for i in range(1, n):
            key, key_origin = arr[i], self._origins[i]
            self._emit(
                StepKind.MARK_ACTIVE,
                indices=(i,),
                value={"key": key},
                description=f"Pick key {key} at position {i}",
            )
            j = i - 1
            while j >= 0 and self._compare((j,), arr[j], key, ">"):
                self._shift(arr, j, j + 1, f"Shift {arr[j]} right to position {j + 1}")
                j -= 1
            if j + 1 != i:
                self._place(
                    arr, j + 1, key, key_origin,
                    f"Insert key {key} at position {j + 1}", StepKind.INSERT,
                )
        self._mark_all_sorted(n)


class ShellSort(SortingAlgorithm):
    ALGORITHM_ID = constants.SHELL_SORT
    DISPLAY_NAME = "Shell Sort"

    def _sort(self, arr: list[int]) -> None:
        n = len(arr)
        gap = n // 2
        while gap > 0:
            self._emit(
                StepKind.PASS_START,
                value={"gap": gap},
                description=f"Gapped insertion sort with gap {gap}",
            )
            for i in range(gap, n):
                temp, temp_origin = arr[i], self._origins[i]
                self._emit(
                    StepKind.MARK_ACTIVE,
                    indices=(i,),
                    value={"key": temp},
                    description=f"Pick key {temp} at position {i}",
                )
                j = i
                while j >= gap and self._compare((j - gap,), arr[j - gap], temp, ">"):
                    self._shift(arr, j - gap, j, f"Shift {arr[j - gap]} from {j - gap} to {j}")
                    j -= gap
                if j != i:
                    self._place(
                        arr, j, temp, temp_origin,
                        f"Insert key {temp} at position {j}", StepKind.INSERT,
                    )
            gap //= 2
        self._mark_all_sorted(n)


class MergeSort(SortingAlgorithm):
    ALGORITHM_ID = constants.MERGE_SORT
    DISPLAY_NAME = "Merge Sort"
    STABLE = True

    def _sort(self, arr: list[int]) -> None:
        self._merge_sort(arr, 0, len(arr) - 1)
        self._mark_all_sorted(len(arr))

    def _merge_sort(self, arr: list[int], lo: int, hi: int) -> None:
        if lo >= hi:
            return
        mid = (lo + hi) // 2
        self._merge_sort(arr, lo, mid)
        self._merge_sort(arr, mid + 1, hi)
        self._merge(arr, lo, mid, hi)

    def _merge(self, arr: list[int], lo: int, mid: int, hi: int) -> None:
        self._emit(
            StepKind.MARK_ACTIVE,
            indices=range(lo, hi + 1),
            description=f"Merge [{lo}..{mid}] with [{mid + 1}..{hi}]",
        )
        left = list(zip(arr[lo : mid + 1], self._origins[lo : mid + 1]))
        right = list(zip(arr[mid + 1 : hi + 1], self._origins[mid + 1 : hi + 1]))
        i = j = 0
        k = lo
        while i < len(left) and j < len(right):
            # <= keeps the left run first on ties
            if self._compare((lo + i, mid + 1 + j), left[i][0], right[j][0], "<="):
                value, origin = left[i]
                i += 1
            else:
                value, origin = right[j]
                j += 1
            self._place(arr, k, value, origin, f"Write {value} to position {k}")
            k += 1
        for value, origin in left[i:] + right[j:]:
            self._place(arr, k, value, origin, f"Write {value} to position {k}")
            k += 1


class QuickSort(SortingAlgorithm):
    """Lomuto partition with the last element as pivot."""

    ALGORITHM_ID = constants.QUICK_SORT
    DISPLAY_NAME = "Quick Sort"

    def _sort(self, arr: list[int]) -> None:
        self._quick_sort(arr, 0, len(arr) - 1)

    def _quick_sort(self, arr: list[int], lo: int, hi: int) -> None:
        if lo > hi:
            return
        if lo == hi:
            self._emit(
                StepKind.MARK_SORTED,
                indices=(lo,),
                description=f"{arr[lo]} is alone in its partition",
            )
            return
        p = self._partition(arr, lo, hi)
        self._quick_sort(arr, lo, p - 1)
        self._quick_sort(arr, p + 1, hi)

    def _partition(self, arr: list[int], lo: int, hi: int) -> int:
        pivot = arr[hi]
        self._emit(
            StepKind.PIVOT,
            indices=(hi,),
            value=pivot,
            description=f"Partition [{lo}..{hi}] around pivot {pivot}",
        )
        i = lo - 1
        for j in range(lo, hi):
            if self._compare((j, hi), arr[j], pivot, "<"):
                i += 1
                self._swap(arr, i, j)
        self._swap(arr, i + 1, hi, f"Place pivot {pivot} at position {i + 1}")
        self._emit(
            StepKind.MARK_SORTED,
            indices=(i + 1,),
            description=f"Pivot {pivot} is in its final position",
        )
        return i + 1


class HeapSort(SortingAlgorithm):
    ALGORITHM_ID = constants.HEAP_SORT
    DISPLAY_NAME = "Heap Sort"

    def _sort(self, arr: list[int]) -> None:
        n = len(arr)
        self._emit(
            StepKind.SET_VARIABLE,
            value={"heap_size": n},
            description="Build a max heap",
        )
        for i in range(n // 2 - 1, -1, -1):
            self._sift_down(arr, n, i)
        for end in range(n - 1, 0, -1):
            self._swap(arr, 0, end, f"Move maximum {arr[0]} to position {end}")
            self._emit(
                StepKind.MARK_SORTED,
                indices=(end,),
                description=f"{arr[end]} is in its final position",
            )
            self._emit(
                StepKind.SET_VARIABLE,
                value={"heap_size": end},
                description=f"Heap shrinks to {end} elements",
            )
            self._sift_down(arr, end, 0)
        self._emit(
            StepKind.MARK_SORTED,
            indices=(0,),
            description=f"{arr[0]} is the smallest element",
        )

    def _sift_down(self, arr: list[int], size: int, root: int) -> None:
        while True:
            largest = root
            left = 2 * root + 1
            right = left + 1
            if left < size and self._compare((left, largest), arr[left], arr[largest], ">"):
                largest = left
            if right < size and self._compare((right, largest), arr[right], arr[largest], ">"):
                largest = right
            if largest == root:
                return
            self._swap(arr, root, largest, f"Sift {arr[root]} down to position {largest}")
            root = largest
