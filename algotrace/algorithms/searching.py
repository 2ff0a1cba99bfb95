"""Searching — linear scan and binary search for a target value."""

from __future__ import annotations

import logging

from ._base import BaseAlgorithm
from ..input_types import TargetInput
from ..render_types import RenderState
from ..step_types import Step, StepKind
from .. import constants

logger = logging.getLogger(__name__)


class SearchAlgorithm(BaseAlgorithm):
    """Common state for searches: the array, the target and the found index.

    A search ends with a RESULT step carrying the index of the target, or
    None when it is absent; a hit is announced by MATCH_FOUND first.
    """

    FAMILY = constants.FAMILY_SEARCH
    INPUT_TYPE = TargetInput

    def __init__(self):
        super().__init__()
        self._INTERPRET_DISPATCH[StepKind.MATCH_FOUND] = self._apply_match_found

    def initial_state(self, data: TargetInput) -> RenderState:
        return RenderState(data=list(data.values), aux={"target": data.target, "found": None})

    def _found(self, index: int, value: int) -> int:
        self._emit(
            StepKind.MATCH_FOUND,
            indices=(index,),
            value={"index": index},
            description=f"Found target {value} at index {index}",
        )
        self._emit(StepKind.RESULT, indices=(index,), value=index, description=f"Answer: {index}")
        return index

    def _not_found(self, target: int) -> None:
        self._emit(StepKind.RESULT, value=None, description=f"Target {target} not found")
        return None

    def _apply_match_found(self, step: Step, state: RenderState) -> None:
        state.aux["found"] = step.value["index"]
        state.highlight()
        state.mark_done(step.indices)


class LinearSearch(SearchAlgorithm):
    """Check every element left to right; the first occurrence wins."""

    ALGORITHM_ID = constants.LINEAR_SEARCH
    DISPLAY_NAME = "Linear Search"

    def _run(self, data: TargetInput) -> int | None:
        arr, target = list(data.values), data.target
        for i, value in enumerate(arr):
            if self._compare((i,), value, target, "==", f"Check index {i}: {value}"):
                return self._found(i, target)
        return self._not_found(target)


class BinarySearch(SearchAlgorithm):
    """Halve a sorted interval around the middle element.

    The values are searched (and shown) in ascending order, so a returned
    index refers to the sorted array.
    """

    ALGORITHM_ID = constants.BINARY_SEARCH
    DISPLAY_NAME = "Binary Search"

    def initial_state(self, data: TargetInput) -> RenderState:
        state = super().initial_state(data)
        state.data.sort()
        return state

    def _run(self, data: TargetInput) -> int | None:
        arr, target = sorted(data.values), data.target
        low, high = 0, len(arr) - 1
        while low <= high:
            mid = (low + high) // 2
            self._emit(
                StepKind.SET_VARIABLE,
                indices=range(low, high + 1),
                value={"low": low, "high": high, "mid": mid},
                description=f"Search indices {low} to {high}, middle index {mid}",
            )
            if self._compare((mid,), arr[mid], target, "=="):
                return self._found(mid, target)
            if self._compare(
                (mid,), arr[mid], target, "<",
                f"Middle element {arr[mid]} vs target {target}",
            ):
                low = mid + 1
            else:
                high = mid - 1
        logger.debug("Binary search for %d exhausted the interval", target)
        return self._not_found(target)
