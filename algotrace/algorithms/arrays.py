"""Array techniques — Kadane, monotonic deque, interval merge, two pointers, hashing, rotation."""

from __future__ import annotations

import logging
from typing import Any

from ._base import BaseAlgorithm
from ..input_types import (
    ArrayInput,
    IntervalInput,
    RotationInput,
    TargetInput,
    WindowInput,
)
from ..render_types import RenderState
from ..step_types import Step, StepKind
from .. import constants

logger = logging.getLogger(__name__)

DEQUE_FRONT = "front"
DEQUE_BACK = "back"


class MaximumSubarray(BaseAlgorithm):
    """Kadane's algorithm; the winning range ends up in ``done``."""

    ALGORITHM_ID = constants.MAXIMUM_SUBARRAY
    DISPLAY_NAME = "Maximum Subarray"
    FAMILY = constants.FAMILY_ARRAY

    def __init__(self):
        super().__init__()
        self._INTERPRET_DISPATCH[StepKind.MATCH_FOUND] = self._apply_match_found

    def _run(self, data: ArrayInput) -> int | None:
        arr = list(data.values)
        if not arr:
            return None
        current = best = arr[0]
        start = best_start = best_end = 0
        self._emit(
            StepKind.SET_VARIABLE,
            indices=(0,),
            value={
                "current_sum": current,
                "current_start": start,
                "best_sum": best,
                "best_start": best_start,
                "best_end": best_end,
            },
            description=f"Start with {arr[0]} as both current and best sum",
        )
        for i in range(1, len(arr)):
            extended = current + arr[i]
            if self._compare(
                (i,), extended, arr[i], "<",
                f"Extending gives {extended}, restarting gives {arr[i]}",
            ):
                current, start = arr[i], i
                description = f"Restart the subarray at index {i}"
            else:
                current = extended
                description = f"Extend the subarray to index {i}"
            self._emit(
                StepKind.SET_VARIABLE,
                indices=range(start, i + 1),
                value={"current_sum": current, "current_start": start},
                description=f"{description}, current sum {current}",
            )
            if current > best:
                best, best_start, best_end = current, start, i
                self._emit(
                    StepKind.SET_VARIABLE,
                    indices=range(best_start, best_end + 1),
                    value={"best_sum": best, "best_start": best_start, "best_end": best_end},
                    description=f"New best sum {best}",
                )
        self._emit(
            StepKind.MATCH_FOUND,
            indices=range(best_start, best_end + 1),
            value={"start": best_start, "end": best_end, "sum": best},
            description=f"Maximum subarray spans {best_start}..{best_end}",
        )
        self._emit(StepKind.RESULT, value=best, description=f"Maximum sum is {best}")
        return best

    def _apply_match_found(self, step: Step, state: RenderState) -> None:
        state.aux["best_range"] = [step.value["start"], step.value["end"]]
        state.highlight()
        state.mark_done(step.indices)


class SlidingWindowMaximum(BaseAlgorithm):
    """Monotonic deque of indices whose values decrease front to back."""

    ALGORITHM_ID = constants.SLIDING_WINDOW_MAXIMUM
    DISPLAY_NAME = "Sliding Window Maximum"
    FAMILY = constants.FAMILY_WINDOW
    INPUT_TYPE = WindowInput

    def __init__(self):
        super().__init__()
        self._INTERPRET_DISPATCH.update(
            {
                StepKind.DEQUE_PUSH: self._apply_deque_push,
                StepKind.DEQUE_POP: self._apply_deque_pop,
            }
        )

    def initial_state(self, data: WindowInput) -> RenderState:
        return RenderState(
            data=list(data.values),
            aux={"deque": [], "window": data.window},
            result=[],
        )

    def _run(self, data: WindowInput) -> list[int]:
        arr, k = list(data.values), data.window
        maxima: list[int] = []
        dq: list[int] = []
        for i in range(len(arr)):
            self._emit(
                StepKind.MARK_ACTIVE,
                indices=range(max(0, i - k + 1), i + 1),
                description=f"Window ends at index {i}",
            )
            while dq and dq[0] <= i - k:
                expired = dq.pop(0)
                self._emit(
                    StepKind.DEQUE_POP,
                    indices=(expired,),
                    value={"end": DEQUE_FRONT, "index": expired},
                    description=f"Index {expired} left the window",
                )
            while dq and self._compare((dq[-1], i), arr[dq[-1]], arr[i], "<="):
                dominated = dq.pop()
                self._emit(
                    StepKind.DEQUE_POP,
                    indices=(dominated,),
                    value={"end": DEQUE_BACK, "index": dominated},
                    description=f"{arr[dominated]} can never be a maximum again",
                )
            dq.append(i)
            self._emit(
                StepKind.DEQUE_PUSH,
                indices=(i,),
                value={"end": DEQUE_BACK, "index": i},
                description=f"Push index {i} (value {arr[i]})",
            )
            if i >= k - 1:
                maxima.append(arr[dq[0]])
                self._emit(
                    StepKind.EMIT,
                    indices=(dq[0],),
                    value=arr[dq[0]],
                    description=f"Maximum of window {i - k + 1}..{i} is {arr[dq[0]]}",
                )
        return maxima

    def _apply_deque_push(self, step: Step, state: RenderState) -> None:
        state.aux["deque"].append(step.value["index"])
        state.highlight(active=step.indices)

    def _apply_deque_pop(self, step: Step, state: RenderState) -> None:
        if step.value["end"] == DEQUE_FRONT:
            state.aux["deque"].pop(0)
        else:
            state.aux["deque"].pop()
        state.highlight(active=step.indices)


class MergeIntervals(BaseAlgorithm):
    """Sort by start (adjacent swaps, stable), then sweep and merge overlaps."""

    ALGORITHM_ID = constants.MERGE_INTERVALS
    DISPLAY_NAME = "Merge Intervals"
    FAMILY = constants.FAMILY_INTERVALS
    INPUT_TYPE = IntervalInput
    SHORTHAND_FIELD = "intervals"

    def __init__(self):
        super().__init__()
        self._INTERPRET_DISPATCH[StepKind.MERGE] = self._apply_merge

    def initial_state(self, data: IntervalInput) -> RenderState:
        return RenderState(data=[list(iv) for iv in data.intervals], result=[])

    def _run(self, data: IntervalInput) -> list[list[int]]:
        arr = [tuple(iv) for iv in data.intervals]
        if not arr:
            return []
        for i in range(1, len(arr)):
            j = i
            while j > 0 and self._compare((j - 1, j), arr[j - 1][0], arr[j][0], ">"):
                self._swap(arr, j - 1, j, f"Move interval {list(arr[j])} before {list(arr[j - 1])}")
                j -= 1
        self._emit(
            StepKind.MARK_ACTIVE,
            indices=range(len(arr)),
            description="Intervals are sorted by start",
        )

        merged = [list(arr[0])]
        self._emit(
            StepKind.EMIT,
            indices=(0,),
            value=list(arr[0]),
            description=f"Start with {list(arr[0])}",
        )
        for i in range(1, len(arr)):
            last = merged[-1]
            start, end = arr[i]
            if self._compare(
                (i,), start, last[1], "<=",
                f"{list(arr[i])} starts at {start}, last merged ends at {last[1]}",
            ):
                last[1] = max(last[1], end)
                self._emit(
                    StepKind.MERGE,
                    indices=(i,),
                    value={"interval": [start, end], "end": last[1]},
                    description=f"Overlap, merged interval becomes {last}",
                )
            else:
                merged.append([start, end])
                self._emit(
                    StepKind.EMIT,
                    indices=(i,),
                    value=[start, end],
                    description=f"No overlap, start a new interval {[start, end]}",
                )
        logger.debug("Merged %d intervals into %d", len(arr), len(merged))
        return merged

    def _apply_merge(self, step: Step, state: RenderState) -> None:
        state.result[-1][1] = step.value["end"]
        state.highlight(active=step.indices)


class TrappingRainWater(BaseAlgorithm):
    """Two pointers moving inward from the lower side."""

    ALGORITHM_ID = constants.TRAPPING_RAIN_WATER
    DISPLAY_NAME = "Trapping Rain Water"
    FAMILY = constants.FAMILY_HEIGHTS

    def __init__(self):
        super().__init__()
        self._INTERPRET_DISPATCH[StepKind.ACCUMULATE] = self._apply_accumulate

    def initial_state(self, data: ArrayInput) -> RenderState:
        return RenderState(
            data=list(data.values),
            aux={"water": [0] * len(data.values)},
            result=0,
        )

    def _run(self, data: ArrayInput) -> int:
        h = list(data.values)
        left, right = 0, len(h) - 1
        left_max = right_max = 0
        total = 0
        while left < right:
            if self._compare((left, right), h[left], h[right], "<"):
                if h[left] >= left_max:
                    left_max = h[left]
                    self._emit(
                        StepKind.SET_VARIABLE,
                        indices=(left,),
                        value={"left_max": left_max},
                        description=f"New left wall of height {left_max}",
                    )
                else:
                    total = self._trap(left, left_max - h[left], total)
                left += 1
            else:
                if h[right] >= right_max:
                    right_max = h[right]
                    self._emit(
                        StepKind.SET_VARIABLE,
                        indices=(right,),
                        value={"right_max": right_max},
                        description=f"New right wall of height {right_max}",
                    )
                else:
                    total = self._trap(right, right_max - h[right], total)
                right -= 1
        self._emit(StepKind.RESULT, value=total, description=f"{total} units of water are trapped")
        return total

    def _trap(self, index: int, amount: int, total: int) -> int:
        total += amount
        self._emit(
            StepKind.ACCUMULATE,
            indices=(index,),
            value={"amount": amount, "total": total},
            description=f"{amount} unit(s) of water above index {index}, total {total}",
        )
        return total

    def _apply_accumulate(self, step: Step, state: RenderState) -> None:
        (idx,) = step.indices
        state.aux["water"][idx] = step.value["amount"]
        state.result = step.value["total"]
        state.highlight(active=step.indices)


class TwoSum(BaseAlgorithm):
    """One pass with a value -> first index map."""

    ALGORITHM_ID = constants.TWO_SUM
    DISPLAY_NAME = "Two Sum"
    FAMILY = constants.FAMILY_TARGET
    INPUT_TYPE = TargetInput

    def __init__(self):
        super().__init__()
        self._INTERPRET_DISPATCH.update(
            {
                StepKind.MAP_PUT: self._apply_map_put,
                StepKind.MATCH_FOUND: self._apply_match_found,
            }
        )

    def initial_state(self, data: TargetInput) -> RenderState:
        return RenderState(data=list(data.values), aux={"seen": {}, "target": data.target})

    def _run(self, data: TargetInput) -> list[int] | None:
        arr, target = list(data.values), data.target
        seen: dict[int, int] = {}
        for i, value in enumerate(arr):
            need = target - value
            if self._compare(
                (i,), need, sorted(seen), "in",
                f"Look for complement {need} of {value}",
            ):
                pair = [seen[need], i]
                self._emit(
                    StepKind.MATCH_FOUND,
                    indices=pair,
                    value={"pair": pair, "sum": target},
                    description=f"{arr[pair[0]]} + {value} = {target}",
                )
                return pair
            if value not in seen:
                seen[value] = i
                self._emit(
                    StepKind.MAP_PUT,
                    indices=(i,),
                    value={"key": value, "index": i},
                    description=f"Remember {value} at index {i}",
                )
        self._emit(StepKind.RESULT, value=None, description=f"No pair sums to {target}")
        return None

    def _apply_map_put(self, step: Step, state: RenderState) -> None:
        state.aux["seen"][step.value["key"]] = step.value["index"]
        state.highlight(active=step.indices)

    def _apply_match_found(self, step: Step, state: RenderState) -> None:
        state.result = list(step.value["pair"])
        state.highlight()
        state.mark_done(step.indices)


class RotateArray(BaseAlgorithm):
    """Rotate right by ``steps`` using three in-place reversals."""

    ALGORITHM_ID = constants.ROTATE_ARRAY
    DISPLAY_NAME = "Rotate Array"
    FAMILY = constants.FAMILY_ROTATION
    INPUT_TYPE = RotationInput

    def _run(self, data: RotationInput) -> list[int]:
        arr = list(data.values)
        n = len(arr)
        if n == 0:
            return arr
        k = data.steps % n
        self._emit(
            StepKind.SET_VARIABLE,
            value={"k": k},
            description=f"Rotating by {data.steps} is the same as rotating by {k}",
        )
        if k:
            self._reverse(arr, 0, n - 1, "Reverse the whole array")
            self._reverse(arr, 0, k - 1, f"Reverse the first {k} element(s)")
            self._reverse(arr, k, n - 1, f"Reverse the last {n - k} element(s)")
        self._emit(
            StepKind.MARK_SORTED,
            indices=range(n),
            description="Rotation complete",
        )
        self._emit(StepKind.RESULT, value=list(arr), description=f"Rotated array is {arr}")
        return arr

    def _reverse(self, arr: list[Any], lo: int, hi: int, description: str) -> None:
        self._emit(StepKind.MARK_ACTIVE, indices=range(lo, hi + 1), description=description)
        while lo < hi:
            self._swap(arr, lo, hi)
            lo, hi = lo + 1, hi - 1
