"""Distribution sorts — counting, radix (LSD, base 10) and bucket sort."""

from __future__ import annotations

from .sorting import SortingAlgorithm
from ..input_types import ArrayInput
from ..render_types import RenderState
from ..step_types import Step, StepKind
from .. import constants


class DistributionSort(SortingAlgorithm):
    """Sorts that move values through an auxiliary structure instead of comparing."""

    STABLE = True

    def __init__(self):
        super().__init__()
        self._INTERPRET_DISPATCH.update(
            {
                StepKind.COUNT: self._apply_count,
                StepKind.BUCKET_ASSIGN: self._apply_bucket_assign,
                StepKind.BUCKET_SORT: self._apply_bucket_sort,
                StepKind.BUCKET_COLLECT: self._apply_bucket_collect,
            }
        )

    def _collect_one(self, arr: list[int], k: int, bucket: int, value: int, origin: int) -> None:
        arr[k] = value
        self._origins[k] = origin
        self._emit(
            StepKind.BUCKET_COLLECT,
            indices=(k,),
            value={"bucket": bucket, "value": value, "origin": origin},
            description=f"Take {value} from bucket {bucket} to position {k}",
        )

    def _apply_pass_start(self, step: Step, state: RenderState) -> None:
        payload = dict(step.value)
        state.aux["buckets"] = [[] for _ in range(payload.pop("bucket_count"))]
        state.aux.update(payload)
        state.highlight()

    def _apply_count(self, step: Step, state: RenderState) -> None:
        state.aux["counts"][step.value["slot"]] = step.value["count"]
        state.highlight(active=step.indices)

    def _apply_bucket_assign(self, step: Step, state: RenderState) -> None:
        state.aux["buckets"][step.value["bucket"]].append(step.value["value"])
        state.aux["active_bucket"] = step.value["bucket"]
        state.highlight(active=step.indices)

    def _apply_bucket_sort(self, step: Step, state: RenderState) -> None:
        state.aux["buckets"][step.value["bucket"]] = list(step.value["values"])
        state.aux["active_bucket"] = step.value["bucket"]
        state.highlight()

    def _apply_bucket_collect(self, step: Step, state: RenderState) -> None:
        (idx,) = step.indices
        state.aux["buckets"][step.value["bucket"]].pop(0)
        state.aux["active_bucket"] = step.value["bucket"]
        state.data[idx] = step.value["value"]
        state.highlight(active=step.indices)


class CountingSort(DistributionSort):
    ALGORITHM_ID = constants.COUNTING_SORT
    DISPLAY_NAME = "Counting Sort"

    def initial_state(self, data: ArrayInput) -> RenderState:
        state = super().initial_state(data)
        if data.values:
            lo, hi = min(data.values), max(data.values)
            state.aux["counts"] = [0] * (hi - lo + 1)
            state.aux["offset"] = lo
        else:
            state.aux["counts"] = []
            state.aux["offset"] = 0
        return state

    def _sort(self, arr: list[int]) -> None:
        lo, hi = min(arr), max(arr)
        counts = [0] * (hi - lo + 1)
        occurrences: list[list[int]] = [[] for _ in counts]
        for i, value in enumerate(arr):
            slot = value - lo
            counts[slot] += 1
            occurrences[slot].append(i)
            self._emit(
                StepKind.COUNT,
                indices=(i,),
                value={"slot": slot, "count": counts[slot]},
                description=f"Count {value}: seen {counts[slot]} time(s)",
            )
        k = 0
        # copies of a value are written back in input order
        for slot, origins in enumerate(occurrences):
            for origin in origins:
                value = slot + lo
                self._place(arr, k, value, origin, f"Write {value} to position {k}")
                counts[slot] -= 1
                self._emit(
                    StepKind.COUNT,
                    indices=(k,),
                    value={"slot": slot, "count": counts[slot]},
                    description=f"{counts[slot]} copies of {value} left",
                )
                self._emit(
                    StepKind.MARK_SORTED,
                    indices=(k,),
                    description=f"{value} is in its final position",
                )
                k += 1


class RadixSort(DistributionSort):
    ALGORITHM_ID = constants.RADIX_SORT
    DISPLAY_NAME = "Radix Sort"

    def initial_state(self, data: ArrayInput) -> RenderState:
        state = super().initial_state(data)
        state.aux["buckets"] = [[] for _ in range(constants.RADIX_BASE)]
        return state

    def _sort(self, arr: list[int]) -> None:
        digits = len(str(max(arr)))
        place = 1
        for digit in range(digits):
            self._emit(
                StepKind.PASS_START,
                value={
                    "bucket_count": constants.RADIX_BASE,
                    "digit": digit,
                    "place": place,
                },
                description=f"Distribute by digit {digit} (place value {place})",
            )
            buckets: list[list[tuple[int, int]]] = [[] for _ in range(constants.RADIX_BASE)]
            for i, value in enumerate(arr):
                bucket = (value // place) % constants.RADIX_BASE
                buckets[bucket].append((value, self._origins[i]))
                self._emit(
                    StepKind.BUCKET_ASSIGN,
                    indices=(i,),
                    value={"bucket": bucket, "value": value, "origin": self._origins[i]},
                    description=f"{value} has digit {bucket}, goes to bucket {bucket}",
                )
            self._collect(arr, buckets)
            place *= constants.RADIX_BASE
        self._mark_all_sorted(len(arr))

    def _collect(self, arr: list[int], buckets: list[list[tuple[int, int]]]) -> None:
        k = 0
        for bucket, contents in enumerate(buckets):
            for value, origin in contents:
                self._collect_one(arr, k, bucket, value, origin)
                k += 1


class BucketSort(DistributionSort):
    """One bucket per element over the value range; buckets sorted individually."""

    ALGORITHM_ID = constants.BUCKET_SORT
    DISPLAY_NAME = "Bucket Sort"

    def initial_state(self, data: ArrayInput) -> RenderState:
        state = super().initial_state(data)
        state.aux["buckets"] = [[] for _ in data.values]
        return state

    def _sort(self, arr: list[int]) -> None:
        n = len(arr)
        lo, hi = min(arr), max(arr)
        width = hi - lo + 1
        self._emit(
            StepKind.PASS_START,
            value={"bucket_count": n, "min": lo, "max": hi},
            description=f"Create {n} buckets over the range {lo}..{hi}",
        )
        buckets: list[list[tuple[int, int]]] = [[] for _ in range(n)]
        for i, value in enumerate(arr):
            bucket = (value - lo) * n // width
            buckets[bucket].append((value, self._origins[i]))
            self._emit(
                StepKind.BUCKET_ASSIGN,
                indices=(i,),
                value={"bucket": bucket, "value": value, "origin": self._origins[i]},
                description=f"{value} goes to bucket {bucket}",
            )
        for bucket, contents in enumerate(buckets):
            if len(contents) > 1:
                contents.sort(key=lambda item: item[0])
                values = [value for value, _ in contents]
                self._emit(
                    StepKind.BUCKET_SORT,
                    value={"bucket": bucket, "values": values},
                    description=f"Sort bucket {bucket}: {values}",
                )
        k = 0
        for bucket, contents in enumerate(buckets):
            for value, origin in contents:
                self._collect_one(arr, k, bucket, value, origin)
                self._emit(
                    StepKind.MARK_SORTED,
                    indices=(k,),
                    description=f"{value} is in its final position",
                )
                k += 1
