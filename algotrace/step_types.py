"""Step vocabulary — one atomic, recorded algorithm event."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class StepKind(str, Enum):
    # Index classification only
    COMPARE = "COMPARE"
    MARK_ACTIVE = "MARK_ACTIVE"
    MARK_SORTED = "MARK_SORTED"
    PIVOT = "PIVOT"
    # Primary data movement
    SWAP = "SWAP"
    SHIFT = "SHIFT"
    INSERT = "INSERT"
    PLACE = "PLACE"
    # Distribution sorts
    PASS_START = "PASS_START"
    COUNT = "COUNT"
    BUCKET_ASSIGN = "BUCKET_ASSIGN"
    BUCKET_SORT = "BUCKET_SORT"
    BUCKET_COLLECT = "BUCKET_COLLECT"
    # Tables and string matching
    TABLE_WRITE = "TABLE_WRITE"
    BACKTRACK = "BACKTRACK"
    LPS_SHIFT = "LPS_SHIFT"
    MATCH_FOUND = "MATCH_FOUND"
    # Auxiliary structures
    DEQUE_PUSH = "DEQUE_PUSH"
    DEQUE_POP = "DEQUE_POP"
    SET_VARIABLE = "SET_VARIABLE"
    ACCUMULATE = "ACCUMULATE"
    MAP_PUT = "MAP_PUT"
    EMIT = "EMIT"
    MERGE = "MERGE"
    # Final answer
    RESULT = "RESULT"


class Step(BaseModel):
    """Immutable record of one state-changing operation.

    ``indices`` are positions in the primary structure (or table
    coordinates for dp steps); ``value`` carries everything else needed to
    reproduce the operation without looking at external state.
    """

    model_config = ConfigDict(frozen=True)

    kind: StepKind
    indices: tuple[int, ...] = ()
    value: Any = None
    description: str = ""

    def __str__(self) -> str:
        parts: list[str] = [self.kind.value.lower()]
        if self.indices:
            parts.append(str(list(self.indices)))
        if self.value is not None:
            parts.append(repr(self.value))
        base = " ".join(parts)
        if self.description:
            return f"{base}  # {self.description}"
        return base
