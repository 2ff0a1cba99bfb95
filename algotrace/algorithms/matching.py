"""Knuth-Morris-Pratt search with a traced failure function."""

from __future__ import annotations

import logging
from typing import Any

from ._base import BaseAlgorithm
from ..input_types import PatternInput
from ..render_types import RenderState
from ..step_types import Step, StepKind
from .. import constants

logger = logging.getLogger(__name__)

SCOPE_PATTERN = "pattern"
SCOPE_TEXT = "text"


class KMPSearch(BaseAlgorithm):
    """Find every (possibly overlapping) occurrence of a pattern in a text.

    Phase one builds the LPS (longest proper prefix that is also a suffix)
    table; its steps carry ``scope="pattern"`` and index into the pattern, so
    they highlight through ``aux["pattern_active"]`` and
    ``aux["pattern_comparing"]`` rather than the text channels.
    Phase two scans the text; its COMPARE steps index into the text and
    carry the pattern position being compared.
    """

    ALGORITHM_ID = constants.KMP_SEARCH
    DISPLAY_NAME = "KMP String Matching"
    FAMILY = constants.FAMILY_PATTERN
    INPUT_TYPE = PatternInput
    SHORTHAND_FIELD = "text"

    def __init__(self):
        super().__init__()
        self._INTERPRET_DISPATCH.update(
            {
                StepKind.TABLE_WRITE: self._apply_table_write,
                StepKind.LPS_SHIFT: self._apply_lps_shift,
                StepKind.MATCH_FOUND: self._apply_match_found,
            }
        )

    def parse_input(self, raw: Any) -> PatternInput:
        if isinstance(raw, (list, tuple)) and len(raw) == 2:
            return PatternInput(text=raw[0], pattern=raw[1])
        return super().parse_input(raw)

    def initial_state(self, data: PatternInput) -> RenderState:
        return RenderState(
            data=list(data.text),
            aux={
                "pattern": list(data.pattern),
                "lps": [0] * len(data.pattern),
                "pattern_index": 0,
                "pattern_active": [],
                "pattern_comparing": [],
                "offset": 0,
                "phase": "lps",
            },
            result=[],
        )

    # ── generation ───────────────────────────────────────────────

    def _run(self, data: PatternInput) -> list[int]:
        text, pattern = data.text, data.pattern
        if not text or not pattern:
            return []
        lps = self._build_lps(pattern)
        return self._search(text, pattern, lps)

    def _build_lps(self, pattern: str) -> list[int]:
        m = len(pattern)
        lps = [0] * m
        length = 0
        i = 1
        while i < m:
            if self._compare(
                (i, length), pattern[i], pattern[length], "==", scope=SCOPE_PATTERN,
            ):
                length += 1
                lps[i] = length
                self._emit(
                    StepKind.TABLE_WRITE,
                    indices=(i,),
                    value={"value": length, "scope": SCOPE_PATTERN},
                    description=f"lps[{i}] = {length}",
                )
                i += 1
            elif length != 0:
                previous = length
                length = lps[length - 1]
                self._emit(
                    StepKind.LPS_SHIFT,
                    indices=(i,),
                    value={"from": previous, "to": length, "scope": SCOPE_PATTERN},
                    description=f"Fall back from prefix length {previous} to {length}",
                )
            else:
                self._emit(
                    StepKind.TABLE_WRITE,
                    indices=(i,),
                    value={"value": 0, "scope": SCOPE_PATTERN},
                    description=f"lps[{i}] = 0",
                )
                i += 1
        return lps

    def _search(self, text: str, pattern: str, lps: list[int]) -> list[int]:
        n, m = len(text), len(pattern)
        matches: list[int] = []
        ti = pj = 0
        while ti < n:
            if self._compare(
                (ti,), text[ti], pattern[pj], "==",
                pattern_index=pj, scope=SCOPE_TEXT,
            ):
                ti += 1
                pj += 1
                if pj == m:
                    start = ti - m
                    matches.append(start)
                    pj = lps[pj - 1]
                    self._emit(
                        StepKind.MATCH_FOUND,
                        indices=range(start, start + m),
                        value={
                            "start": start,
                            "resume_text_index": ti,
                            "resume_pattern_index": pj,
                        },
                        description=f"Pattern found at index {start}",
                    )
            elif pj != 0:
                previous = pj
                pj = lps[pj - 1]
                self._emit(
                    StepKind.LPS_SHIFT,
                    indices=(ti,),
                    value={"from": previous, "to": pj, "scope": SCOPE_TEXT},
                    description=f"Mismatch, shift pattern so position {pj} faces text index {ti}",
                )
            else:
                ti += 1
        logger.debug("KMP found %d match(es) of %r", len(matches), pattern)
        return matches

    # ── replay ───────────────────────────────────────────────────

    @staticmethod
    def _highlight_pattern(state: RenderState, active=(), comparing=()) -> None:
        # pattern positions live in their own channels; data indexes the text
        state.highlight()
        state.aux["pattern_active"] = list(active)
        state.aux["pattern_comparing"] = list(comparing)

    def _apply_compare(self, step: Step, state: RenderState) -> None:
        if step.value["scope"] == SCOPE_PATTERN:
            self._highlight_pattern(state, comparing=step.indices)
            return
        super()._apply_compare(step, state)
        state.aux["phase"] = "search"
        pj = step.value["pattern_index"]
        state.aux["pattern_index"] = pj
        state.aux["offset"] = step.indices[0] - pj
        state.aux["pattern_active"] = []
        state.aux["pattern_comparing"] = [pj]

    def _apply_table_write(self, step: Step, state: RenderState) -> None:
        (i,) = step.indices
        state.aux["lps"][i] = step.value["value"]
        self._highlight_pattern(state, active=step.indices)

    def _apply_lps_shift(self, step: Step, state: RenderState) -> None:
        if step.value["scope"] == SCOPE_PATTERN:
            self._highlight_pattern(state, active=step.indices)
            return
        (ti,) = step.indices
        state.aux["pattern_index"] = step.value["to"]
        state.aux["offset"] = ti - step.value["to"]
        state.highlight(active=step.indices)
        state.aux["pattern_active"] = [step.value["to"]]
        state.aux["pattern_comparing"] = []

    def _apply_match_found(self, step: Step, state: RenderState) -> None:
        state.result.append(step.value["start"])
        state.aux["pattern_index"] = step.value["resume_pattern_index"]
        state.aux["offset"] = step.value["resume_text_index"] - step.value["resume_pattern_index"]
        self._highlight_pattern(state)
        state.mark_done(step.indices)
