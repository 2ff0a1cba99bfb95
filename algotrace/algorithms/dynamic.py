"""String dynamic programming — edit distance, LCS, longest palindromic substring.

Table fillers record one TABLE_WRITE per computed cell (the value and the
recurrence branch that produced it), then walk the chosen branches back from
the final cell toward the origin with BACKTRACK steps, then a RESULT step.
"""

from __future__ import annotations

import logging
from typing import Any

from ._base import BaseAlgorithm
from ..input_types import TextInput, TextPairInput
from ..render_types import RenderState
from ..step_types import Step, StepKind
from .. import constants

logger = logging.getLogger(__name__)

BRANCH_BASE = "base"
BRANCH_MATCH = "match"
BRANCH_SUBSTITUTE = "substitute"
BRANCH_INSERT = "insert"
BRANCH_DELETE = "delete"
BRANCH_SKIP_UP = "skip_up"
BRANCH_SKIP_LEFT = "skip_left"


class TableAlgorithm(BaseAlgorithm):
    """Shared driver for two-string dp tables of shape (len(source)+1, len(target)+1)."""

    FAMILY = constants.FAMILY_TEXT_PAIR
    INPUT_TYPE = TextPairInput
    SHORTHAND_FIELD = "source"

    def __init__(self):
        super().__init__()
        self._table: list[list[Any]] = []
        self._choices: list[list[str | None]] = []
        self._INTERPRET_DISPATCH.update(
            {
                StepKind.TABLE_WRITE: self._apply_table_write,
                StepKind.BACKTRACK: self._apply_backtrack,
            }
        )

    def parse_input(self, raw: Any) -> TextPairInput:
        if isinstance(raw, (list, tuple)) and len(raw) == 2:
            return TextPairInput(source=raw[0], target=raw[1])
        return super().parse_input(raw)

    def initial_state(self, data: TextPairInput) -> RenderState:
        rows, cols = len(data.source) + 1, len(data.target) + 1
        return RenderState(
            data=list(data.source),
            aux={
                "target": list(data.target),
                "table": [[None] * cols for _ in range(rows)],
                "choices": [[None] * cols for _ in range(rows)],
                "path": [],
            },
        )

    def _write_cell(self, i: int, j: int, value: int, branch: str, description: str) -> None:
        self._table[i][j] = value
        self._choices[i][j] = branch
        self._emit(
            StepKind.TABLE_WRITE,
            indices=(i, j),
            value={"value": value, "branch": branch},
            description=description,
        )

    def _reset_table(self, rows: int, cols: int) -> None:
        self._table = [[None] * cols for _ in range(rows)]
        self._choices = [[None] * cols for _ in range(rows)]

    def _emit_origin(self, value: dict) -> None:
        self._emit(StepKind.BACKTRACK, indices=(0, 0), value=value, description="Reached the origin")

    def _apply_table_write(self, step: Step, state: RenderState) -> None:
        i, j = step.indices
        state.aux["table"][i][j] = step.value["value"]
        state.aux["choices"][i][j] = step.value["branch"]
        state.highlight(active=step.indices)

    def _apply_backtrack(self, step: Step, state: RenderState) -> None:
        state.aux["path"].append(list(step.indices))
        state.highlight(active=step.indices)


class EditDistance(TableAlgorithm):
    """Levenshtein distance with unit costs.

    Ties between branches resolve in the order substitute, delete, insert,
    which fixes the reconstructed edit sequence.
    """

    ALGORITHM_ID = constants.EDIT_DISTANCE
    DISPLAY_NAME = "Edit Distance"

    def initial_state(self, data: TextPairInput) -> RenderState:
        state = super().initial_state(data)
        state.aux["edits"] = []
        return state

    def _run(self, data: TextPairInput) -> int:
        s, t = data.source, data.target
        m, n = len(s), len(t)
        self._reset_table(m + 1, n + 1)
        self._write_cell(0, 0, 0, BRANCH_BASE, "Empty prefix to empty prefix costs 0")
        for i in range(1, m + 1):
            self._write_cell(i, 0, i, BRANCH_DELETE, f"Delete {i} character(s) of '{s[:i]}'")
        for j in range(1, n + 1):
            self._write_cell(0, j, j, BRANCH_INSERT, f"Insert {j} character(s) of '{t[:j]}'")

        for i in range(1, m + 1):
            for j in range(1, n + 1):
                if s[i - 1] == t[j - 1]:
                    self._write_cell(
                        i, j, self._table[i - 1][j - 1], BRANCH_MATCH,
                        f"'{s[i - 1]}' matches, copy diagonal {self._table[i - 1][j - 1]}",
                    )
                    continue
                candidates = [
                    (self._table[i - 1][j - 1], BRANCH_SUBSTITUTE),
                    (self._table[i - 1][j], BRANCH_DELETE),
                    (self._table[i][j - 1], BRANCH_INSERT),
                ]
                best, branch = min(candidates, key=lambda c: c[0])
                self._write_cell(
                    i, j, best + 1, branch,
                    f"'{s[i - 1]}' vs '{t[j - 1]}': {branch} gives {best + 1}",
                )

        distance = self._table[m][n]
        self._backtrack(s, t)
        self._emit(
            StepKind.RESULT,
            indices=(m, n),
            value=distance,
            description=f"Minimum edit distance is {distance}",
        )
        return distance

    def _backtrack(self, s: str, t: str) -> None:
        i, j = len(s), len(t)
        while i > 0 or j > 0:
            branch = self._choices[i][j]
            if branch in (BRANCH_MATCH, BRANCH_SUBSTITUTE):
                edit = {"op": branch, "source": s[i - 1], "target": t[j - 1]}
            elif branch == BRANCH_DELETE:
                edit = {"op": branch, "source": s[i - 1], "target": None}
            else:
                edit = {"op": BRANCH_INSERT, "source": None, "target": t[j - 1]}
            self._emit(
                StepKind.BACKTRACK,
                indices=(i, j),
                value=edit,
                description=self._describe_edit(edit),
            )
            if branch in (BRANCH_MATCH, BRANCH_SUBSTITUTE):
                i, j = i - 1, j - 1
            elif branch == BRANCH_DELETE:
                i -= 1
            else:
                j -= 1
        self._emit_origin({"op": BRANCH_BASE, "source": None, "target": None})

    @staticmethod
    def _describe_edit(edit: dict) -> str:
        if edit["op"] == BRANCH_MATCH:
            return f"Keep '{edit['source']}'"
        if edit["op"] == BRANCH_SUBSTITUTE:
            return f"Substitute '{edit['source']}' with '{edit['target']}'"
        if edit["op"] == BRANCH_DELETE:
            return f"Delete '{edit['source']}'"
        return f"Insert '{edit['target']}'"

    def _apply_backtrack(self, step: Step, state: RenderState) -> None:
        super()._apply_backtrack(step, state)
        if step.value["op"] not in (BRANCH_MATCH, BRANCH_BASE):
            # walking backwards, so each edit goes in front
            state.aux["edits"].insert(0, dict(step.value))


class LongestCommonSubsequence(TableAlgorithm):
    """Classic LCS table; on ties the upper cell wins."""

    ALGORITHM_ID = constants.LONGEST_COMMON_SUBSEQUENCE
    DISPLAY_NAME = "Longest Common Subsequence"

    def initial_state(self, data: TextPairInput) -> RenderState:
        state = super().initial_state(data)
        state.aux["lcs"] = ""
        return state

    def _run(self, data: TextPairInput) -> str:
        s, t = data.source, data.target
        m, n = len(s), len(t)
        self._reset_table(m + 1, n + 1)
        for i in range(m + 1):
            self._write_cell(i, 0, 0, BRANCH_BASE, f"Row {i} starts at 0")
        for j in range(1, n + 1):
            self._write_cell(0, j, 0, BRANCH_BASE, f"Column {j} starts at 0")

        for i in range(1, m + 1):
            for j in range(1, n + 1):
                if s[i - 1] == t[j - 1]:
                    value = self._table[i - 1][j - 1] + 1
                    self._write_cell(
                        i, j, value, BRANCH_MATCH,
                        f"'{s[i - 1]}' matches, diagonal + 1 = {value}",
                    )
                elif self._table[i - 1][j] >= self._table[i][j - 1]:
                    self._write_cell(
                        i, j, self._table[i - 1][j], BRANCH_SKIP_UP,
                        f"'{s[i - 1]}' != '{t[j - 1]}', take the cell above",
                    )
                else:
                    self._write_cell(
                        i, j, self._table[i][j - 1], BRANCH_SKIP_LEFT,
                        f"'{s[i - 1]}' != '{t[j - 1]}', take the cell to the left",
                    )

        lcs = self._backtrack(s, t)
        self._emit(
            StepKind.RESULT,
            indices=(m, n),
            value=lcs,
            description=f"Longest common subsequence is '{lcs}' (length {len(lcs)})",
        )
        return lcs

    def _backtrack(self, s: str, t: str) -> str:
        i, j = len(s), len(t)
        chars: list[str] = []
        while i > 0 or j > 0:
            branch = self._choices[i][j]
            if i > 0 and j > 0 and branch == BRANCH_MATCH:
                chars.append(s[i - 1])
                description = f"'{s[i - 1]}' is part of the subsequence"
                value = {"op": BRANCH_MATCH, "char": s[i - 1]}
                move = (1, 1)
            elif j == 0 or (i > 0 and branch == BRANCH_SKIP_UP):
                description = f"Skip '{s[i - 1]}' of the first string"
                value = {"op": BRANCH_SKIP_UP, "char": None}
                move = (1, 0)
            else:
                description = f"Skip '{t[j - 1]}' of the second string"
                value = {"op": BRANCH_SKIP_LEFT, "char": None}
                move = (0, 1)
            self._emit(StepKind.BACKTRACK, indices=(i, j), value=value, description=description)
            i, j = i - move[0], j - move[1]
        self._emit_origin({"op": BRANCH_BASE, "char": None})
        return "".join(reversed(chars))

    def _apply_backtrack(self, step: Step, state: RenderState) -> None:
        super()._apply_backtrack(step, state)
        if step.value["op"] == BRANCH_MATCH:
            state.aux["lcs"] = step.value["char"] + state.aux["lcs"]


class LongestPalindromicSubstring(BaseAlgorithm):
    """Expand around each of the 2n-1 centres."""

    ALGORITHM_ID = constants.LONGEST_PALINDROMIC_SUBSTRING
    DISPLAY_NAME = "Longest Palindromic Substring"
    FAMILY = constants.FAMILY_TEXT
    INPUT_TYPE = TextInput
    SHORTHAND_FIELD = "text"

    def __init__(self):
        super().__init__()
        self._INTERPRET_DISPATCH[StepKind.MATCH_FOUND] = self._apply_match_found

    def initial_state(self, data: TextInput) -> RenderState:
        return RenderState(data=list(data.text), aux={"best": None})

    def _run(self, data: TextInput) -> str:
        text = data.text
        n = len(text)
        if n == 0:
            return ""
        best_start, best_len = 0, 1
        self._emit(
            StepKind.SET_VARIABLE,
            indices=(0,),
            value={"best_start": 0, "best_length": 1},
            description=f"'{text[0]}' is a palindrome of length 1",
        )
        for center in range(n):
            for left, right in ((center - 1, center + 1), (center, center + 1)):
                if right >= n or left < 0:
                    continue
                self._emit(
                    StepKind.MARK_ACTIVE,
                    indices=range(left + 1, right),
                    description=f"Expand around centre {(left + right) / 2:g}",
                )
                while left >= 0 and right < n and self._compare(
                    (left, right), text[left], text[right], "=="
                ):
                    left, right = left - 1, right + 1
                length = right - left - 1
                if length > best_len:
                    best_start, best_len = left + 1, length
                    self._emit(
                        StepKind.SET_VARIABLE,
                        indices=range(best_start, best_start + best_len),
                        value={"best_start": best_start, "best_length": best_len},
                        description=f"New longest palindrome '{text[best_start:best_start + best_len]}'",
                    )
        palindrome = text[best_start : best_start + best_len]
        self._emit(
            StepKind.MATCH_FOUND,
            indices=range(best_start, best_start + best_len),
            value={"start": best_start, "length": best_len},
            description=f"Longest palindromic substring is '{palindrome}'",
        )
        self._emit(StepKind.RESULT, value=palindrome, description=f"Answer: '{palindrome}'")
        logger.debug("Palindrome search over %d centres finished", 2 * n - 1)
        return palindrome

    def _apply_match_found(self, step: Step, state: RenderState) -> None:
        state.aux["best"] = dict(step.value)
        state.highlight()
        state.mark_done(step.indices)
