"""Algorithm input models (pure data, no validation of bounds)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _Input(BaseModel):
    model_config = ConfigDict(frozen=True)


class ArrayInput(_Input):
    values: list[int] = []


class WindowInput(_Input):
    values: list[int] = []
    window: int = 1


class TargetInput(_Input):
    values: list[int] = []
    target: int = 0


class RotationInput(_Input):
    values: list[int] = []
    steps: int = 0


class IntervalInput(_Input):
    intervals: list[tuple[int, int]] = []


class TextInput(_Input):
    text: str = ""


class TextPairInput(_Input):
    source: str = ""
    target: str = ""


class PatternInput(_Input):
    text: str = ""
    pattern: str = ""
