"""Boundary validation — turn user-supplied values into algorithm input models.

Everything here runs before a trace is generated. Generators and the
playback controller assume their input already passed these checks.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from .algorithms import get_algorithm
from .input_types import (
    ArrayInput,
    IntervalInput,
    PatternInput,
    RotationInput,
    TargetInput,
    TextInput,
    TextPairInput,
    WindowInput,
)
from .constants import InputBounds
from . import constants

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Input rejected at the boundary; the message is meant for the end user."""


def _parse_int(token: Any, name: str = "Value") -> int:
    if isinstance(token, bool):
        raise ValidationError(f"{name} must be a number")
    if isinstance(token, int):
        return token
    try:
        return int(str(token).strip())
    except ValueError:
        raise ValidationError(f"{name} must be a number") from None


def parse_int_list(text: str) -> list[int]:
    """Parse comma- or whitespace-separated integers ("5, 3 8,1")."""
    tokens = [tok for tok in text.replace(",", " ").split() if tok]
    if not tokens:
        raise ValidationError("Please enter at least one number")
    values: list[int] = []
    for tok in tokens:
        try:
            values.append(int(tok))
        except ValueError:
            raise ValidationError("All values must be numbers") from None
    return values


def validate_array(values: Any, bounds: InputBounds) -> list[int]:
    if values is None:
        raise ValidationError("Please enter at least one number")
    if isinstance(values, str):
        values = parse_int_list(values)
    try:
        values = [_parse_int(v) for v in values]
    except ValidationError:
        raise ValidationError("All values must be numbers") from None
    if not bounds.min_length <= len(values) <= bounds.max_length:
        raise ValidationError(
            f"Array length must be between {bounds.min_length} and {bounds.max_length}"
        )
    if any(not bounds.min_value <= v <= bounds.max_value for v in values):
        raise ValidationError(
            f"Values must be between {bounds.min_value} and {bounds.max_value}"
        )
    return values


def validate_text(text: Any, bounds: InputBounds, name: str = "Text") -> str:
    text = "" if text is None else str(text)
    if not text and bounds.min_length > 0:
        raise ValidationError(f"{name} must not be empty")
    if len(text) > bounds.max_length:
        raise ValidationError(f"{name} must be at most {bounds.max_length} characters")
    return text


def validate_window(window: Any, length: int) -> int:
    window = _parse_int(window, "Window size")
    if not 1 <= window <= length:
        raise ValidationError(f"Window size must be between 1 and {length}")
    return window


def _validate_in_range(value: Any, bounds: tuple[int, int], name: str) -> int:
    value = _parse_int(value, name)
    lo, hi = bounds
    if not lo <= value <= hi:
        raise ValidationError(f"{name} must be between {lo} and {hi}")
    return value


def parse_intervals(text: str) -> list[tuple[int, int]]:
    """Parse "start,end" pairs separated by semicolons ("1,3; 2,6; 8,10")."""
    chunks = [chunk.strip() for chunk in text.split(";") if chunk.strip()]
    if not chunks:
        raise ValidationError("Please enter at least one interval")
    intervals: list[tuple[int, int]] = []
    for chunk in chunks:
        parts = [p for p in chunk.replace(",", " ").split() if p]
        if len(parts) != 2:
            raise ValidationError(f'Interval "{chunk}" must be a start,end pair')
        start, end = (_parse_int(p, "Interval bounds") for p in parts)
        intervals.append((start, end))
    return intervals


def validate_intervals(intervals: Any) -> list[tuple[int, int]]:
    bounds = constants.ARRAY_BOUNDS[constants.FAMILY_INTERVALS]
    if intervals is None:
        raise ValidationError("Please enter at least one interval")
    if isinstance(intervals, str):
        intervals = parse_intervals(intervals)
    pairs: list[tuple[int, int]] = []
    for interval in intervals:
        if len(interval) != 2:
            raise ValidationError(f"Interval {list(interval)} must be a start,end pair")
        start, end = (_parse_int(v, "Interval bounds") for v in interval)
        if start > end:
            raise ValidationError(f"Interval [{start}, {end}] starts after it ends")
        if not (bounds.min_value <= start and end <= bounds.max_value):
            raise ValidationError(
                f"Interval bounds must be between {bounds.min_value} and {bounds.max_value}"
            )
        pairs.append((start, end))
    if not bounds.min_length <= len(pairs) <= bounds.max_length:
        raise ValidationError(
            f"Number of intervals must be between {bounds.min_length} and {bounds.max_length}"
        )
    return pairs


def validate_input(algorithm_id: str, raw: Any) -> BaseModel:
    """Validate *raw* for *algorithm_id* and return its input model.

    Args:
        algorithm_id: A registered algorithm id (e.g. "bubble_sort").
        raw: A dict of input fields (strings or already-typed values), an
            input model, or the algorithm's shorthand value (numbers as a
            list or text, a string, a list of pairs).

    Returns:
        The algorithm's input model, ready for ``generate``.

    Raises:
        ValidationError: if any field is missing, malformed or out of bounds.
        ValueError: if *algorithm_id* is unknown.
    """
    algorithm = get_algorithm(algorithm_id)
    if isinstance(raw, BaseModel):
        fields = raw.model_dump()
    elif isinstance(raw, dict):
        fields = dict(raw)
    else:
        fields = {algorithm.SHORTHAND_FIELD: raw}

    family = algorithm.FAMILY
    if family in (constants.FAMILY_SORTING, constants.FAMILY_ARRAY, constants.FAMILY_HEIGHTS):
        model = ArrayInput(values=validate_array(fields.get("values"), constants.ARRAY_BOUNDS[family]))
    elif family == constants.FAMILY_WINDOW:
        values = validate_array(fields.get("values"), constants.ARRAY_BOUNDS[family])
        model = WindowInput(
            values=values, window=validate_window(fields.get("window", 1), len(values))
        )
    elif family in (constants.FAMILY_TARGET, constants.FAMILY_SEARCH):
        model = TargetInput(
            values=validate_array(fields.get("values"), constants.ARRAY_BOUNDS[family]),
            target=_validate_in_range(fields.get("target", 0), constants.TARGET_RANGE, "Target"),
        )
    elif family == constants.FAMILY_ROTATION:
        model = RotationInput(
            values=validate_array(fields.get("values"), constants.ARRAY_BOUNDS[family]),
            steps=_validate_in_range(
                fields.get("steps", 0), constants.ROTATION_RANGE, "Rotation steps"
            ),
        )
    elif family == constants.FAMILY_INTERVALS:
        model = IntervalInput(intervals=validate_intervals(fields.get("intervals")))
    elif family == constants.FAMILY_TEXT:
        model = TextInput(text=validate_text(fields.get("text"), constants.TEXT_BOUNDS[family]))
    elif family == constants.FAMILY_TEXT_PAIR:
        bounds = constants.TEXT_BOUNDS[family]
        model = TextPairInput(
            source=validate_text(fields.get("source"), bounds, "First string"),
            target=validate_text(fields.get("target"), bounds, "Second string"),
        )
    elif family == constants.FAMILY_PATTERN:
        model = PatternInput(
            text=validate_text(fields.get("text"), constants.SEARCH_TEXT_BOUNDS, "Text"),
            pattern=validate_text(
                fields.get("pattern"), constants.SEARCH_PATTERN_BOUNDS, "Pattern"
            ),
        )
    else:
        raise ValueError(f"Unknown algorithm family: {family}")
    logger.debug("Validated %s input: %s", algorithm_id, model)
    return model
