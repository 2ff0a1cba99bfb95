"""Composable API functions for the algorithm trace pipelines.

Each function corresponds to a CLI workflow (--trace-only, --stats, --step)
but is callable programmatically without argparse.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from .algorithms import get_algorithm
from .render import render_trace
from .render_types import RenderState
from .trace_stats import count_operations, count_step_kinds
from .trace_types import Trace
from .validation import validate_input

logger = logging.getLogger(__name__)


def prepare_input(algorithm_id: str, raw: Any) -> BaseModel:
    """Validate raw user input for an algorithm.

    Args:
        algorithm_id: A registered algorithm id (e.g. "merge_sort").
        raw: A dict of fields, an input model, or the shorthand value.

    Returns:
        The algorithm's validated input model.
    """
    return validate_input(algorithm_id, raw)


def generate_trace(algorithm_id: str, raw: Any, validate: bool = True) -> Trace:
    """Run an algorithm and return its full trace.

    Args:
        algorithm_id: A registered algorithm id.
        raw: Input as accepted by ``prepare_input``.
        validate: When False, skip boundary validation (input is trusted).

    Returns:
        A Trace with the parsed input, every step and the final result.
    """
    logger.info("Generating trace for %s", algorithm_id)
    data = prepare_input(algorithm_id, raw) if validate else raw
    return get_algorithm(algorithm_id).generate(data)


def render_at(algorithm_id: str, raw: Any, k: int | None = None) -> RenderState:
    """Generate a trace and return the RenderState after its first *k* steps.

    Args:
        algorithm_id: A registered algorithm id.
        raw: Input as accepted by ``prepare_input``.
        k: Number of steps to apply; None means the whole trace.

    Returns:
        The derived RenderState.
    """
    trace = generate_trace(algorithm_id, raw)
    return render_trace(trace, k)


def dump_trace(algorithm_id: str, raw: Any) -> str:
    """Generate a trace and return a human-readable text dump.

    Returns:
        A multi-line string with one step per line, prefixed by its index.
    """
    trace = generate_trace(algorithm_id, raw)
    width = len(str(max(len(trace) - 1, 0)))
    return "\n".join(f"  {i:>{width}}  {step}" for i, step in enumerate(trace.steps))


def trace_stats(algorithm_id: str, raw: Any) -> dict[str, Any]:
    """Generate a trace and return step kind counts and an operation summary.

    Returns:
        A dict with ``kinds`` (step kind -> count), ``operations``
        (comparisons, writes, total) and ``result``.
    """
    trace = generate_trace(algorithm_id, raw)
    return {
        "kinds": count_step_kinds(trace.steps),
        "operations": count_operations(trace.steps),
        "result": trace.result,
    }
