"""Command-line entry point — generate, inspect and play algorithm traces."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from . import constants
from .algorithms import SUPPORTED_ALGORITHMS, get_algorithm
from .api import dump_trace, trace_stats
from .controller import PlaybackController
from .playback_types import PlaybackConfig, PlaybackStatus
from .render import render_trace
from .scheduler import AsyncioScheduler
from .validation import ValidationError, validate_input

logger = logging.getLogger(__name__)

DEMO_INPUTS: dict[str, dict[str, Any]] = {
    constants.FAMILY_SORTING: {"values": [5, 3, 8, 1, 9, 2]},
    constants.FAMILY_ARRAY: {"values": [-2, 1, -3, 4, -1, 2, 1, -5, 4]},
    constants.FAMILY_HEIGHTS: {"values": [0, 1, 0, 2, 1, 0, 1, 3, 2, 1, 2, 1]},
    constants.FAMILY_WINDOW: {"values": [1, 3, -1, -3, 5, 3, 6, 7], "window": 3},
    constants.FAMILY_TARGET: {"values": [2, 7, 11, 15], "target": 9},
    constants.FAMILY_SEARCH: {"values": [23, 10, 38, 64, 72, 16, 5, 90, 47, 29], "target": 47},
    constants.FAMILY_ROTATION: {"values": [1, 2, 3, 4, 5, 6, 7], "steps": 3},
    constants.FAMILY_INTERVALS: {"intervals": [(1, 3), (2, 6), (8, 10), (15, 18)]},
    constants.FAMILY_TEXT: {"text": "babad"},
    constants.FAMILY_TEXT_PAIR: {"source": "kitten", "target": "sitting"},
    constants.FAMILY_PATTERN: {"text": "ABABDABACDABABCABAB", "pattern": "ABABCABAB"},
}


def _collect_input(args: argparse.Namespace, family: str) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if args.values is not None:
        fields["values"] = args.values
    if args.text is not None:
        fields["text"] = args.text
    if args.source is not None:
        fields["source"] = args.source
    if args.target is not None:
        fields["target"] = args.target
    if args.pattern is not None:
        fields["pattern"] = args.pattern
    if args.window is not None:
        fields["window"] = args.window
    if args.target_sum is not None:
        fields["target"] = args.target_sum
    if args.rotate is not None:
        fields["steps"] = args.rotate
    if args.intervals is not None:
        fields["intervals"] = args.intervals
    # flags given override the demo input field by field
    return {**DEMO_INPUTS[family], **fields}


async def _play(controller: PlaybackController) -> None:
    done = asyncio.Event()

    def on_update(ctrl: PlaybackController) -> None:
        state = ctrl.render_state
        if ctrl.current_index:
            print(f"  [{ctrl.current_index:>3}/{ctrl.total_steps}] {state.description}")
        if ctrl.status is PlaybackStatus.COMPLETED:
            done.set()

    controller.add_listener(on_update)
    controller.play()
    if controller.status is not PlaybackStatus.COMPLETED:
        await done.wait()
    controller.close()


def _run_playback(algorithm_id: str, data: Any, speed_ms: int) -> PlaybackController:
    async def run() -> PlaybackController:
        controller = PlaybackController(
            algorithm_id,
            scheduler=AsyncioScheduler(),
            config=PlaybackConfig(speed_ms=speed_ms),
        )
        controller.generate(data)
        await _play(controller)
        return controller

    return asyncio.run(run())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Algorithm trace and playback core")
    parser.add_argument("algorithm", choices=SUPPORTED_ALGORITHMS, help="Algorithm to trace")
    parser.add_argument("--values", help='Numbers, e.g. "5,3,8,1,9"')
    parser.add_argument("--text", help="Text (palindrome / KMP search text)")
    parser.add_argument("--source", help="First string (edit distance / LCS)")
    parser.add_argument("--target", help="Second string (edit distance / LCS)")
    parser.add_argument("--pattern", help="KMP search pattern")
    parser.add_argument("--window", type=int, help="Sliding window size")
    parser.add_argument("--target-sum", type=int, help="Target value (two sum / linear and binary search)")
    parser.add_argument("--rotate", type=int, help="Rotate right by this many steps")
    parser.add_argument("--intervals", help='Intervals, e.g. "1,3; 2,6; 8,10"')
    parser.add_argument("--trace-only", action="store_true", help="Only print the step list")
    parser.add_argument("--stats", action="store_true", help="Print step statistics")
    parser.add_argument("--step", "-k", type=int, default=None,
                        help="Print the render state after this many steps (default: all)")
    parser.add_argument("--play", action="store_true",
                        help="Play the trace in real time on an asyncio scheduler")
    parser.add_argument("--speed", type=int, default=constants.DEFAULT_SPEED_MS,
                        help=f"Milliseconds per step when playing (default: {constants.DEFAULT_SPEED_MS})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    family = get_algorithm(args.algorithm).FAMILY
    raw = _collect_input(args, family)
    try:
        data = validate_input(args.algorithm, raw)
    except ValidationError as e:
        parser.error(str(e))

    if args.trace_only:
        print("═══ Trace ═══")
        print(dump_trace(args.algorithm, data))
        return

    if args.stats:
        print(json.dumps(trace_stats(args.algorithm, data), indent=2, default=str))
        return

    if args.play:
        controller = _run_playback(args.algorithm, data, args.speed)
        print("\n═══ Final State ═══")
        print(json.dumps(controller.to_dict(), indent=2, default=str))
        return

    trace = get_algorithm(args.algorithm).generate(data)
    state = render_trace(trace, args.step)
    shown = len(trace) if args.step is None else max(0, min(args.step, len(trace)))
    print(f"═══ State after {shown}/{len(trace)} steps ═══")
    print(json.dumps(state.to_dict(), indent=2, default=str))


if __name__ == "__main__":
    main()
