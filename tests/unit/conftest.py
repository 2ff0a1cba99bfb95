"""Shared fixtures for the algotrace unit suite."""

import pytest

from algotrace.algorithms import get_algorithm
from algotrace.cli import DEMO_INPUTS
from algotrace.controller import PlaybackController
from algotrace.playback_types import PlaybackConfig
from algotrace.scheduler import ManualScheduler


@pytest.fixture
def demo_input():
    """The built-in demo input for an algorithm's family."""

    def _demo(algorithm_id):
        return dict(DEMO_INPUTS[get_algorithm(algorithm_id).FAMILY])

    return _demo


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_controller(scheduler):
    """Factory for controllers on the shared virtual-clock scheduler."""

    def _make(algorithm_id="bubble_sort", config=PlaybackConfig(), on_update=None):
        return PlaybackController(
            algorithm_id, scheduler=scheduler, config=config, on_update=on_update
        )

    return _make
