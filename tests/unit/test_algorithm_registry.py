"""Tests for the lazy algorithm registry."""

import pytest

from algotrace import constants
from algotrace.algorithms import SUPPORTED_ALGORITHMS, BaseAlgorithm, get_algorithm
from algotrace.cli import DEMO_INPUTS


class TestGetAlgorithm:
    @pytest.mark.parametrize("algorithm_id", SUPPORTED_ALGORITHMS)
    def test_registered_class_matches_id(self, algorithm_id):
        algorithm = get_algorithm(algorithm_id)
        assert isinstance(algorithm, BaseAlgorithm)
        assert algorithm.ALGORITHM_ID == algorithm_id
        assert algorithm.DISPLAY_NAME

    @pytest.mark.parametrize("algorithm_id", SUPPORTED_ALGORITHMS)
    def test_every_family_has_bounds_and_demo(self, algorithm_id):
        family = get_algorithm(algorithm_id).FAMILY
        assert family in DEMO_INPUTS
        assert (
            family in constants.ARRAY_BOUNDS
            or family in constants.TEXT_BOUNDS
            or family == constants.FAMILY_PATTERN
        )

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown algorithm: bogo_sort"):
            get_algorithm("bogo_sort")

    def test_fresh_instance_per_call(self):
        assert get_algorithm("bubble_sort") is not get_algorithm("bubble_sort")

    def test_catalogue_size(self):
        assert len(SUPPORTED_ALGORITHMS) == 22

    def test_unknown_step_kind_rejected(self):
        from algotrace.step_types import Step, StepKind

        algorithm = get_algorithm("bubble_sort")
        state = algorithm.initial_state(algorithm.parse_input([1, 2]))
        with pytest.raises(ValueError, match="cannot interpret step kind TABLE_WRITE"):
            algorithm.interpret(Step(kind=StepKind.TABLE_WRITE, indices=(0, 0)), state)
