"""
Unit Tests for Level Calculation

Tests for level_for_part(), overall_level() and score_question().
"""

import logging

import pytest

from assessment_toolkit.core.models.scoring import (
    BooleanScoring,
    LabelledScaleScoring,
    NumericRange,
    NumericScoring,
    WeightedScoringConfig,
)
from assessment_toolkit.scoring.defaults import create_default_config, default_numeric_ranges
from assessment_toolkit.scoring.errors import PreconditionError
from assessment_toolkit.scoring.levels import (
    level_for_part,
    overall_level,
    resolve_part_level,
    score_question,
)


class TestLevelForPart:
    """Tests for per-part level resolution."""

    def test_level_when_boolean_true_then_true_level(self, boolean_part):
        assert level_for_part(boolean_part, BooleanScoring(5, 1), True) == 5

    def test_level_when_boolean_false_then_false_level(self, boolean_part):
        assert level_for_part(boolean_part, BooleanScoring(5, 1), False) == 1

    def test_level_when_label_mapped_then_label_level(self, labelled_part):
        scoring = LabelledScaleScoring({"Never": 1, "Sometimes": 3, "Always": 5})
        assert level_for_part(labelled_part, scoring, "Sometimes") == 3

    def test_level_when_numeric_in_range_then_range_level(self, percentage_part):
        """60 on the [0, 100] quarters is level 3."""
        scoring = default_numeric_ranges(percentage_part.options, 4)
        assert level_for_part(percentage_part, scoring, 60) == 3

    def test_level_when_numeric_on_bound_then_inclusive(self, percentage_part):
        scoring = default_numeric_ranges(percentage_part.options, 4)
        assert level_for_part(percentage_part, scoring, 24) == 1
        assert level_for_part(percentage_part, scoring, 25) == 2
        assert level_for_part(percentage_part, scoring, 100) == 4

    def test_level_when_ranges_overlap_then_first_stored_wins(self, percentage_part):
        """Lookup scans stored order; the first match wins."""
        scoring = NumericScoring((NumericRange(0, 60, 2), NumericRange(50, 100, 4)))
        assert level_for_part(percentage_part, scoring, 55) == 2

    def test_level_when_numeric_outside_ranges_then_highest_level(self, percentage_part):
        """An answer no range contains gets the highest stored level."""
        scoring = NumericScoring((NumericRange(0, 49, 1), NumericRange(50, 100, 3)))
        result = resolve_part_level(percentage_part, scoring, 150)
        assert result.level == 3
        assert result.fallback is True

    def test_level_when_numeric_between_grid_points_then_range_below(self, percentage_part):
        """24.5 on a whole-number domain sits between [0, 24] and [25, 49] and takes level 1."""
        scoring = default_numeric_ranges(percentage_part.options, 4)
        result = resolve_part_level(percentage_part, scoring, 24.5)
        assert result.level == 1
        assert result.fallback is False
        assert level_for_part(percentage_part, scoring, 49.9) == 2

    def test_level_when_fractional_range_matches_then_not_snapped(self, percentage_part):
        """A fractional answer a range contains keeps that range's level."""
        scoring = NumericScoring((NumericRange(0, 24, 1), NumericRange(24.5, 100, 4)))
        assert level_for_part(percentage_part, scoring, 24.5) == 4

    def test_level_when_unknown_label_then_level_one(self, labelled_part, caplog):
        """Unmapped labels fall back to level 1 with a warning."""
        scoring = LabelledScaleScoring({"Never": 4})
        with caplog.at_level(logging.WARNING):
            assert level_for_part(labelled_part, scoring, "Rarely") == 1
        assert "Rarely" in caplog.text

    def test_level_when_boolean_side_missing_then_level_one(self, boolean_part):
        scoring = BooleanScoring(5, None)
        assert resolve_part_level(boolean_part, scoring, False).fallback is True
        assert level_for_part(boolean_part, scoring, False) == 1

    def test_level_when_no_scoring_then_level_one(self, boolean_part):
        assert level_for_part(boolean_part, None, True) == 1

    def test_level_when_wrong_kind_then_level_one(self, boolean_part):
        assert level_for_part(boolean_part, LabelledScaleScoring({"Yes": 5}), True) == 1

    def test_level_when_numeric_answer_not_number_then_level_one(self, percentage_part):
        scoring = default_numeric_ranges(percentage_part.options, 4)
        assert level_for_part(percentage_part, scoring, "sixty") == 1


class TestOverallLevel:
    """Tests for overall_level()."""

    def test_overall_when_single_level_then_same(self):
        assert overall_level([3]) == 3

    def test_overall_when_half_then_rounds_up(self):
        """Mean 1.5 rounds up to 2."""
        assert overall_level([1, 2]) == 2
        assert overall_level([2, 3]) == 3

    def test_overall_when_mean_below_half_then_rounds_down(self):
        assert overall_level([1, 1, 2]) == 1

    def test_overall_when_mean_above_half_then_rounds_up(self):
        assert overall_level([1, 2, 2]) == 2

    def test_overall_when_empty_then_raises_error(self):
        """Averaging nothing is a precondition failure."""
        with pytest.raises(PreconditionError):
            overall_level([])


class TestScoreQuestion:
    """Tests for score_question()."""

    @pytest.fixture
    def config(self, question_parts) -> WeightedScoringConfig:
        return create_default_config(question_parts, 5)

    def test_score_when_all_answered_then_mean_of_parts(self, question_parts, config):
        """Levels 5, 3 and 4 average to 4."""
        score = score_question(question_parts, config, {1: True, "2": "Sometimes", 3: 60})
        assert score.levels == [5, 3, 4]
        assert score.overall == 4
        assert score.fallback_part_ids == []

    def test_score_when_parts_unordered_then_display_order(self, question_parts, config):
        """Part levels follow the parts' display order."""
        score = score_question(
            list(reversed(question_parts)), config, {1: False, 2: "Never", 3: 0}
        )
        assert [p.part_id for p in score.part_levels] == ["1", "2", "3"]
        assert score.overall == 1

    def test_score_when_answer_missing_then_raises_error(self, question_parts, config):
        with pytest.raises(PreconditionError, match="No answer for part 3"):
            score_question(question_parts, config, {1: True, 2: "Never"})

    def test_score_when_no_config_then_raises_error(self, question_parts):
        with pytest.raises(PreconditionError, match="no scoring"):
            score_question(question_parts, None, {1: True, 2: "Never", 3: 1})

    def test_score_when_entry_missing_then_raises_error(self, question_parts, config):
        with pytest.raises(PreconditionError, match="Part 2 has no scoring entry"):
            score_question(question_parts, config.without_entry(2), {1: True, 2: "Never", 3: 1})

    def test_score_when_no_parts_then_raises_error(self, config):
        with pytest.raises(PreconditionError):
            score_question([], config, {})

    def test_score_when_fallback_used_then_flagged(self, question_parts, config, caplog):
        """Fallback levels are reported on the result and logged."""
        with caplog.at_level(logging.WARNING):
            score = score_question(question_parts, config, {1: True, 2: "Unknown", 3: 60})
        assert score.fallback_part_ids == ["2"]
        assert score.to_dict()["parts"][1] == {"part_id": "2", "level": 1, "fallback": True}
