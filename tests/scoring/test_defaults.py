"""
Unit Tests for Default Scoring Generation

Tests for generate_default() and create_default_config().
"""

import pytest

from assessment_toolkit.core.models.answers import (
    AnswerType,
    LabelledScaleOptions,
    NumericOptions,
)
from assessment_toolkit.core.models.parts import QuestionPart
from assessment_toolkit.core.models.scoring import (
    BooleanScoring,
    LabelledScaleScoring,
    NumericRange,
    NumericScoring,
)
from assessment_toolkit.scoring.defaults import (
    create_default_config,
    default_label_levels,
    default_numeric_ranges,
    generate_default,
)
from assessment_toolkit.scoring.errors import PreconditionError
from assessment_toolkit.scoring.policy import ScoringPolicy
from assessment_toolkit.scoring.validation import validate_part_scoring


def _triples(scoring: NumericScoring) -> list[tuple]:
    return [(r.min, r.max, r.level) for r in scoring]


class TestBooleanDefault:
    """Tests for boolean defaults."""

    def test_generate_when_boolean_then_true_is_top_level(self):
        """True maps to the top level, False to level 1."""
        assert generate_default(AnswerType.BOOLEAN, None, 5) == BooleanScoring(5, 1)

    def test_generate_when_polarity_reversed_then_false_is_top_level(self):
        """Policy can flip the polarity."""
        policy = ScoringPolicy(affirmative_is_best=False)
        assert generate_default(AnswerType.BOOLEAN, None, 5, policy=policy) == BooleanScoring(1, 5)

    def test_generate_when_single_level_then_both_level_one(self):
        """A one-level scale maps both answers to 1."""
        assert generate_default(AnswerType.BOOLEAN, None, 1) == BooleanScoring(1, 1)


class TestLabelledDefault:
    """Tests for labelled-scale defaults."""

    def test_generate_when_three_labels_five_levels_then_spread(self):
        """Labels spread linearly over the scale."""
        scoring = generate_default(
            AnswerType.LABELLED_SCALE, LabelledScaleOptions(("Never", "Sometimes", "Always")), 5
        )
        assert scoring == LabelledScaleScoring({"Never": 1, "Sometimes": 3, "Always": 5})

    def test_generate_when_single_label_then_top_level(self):
        """A lone label maps to the top level."""
        assert default_label_levels(["Only"], 4) == LabelledScaleScoring({"Only": 4})

    def test_generate_when_no_labels_then_empty_mapping(self):
        """Zero labels give an empty mapping."""
        assert default_label_levels([], 4) == LabelledScaleScoring({})

    def test_generate_when_half_way_then_rounds_up(self):
        """Half-way positions round up, not to even."""
        # index 1 of 3 at 4 levels: 1 + 0.5 * 3 = 2.5
        scoring = default_label_levels(["a", "b", "c"], 4)
        assert scoring.label_levels["b"] == 3

    @pytest.mark.parametrize("label_count", range(1, 12))
    @pytest.mark.parametrize("max_level", range(1, 8))
    def test_generate_when_any_size_then_levels_monotone_from_one_to_top(self, label_count, max_level):
        """First label is 1 (unless alone), last is the top, never decreasing."""
        labels = [f"L{i}" for i in range(label_count)]
        levels = [default_label_levels(labels, max_level).label_levels[l] for l in labels]
        assert levels == sorted(levels)
        assert levels[-1] == max_level
        if label_count > 1:
            assert levels[0] == 1


class TestNumericDefault:
    """Tests for numeric range defaults."""

    def test_generate_when_zero_to_hundred_four_levels_then_quarters(self):
        """[0, 100] at 4 levels splits into quarters."""
        scoring = default_numeric_ranges(NumericOptions(0, 100), 4)
        assert _triples(scoring) == [(0, 24, 1), (25, 49, 2), (50, 74, 3), (75, 100, 4)]

    def test_generate_when_uneven_split_then_boundaries_floor(self):
        """Boundaries snap down to whole numbers on integer domains."""
        scoring = default_numeric_ranges(NumericOptions(0, 100), 3)
        assert _triples(scoring) == [(0, 32, 1), (33, 65, 2), (66, 100, 3)]

    def test_generate_when_reversed_then_levels_descend(self):
        """Reversed direction gives high values low levels."""
        scoring = default_numeric_ranges(NumericOptions(0, 100), 4, reversed=True)
        assert [r.level for r in scoring] == [4, 3, 2, 1]

    def test_generate_when_policy_reversed_then_levels_descend(self):
        """Policy controls the direction through generate_default."""
        policy = ScoringPolicy(numeric_reversed=True)
        scoring = generate_default(AnswerType.SCALE, NumericOptions(1, 10), 2, policy=policy)
        assert [r.level for r in scoring] == [2, 1]

    def test_generate_when_fractional_domain_then_hundredths(self):
        """Fractional domains use a 0.01 gap."""
        scoring = default_numeric_ranges(NumericOptions(0, 1.5), 3)
        assert _triples(scoring) == [(0, 0.49, 1), (0.5, 0.99, 2), (1, 1.5, 3)]

    def test_generate_when_single_level_then_whole_domain(self):
        """One level covers the whole domain."""
        scoring = default_numeric_ranges(NumericOptions(0, 10), 1)
        assert scoring == NumericScoring((NumericRange(0, 10, 1),))

    def test_generate_when_fewer_values_than_levels_then_levels_skipped(self):
        """A domain too narrow for every level drops the empty ranges."""
        scoring = default_numeric_ranges(NumericOptions(0, 1), 4)
        assert _triples(scoring) == [(0, 1, 4)]

    def test_generate_when_options_missing_then_raises_error(self):
        """Numeric types need NumericOptions."""
        with pytest.raises(PreconditionError, match="needs NumericOptions"):
            generate_default(AnswerType.NUMBER, None, 5)

    @pytest.mark.parametrize("options", [
        NumericOptions(0, 100),
        NumericOptions(1, 5),
        NumericOptions(0, 1),
        NumericOptions(-10, 10),
        NumericOptions(7, 7),
        NumericOptions(0, 1.5),
        NumericOptions(2.5, 7.25),
        NumericOptions(0, 100, step=5),
        NumericOptions(0, 10, step=0.5),
    ])
    @pytest.mark.parametrize("max_level", range(1, 11))
    def test_generate_when_any_domain_then_validates(self, options, max_level):
        """Every generated default passes validation for its own part."""
        part = QuestionPart(1, "", AnswerType.NUMBER, options)
        scoring = generate_default(part.answer_type, options, max_level)
        assert validate_part_scoring(part, scoring, max_level) == []


class TestGenerateDefault:
    """Tests for generate_default() preconditions."""

    def test_generate_when_max_level_zero_then_raises_error(self):
        """A scale needs at least one level."""
        with pytest.raises(PreconditionError, match="max_level"):
            generate_default(AnswerType.BOOLEAN, None, 0)

    def test_generate_when_unknown_answer_type_then_none(self):
        """Types without ordinal structure have no default."""
        assert generate_default("free_text", None, 5) is None


class TestCreateDefaultConfig:
    """Tests for create_default_config()."""

    def test_create_when_all_kinds_then_every_part_mapped(self, question_parts):
        """Every part gets its kind's default."""
        cfg = create_default_config(question_parts, 5)
        assert cfg.part_keys == frozenset({"1", "2", "3"})
        assert cfg.get(1) == BooleanScoring(5, 1)
        assert cfg.version == "weighted"

    def test_create_when_no_parts_then_none(self):
        """No parts means no document."""
        assert create_default_config([], 5) is None

    def test_create_when_defaults_then_valid(self, question_parts):
        """The default document validates for its parts."""
        from assessment_toolkit.scoring.validation import validate_config
        cfg = create_default_config(question_parts, 5)
        assert validate_config(cfg, question_parts, 5) == []
