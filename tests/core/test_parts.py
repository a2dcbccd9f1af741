"""
Unit Tests for QuestionPart Model

Tests for the QuestionPart dataclass and part ordering.
"""

import pytest

from assessment_toolkit.core.models.answers import (
    AnswerType,
    LabelledScaleOptions,
    NumericOptions,
    ScoringKind,
)
from assessment_toolkit.core.models.parts import QuestionPart, sort_parts


class TestQuestionPart:
    """Tests for QuestionPart dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_numeric_with_options_then_creates_part(self):
        """Numeric part with NumericOptions should be created."""
        part = QuestionPart(7, "Uptime?", AnswerType.PERCENTAGE, NumericOptions(0, 100))
        assert part.key == "7"
        assert part.kind == ScoringKind.NUMERIC

    def test_init_when_numeric_without_options_then_raises_error(self):
        """Numeric part needs a domain."""
        with pytest.raises(ValueError, match="expects NumericOptions"):
            QuestionPart(1, "Score?", AnswerType.NUMBER)

    def test_init_when_boolean_with_options_then_raises_error(self):
        """Boolean parts carry no options."""
        with pytest.raises(ValueError, match="expects NoneType"):
            QuestionPart(1, "Yes?", AnswerType.BOOLEAN, NumericOptions(0, 1))

    def test_init_when_answer_type_is_string_then_raises_error(self):
        """answer_type must be an AnswerType member."""
        with pytest.raises(ValueError, match="Invalid answer type"):
            QuestionPart(1, "Yes?", "boolean")

    def test_labels_when_labelled_then_declared_order(self, labelled_part):
        """labels exposes the declared label order."""
        assert labelled_part.labels == ("Never", "Sometimes", "Always")

    def test_labels_when_not_labelled_then_empty(self, boolean_part):
        """Non-labelled parts have no labels."""
        assert boolean_part.labels == ()

    # ─────────────────────────────────────────────────────────────────────────
    # Duplication Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_with_id_when_called_then_same_domain(self, labelled_part):
        """Copy keeps the domain under a new id."""
        copy = labelled_part.with_id(99)
        assert copy.key == "99"
        assert copy.same_domain_as(labelled_part)
        assert copy.order_index == labelled_part.order_index

    def test_same_domain_as_when_labels_differ_then_false(self, labelled_part):
        """Different label lists are different domains."""
        other = QuestionPart(
            5, "x", AnswerType.LABELLED_SCALE, LabelledScaleOptions(("Never", "Always"))
        )
        assert not labelled_part.same_domain_as(other)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_from_dict_when_numeric_without_bounds_then_default_domain(self):
        """Stored numeric parts without bounds read as [0, 100]."""
        part = QuestionPart.from_dict({"id": 4, "answer_type": "scale", "options": None})
        assert part.options == NumericOptions(0, 100)

    def test_to_dict_when_called_then_stored_shape(self, percentage_part):
        """to_dict writes the stored field names."""
        assert percentage_part.to_dict() == {
            "id": 3,
            "text": "What share of staff completed training?",
            "answer_type": "percentage",
            "options": {"min": 0, "max": 100},
            "order_index": 2,
        }

    def test_from_dict_when_roundtrip_then_equal(self, labelled_part):
        """Serialized part reads back equal."""
        assert QuestionPart.from_dict(labelled_part.to_dict()) == labelled_part


class TestSortParts:
    """Tests for sort_parts()."""

    def test_sort_parts_when_order_index_differs_then_by_order_index(self, question_parts):
        """Parts sort by order_index first."""
        shuffled = list(reversed(question_parts))
        assert sort_parts(shuffled) == question_parts

    def test_sort_parts_when_order_index_ties_then_by_key(self):
        """Ties break on the id text."""
        a = QuestionPart("b", "", AnswerType.BOOLEAN)
        b = QuestionPart("a", "", AnswerType.BOOLEAN)
        assert [p.key for p in sort_parts([a, b])] == ["a", "b"]
