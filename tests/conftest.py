import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import assessment_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from assessment_toolkit.core.models import (  # noqa: E402
    AnswerType,
    LabelledScaleOptions,
    NumericOptions,
    QuestionPart,
)


# Common test fixtures
@pytest.fixture
def boolean_part() -> QuestionPart:
    """Yes/no part."""
    return QuestionPart(1, "Is the site certified?", AnswerType.BOOLEAN, order_index=0)


@pytest.fixture
def labelled_part() -> QuestionPart:
    """Three-label frequency scale."""
    return QuestionPart(
        2,
        "How often are backups tested?",
        AnswerType.LABELLED_SCALE,
        LabelledScaleOptions(("Never", "Sometimes", "Always")),
        order_index=1,
    )


@pytest.fixture
def percentage_part() -> QuestionPart:
    """Percentage answer over [0, 100]."""
    return QuestionPart(
        3,
        "What share of staff completed training?",
        AnswerType.PERCENTAGE,
        NumericOptions(0, 100),
        order_index=2,
    )


@pytest.fixture
def question_parts(boolean_part, labelled_part, percentage_part) -> list[QuestionPart]:
    """One part of each scoring kind, in display order."""
    return [boolean_part, labelled_part, percentage_part]


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON-serializable value to a file under tmp_path."""
    import json

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
