"""
Tests for the assessment-scoring command line.
"""

import json

import pytest

from assessment_toolkit.cli import main


@pytest.fixture
def parts_file(write_json, question_parts):
    return write_json("parts.json", [p.to_dict() for p in question_parts])


@pytest.fixture
def config_file(tmp_path, parts_file):
    path = tmp_path / "config.json"
    assert main(["defaults", str(parts_file), "--levels", "5", "-o", str(path)]) == 0
    return path


class TestDefaultsCommand:
    """Tests for `defaults`."""

    def test_defaults_when_stdout_then_document_printed(self, parts_file, capsys):
        assert main(["defaults", str(parts_file), "--levels", "4"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["version"] == "weighted"
        assert document["partScoring"]["1"] == {"true": 4, "false": 1}

    def test_defaults_when_output_then_file_written(self, config_file):
        document = json.loads(config_file.read_text(encoding="utf-8"))
        assert set(document["partScoring"]) == {"1", "2", "3"}

    def test_defaults_when_policy_given_then_polarity_flipped(self, parts_file, write_json, capsys):
        policy = write_json("policy.json", {"affirmative_is_best": False})
        assert main(["--policy", str(policy), "defaults", str(parts_file), "--levels", "4"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["partScoring"]["1"] == {"true": 1, "false": 4}


class TestValidateCommand:
    """Tests for `validate`."""

    def test_validate_when_defaults_then_ok(self, parts_file, config_file, capsys):
        assert main(["validate", str(parts_file), str(config_file), "--levels", "5"]) == 0
        assert "OK" in capsys.readouterr().out

    def test_validate_when_scale_shrunk_then_exit_one(self, parts_file, config_file, capsys):
        """Levels generated for 5 are out of range on a 3-level scale."""
        assert main(["validate", str(parts_file), str(config_file), "--levels", "3"]) == 1
        assert "[error] Part 1" in capsys.readouterr().out

    def test_validate_when_file_missing_then_exit_two(self, parts_file, tmp_path):
        missing = tmp_path / "missing.json"
        assert main(["validate", str(parts_file), str(missing), "--levels", "5"]) == 2


class TestScoreCommand:
    """Tests for `score`."""

    def test_score_when_answers_then_overall_printed(self, parts_file, config_file, write_json, capsys):
        answers = write_json("answers.json", {"1": True, "2": "Sometimes", "3": 60})
        assert main(["score", str(parts_file), str(config_file), str(answers)]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["overall"] == 4
        assert [p["level"] for p in result["parts"]] == [5, 3, 4]

    def test_score_when_answer_missing_then_exit_one(self, parts_file, config_file, write_json):
        answers = write_json("answers.json", {"1": True})
        assert main(["score", str(parts_file), str(config_file), str(answers)]) == 1


class TestPreviewCommand:
    """Tests for `preview`."""

    def test_preview_when_defaults_then_scenarios_listed(self, parts_file, config_file, capsys):
        assert main(["preview", str(parts_file), str(config_file), "--levels", "5"]) == 0
        out = capsys.readouterr().out
        assert "All Minimum" in out
        assert "Mixed Values" in out
        assert "→ All Levels" in out
