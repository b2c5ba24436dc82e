"""
Tests for the `accs score` CLI commands.
"""

import json

import pytest
from click.testing import CliRunner

from accs.cli.main import cli
from accs.core.config import Config

AS_OF = "2026-10-01T00:00:00Z"


@pytest.fixture(autouse=True)
def no_logfire(monkeypatch):
    monkeypatch.setattr(Config, "LOGFIRE_TOKEN", "")


@pytest.fixture
def runner():
    return CliRunner()


def _write_json(path, data):
    path.write_text(json.dumps(data))
    return path


class TestScoreRun:
    def test_single_object(self, runner, tmp_path):
        input_path = _write_json(tmp_path / "item.json", {"contentItemId": "c-1"})
        output_path = tmp_path / "out.json"

        result = runner.invoke(cli, [
            "score", "run", str(input_path), "--output", str(output_path), "--as-of", AS_OF,
        ])

        assert result.exit_code == 0, result.output
        scores = json.loads(output_path.read_text())
        assert len(scores) == 1
        assert scores[0]["contentItemId"] == "c-1"
        assert scores[0]["accs"]["score"] == 68
        assert scores[0]["accs"]["predictedPerformanceTier"] == "medium"

    def test_invalid_items_skipped(self, runner, tmp_path):
        input_path = _write_json(tmp_path / "items.json", [
            {"contentItemId": "good"},
            {"contentItemId": "bad", "visualContinuity": 7},
        ])
        output_path = tmp_path / "out.json"

        result = runner.invoke(cli, [
            "score", "run", str(input_path), "--output", str(output_path), "--verbose",
        ])

        assert result.exit_code == 0, result.output
        scores = json.loads(output_path.read_text())
        assert [s["contentItemId"] for s in scores] == ["good"]

    def test_all_invalid_exits_nonzero(self, runner, tmp_path):
        input_path = _write_json(tmp_path / "items.json", [{"transcript": "no id"}])
        output_path = tmp_path / "out.json"

        result = runner.invoke(cli, ["score", "run", str(input_path), "--output", str(output_path)])

        assert result.exit_code == 1
        assert json.loads(output_path.read_text()) == []

    def test_trends_file_applied(self, runner, tmp_path):
        structure = {"hookType": "question", "visualComposition": "talking_head"}
        input_path = _write_json(tmp_path / "item.json", {
            "contentItemId": "c-1",
            "contentStructure": structure,
        })
        trends_path = tmp_path / "trends.yaml"
        trends_path.write_text("question_talking_head: 9000\n")
        output_path = tmp_path / "out.json"

        result = runner.invoke(cli, [
            "score", "run", str(input_path),
            "--trends", str(trends_path),
            "--output", str(output_path),
            "--as-of", AS_OF,
        ])

        assert result.exit_code == 0, result.output
        fatigue = json.loads(output_path.read_text())[0]["accs"]["fatigueRisk"]
        assert fatigue["warnings"] == ["Industry-wide format saturation"]
        assert fatigue["score"] == 85

    @pytest.mark.parametrize("content", [
        "- question_talking_head\n",
        "question_talking_head: lots\n",
        "trends: [unclosed\n",
    ])
    def test_malformed_trends_file(self, runner, tmp_path, content):
        input_path = _write_json(tmp_path / "item.json", {"contentItemId": "c-1"})
        trends_path = tmp_path / "trends.yaml"
        trends_path.write_text(content)

        result = runner.invoke(cli, ["score", "run", str(input_path), "--trends", str(trends_path)])

        assert result.exit_code == 2
        assert "--trends" in result.output

    def test_bad_as_of(self, runner, tmp_path):
        input_path = _write_json(tmp_path / "item.json", {"contentItemId": "c-1"})
        result = runner.invoke(cli, ["score", "run", str(input_path), "--as-of", "yesterday"])
        assert result.exit_code == 2

    def test_non_object_input(self, runner, tmp_path):
        input_path = _write_json(tmp_path / "item.json", [1, 2])
        result = runner.invoke(cli, ["score", "run", str(input_path)])
        assert result.exit_code == 2

    def test_period_days_must_be_positive(self, runner, tmp_path):
        input_path = _write_json(tmp_path / "item.json", {"contentItemId": "c-1"})
        result = runner.invoke(cli, ["score", "run", str(input_path), "--period-days", "0"])
        assert result.exit_code == 2


class TestScoreBaseline:
    def test_baseline(self, runner):
        result = runner.invoke(cli, ["score", "baseline"])
        assert result.exit_code == 0
        assert '"score": 68' in result.output
