"""Tests for the cardsort CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cardsort import __version__
from cardsort.cli import _format_duration, app

runner = CliRunner()


def _export(placements_s1: list[dict]) -> dict:
    return {
        "version": "1.0",
        "study": {
            "id": "study-1",
            "name": "Intranet Navigation",
            "cards": [
                {"id": "a", "label": "Payslips"},
                {"id": "b", "label": "Holiday Requests"},
                {"id": "c", "label": "Canteen Menu"},
            ],
        },
        "sessions": [
            {
                "id": "s1",
                "participant": {"completedAt": 1_767_225_600_000, "duration": 125_000},
                "placements": placements_s1,
            },
            {"id": "s2", "participant": {"completedAt": None}},
        ],
    }


_GOOD = [
    {"cardId": "a", "categoryId": "hr", "categoryName": "HR"},
    {"cardId": "b", "categoryId": "hr", "categoryName": "HR"},
    {"cardId": "c", "categoryId": "food", "categoryName": "Food"},
]


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    logging.basicConfig(level=logging.WARNING, force=True)


@pytest.fixture
def export_file(tmp_path: Path) -> Path:
    path = tmp_path / "study.json"
    path.write_text(json.dumps(_export(_GOOD)), encoding="utf-8")
    return path


class TestVersion:

    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestAnalyze:

    def test_prints_summary(self, export_file: Path) -> None:
        result = runner.invoke(app, ["analyze", str(export_file)])
        assert result.exit_code == 0, result.output
        assert "Intranet Navigation" in result.output
        assert "50% completion" in result.output
        assert "strong_cluster" in result.output

    def test_writes_results(self, export_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "results" / "analysis.json"
        result = runner.invoke(app, ["analyze", str(export_file), "--output", str(out)])
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["participantCount"] == 1
        assert data["completionRate"] == 0.5
        assert data["analyzedAt"] > 0
        assert (tmp_path / "results" / "analysis.log").exists()

    def test_prints_dendrogram_card_order(self, export_file: Path) -> None:
        """Payslips and Holiday Requests merge first; Canteen Menu joins last."""
        result = runner.invoke(app, ["analyze", str(export_file)])
        assert result.exit_code == 0, result.output
        assert "Card order" in result.output
        assert result.output.index("Canteen Menu") < result.output.index("Payslips")

    def test_british_alias(self, export_file: Path) -> None:
        result = runner.invoke(app, ["analyse", str(export_file)])
        assert result.exit_code == 0, result.output

    def test_duplicate_placement_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "dup.json"
        bad = [*_GOOD, {"cardId": "a", "categoryId": "food", "categoryName": "Food"}]
        path.write_text(json.dumps(_export(bad)), encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 1
        assert "Invalid export file" in result.output

    def test_non_utf8_file_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b"\xff\xfe{\"version\": \"1.0\"}")
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 1
        assert "Invalid export file" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["analyze", str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    def test_no_insights_message(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        doc = _export([])
        doc["sessions"] = []
        path.write_text(json.dumps(doc), encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 0, result.output
        assert "No insights" in result.output


class TestFormatDuration:

    def test_seconds(self) -> None:
        assert _format_duration(42_000) == "42s"

    def test_minutes(self) -> None:
        assert _format_duration(125_000) == "2m 05s"

    def test_zero(self) -> None:
        assert _format_duration(0) == "0s"
