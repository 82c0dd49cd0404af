"""Tests for CLI commands: help, practice, stats, exam, config and server."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from cloudpass.interface.cli import app

runner = CliRunner()


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "adaptive practice" in result.stdout
    assert "practice" in result.stdout
    assert "stats" in result.stdout


def test_guest_practice_json(mock_home, question_dir):
    result = runner.invoke(
        app,
        ["practice", "1", "-n", "3", "--seed", "4", "--questions", str(question_dir), "--json"],
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload["questions"]) == 3
    assert len({q["id"] for q in payload["questions"]}) == 3
    assert payload["stats"] is None


def test_seeded_practice_is_reproducible(mock_home, question_dir):
    args = ["practice", "1", "-n", "5", "--seed", "8", "--questions", str(question_dir), "--json"]
    first = runner.invoke(app, args)
    second = runner.invoke(app, args)
    assert first.stdout == second.stdout


def test_user_practice_reports_stats(mock_home, question_dir, mastery_file):
    result = runner.invoke(
        app,
        [
            "practice",
            "1",
            "-n",
            "10",
            "--user",
            "alice",
            "--questions",
            str(question_dir),
            "--mastery",
            str(mastery_file),
            "--json",
        ],
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload["questions"]) == 5
    assert payload["stats"] == {"new": 3, "learning": 0, "struggling": 1, "mastered": 1}


def test_practice_text_output_warns_when_short(mock_home, question_dir):
    result = runner.invoke(app, ["practice", "2", "-n", "10", "--questions", str(question_dir)])

    assert result.exit_code == 0
    assert "Security & Compliance" in result.stdout
    assert "Only 3 question(s) available." in result.stdout


def test_practice_missing_domain(mock_home, question_dir):
    result = runner.invoke(app, ["practice", "4", "--questions", str(question_dir)])
    assert result.exit_code == 1
    assert "No question file" in result.stdout


def test_stats_command(mock_home, question_dir, mastery_file):
    result = runner.invoke(
        app,
        [
            "stats",
            "1",
            "--user",
            "bob",
            "--questions",
            str(question_dir),
            "--mastery",
            str(mastery_file),
        ],
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"new": 4, "learning": 1, "struggling": 0, "mastered": 0}


@patch("cloudpass.interface.cli.get_practice_service")
def test_exam_command(mock_factory, mock_home):
    from cloudpass.domain.practice.models import Question

    service = MagicMock()

    async def fake_exam():
        return [Question(id="x1", domain_id=1, text="First"), Question(id="x2", domain_id=3, text="Second")]

    service.mock_exam = fake_exam
    mock_factory.return_value = service

    result = runner.invoke(app, ["exam"])

    assert result.exit_code == 0
    assert "[x1] First" in result.stdout
    assert "[x2] Second" in result.stdout


@patch("cloudpass.interface.cli.resolve_config")
def test_config_show_command(mock_resolve_config):
    mock_config = MagicMock()
    mock_config.model_dump.return_value = {
        "question_bank_dir": Path("/tmp/questions"),
        "new_question_weight": 5.0,
        "seed": None,
    }
    mock_resolve_config.return_value = mock_config

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["question_bank_dir"] == str(Path("/tmp/questions"))
    assert output["new_question_weight"] == 5.0


@patch("uvicorn.run")
def test_server_command(mock_run):
    result = runner.invoke(app, ["server", "--port", "9000"])
    assert result.exit_code == 0
    mock_run.assert_called_with("cloudpass.server:app", host="127.0.0.1", port=9000, reload=False)


def test_verbose_flag_enables_debug_logging(mock_home):
    import logging

    cloudpass_logger = logging.getLogger("cloudpass")
    previous = cloudpass_logger.level
    try:
        result = runner.invoke(app, ["-v", "config", "show"])
        assert result.exit_code == 0
        assert cloudpass_logger.level == logging.DEBUG
    finally:
        cloudpass_logger.setLevel(previous)
