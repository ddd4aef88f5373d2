"""Tests for the load-optimizer command line."""

from __future__ import annotations

import json
import logging

import pytest

from optimizer_cli.main import EXIT_INVALID_INPUT, EXIT_IO_ERROR, build_parser, main

NOW = "2026-10-18T12:00:00Z"


def _write(path, payload) -> str:
    path.write_text(json.dumps(payload))
    return str(path)


@pytest.fixture
def session_file(tmp_path) -> str:
    return _write(tmp_path / "session.json", {"goal": "hypertrophy", "durationMin": 90})


@pytest.fixture
def history_file(tmp_path) -> str:
    return _write(tmp_path / "history.json", [
        {"timestamp": "2026-10-17T09:00:00Z", "exercises": [{"exercise_id": "squat", "sets": 4, "reps": "8"}]},
    ])


class TestParser:
    def test_session_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_volume_tolerance_range(self, session_file) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--session", session_file, "--volume-tolerance", "7"])

    def test_now_parsed_as_utc(self, session_file) -> None:
        args = build_parser().parse_args(["--session", session_file, "--now", NOW])
        assert args.now.utcoffset().total_seconds() == 0


class TestMain:
    def test_prints_recommendation(self, session_file, history_file, capsys) -> None:
        code = main(["--session", session_file, "--history", history_file, "--now", NOW])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        # 25 × 1.15 → 29, then the 90-minute cap of 22
        assert data["session_volume"] == 22
        assert data["rationale"].startswith("Goal profile: hypertrophy.")
        assert "cluster_taper_scheme" in data

    def test_goal_bias_flag(self, session_file, history_file, capsys) -> None:
        code = main([
            "--session", session_file, "--history", history_file,
            "--goal-bias", "20", "--now", NOW,
        ])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert "tapered_scheme" in data
        assert "cluster_taper_scheme" not in data

    def test_config_and_context_files(self, tmp_path, session_file, capsys) -> None:
        config_file = _write(tmp_path / "config.json", {"maxSetsPerSession": 15})
        context_file = _write(tmp_path / "context.json", {"phaseName": "Accumulation", "blockName": "Base"})
        code = main([
            "--session", session_file, "--config", config_file,
            "--context", context_file, "--now", NOW,
        ])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        # 15 × 1.15 × 1.15 = 19.8 → 20
        assert data["session_volume"] == 20
        assert data["suggested_focus"] == "hypertrophy"

    def test_missing_goal(self, tmp_path, capsys) -> None:
        session = _write(tmp_path / "session.json", {"readiness": "high"})
        assert main(["--session", session]) == EXIT_INVALID_INPUT
        assert capsys.readouterr().out == ""

    def test_bad_history_timestamp(self, tmp_path, session_file) -> None:
        history = _write(tmp_path / "history.json", [{"timestamp": "yesterday"}])
        assert main(["--session", session_file, "--history", history]) == EXIT_INVALID_INPUT

    def test_missing_file(self, tmp_path) -> None:
        assert main(["--session", str(tmp_path / "nope.json")]) == EXIT_IO_ERROR

    def test_malformed_json(self, tmp_path) -> None:
        path = tmp_path / "session.json"
        path.write_text("{goal: strength")
        assert main(["--session", str(path)]) == EXIT_IO_ERROR

    def test_audit(self, tmp_path, session_file, capsys, caplog) -> None:
        caplog.set_level(logging.INFO, logger="optimizer_cli.compliance")
        plan = _write(tmp_path / "plan.json", {"exercises": [
            {"exercise_id": f"ex-{i}", "sets": 4, "reps": "8-12", "percent_1rm": 70} for i in range(5)
        ]})
        code = main(["--session", session_file, "--audit", plan, "--now", NOW])
        assert code == 0
        assert json.loads(capsys.readouterr().out)["session_volume"] == 22
        assert "Compliance check:" in caplog.text
        assert "Sets: 20/22 (ok)" in caplog.text
