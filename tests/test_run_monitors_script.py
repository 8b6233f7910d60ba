"""Tests for the command line entry point."""

from __future__ import annotations

import json

import pytest

from scripts import run_monitors as script

from conftest import NOW


def test_parse_args_defaults() -> None:
    args = script.parse_args([])
    assert args.only is None
    assert args.now is None
    assert args.log_level == "INFO"


def test_parse_args_rejects_bad_timestamp() -> None:
    with pytest.raises(SystemExit):
        script.parse_args(["--now", "yesterday"])


def test_main_runs_selected_monitor(db_session, seed, capsys) -> None:
    seeded = seed.booking(hours_since_delivery=10)
    seed.dispute(seeded.booking_id, hours_until_response_deadline=30)

    exit_code = script.main(["--only", "disputes", "--now", NOW.isoformat()])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["deliveries"] is None
    assert output["disputes"]["reminders_sent"] == 1
    assert output["notifications_sent"] == 1


def test_main_returns_error_code_on_failure(db_session, monkeypatch) -> None:
    def _explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(script, "run_monitors", _explode)

    assert script.main(["--now", NOW.isoformat()]) == 1
