"""Tests for the activity sources."""

import io
import json
import subprocess

import pytest

from ghostcal.core.errors import DataUnavailableError, InvalidActivityError
from ghostcal.utils import activity_loader
from ghostcal.utils.activity_loader import CommandActivitySource, FileActivitySource

DATA = {"byDate": {"2024-06-03": {"main": 2, "sub": 0}}, "mainHours": 2.0}
EMPTY = {"byDate": {}}


def _fake_run(responses):
    """Return a subprocess.run stand-in keyed by the command's first argument."""
    calls = []

    def run(command, **kwargs):
        calls.append((command, kwargs))
        response = responses[command[0]]
        if isinstance(response, BaseException):
            raise response
        returncode, stdout, stderr = response
        return subprocess.CompletedProcess(command, returncode, stdout, stderr)

    run.calls = calls
    return run


def test_first_working_command_wins(monkeypatch):
    run = _fake_run(
        {
            "primary": FileNotFoundError("primary"),
            "fallback": (0, json.dumps(DATA), ""),
        }
    )
    monkeypatch.setattr(activity_loader.subprocess, "run", run)

    source = CommandActivitySource([["primary", "--json"], ["fallback", "--json"]], timeout=5)
    payload = source.fetch_activity()

    assert "2024-06-03" in payload.by_date
    assert payload.main_hours == 2.0
    assert [command for command, _ in run.calls] == [["primary", "--json"], ["fallback", "--json"]]
    assert run.calls[1][1]["timeout"] == 5


def test_all_failures_raise_with_attempts(monkeypatch):
    run = _fake_run(
        {
            "crash": (2, "", "boom\nloader exploded"),
            "slow": subprocess.TimeoutExpired(["slow"], 5),
            "garbled": (0, "not json", ""),
        }
    )
    monkeypatch.setattr(activity_loader.subprocess, "run", run)

    source = CommandActivitySource([["crash"], ["slow"], ["garbled"]])
    with pytest.raises(DataUnavailableError) as excinfo:
        source.fetch_activity()

    attempts = excinfo.value.attempts
    assert len(attempts) == 3
    assert "exit code 2: loader exploded" in attempts[0]
    assert "TimeoutExpired" in attempts[1]
    assert "invalid JSON" in attempts[2]


def test_empty_result_falls_through_to_next_command(monkeypatch):
    run = _fake_run({"empty": (0, json.dumps(EMPTY), ""), "full": (0, json.dumps(DATA), "")})
    monkeypatch.setattr(activity_loader.subprocess, "run", run)

    payload = CommandActivitySource([["empty"], ["full"]]).fetch_activity()
    assert payload.by_date


def test_only_empty_results_return_empty_payload(monkeypatch):
    run = _fake_run({"empty": (0, json.dumps(EMPTY), ""), "missing": FileNotFoundError()})
    monkeypatch.setattr(activity_loader.subprocess, "run", run)

    payload = CommandActivitySource([["empty"], ["missing"]]).fetch_activity()
    assert payload.by_date == {}


def test_no_commands_configured():
    with pytest.raises(DataUnavailableError):
        CommandActivitySource([]).fetch_activity()


def test_file_source_reads_json(sample_payload_file):
    payload = FileActivitySource(sample_payload_file).fetch_activity()
    assert set(payload.by_date) == {"2024-06-03", "2024-06-04"}
    assert payload.subagent_hours == 0.5


def test_file_source_reads_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(DATA)))
    payload = FileActivitySource("-").fetch_activity()
    assert payload.by_date["2024-06-03"].human == 2


def test_file_source_missing_file(tmp_path):
    with pytest.raises(DataUnavailableError, match="Cannot read"):
        FileActivitySource(tmp_path / "nope.json").fetch_activity()


def test_file_source_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataUnavailableError, match="Invalid JSON"):
        FileActivitySource(path).fetch_activity()


def test_file_source_bad_date_key(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"byDate": {"2024-06-03": {"main": "x"}}}), encoding="utf-8")
    with pytest.raises(InvalidActivityError):
        FileActivitySource(path).fetch_activity()
