"""Pytest configuration and fixtures for all tests."""

import json

import pytest


SAMPLE_BY_DATE = {
    "2024-06-03": {"main": 2, "sub": 0},
    "2024-06-04": {"main": 0, "sub": 0.5},
}


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config lookup at a temp file so tests never read ~/.ghostcal.json."""
    path = tmp_path / "ghostcal.json"
    monkeypatch.setenv("GHOSTCAL_CONFIG", str(path))
    return path


@pytest.fixture
def sample_payload_file(tmp_path):
    path = tmp_path / "activity.json"
    path.write_text(
        json.dumps({"byDate": SAMPLE_BY_DATE, "mainHours": 2.0, "subagentHours": 0.5}),
        encoding="utf-8",
    )
    return path
