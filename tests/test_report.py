"""Tests for calendar report assembly."""

from datetime import date

import pytest

from ghostcal.core.activity import parse_activity_payload
from ghostcal.core.classify import IntensityThresholds
from ghostcal.core.errors import EmptyInputError, InvalidHoursError
from ghostcal.core.month_labels import MonthRun
from ghostcal.core.report import build_report


def _payload(by_date, **extra):
    return parse_activity_payload({"byDate": by_date, **extra})


def test_report_for_sample_payload():
    payload = _payload(
        {
            "2024-06-03": {"main": 2, "sub": 0},
            "2024-06-04": {"main": 0, "sub": 0.5},
        },
        mainHours=2.0,
        subagentHours=0.5,
    )
    report = build_report(payload, now=date(2024, 6, 20))

    assert len(report.window) == 3
    assert report.header == [MonthRun(6, 3)]
    assert report.first_day == date(2024, 6, 3)
    assert report.last_day == date(2024, 6, 4)
    assert report.aggregates.ghost == 1
    assert report.aggregates.human_only == 1
    assert report.human_hours == 2.0
    assert report.agent_hours == 0.5


def test_aggregates_cover_days_outside_the_window():
    payload = _payload(
        {
            "2023-01-02": {"main": 0, "sub": 3},
            "2023-09-28": {"main": 1, "sub": 1},
        }
    )
    report = build_report(payload, now=date(2023, 10, 1), window_weeks=4)

    assert len(report.window) == 4
    assert report.aggregates.ghost == 1
    assert report.aggregates.both == 1
    assert report.first_day == date(2023, 1, 2)


def test_future_records_count_but_are_not_drawn():
    payload = _payload(
        {
            "2024-06-03": {"main": 1, "sub": 0},
            "2024-07-20": {"main": 0, "sub": 1},
        }
    )
    report = build_report(payload, now=date(2024, 6, 12))

    assert report.window[-1].sunday == date(2024, 6, 9)
    assert report.header == [MonthRun(6, 2)]
    assert report.aggregates.ghost == 1
    assert report.aggregates.total_active_days == 2
    assert report.last_day == date(2024, 7, 20)


def test_thresholds_flow_into_levels():
    payload = _payload({"2024-06-03": {"main": 2}})
    report = build_report(
        payload,
        now=date(2024, 6, 8),
        thresholds=IntensityThresholds(floor=0, moderate=3, heavy=6),
    )
    assert int(report.window[0][1].human_level) == 1


def test_empty_payload_raises():
    with pytest.raises(EmptyInputError):
        build_report(_payload({}), now=date(2024, 6, 20))


def test_negative_hours_raise():
    with pytest.raises(InvalidHoursError):
        build_report(_payload({"2024-06-03": {"main": -1}}), now=date(2024, 6, 20))


def test_to_dict_is_json_ready():
    payload = _payload({"2024-06-04": {"main": 0, "sub": 0.5}})
    data = build_report(payload, now=date(2024, 6, 8)).to_dict()

    assert data["period"] == {"first": "2024-06-04", "last": "2024-06-04"}
    assert data["aggregates"]["ghost"] == 1
    assert data["aggregates"]["ghost_percent"] == 100
    assert data["header"] == [{"month": 6, "weeks": 1}]
    tuesday = data["weeks"][0][2]
    assert tuesday == {
        "date": "2024-06-04",
        "category": "ghost",
        "human_level": 0,
        "agent_level": 1,
    }
