import pytest
from datetime import datetime

from src.app.services.schedule import (
    ScheduleError,
    day_key_for,
    find_current_window,
    normalize_schedule,
    parse_hhmm,
)

# 2025-03-10 is a Monday
MONDAY = datetime(2025, 3, 10)


def test_parse_hhmm():
    assert parse_hhmm("00:00") == 0
    assert parse_hhmm("08:30") == 510
    assert parse_hhmm("23:59") == 1439


@pytest.mark.parametrize("value", ["24:00", "8:00", "08:60", "", None, "0800"])
def test_parse_hhmm_rejects_malformed(value):
    with pytest.raises(ScheduleError):
        parse_hhmm(value)


def test_normalize_sorts_periods_and_maps_day_aliases():
    result = normalize_schedule(
        {
            "Segunda": [{"inicio": "14:00", "fim": "16:00"}, {"inicio": "08:00", "fim": "12:00"}],
            "dom": [],
        },
        max_minutes_per_day=480,
    )

    assert result == {
        "seg": [{"inicio": "08:00", "fim": "12:00"}, {"inicio": "14:00", "fim": "16:00"}],
        "dom": [],
    }


def test_normalize_rejects_start_not_before_end():
    with pytest.raises(ScheduleError):
        normalize_schedule({"seg": [{"inicio": "10:00", "fim": "10:00"}]})


def test_normalize_rejects_overlap():
    with pytest.raises(ScheduleError):
        normalize_schedule(
            {"ter": [{"inicio": "08:00", "fim": "10:00"}, {"inicio": "09:30", "fim": "11:00"}]}
        )


def test_adjacent_periods_do_not_overlap():
    result = normalize_schedule(
        {"ter": [{"inicio": "08:00", "fim": "10:00"}, {"inicio": "10:00", "fim": "11:00"}]}
    )

    assert len(result["ter"]) == 2


def test_normalize_rejects_more_than_daily_limit():
    with pytest.raises(ScheduleError):
        normalize_schedule(
            {"qua": [{"inicio": "08:00", "fim": "16:01"}]}, max_minutes_per_day=480
        )

    exactly_eight = normalize_schedule(
        {"qua": [{"inicio": "08:00", "fim": "16:00"}]}, max_minutes_per_day=480
    )
    assert exactly_eight["qua"][0]["fim"] == "16:00"


def test_normalize_rejects_unknown_day():
    with pytest.raises(ScheduleError):
        normalize_schedule({"funday": []})


def test_day_aliases_are_checked_together_for_overlap():
    with pytest.raises(ScheduleError):
        normalize_schedule(
            {
                "seg": [{"inicio": "00:00", "fim": "06:00"}],
                "segunda": [{"inicio": "05:00", "fim": "11:00"}],
            },
            max_minutes_per_day=24 * 60,
        )


def test_day_aliases_are_checked_together_for_daily_limit():
    with pytest.raises(ScheduleError):
        normalize_schedule(
            {
                "sex": [{"inicio": "06:00", "fim": "11:00"}],
                "sexta": [{"inicio": "12:00", "fim": "17:00"}],
            },
            max_minutes_per_day=480,
        )


def test_day_aliases_merge_into_one_sorted_day():
    result = normalize_schedule(
        {
            "sexta": [{"inicio": "14:00", "fim": "16:00"}],
            "sex": [{"inicio": "08:00", "fim": "10:00"}],
        },
        max_minutes_per_day=480,
    )

    assert result == {
        "sex": [{"inicio": "08:00", "fim": "10:00"}, {"inicio": "14:00", "fim": "16:00"}]
    }


def test_day_key_for_monday():
    assert day_key_for(MONDAY.date()) == "seg"


def test_current_window_with_inclusive_bounds():
    periods = {"seg": [{"inicio": "08:00", "fim": "12:00"}, {"inicio": "14:00", "fim": "16:00"}]}

    at_start = find_current_window(periods, MONDAY.replace(hour=14), 0)
    at_end = find_current_window(periods, MONDAY.replace(hour=16), 0)
    between = find_current_window(periods, MONDAY.replace(hour=13), 0)

    assert at_start.index == 1
    assert at_start.start_utc == MONDAY.replace(hour=14)
    assert at_start.end_utc == MONDAY.replace(hour=16)
    assert at_end.index == 1
    assert between is None


def test_current_window_applies_offset_east_of_utc():
    periods = {"seg": [{"inicio": "08:00", "fim": "12:00"}]}
    # 11:00 UTC is 08:00 in UTC-3
    now_utc = MONDAY.replace(hour=11)

    window = find_current_window(periods, now_utc, -180)

    assert window is not None
    assert window.inicio == "08:00"
    assert window.start_utc == MONDAY.replace(hour=11)
    assert window.end_utc == MONDAY.replace(hour=15)


def test_offset_can_move_local_day():
    periods = {"dom": [{"inicio": "22:00", "fim": "23:30"}]}
    # Monday 01:00 UTC is Sunday 22:00 in UTC-3
    now_utc = MONDAY.replace(hour=1)

    window = find_current_window(periods, now_utc, -180)

    assert window is not None
    assert window.start_utc == now_utc
