import pytest
from datetime import datetime, timedelta, timezone

from app.utils.schedule import evaluate_schedule, is_cycle_missed, is_scan_on_time, to_naive_utc

T = datetime(2026, 3, 2, 8, 0, 0)


def minutes(n):
    return timedelta(minutes=n)


def test_nothing_due_before_first_interval():
    assert evaluate_schedule(T, T + minutes(14), 15, 5) is None


def test_cycle_fields_after_first_interval():
    cycle = evaluate_schedule(T, T + minutes(22), 15, 5)
    assert cycle.expected_cycles == 1
    assert cycle.last_due_at == T + minutes(15)
    assert cycle.deadline == T + minutes(20)


def test_missed_when_no_scan_after_due_time():
    now = T + minutes(22)
    cycle = evaluate_schedule(T, now, 15, 5)
    assert is_cycle_missed(cycle, now, [])


def test_scan_after_due_time_satisfies_cycle():
    now = T + minutes(22)
    cycle = evaluate_schedule(T, now, 15, 5)
    assert not is_cycle_missed(cycle, now, [T + minutes(16)])


def test_scan_before_due_time_does_not_count():
    now = T + minutes(22)
    cycle = evaluate_schedule(T, now, 15, 5)
    assert is_cycle_missed(cycle, now, [T + minutes(14)])


def test_not_missed_inside_grace_window():
    now = T + minutes(19)
    cycle = evaluate_schedule(T, now, 15, 5)
    assert not is_cycle_missed(cycle, now, [])


def test_only_most_recent_cycle_is_checked():
    # First cycle (due T+15) was never scanned, second (due T+30) was
    now = T + minutes(40)
    cycle = evaluate_schedule(T, now, 15, 5)
    assert cycle.expected_cycles == 2
    assert not is_cycle_missed(cycle, now, [T + minutes(31)])


def test_non_positive_interval_is_rejected():
    with pytest.raises(ValueError):
        evaluate_schedule(T, T + minutes(30), 0, 5)


def test_aware_datetimes_are_normalized():
    aware = datetime(2026, 3, 2, 15, 0, 0, tzinfo=timezone(timedelta(hours=7)))
    assert to_naive_utc(aware) == T
    cycle = evaluate_schedule(aware, T + minutes(22), 15, 5)
    assert cycle.last_due_at == T + minutes(15)


def test_scan_on_time_inside_grace():
    assert is_scan_on_time(T, T + minutes(18), 15, 5, [])


def test_scan_late_after_deadline():
    assert not is_scan_on_time(T, T + minutes(25), 15, 5, [])


def test_scan_on_time_before_first_due():
    assert is_scan_on_time(T, T + minutes(5), 15, 5, [])
