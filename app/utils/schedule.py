"""
Scan schedule evaluation for checkpoint patrols

Only the most recent due cycle is evaluated; earlier cycles that were missed
are not re-detected once a later cycle has been scanned.
"""
from datetime import datetime, timedelta, timezone
from typing import Iterable, NamedTuple, Optional


class ScanCycle(NamedTuple):
    expected_cycles: int
    last_due_at: datetime
    deadline: datetime


def to_naive_utc(value: datetime) -> datetime:
    """Normalize DB datetimes (aware on PostgreSQL, naive on SQLite) to naive UTC"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def evaluate_schedule(
    shift_start: datetime,
    now: datetime,
    scan_interval_minutes: int,
    grace_period_minutes: int
) -> Optional[ScanCycle]:
    """
    Compute the most recently due scan cycle of a checkpoint

    Args:
        shift_start: Shift start time
        now: Evaluation time
        scan_interval_minutes: Required scan cadence of the checkpoint
        grace_period_minutes: Tolerance after a due time

    Returns:
        ScanCycle, or None when no cycle is due yet

    Raises:
        ValueError: If the scan interval is not positive
    """
    if scan_interval_minutes <= 0:
        raise ValueError(f"Scan interval must be positive, got {scan_interval_minutes}")

    shift_start = to_naive_utc(shift_start)
    now = to_naive_utc(now)

    interval = timedelta(minutes=scan_interval_minutes)
    elapsed = now - shift_start
    if elapsed < interval:
        return None

    expected_cycles = elapsed // interval
    last_due_at = shift_start + expected_cycles * interval
    deadline = last_due_at + timedelta(minutes=grace_period_minutes)

    return ScanCycle(expected_cycles, last_due_at, deadline)


def is_cycle_missed(cycle: ScanCycle, now: datetime, scan_times: Iterable[datetime]) -> bool:
    """A cycle is missed once its deadline passed with no scan at or after its due time"""
    if to_naive_utc(now) <= cycle.deadline:
        return False
    return not any(to_naive_utc(t) >= cycle.last_due_at for t in scan_times)


def is_scan_on_time(
    shift_start: datetime,
    scanned_at: datetime,
    scan_interval_minutes: int,
    grace_period_minutes: int,
    previous_scan_times: Iterable[datetime]
) -> bool:
    """A scan is late when the cycle due at scan time had already been missed"""
    cycle = evaluate_schedule(shift_start, scanned_at, scan_interval_minutes, grace_period_minutes)
    if cycle is None:
        return True
    return not is_cycle_missed(cycle, scanned_at, previous_scan_times)
