"""Gating logic: decides what the exported gauge should read each tick."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time

from checks import CheckOutcome, CheckStatus

HEALTHY = 1.0
MISSING = 0.0


@dataclass(frozen=True)
class GaugeDecision:
    """Output: what to write into the gauge, if anything."""

    value: float | None
    should_publish: bool
    reason: str


def in_window(now: time, start: time, end: time) -> bool:
    """Whether ``now`` falls in ``[start, end)``, compared at minute precision.

    Both bounds are on the same day; an ``end`` at or before ``start``
    gives an empty window rather than wrapping past midnight.
    """
    minute = now.replace(second=0, microsecond=0, tzinfo=None)
    return start <= minute < end


def resolve_index_name(prefix: str, today: date) -> str:
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return f"{prefix}{today.year:04d}.{today.month:02d}.{today.day:02d}"


def decide_value(inside_window: bool, outcome: CheckOutcome) -> GaugeDecision:
    """Map (window, check outcome) to a gauge value.

    Outside the window a missing index is expected, so the gauge reads
    healthy whatever the check said. Inside it the gauge mirrors the check,
    except that a failed check publishes nothing and the last value stays.
    """
    if not inside_window:
        return GaugeDecision(HEALTHY, True, "outside_window")
    if outcome.status is CheckStatus.EXISTS:
        return GaugeDecision(HEALTHY, True, "index_exists")
    if outcome.status is CheckStatus.NOT_EXISTS:
        return GaugeDecision(MISSING, True, "index_missing")
    return GaugeDecision(None, False, "check_failed")
