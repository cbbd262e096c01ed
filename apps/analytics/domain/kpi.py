"""
Employee KPI Aggregation

Turns monthly performance rows into a ranked leaderboard of property admins.

    total_score = conversion_rate * 0.3
                + max(0, 10 - response_time_hours) * 0.2
                + satisfaction_rating * 0.25
                + occupancy_rate * 0.25

Trends compare an admin's newest month with the month right before it.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from itertools import groupby
from typing import Any, Dict, Iterable, List, Optional, Sequence

WEIGHT_CONVERSION = Decimal('0.3')
WEIGHT_RESPONSE = Decimal('0.2')
WEIGHT_SATISFACTION = Decimal('0.25')
WEIGHT_OCCUPANCY = Decimal('0.25')
RESPONSE_TIME_CEILING_HOURS = Decimal('10')


class LeaderboardSort(str, Enum):
    RANK = 'rank'
    CONVERSION = 'conversion'
    RESPONSE = 'response'
    SATISFACTION = 'satisfaction'
    REVENUE = 'revenue'


@dataclass(frozen=True)
class PerformanceRow:
    """One admin's KPIs for one calendar month."""
    admin_id: Any
    month_year: date
    conversion_rate: Decimal = Decimal('0')
    average_response_time_hours: Decimal = Decimal('0')
    tenant_satisfaction_rating: Decimal = Decimal('0')
    revenue_generated: Decimal = Decimal('0')
    occupancy_rate: Decimal = Decimal('0')
    properties_managed: int = 0
    bookings_received: int = 0
    bookings_approved: int = 0
    bookings_completed: int = 0


@dataclass
class EmployeeScore:
    """Leaderboard entry: newest month's KPIs, trends and overall score."""
    admin_id: Any
    month_year: date
    conversion_rate: Decimal
    response_time_hours: Decimal
    satisfaction_rating: Decimal
    revenue: Decimal
    occupancy_rate: Decimal
    properties_managed: int
    total_score: Decimal
    conversion_trend: Decimal
    response_trend: Decimal
    satisfaction_trend: Decimal
    revenue_trend: Decimal
    occupancy_trend: Decimal
    rank: int = 0


def _dec(value: Any) -> Decimal:
    if value is None:
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def total_score(conversion_rate, response_time_hours, satisfaction_rating, occupancy_rate) -> Decimal:
    response_component = max(Decimal('0'), RESPONSE_TIME_CEILING_HOURS - _dec(response_time_hours))
    return (
        _dec(conversion_rate) * WEIGHT_CONVERSION
        + response_component * WEIGHT_RESPONSE
        + _dec(satisfaction_rating) * WEIGHT_SATISFACTION
        + _dec(occupancy_rate) * WEIGHT_OCCUPANCY
    )


def trend(current: Any, previous: Optional[Any], *, lower_is_better: bool = False) -> Decimal:
    """
    Percentage change from `previous` to `current`.

    No previous month, or a previous value of zero, yields 0. For metrics
    where lower is better (response time) the sign is flipped so that an
    improvement is always a positive trend.
    """
    if previous is None:
        return Decimal('0')
    prev = _dec(previous)
    if prev == 0:
        return Decimal('0')
    cur = _dec(current)
    delta = (prev - cur) if lower_is_better else (cur - prev)
    return delta / prev * 100


def score_admin(rows: Sequence[PerformanceRow]) -> EmployeeScore:
    """Score one admin from their rows; the rows may arrive in any order."""
    if not rows:
        raise ValueError("At least one performance row is required")

    ordered = sorted(rows, key=lambda row: row.month_year, reverse=True)
    current = ordered[0]
    previous = ordered[1] if len(ordered) > 1 else None

    def prev(attr: str):
        return getattr(previous, attr) if previous is not None else None

    return EmployeeScore(
        admin_id=current.admin_id,
        month_year=current.month_year,
        conversion_rate=_dec(current.conversion_rate),
        response_time_hours=_dec(current.average_response_time_hours),
        satisfaction_rating=_dec(current.tenant_satisfaction_rating),
        revenue=_dec(current.revenue_generated),
        occupancy_rate=_dec(current.occupancy_rate),
        properties_managed=current.properties_managed,
        total_score=total_score(
            current.conversion_rate,
            current.average_response_time_hours,
            current.tenant_satisfaction_rating,
            current.occupancy_rate,
        ),
        conversion_trend=trend(current.conversion_rate, prev('conversion_rate')),
        response_trend=trend(
            current.average_response_time_hours,
            prev('average_response_time_hours'),
            lower_is_better=True,
        ),
        satisfaction_trend=trend(current.tenant_satisfaction_rating, prev('tenant_satisfaction_rating')),
        revenue_trend=trend(current.revenue_generated, prev('revenue_generated')),
        occupancy_trend=trend(current.occupancy_rate, prev('occupancy_rate')),
    )


def group_by_admin(rows: Iterable[PerformanceRow]) -> Dict[Any, List[PerformanceRow]]:
    """Rows per admin, each list sorted newest month first."""
    keyed = sorted(rows, key=lambda row: str(row.admin_id))
    grouped: Dict[Any, List[PerformanceRow]] = {}
    for _, admin_rows in groupby(keyed, key=lambda row: str(row.admin_id)):
        admin_rows = sorted(admin_rows, key=lambda row: row.month_year, reverse=True)
        grouped[admin_rows[0].admin_id] = admin_rows
    return grouped


def build_leaderboard(rows: Iterable[PerformanceRow]) -> List[EmployeeScore]:
    """Score every admin and rank them, rank 1 being the highest score."""
    scores = [score_admin(admin_rows) for admin_rows in group_by_admin(rows).values()]
    scores.sort(key=lambda score: score.total_score, reverse=True)
    for position, score in enumerate(scores, start=1):
        score.rank = position
    return scores


def sort_leaderboard(scores: Sequence[EmployeeScore], sort_by: LeaderboardSort) -> List[EmployeeScore]:
    sort_by = LeaderboardSort(sort_by)
    if sort_by == LeaderboardSort.CONVERSION:
        return sorted(scores, key=lambda s: s.conversion_rate, reverse=True)
    if sort_by == LeaderboardSort.RESPONSE:
        return sorted(scores, key=lambda s: s.response_time_hours)
    if sort_by == LeaderboardSort.SATISFACTION:
        return sorted(scores, key=lambda s: s.satisfaction_rating, reverse=True)
    if sort_by == LeaderboardSort.REVENUE:
        return sorted(scores, key=lambda s: s.revenue, reverse=True)
    return sorted(scores, key=lambda s: s.rank)


def conversion_rate(received: int, approved: int) -> Decimal:
    """Share of received requests that were approved, in percent."""
    if not received:
        return Decimal('0')
    return Decimal(approved) * 100 / Decimal(received)
