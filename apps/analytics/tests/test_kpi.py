"""Tests for the employee KPI aggregation."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from apps.analytics.domain.kpi import (
    LeaderboardSort,
    PerformanceRow,
    build_leaderboard,
    conversion_rate,
    score_admin,
    sort_leaderboard,
    total_score,
    trend,
)

MARCH = date(2026, 3, 1)
APRIL = date(2026, 4, 1)


def row(admin_id, month, **kwargs) -> PerformanceRow:
    values = {key: Decimal(str(value)) for key, value in kwargs.items()}
    return PerformanceRow(admin_id=admin_id, month_year=month, **values)


def test_total_score_weights() -> None:
    # 20*0.3 + (10-2)*0.2 + 4*0.25 + 0*0.25
    assert total_score(20, 2, 4, 0) == Decimal("8.6")


def test_slow_response_contributes_nothing() -> None:
    assert total_score(0, 15, 0, 0) == 0


def test_trend() -> None:
    assert trend(Decimal("12"), Decimal("10")) == Decimal("20")
    assert trend(Decimal("3"), Decimal("4"), lower_is_better=True) == Decimal("25")
    assert trend(Decimal("5"), None) == 0
    assert trend(Decimal("5"), Decimal("0")) == 0


def test_newest_month_is_current() -> None:
    score = score_admin([
        row(1, APRIL, conversion_rate=30, revenue_generated=1200),
        row(1, MARCH, conversion_rate=20, revenue_generated=1000),
    ])
    assert score.month_year == APRIL
    assert score.conversion_rate == Decimal("30")
    assert score.conversion_trend == Decimal("50")
    assert score.revenue_trend == Decimal("20")


def test_single_month_has_flat_trends() -> None:
    score = score_admin([row(1, APRIL, conversion_rate=30)])
    assert score.conversion_trend == 0
    assert score.response_trend == 0


def test_no_rows() -> None:
    with pytest.raises(ValueError):
        score_admin([])


def test_rank_one_is_the_highest_score() -> None:
    rows = [
        # scores to 6.2
        row("a", APRIL, conversion_rate=10, average_response_time_hours=5, tenant_satisfaction_rating=4,
            occupancy_rate=4.8),
        # scores to 7.5
        row("b", APRIL, conversion_rate=15, average_response_time_hours=5, tenant_satisfaction_rating=4,
            occupancy_rate=4),
        row("b", MARCH, conversion_rate=1),
    ]
    board = build_leaderboard(rows)
    assert [(score.admin_id, score.rank) for score in board] == [("b", 1), ("a", 2)]
    assert board[0].total_score == Decimal("7.5")
    assert board[1].total_score == Decimal("6.2")


def test_alternative_orderings() -> None:
    rows = [
        row(1, APRIL, conversion_rate=50, average_response_time_hours=8, revenue_generated=100),
        row(2, APRIL, conversion_rate=10, average_response_time_hours=1, revenue_generated=900),
    ]
    board = build_leaderboard(rows)
    assert [s.admin_id for s in sort_leaderboard(board, LeaderboardSort.RESPONSE)] == [2, 1]
    assert [s.admin_id for s in sort_leaderboard(board, LeaderboardSort.REVENUE)] == [2, 1]
    assert [s.admin_id for s in sort_leaderboard(board, LeaderboardSort.CONVERSION)] == [1, 2]
    assert [s.rank for s in sort_leaderboard(board, LeaderboardSort.RANK)] == [1, 2]


def test_conversion_rate() -> None:
    assert conversion_rate(0, 0) == 0
    assert conversion_rate(4, 1) == Decimal("25")
