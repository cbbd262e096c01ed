"""Periodic Celery tasks keeping employee KPIs up to date."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore

from . import services

logger = logging.getLogger(__name__)


def _active_admin_ids() -> list[int]:
    User = get_user_model()
    return list(User.objects.employees().filter(is_active=True).values_list("pk", flat=True))


@shared_task(name="analytics.refresh_employee_performance")
def refresh_employee_performance() -> dict[str, int]:
    """Recompute the current month's row of every active property admin.

    Runs nightly through Celery Beat.
    """
    refreshed = services.snapshot_all(_active_admin_ids())
    logger.info(f"Refreshed performance of {refreshed} property admins")
    return {"refreshed": refreshed}


@shared_task(name="analytics.close_previous_month")
def close_previous_month() -> dict[str, int]:
    """Final recompute of last month's rows, run on the first of the month."""
    month = services.previous_month()
    refreshed = services.snapshot_all(_active_admin_ids(), month)
    logger.info(f"Closed {month:%Y-%m} performance for {refreshed} property admins")
    return {"refreshed": refreshed}
