import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("nyumbalink")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Recompute the current month's employee KPIs every night
    "refresh-employee-performance": {
        "task": "analytics.refresh_employee_performance",
        "schedule": crontab(minute=30, hour=0),
    },
    # Close the previous month on the 1st
    "close-previous-month-performance": {
        "task": "analytics.close_previous_month",
        "schedule": crontab(minute=0, hour=2, day_of_month=1),
    },
}

app.conf.timezone = "Africa/Dar_es_Salaam"
