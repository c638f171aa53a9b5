"""
Tests for data migrations.

The test database is built by running migrations, so the celery-beat
schedule created by 0002 is already present.
"""

from django_celery_beat.models import IntervalSchedule, PeriodicTask


class TestOverdueInvoicesSchedule:
    """Tests for the flag_overdue_invoices beat schedule."""

    def test_periodic_task_registered(self, db):
        task = PeriodicTask.objects.get(name="Flag Overdue Invoices")

        assert task.task == "receivables.tasks.flag_overdue_invoices"
        assert task.enabled is True
        assert task.interval.every == 1
        assert task.interval.period == IntervalSchedule.DAYS
