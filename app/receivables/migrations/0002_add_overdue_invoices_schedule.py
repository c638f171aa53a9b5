"""
Add celery-beat schedule for flagging overdue invoices.

This migration creates the periodic task schedule for the
flag_overdue_invoices task, which runs once a day to mark unpaid and
partially paid invoices past their due date as OVERDUE.
"""

from django.db import migrations


def create_periodic_task(apps, schema_editor):
    """Create the periodic task for flagging overdue invoices."""
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    schedule, _ = IntervalSchedule.objects.get_or_create(
        every=1,
        period="days",
    )

    PeriodicTask.objects.get_or_create(
        name="Flag Overdue Invoices",
        defaults={
            "task": "receivables.tasks.flag_overdue_invoices",
            "interval": schedule,
            "enabled": True,
            "description": (
                "Marks unpaid and partially paid invoices whose due date "
                "has passed as OVERDUE."
            ),
        },
    )


def remove_periodic_task(apps, schema_editor):
    """Remove the periodic task on migration rollback."""
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    PeriodicTask.objects.filter(
        name="Flag Overdue Invoices",
    ).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("receivables", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_task, remove_periodic_task),
    ]
