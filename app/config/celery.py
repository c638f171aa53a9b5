"""
Celery configuration for the receivables service.

Celery runs the periodic receivables jobs (see receivables.tasks), with
schedules stored in the database by django-celery-beat.

This configuration uses Redis as both the message broker and result backend.
Tasks are auto-discovered from all installed Django apps.

Usage:
    # Worker and scheduler
    celery -A config worker -l info
    celery -A config beat -l info

    # Queue a task by hand
    from receivables.tasks import flag_overdue_invoices
    flag_overdue_invoices.delay()

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Look for a tasks.py module in each installed app
app.autodiscover_tasks()
