"""
Celery application.
Tasks are discovered from each installed app's `tasks` module.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core.settings")

app = Celery("vendorspend")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks(
    related_name="application.tasks",
)
