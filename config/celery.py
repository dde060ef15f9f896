import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("hotel_services")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

# Workers for notifications: celery -A config worker -Q notifications
app.conf.task_default_queue = "default"
