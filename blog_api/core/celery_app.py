"""Celery application and beat schedule for background jobs."""
from celery import Celery
from celery.signals import setup_logging

from blog_api.core.config import settings
from blog_api.core.logging import configure_logging

PUBLISH_TASK_NAME = "posts.publish_scheduled"

celery_app = Celery(
    "blog_api",
    broker=settings.CELERY_BROKER_URL,
    include=["blog_api.workers.publishing"],
)
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_ignore_result=True,
    beat_schedule={
        "publish-scheduled-posts": {
            "task": PUBLISH_TASK_NAME,
            "schedule": float(settings.PUBLISH_INTERVAL_SECONDS),
            # A run still queued when the next tick fires is dropped, not stacked.
            "options": {"expires": settings.PUBLISH_INTERVAL_SECONDS},
        },
    },
)


@setup_logging.connect
def _configure_worker_logging(**kwargs) -> None:
    configure_logging()
