"""Celery task that publishes due scheduled posts once per beat tick.

Overlapping runs are prevented with a non-blocking Redis lock: a tick that
finds the previous run still holding the lock is skipped. The lock expires
after ``PUBLISH_LOCK_TIMEOUT_SECONDS`` so a crashed worker cannot block
publishing forever.
"""
import asyncio
import logging

from redis import Redis
from redis.exceptions import LockError

from blog_api.core.celery_app import PUBLISH_TASK_NAME, celery_app
from blog_api.core.config import settings
from blog_api.services.publish_service import run_publish_job

logger = logging.getLogger(__name__)

PUBLISH_LOCK_NAME = "blog_api:lock:posts:publish"

_redis: Redis | None = None


def get_redis() -> Redis:
    global _redis
    if _redis is None:
        _redis = Redis.from_url(settings.REDIS_URL)
    return _redis


@celery_app.task(name=PUBLISH_TASK_NAME)
def publish_scheduled_posts() -> int | None:
    lock = get_redis().lock(PUBLISH_LOCK_NAME, timeout=settings.PUBLISH_LOCK_TIMEOUT_SECONDS)
    if not lock.acquire(blocking=False):
        logger.info("Previous publish run still in progress; skipping this tick")
        return None
    try:
        count = asyncio.run(run_publish_job())
    except Exception:
        logger.exception("Posts publish failed")
        raise
    finally:
        try:
            lock.release()
        except LockError:
            logger.warning("Publish lock expired before the run finished")
    logger.info("Posts published successfully (%d post(s))", count)
    return count
