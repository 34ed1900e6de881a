import logging

from redis import Redis
from redis.exceptions import RedisError
from rq import Queue

from core.config import settings

logger = logging.getLogger(__name__)


def get_queue() -> Queue:
    conn = Redis.from_url(settings.redis_url)
    return Queue("default", connection=conn)


def enqueue_quote_sync() -> str | None:
    """Schedule a retry of pending quotes. Returns the job id, or None if Redis is unavailable."""
    try:
        job = get_queue().enqueue("apps.worker.jobs.sync_pending_quotes")
    except RedisError as e:
        logger.warning("could not enqueue quote sync: %s", e)
        return None
    return job.id
