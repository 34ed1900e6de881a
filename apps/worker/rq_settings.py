# rq worker -c apps.worker.rq_settings
from core.config import settings

REDIS_URL = settings.redis_url
QUEUES = ["default"]
