import json
import logging
from crm.core.redis import get_redis
from crm.core.config import settings
from crm.core.metrics import idempotent_replays

logger = logging.getLogger(__name__)


async def get_idempotent(resource: str, key: str):
    if not key:
        return None
    redis = get_redis()
    if redis is None:
        return None
    try:
        v = await redis.get(f"idemp:{resource}:{key}")
    except Exception as e:
        logger.warning(f"Idempotency lookup failed: {e}")
        return None
    if not v:
        return None
    idempotent_replays.labels(resource=resource).inc()
    return json.loads(v)

async def set_idempotent(resource: str, key: str, value: dict):
    if not key:
        return
    redis = get_redis()
    if redis is None:
        return
    try:
        await redis.set(f"idemp:{resource}:{key}", json.dumps(value, default=str), ex=settings.IDEMPOTENCY_TTL)
    except Exception as e:
        logger.warning(f"Idempotency store failed: {e}")
