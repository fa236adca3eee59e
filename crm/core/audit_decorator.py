import logging
from functools import wraps
from typing import Callable
from sqlalchemy.ext.asyncio import AsyncSession
from crm.core.audit_log import log_audit
from crm.core.enums import AuditAction

logger = logging.getLogger(__name__)


def audit_log(action: AuditAction, id_param: str = None) -> Callable:
    """Record an audit row after the wrapped endpoint returns.

    The resource id is taken from the result's ``id`` or, for endpoints that
    return no record (deletes), from the ``id_param`` keyword argument.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            result = await func(*args, **kwargs)

            db: AsyncSession = kwargs.get("db")
            if db is None:
                return result

            resource_id = getattr(result, "id", None)
            if resource_id is None and id_param:
                resource_id = kwargs.get(id_param)

            await log_audit(db, action, resource_id, kwargs.get("payload"))
            return result

        return wrapper
    return decorator
