"""Audit trail for mutating operations"""
import hashlib
import json
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from crm.models.audit import Audit
from crm.core.enums import AuditAction
from crm.core.metrics import audit_logs_created

logger = logging.getLogger(__name__)


def payload_hash(payload) -> str:
    if payload is None:
        payload = {}

    if hasattr(payload, "model_dump"):
        payload_dict = payload.model_dump(exclude_unset=True)
    elif isinstance(payload, dict):
        payload_dict = payload
    else:
        payload_dict = {}

    payload_str = json.dumps(payload_dict, sort_keys=True, default=str)
    return hashlib.sha256(payload_str.encode()).hexdigest()


async def log_audit(
    db: AsyncSession,
    action: AuditAction,
    resource_id: Optional[int] = None,
    payload=None,
) -> None:
    """Write and commit one audit row. Failures are logged, never raised."""
    try:
        db.add(Audit(
            action=str(action),
            resource_id=resource_id,
            payload_hash=payload_hash(payload),
        ))
        await db.commit()
        audit_logs_created.labels(action=str(action)).inc()
    except Exception as e:
        await db.rollback()
        logger.error(f"Audit logging failed for action {action}: {e}", exc_info=True)
