"""Lookup and persistence helpers shared by the resource routers"""
import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


def check_not_found(item, resource_name: str = "Resource", resource_id: Optional[int] = None) -> None:

    if not item:
        if resource_id:
            raise HTTPException(
                status_code=404,
                detail=f"{resource_name} with id {resource_id} not found"
            )
        raise HTTPException(status_code=404, detail=f"{resource_name} not found")


async def check_references(db: AsyncSession, payload, references: Dict[str, type]) -> None:
    """Answer 422 naming the field when a payload points at a missing row.

    Only fields present in the payload are checked, so a PUT that leaves a
    dangling reference untouched still goes through.
    """
    values = payload.model_dump(exclude_unset=True)
    for field, model in references.items():
        ref_id = values.get(field)
        if ref_id is None:
            continue
        if await db.get(model, ref_id) is None:
            raise HTTPException(
                status_code=422,
                detail=f"{field}: {model.__name__} with id {ref_id} not found"
            )


def is_foreign_key_violation(error: IntegrityError) -> bool:
    # asyncpg: "violates foreign key constraint", sqlite: "FOREIGN KEY constraint failed"
    return "foreign key" in str(error.orig).lower()


@asynccontextmanager
async def conflict_guard(db: AsyncSession, detail: str):
    """Roll back on a constraint error: 409 for unique violations, 422 for foreign keys."""
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Integrity error: {e.orig}")
        if is_foreign_key_violation(e):
            raise HTTPException(status_code=422, detail="Referenced record does not exist")
        raise HTTPException(status_code=409, detail=detail)


async def commit_or_conflict(db: AsyncSession, detail: str) -> None:
    async with conflict_guard(db, detail):
        await db.commit()


def apply_changes(item, payload) -> dict:
    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(item, field, value)
    return changes
