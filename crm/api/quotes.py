import logging
from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional, List

from crm.db.session import get_db
from crm.models.customer import Customer
from crm.models.quote import Quote
from crm.schemas.quote import QuoteCreate, QuoteUpdate, QuoteOut, QuoteEmailOut
from crm.core.audit_decorator import audit_log
from crm.core.enums import AuditAction, QuoteStatus
from crm.core.lookups import check_not_found, check_references, commit_or_conflict, conflict_guard, apply_changes
from crm.core.response_builders import build_quote_response, build_quote_response_list
from crm.services.numbering import generate_quote_number
from crm.services.pricing import recompute_total
from crm.services.promotion import should_promote, promote_quote, notify_promotion
from crm.services.quote_email import render_quote_email
from crm.utils.idempotency import get_idempotent, set_idempotent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/quotes", tags=["quotes"])


async def _load_quote(db: AsyncSession, quote_id: int, for_update: bool = False) -> Quote:
    q = select(Quote).where(Quote.id == quote_id).execution_options(populate_existing=True)
    if for_update:
        q = q.with_for_update(of=Quote)
    res = await db.execute(q)
    quote = res.scalars().first()
    check_not_found(quote, "Quote", quote_id)
    return quote


@router.get("", response_model=List[QuoteOut])
async def list_quotes(
    status: Optional[QuoteStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    q = select(Quote)
    if status:
        q = q.where(Quote.status == status)
    q = q.order_by(Quote.created_at.desc(), Quote.id.desc())

    res = await db.execute(q)
    return build_quote_response_list(res.scalars().all())


@router.get("/{quote_id}", response_model=QuoteOut)
async def get_quote(quote_id: int, db: AsyncSession = Depends(get_db)):
    return build_quote_response(await _load_quote(db, quote_id))


@router.post("", response_model=QuoteOut)
@audit_log(AuditAction.CREATE_QUOTE)
async def create_quote(
    payload: QuoteCreate,
    idempotency_key: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    prev = await get_idempotent("quotes", idempotency_key)
    if prev:
        return QuoteOut(**prev)

    await check_references(db, payload, {"customer_id": Customer})
    quote = Quote(**payload.model_dump())
    if not quote.quote_number:
        quote.quote_number = generate_quote_number()
    recompute_total(quote)

    db.add(quote)
    await commit_or_conflict(db, f"Quote number {quote.quote_number} already exists")

    out = build_quote_response(await _load_quote(db, quote.id))
    await set_idempotent("quotes", idempotency_key, out.model_dump())
    return out


@router.put("/{quote_id}", response_model=QuoteOut)
@audit_log(AuditAction.UPDATE_QUOTE)
async def update_quote(
    quote_id: int,
    payload: QuoteUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a quote.

    Moving a quote into ``accepted`` for the first time creates its order in
    the same transaction.
    """
    quote = await _load_quote(db, quote_id, for_update=True)
    previous_status = quote.status
    await check_references(db, payload, {"customer_id": Customer})

    apply_changes(quote, payload)
    recompute_total(quote)

    order = None
    async with conflict_guard(db, "Quote or derived order number already exists"):
        if should_promote(previous_status, quote.status, quote.order_id):
            order = await promote_quote(db, quote)
        await db.commit()

    if order is not None:
        await notify_promotion(quote, order)

    return build_quote_response(await _load_quote(db, quote_id))


@router.post("/{quote_id}/promote", response_model=QuoteOut)
@audit_log(AuditAction.PROMOTE_QUOTE)
async def promote(quote_id: int, db: AsyncSession = Depends(get_db)):
    """Accept a quote and create its order explicitly."""
    quote = await _load_quote(db, quote_id, for_update=True)
    if quote.order_id is not None:
        raise HTTPException(
            status_code=409,
            detail=f"Quote {quote_id} is already linked to order {quote.order_id}"
        )

    quote.status = QuoteStatus.ACCEPTED
    recompute_total(quote)

    async with conflict_guard(db, "Derived order number already exists"):
        order = await promote_quote(db, quote, trigger="command")
        await db.commit()

    await notify_promotion(quote, order)

    return build_quote_response(await _load_quote(db, quote_id))


@router.get("/{quote_id}/email", response_model=QuoteEmailOut)
async def quote_email(quote_id: int, db: AsyncSession = Depends(get_db)):
    quote = await _load_quote(db, quote_id)
    customer_name = quote.customer.name if quote.customer else None
    subject, body = render_quote_email(quote, customer_name)
    return QuoteEmailOut(quote_id=quote.id, subject=subject, body=body)


@router.delete("/{quote_id}")
@audit_log(AuditAction.DELETE_QUOTE, id_param="quote_id")
async def delete_quote(quote_id: int, db: AsyncSession = Depends(get_db)):
    quote = await _load_quote(db, quote_id)

    await db.delete(quote)
    await db.commit()

    return {"success": True}
