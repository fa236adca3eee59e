"""Quote to order promotion.

A quote that moves into ``accepted`` from any other status, and has no linked
order yet, spawns a ``confirmed`` order derived from its fields. The caller
owns the transaction: ``promote_quote`` only adds and flushes, so the quote
update, the order insert and the back-link commit together.
"""
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from crm.core.enums import OrderStatus, QuoteStatus
from crm.core.metrics import quote_promotions
from crm.models.order import Order
from crm.models.quote import Quote
from crm.services.numbering import derive_order_number
from crm.services.webhook import send_webhook

logger = logging.getLogger(__name__)


def should_promote(
    previous_status: Optional[QuoteStatus],
    new_status: Optional[QuoteStatus],
    order_id: Optional[int],
) -> bool:
    return (
        new_status == QuoteStatus.ACCEPTED
        and previous_status != QuoteStatus.ACCEPTED
        and order_id is None
    )


def build_order_from_quote(quote: Quote) -> Order:
    return Order(
        customer_id=quote.customer_id,
        order_number=derive_order_number(quote.quote_number),
        status=OrderStatus.CONFIRMED,
        pickup_address=quote.departure_city,
        delivery_address=quote.destination_city,
        pickup_date=quote.travel_date,
        delivery_date=quote.travel_date,
        dog_name=quote.dog_name,
        dog_breed=quote.dog_breed,
        dog_weight=quote.dog_weight,
        special_instructions=quote.notes,
        total_amount=quote.total_amount,
    )


async def promote_quote(db: AsyncSession, quote: Quote, trigger: str = "status_update") -> Order:
    """Insert the order derived from ``quote`` and link it. Does not commit."""
    if quote.order_id is not None:
        raise ValueError(f"Quote {quote.id} already linked to order {quote.order_id}")

    order = build_order_from_quote(quote)
    db.add(order)
    await db.flush()

    quote.order_id = order.id
    await db.flush()

    quote_promotions.labels(trigger=trigger).inc()
    logger.info(f"Quote {quote.quote_number} promoted to order {order.order_number} (id={order.id})")
    return order


async def notify_promotion(quote: Quote, order: Order) -> bool:
    return await send_webhook({
        "event": "quote.promoted",
        "quote_id": quote.id,
        "quote_number": quote.quote_number,
        "order_id": order.id,
        "order_number": order.order_number,
        "total_amount": order.total_amount,
    })
