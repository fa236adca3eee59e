import time
from typing import Optional
from crm.core.config import settings


def generate_quote_number(now_ms: Optional[int] = None) -> str:
    """Quote prefix plus the last six digits of a millisecond timestamp."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{settings.QUOTE_NUMBER_PREFIX}{str(now_ms)[-6:]}"


def derive_order_number(quote_number: str) -> str:
    """DPT-123456 -> ORD-123456. Numbers without the quote prefix pass through unchanged."""
    return quote_number.replace(settings.QUOTE_NUMBER_PREFIX, settings.ORDER_NUMBER_PREFIX, 1)
