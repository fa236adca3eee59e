from crm.models.quote import Quote

COST_COMPONENTS = ("flight_cost", "boarding_cost", "medical_cost", "additional_fees")


def quote_total(flight_cost: float, boarding_cost: float, medical_cost: float, additional_fees: float) -> float:
    return flight_cost + boarding_cost + medical_cost + additional_fees


def price_breakdown(quote: Quote) -> dict:
    return {field: getattr(quote, field) or 0.0 for field in COST_COMPONENTS}


def recompute_total(quote: Quote) -> float:
    """Store the sum of the cost components on the quote; client totals are never used."""
    quote.total_amount = quote_total(**price_breakdown(quote))
    return quote.total_amount


def format_money(amount) -> str:
    return f"${(amount or 0):,.2f}"
