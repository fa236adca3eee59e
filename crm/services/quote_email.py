from datetime import date
from typing import Optional, Tuple
from crm.models.quote import Quote
from crm.services.pricing import format_money

COMPANY_NAME = "Dogument Pet Travel"


def _format_date(value: Optional[date], fallback: str) -> str:
    return value.strftime("%m/%d/%Y") if value else fallback


def render_quote_email(quote: Quote, customer_name: Optional[str] = None, today: Optional[date] = None) -> Tuple[str, str]:
    """Return ``(subject, body)`` of the customer-facing quote email."""
    today = today or date.today()
    subject = f"Pet Travel Quote - {quote.quote_number}"
    weight = f"{quote.dog_weight:g} lbs" if quote.dog_weight else "N/A"

    lines = [
        f"Dear {customer_name or 'Valued Customer'},",
        "",
        f"Thank you for considering {COMPANY_NAME} for your pet's journey. We are pleased to "
        f"provide you with the following quote for transporting your beloved {quote.dog_name or 'pet'}.",
        "",
        "QUOTE DETAILS",
        f"Quote Number: {quote.quote_number}",
        f"Pet Name: {quote.dog_name or 'N/A'}",
        f"Breed: {quote.dog_breed or 'N/A'}",
        f"Weight: {weight}",
        f"Route: {quote.departure_city or 'N/A'} → {quote.destination_city or 'N/A'}",
        f"Travel Date: {_format_date(quote.travel_date, 'TBD')}",
        "",
        "COST BREAKDOWN",
        f"Flight Costs: {format_money(quote.flight_cost)}",
        f"Boarding Fees: {format_money(quote.boarding_cost)}",
        f"Medical Expenses (Health Certificates & Documents): {format_money(quote.medical_cost)}",
        f"Additional Fees: {format_money(quote.additional_fees)}",
        "",
        f"TOTAL: {format_money(quote.total_amount)}",
        "",
    ]
    if quote.notes:
        lines += ["ADDITIONAL NOTES:", quote.notes, ""]
    lines += [
        f"This quote is valid until: {_format_date(quote.valid_until, '30 days from quote date')}",
        "",
        "Our experienced team ensures your pet's safety and comfort throughout the journey. "
        "All necessary health certificates, documentation, and compliance with international "
        "travel requirements are included in our medical expenses.",
        "",
        "To proceed with booking or if you have any questions, please don't hesitate to contact us.",
        "",
        "Best regards,",
        f"{COMPANY_NAME} Team",
        "",
        "---",
        f"This quote was generated on {_format_date(today, '')}",
    ]
    return subject, "\n".join(lines)
