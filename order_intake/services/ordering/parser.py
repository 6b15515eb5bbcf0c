"""Order message parsing service."""
import logging

from order_intake.services.ordering.extractors import (
    ADDRESS_LABEL,
    DELIVERY_DATE_LABEL,
    DELIVERY_TIME_LABEL,
    PHONE_LABEL,
    extract_after_dash,
    extract_customer_name,
)
from order_intake.services.ordering.items import extract_items
from order_intake.services.ordering.models import ParsedOrder
from order_intake.services.ordering.review import review_reasons
from order_intake.services.ordering.totals import (
    extract_total_number,
    round2,
    sum_line_totals,
)

logger = logging.getLogger(__name__)


def parse_message(text: str) -> ParsedOrder:
    """
    Parse a free-text order message into a structured order.

    Each field is extracted independently from the same text. Fields that
    cannot be found are left as None; nothing here raises for malformed
    messages.

    Args:
        text: Message body following the "Order Summary - <name>" template

    Returns:
        ParsedOrder with the review flag and the reasons behind it
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected message text as str, got {type(text).__name__}")

    customer_name = extract_customer_name(text)
    delivery_date = extract_after_dash(text, DELIVERY_DATE_LABEL)
    delivery_time = extract_after_dash(text, DELIVERY_TIME_LABEL)
    address = extract_after_dash(text, ADDRESS_LABEL)
    phone = extract_after_dash(text, PHONE_LABEL)

    items = extract_items(text)

    stated_total = extract_total_number(text)
    computed_total = sum_line_totals(items)

    reasons = review_reasons(
        customer_name,
        delivery_date,
        delivery_time,
        phone,
        stated_total,
        computed_total,
    )

    logger.debug(
        f"[PARSER] Parsed message - items: {len(items)}, "
        f"stated_total: {stated_total}, computed_total: {computed_total}, "
        f"review_reasons: {reasons}"
    )

    return ParsedOrder(
        customer_name=customer_name,
        delivery_date=delivery_date,
        delivery_time=delivery_time,
        address=address,
        phone=phone,
        items=items,
        stated_total=round2(stated_total) if stated_total is not None else None,
        computed_total=computed_total,
        requires_review=bool(reasons),
        review_reasons=reasons,
    )
