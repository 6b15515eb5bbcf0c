"""Manual review decision."""
from decimal import Decimal
from typing import List, Optional

from order_intake.services.ordering.totals import totals_mismatch

# Address is optional; orders often say "TBD"
REQUIRED_FIELDS = ("customer_name", "delivery_date", "delivery_time", "phone")

TOTAL_MISMATCH_REASON = "total mismatch"


def missing_required_fields(
    customer_name: Optional[str] = None,
    delivery_date: Optional[str] = None,
    delivery_time: Optional[str] = None,
    phone: Optional[str] = None,
) -> List[str]:
    """Names of the required fields that were not extracted."""
    values = {
        "customer_name": customer_name,
        "delivery_date": delivery_date,
        "delivery_time": delivery_time,
        "phone": phone,
    }
    return [field for field in REQUIRED_FIELDS if not values[field]]


def review_reasons(
    customer_name: Optional[str],
    delivery_date: Optional[str],
    delivery_time: Optional[str],
    phone: Optional[str],
    stated_total: Optional[Decimal],
    computed_total: Decimal,
) -> List[str]:
    """
    List every reason an order needs a human to check it.

    Returns:
        "missing <field>" per absent required field, followed by
        "total mismatch" when the stated total does not reconcile
    """
    reasons = [
        f"missing {field}"
        for field in missing_required_fields(
            customer_name, delivery_date, delivery_time, phone
        )
    ]
    if totals_mismatch(stated_total, computed_total):
        reasons.append(TOTAL_MISMATCH_REASON)
    return reasons


def requires_review(
    customer_name: Optional[str],
    delivery_date: Optional[str],
    delivery_time: Optional[str],
    phone: Optional[str],
    stated_total: Optional[Decimal],
    computed_total: Decimal,
) -> bool:
    """True if any required field is missing or the totals disagree."""
    return bool(
        review_reasons(
            customer_name,
            delivery_date,
            delivery_time,
            phone,
            stated_total,
            computed_total,
        )
    )
