"""Stated total extraction and reconciliation against item lines."""
import re
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
    localcontext,
)
from typing import Any, Iterable, Optional

from order_intake.services.ordering.normalizer import split_lines

# ASCII digits only; other scripts' digits are not amounts
TOTAL_DASH_RE = re.compile(r"^total\s*-\s*([0-9]+(\.[0-9]+)?)\s*$", re.IGNORECASE)
TOTAL_EQUALS_RE = re.compile(r"^total\s*=\s*([0-9]+(\.[0-9]+)?)\s*$", re.IGNORECASE)

CENT = Decimal("0.01")
RECONCILIATION_TOLERANCE = Decimal("0.01")

# Amounts are only added, multiplied and quantized, so results stay exact
# whatever their length
EXACT_CONTEXT = Context(
    prec=MAX_PREC, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN
)


def to_decimal(value: Any) -> Decimal:
    """Coerce a value to Decimal, 0 for anything non-numeric."""
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value)) if value is not None else Decimal(0)
        except (InvalidOperation, ValueError):
            return Decimal(0)
    if not number.is_finite():
        return Decimal(0)
    return number


def round2(value: Any) -> Decimal:
    """Round to cents, half up, at any magnitude."""
    with localcontext(EXACT_CONTEXT):
        return to_decimal(value).quantize(CENT)


def line_total(quantity: int, unit_price: Decimal) -> Decimal:
    """Quantity times unit price, exact."""
    with localcontext(EXACT_CONTEXT):
        return unit_price * quantity


def extract_total_number(text: str) -> Optional[Decimal]:
    """Find the first "Total - N" or "Total = N" line."""
    for line in split_lines(text):
        match = TOTAL_DASH_RE.match(line) or TOTAL_EQUALS_RE.match(line)
        if match:
            return Decimal(match.group(1))
    return None


def _line_total(item: Any) -> Any:
    if isinstance(item, dict):
        return item.get("line_total")
    return getattr(item, "line_total", None)


def sum_line_totals(items: Iterable[Any]) -> Decimal:
    """
    Sum item line totals, rounded to cents.

    Accepts LineItem instances or plain mappings; missing or non-numeric
    line totals count as 0.
    """
    with localcontext(EXACT_CONTEXT):
        total = sum((to_decimal(_line_total(item)) for item in items), Decimal(0))
    return round2(total)


def totals_mismatch(stated: Optional[Any], computed: Any) -> bool:
    """True when a stated total disagrees with the computed one by more than a cent."""
    if stated is None:
        return False
    with localcontext(EXACT_CONTEXT):
        return abs(round2(stated) - round2(computed)) > RECONCILIATION_TOLERANCE
