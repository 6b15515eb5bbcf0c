"""Label-based field extractors."""
import re
from typing import Optional

from order_intake.services.ordering.normalizer import normalize_line, split_lines

CUSTOMER_NAME_RE = re.compile(r"^order\s*summary\s*-\s*(.+)$", re.IGNORECASE)

DELIVERY_DATE_LABEL = "Delivery Date"
DELIVERY_TIME_LABEL = "Delivery Time"
ADDRESS_LABEL = "Location"
PHONE_LABEL = "Contact"


def extract_customer_name(text: str) -> Optional[str]:
    """Read the customer name from an "Order Summary - <name>" first line."""
    first_line = normalize_line(text.split("\n")[0])
    match = CUSTOMER_NAME_RE.match(first_line)
    if not match:
        return None
    return match.group(1).strip() or None


def extract_after_dash(text: str, label: str) -> Optional[str]:
    """
    Find the value of the first "<label> - <value>" line.

    Args:
        text: Raw message text
        label: Literal label, matched case-insensitively

    Returns:
        Trimmed value of the first matching line, None if no line matches
    """
    pattern = re.compile(
        rf"^\s*{re.escape(label)}\s*-\s*(.+)\s*$", re.IGNORECASE
    )
    for line in split_lines(text):
        match = pattern.match(line)
        if match and match.group(1):
            return match.group(1).strip()
    return None
