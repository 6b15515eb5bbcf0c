"""Item block extraction."""
import re
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from order_intake.services.ordering.models import LineItem
from order_intake.services.ordering.normalizer import split_lines
from order_intake.services.ordering.totals import line_total

ITEMS_HEADER_RE = re.compile(r"^items:", re.IGNORECASE)

# Section labels that close the items block
BLOCK_TERMINATOR_RE = re.compile(
    r"^(?:total|delivery|location|contact|payment)\b", re.IGNORECASE
)

# "<qty> <name> - <unit price>"; the price is always the last "- <number>".
# ASCII digits only, quantity capped at 9 digits.
ITEM_LINE_RE = re.compile(r"^([0-9]{1,9})\s+(.+?)\s*-\s*([0-9]+(?:\.[0-9]+)?)\s*$")


class ItemBlockState(str, Enum):
    """Scan position relative to the items block."""

    OUTSIDE_ITEMS = "outside_items"
    INSIDE_ITEMS = "inside_items"
    TERMINATED = "terminated"


def parse_item_line(line: str) -> Optional[LineItem]:
    """Parse one item line, None if it does not have the item shape."""
    match = ITEM_LINE_RE.match(line)
    if not match:
        return None

    quantity = int(match.group(1))
    if quantity < 1:
        return None

    unit_price = Decimal(match.group(3))
    return LineItem(
        name=match.group(2).strip(),
        quantity=quantity,
        unit_price=unit_price,
        line_total=line_total(quantity, unit_price),
    )


def extract_items(text: str) -> List[LineItem]:
    """
    Collect the line items listed after the first "Items:" header.

    Scanning stops at the first section label (Total, Delivery, Location,
    Contact, Payment). Lines that are not item-shaped are skipped.

    Returns:
        Items in source order, empty if there is no items block
    """
    items: List[LineItem] = []
    state = ItemBlockState.OUTSIDE_ITEMS

    for line in split_lines(text):
        if state is ItemBlockState.OUTSIDE_ITEMS:
            if ITEMS_HEADER_RE.match(line):
                state = ItemBlockState.INSIDE_ITEMS
        elif BLOCK_TERMINATOR_RE.match(line):
            state = ItemBlockState.TERMINATED
        else:
            item = parse_item_line(line)
            if item is not None:
                items.append(item)

        if state is ItemBlockState.TERMINATED:
            break

    return items
