"""Order models."""
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Decimal internally, plain JSON number on the wire
Money = Annotated[
    Decimal,
    PlainSerializer(lambda value: float(value), return_type=float, when_used="json"),
]


class LineItem(BaseModel):
    """One parsed line of the items block; line_total is quantity x unit_price."""

    model_config = ConfigDict(frozen=True)

    name: str
    quantity: int = Field(gt=0)
    unit_price: Money = Field(ge=0)
    line_total: Money = Field(ge=0)


class ParsedOrder(BaseModel):
    """Structured order extracted from a single message."""

    model_config = ConfigDict(frozen=True)

    customer_name: Optional[str] = None
    delivery_date: Optional[str] = None
    delivery_time: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    items: List[LineItem] = []
    stated_total: Optional[Money] = None
    computed_total: Money = Decimal("0.00")
    requires_review: bool = True
    review_reasons: List[str] = []
