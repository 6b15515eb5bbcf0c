"""Order API endpoints."""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Request, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel

from order_intake.db.database import get_db
from order_intake.db.models import Order
from order_intake.services.ordering.models import ParsedOrder
from order_intake.services.ordering.parser import parse_message
from order_intake.services.persistence.orders import OrderPersistenceService


router = APIRouter()
logger = logging.getLogger(__name__)


class ParseRequest(BaseModel):
    """Message text to parse."""
    text: str


class OrderItemResponse(BaseModel):
    """Order item response model."""
    name: str
    quantity: int
    unit_price: float | None = None
    line_total: float


class OrderResponse(BaseModel):
    """Order response model."""
    id: int
    wa_message_id: str | None = None
    customer_name: str
    phone: str
    address: str
    delivery_date: str | None = None
    delivery_time: str
    order_status: str
    payment_status: str
    requires_review: bool
    raw_message_text: str | None = None
    items: List[OrderItemResponse] = []
    stated_total: float | None = None
    computed_total: float
    created_at: str


def to_order_response(order: Order) -> OrderResponse:
    """Convert a stored order to its response model."""
    return OrderResponse(
        id=order.id,
        wa_message_id=order.wa_message_id,
        customer_name=order.customer_name,
        phone=order.phone,
        address=order.address,
        delivery_date=order.delivery_date,
        delivery_time=order.delivery_time,
        order_status=order.order_status,
        payment_status=order.payment_status,
        requires_review=order.requires_review,
        raw_message_text=order.raw_message_text,
        items=[OrderItemResponse(**item) for item in order.items_json or []],
        stated_total=float(order.stated_total) if order.stated_total is not None else None,
        computed_total=float(order.computed_total or 0),
        created_at=order.created_at.isoformat() if order.created_at else "",
    )


@router.post("/api/orders/parse", response_model=ParsedOrder)
async def parse_order_text(parse_req: ParseRequest):
    """Parse message text without storing it."""
    parsed = parse_message(parse_req.text)
    logger.info(
        f"[ORDERS PARSE] Parsed preview - items: {len(parsed.items)}, "
        f"requires_review: {parsed.requires_review}"
    )
    return parsed


@router.get("/api/orders", response_model=List[OrderResponse])
async def list_orders(
    request: Request,
    limit: int = 100,
    requires_review: Optional[bool] = None,
    db: AsyncSession = Depends(get_db),
):
    """List stored orders, newest first."""
    logger.info(
        f"[ORDERS LIST] Request received - limit: {limit}, requires_review: {requires_review}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        orders = await OrderPersistenceService(db).list_orders(
            limit=limit, requires_review=requires_review
        )
        logger.info(f"[ORDERS LIST] Found {len(orders)} orders in database")
        return [to_order_response(order) for order in orders]

    except Exception as e:
        logger.error(
            f"[ORDERS LIST] Error fetching orders - "
            f"limit: {limit}, Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error fetching orders: {str(e)}")


@router.get("/api/orders/{order_id}", response_model=OrderResponse)
async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single stored order."""
    order = await OrderPersistenceService(db).get_order_by_id(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return to_order_response(order)


@router.post("/api/orders/{order_id}/resolve-review", response_model=OrderResponse)
async def resolve_order_review(order_id: int, db: AsyncSession = Depends(get_db)):
    """Mark an order as checked by a human."""
    order = await OrderPersistenceService(db).resolve_review(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    logger.info(f"[ORDERS REVIEW] Review resolved - order_id: {order_id}")
    return to_order_response(order)
