"""Order persistence service."""
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc

from order_intake.db.models import Order
from order_intake.services.ordering.models import ParsedOrder

logger = logging.getLogger(__name__)

UNKNOWN_CUSTOMER = "UNKNOWN"


class OrderPersistenceService:
    """Service for persisting parsed orders."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(
        self,
        parsed: ParsedOrder,
        raw_message_text: str,
        wa_message_id: Optional[str] = None,
        order_status: str = "new",
        payment_status: str = "unpaid",
    ) -> Order:
        """
        Store a parsed order or return the one already stored for this message.

        Args:
            parsed: Result of parsing the message text
            raw_message_text: Message body as received
            wa_message_id: WhatsApp message id, used to skip redeliveries
            order_status: Initial order status
            payment_status: Initial payment status

        Returns:
            The stored Order
        """
        if wa_message_id:
            existing_order = await self.get_order_by_message_id(wa_message_id)
            if existing_order:
                logger.info(
                    f"[ORDER PERSISTENCE] Message already stored, skipping - "
                    f"wa_message_id: {wa_message_id}, order_id: {existing_order.id}"
                )
                return existing_order

        order = Order(
            wa_message_id=wa_message_id,
            customer_name=parsed.customer_name or UNKNOWN_CUSTOMER,
            phone=parsed.phone or "",
            address=parsed.address or "",
            delivery_date=parsed.delivery_date,
            delivery_time=parsed.delivery_time or "",
            order_status=order_status,
            payment_status=payment_status,
            requires_review=parsed.requires_review,
            raw_message_text=raw_message_text,
            items_json=[item.model_dump(mode="json") for item in parsed.items],
            stated_total=parsed.stated_total,
            computed_total=parsed.computed_total,
        )
        self.db.add(order)
        await self.db.commit()
        await self.db.refresh(order)
        return order

    async def get_order_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID."""
        result = await self.db.execute(select(Order).where(Order.id == order_id))
        return result.scalar_one_or_none()

    async def get_order_by_message_id(self, wa_message_id: str) -> Optional[Order]:
        """Get order by WhatsApp message ID."""
        result = await self.db.execute(
            select(Order).where(Order.wa_message_id == wa_message_id)
        )
        return result.scalar_one_or_none()

    async def list_orders(
        self, limit: int = 100, requires_review: Optional[bool] = None
    ) -> List[Order]:
        """List orders newest first, optionally only those (not) needing review."""
        query = select(Order)
        if requires_review is not None:
            query = query.where(Order.requires_review == requires_review)
        result = await self.db.execute(
            query.order_by(desc(Order.created_at), desc(Order.id)).limit(limit)
        )
        return list(result.scalars().all())

    async def resolve_review(self, order_id: int) -> Optional[Order]:
        """Clear the review flag once someone has checked the order."""
        order = await self.get_order_by_id(order_id)
        if order:
            order.requires_review = False
            await self.db.commit()
            await self.db.refresh(order)
        return order
