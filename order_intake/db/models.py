"""Database models."""
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Order(Base):
    """Order received as a WhatsApp message."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    wa_message_id = Column(String, unique=True, index=True, nullable=True)
    customer_name = Column(String, nullable=False)
    phone = Column(String, default="", nullable=False)
    address = Column(String, default="", nullable=False)
    delivery_date = Column(String, nullable=True)
    delivery_time = Column(String, default="", nullable=False)
    order_status = Column(String, default="new", nullable=False)  # new, confirmed, delivered, cancelled
    payment_status = Column(String, default="unpaid", nullable=False)  # unpaid, paid
    requires_review = Column(Boolean, default=True, nullable=False)
    raw_message_text = Column(Text, nullable=True)
    items_json = Column(JSON, nullable=True)  # List of {name, quantity, unit_price, line_total}
    stated_total = Column(Numeric, nullable=True)
    computed_total = Column(Numeric, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
