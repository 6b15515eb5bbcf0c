"""WhatsApp Cloud API webhook endpoints."""
import json
import logging
from typing import Optional
from fastapi import APIRouter, Request, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from order_intake.core.config import Settings
from order_intake.core.dependencies import get_settings
from order_intake.db.database import get_db
from order_intake.services.ordering.parser import parse_message
from order_intake.services.persistence.orders import OrderPersistenceService
from order_intake.services.whatsapp.payload import extract_inbound_message

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/whatsapp")
async def verify_webhook(
    request: Request,
    mode: Optional[str] = Query(None, alias="hub.mode"),
    token: Optional[str] = Query(None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(None, alias="hub.challenge"),
    settings: Settings = Depends(get_settings),
):
    """
    Answer the webhook verification handshake.

    Meta calls this once when the webhook is registered and expects the
    challenge echoed back.
    """
    logger.info(
        f"[WHATSAPP VERIFY] Verification requested - mode: {mode}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    if mode == "subscribe" and token == settings.whatsapp_verify_token:
        logger.info("[WHATSAPP VERIFY] Verification succeeded")
        return PlainTextResponse(challenge or "", status_code=200)

    logger.warning(f"[WHATSAPP VERIFY] Verification failed - mode: {mode}")
    return PlainTextResponse("Verification failed", status_code=403)


@router.post("/whatsapp")
async def receive_message(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Receive a message notification, parse it and store the order.

    Always acknowledges with 200 unless something unexpected breaks, so the
    platform does not keep redelivering the same notification.
    """
    try:
        payload = await request.json()
        logger.debug(f"[WHATSAPP WEBHOOK] Full webhook body: {json.dumps(payload, indent=2)}")

        message = extract_inbound_message(payload)
        if message is None or not message.is_text:
            logger.info(
                f"[WHATSAPP WEBHOOK] No text message in notification - "
                f"type: {message.message_type if message else None}"
            )
            return PlainTextResponse("No text message")

        if not message.text.startswith(settings.order_message_prefix):
            logger.info(
                f"[WHATSAPP WEBHOOK] Ignoring message without order prefix - "
                f"wa_message_id: {message.message_id}"
            )
            return PlainTextResponse("Ignored")

        parsed = parse_message(message.text)
        logger.info(
            f"[WHATSAPP WEBHOOK] Parsed order - wa_message_id: {message.message_id}, "
            f"items: {len(parsed.items)}, computed_total: {parsed.computed_total}, "
            f"requires_review: {parsed.requires_review}"
        )

        order_persistence = OrderPersistenceService(db)
        try:
            order = await order_persistence.create_order(
                parsed,
                raw_message_text=message.text,
                wa_message_id=message.message_id,
            )
            logger.info(
                f"[WHATSAPP WEBHOOK] Order stored - order_id: {order.id}, "
                f"wa_message_id: {message.message_id}"
            )
        except SQLAlchemyError as e:
            logger.error(
                f"[WHATSAPP WEBHOOK] Error storing order - wa_message_id: {message.message_id}, "
                f"Error: {type(e).__name__}: {str(e)}",
                exc_info=True
            )
            await db.rollback()

        return PlainTextResponse("Message received")

    except Exception as e:
        logger.error(
            f"[WHATSAPP WEBHOOK] Error processing notification - "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        return PlainTextResponse("Server error", status_code=500)
