"""WhatsApp Cloud API webhook payload helpers."""
from typing import Any, Optional

from pydantic import BaseModel


class InboundMessage(BaseModel):
    """The first message carried by a webhook notification."""

    message_id: Optional[str] = None
    message_type: Optional[str] = None
    text: str = ""

    @property
    def is_text(self) -> bool:
        return self.message_type == "text"


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _get(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key)
    return None


def extract_inbound_message(payload: Any) -> Optional[InboundMessage]:
    """
    Pull the first message out of entry[0].changes[0].value.messages[0].

    Status notifications and malformed bodies have no message and yield None.
    """
    entry = _first(_get(payload, "entry"))
    change = _first(_get(entry, "changes"))
    message = _first(_get(_get(change, "value"), "messages"))
    if not isinstance(message, dict):
        return None

    body = _get(message.get("text"), "body")
    return InboundMessage(
        message_id=message.get("id"),
        message_type=message.get("type"),
        text=body if isinstance(body, str) else "",
    )
