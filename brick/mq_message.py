"""Construction of outgoing message-queue messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from brick.trace import Context, get_trace_id

DELIVERY_MODE_TRANSIENT = 0
DELIVERY_MODE_PERSISTENT = 2


@dataclass
class Publishing:
    """A message ready to be published to a broker."""

    body: bytes = b""
    headers: dict[str, Any] = field(default_factory=dict)
    content_type: str = ""
    content_encoding: str = ""
    delivery_mode: int = DELIVERY_MODE_TRANSIENT
    priority: int = 0
    message_id: str = ""
    timestamp: datetime | None = None
    type: str = ""


def build_text_msg_for_publish(
    ctx: Context, body: bytes, persistent: bool, *priorities: int
) -> Publishing:
    """Build a plain-text message whose id is the context's trace ID.

    The first of ``priorities`` is used as the priority; the default is 0.
    """
    priority = priorities[0] if priorities else 0
    if not 0 <= priority <= 255:
        raise ValueError(f"priority {priority} does not fit in an unsigned byte")
    return Publishing(
        body=bytes(body),
        headers={},
        content_type="text/plain",
        content_encoding="",
        delivery_mode=DELIVERY_MODE_PERSISTENT if persistent else DELIVERY_MODE_TRANSIENT,
        priority=priority,
        message_id=get_trace_id(ctx),
        timestamp=datetime.now(),
    )