"""
Data models for events published on the storefront event bus.
"""

import uuid
from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field

from .enums import EventSource


class StorefrontEvent(BaseModel):
    """Base event for storefront interactions (cart changes, product loads)."""

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_type: str  # Generic event type name
    payload: dict[str, Any]
    source: EventSource
    timestamp: datetime = Field(default_factory=datetime.now)
