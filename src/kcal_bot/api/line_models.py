"""Pydantic models for LINE webhook payloads."""

from pydantic import BaseModel, Field


class LineSource(BaseModel):
    """Event source payload."""

    type: str
    user_id: str | None = Field(default=None, alias="userId")


class LineMessage(BaseModel):
    """Message payload of a message event."""

    id: str
    type: str
    text: str | None = None


class LineEvent(BaseModel):
    """Single webhook event."""

    type: str
    timestamp: int | None = None
    reply_token: str | None = Field(default=None, alias="replyToken")
    source: LineSource | None = None
    message: LineMessage | None = None


class LineWebhookPayload(BaseModel):
    """LINE webhook request body."""

    destination: str | None = None
    events: list[LineEvent] = Field(default_factory=list)
