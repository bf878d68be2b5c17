"""Pydantic request/response schemas for the Messaging API."""

from datetime import datetime

from pydantic import BaseModel, Field


class StartChatRequest(BaseModel):
    """The other participant is the seller when a buyer starts the chat, and vice versa."""

    buyer_id: str | None = None
    seller_id: str | None = None
    product_id: str | None = None
    order_id: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"seller_id": "seller-001", "product_id": "prod-001"}]}}


class SendMessageRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=5000)
    attachments: list[str] = Field(default_factory=list)


class ChatIdResponse(BaseModel):
    chat_id: str


class MessageIdResponse(BaseModel):
    message_id: str


class MarkReadResponse(BaseModel):
    marked: int


class ChatResponse(BaseModel):
    chat_id: str
    buyer_id: str
    seller_id: str
    product_id: str | None = None
    order_id: str | None = None
    unread_count: int = 0
    last_message_at: datetime | None = None


class ChatSummaryResponse(BaseModel):
    chat_id: str
    buyer_id: str
    seller_id: str
    last_message_preview: str | None = None
    last_sender_id: str | None = None
    message_count: int = 0
    last_message_at: datetime | None = None


class MessageResponse(BaseModel):
    message_id: str
    sender_id: str
    text: str
    attachments: list[str] = Field(default_factory=list)
    read_by: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
