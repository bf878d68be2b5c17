"""FastAPI routes for the Messaging domain."""

import json

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from identity.sessions import resolve_profile_role, resolve_session
from messaging.api.schemas import (
    ChatIdResponse,
    ChatResponse,
    ChatSummaryResponse,
    MarkReadResponse,
    MessageIdResponse,
    MessageResponse,
    SendMessageRequest,
    StartChatRequest,
)
from messaging.chat.conversation import MarkChatRead, SendMessage, StartChat
from messaging.chat.queries import chats_for_user, messages_for_chat
from messaging.projections.chat_summary import inbox_for
from shared.session import Role, Session

router = APIRouter(prefix="/chats", tags=["chats"])


@router.post("", status_code=201, response_model=ChatIdResponse)
async def start_chat(
    body: StartChatRequest,
    session: Session = Depends(resolve_session),
    role_of=Depends(resolve_profile_role),
) -> ChatIdResponse:
    if session.is_seller:
        buyer_id, seller_id = body.buyer_id, session.user_id
        counterpart, expected_role = buyer_id, Role.BUYER.value
    else:
        buyer_id, seller_id = session.user_id, body.seller_id
        counterpart, expected_role = seller_id, Role.SELLER.value

    if not buyer_id or not seller_id:
        raise ValidationError({"participants": ["Both a buyer and a seller are required"]})

    if role_of(counterpart) != expected_role:
        raise ValidationError({"participants": [f"{counterpart} is not a registered {expected_role}"]})

    command = StartChat(
        buyer_id=buyer_id,
        seller_id=seller_id,
        product_id=body.product_id,
        order_id=body.order_id,
        requested_by=session.user_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return ChatIdResponse(chat_id=result)


@router.get("", response_model=list[ChatResponse])
async def list_chats(session: Session = Depends(resolve_session)) -> list[ChatResponse]:
    return [
        ChatResponse(
            chat_id=str(chat.id),
            buyer_id=str(chat.buyer_id),
            seller_id=str(chat.seller_id),
            product_id=str(chat.product_id) if chat.product_id else None,
            order_id=str(chat.order_id) if chat.order_id else None,
            unread_count=chat.unread_count(session.user_id),
            last_message_at=chat.last_message_at,
        )
        for chat in chats_for_user(session.user_id)
    ]


@router.get("/summary", response_model=list[ChatSummaryResponse])
async def list_chat_summaries(session: Session = Depends(resolve_session)) -> list[ChatSummaryResponse]:
    return [
        ChatSummaryResponse(
            chat_id=str(row.chat_id),
            buyer_id=str(row.buyer_id),
            seller_id=str(row.seller_id),
            last_message_preview=row.last_message_preview,
            last_sender_id=str(row.last_sender_id) if row.last_sender_id else None,
            message_count=row.message_count or 0,
            last_message_at=row.last_message_at,
        )
        for row in inbox_for(session.user_id)
    ]


@router.get("/{chat_id}/messages", response_model=list[MessageResponse])
async def list_messages(chat_id: str, session: Session = Depends(resolve_session)) -> list[MessageResponse]:
    return [
        MessageResponse(
            message_id=str(message.id),
            sender_id=str(message.sender_id),
            text=message.text,
            attachments=message.attachment_urls,
            read_by=message.readers,
            created_at=message.created_at,
        )
        for message in messages_for_chat(chat_id, session.user_id)
    ]


@router.post("/{chat_id}/messages", status_code=201, response_model=MessageIdResponse)
async def send_message(
    chat_id: str,
    body: SendMessageRequest,
    session: Session = Depends(resolve_session),
) -> MessageIdResponse:
    command = SendMessage(
        chat_id=chat_id,
        sender_id=session.user_id,
        text=body.text,
        attachments=json.dumps(body.attachments),
    )
    result = current_domain.process(command, asynchronous=False)
    return MessageIdResponse(message_id=result)


@router.put("/{chat_id}/read", response_model=MarkReadResponse)
async def mark_read(chat_id: str, session: Session = Depends(resolve_session)) -> MarkReadResponse:
    command = MarkChatRead(chat_id=chat_id, reader_id=session.user_id)
    result = current_domain.process(command, asynchronous=False)
    return MarkReadResponse(marked=result or 0)
