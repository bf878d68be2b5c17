"""Chat summary: inbox row per chat with the latest message preview."""

from protean.core.projector import on
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from messaging.chat.chat import Chat
from messaging.chat.events import ChatStarted, MessageSent
from messaging.domain import messaging

PREVIEW_LENGTH = 80


@messaging.projection(limit=None)
class ChatSummary:
    chat_id = Identifier(identifier=True, required=True)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier()
    order_id = Identifier()
    last_message_preview = String(max_length=PREVIEW_LENGTH + 3)
    last_sender_id = Identifier()
    message_count = Integer(default=0)
    last_message_at = DateTime()


def _preview(text):
    return text if len(text) <= PREVIEW_LENGTH else text[:PREVIEW_LENGTH] + "..."


@messaging.projector(projector_for=ChatSummary, aggregates=[Chat])
class ChatSummaryProjector:
    @on(ChatStarted)
    def on_chat_started(self, event):
        current_domain.repository_for(ChatSummary).add(
            ChatSummary(
                chat_id=event.chat_id,
                buyer_id=event.buyer_id,
                seller_id=event.seller_id,
                product_id=event.product_id,
                order_id=event.order_id,
                message_count=0,
                last_message_at=event.started_at,
            )
        )

    @on(MessageSent)
    def on_message_sent(self, event):
        repo = current_domain.repository_for(ChatSummary)
        summary = repo.get(event.chat_id)
        summary.last_message_preview = _preview(event.text)
        summary.last_sender_id = event.sender_id
        summary.message_count = (summary.message_count or 0) + 1
        summary.last_message_at = event.sent_at
        repo.add(summary)


def inbox_for(user_id) -> list[ChatSummary]:
    repo = current_domain.repository_for(ChatSummary)
    rows = [
        *repo._dao.query.filter(buyer_id=str(user_id)).all().items,
        *repo._dao.query.filter(seller_id=str(user_id)).all().items,
    ]
    return sorted(rows, key=lambda r: r.last_message_at, reverse=True)
