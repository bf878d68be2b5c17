"""Chat aggregate with its Message entities."""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Text

from messaging.chat.events import ChatStarted, MessageSent, MessagesRead
from messaging.domain import messaging
from shared.session import NotAuthorized


@messaging.entity(part_of="Chat", limit=None)
class Message:
    sender_id = Identifier(required=True)
    text = Text(required=True)
    attachments = Text()  # JSON array of attachment URLs
    read_by = Text()  # JSON array of user ids
    created_at = DateTime()

    @property
    def readers(self) -> list[str]:
        return json.loads(self.read_by) if self.read_by else []

    @property
    def attachment_urls(self) -> list[str]:
        return json.loads(self.attachments) if self.attachments else []

    def is_read_by(self, user_id) -> bool:
        return str(user_id) in self.readers


@messaging.aggregate(limit=None)
class Chat:
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier()
    order_id = Identifier()
    messages = HasMany(Message)
    last_message_at = DateTime()
    created_at = DateTime()

    @classmethod
    def start(cls, buyer_id, seller_id, product_id=None, order_id=None):
        if str(buyer_id) == str(seller_id):
            raise ValidationError({"seller_id": ["You cannot start a chat with yourself"]})

        now = datetime.now(UTC)
        chat = cls(
            buyer_id=buyer_id,
            seller_id=seller_id,
            product_id=product_id,
            order_id=order_id,
            last_message_at=now,
            created_at=now,
        )
        chat.raise_(
            ChatStarted(
                chat_id=str(chat.id),
                buyer_id=str(buyer_id),
                seller_id=str(seller_id),
                product_id=str(product_id) if product_id else None,
                order_id=str(order_id) if order_id else None,
                started_at=now,
            )
        )
        return chat

    @property
    def participants(self) -> tuple[str, str]:
        return (str(self.buyer_id), str(self.seller_id))

    def require_participant(self, user_id):
        if str(user_id) not in self.participants:
            raise NotAuthorized("Only the buyer and seller in this chat can access it")

    def ordered_messages(self) -> list[Message]:
        return sorted(self.messages, key=lambda m: m.created_at)

    def send(self, sender_id, text, attachments=None):
        self.require_participant(sender_id)

        text = (text or "").strip()
        if not text:
            raise ValidationError({"text": ["Message cannot be empty"]})

        now = datetime.now(UTC)
        message = Message(
            sender_id=sender_id,
            text=text,
            attachments=json.dumps(list(attachments or [])),
            read_by=json.dumps([str(sender_id)]),
            created_at=now,
        )
        self.add_messages(message)
        self.last_message_at = now

        self.raise_(
            MessageSent(
                chat_id=str(self.id),
                message_id=str(message.id),
                sender_id=str(sender_id),
                text=text,
                sent_at=now,
            )
        )
        return message

    def mark_read(self, reader_id) -> int:
        """Mark the other participant's messages as read; returns how many changed."""
        self.require_participant(reader_id)

        reader = str(reader_id)
        marked = 0
        for message in self.messages:
            if str(message.sender_id) == reader or message.is_read_by(reader):
                continue
            message.read_by = json.dumps(message.readers + [reader])
            marked += 1

        if marked:
            self.raise_(
                MessagesRead(
                    chat_id=str(self.id),
                    reader_id=reader,
                    message_count=marked,
                    read_at=datetime.now(UTC),
                )
            )
        return marked

    def unread_count(self, user_id) -> int:
        user = str(user_id)
        return sum(1 for m in self.messages if str(m.sender_id) != user and not m.is_read_by(user))
