"""Domain events for the Chat aggregate."""

from protean.fields import DateTime, Identifier, Integer, Text

from messaging.domain import messaging


@messaging.event(part_of="Chat")
class ChatStarted:
    __version__ = 1

    chat_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier()
    order_id = Identifier()
    started_at = DateTime(required=True)


@messaging.event(part_of="Chat")
class MessageSent:
    """A participant posted a message; open chat windows reload on this."""

    __version__ = 1

    chat_id = Identifier(required=True)
    message_id = Identifier(required=True)
    sender_id = Identifier(required=True)
    text = Text(required=True)
    sent_at = DateTime(required=True)


@messaging.event(part_of="Chat")
class MessagesRead:
    __version__ = 1

    chat_id = Identifier(required=True)
    reader_id = Identifier(required=True)
    message_count = Integer(required=True)
    read_at = DateTime(required=True)
