"""Starting chats, sending messages and read receipts: commands and handler."""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from messaging.chat.chat import Chat
from messaging.domain import logger, messaging
from shared.session import NotAuthorized


@messaging.command(part_of="Chat")
class StartChat:
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier()
    order_id = Identifier()
    requested_by = Identifier(required=True)


@messaging.command(part_of="Chat")
class SendMessage:
    chat_id = Identifier(required=True)
    sender_id = Identifier(required=True)
    text = Text(required=True)
    attachments = Text()  # JSON array of attachment URLs


@messaging.command(part_of="Chat")
class MarkChatRead:
    chat_id = Identifier(required=True)
    reader_id = Identifier(required=True)


@messaging.command_handler(part_of=Chat)
class ConversationHandler:
    @handle(StartChat)
    def start_chat(self, command):
        if str(command.requested_by) not in (str(command.buyer_id), str(command.seller_id)):
            raise NotAuthorized("You can only start chats you take part in")

        repo = current_domain.repository_for(Chat)
        existing = repo.find_existing(command.buyer_id, command.seller_id, order_id=command.order_id)
        if existing is not None:
            return str(existing.id)

        chat = Chat.start(
            buyer_id=command.buyer_id,
            seller_id=command.seller_id,
            product_id=command.product_id,
            order_id=command.order_id,
        )
        repo.add(chat)

        logger.info("chat_started", chat_id=str(chat.id), buyer_id=str(chat.buyer_id), seller_id=str(chat.seller_id))
        return str(chat.id)

    @handle(SendMessage)
    def send_message(self, command):
        attachments = json.loads(command.attachments) if command.attachments else []

        repo = current_domain.repository_for(Chat)
        chat = repo.get(command.chat_id)
        message = chat.send(command.sender_id, command.text, attachments=attachments)
        repo.add(chat)
        return str(message.id)

    @handle(MarkChatRead)
    def mark_chat_read(self, command):
        repo = current_domain.repository_for(Chat)
        chat = repo.get(command.chat_id)
        marked = chat.mark_read(command.reader_id)
        if marked:
            repo.add(chat)
        return marked
