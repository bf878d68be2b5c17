"""Read side of the inbox: chat lists, message history and unread counts."""

from protean.utils.globals import current_domain

from messaging.chat.chat import Chat, Message


def chats_for_user(user_id) -> list[Chat]:
    return current_domain.repository_for(Chat).for_user(user_id)


def messages_for_chat(chat_id, user_id) -> list[Message]:
    """Oldest first; only the chat's participants may read it."""
    chat = current_domain.repository_for(Chat).get(chat_id)
    chat.require_participant(user_id)
    return chat.ordered_messages()


def unread_count(chat_id, user_id) -> int:
    chat = current_domain.repository_for(Chat).get(chat_id)
    chat.require_participant(user_id)
    return chat.unread_count(user_id)
