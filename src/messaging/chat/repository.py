"""Chat lookups for the inbox and for de-duplicating new chats."""

from messaging.chat.chat import Chat
from messaging.domain import messaging


def _same(value, other) -> bool:
    return (str(value) if value else None) == (str(other) if other else None)


@messaging.repository(part_of=Chat)
class ChatRepository:
    def find_existing(self, buyer_id, seller_id, order_id=None) -> Chat | None:
        """The chat already open between this buyer and seller about ``order_id``.

        A pair shares one chat per order, plus one chat with no order. The
        product a chat was started from does not split it.
        """
        candidates = self._dao.query.filter(buyer_id=str(buyer_id), seller_id=str(seller_id)).all().items
        for chat in candidates:
            if _same(chat.order_id, order_id):
                return self.get(chat.id)
        return None

    def for_user(self, user_id) -> list[Chat]:
        """Every chat the user takes part in, most recent activity first."""
        as_buyer = self._dao.query.filter(buyer_id=str(user_id)).all().items
        as_seller = self._dao.query.filter(seller_id=str(user_id)).all().items
        chats = {str(chat.id): chat for chat in [*as_buyer, *as_seller]}
        loaded = [self.get(chat_id) for chat_id in chats]
        return sorted(loaded, key=lambda c: c.last_message_at, reverse=True)
