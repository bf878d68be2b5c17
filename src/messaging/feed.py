"""Message feed: tell open chat windows that a chat has new messages.

Subscribers register per chat. A MessageSent event only says "something
changed"; each ChatSubscription answers by reloading the full message list,
so duplicate or out-of-order notifications leave it in the same state.
"""

import threading
from collections import defaultdict
from collections.abc import Callable

import structlog
from protean.utils.mixins import handle

from messaging.chat.chat import Chat
from messaging.chat.events import MessageSent
from messaging.chat.queries import messages_for_chat
from messaging.domain import messaging

logger = structlog.get_logger(__name__)


class MessageFeed:
    """In-process registry of per-chat callbacks."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: dict[str, list[Callable]] = defaultdict(list)

    def subscribe(self, chat_id, callback: Callable) -> Callable[[], None]:
        """Register ``callback(chat_id)``; returns a function that unsubscribes it."""
        key = str(chat_id)
        with self._lock:
            self._subscribers[key].append(callback)

        def unsubscribe():
            with self._lock:
                callbacks = self._subscribers.get(key, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._subscribers.pop(key, None)

        return unsubscribe

    def subscriber_count(self, chat_id) -> int:
        with self._lock:
            return len(self._subscribers.get(str(chat_id), []))

    def notify(self, chat_id) -> None:
        key = str(chat_id)
        with self._lock:
            callbacks = list(self._subscribers.get(key, []))

        for callback in callbacks:
            try:
                callback(key)
            except Exception:
                # Keep notifying the remaining subscribers
                logger.exception("feed_callback_failed", chat_id=key)


feed = MessageFeed()


class ChatSubscription:
    """An open chat window: holds the latest message list for one participant."""

    def __init__(self, chat_id, user_id, message_feed: MessageFeed = feed):
        self.chat_id = str(chat_id)
        self.user_id = str(user_id)
        self.messages = []
        self.reload_count = 0
        self._feed = message_feed
        self._unsubscribe = None

    def open(self):
        self.reload()
        self._unsubscribe = self._feed.subscribe(self.chat_id, self._on_change)
        return self

    def close(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def reload(self):
        with messaging.domain_context():
            self.messages = messages_for_chat(self.chat_id, self.user_id)
        self.reload_count += 1

    def _on_change(self, chat_id):
        self.reload()

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc_info):
        self.close()


@messaging.event_handler(part_of=Chat)
class MessageFeedEventHandler:
    @handle(MessageSent)
    def on_message_sent(self, event: MessageSent) -> None:
        feed.notify(event.chat_id)
