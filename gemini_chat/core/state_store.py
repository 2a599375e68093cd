# Role: In-memory owner of the chat session. Holds history + loading flag, lets the controller mutate them
# and publishes a frozen ChatState snapshot to every subscriber after each change.

from __future__ import annotations

import logging
from typing import Callable, List

from gemini_chat.models.state import ChatState
from gemini_chat.models.turn import Turn

logger = logging.getLogger(__name__)

Subscriber = Callable[[ChatState], None]


class ChatStateStore:
    def __init__(self) -> None:
        self._history: List[Turn] = []
        self._is_loading = False
        self._subscribers: List[Subscriber] = []

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    def snapshot(self) -> ChatState:
        return ChatState(history=tuple(self._history), is_loading=self._is_loading)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def append(self, *turns: Turn) -> None:
        # Key line: several turns from one outcome land together and produce a single notification.
        self._history.extend(turns)
        self._notify()

    def set_loading(self, value: bool) -> None:
        self._is_loading = value
        self._notify()

    def _notify(self) -> None:
        state = self.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("state subscriber %r failed", callback)
