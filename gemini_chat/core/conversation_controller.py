# Role: Orchestrator for one conversation turn. Guards against overlapping requests, builds the context
# payload, calls the model once and records the outcome (answer, placeholder or error marker) in history.

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Protocol, Tuple

from gemini_chat.core.context_builder import ContextBuilder, FullHistoryContextBuilder
from gemini_chat.core.state_store import ChatStateStore, Subscriber
from gemini_chat.models.state import ChatState
from gemini_chat.models.turn import NO_RESPONSE_TEXT, Turn

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    async def agenerate_text(self, prompt: str) -> str:
        ...


class FailurePolicy(str, Enum):
    DROP_PROMPT = "drop_prompt"
    KEEP_PROMPT = "keep_prompt"


class TurnOutcome(str, Enum):
    ANSWERED = "answered"
    EMPTY_RESPONSE = "empty_response"
    FAILED = "failed"
    DROPPED = "dropped"


class ConversationController:
    def __init__(
        self,
        client: TextGenerator,
        context_builder: Optional[ContextBuilder] = None,
        store: Optional[ChatStateStore] = None,
        failure_policy: FailurePolicy = FailurePolicy.DROP_PROMPT,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        # Key line: dependencies are injectable for testing/mocking.
        self.client = client
        self.context_builder = context_builder or FullHistoryContextBuilder()
        self.store = store or ChatStateStore()
        self.failure_policy = FailurePolicy(failure_policy)
        # None means no timeout: a hung call keeps the controller busy until it returns.
        self.timeout_seconds = timeout_seconds

    @property
    def history(self) -> Tuple[Turn, ...]:
        return self.store.snapshot().history

    @property
    def is_loading(self) -> bool:
        return self.store.is_loading

    def snapshot(self) -> ChatState:
        return self.store.snapshot()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        return self.store.subscribe(callback)

    async def submit_turn(self, prompt_text: str) -> TurnOutcome:
        # 1) Drop the call if a turn is already in flight
        # 2) Mark loading, build the full-history payload
        # 3) Await the model (the only suspension point)
        # 4) Record answer/placeholder, or the error marker on failure
        # 5) Always release the loading flag
        if self.store.is_loading:
            logger.debug("turn dropped: request already in flight")
            return TurnOutcome.DROPPED

        # Key line: check + set happen before the first await, so they are atomic on the event loop.
        self.store.set_loading(True)
        try:
            history = self.store.snapshot().history
            payload = self.context_builder.build(history, prompt_text)
            logger.debug("turn accepted: history=%d payload_chars=%d", len(history), len(payload))

            try:
                text = await self._generate(payload)
            except Exception:
                logger.exception("generation failed")
                if self.failure_policy == FailurePolicy.KEEP_PROMPT:
                    self.store.append(Turn.user(prompt_text), Turn.error())
                else:
                    self.store.append(Turn.error())
                return TurnOutcome.FAILED

            if not text:
                self.store.append(Turn.user(prompt_text), Turn.model(NO_RESPONSE_TEXT))
                return TurnOutcome.EMPTY_RESPONSE

            self.store.append(Turn.user(prompt_text), Turn.model(text))
            return TurnOutcome.ANSWERED
        finally:
            self.store.set_loading(False)

    def start_turn(self, prompt_text: str) -> Optional["asyncio.Task[TurnOutcome]"]:
        """
        Schedule submit_turn on the running loop (fire-and-forget for UI callbacks).
        Returns None without scheduling anything when a turn is already in flight.
        """
        if self.store.is_loading:
            return None
        return asyncio.get_running_loop().create_task(self.submit_turn(prompt_text))

    async def _generate(self, payload: str) -> str:
        call = self.client.agenerate_text(payload)
        if self.timeout_seconds is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.timeout_seconds)
