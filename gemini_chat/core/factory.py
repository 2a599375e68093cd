# Role: Wires a ConversationController from Settings (Gemini client, failure policy, optional timeout).
# Shared by the HTTP adapter and the CLI so both front-ends behave identically.

from __future__ import annotations

from typing import Optional

from gemini_chat.config import Settings, get_settings
from gemini_chat.core.conversation_controller import ConversationController
from gemini_chat.llm.gemini_client import GeminiClient


def build_controller(settings: Optional[Settings] = None) -> ConversationController:
    settings = settings or get_settings()
    client = GeminiClient(
        api_key=settings.api_key,
        model=settings.model,
        temperature=settings.temperature,
    )
    return ConversationController(
        client,
        failure_policy=settings.failure_policy,
        timeout_seconds=settings.request_timeout,
    )
