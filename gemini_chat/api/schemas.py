# Role: Request/response shapes for the HTTP adapter. History travels as display lines, exactly as rendered.

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from gemini_chat.core.conversation_controller import TurnOutcome
from gemini_chat.models.state import ChatState


class ChatRequest(BaseModel):
    prompt: str


class StateSnapshot(BaseModel):
    history: List[str]
    is_loading: bool

    @classmethod
    def from_state(cls, state: ChatState) -> "StateSnapshot":
        return cls(history=state.display_lines(), is_loading=state.is_loading)


class ChatResponse(BaseModel):
    outcome: TurnOutcome
    state: StateSnapshot
