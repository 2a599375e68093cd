# Role: Read-only snapshot of the chat session handed to observers and adapters
# (history + loading flag). Observers get a fresh frozen copy on every change.

from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from gemini_chat.models.turn import Turn


class ChatState(BaseModel):
    model_config = ConfigDict(frozen=True)

    history: Tuple[Turn, ...] = Field(default_factory=tuple)
    is_loading: bool = False

    def display_lines(self) -> List[str]:
        return [turn.display for turn in self.history]
