# Role: Prompt assembly. Turns the current history plus the new user prompt into the single text payload
# sent to the model. Kept behind a small protocol so a windowing/summarizing strategy can replace it.

from __future__ import annotations

from typing import Protocol, Sequence

from gemini_chat.models.turn import Turn


class ContextBuilder(Protocol):
    def build(self, history: Sequence[Turn], prompt: str) -> str:
        ...


class FullHistoryContextBuilder:
    """
    Resends the whole conversation on every turn: every history line joined with newlines,
    then a newline and the role-prefixed new prompt. No truncation, no windowing.
    """

    def build(self, history: Sequence[Turn], prompt: str) -> str:
        previous = "\n".join(turn.display for turn in history)
        return f"{previous}\n{Turn.user(prompt).display}"
