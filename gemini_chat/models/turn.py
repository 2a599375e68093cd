# Role: Single history entry. A Turn is one displayed line of the conversation (user prompt, model answer or
# error marker). Frozen pydantic model: once appended to history it never changes.

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

USER_PREFIX = "🧑‍💻: "
MODEL_PREFIX = "🤖: "
ERROR_MARKER = "⚠️ Error en la consulta"
NO_RESPONSE_TEXT = "No se recibió respuesta"


class Role(str, Enum):
    USER = "user"
    MODEL = "model"
    ERROR = "error"


class Turn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    text: str

    @classmethod
    def user(cls, text: str) -> "Turn":
        return cls(role=Role.USER, text=text)

    @classmethod
    def model(cls, text: str) -> "Turn":
        return cls(role=Role.MODEL, text=text)

    @classmethod
    def error(cls) -> "Turn":
        return cls(role=Role.ERROR, text=ERROR_MARKER)

    @property
    def display(self) -> str:
        # Key line: this exact string is both what the UI shows and what gets resent as context.
        if self.role == Role.USER:
            return f"{USER_PREFIX}{self.text}"
        if self.role == Role.MODEL:
            return f"{MODEL_PREFIX}{self.text}"
        return self.text
