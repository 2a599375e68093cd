# Role: Minimal wrapper around the Gemini API. Centralizes model name, temperature and error handling,
# so the rest of the code awaits a single method: agenerate_text(prompt).

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from google import genai

from gemini_chat.config import DEFAULT_MODEL

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """The external generation call failed (transport, remote rejection or SDK error)."""


class GeminiClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> None:
        # Key lines:
        # - Reads secrets from env (no secrets in code).
        # - Model and temperature are configurable; temperature is left to the API default when unset.
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise RuntimeError("Missing GEMINI_API_KEY in environment or .env")

        self.model_name = model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
        self.temperature = temperature

        self.client = genai.Client(api_key=self.api_key)

    def _config(self) -> Optional[Dict[str, Any]]:
        if self.temperature is None:
            return None
        return {"temperature": self.temperature}

    @staticmethod
    def _text_of(resp: Any) -> str:
        # An absent body is not an error here; callers decide what an empty answer means.
        return getattr(resp, "text", None) or ""

    async def agenerate_text(self, prompt: str) -> str:
        logger.debug("gemini request model=%s chars=%d", self.model_name, len(prompt))
        try:
            resp = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self._config(),
            )
        except Exception as e:
            raise GenerationError(f"Gemini API call failed: {e}") from e

        return self._text_of(resp)
