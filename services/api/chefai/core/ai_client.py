import logging
from typing import Optional, Type, Callable
from datetime import datetime, timezone

from pydantic import BaseModel
from google import genai
from google.genai import types

from ..settings import settings
from ..ai.utils import normalize_model_id

logger = logging.getLogger("chefai.ai")


class AIRequestError(Exception):
    """A generation call failed. ``rate_limited`` marks quota / 429 failures."""

    def __init__(self, message: str, rate_limited: bool = False):
        super().__init__(message)
        self.rate_limited = rate_limited


def is_rate_limit_error(e: Exception) -> bool:
    if getattr(e, "code", None) == 429:
        return True
    text = str(e)
    return "429" in text or "RESOURCE_EXHAUSTED" in text or "quota" in text.lower()


class AIClient:
    """Gemini text client bound to one API key."""

    def __init__(self, api_key: str, model: Optional[str] = None):
        self.api_key = api_key
        self.model = normalize_model_id(model or settings.gemini_text_model)
        self._client = genai.Client(api_key=api_key)
        self.last_error: Optional[str] = None
        self.last_error_at: Optional[datetime] = None

    def _record_error(self, e: Exception):
        self.last_error = f"{e.__class__.__name__}: {str(e)}"
        self.last_error_at = datetime.now(timezone.utc)

    async def _generate(self, prompt: str, config: types.GenerateContentConfig) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            self._record_error(e)
            logger.error(f"Gemini generation failed with model {self.model}: {e}")
            raise AIRequestError(str(e), rate_limited=is_rate_limit_error(e)) from e

        if not response.text:
            logger.warning(f"Gemini returned empty response from model {self.model}")
            raise AIRequestError("Empty response from AI service")
        return response.text

    async def generate_text(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        """Free-form completion. Raises AIRequestError on any failure."""
        config = types.GenerateContentConfig(system_instruction=system_instruction)
        return await self._generate(prompt, config)

    async def generate_json(
        self,
        prompt: str,
        response_schema: Type[BaseModel],
        system_instruction: Optional[str] = None,
    ) -> str:
        """
        JSON-mode completion constrained by ``response_schema``.
        Returns the raw response text; validating it is up to the caller.
        """
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=response_schema,
            system_instruction=system_instruction,
        )
        return await self._generate(prompt, config)


AIClientFactory = Callable[[str], AIClient]
