"""Text generation backed by Google Gemini."""

import logging
from typing import Any, Optional

from google import genai
from google.genai import types

logger = logging.getLogger('flowscript.genai')

DEFAULT_MODEL = 'gemini-2.5-flash'
DEFAULT_TEMPERATURE = 0.7


class GeminiGenerator:
    """Calls ``generate_content`` on the async Gemini client.

    Failures are reported in-band as text starting with ``Error`` rather
    than raised, which is what the interpreter expects from a generator.
    """
    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_MODEL,
                 temperature: float = DEFAULT_TEMPERATURE, client: Any = None):
        self.model = model
        self.temperature = temperature
        self.client = client if client is not None else genai.Client(api_key=api_key)

    def build_config(self, system_instruction: Optional[str]) -> types.GenerateContentConfig:
        kwargs = {'temperature': self.temperature}
        if system_instruction:
            kwargs['system_instruction'] = system_instruction
        return types.GenerateContentConfig(**kwargs)

    async def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self.build_config(system_instruction),
            )
        except Exception as e:
            logger.debug('generation failed', exc_info=True)
            return f"Error: {e}"
        return response.text or ''


class MissingKeyGenerator:
    """Stand-in used when no API key is configured."""
    async def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        return 'Error: GEMINI_API_KEY is not set'


__all__ = [
    'GeminiGenerator',
    'MissingKeyGenerator',
    'DEFAULT_MODEL',
]
