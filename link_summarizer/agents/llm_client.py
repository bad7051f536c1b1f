import logging
from dataclasses import dataclass
from typing import Any, Dict

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)


class SummaryGenerationError(RuntimeError):
    """Raised when the generative API call fails or returns an unusable body."""


@dataclass
class LLMConfig:
    model: str
    temperature: float
    max_tokens: int


def create_llm_config(
    settings: Settings,
    temperature: float = 0.0,
    max_tokens: int | None = None,
) -> LLMConfig:
    """Create an LLM config based on available credentials."""
    if not settings.has_api_key:
        raise RuntimeError("GEMINI_API_KEY is required to generate summaries.")

    return LLMConfig(
        model=settings.gemini_model,
        temperature=temperature,
        max_tokens=max_tokens or settings.summary_max_output_tokens,
    )


class GeminiClient:
    """Thin async client for the Gemini ``generateContent`` endpoint."""

    def __init__(self, settings: Settings) -> None:
        self.api_key = settings.gemini_api_key
        self.base_url = settings.gemini_api_base_url.rstrip("/")

    def build_payload(self, prompt: str, config: LLMConfig) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": config.temperature,
                "maxOutputTokens": config.max_tokens,
            },
        }

    async def generate(self, prompt: str, config: LLMConfig) -> str:
        """
        Send ``prompt`` to the model and return the generated text.

        Raises:
            SummaryGenerationError: On HTTP or transport failure, or when the
                response has no text at ``candidates[0].content.parts[0].text``.
        """
        url = f"{self.base_url}/{config.model}:generateContent"
        async with httpx.AsyncClient() as client:
            try:
                response = await client.post(
                    url,
                    params={"key": self.api_key},
                    json=self.build_payload(prompt, config),
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as exc:
                raise SummaryGenerationError(
                    f"Gemini API returned status {exc.response.status_code}"
                ) from exc
            except httpx.RequestError as exc:
                raise SummaryGenerationError(
                    f"Gemini API request failed: {str(exc) or type(exc).__name__}"
                ) from exc
            except ValueError as exc:
                raise SummaryGenerationError("Gemini API returned a non-JSON body") from exc

        return self._parse_text(data)

    def _parse_text(self, data: Any) -> str:
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            logger.debug("Unexpected Gemini response shape: %s", data)
            raise SummaryGenerationError("Gemini API response did not contain generated text") from exc

        if not isinstance(text, str):
            raise SummaryGenerationError("Gemini API returned non-text content")
        return text.strip()
