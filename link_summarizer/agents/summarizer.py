import logging
from typing import Optional

from .llm_client import GeminiClient, LLMConfig, create_llm_config
from ..config import Settings

logger = logging.getLogger(__name__)

NO_API_KEY_SUMMARY = "No API key configured for summary"
SUMMARY_FAILED_SUMMARY = "Could not generate summary for this content"

SUMMARY_PROMPT_TEMPLATE = (
    "\n"
    "Summarize this website content in EXACTLY SEVEN WORDS. Not 6, not 8, but EXACTLY 7 words.\n"
    "Make the summary informative about the actual content, not generic.\n"
    "Just give the 7-word summary directly.\n"
    "\n"
    "URL: {url}\n"
    "\n"
    "Content: \n"
    "{content}\n"
    "\n"
    "Your 7-word summary (EXACTLY 7 words):"
)


def normalize_summary(text: str, word_count: int = 7) -> str:
    """Collapse whitespace and keep at most ``word_count`` words.

    Shorter output is returned as-is rather than padded.
    """
    words = text.split()
    return " ".join(words[:word_count])


class SummarizerAgent:
    """Produces a fixed-length summary of a page via the Gemini API."""

    def __init__(self, settings: Settings, client: Optional[GeminiClient] = None) -> None:
        self.settings = settings
        self.client = client or GeminiClient(settings)
        self.llm: Optional[LLMConfig] = None
        try:
            self.llm = create_llm_config(settings, temperature=0.0)
        except RuntimeError as exc:
            logger.warning("LLM config not initialized for %s: %s", self.agent_name, exc)

    @property
    def agent_name(self) -> str:
        return "summarizer"

    def build_prompt(self, url: str, content: str) -> str:
        return SUMMARY_PROMPT_TEMPLATE.format(
            url=url,
            content=content[: self.settings.summary_prompt_chars],
        )

    async def summarize(self, url: str, content: str) -> str:
        """Return a summary for ``url``; failures degrade to a fallback string."""
        if not self.llm:
            return NO_API_KEY_SUMMARY

        try:
            raw_text = await self.client.generate(self.build_prompt(url, content), self.llm)
        except Exception as exc:
            logger.error("Summary generation failed for %s: %s", url, exc)
            return SUMMARY_FAILED_SUMMARY

        return normalize_summary(raw_text, self.settings.summary_word_count)
