import asyncio
import logging
import time
from typing import Any, Dict

from ..agents.summarizer import SummarizerAgent
from ..config import Settings
from ..models.schemas import AnalysisResultEntry, StatusEnum
from ..utils.text_extractor import extract_text
from .page_fetcher import PageFetcher

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_SUMMARY = "Website content analyzed successfully"
FETCH_FAILED_SUMMARY = "Could not access or analyze this site"


class InvalidURLListError(ValueError):
    """Raised when the request does not carry a non-empty list of URLs."""


class LinkAnalysisOrchestrator:
    """Coordinates fetch, extraction and summarization for a batch of URLs."""

    def __init__(
        self,
        settings: Settings,
        page_fetcher: PageFetcher,
        summarizer: SummarizerAgent,
    ) -> None:
        self.settings = settings
        self.page_fetcher = page_fetcher
        self.summarizer = summarizer

    async def analyze(self, urls: Any) -> Dict[str, AnalysisResultEntry]:
        if not urls or not isinstance(urls, list):
            raise InvalidURLListError("Please provide an array of URLs to analyze")

        urls_to_process = urls[: self.settings.max_urls_per_request]
        if len(urls) > len(urls_to_process):
            logger.info(
                "Dropping %s URLs beyond the limit of %s",
                len(urls) - len(urls_to_process),
                self.settings.max_urls_per_request,
            )

        start_time = time.perf_counter()
        results: Dict[str, AnalysisResultEntry] = {}

        async def run_and_record(url: str) -> None:
            try:
                summary = await self._analyze_url(url)
                results[url] = AnalysisResultEntry(
                    status=StatusEnum.SUCCESS,
                    summary=summary or DEFAULT_SUCCESS_SUMMARY,
                )
            except Exception as e:
                logger.error("Error processing %s: %s", url, e)
                results[url] = AnalysisResultEntry(
                    status=StatusEnum.ERROR,
                    error=str(e) or type(e).__name__,
                    summary=FETCH_FAILED_SUMMARY,
                )

        # Each task records its own outcome, so gather never sees an exception
        await asyncio.gather(*(run_and_record(url) for url in urls_to_process))

        logger.info(
            "Analyzed %s URLs in %s seconds",
            len(urls_to_process),
            round(time.perf_counter() - start_time, 4),
        )
        return results

    async def _analyze_url(self, url: str) -> str:
        start = time.perf_counter()
        html = await self.page_fetcher.fetch(url)
        text = extract_text(html, self.settings.max_content_chars)
        summary = await self.summarizer.summarize(url, text)
        logger.debug("Processed %s in %s seconds", url, round(time.perf_counter() - start, 4))
        return summary
