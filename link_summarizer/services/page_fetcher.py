import asyncio
import logging

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)


class PageFetchError(Exception):
    """Raised when a page cannot be retrieved; the message is shown to clients."""


class PageFetcher:
    """Retrieves raw page markup over HTTP."""

    def __init__(self, settings: Settings) -> None:
        self.timeout_seconds = settings.fetch_timeout_seconds
        self.headers = {"User-Agent": settings.user_agent}

    async def fetch(self, url: str) -> str:
        """
        GET ``url`` and return the response body as text.

        The timeout bounds the whole exchange, including a body that trickles
        in slowly, not just each individual read.

        Raises:
            PageFetchError: On timeout, connection failure, invalid URL or a
                non-2xx status.
        """
        timeout_message = f"timeout of {int(self.timeout_seconds * 1000)}ms exceeded"
        try:
            return await asyncio.wait_for(self._get(url), timeout=self.timeout_seconds)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise PageFetchError(timeout_message) from exc
        except httpx.HTTPStatusError as exc:
            raise PageFetchError(
                f"Request failed with status code {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise PageFetchError(str(exc) or type(exc).__name__) from exc

    async def _get(self, url: str) -> str:
        async with httpx.AsyncClient(
            headers=self.headers,
            timeout=self.timeout_seconds,
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            logger.debug("Fetched %s with status %s", url, response.status_code)
            return response.text
