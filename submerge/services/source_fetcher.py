"""
Subscription source fetcher.
Downloads one subscription document and parses it as JSON.
"""
import json
import logging
from typing import Any, Optional

import httpx

from submerge.config import get_settings

logger = logging.getLogger(__name__)


class SourceFetcher:
    """Fetch subscription documents with a bounded timeout."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.timeout = settings.fetch_timeout_seconds if timeout is None else timeout
        self.user_agent = settings.user_agent
        self._transport = transport

    async def fetch(self, url: str) -> Optional[Any]:
        """
        Fetch and decode a single subscription document.

        Returns:
            The parsed JSON, or None if the source could not be used. Failures
            are logged, never raised, so one bad source does not stop the rest.
        """
        logger.info(f"Fetching subscription from {url}")

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                # utf-8-sig drops the BOM hand-edited feeds often carry
                return json.loads(response.content.decode("utf-8-sig"))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Subscription import failed: {url} ({e})")
            return None
        except (UnicodeDecodeError, ValueError) as e:
            logger.warning(f"Subscription import failed: {url} (invalid JSON: {e})")
            return None
