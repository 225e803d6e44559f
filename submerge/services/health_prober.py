"""
Provider health prober.

Checks every merged provider API in parallel and annotates each entry with
a ``healthy`` status:

- ``"ok"``: the API answered with a 2xx status
- ``"fail(<status>)"``: the API answered with any other status
- ``"fail"``: no answer (network error, timeout, invalid URL)
"""
import asyncio
import logging
from typing import Optional

import httpx

from submerge.config import get_settings

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_FAIL = "fail"


class HealthProber:
    """Parallel liveness checks for provider APIs."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        verify: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.timeout = settings.probe_timeout_seconds if timeout is None else timeout
        self.verify = settings.probe_verify_ssl if verify is None else verify
        self.user_agent = settings.user_agent
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # No pool cap: a probe queued for a connection would burn its timeout
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            limits=httpx.Limits(max_connections=None, max_keepalive_connections=20),
            follow_redirects=True,
            verify=self.verify,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    async def _request_status(self, client: httpx.AsyncClient, url: str) -> int:
        # Only the status line matters; the body is never read
        async with client.stream("GET", url) as response:
            return response.status_code

    async def check(self, client: httpx.AsyncClient, url: str) -> str:
        """Probe a single API URL and return its status string."""
        try:
            status_code = await asyncio.wait_for(
                self._request_status(client, url), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.debug(f"Probe timed out after {self.timeout}s: {url}")
            return STATUS_FAIL
        except Exception as e:
            logger.debug(f"Probe failed for {url}: {e}")
            return STATUS_FAIL

        if 200 <= status_code < 300:
            return STATUS_OK
        return f"{STATUS_FAIL}({status_code})"

    async def _probe_entry(self, client: httpx.AsyncClient, entry: dict):
        api = entry.get("api")
        if not isinstance(api, str) or not api.strip():
            entry["healthy"] = STATUS_FAIL
            return
        entry["healthy"] = await self.check(client, api.strip())

    async def probe_all(self, api_site: dict[str, dict]) -> dict[str, dict]:
        """
        Probe every provider concurrently and wait for all of them.

        Each entry gets its ``healthy`` field set in place; unhealthy entries
        are kept so clients can decide what to filter.

        Args:
            api_site: Merged provider mapping

        Returns:
            The same mapping, annotated
        """
        if not api_site:
            return api_site

        async with self._client() as client:
            await asyncio.gather(
                *[self._probe_entry(client, entry) for entry in api_site.values()]
            )

        healthy = sum(1 for entry in api_site.values() if entry.get("healthy") == STATUS_OK)
        logger.info(f"Health probe complete: {healthy}/{len(api_site)} providers ok")
        return api_site
