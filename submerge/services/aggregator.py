"""
Subscription aggregation service.
Fetches, normalizes and merges subscription sources, then health-checks
the merged providers.
"""
import logging
from typing import Optional

from submerge.config import get_settings
from submerge.models.subscription import MergedConfig, NormalizedSource
from submerge.services.health_prober import HealthProber
from submerge.services.merger import merge_sources
from submerge.services.normalizer import normalize_config
from submerge.services.source_fetcher import SourceFetcher

logger = logging.getLogger(__name__)


def parse_source_urls(raw: Optional[str]) -> list[str]:
    """Split a comma-separated ``urls`` value into trimmed, non-empty URLs."""
    if not raw:
        return []
    return [u.strip() for u in raw.split(",") if u.strip()]


class SubscriptionAggregator:
    """Drives fetch -> normalize -> merge -> probe for a list of sources."""

    def __init__(
        self,
        fetcher: Optional[SourceFetcher] = None,
        prober: Optional[HealthProber] = None,
        cache_time: Optional[int] = None,
    ):
        self.fetcher = fetcher or SourceFetcher()
        self.prober = prober or HealthProber()
        self.cache_time = get_settings().cache_time if cache_time is None else cache_time

    async def collect(self, urls: list[str]) -> NormalizedSource:
        """
        Fetch and merge sources one at a time, in the given order.

        A source that cannot be fetched, parsed or normalized contributes
        nothing.
        """
        normalized = []
        for url in urls:
            document = await self.fetcher.fetch(url)
            if document is None:
                continue
            try:
                normalized.append(normalize_config(document, url))
            except Exception as e:
                logger.warning(f"Subscription import failed: {url} (unusable document: {e})")
        return merge_sources(normalized)

    async def aggregate(self, urls: list[str], check_health: bool = True) -> dict:
        """
        Build the merged configuration for the given source URLs.

        Args:
            urls: Subscription document URLs, earliest first
            check_health: Annotate providers with ``healthy`` (default True)

        Returns:
            JSON-ready merged configuration
        """
        merged = await self.collect(urls)
        logger.info(
            f"Merged {len(urls)} sources: {len(merged.api_site)} sites, "
            f"{len(merged.parse_site)} parses, {len(merged.live_site)} lives"
        )

        if check_health:
            await self.prober.probe_all(merged.api_site)

        config = MergedConfig(
            cache_time=self.cache_time,
            api_site=merged.api_site,
            parse_site=merged.parse_site,
            live_site=merged.live_site,
        )
        return config.model_dump()


# Singleton
_aggregator: Optional[SubscriptionAggregator] = None


def get_aggregator() -> SubscriptionAggregator:
    """Get or create aggregator singleton."""
    global _aggregator
    if _aggregator is None:
        _aggregator = SubscriptionAggregator()
    return _aggregator
