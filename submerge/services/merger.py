"""
Cross-source merging of normalized subscriptions.
"""
from typing import Iterable

from submerge.models.subscription import NormalizedSource


def merge_normalized(accumulated: NormalizedSource, incoming: NormalizedSource) -> NormalizedSource:
    """
    Fold one more source into the accumulated result.

    Entries from ``incoming`` replace accumulated entries with the same key
    wholesale (no field-level merge): a later subscription overrides an
    earlier one.
    """
    return NormalizedSource(
        api_site={**accumulated.api_site, **incoming.api_site},
        parse_site={**accumulated.parse_site, **incoming.parse_site},
        live_site={**accumulated.live_site, **incoming.live_site},
    )


def merge_sources(sources: Iterable[NormalizedSource]) -> NormalizedSource:
    """Merge normalized sources in order; the last source wins on key clashes."""
    merged = NormalizedSource()
    for source in sources:
        merged = merge_normalized(merged, source)
    return merged
