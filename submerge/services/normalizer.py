"""
Schema normalizer.
Converts one fetched subscription document into canonical provider,
resolver and live-channel mappings.

Two document layouts are understood, and may appear together:

- OrangeTV style: ``{"api_site": {key: entry}}``, already canonical
- TVBox style: ``{"sites": [...], "parses": [...], "lives": [...]}``

Items with the wrong shape (not an object, missing ``api``/``url``) are
ignored without logging: third-party feeds are routinely sloppy and one bad
item must not cost the rest of the document.
"""
import json
import logging
from typing import Any

from submerge.models.subscription import (
    LiveChannelEntry,
    NormalizedSource,
    ProviderEntry,
    ResolverEntry,
)
from submerge.services.key_deriver import derive_live_key, derive_site_key

logger = logging.getLogger(__name__)

FALSE_STRINGS = {"0", "false", "no", "off", ""}


def _as_bool(value: Any, default: bool = True) -> bool:
    """TVBox feeds use true/false as well as 1/0 for flags."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


def _as_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        # ext is sometimes an inline JSON object
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _items(document: dict, field: str) -> list:
    items = document.get(field)
    return items if isinstance(items, list) else []


def _normalize_sites(document: dict, api_site: dict[str, dict]):
    for index, site in enumerate(_items(document, "sites")):
        if not isinstance(site, dict) or not _non_empty_str(site.get("api")):
            continue

        key = derive_site_key(site.get("key") or site.get("name"), site["api"], index, "site")
        if key in api_site:
            continue

        detail = site.get("ext")
        if detail is None:
            detail = site.get("detail")

        entry = ProviderEntry(
            api=site["api"],
            name=_as_text(site.get("name")) or key,
            detail=_as_text(detail),
            type=_as_int(site.get("type"), 3),
            searchable=_as_bool(site.get("searchable")),
            quickSearch=_as_bool(site.get("quickSearch")),
            filterable=_as_bool(site.get("filterable")),
        )
        api_site[key] = entry.model_dump(exclude_none=True)


def _normalize_parses(document: dict, parse_site: dict[str, dict]):
    for index, parse in enumerate(_items(document, "parses")):
        if not isinstance(parse, dict) or not _non_empty_str(parse.get("url")):
            continue

        key = derive_site_key(parse.get("name"), parse["url"], index, "parse")
        if key in parse_site:
            continue

        header = parse.get("header")
        if not isinstance(header, dict):
            header = {}

        entry = ResolverEntry(
            name=_as_text(parse.get("name")) or key,
            url=parse["url"],
            type=_as_int(parse.get("type"), 0),
            header={str(k): _as_text(v) for k, v in header.items()},
        )
        parse_site[key] = entry.model_dump()


def _normalize_lives(document: dict, live_site: dict[str, dict]):
    for index, live in enumerate(_items(document, "lives")):
        if not isinstance(live, dict) or not _non_empty_str(live.get("url")):
            continue

        key = derive_live_key(_as_text(live.get("name")), index)
        if key in live_site:
            continue

        entry = LiveChannelEntry(
            name=key,
            url=live["url"],
            type=_as_int(live.get("type"), 0),
            epg=_as_text(live.get("epg")),
            logo=_as_text(live.get("logo")),
        )
        live_site[key] = entry.model_dump()


def normalize_config(document: Any, source_url: str = "") -> NormalizedSource:
    """
    Normalize a single subscription document.

    Args:
        document: Parsed JSON of any supported layout
        source_url: Where the document came from (logging only)

    Returns:
        The document's provider, resolver and live-channel mappings. Within
        one document the first entry for a key wins.
    """
    api_site: dict[str, dict] = {}
    parse_site: dict[str, dict] = {}
    live_site: dict[str, dict] = {}

    if not isinstance(document, dict):
        logger.debug(f"Ignoring non-object document from {source_url or 'input'}")
        return NormalizedSource()

    # OrangeTV entries are trusted as canonical
    preshaped = document.get("api_site")
    if isinstance(preshaped, dict):
        for key, entry in preshaped.items():
            if key and isinstance(entry, dict):
                api_site[str(key)] = dict(entry)

    _normalize_sites(document, api_site)
    _normalize_parses(document, parse_site)
    _normalize_lives(document, live_site)

    logger.debug(
        f"Normalized {source_url or 'input'}: {len(api_site)} sites, "
        f"{len(parse_site)} parses, {len(live_site)} lives"
    )
    return NormalizedSource(api_site=api_site, parse_site=parse_site, live_site=live_site)
