"""
Subscription data models.
Canonical entries produced from OrangeTV-style and TVBox-style documents.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field


class ProviderEntry(BaseModel):
    """Searchable media API (``api_site`` value)."""
    api: str
    name: str
    detail: str = ""
    type: int = 3
    searchable: bool = True
    quickSearch: bool = True
    filterable: bool = True
    healthy: Optional[str] = None  # Set by the health prober


class ResolverEntry(BaseModel):
    """Playback URL resolver (``parse_site`` value)."""
    name: str
    url: str
    type: int = 0
    header: dict[str, str] = Field(default_factory=dict)


class LiveChannelEntry(BaseModel):
    """Live stream source (``live_site`` value)."""
    name: str
    url: str
    type: int = 0
    epg: str = ""
    logo: str = ""


class NormalizedSource(BaseModel):
    """Canonical mappings for one document, or for several merged together."""
    api_site: dict[str, dict[str, Any]] = Field(default_factory=dict)
    parse_site: dict[str, dict[str, Any]] = Field(default_factory=dict)
    live_site: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.api_site or self.parse_site or self.live_site)


class MergedConfig(BaseModel):
    """Response envelope returned to player clients."""
    cache_time: int = 7200
    api_site: dict[str, dict[str, Any]] = Field(default_factory=dict)
    parse_site: dict[str, dict[str, Any]] = Field(default_factory=dict)
    live_site: dict[str, dict[str, Any]] = Field(default_factory=dict)
    custom_category: list[Any] = Field(default_factory=list)
