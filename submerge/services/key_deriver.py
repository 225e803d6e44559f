"""
Lookup key derivation for merged subscription entries.
"""
import re
from typing import Optional

_NON_KEY_CHARS = re.compile(r"[^a-z0-9]")


def derive_site_key(
    name: Optional[str],
    fallback: Optional[str],
    index: Optional[int] = None,
    prefix: str = "site",
) -> str:
    """
    Build the key for a provider or resolver entry.

    Uses ``name`` when present, otherwise ``fallback`` (the API or resolver
    URL), lowercased with everything outside ``[a-z0-9]`` removed. Names made
    only of non-ASCII characters strip to nothing; those get the positional
    key ``f"{prefix}{index}"`` instead.

    Raises:
        ValueError: if the key strips to empty and no index was given
    """
    candidate = name or fallback or ""
    key = _NON_KEY_CHARS.sub("", str(candidate).lower())
    if key:
        return key
    if index is None:
        raise ValueError(f"Cannot derive a key from {candidate!r}")
    return f"{prefix}{index}"


def derive_live_key(name: Optional[str], index: int) -> str:
    """Live channels keep their display name as-is, or ``live<index>``."""
    if name:
        return str(name)
    return f"live{index}"
