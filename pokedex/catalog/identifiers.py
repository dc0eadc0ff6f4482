"""Helpers that turn PokeAPI resource locators into numeric IDs and URLs."""

from __future__ import annotations

import re

from ..settings import Settings


# Returned by extract_id() when a locator carries no usable ID.
UNKNOWN_ID = 0

_TRAILING_ID = re.compile(r"/(\d+)/$")


def extract_id(locator: str) -> int:
    """Return the numeric path segment just before a trailing slash.

    ``"https://pokeapi.co/api/v2/pokemon/25/"`` gives ``25``.  Locators
    without such a segment (or with a zero segment) give ``UNKNOWN_ID``;
    this function never raises.
    """
    if not isinstance(locator, str):
        return UNKNOWN_ID
    m = _TRAILING_ID.search(locator)
    if not m:
        return UNKNOWN_ID
    return int(m.group(1))


def is_known_id(entry_id: int) -> bool:
    return entry_id > UNKNOWN_ID


def image_url_for(entry_id: int, settings: Settings) -> str:
    return settings.sprite_url_template.format(id=entry_id)


def detail_url_for(entry_id: int, settings: Settings) -> str:
    """Canonical detail address, built from the ID alone."""
    return f"{settings.api_base_url}/pokemon/{int(entry_id)}"
