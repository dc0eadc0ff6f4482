"""
PokeAPI integration for the catalogue.  Three requests are needed to
browse the Pokédex:

* ``fetch_index()``: the flat list of ``(name, url)`` pairs for the
  first ``index_limit`` Pokémon.  Failure here is fatal for a load.

* ``fetch_categories()``: the type names for one Pokémon, read from
  the entry's own URL.  Used as a best-effort overlay by the loader.

* ``fetch_detail()``: the full record for one ID, from the canonical
  ``/pokemon/{id}`` address.

All requests go through a shared ``httpx.AsyncClient`` created by
``create_client()``.  Network and decoding errors are logged and
turned into the package's own exceptions so callers never see httpx
types.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
from pydantic import ValidationError

from .errors import CatalogLoadError, DetailFetchError, EnrichmentError
from .identifiers import detail_url_for
from .schemas import DetailRecord, Trait
from ..settings import Settings


logger = logging.getLogger(__name__)


def create_client(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """Build the HTTP client shared by the loader and the resolver."""
    return httpx.AsyncClient(
        timeout=settings.request_timeout,
        headers={
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        },
        follow_redirects=True,
        transport=transport,
    )


async def _http_get_json(client: httpx.AsyncClient, url: str) -> Optional[Any]:
    """Perform a GET and return parsed JSON or ``None`` on failure.

    Non-200 responses, transport errors and undecodable bodies are
    logged and reported as ``None``.
    """
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        logger.error("Error fetching %s: %s", url, exc)
        return None
    if response.status_code != 200:
        logger.warning("PokeAPI request to %s returned status %s", url, response.status_code)
        return None
    try:
        return response.json()
    except ValueError as exc:
        logger.error("Invalid JSON from %s: %s", url, exc)
        return None


async def fetch_index(client: httpx.AsyncClient, settings: Settings) -> List[Tuple[str, str]]:
    """Return ``(name, locator)`` pairs in feed order.

    Rows without a string name and URL are skipped, as are repeated
    names (the first occurrence wins).  Raises ``CatalogLoadError`` when
    the index cannot be fetched or has no ``results`` list.
    """
    url = f"{settings.api_base_url}/pokemon?limit={settings.index_limit}"
    data = await _http_get_json(client, url)
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise CatalogLoadError(f"index request to {url} failed")
    pairs: List[Tuple[str, str]] = []
    seen = set()
    for row in data["results"]:
        if not isinstance(row, dict):
            continue
        name = row.get("name")
        locator = row.get("url")
        if not isinstance(name, str) or not isinstance(locator, str) or not name:
            logger.warning("Skipping malformed index row: %r", row)
            continue
        if name in seen:
            logger.warning("Skipping duplicate index entry %s", name)
            continue
        seen.add(name)
        pairs.append((name, locator))
    return pairs


def _type_names(data: Any) -> Optional[List[str]]:
    """Extract ordered type names from a ``/pokemon`` payload."""
    if not isinstance(data, dict):
        return None
    raw = data.get("types")
    if not isinstance(raw, list):
        return None
    names: List[str] = []
    for slot in raw:
        if not isinstance(slot, dict) or not isinstance(slot.get("type"), dict):
            return None
        name = slot["type"].get("name")
        if not isinstance(name, str):
            return None
        names.append(name)
    return names


async def fetch_categories(client: httpx.AsyncClient, locator: str) -> List[str]:
    data = await _http_get_json(client, locator)
    if data is None:
        raise EnrichmentError(locator, "request failed")
    names = _type_names(data)
    if names is None:
        raise EnrichmentError(locator, "malformed types")
    return names


def _traits(data: Dict[str, Any]) -> List[Trait]:
    traits: List[Trait] = []
    for slot in data.get("abilities") or []:
        if not isinstance(slot, dict):
            continue
        ability = slot.get("ability")
        if isinstance(ability, dict) and isinstance(ability.get("name"), str):
            traits.append(Trait(name=ability["name"], is_secret=bool(slot.get("is_hidden"))))
    return traits


def _primary_image(data: Dict[str, Any]) -> Optional[str]:
    """Official artwork when available, otherwise the default sprite."""
    sprites = data.get("sprites")
    if not isinstance(sprites, dict):
        return None
    other = sprites.get("other")
    if isinstance(other, dict):
        artwork = other.get("official-artwork")
        if isinstance(artwork, dict) and artwork.get("front_default"):
            return artwork["front_default"]
    return sprites.get("front_default") or None


def parse_detail(entry_id: int, data: Any) -> DetailRecord:
    """Map a ``/pokemon/{id}`` payload onto ``DetailRecord``."""
    if not isinstance(data, dict):
        raise DetailFetchError(entry_id, "unexpected payload")
    categories = _type_names(data)
    if not categories:
        raise DetailFetchError(entry_id, "missing types")
    if data.get("id") != entry_id:
        raise DetailFetchError(entry_id, f"payload is for id {data.get('id')!r}")
    try:
        return DetailRecord(
            id=data["id"],
            display_name=data.get("name"),
            primary_image=_primary_image(data),
            categories=categories,
            traits=_traits(data),
            height_units=data.get("height"),
            mass_units=data.get("weight"),
        )
    except ValidationError as exc:
        raise DetailFetchError(entry_id, f"invalid record: {exc.error_count()} error(s)") from exc


async def fetch_detail(client: httpx.AsyncClient, entry_id: int, settings: Settings) -> DetailRecord:
    url = detail_url_for(entry_id, settings)
    data = await _http_get_json(client, url)
    if data is None:
        raise DetailFetchError(entry_id, f"request to {url} failed")
    return parse_detail(entry_id, data)
