"""
In-memory catalogue store.

The catalogue is loaded once from PokeAPI in two phases: the flat index
first, then the type names of every entry, fetched concurrently.  Type
lookups are best-effort: a failure only leaves that one entry without
``categories``.  The finished list is published as a tuple, so readers
(the query engine, the sequence navigator) always see either the
previous catalogue or the complete new one, never a partial load.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence, Tuple

import httpx

from .errors import LOAD_ERROR_MESSAGE, CatalogLoadError, EnrichmentError
from .identifiers import extract_id, image_url_for
from .pokeapi_service import fetch_categories, fetch_index
from .schemas import CatalogEntry, CatalogStatus
from ..settings import Settings


logger = logging.getLogger(__name__)


async def _enrich_all(
    client: httpx.AsyncClient, locators: Sequence[str], concurrency: int
) -> List[Optional[List[str]]]:
    """Fetch categories for every locator, keeping failures per entry.

    Every request is allowed to settle; the result list lines up with
    ``locators`` and holds ``None`` wherever a request failed.
    """
    semaphore = asyncio.Semaphore(concurrency)

    async def _one(locator: str) -> List[str]:
        async with semaphore:
            return await fetch_categories(client, locator)

    outcomes = await asyncio.gather(*(_one(loc) for loc in locators), return_exceptions=True)
    results: List[Optional[List[str]]] = []
    for locator, outcome in zip(locators, outcomes):
        if isinstance(outcome, EnrichmentError):
            logger.warning("No categories for %s (%s)", locator, outcome.reason)
            results.append(None)
        elif isinstance(outcome, Exception):
            logger.warning("No categories for %s: %r", locator, outcome)
            results.append(None)
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results.append(outcome)
    return results


async def load_catalog(client: httpx.AsyncClient, settings: Settings) -> List[CatalogEntry]:
    """Fetch the index, then overlay categories on each entry.

    Raises ``CatalogLoadError`` only when the index itself fails.
    """
    pairs = await fetch_index(client, settings)
    categories = await _enrich_all(
        client, [locator for _, locator in pairs], settings.enrichment_concurrency
    )
    entries: List[CatalogEntry] = []
    for (name, locator), cats in zip(pairs, categories):
        entry_id = extract_id(locator)
        entries.append(
            CatalogEntry(
                id=entry_id,
                name=name,
                locator=locator,
                image_url=image_url_for(entry_id, settings),
                categories=cats,
            )
        )
    gaps = sum(1 for e in entries if e.categories is None)
    logger.info("Loaded %d catalog entries (%d without categories)", len(entries), gaps)
    return entries


class CatalogStore:
    """Holds the published catalogue and its load status.

    ``entries`` is empty until a load succeeds.  After a failed load the
    store stays empty and ``error`` carries the message to show; retrying
    means calling ``load()`` again.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings
        self._entries: Tuple[CatalogEntry, ...] = ()
        self._lock = asyncio.Lock()
        self.loading = False
        self.loaded = False
        self.error: Optional[str] = None

    @property
    def entries(self) -> Tuple[CatalogEntry, ...]:
        return self._entries

    async def load(self) -> bool:
        """Run a full load; returns True when a catalogue was published."""
        async with self._lock:
            self.loading = True
            self.error = None
            try:
                entries = await load_catalog(self._client, self._settings)
            except CatalogLoadError as exc:
                logger.error("Catalog load failed: %s", exc)
                self._entries = ()
                self.loaded = False
                self.error = LOAD_ERROR_MESSAGE
                return False
            finally:
                self.loading = False
            self._entries = tuple(entries)
            self.loaded = True
            return True

    async def reload(self) -> bool:
        return await self.load()

    def status(self) -> CatalogStatus:
        return CatalogStatus(
            loading=self.loading,
            loaded=self.loaded,
            error=self.error,
            count=len(self._entries),
        )
