"""
Detail resolver: fetches the full record for the selected Pokémon.

Each selection triggers a fresh fetch; nothing is cached between visits.
Rapid previous/next navigation can leave several fetches in flight, so
a response is applied only if its ID is still the current selection
when it arrives.  Older responses are dropped.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import httpx

from .errors import DETAIL_ERROR_MESSAGE, DetailFetchError
from .pokeapi_service import fetch_detail
from .query import neighbors
from .schemas import CatalogEntry, DetailRecord, SelectionState
from ..settings import Settings


logger = logging.getLogger(__name__)


class DetailResolver:
    """Owns the current selection and the record shown for it.

    ``catalog`` is a callable returning the published catalogue; it is
    read only to compute previous/next IDs.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        catalog: Callable[[], Sequence[CatalogEntry]] = tuple,
    ) -> None:
        self._client = client
        self._settings = settings
        self._catalog = catalog
        self._state = SelectionState()

    @property
    def selected_id(self) -> Optional[int]:
        return self._state.selected_id

    def state(self) -> SelectionState:
        return self._state.model_copy()

    async def resolve(self, entry_id: int) -> DetailRecord:
        """Fetch the record for ``entry_id``; raises ``DetailFetchError``."""
        return await fetch_detail(self._client, entry_id, self._settings)

    async def select(self, entry_id: int) -> SelectionState:
        """Make ``entry_id`` the selection and load its record.

        The previous record and error are cleared before the fetch
        starts.  If another ``select()`` or ``clear()`` happens while the
        fetch is in flight, this call's result is discarded and the
        state for the newer selection is returned instead.
        """
        nav = neighbors(self._catalog(), entry_id)
        self._state = SelectionState(
            selected_id=entry_id,
            loading=True,
            prev_id=nav.prev_id,
            next_id=nav.next_id,
        )
        try:
            record = await self.resolve(entry_id)
        except DetailFetchError as exc:
            if self._state.selected_id != entry_id:
                logger.debug("Discarding stale error for %s: %s", entry_id, exc)
                return self.state()
            logger.error("Detail fetch failed: %s", exc)
            self._state = self._state.model_copy(
                update={"loading": False, "record": None, "error": DETAIL_ERROR_MESSAGE}
            )
            return self.state()
        if self._state.selected_id != entry_id:
            logger.debug(
                "Discarding stale record for %s (selection is %s)",
                entry_id,
                self._state.selected_id,
            )
            return self.state()
        self._state = self._state.model_copy(
            update={"loading": False, "record": record, "error": None}
        )
        return self.state()

    def clear(self) -> SelectionState:
        """Leave the detail view; any in-flight fetch becomes stale."""
        self._state = SelectionState()
        return self.state()
