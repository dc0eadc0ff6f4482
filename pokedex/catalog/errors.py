"""Exceptions raised by the catalog package."""

from __future__ import annotations


LOAD_ERROR_MESSAGE = "Failed to load Pokémon list. Please refresh the page."
DETAIL_ERROR_MESSAGE = "Could not load Pokémon data. Please try again."


class PokedexError(RuntimeError):
    pass


class CatalogLoadError(PokedexError):
    """The catalog index could not be fetched; nothing can be browsed."""


class EnrichmentError(PokedexError):
    """Categories for one entry could not be fetched or parsed.

    Never escapes the loader: the entry is kept without categories.
    """

    def __init__(self, locator: str, reason: str) -> None:
        super().__init__(f"{locator}: {reason}")
        self.locator = locator
        self.reason = reason


class DetailFetchError(PokedexError):
    """The detail record for one ID could not be fetched or parsed."""

    def __init__(self, entry_id: int, reason: str) -> None:
        super().__init__(f"pokemon {entry_id}: {reason}")
        self.entry_id = entry_id
        self.reason = reason
