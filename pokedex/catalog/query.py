"""
Query engine and sequence navigator for the loaded catalogue.

Everything here is a pure function over a catalogue sequence and an
explicit ``QueryState``; nothing mutates the catalogue.  Two derivations
share one sort:

* list mode shows nothing until there is search text, then the entries
  whose name contains it (case-insensitive);
* gallery mode starts from the whole catalogue, applies the text filter
  only when there is text, then the optional category filter.

Previous/next navigation always follows catalogue order, whatever sort
the views are using.
"""

from __future__ import annotations

import locale
from typing import List, Sequence, Tuple

from .identifiers import is_known_id
from .schemas import (
    CatalogEntry,
    Neighbors,
    QueryState,
    ResultPage,
    SortKey,
    SortOrder,
    ViewMode,
)


def _name_key(entry: CatalogEntry) -> Tuple[str, str]:
    return locale.strxfrm(entry.name.casefold()), entry.name


def sort_entries(
    entries: Sequence[CatalogEntry],
    sort_key: SortKey = SortKey.ID,
    sort_order: SortOrder = SortOrder.ASC,
) -> List[CatalogEntry]:
    """Return a sorted copy of ``entries``.

    The sort is stable in both directions.  When sorting by ID, entries
    whose locator had no ID are placed last, in catalogue order.
    """
    reverse = sort_order == SortOrder.DESC
    if sort_key == SortKey.NAME:
        return sorted(entries, key=_name_key, reverse=reverse)
    known = [e for e in entries if is_known_id(e.id)]
    unknown = [e for e in entries if not is_known_id(e.id)]
    return sorted(known, key=lambda e: e.id, reverse=reverse) + unknown


def _matches_text(entry: CatalogEntry, needle: str) -> bool:
    return needle in entry.name.lower()


def list_results(catalog: Sequence[CatalogEntry], state: QueryState) -> List[CatalogEntry]:
    if state.view_mode != ViewMode.LIST or not state.text:
        return []
    needle = state.text.lower()
    filtered = [e for e in catalog if _matches_text(e, needle)]
    return sort_entries(filtered, state.sort_key, state.sort_order)


def gallery_results(catalog: Sequence[CatalogEntry], state: QueryState) -> List[CatalogEntry]:
    if state.view_mode != ViewMode.GALLERY:
        return []
    results: Sequence[CatalogEntry] = catalog
    if state.text:
        needle = state.text.lower()
        results = [e for e in results if _matches_text(e, needle)]
    if state.category_filter:
        # Exact match: catalogue categories are already lowercase.
        category = state.category_filter
        results = [e for e in results if e.categories and category in e.categories]
    return sort_entries(results, state.sort_key, state.sort_order)


def paginate(items: Sequence[CatalogEntry], page: int, page_size: int) -> Tuple[List[CatalogEntry], int, int]:
    """Slice ``items`` for ``page``, clamping it into range.

    Returns ``(page_items, page, total_pages)``; ``total_pages`` is at
    least 1 even for an empty result.
    """
    size = max(1, int(page_size))
    total = len(items)
    total_pages = max(1, (total + size - 1) // size)
    page = min(max(1, int(page)), total_pages)
    start = (page - 1) * size
    return list(items[start:start + size]), page, total_pages


def run_query(catalog: Sequence[CatalogEntry], state: QueryState) -> ResultPage:
    if state.view_mode == ViewMode.GALLERY:
        results = gallery_results(catalog, state)
        active = True
    else:
        results = list_results(catalog, state)
        active = bool(state.text)
    items, page, total_pages = paginate(results, state.page, state.page_size)
    return ResultPage(
        view_mode=state.view_mode,
        query_active=active,
        page=page,
        page_size=state.page_size,
        total=len(results),
        total_pages=total_pages,
        items=items,
    )


def neighbors(catalog: Sequence[CatalogEntry], current_id: int) -> Neighbors:
    """IDs of the entries just before and after ``current_id``.

    Uses catalogue order.  A missing ID yields no neighbours, and a
    neighbour whose own ID is unknown is reported as ``None``.
    """
    for index, entry in enumerate(catalog):
        if is_known_id(entry.id) and entry.id == current_id:
            prev_id = catalog[index - 1].id if index > 0 else None
            next_id = catalog[index + 1].id if index + 1 < len(catalog) else None
            return Neighbors(
                prev_id=prev_id if prev_id and is_known_id(prev_id) else None,
                next_id=next_id if next_id and is_known_id(next_id) else None,
            )
    return Neighbors()
