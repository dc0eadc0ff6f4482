"""
Route definitions for the Pokédex API.

Endpoints under /api/catalog:
- GET    /status                       : load status of the catalogue
- POST   /reload                       : full reload (retry after a failed load)
- GET    /categories                   : category names offered by the gallery
- GET    /entries                      : list/gallery results, sorted and paged
- GET    /entries/{entry_id}           : one detail record with prev/next IDs
- GET    /entries/{entry_id}/neighbors : prev/next IDs in catalogue order
- GET    /selection                    : current detail selection
- PUT    /selection/{entry_id}         : select an entry and load its record
- DELETE /selection                    : go back to browsing
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request

from .detail import DetailResolver
from .errors import DETAIL_ERROR_MESSAGE, LOAD_ERROR_MESSAGE, DetailFetchError
from .query import neighbors, run_query
from .schemas import (
    CATEGORIES,
    CatalogStatus,
    DetailView,
    Neighbors,
    QueryState,
    ResultPage,
    SelectionState,
    SortKey,
    SortOrder,
    ViewMode,
)
from .store import CatalogStore
from ..settings import Settings


router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store  # type: ignore[attr-defined]


def get_resolver(request: Request) -> DetailResolver:
    return request.app.state.resolver  # type: ignore[attr-defined]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def _require_catalog(store: CatalogStore) -> None:
    if store.error:
        raise HTTPException(status_code=503, detail=store.error)


@router.get("/status", response_model=CatalogStatus)
def catalog_status(store: CatalogStore = Depends(get_store)) -> CatalogStatus:
    return store.status()


@router.post("/reload", response_model=CatalogStatus)
async def reload_catalog(store: CatalogStore = Depends(get_store)) -> CatalogStatus:
    if not await store.reload():
        raise HTTPException(status_code=503, detail=store.error or LOAD_ERROR_MESSAGE)
    return store.status()


@router.get("/categories", response_model=List[str])
def list_categories() -> List[str]:
    return list(CATEGORIES)


@router.get("/entries", response_model=ResultPage)
def list_entries(
    q: str = Query(default="", description="Name search text"),
    sort: SortKey = Query(default=SortKey.ID, description="Sort key"),
    order: SortOrder = Query(default=SortOrder.ASC, description="Sort order"),
    view: ViewMode = Query(default=ViewMode.LIST, description="View mode"),
    category: str = Query(default="", description="Gallery category filter"),
    page: int = Query(default=1, ge=1, description="Current page (1-indexed)"),
    page_size: Optional[int] = Query(default=None, ge=1, description="Page size"),
    store: CatalogStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ResultPage:
    """
    Returns one page of list- or gallery-mode results.

    List mode with empty ``q`` returns no items and ``query_active``
    False.  ``category`` only applies in gallery mode.
    """
    _require_catalog(store)
    size = min(page_size or settings.default_page_size, settings.max_page_size)
    state = QueryState(
        text=q,
        sort_key=sort,
        sort_order=order,
        view_mode=view,
        category_filter=category,
        page=page,
        page_size=size,
    )
    return run_query(store.entries, state)


@router.get("/entries/{entry_id}", response_model=DetailView)
async def get_entry(
    entry_id: int = Path(..., ge=1),
    store: CatalogStore = Depends(get_store),
    resolver: DetailResolver = Depends(get_resolver),
) -> DetailView:
    try:
        record = await resolver.resolve(entry_id)
    except DetailFetchError:
        raise HTTPException(status_code=502, detail=DETAIL_ERROR_MESSAGE)
    nav = neighbors(store.entries, entry_id)
    return DetailView(record=record, prev_id=nav.prev_id, next_id=nav.next_id)


@router.get("/entries/{entry_id}/neighbors", response_model=Neighbors)
def get_neighbors(
    entry_id: int = Path(..., ge=1),
    store: CatalogStore = Depends(get_store),
) -> Neighbors:
    return neighbors(store.entries, entry_id)


@router.get("/selection", response_model=SelectionState)
def get_selection(resolver: DetailResolver = Depends(get_resolver)) -> SelectionState:
    return resolver.state()


@router.put("/selection/{entry_id}", response_model=SelectionState)
async def select_entry(
    entry_id: int = Path(..., ge=1),
    resolver: DetailResolver = Depends(get_resolver),
) -> SelectionState:
    return await resolver.select(entry_id)


@router.delete("/selection", response_model=SelectionState)
def clear_selection(resolver: DetailResolver = Depends(get_resolver)) -> SelectionState:
    return resolver.clear()
