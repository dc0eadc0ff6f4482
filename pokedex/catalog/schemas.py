"""
Pydantic schema definitions for the catalog module.

``CatalogEntry`` is one row of the loaded index and carries only what a
list row or gallery card needs.  ``DetailRecord`` is the full record for
one Pokémon, fetched on demand for the detail view.  ``QueryState`` and
``SelectionState`` are the explicit browsing state handed to the query
engine and kept by the detail resolver; neither is ever persisted.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# Category names offered as gallery filters, in display order.
CATEGORIES: List[str] = [
    "normal", "fire", "water", "electric", "grass", "ice", "fighting", "poison",
    "ground", "flying", "psychic", "bug", "rock", "ghost", "dragon", "dark",
    "steel", "fairy",
]


class SortKey(str, Enum):
    ID = "id"
    NAME = "name"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ViewMode(str, Enum):
    LIST = "list"
    GALLERY = "gallery"


class CatalogEntry(BaseModel):
    """A single catalog row.

    ``id`` is extracted from ``locator`` once at load time and is
    ``UNKNOWN_ID`` (0) when the locator has no numeric segment.
    ``categories`` is ``None`` when the enrichment fetch for this entry
    failed, which is different from an empty list.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    locator: str
    image_url: str
    categories: Optional[List[str]] = None


class Trait(BaseModel):
    name: str
    is_secret: bool = False


class DetailRecord(BaseModel):
    """Full record for one Pokémon.

    Heights and masses are kept in the raw API units (decimetres and
    hectograms); the ``*_display`` fields divide them by ten.
    """

    id: int = Field(gt=0)
    display_name: str
    primary_image: Optional[str] = None
    categories: List[str] = Field(min_length=1)
    traits: List[Trait] = Field(default_factory=list)
    height_units: int
    mass_units: int

    @computed_field  # type: ignore[misc]
    @property
    def height_display(self) -> float:
        return self.height_units / 10

    @computed_field  # type: ignore[misc]
    @property
    def mass_display(self) -> float:
        return self.mass_units / 10


class QueryState(BaseModel):
    """Browsing controls, rebuilt from request parameters on every call.

    The same state drives both views; ``category_filter`` is ignored in
    list mode and an empty string means no filter.
    """

    text: str = ""
    sort_key: SortKey = SortKey.ID
    sort_order: SortOrder = SortOrder.ASC
    view_mode: ViewMode = ViewMode.LIST
    category_filter: str = ""
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=24, ge=1)


class ResultPage(BaseModel):
    """One page of a list- or gallery-mode derivation.

    ``query_active`` is False only for list mode with no text, so
    clients can tell "no query yet" from "query matched nothing".
    """

    view_mode: ViewMode
    query_active: bool
    page: int
    page_size: int
    total: int
    total_pages: int
    items: List[CatalogEntry]


class Neighbors(BaseModel):
    prev_id: Optional[int] = None
    next_id: Optional[int] = None


class SelectionState(BaseModel):
    selected_id: Optional[int] = None
    loading: bool = False
    record: Optional[DetailRecord] = None
    error: Optional[str] = None
    prev_id: Optional[int] = None
    next_id: Optional[int] = None


class DetailView(BaseModel):
    record: DetailRecord
    prev_id: Optional[int] = None
    next_id: Optional[int] = None


class CatalogStatus(BaseModel):
    loading: bool
    loaded: bool
    error: Optional[str] = None
    count: int = 0
