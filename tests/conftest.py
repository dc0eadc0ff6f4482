"""
Shared fixtures: an in-process fake of the PokeAPI endpoints.

``FakePokeApi`` answers the three requests the service makes (index,
per-entry types, detail) through ``httpx.MockTransport`` so no test
touches the network.
"""

import asyncio
from typing import Dict, List, Optional, Sequence

import httpx
import pytest

from pokedex.catalog.identifiers import UNKNOWN_ID
from pokedex.catalog.schemas import CatalogEntry
from pokedex.settings import Settings


API = "https://pokeapi.co/api/v2"


def locator_for(entry_id: int) -> str:
    return f"{API}/pokemon/{entry_id}/"


def make_entry(entry_id: int, name: str, categories: Optional[List[str]] = None, locator: Optional[str] = None) -> CatalogEntry:
    return CatalogEntry(
        id=entry_id,
        name=name,
        locator=locator or (locator_for(entry_id) if entry_id != UNKNOWN_ID else f"{API}/pokemon/"),
        image_url=f"https://img.example/{entry_id}.png",
        categories=categories,
    )


def pokemon_payload(entry_id: int, name: str, types: Sequence[str], artwork: bool = True) -> Dict:
    return {
        "id": entry_id,
        "name": name,
        "height": 7,
        "weight": 69,
        "sprites": {
            "front_default": f"https://sprites.example/{entry_id}.png",
            "other": {
                "official-artwork": {
                    "front_default": f"https://art.example/{entry_id}.png" if artwork else None,
                }
            },
        },
        "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
        "abilities": [
            {"ability": {"name": "overgrow"}, "is_hidden": False},
            {"ability": {"name": "chlorophyll"}, "is_hidden": True},
        ],
    }


DEFAULT_POKEMON = {
    1: ("bulbasaur", ["grass", "poison"]),
    2: ("ivysaur", ["grass", "poison"]),
    3: ("venusaur", ["grass", "poison"]),
    4: ("charmander", ["fire"]),
    5: ("charmeleon", ["fire"]),
    6: ("charizard", ["fire", "flying"]),
}


class FakePokeApi:
    """Routes requests by path; failures and delays are configurable."""

    def __init__(self, pokemon: Optional[Dict] = None) -> None:
        self.pokemon = dict(DEFAULT_POKEMON if pokemon is None else pokemon)
        self.fail_index = False
        self.fail_types = set()
        self.fail_detail = set()
        self.gates: Dict[int, asyncio.Event] = {}
        self.started: Dict[int, asyncio.Event] = {}
        self.requests: List[str] = []

    def gate(self, entry_id: int) -> asyncio.Event:
        """Hold detail responses for ``entry_id`` until the event is set."""
        self.gates[entry_id] = asyncio.Event()
        self.started[entry_id] = asyncio.Event()
        return self.gates[entry_id]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(str(request.url))
        path = request.url.path
        if path.rstrip("/") == "/api/v2/pokemon":
            if self.fail_index:
                return httpx.Response(500)
            limit = int(request.url.params.get("limit", "151"))
            results = [
                {"name": name, "url": locator_for(pid)}
                for pid, (name, _) in sorted(self.pokemon.items())
            ][:limit]
            return httpx.Response(200, json={"count": len(results), "results": results})
        pid = int(path.rstrip("/").split("/")[-1])
        if pid not in self.pokemon:
            return httpx.Response(404)
        name, types = self.pokemon[pid]
        if path.endswith("/"):
            if pid in self.fail_types:
                return httpx.Response(503)
            return httpx.Response(200, json={"types": [{"type": {"name": t}} for t in types]})
        if pid in self.started:
            self.started[pid].set()
        if pid in self.gates:
            await self.gates[pid].wait()
        if pid in self.fail_detail:
            return httpx.Response(500)
        return httpx.Response(200, json=pokemon_payload(pid, name, types))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    return Settings(enrichment_concurrency=3, default_page_size=4)


@pytest.fixture
def fake_api():
    return FakePokeApi()


@pytest.fixture
def catalog():
    return [
        make_entry(1, "bulbasaur", ["grass", "poison"]),
        make_entry(2, "ivysaur", ["grass", "poison"]),
        make_entry(3, "venusaur"),
        make_entry(4, "charmander", ["fire"]),
        make_entry(5, "charmeleon", ["fire"]),
        make_entry(6, "charizard", ["fire", "flying"]),
    ]
