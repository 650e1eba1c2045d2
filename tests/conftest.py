"""
Pytest configuration and shared fixtures for the catalogue tests.

``FakePokedex`` stands in for the remote API behind an
``httpx.MockTransport``: it serves ``/types``, ``/pokemons`` (with the
page/perPage/name/types query parameters) and ``/pokemons/<id>``, and
records every request it sees.  Setting ``gate`` to an
``asyncio.Event`` holds responses until the event is set, which is how
the tests keep a fetch in flight; paths in ``hang_paths`` never answer.
"""

import asyncio
import re
from typing import Any, Dict, List, Optional, Set

import httpx
import pytest

from pokedex.catalog.api_service import PokedexAPI
from pokedex.catalog.controller import CatalogController
from pokedex.catalog.filters import FilterState


API_URL = "http://pokedex.test"

TYPES = [
    {"id": 1, "name": "feu", "image": "https://img.test/types/feu.png"},
    {"id": 2, "name": "eau", "image": "https://img.test/types/eau.png"},
    {"id": 3, "name": "plante", "image": "https://img.test/types/plante.png"},
]


def make_pokemon(pokemon_id: int, name: Optional[str] = None, type_ids=(1,)) -> Dict[str, Any]:
    by_id = {t["id"]: t for t in TYPES}
    return {
        "id": pokemon_id,
        "name": name or f"pokemon-{pokemon_id}",
        "image": f"https://img.test/pokemon/{pokemon_id}.png",
        "types": [{"id": by_id[t]["id"], "name": by_id[t]["name"]} for t in type_ids],
        "stats": {"HP": 45, "attack": 49, "speed": 45.5},
        "evolutions": [],
    }


def make_pokemons(count: int, start: int = 1, **kwargs) -> List[Dict[str, Any]]:
    return [make_pokemon(i, **kwargs) for i in range(start, start + count)]


class FakePokedex:
    def __init__(self, pokemons: List[Dict[str, Any]], types: Optional[List[Dict[str, Any]]] = None) -> None:
        self.pokemons = pokemons
        self.types = TYPES if types is None else types
        self.requests: List[httpx.Request] = []
        self.fail = False
        self.fail_types = False
        self.gate: Optional[asyncio.Event] = None
        self.hang_paths: Set[str] = set()

    @property
    def list_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/pokemons"]

    def _filtered(self, params: httpx.QueryParams) -> List[Dict[str, Any]]:
        items = self.pokemons
        name = params.get("name")
        if name:
            items = [p for p in items if name.lower() in p["name"].lower()]
        types = params.get("types")
        if types:
            wanted = {int(t) for t in types.split(",")}
            items = [p for p in items if wanted <= {t["id"] for t in p["types"]}]
        return items

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path in self.hang_paths:
            # never answers; only cancellation ends the request
            await asyncio.Event().wait()
        if self.gate is not None:
            await self.gate.wait()
        path = request.url.path
        if path == "/types":
            if self.fail_types:
                return httpx.Response(503, json={"message": "unavailable"})
            return httpx.Response(200, json=self.types)
        if self.fail:
            return httpx.Response(500, json={"message": "boom"})
        if path == "/pokemons":
            page = int(request.url.params["page"])
            per_page = int(request.url.params["perPage"])
            items = self._filtered(request.url.params)
            start = (page - 1) * per_page
            return httpx.Response(200, json=items[start:start + per_page])
        match = re.fullmatch(r"/pokemons/(\d+)", path)
        if match:
            for p in self.pokemons:
                if p["id"] == int(match.group(1)):
                    return httpx.Response(200, json=p)
            return httpx.Response(404, json={"message": "not found"})
        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


async def wait_for_requests(fake: FakePokedex, count: int) -> None:
    """Yield to the event loop until ``fake`` has seen ``count`` requests."""
    for _ in range(200):
        if len(fake.requests) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"expected {count} requests, saw {len(fake.requests)}")


@pytest.fixture
def fake() -> FakePokedex:
    return FakePokedex(make_pokemons(67))


@pytest.fixture
def api(fake) -> PokedexAPI:
    return PokedexAPI(fake.client(), API_URL)


@pytest.fixture
def controller(api) -> CatalogController:
    return CatalogController(api, FilterState(page_size=20))
