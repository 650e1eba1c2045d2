"""
Pokédex API integration for the catalogue.  This module wraps the three
endpoints of the remote Pokédex API consumed by the catalogue:

* ``PokedexAPI.list_pokemons()``: one page of Pokémon matching an
  optional name and a comma-joined list of type ids.

* ``PokedexAPI.get_pokemon()``: the detail of a single Pokémon,
  including its stats and evolution references.

* ``PokedexAPI.list_types()``: the full set of types, used as the
  static reference set for the type filter.

Requests go through an ``httpx.AsyncClient`` supplied by the caller so
that the application owns its lifecycle and tests can plug in a mock
transport.  Every failure (network error, non-2xx status, malformed
JSON, payload that does not fit the schemas) is logged and re-raised as
``CatalogAPIError``; callers do not distinguish between them.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from .schemas import Pokemon, PokemonType


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

_POKEMON = TypeAdapter(Pokemon)
_POKEMON_LIST = TypeAdapter(List[Pokemon])
_TYPE_LIST = TypeAdapter(List[PokemonType])


class CatalogAPIError(Exception):
    """Raised when the remote Pokédex API cannot serve a request."""


class PokedexAPI:
    """Thin async client for the remote Pokédex API."""

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Perform a GET and return the parsed JSON body.

        ``Accept: application/json`` is always sent.  Errors are logged
        and raised as ``CatalogAPIError`` carrying the underlying
        message.
        """
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            logger.error("Error fetching %s: %s", url, exc)
            raise CatalogAPIError(str(exc)) from exc
        except ValueError as exc:
            # json decoding failure
            logger.error("Invalid JSON from %s: %s", url, exc)
            raise CatalogAPIError(f"Invalid response from {url}") from exc

    @staticmethod
    def _validate(adapter: TypeAdapter, data: Any, what: str):
        try:
            return adapter.validate_python(data)
        except ValidationError as exc:
            logger.error("Unexpected %s payload: %s", what, exc)
            raise CatalogAPIError(f"Unexpected {what} payload") from exc

    async def list_pokemons(
        self,
        page: int = 1,
        per_page: int = 50,
        name: Optional[str] = None,
        types: Optional[str] = None,
    ) -> List[Pokemon]:
        """Fetch one page of Pokémon.

        ``name`` and ``types`` are left out of the query string when
        empty; the API treats a missing parameter as "no filter".
        """
        params: Dict[str, Any] = {
            "page": max(1, int(page)),
            "perPage": max(1, int(per_page)),
        }
        if name:
            params["name"] = name
        if types:
            params["types"] = types
        data = await self._get_json("/pokemons", params)
        return self._validate(_POKEMON_LIST, data, "pokemon list")

    async def get_pokemon(self, pokemon_id: int) -> Pokemon:
        """Return detailed data (stats, evolutions) for one Pokémon."""
        data = await self._get_json(f"/pokemons/{int(pokemon_id)}")
        return self._validate(_POKEMON, data, "pokemon")

    async def list_types(self) -> List[PokemonType]:
        data = await self._get_json("/types")
        return self._validate(_TYPE_LIST, data, "type list")
