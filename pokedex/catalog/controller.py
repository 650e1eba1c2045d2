"""
Fetch/filter controller for the catalogue list.

The controller owns the filter state, the result window and the type
reference set, and is the only place that talks to the list endpoint.
It runs on a single event loop; the ``is_loading`` flag is the in-flight
guard: while a page fetch is outstanding any other ``fetch_page`` call
returns immediately without touching the network.

Filter changes bump ``generation``.  A response that settles under an
older generation is dropped, and if a filter change was swallowed by the
guard meanwhile, one reset fetch for the current filters follows.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .api_service import CatalogAPIError, PokedexAPI
from .filters import FilterState, resolve_type_id
from .pagination import ResultWindow, build_page_request, merge_page
from .schemas import CatalogView, PokemonType, TypeId, TypesView


logger = logging.getLogger(__name__)

LIST_ERROR = "Failed to load Pokémon"
TYPES_ERROR = "Failed to load Pokémon types"


class CatalogController:
    def __init__(self, api: PokedexAPI, filters: Optional[FilterState] = None) -> None:
        self.api = api
        self.filters = filters or FilterState()
        self.window = ResultWindow(page_size=self.filters.page_size)
        self.types: List[PokemonType] = []
        self.types_error: Optional[str] = None
        self.error: Optional[str] = None
        self.is_loading = False
        self.generation = 0
        self._reset_pending = False

    async def start(self) -> None:
        """Load the type reference set, then the first page."""
        await self.load_types()
        await self.refresh()

    async def load_types(self) -> None:
        try:
            self.types = await self.api.list_types()
        except CatalogAPIError:
            logger.error("Type list unavailable; type filter disabled")
            self.types_error = TYPES_ERROR

    async def fetch_page(self, offset: int) -> bool:
        """Fetch the page starting at ``offset`` and merge it into the window.

        Returns ``False`` when the call was dropped because another fetch
        is in flight.
        """
        if self.is_loading:
            logger.debug("Fetch at offset %s dropped, request already in flight", offset)
            return False
        self.is_loading = True
        generation = self.generation
        if offset == 0:
            self._reset_pending = False
        request = build_page_request(self.filters, offset)
        try:
            items = await self.api.list_pokemons(**request.params())
        except CatalogAPIError as exc:
            if generation == self.generation:
                self.error = str(exc) or LIST_ERROR
                self.window.has_more = False
            else:
                logger.info("Ignoring failure of stale request (generation %s)", generation)
        else:
            if generation == self.generation:
                merge_page(self.window, request, items)
                self.error = None
            else:
                logger.info(
                    "Discarding %s items from stale request (generation %s, now %s)",
                    len(items), generation, self.generation,
                )
        finally:
            self.is_loading = False
        if self._reset_pending:
            await self.fetch_page(0)
        return True

    async def refresh(self) -> bool:
        return await self.fetch_page(0)

    async def load_more(self) -> bool:
        if not self.window.has_more:
            return False
        return await self.fetch_page(self.window.offset)

    async def _filters_changed(self) -> None:
        self.generation += 1
        self._reset_pending = True
        await self.refresh()

    async def set_search_term(self, term: str) -> None:
        if self.filters.set_search_term(term):
            await self._filters_changed()

    async def toggle_type(self, type_id: TypeId) -> None:
        resolved = resolve_type_id(type_id, self.types)
        if self.filters.toggle_type(resolved):
            await self._filters_changed()

    async def set_page_size(self, page_size: int) -> None:
        if self.filters.set_page_size(page_size):
            await self._filters_changed()

    def view(self) -> CatalogView:
        # page_size follows the window, filters.page_size the request
        return CatalogView(
            items=list(self.window.items),
            offset=self.window.offset,
            page_size=self.window.page_size,
            has_more=self.window.has_more,
            is_loading=self.is_loading,
            error=self.error,
            types_error=self.types_error,
            filters=self.filters.view(),
        )

    def types_view(self) -> TypesView:
        return TypesView(items=list(self.types), error=self.types_error)
