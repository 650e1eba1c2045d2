"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET  /types                   : type reference set (+ load error)
- GET  /pokemons                : current result window, filters and status
- POST /pokemons/more           : infinite-scroll trigger (next page)
- PUT  /filters/search          : set the name search term
- POST /filters/types/{type_id} : toggle a type in the filter
- PUT  /filters/page-size       : change the number of items per page
- GET  /item/{item_id}          : detail view (stats and evolutions)

Every list endpoint answers with the controller snapshot taken after the
triggered fetch has settled, so the front-end can render it directly.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Request

from .api_service import CatalogAPIError, PokedexAPI
from .controller import CatalogController
from .filters import UnknownTypeError
from .schemas import CatalogView, PageSizeUpdate, Pokemon, SearchUpdate, TypesView


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

DETAIL_ERROR = "Failed to load Pokémon details"

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_controller(request: Request) -> CatalogController:
    """Resolve the per-process catalogue controller from app state."""
    return request.app.state.controller


def get_api(request: Request) -> PokedexAPI:
    return request.app.state.api


@router.get("/types", response_model=TypesView)
async def list_types(controller: CatalogController = Depends(get_controller)) -> TypesView:
    return controller.types_view()


@router.get("/pokemons", response_model=CatalogView)
async def list_pokemons(controller: CatalogController = Depends(get_controller)) -> CatalogView:
    return controller.view()


@router.post("/pokemons/more", response_model=CatalogView)
async def load_more(controller: CatalogController = Depends(get_controller)) -> CatalogView:
    await controller.load_more()
    return controller.view()


@router.put("/filters/search", response_model=CatalogView)
async def set_search(
    update: SearchUpdate = Body(...),
    controller: CatalogController = Depends(get_controller),
) -> CatalogView:
    await controller.set_search_term(update.term)
    return controller.view()


@router.post("/filters/types/{type_id}", response_model=CatalogView)
async def toggle_type(
    type_id: str,
    controller: CatalogController = Depends(get_controller),
) -> CatalogView:
    try:
        await controller.toggle_type(type_id)
    except UnknownTypeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return controller.view()


@router.put("/filters/page-size", response_model=CatalogView)
async def set_page_size(
    update: PageSizeUpdate = Body(...),
    controller: CatalogController = Depends(get_controller),
) -> CatalogView:
    try:
        await controller.set_page_size(update.page_size)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return controller.view()


@router.get("/item/{item_id}", response_model=Pokemon)
async def get_item(
    item_id: int = Path(..., ge=1, description="Pokédex id"),
    api: PokedexAPI = Depends(get_api),
) -> Pokemon:
    try:
        return await api.get_pokemon(item_id)
    except CatalogAPIError:
        logger.error("Detail view for %s unavailable", item_id)
        raise HTTPException(status_code=502, detail=DETAIL_ERROR)
