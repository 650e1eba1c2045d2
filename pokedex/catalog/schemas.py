"""
Pydantic schema definitions for the catalog module.

``Pokemon``, ``PokemonType`` and ``Evolution`` mirror the JSON returned
by the remote Pokédex API.  They are frozen: every response produces a
new immutable snapshot and the client never mutates an item.  The
remaining models describe what the catalog service sends back to its
own front-end: the current result window together with the filter
state and the loading/error flags that drive the infinite scroll.
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


ARTWORK_URL = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/"
    "pokemon/other/official-artwork/{pokedex_id}.png"
)

TypeId = Union[int, str]


class PokemonType(BaseModel):
    """A category label used to filter the catalogue (fire, water, ...)."""

    model_config = ConfigDict(frozen=True)

    id: TypeId
    name: str
    image: Optional[str] = None


class Evolution(BaseModel):
    """Reference to a related Pokémon in the evolution chain.

    The API only sends ``pokedexId`` and ``name``; ``image`` is derived
    from the official artwork sprite set when it is missing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pokedex_id: int = Field(alias="pokedexId")
    name: str
    image: str = ""

    @model_validator(mode="before")
    @classmethod
    def _fill_artwork(cls, data):
        if isinstance(data, dict) and not data.get("image"):
            pokedex_id = data.get("pokedexId", data.get("pokedex_id"))
            if pokedex_id is not None:
                data = {**data, "image": ARTWORK_URL.format(pokedex_id=pokedex_id)}
        return data


class Pokemon(BaseModel):
    """A single catalogue entry.

    List responses usually leave ``stats`` and ``evolutions`` empty;
    the detail endpoint fills them in.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str
    image: str = ""
    types: List[PokemonType] = Field(default_factory=list)
    # Numeric values keep their wire type (45 stays an int).
    stats: Dict[str, Union[int, float]] = Field(default_factory=dict)
    evolutions: List[Evolution] = Field(default_factory=list)

    @property
    def display_number(self) -> str:
        return f"#{self.id:03d}"


class FiltersView(BaseModel):
    search_term: str
    selected_types: List[TypeId]
    page_size: int
    page_size_options: List[int]


class CatalogView(BaseModel):
    """Snapshot of the controller returned by every list endpoint.

    ``page_size`` is the size the loaded ``items`` were fetched with, so
    it goes with ``offset`` and ``has_more``.  ``filters.page_size`` is
    the requested size; the two differ until the reset fetch following a
    page size change succeeds.
    """

    items: List[Pokemon]
    offset: int
    page_size: int
    has_more: bool
    is_loading: bool
    error: Optional[str] = None
    types_error: Optional[str] = None
    filters: FiltersView


class TypesView(BaseModel):
    items: List[PokemonType]
    error: Optional[str] = None


class SearchUpdate(BaseModel):
    term: str = ""


class PageSizeUpdate(BaseModel):
    page_size: int
