"""
Filter state for the catalogue list.

``FilterState`` holds the search term, the selected type ids and the
page size.  Each mutator returns ``True`` when the state actually
changed; the controller treats that as a "filters changed" event and
resets pagination.  Setting a field to its current value is not a
change.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..config import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from .schemas import FiltersView, PokemonType, TypeId


class UnknownTypeError(ValueError):
    """Raised when toggling a type id that is not in the loaded type set."""


class FilterState:
    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        page_size_options: Sequence[int] = PAGE_SIZE_OPTIONS,
    ) -> None:
        self.page_size_options = tuple(page_size_options)
        if page_size not in self.page_size_options:
            raise ValueError(
                f"page size {page_size} is not one of {list(self.page_size_options)}"
            )
        self.search_term = ""
        self.page_size = page_size
        # Selection order is kept for the query string, membership is a set.
        self._selected: List[TypeId] = []

    @property
    def selected_types(self) -> List[TypeId]:
        return list(self._selected)

    def is_selected(self, type_id: TypeId) -> bool:
        return type_id in self._selected

    def set_search_term(self, term: str) -> bool:
        if not isinstance(term, str):
            raise TypeError("search term must be a string")
        if term == self.search_term:
            return False
        self.search_term = term
        return True

    def toggle_type(self, type_id: TypeId) -> bool:
        """Add ``type_id`` to the selection, or remove it if already there."""
        if type_id in self._selected:
            self._selected.remove(type_id)
        else:
            self._selected.append(type_id)
        return True

    def set_page_size(self, page_size: int) -> bool:
        if page_size not in self.page_size_options:
            raise ValueError(
                f"page size {page_size} is not one of {list(self.page_size_options)}"
            )
        if page_size == self.page_size:
            return False
        self.page_size = page_size
        return True

    def name_param(self) -> Optional[str]:
        return self.search_term or None

    def types_param(self) -> Optional[str]:
        if not self._selected:
            return None
        return ",".join(str(t) for t in self._selected)

    def view(self) -> FiltersView:
        return FiltersView(
            search_term=self.search_term,
            selected_types=self.selected_types,
            page_size=self.page_size,
            page_size_options=list(self.page_size_options),
        )


def resolve_type_id(raw: TypeId, known: Iterable[PokemonType]) -> TypeId:
    """Map a raw id (e.g. a path segment) onto the id of a known type.

    Ids are compared by their string form so ``"3"`` finds type ``3``.
    When no types are known (the type list failed to load) the raw id is
    returned unchanged, converted to ``int`` when it looks like one.
    """
    known = list(known)
    if not known:
        text = str(raw)
        return int(text) if text.isdigit() else raw
    for pokemon_type in known:
        if str(pokemon_type.id) == str(raw):
            return pokemon_type.id
    raise UnknownTypeError(f"unknown type {raw!r}")
