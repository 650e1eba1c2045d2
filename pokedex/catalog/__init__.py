"""
Catalog package for the Pokédex browser.

This package contains the schemas, the remote API client and the
fetch/filter controller behind the catalogue view: a paginated list of
Pokémon with a name search, a multi-select type filter and infinite
scroll, plus a detail view with stats and evolutions.  The routes in
``router`` expose the controller state so that a front-end only has to
render what it receives.
"""

from .router import router as catalog_router  # noqa: F401
