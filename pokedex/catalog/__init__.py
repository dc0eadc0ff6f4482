"""
Catalog package for the Pokédex browser.

The catalogue (the first 151 Pokémon from PokeAPI) is loaded once into
memory by ``store``; ``query`` derives the list and gallery views and the
previous/next order from it, and ``detail`` fetches one full record per
selection.  ``router`` exposes all of this as a small JSON API.
"""

from .router import router as catalog_router  # noqa: F401
