"""Pokédex browser: an in-memory query engine over PokeAPI's first 151 Pokémon."""
