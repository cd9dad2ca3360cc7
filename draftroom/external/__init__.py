from .player_catalog import PlayerCatalog, InMemoryPlayerCatalog

__all__ = [
    "PlayerCatalog",
    "InMemoryPlayerCatalog",
]
