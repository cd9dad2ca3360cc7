"""
Player catalog access.

The catalog is owned by an external ingestion job; the draft engine only
reads it. PlayerCatalog is the interface the engine depends on, and
InMemoryPlayerCatalog serves records loaded from a list or a JSON file.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..datamodels.player import CatalogPlayer, Player


logger = logging.getLogger(__name__)


class PlayerCatalog(ABC):
    """Read-only catalog query interface consumed by the draft engine."""

    @abstractmethod
    def query(self, scoring_format: str, sport: str = "nfl") -> List[Player]:
        """
        Return every player for a sport resolved for one scoring format.

        Players are ordered by rank ascending with unranked players last;
        ties keep catalog order. Autodraft relies on this ordering.
        """

    @abstractmethod
    def get_player(self, player_id: str, scoring_format: str, sport: str = "nfl") -> Optional[Player]:
        """Look up a single player, or None when the catalog has no such id."""


class InMemoryPlayerCatalog(PlayerCatalog):
    """
    Catalog backed by records held in memory.

    Records use the stored catalog shape: id (or playerId), name,
    position, team, sport and per-format rank/adp/tier maps.
    """

    def __init__(self, records: Iterable[Union[dict, CatalogPlayer]] = ()):
        self._players: Dict[Tuple[str, str], CatalogPlayer] = {}

        for record in records:
            self.add(record)

        logger.info(f'Loaded player catalog with {len(self._players)} players.')

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> 'InMemoryPlayerCatalog':
        """
        Load a catalog from a JSON file.

        Accepts either a list of records or an object with a "players" list.
        """
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = data.get("players", [])

        return cls(data)

    def add(self, record: Union[dict, CatalogPlayer]) -> CatalogPlayer:
        player = record if isinstance(record, CatalogPlayer) else CatalogPlayer.model_validate(record)
        self._players[(player.sport, player.id)] = player
        return player

    def __len__(self) -> int:
        return len(self._players)

    def query(self, scoring_format: str, sport: str = "nfl") -> List[Player]:
        sport = sport.lower()
        players = [record.for_format(scoring_format)
                   for (record_sport, _), record in self._players.items()
                   if record_sport == sport]

        # sorted() is stable, so equal ranks keep insertion order
        return sorted(players, key=lambda p: p.sort_rank)

    def get_player(self, player_id: str, scoring_format: str, sport: str = "nfl") -> Optional[Player]:
        record = self._players.get((sport.lower(), str(player_id)))
        if record is None:
            return None
        return record.for_format(scoring_format)
