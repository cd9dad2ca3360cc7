"""
Player data model and related enums.

Players are the catalog items teams claim during a draft. The catalog
stores rank/ADP/tier per scoring format; a draft only ever sees the
view resolved for its own format.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

class PlayerPosition(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DEF = "DEF"

# Positions autodraft will consider and roster needs are tracked for
DRAFTABLE_POSITIONS = frozenset(pos.value for pos in PlayerPosition)

@dataclass(frozen=True)
class Player:
    """
    A catalog player resolved for one scoring format.

    Immutable so the same resolved list can be scored repeatedly during a
    simulation without copying. Missing rank/adp/tier mean the catalog has
    no value for this format; they sort and score as the worst case.
    """

    id: str
    name: str
    position: str
    team: Optional[str] = None

    rank: Optional[float] = None
    adp: Optional[float] = None
    tier: Optional[int] = None

    def __str__(self) -> str:
        return f'{self.name} ({self.position}, {self.team})'

    def __repr__(self) -> str:
        return f'Player (id={self.id}, name={self.name}, position={self.position})'

    @property
    def sort_rank(self) -> float:
        return self.rank if self.rank is not None else 999999

    def snapshot(self) -> 'PlayerSnapshot':
        return PlayerSnapshot(id=self.id,
                              name=self.name,
                              position=self.position,
                              team=self.team,
                              rank=self.rank,
                              adp=self.adp,
                              tier=self.tier)

class PlayerSnapshot(BaseModel):
    """Display fields copied into a pick slot when the player is drafted."""

    id: str
    name: str
    position: str
    team: Optional[str] = None
    rank: Optional[float] = None
    adp: Optional[float] = None
    tier: Optional[int] = None

class CatalogPlayer(BaseModel):
    """
    A stored catalog record.

    rank/adp/tier are keyed by scoring format ("standard", "ppr", ...),
    so supporting a new format is a data change, not a code change.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    position: str
    team: Optional[str] = None
    status: Optional[str] = None
    sport: str = "nfl"

    rank: Dict[str, float] = Field(default_factory=dict)
    adp: Dict[str, float] = Field(default_factory=dict)
    tier: Dict[str, int] = Field(default_factory=dict)

    @model_validator(mode='before')
    @classmethod
    def canonical_id(cls, data: Any) -> Any:
        # Catalog rows may carry the id under either key
        if isinstance(data, dict) and not data.get('id') and data.get('playerId'):
            data = {**data, 'id': str(data['playerId'])}
        return data

    @field_validator('id', mode='before')
    @classmethod
    def id_as_string(cls, v):
        return str(v) if v is not None else v

    @field_validator('sport')
    @classmethod
    def lowercase_sport(cls, v):
        return v.lower()

    @field_validator('rank', 'adp', 'tier', mode='before')
    @classmethod
    def drop_null_entries(cls, v):
        if v is None:
            return {}
        if isinstance(v, dict):
            return {fmt.lower(): value for fmt, value in v.items() if value is not None}
        return v

    def for_format(self, scoring_format: str) -> Player:
        fmt = scoring_format.lower()
        return Player(id=self.id,
                      name=self.name,
                      position=self.position,
                      team=self.team,
                      rank=self.rank.get(fmt),
                      adp=self.adp.get(fmt),
                      tier=self.tier.get(fmt))

class PlayerAPI(BaseModel):
    id: str
    name: str
    position: str
    team: Optional[str] = None
    rank: Optional[float] = None
    adp: Optional[float] = None
    tier: Optional[int] = None

    @classmethod
    def from_player(cls, player: Player) -> 'PlayerAPI':
        return cls.model_validate(player, from_attributes=True)
