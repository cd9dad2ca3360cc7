"""
Draft state management models.

Represents one draft session: the precomputed snake schedule, the picks
made so far and the version used for optimistic concurrency. The
persisted layout uses camelCase aliases so stored records read the same
as the draft table rows the frontend consumes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .player import PlayerSnapshot

class DraftStatus(str, Enum):
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

class DraftPick(BaseModel):
    """One scheduled turn. player_id/player are assigned exactly once."""

    model_config = ConfigDict(populate_by_name=True)

    overall: int
    round: int
    team: int
    player_id: Optional[str] = Field(None, alias="playerId")
    player: Optional[PlayerSnapshot] = None

    @property
    def is_assigned(self) -> bool:
        return self.player_id is not None

class DraftSession(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    draft_id: str = Field(..., alias="draftId")
    sport: str = "nfl"
    scoring_format: str = Field("standard", alias="format")
    year: int = 2025

    team_count: int = Field(..., alias="teams", ge=1)
    round_count: int = Field(..., alias="rounds", ge=1)

    picks: List[DraftPick] = Field(default_factory=list)
    # Most recent pick first
    picked: List[str] = Field(default_factory=list)
    current_index: int = Field(0, alias="currentIndex", ge=0)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc),
                                 alias="createdAt")
    version: int = Field(1, ge=1)

    @property
    def turn_count(self) -> int:
        return len(self.picks)

    @property
    def is_complete(self) -> bool:
        return self.current_index >= self.turn_count

    @property
    def status(self) -> DraftStatus:
        if self.is_complete:
            return DraftStatus.COMPLETED
        if self.current_index == 0:
            return DraftStatus.CREATED
        return DraftStatus.IN_PROGRESS

    @property
    def current_slot(self) -> Optional[DraftPick]:
        if self.is_complete:
            return None
        return self.picks[self.current_index]

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: dict) -> 'DraftSession':
        return cls.model_validate(record)

class DraftView(BaseModel):
    """Read-only projection returned when describing a draft."""

    model_config = ConfigDict(populate_by_name=True)

    draft_id: str = Field(..., alias="draftId")
    sport: str
    scoring_format: str = Field(..., alias="format")
    year: int
    team_count: int = Field(..., alias="teams")
    round_count: int = Field(..., alias="rounds")
    picked: List[str]
    current_index: int = Field(..., alias="currentIndex")
    current_round: int = Field(..., alias="currentRound")
    current_pick: int = Field(..., alias="currentPick")
    current_team: Optional[int] = Field(None, alias="currentTeam")
    completed: bool
    status: DraftStatus
    picks: List[DraftPick]
