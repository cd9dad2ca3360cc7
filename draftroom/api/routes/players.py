from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ...config.settings import settings
from ...datamodels.player import PlayerAPI
from ...services.draft_service import DraftService
from .drafts import get_draft_service


router = APIRouter()


class PlayerListResponse(BaseModel):
    sport: str
    format: str
    count: int
    players: List[PlayerAPI]


@router.get("/players", response_model=PlayerListResponse)
def list_players(sport: Optional[str] = Query(None),
                 format: Optional[str] = Query(None),
                 service: DraftService = Depends(get_draft_service)):
    """
    List the catalog for one sport, resolved for a scoring format.

    Ordered by rank with unranked players last, the same order autodraft uses.
    """
    sport = (sport or settings.default_sport).lower()
    format = (format or settings.default_format).lower()

    players = service.list_players(scoring_format=format, sport=sport)
    return PlayerListResponse(sport=sport,
                              format=format,
                              count=len(players),
                              players=[PlayerAPI.from_player(p) for p in players])
