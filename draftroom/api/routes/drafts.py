"""
Draft API endpoints.

Thin HTTP mapping over DraftService. Engine errors are not caught here;
the application-level DraftError handler turns them into the error
envelope with the right status code.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...datamodels.draft_state import DraftView
from ...datamodels.player import PlayerAPI
from ...services.draft_service import DraftService


router = APIRouter()
logger = logging.getLogger(__name__)


class CreateDraftRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    teams: Optional[int] = None
    rounds: Optional[int] = None
    scoring_format: Optional[str] = Field(None, alias="format")
    sport: Optional[str] = None
    year: Optional[int] = None


class CreateDraftResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    draft_id: str = Field(..., alias="draftId")


class PickRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_id: str = Field("", alias="playerId")

    @field_validator("player_id", mode="before")
    @classmethod
    def coerce_player_id(cls, v):
        # Catalog ids are numeric strings; accept them sent as JSON numbers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(int(v)) if float(v).is_integer() else str(v)
        return v


class PickResponse(BaseModel):
    ok: bool = True


class AutoPickResponse(BaseModel):
    ok: bool = True
    picked: PlayerAPI


class SimulateResponse(BaseModel):
    ok: bool = True
    completed: bool


def get_draft_service(request: Request) -> DraftService:
    """Dependency returning the service the app was created with."""
    return request.app.state.draft_service


@router.post("/drafts", response_model=CreateDraftResponse)
def create_draft(body: Optional[CreateDraftRequest] = None,
                 service: DraftService = Depends(get_draft_service)):
    body = body or CreateDraftRequest()
    # 0 means "not given", same as leaving the field out
    draft_id = service.create_draft(teams=body.teams or None,
                                    rounds=body.rounds or None,
                                    scoring_format=body.scoring_format,
                                    sport=body.sport,
                                    year=body.year)
    return CreateDraftResponse(draft_id=draft_id)


@router.get("/drafts/{draft_id}", response_model=DraftView)
def get_draft(draft_id: str, service: DraftService = Depends(get_draft_service)):
    return service.describe_draft(draft_id)


@router.post("/drafts/{draft_id}/pick", response_model=PickResponse)
def submit_pick(draft_id: str,
                body: PickRequest,
                service: DraftService = Depends(get_draft_service)):
    service.submit_pick(draft_id, body.player_id)
    return PickResponse()


@router.post("/drafts/{draft_id}/auto-pick", response_model=AutoPickResponse)
def auto_pick(draft_id: str, service: DraftService = Depends(get_draft_service)):
    player = service.auto_pick(draft_id)
    return AutoPickResponse(picked=PlayerAPI.from_player(player))


@router.post("/drafts/{draft_id}/sim-to-end", response_model=SimulateResponse)
def simulate_to_end(draft_id: str, service: DraftService = Depends(get_draft_service)):
    completed = service.simulate_to_end(draft_id)
    if not completed:
        logger.warning(f"Draft {draft_id} stopped before the final pick: catalog exhausted")
    return SimulateResponse(completed=completed)
