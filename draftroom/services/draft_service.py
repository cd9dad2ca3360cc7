"""
Draft operations exposed to callers.

Binds the draft engine to a session store: each call loads one draft,
runs one transition and persists it through VersionedTransition. This is
the only layer the API talks to.
"""

from typing import List, Optional

from ..config.settings import settings
from ..datamodels.draft_state import DraftView
from ..datamodels.player import Player
from ..external.player_catalog import PlayerCatalog
from ..simulation.autodraft import DEFAULT_WEIGHTS, AutodraftWeights
from ..simulation.draft_engine import DraftEngine
from ..store.concurrency import VersionedTransition
from ..store.session_store import SessionStore


class DraftService:
    """
    Stateless facade over the engine, store and catalog.

    Safe to share across requests; all draft state lives in the store.
    simulate_to_end persists once after the whole run, so a crash mid-run
    leaves the draft at its last stored pick and the call can be retried.
    """

    def __init__(self,
                 store: SessionStore,
                 catalog: PlayerCatalog,
                 weights: AutodraftWeights = DEFAULT_WEIGHTS):
        self.store = store
        self.catalog = catalog
        self.engine = DraftEngine(catalog, weights)
        self.transitions = VersionedTransition(store)

    def create_draft(self,
                     teams=None,
                     rounds=None,
                     scoring_format: Optional[str] = None,
                     sport: Optional[str] = None,
                     year=None) -> str:
        session = self.engine.create_draft(
            team_count=teams if teams is not None else settings.default_teams,
            round_count=rounds if rounds is not None else settings.default_rounds,
            scoring_format=scoring_format or settings.default_format,
            sport=sport or settings.default_sport,
            year=year if year is not None else settings.default_year,
        )
        self.store.insert(session)
        return session.draft_id

    def describe_draft(self, draft_id: str) -> DraftView:
        return self.engine.describe(self.transitions.load(draft_id))

    def submit_pick(self, draft_id: str, player_id: str) -> Player:
        return self.transitions.run(draft_id, lambda session: self.engine.submit_pick(session, player_id))

    def auto_pick(self, draft_id: str) -> Player:
        return self.transitions.run(draft_id, self.engine.auto_pick)

    def simulate_to_end(self, draft_id: str) -> bool:
        return self.transitions.run(draft_id, self.engine.simulate_to_end)

    def list_players(self, scoring_format: Optional[str] = None, sport: Optional[str] = None) -> List[Player]:
        fmt = (scoring_format or settings.default_format).lower()
        sport = (sport or settings.default_sport).lower()
        return self.catalog.query(fmt, sport)
