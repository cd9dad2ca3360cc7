"""
Draft state machine.

Owns the draft lifecycle: building the schedule, validating and applying
manual picks and autodraft picks, running a draft to the end, and
projecting a read-only view. It works on DraftSession objects handed to
it and never touches storage; persistence and version checks belong to
the caller (see store.concurrency).

Lifecycle:
    created (nothing picked) -> in_progress -> completed (every slot filled)
Only describe() is valid once a draft is completed.
"""

import logging
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from ..datamodels.draft_state import DraftSession, DraftView
from ..datamodels.player import DRAFTABLE_POSITIONS, Player
from ..exceptions import (
    CatalogExhaustedError, DraftCompletedError, InvalidConfigurationError,
    PlayerAlreadyTakenError, UnknownPlayerError
)
from ..external.player_catalog import PlayerCatalog
from ..utils.roster_needs import evaluate_roster_needs
from ..utils.snake_draft import SnakeDraftCalculator
from .autodraft import DEFAULT_WEIGHTS, AutodraftWeights, select_best


logger = logging.getLogger(__name__)

MIN_TEAMS = 2
MAX_TEAMS = 32
MIN_ROUNDS = 1
MAX_ROUNDS = 30


def _as_int(value, name: str) -> int:
    if isinstance(value, bool) or value is None:
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidConfigurationError(f"{name} must be a whole number, got {value!r}")


def _as_key(value, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidConfigurationError(f"{name} must be a non-empty string, got {value!r}")
    return value.strip().lower()


def clamp_draft_size(team_count, round_count) -> Tuple[int, int]:
    """
    Coerce and clamp draft dimensions to the supported range.

    Out-of-range numbers are clamped (2-32 teams, 1-30 rounds); values
    that are not whole numbers are rejected.
    """
    teams = max(MIN_TEAMS, min(MAX_TEAMS, _as_int(team_count, "teams")))
    rounds = max(MIN_ROUNDS, min(MAX_ROUNDS, _as_int(round_count, "rounds")))
    return teams, rounds


class DraftEngine:
    """
    Validates and applies draft transitions.

    Args:
        catalog: Read-only player catalog
        weights: Autodraft tuning constants
    """

    def __init__(self,
                 catalog: PlayerCatalog,
                 weights: AutodraftWeights = DEFAULT_WEIGHTS):
        self.catalog = catalog
        self.weights = weights
        self.draft_calculator = SnakeDraftCalculator()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def create_draft(self,
                     team_count,
                     round_count,
                     scoring_format: str = "standard",
                     sport: str = "nfl",
                     year=2025) -> DraftSession:
        """
        Build a new draft with its full snake schedule.

        Everything is validated before the schedule is built, so a bad
        request never produces a half-made draft.
        """
        teams, rounds = clamp_draft_size(team_count, round_count)
        fmt = _as_key(scoring_format, "format")
        sport = _as_key(sport, "sport")
        year = _as_int(year, "year")

        session = DraftSession(draft_id=str(uuid4()),
                               sport=sport,
                               scoring_format=fmt,
                               year=year,
                               team_count=teams,
                               round_count=rounds,
                               picks=self.draft_calculator.build_order(teams, rounds),
                               picked=[],
                               current_index=0,
                               version=1)

        logger.info(f'Created draft {session.draft_id}: {teams} teams x {rounds} rounds '
                    f'({sport}/{fmt})')
        return session

    def submit_pick(self, session: DraftSession, player_id: str) -> Player:
        """
        Apply a manual pick for the team on the clock.

        Raises:
            UnknownPlayerError: blank id, or not in the catalog for this draft
            PlayerAlreadyTakenError: the player was already picked
            DraftCompletedError: every slot is already filled
        """
        player_id = str(player_id or "").strip()
        if not player_id:
            raise UnknownPlayerError(player_id)

        if player_id in session.picked:
            raise PlayerAlreadyTakenError(player_id)
        if session.is_complete:
            raise DraftCompletedError(session.draft_id)

        player = self.catalog.get_player(player_id, session.scoring_format, session.sport)
        if player is None:
            raise UnknownPlayerError(player_id)

        self._apply_pick(session, player)
        return player

    def auto_pick(self, session: DraftSession) -> Player:
        """
        Pick on behalf of the team on the clock.

        Raises:
            DraftCompletedError: every slot is already filled
            CatalogExhaustedError: no eligible player is left
        """
        if session.is_complete:
            raise DraftCompletedError(session.draft_id)

        players, players_by_id = self._load_candidates(session)

        best = self._choose(session, players, players_by_id)
        if best is None:
            raise CatalogExhaustedError(session.draft_id)

        self._apply_pick(session, best)
        return best

    def simulate_to_end(self, session: DraftSession) -> bool:
        """
        Autodraft every remaining slot.

        Stops early, without error, if the catalog runs out; the caller
        can tell from the returned flag (or session.is_complete).

        Returns:
            True when every slot has been filled
        """
        if session.is_complete:
            return True

        players, players_by_id = self._load_candidates(session)
        start_index = session.current_index

        # Bounded by the number of remaining slots
        for _ in range(session.turn_count - session.current_index):
            best = self._choose(session, players, players_by_id)
            if best is None:
                logger.warning(f'Draft {session.draft_id} ran out of players at pick '
                               f'{session.current_index + 1}/{session.turn_count}')
                break
            self._apply_pick(session, best)

        logger.info(f'Simulated draft {session.draft_id}: '
                    f'{session.current_index - start_index} picks, completed={session.is_complete}')
        return session.is_complete

    def describe(self, session: DraftSession) -> DraftView:
        """Project the draft for display. Never modifies the session."""
        slot = session.current_slot

        if slot is not None:
            current_round, current_pick, _ = self.draft_calculator.get_draft_position_info(
                slot.overall, session.team_count
            )
            current_team = self.draft_calculator.get_picking_team(slot.overall, session.team_count)
        else:
            current_round = session.round_count
            current_pick = session.team_count
            current_team = None

        return DraftView(draft_id=session.draft_id,
                         sport=session.sport,
                         scoring_format=session.scoring_format,
                         year=session.year,
                         team_count=session.team_count,
                         round_count=session.round_count,
                         picked=list(session.picked),
                         current_index=session.current_index,
                         current_round=current_round,
                         current_pick=current_pick,
                         current_team=current_team,
                         completed=session.is_complete,
                         status=session.status,
                         picks=[pick.model_copy(deep=True) for pick in session.picks])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_candidates(self, session: DraftSession) -> Tuple[List[Player], Dict[str, Player]]:
        players = [p for p in self.catalog.query(session.scoring_format, session.sport)
                   if p.position in DRAFTABLE_POSITIONS]
        players_by_id = {p.id: p for p in players}
        return players, players_by_id

    def _choose(self,
                session: DraftSession,
                players: List[Player],
                players_by_id: Dict[str, Player]) -> Optional[Player]:
        slot = session.current_slot
        need_counts = evaluate_roster_needs(session, slot.team, players_by_id)

        return select_best(players,
                           excluded=session.picked,
                           need_counts=need_counts,
                           round_number=slot.round,
                           weights=self.weights)

    def _apply_pick(self, session: DraftSession, player: Player) -> None:
        slot = session.picks[session.current_index]
        assert not slot.is_assigned, f"pick {slot.overall} already assigned"

        slot.player_id = player.id
        slot.player = player.snapshot()

        session.picked.insert(0, player.id)
        session.current_index += 1

        logger.debug(f'Draft {session.draft_id}: pick {slot.overall} (round {slot.round}, '
                     f'team {slot.team}) -> {player!r}')

        if session.is_complete:
            logger.info(f'Draft {session.draft_id} completed')
