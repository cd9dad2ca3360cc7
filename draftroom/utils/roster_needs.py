"""
Roster need evaluation.

Counts how many players of each tracked position a team has already
drafted. The counts feed the autodraft need term; they are derived on
demand and never stored on the draft.
"""

from typing import Dict, Mapping, Optional

from ..datamodels.draft_state import DraftSession
from ..datamodels.player import Player, PlayerPosition

RosterNeedCounts = Dict[str, int]


def empty_roster_counts() -> RosterNeedCounts:
    return {pos.value: 0 for pos in PlayerPosition}


def evaluate_roster_needs(session: DraftSession,
                          team_number: int,
                          players_by_id: Optional[Mapping[str, Player]] = None) -> RosterNeedCounts:
    """
    Tally a team's drafted players by position.

    The position comes from the snapshot stored on the pick; when a pick
    has no snapshot the catalog lookup is used instead. Picks that cannot
    be resolved, or resolve to an untracked position, are ignored.

    Args:
        session: Draft to inspect
        team_number: 1-based team number
        players_by_id: Optional catalog lookup for picks without a snapshot

    Returns:
        Position -> count for QB, RB, WR, TE, K and DEF
    """
    counts = empty_roster_counts()
    team_count = session.team_count

    # Visit only this team's slot in each round
    for round_number in range(1, session.round_count + 1):
        if round_number % 2 == 1:
            index = (round_number - 1) * team_count + (team_number - 1)
        else:
            index = (round_number - 1) * team_count + (team_count - team_number)

        if index >= session.current_index:
            break

        pick = session.picks[index]
        if pick.team != team_number or not pick.player_id:
            continue

        if pick.player is not None:
            position = pick.player.position
        elif players_by_id and pick.player_id in players_by_id:
            position = players_by_id[pick.player_id].position
        else:
            continue

        if position in counts:
            counts[position] += 1

    return counts
