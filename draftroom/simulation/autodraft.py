"""
Autodraft heuristic for picking on a team's behalf.

A greedy, single-pass scorer: rank carries most of the weight, roster
needs steer the choice between similarly ranked players, and kickers and
defenses are pushed to the late rounds. It does not search ahead.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ..datamodels.player import Player, PlayerPosition


logger = logging.getLogger(__name__)


def _default_targets() -> Dict[str, int]:
    # Roster targets by end of draft
    return {'QB': 1, 'RB': 2, 'WR': 2, 'TE': 1, 'K': 1, 'DEF': 1}


def _default_early_weights() -> Dict[str, float]:
    # Early rounds lean on RB/WR and push K/DEF down
    return {'RB': 2.0, 'WR': 2.0, 'QB': 0.7, 'TE': 0.7, 'K': 0.1, 'DEF': 0.1}


@dataclass(frozen=True)
class AutodraftWeights:
    """
    Tuning constants for the autodraft score.

    The literal values are adjustable; their ordering is what matters.
    Need bonuses outweigh small rank gaps, the late-position penalty
    outweighs any need bonus, and the name-length tie-break only
    separates otherwise equal scores.
    """

    base_constant: float = 100000.0
    need_multiplier: float = 500.0

    late_position_penalty: float = -20000.0
    late_position_round: int = 10
    late_positions: Tuple[str, ...] = (PlayerPosition.K.value, PlayerPosition.DEF.value)

    early_round_limit: int = 6
    targets: Dict[str, int] = field(default_factory=_default_targets)
    early_round_weights: Dict[str, float] = field(default_factory=_default_early_weights)

    def __post_init__(self):
        assert self.need_multiplier >= 0, "Need multiplier must be non-negative"
        assert self.late_position_penalty <= 0, "Late position penalty must be <= 0"

    def round_weight(self, position: str, round_number: int) -> float:
        if round_number <= self.early_round_limit:
            return self.early_round_weights.get(position, 1.0)
        return 1.0


DEFAULT_WEIGHTS = AutodraftWeights()


def need_score(counts: Mapping[str, int],
               position: str,
               round_number: int,
               weights: AutodraftWeights = DEFAULT_WEIGHTS) -> float:
    """Unfilled roster target for a position, weighted by round."""
    missing = max(0, weights.targets.get(position, 0) - counts.get(position, 0))
    return missing * weights.round_weight(position, round_number)


def score_player(player: Player,
                 need_counts: Mapping[str, int],
                 round_number: int,
                 weights: AutodraftWeights = DEFAULT_WEIGHTS) -> float:
    """
    Score one candidate for the team on the clock.

    Combines:
    1. Rank (lower rank = better, unranked = 0)
    2. Positional need, weighted for early rounds
    3. Penalty for K/DEF before the late rounds
    4. Name length, so equal scores still have a stable order
    """
    base = weights.base_constant - float(player.rank) if player.rank is not None else 0.0

    needs = need_score(need_counts, player.position, round_number, weights) * weights.need_multiplier

    late_penalty = 0.0
    if round_number <= weights.late_position_round and player.position in weights.late_positions:
        late_penalty = weights.late_position_penalty

    tiebreak = len(player.name or "")

    return base + needs + late_penalty + tiebreak


def select_best(candidates: Iterable[Player],
                excluded: Iterable[str],
                need_counts: Mapping[str, int],
                round_number: int,
                weights: AutodraftWeights = DEFAULT_WEIGHTS) -> Optional[Player]:
    """
    Pick the highest scoring available candidate.

    Candidates are visited in the order given and only a strictly higher
    score replaces the current best, so the earliest candidate wins ties.

    Returns:
        Best player, or None when no candidate is eligible
    """
    taken = set(excluded)

    best = None
    best_score = float('-inf')

    for player in candidates:
        if not player or not player.id:
            continue
        if player.id in taken:
            continue

        score = score_player(player, need_counts, round_number, weights)

        if score > best_score:
            best_score = score
            best = player

    if best is not None:
        logger.debug(f'Autodraft chose {best!r} in round {round_number} (score {best_score:.1f})')

    return best
