"""
Snake draft order calculation utilities.

Builds the fixed pick schedule a draft is created with and answers
"who is on the clock" questions for any overall pick number.
"""

from typing import List, Tuple

from ..datamodels.draft_state import DraftPick
from ..exceptions import InvalidConfigurationError

class SnakeDraftCalculator:
    """
    Utility class for snake draft order calculations.

    Snake drafts reverse direction each round:
    Round 1: 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12
    Round 2: 12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1
    Round 3: 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12

    Team numbers are 1-based throughout.
    """

    def build_order(self, team_count: int, round_count: int) -> List[DraftPick]:
        """
        Build the full pick schedule for a draft.

        Args:
            team_count: Number of teams (already clamped by the caller)
            round_count: Number of rounds (already clamped by the caller)

        Returns:
            team_count * round_count unassigned picks, overall 1..N
        """
        if team_count < 1 or round_count < 1:
            raise InvalidConfigurationError(
                f"Draft needs at least one team and one round "
                f"(got teams={team_count}, rounds={round_count})"
            )

        picks = []
        overall = 1
        for round_number in range(1, round_count + 1):
            forward = round_number % 2 == 1
            team_order = range(1, team_count + 1) if forward else range(team_count, 0, -1)

            for team in team_order:
                picks.append(DraftPick(overall=overall, round=round_number, team=team))
                overall += 1

        return picks

    def get_picking_team(self, pick_number: int, team_count: int) -> int:
        """
        Determine which team picks at a given pick number.

        Args:
            pick_number: Overall pick number (1-based)
            team_count: Number of teams in draft

        Returns:
            Team number (1-based)
        """
        if pick_number < 1:
            raise ValueError("Pick number must be >= 1")

        _, _, team_index = self.get_draft_position_info(pick_number, team_count)
        return team_index + 1

    def get_draft_position_info(self,
                              pick_number: int,
                              team_count: int) -> Tuple[int, int, int]:
        """
        Get detailed position information for a pick.

        Args:
            pick_number: Overall pick number
            team_count: Number of teams

        Returns:
            Tuple of (round_number, pick_in_round, team_index)
        """
        round_number = ((pick_number - 1) // team_count) + 1
        pick_in_round = ((pick_number - 1) % team_count) + 1

        if round_number % 2 == 1:
            team_index = pick_in_round - 1  # 0-based
        else:
            team_index = team_count - pick_in_round  # 0-based

        return round_number, pick_in_round, team_index


_calculator = SnakeDraftCalculator()


def build_snake_order(team_count: int, round_count: int) -> List[DraftPick]:
    """Module-level shortcut for SnakeDraftCalculator.build_order."""
    return _calculator.build_order(team_count, round_count)
