from .autodraft import AutodraftWeights, DEFAULT_WEIGHTS, score_player, select_best
from .draft_engine import DraftEngine, clamp_draft_size

__all__ = [
    "AutodraftWeights",
    "DEFAULT_WEIGHTS",
    "score_player",
    "select_best",
    "DraftEngine",
    "clamp_draft_size",
]
