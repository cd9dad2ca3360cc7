"""
Data models for the draft room.

This module exports all the core data structures used throughout the application.
Keeping exports centralized here allows for easy imports and future refactoring.
"""

from .player import (
    Player, PlayerPosition, PlayerSnapshot, CatalogPlayer, PlayerAPI,
    DRAFTABLE_POSITIONS
)
from .draft_state import DraftSession, DraftPick, DraftStatus, DraftView

__all__ = [
    "Player",
    "PlayerPosition",
    "PlayerSnapshot",
    "CatalogPlayer",
    "PlayerAPI",
    "DRAFTABLE_POSITIONS",

    "DraftSession",
    "DraftPick",
    "DraftStatus",
    "DraftView",
]
