"""
Custom exceptions for the draft allocation engine.

Every error the engine raises derives from DraftError so the API layer
can translate them in one place. Each class carries the error type and
HTTP status used in the error envelope.
"""


class DraftError(Exception):
    """Base exception for all draft-related errors."""

    error_type = "draft_error"
    status_code = 400


class InvalidConfigurationError(DraftError):
    """Raised when draft parameters cannot be turned into a schedule."""

    error_type = "invalid_configuration"
    status_code = 400


class DraftNotFoundError(DraftError):
    """Raised when a draft id is unknown to the session store."""

    error_type = "not_found"
    status_code = 404

    def __init__(self, draft_id: str):
        self.draft_id = draft_id
        super().__init__(f"Draft {draft_id} not found")


class PlayerAlreadyTakenError(DraftError):
    """Raised when a player has already been claimed in this draft."""

    error_type = "already_taken"
    status_code = 409

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} already picked")


class DraftCompletedError(DraftError):
    """Raised when a pick is attempted after the final turn."""

    error_type = "already_completed"
    status_code = 409

    def __init__(self, draft_id: str):
        self.draft_id = draft_id
        super().__init__(f"Draft {draft_id} already completed")


class UnknownPlayerError(DraftError):
    """
    Raised when a manual pick references a player the catalog does not
    know for the draft's sport and scoring format.
    """

    error_type = "unknown_player"
    status_code = 400

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Invalid playerId: {player_id!r}")


class CatalogExhaustedError(DraftError):
    """Raised when autodraft finds no eligible player."""

    error_type = "catalog_exhausted"
    status_code = 409

    def __init__(self, draft_id: str):
        self.draft_id = draft_id
        super().__init__(f"No players left for draft {draft_id}")


class ConcurrentModificationError(DraftError):
    """Raised when a conditional write keeps losing to another writer."""

    error_type = "concurrent_modification"
    status_code = 409

    def __init__(self, draft_id: str, expected_version: int):
        self.draft_id = draft_id
        self.expected_version = expected_version
        super().__init__(
            f"Draft {draft_id} was modified concurrently "
            f"(expected version {expected_version})"
        )
