from .draft_service import DraftService

__all__ = ["DraftService"]
