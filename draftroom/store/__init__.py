"""
Storage abstractions for draft sessions.

Includes:
- SessionStore: conditional-write store interface plus in-memory and
  JSON-file implementations
- VersionedTransition: read/modify/write wrapper enforcing optimistic versioning
"""

from .session_store import (
    SessionStore, InMemorySessionStore, JsonFileSessionStore, VersionConflict
)
from .concurrency import VersionedTransition

__all__ = [
    "SessionStore",
    "InMemorySessionStore",
    "JsonFileSessionStore",
    "VersionConflict",
    "VersionedTransition",
]
