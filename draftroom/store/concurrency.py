"""
Optimistic concurrency for draft mutations.

Every mutating operation runs as read -> apply -> conditional write. The
write is conditioned on the version read at load time and bumps it by
one. A lost race re-runs the whole cycle from a fresh read once; losing
again is reported as ConcurrentModificationError.
"""

import logging
from typing import Callable, TypeVar

from ..datamodels.draft_state import DraftSession
from ..exceptions import ConcurrentModificationError, DraftNotFoundError
from .session_store import SessionStore, VersionConflict


logger = logging.getLogger(__name__)

T = TypeVar("T")


class VersionedTransition:
    """
    Runs draft transitions against a SessionStore with version checks.

    Args:
        store: Store providing the conditional write
        max_attempts: Total read/apply/write cycles per call (1 + retries)
    """

    def __init__(self, store: SessionStore, max_attempts: int = 2):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.store = store
        self.max_attempts = max_attempts

    def load(self, draft_id: str) -> DraftSession:
        session = self.store.get(draft_id)
        if session is None:
            raise DraftNotFoundError(draft_id)
        return session

    def run(self, draft_id: str, mutate: Callable[[DraftSession], T]) -> T:
        """
        Apply `mutate` to the stored draft and persist the result.

        Errors raised by `mutate` propagate untouched and nothing is
        written. When `mutate` leaves the draft unchanged the write is
        skipped and the version stays the same.
        """
        expected_version = None

        for attempt in range(1, self.max_attempts + 1):
            session = self.load(draft_id)
            original_record = session.to_record()
            expected_version = session.version

            result = mutate(session)

            if session.to_record() == original_record:
                return result

            session.version = expected_version + 1
            try:
                self.store.replace(session, expected_version=expected_version)
            except VersionConflict as e:
                logger.warning(f'Version conflict on draft {draft_id} '
                               f'(attempt {attempt}/{self.max_attempts}): {e}')
                continue

            return result

        raise ConcurrentModificationError(draft_id, expected_version)

