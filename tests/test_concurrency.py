import threading

import pytest

from draftroom.exceptions import (
    ConcurrentModificationError, DraftNotFoundError, PlayerAlreadyTakenError
)
from draftroom.services.draft_service import DraftService
from draftroom.store.concurrency import VersionedTransition
from draftroom.store.session_store import InMemorySessionStore


class RacingStore(InMemorySessionStore):
    """
    Store where another writer sneaks in before our conditional write.

    `competitor` runs against the stored draft right before each of the
    first `races` replace() calls, committing its own change first.
    """

    def __init__(self, races: int, competitor=None):
        super().__init__()
        self.races = races
        self.competitor = competitor
        self.replace_calls = 0

    def replace(self, session, expected_version):
        self.replace_calls += 1
        if self.races > 0:
            self.races -= 1
            current = self.get(session.draft_id)
            if self.competitor is not None:
                self.competitor(current)
            current.version += 1
            super().replace(current, expected_version=current.version - 1)
        super().replace(session, expected_version)


def test_successful_mutation_bumps_version_once(service, store):
    draft_id = service.create_draft(2, 2)

    service.submit_pick(draft_id, "p1")
    assert store.get(draft_id).version == 2

    service.auto_pick(draft_id)
    assert store.get(draft_id).version == 3

    service.simulate_to_end(draft_id)
    assert store.get(draft_id).version == 4


def test_retries_once_from_a_fresh_read(catalog):
    store = RacingStore(races=1)
    service = DraftService(store, catalog)
    draft_id = service.create_draft(2, 2)

    service.submit_pick(draft_id, "p1")

    stored = store.get(draft_id)
    assert store.replace_calls == 2
    assert stored.picked == ["p1"]
    # competitor bumped to 2, our retry wrote 3
    assert stored.version == 3


def test_retry_revalidates_against_the_winning_write(catalog):
    engine_service = DraftService(InMemorySessionStore(), catalog)

    def competitor(session):
        engine_service.engine.submit_pick(session, "p1")

    store = RacingStore(races=1, competitor=competitor)
    service = DraftService(store, catalog)
    draft_id = service.create_draft(2, 2)

    with pytest.raises(PlayerAlreadyTakenError):
        service.submit_pick(draft_id, "p1")

    stored = store.get(draft_id)
    assert stored.picked == ["p1"]
    assert stored.current_index == 1


def test_persistent_conflict_surfaces(catalog):
    store = RacingStore(races=2)
    service = DraftService(store, catalog)
    draft_id = service.create_draft(2, 2)

    with pytest.raises(ConcurrentModificationError) as exc_info:
        service.auto_pick(draft_id)

    assert exc_info.value.draft_id == draft_id
    stored = store.get(draft_id)
    assert stored.current_index == 0
    assert stored.version == 3  # only the competitor's writes landed


def test_domain_errors_write_nothing(service, store):
    draft_id = service.create_draft(2, 1)
    service.submit_pick(draft_id, "p1")

    with pytest.raises(PlayerAlreadyTakenError):
        service.submit_pick(draft_id, "p1")

    assert store.get(draft_id).version == 2


def test_unchanged_draft_is_not_rewritten(service, store):
    draft_id = service.create_draft(2, 1)
    service.simulate_to_end(draft_id)
    version = store.get(draft_id).version

    assert service.simulate_to_end(draft_id) is True
    assert store.get(draft_id).version == version


def test_unknown_draft(store):
    transitions = VersionedTransition(store)

    with pytest.raises(DraftNotFoundError):
        transitions.run("missing", lambda session: None)


def test_max_attempts_must_be_positive(store):
    with pytest.raises(ValueError):
        VersionedTransition(store, max_attempts=0)


def test_parallel_auto_picks_keep_invariants(service, store):
    draft_id = service.create_draft(4, 4)
    successes = []
    failures = []
    lock = threading.Lock()

    def worker():
        for _ in range(4):
            try:
                player = service.auto_pick(draft_id)
            except ConcurrentModificationError as e:
                with lock:
                    failures.append(e)
            else:
                with lock:
                    successes.append(player.id)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    stored = store.get(draft_id)
    assert stored.current_index == len(successes)
    assert len(stored.picked) == stored.current_index
    assert len(set(stored.picked)) == len(stored.picked)
    assert sorted(stored.picked) == sorted(successes)
    assert stored.version == 1 + len(successes)
