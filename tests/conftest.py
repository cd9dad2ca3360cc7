import pytest
from typing import Dict, List, Optional

from draftroom.external.player_catalog import InMemoryPlayerCatalog
from draftroom.services.draft_service import DraftService
from draftroom.simulation.draft_engine import DraftEngine
from draftroom.store.session_store import InMemorySessionStore

# Position mix repeated through the generated catalog
POSITION_CYCLE = ["RB", "WR", "WR", "RB", "QB", "TE", "K", "DEF"]


def make_record(player_id: str,
                name: str,
                position: str,
                rank: Optional[float] = None,
                fmt: str = "standard",
                team: str = "FA",
                sport: str = "nfl") -> Dict:
    """Catalog row in the stored shape (per-format rank/adp/tier maps)."""
    return {
        "id": player_id,
        "name": name,
        "position": position,
        "team": team,
        "sport": sport,
        "rank": {fmt: rank} if rank is not None else {},
        "adp": {fmt: rank + 0.5} if rank is not None else {},
        "tier": {fmt: int(rank // 12) + 1} if rank is not None else {},
    }


def generate_records(count: int, fmt: str = "standard") -> List[Dict]:
    return [
        make_record(f"p{i}", f"Player {i:03d}", POSITION_CYCLE[(i - 1) % len(POSITION_CYCLE)],
                    rank=i, fmt=fmt)
        for i in range(1, count + 1)
    ]


@pytest.fixture
def catalog_records() -> List[Dict]:
    """240 ranked players, enough for a full 12-team 15-round draft."""
    return generate_records(240)


@pytest.fixture
def catalog(catalog_records) -> InMemoryPlayerCatalog:
    return InMemoryPlayerCatalog(catalog_records)


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def engine(catalog) -> DraftEngine:
    return DraftEngine(catalog)


@pytest.fixture
def service(store, catalog) -> DraftService:
    return DraftService(store, catalog)
