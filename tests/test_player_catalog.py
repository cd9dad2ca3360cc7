import json

from draftroom.datamodels.player import CatalogPlayer
from draftroom.external.player_catalog import InMemoryPlayerCatalog


def test_query_sorts_by_rank_with_unranked_last_and_stable():
    catalog = InMemoryPlayerCatalog([
        {"id": "n1", "name": "No Rank One", "position": "RB"},
        {"id": "r3", "name": "Three", "position": "WR", "rank": {"standard": 3}},
        {"id": "n2", "name": "No Rank Two", "position": "TE", "rank": {"standard": None}},
        {"id": "r1", "name": "One", "position": "QB", "rank": {"standard": 1}},
        {"id": "r3b", "name": "Three Again", "position": "WR", "rank": {"standard": 3}},
    ])

    assert [p.id for p in catalog.query("standard")] == ["r1", "r3", "r3b", "n1", "n2"]


def test_format_selects_rank_adp_and_tier():
    catalog = InMemoryPlayerCatalog([{
        "playerId": 4034,
        "name": "Some Back",
        "position": "RB",
        "team": "SF",
        "rank": {"standard": 4, "PPR": 2},
        "adp": {"standard": 5.5, "ppr": 2.1},
        "tier": {"standard": 1, "ppr": 1},
    }])

    ppr = catalog.get_player("4034", "ppr")
    standard = catalog.get_player("4034", "Standard")
    half = catalog.get_player("4034", "half")

    assert (ppr.rank, ppr.adp, ppr.tier) == (2, 2.1, 1)
    assert (standard.rank, standard.adp) == (4, 5.5)
    assert half.rank is None and half.adp is None and half.tier is None
    assert ppr.id == "4034"


def test_sport_partitions_catalog():
    catalog = InMemoryPlayerCatalog([
        {"id": "1", "name": "Football", "position": "QB", "sport": "NFL"},
        {"id": "1", "name": "Basketball", "position": "PG", "sport": "nba"},
    ])

    assert len(catalog) == 2
    assert catalog.get_player("1", "standard", "nfl").name == "Football"
    assert catalog.get_player("1", "standard", "NBA").name == "Basketball"
    assert catalog.get_player("2", "standard") is None
    assert [p.name for p in catalog.query("standard", "nba")] == ["Basketball"]


def test_snapshot_copies_display_fields():
    player = CatalogPlayer(id="7", name="Kick Er", position="K", team="DAL",
                           rank={"standard": 150}).for_format("standard")

    snapshot = player.snapshot()

    assert snapshot.model_dump() == {
        "id": "7", "name": "Kick Er", "position": "K", "team": "DAL",
        "rank": 150, "adp": None, "tier": None,
    }


def test_load_from_json_file(tmp_path):
    path = tmp_path / "players.json"
    path.write_text(json.dumps({"players": [
        {"id": "a", "name": "Alpha", "position": "WR", "rank": {"standard": 1}},
    ]}), encoding="utf-8")

    catalog = InMemoryPlayerCatalog.from_json_file(path)

    assert [p.id for p in catalog.query("standard")] == ["a"]
