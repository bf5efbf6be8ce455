import json

from mosaic_engine import Draft, Factory, MatchEngine, PickRowToPutTiles, Tile, TileSource, UserInput
from mosaic_engine.serialization import draft_to_dict, engine_to_dict, turn_state_to_dict


def test_draft_to_dict():
    draft = Draft(source=TileSource.common_pool(), color=Tile.BLUE, row=Draft.FLOOR)
    assert draft_to_dict(draft) == {"source": {"kind": "common_pool"}, "color": "blue", "row": -1}
    assert draft_to_dict(Draft(TileSource.factory(3), Tile.RED, 2))["source"] == {"kind": "factory", "index": 3}


def test_turn_state_to_dict():
    assert turn_state_to_dict(PickRowToPutTiles(Tile.WHITE, 4)) == {
        "state": "PickRowToPutTiles",
        "tile": "white",
        "row": 4,
    }


def test_snapshot_minimal_excludes_hidden():
    engine = MatchEngine.for_players(["Ada", "Bo"], seed=0)
    snapshot = engine_to_dict(engine)
    supply = snapshot["supply"]
    assert "bag" not in supply
    assert "discard" not in supply
    assert "round_log" not in snapshot
    assert supply["bag_count"] == 80
    assert supply["first_player_token_in_pool"] is True
    assert snapshot["turn_state"] == {"state": "PickSource"}
    assert snapshot["current_source"] == {"kind": "factory", "index": 0}
    assert len(snapshot["pickable_sources"]) == 5
    json.dumps(snapshot)


def test_snapshot_tracks_selection_and_boards():
    engine = MatchEngine.for_players(["Ada", "Bo"], seed=1)
    engine.factories[0] = Factory([Tile.RED, Tile.RED, Tile.BLUE, Tile.YELLOW])
    engine.apply_input(UserInput.confirm())
    engine.apply_input(UserInput.next())
    engine.apply_input(UserInput.confirm())
    snapshot = engine_to_dict(engine, include_supply_contents=True, include_round_log=True)

    assert snapshot["turn_state"] == {"state": "PickRowToPutTiles", "tile": "red", "row": 0}
    assert snapshot["supply"]["factories"][0] == ["blue", "red", "red", "yellow"]
    assert len(snapshot["supply"]["bag"]) == snapshot["supply"]["bag_count"]
    assert snapshot["round_log"] == []

    ada = snapshot["players"][0]
    assert ada["name"] == "Ada"
    assert ada["pattern_rows"][2] == {"capacity": 3, "color": None, "filled": 0}
    assert ada["floor_line"] == [None] * 7
    assert ada["wall"] == [[False] * 5 for _ in range(5)]
    json.dumps(snapshot)
