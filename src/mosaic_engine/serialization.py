from .engine import MatchEngine
from .player import PatternRow, PlayerBoard
from .state import Draft, PickRowToPutTiles, PickTileFromSource, TileSource, TurnState


def source_to_dict(source: TileSource) -> dict:
    if source.is_common_pool:
        return {"kind": "common_pool"}
    return {"kind": "factory", "index": source.factory_index}


def draft_to_dict(draft: Draft) -> dict:
    return {
        "source": source_to_dict(draft.source),
        "color": draft.color.value,
        "row": draft.row,
    }


def turn_state_to_dict(state: TurnState) -> dict:
    data = {"state": type(state).__name__}
    if isinstance(state, (PickTileFromSource, PickRowToPutTiles)):
        data["tile"] = state.tile.value
    if isinstance(state, PickRowToPutTiles):
        data["row"] = state.row
    return data


def _row(row: PatternRow) -> dict:
    return {
        "capacity": row.capacity,
        "color": None if row.color is None else row.color.value,
        "filled": row.filled,
    }


def board_to_dict(board: PlayerBoard) -> dict:
    return {
        "name": board.name,
        "score": board.score,
        "pattern_rows": [_row(r) for r in board.pattern_rows],
        "wall": [[bool(x) for x in row] for row in board.wall.slots],
        "floor_line": [None if t is None else t.value for t in board.floor_line.slots],
        "has_first_player_token": board.has_first_player_token,
    }


def engine_to_dict(engine: MatchEngine, *, include_supply_contents: bool = False, include_round_log: bool = False) -> dict:
    """JSON-ready snapshot for presentation layers. There is no loader."""
    supply = {
        "factories": [[t.value for t in f.tiles] for f in engine.factories],
        "common_pool": [t.value for t in engine.pool.tiles],
        "bag_count": len(engine.bag.drawable),
        "discard_count": len(engine.bag.discarded),
        "first_player_token_in_pool": engine.pool.has_marker(),
    }
    if include_supply_contents:
        supply["bag"] = [t.value for t in engine.bag.drawable]
        supply["discard"] = [t.value for t in engine.bag.discarded]

    data = {
        "round": engine.round_number,
        "phase": engine.phase.value,
        "exited": engine.exited,
        "current_player": engine.current_player,
        "current_source": source_to_dict(engine.current_source),
        "turn_state": turn_state_to_dict(engine.turn_state),
        "pickable_sources": [source_to_dict(s) for s in engine.pickable_sources()],
        "supply": supply,
        "players": [board_to_dict(b) for b in engine.boards],
    }
    if include_round_log:
        data["round_log"] = [dict(entry) for entry in engine.round_log]
    return data
