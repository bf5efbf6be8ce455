from enum import Enum


class Tile(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    WHITE = "white"
    YELLOW = "yellow"
    FIRST_PLAYER = "first_player"

    @property
    def is_marker(self) -> bool:
        return self is Tile.FIRST_PLAYER

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Tile":
        for tile, sym in _SYMBOLS.items():
            if sym == symbol:
                return tile
        raise ValueError(f"invalid tile symbol: {symbol!r}")


_SYMBOLS = {
    Tile.BLUE: "B",
    Tile.GREEN: "G",
    Tile.RED: "R",
    Tile.WHITE: "W",
    Tile.YELLOW: "Y",
    Tile.FIRST_PLAYER: "1",
}

COLORS = (Tile.BLUE, Tile.GREEN, Tile.RED, Tile.WHITE, Tile.YELLOW)
TILE_RANK = {t: i for i, t in enumerate(Tile)}


class Direction(str, Enum):
    NEXT = "next"
    PREV = "prev"


class InputKind(str, Enum):
    DIRECTION = "direction"
    CONFIRM = "confirm"
    BACK = "back"
    EXIT = "exit"
    NOOP = "noop"


class GamePhase(str, Enum):
    DRAFTING = "drafting"
    GAME_END = "game_end"
