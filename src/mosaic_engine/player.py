from dataclasses import dataclass, field

from .enums import Tile
from .errors import IllegalDraft, InvariantViolation
from .wall import ScoringWall

PATTERN_LINE_SIZES = (1, 2, 3, 4, 5)
FLOOR_PENALTIES = (1, 1, 2, 2, 2, 3, 3)
FLOOR_SIZE = len(FLOOR_PENALTIES)


class PatternRow:
    """Staging row: Free, or Taken by one color with ``filled <= capacity``."""

    def __init__(self, capacity: int, color: Tile | None = None, filled: int = 0) -> None:
        if filled > capacity:
            raise InvariantViolation(f"pattern row of capacity {capacity} cannot hold {filled} tiles")
        if (color is None) != (filled == 0):
            raise InvariantViolation("a taken pattern row needs both a color and at least one tile")
        self.capacity = capacity
        self.color = color
        self.filled = filled

    def __repr__(self) -> str:
        if self.color is None:
            return f"PatternRow(free, capacity={self.capacity})"
        return f"PatternRow({self.color.value}, {self.filled}/{self.capacity})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PatternRow):
            return NotImplemented
        return (self.capacity, self.color, self.filled) == (other.capacity, other.color, other.filled)

    @property
    def is_free(self) -> bool:
        return self.color is None

    @property
    def is_full(self) -> bool:
        return self.filled == self.capacity

    def can_accept(self, color: Tile) -> bool:
        if self.is_free:
            return True
        return self.color == color and self.filled < self.capacity

    def accept(self, color: Tile, count: int) -> int:
        """Stage ``count`` tiles and return how many spill over."""
        if not self.is_free and self.color != color:
            raise IllegalDraft(f"row is taken by {self.color.value}, cannot accept {color.value}")
        taken = min(self.capacity - self.filled, count)
        if taken > 0:
            self.color = color
            self.filled += taken
        return max(0, count - taken)

    def flush(self) -> Tile:
        if not self.is_full:
            raise InvariantViolation("only a full pattern row can move to the wall")
        color = self.color
        self.color = None
        self.filled = 0
        return color

    def clone(self) -> "PatternRow":
        return PatternRow(self.capacity, self.color, self.filled)


def default_pattern_rows():
    return [PatternRow(size) for size in PATTERN_LINE_SIZES]


def default_floor():
    return [None] * FLOOR_SIZE


@dataclass
class PenaltyTrack:
    slots: list[Tile | None] = field(default_factory=default_floor)

    def add(self, tiles) -> list[Tile]:
        """Fill free slots left to right; tiles that do not fit are returned."""
        remaining = list(tiles)
        for idx, slot in enumerate(self.slots):
            if not remaining:
                break
            if slot is None:
                self.slots[idx] = remaining.pop(0)
        return remaining

    def penalty(self) -> int:
        return sum(weight for weight, slot in zip(FLOOR_PENALTIES, self.slots) if slot is not None)

    def tiles(self) -> list[Tile]:
        return [t for t in self.slots if t is not None]

    def has_marker(self) -> bool:
        return Tile.FIRST_PLAYER in self.slots

    def clear(self) -> list[Tile]:
        removed = self.tiles()
        self.slots = default_floor()
        return removed

    def clone(self) -> "PenaltyTrack":
        return PenaltyTrack(slots=list(self.slots))


@dataclass
class PlayerBoard:
    """Represents a player's staging rows, wall, penalty track and score."""

    name: str
    pattern_rows: list[PatternRow] = field(default_factory=default_pattern_rows)
    wall: ScoringWall = field(default_factory=ScoringWall)
    floor_line: PenaltyTrack = field(default_factory=PenaltyTrack)
    has_first_player_token: bool = False

    @property
    def score(self) -> int:
        return self.wall.points

    def can_accept(self, color: Tile, row: int) -> bool:
        if self.wall.has_color_in_row(row, color):
            return False
        return self.pattern_rows[row].can_accept(color)

    def rows_that_can_accept(self, color: Tile) -> list[int]:
        return [idx for idx in range(len(self.pattern_rows)) if self.can_accept(color, idx)]

    def place(self, color: Tile, count: int, row: int, *, with_marker: bool = False) -> list[Tile]:
        """Stage a draft into ``row`` (or the floor when ``row`` is negative).

        Returns the tiles that did not fit on the penalty track.
        """
        if row < 0:
            spill = count
        else:
            spill = self.pattern_rows[row].accept(color, count)
        to_floor = [color] * spill
        if with_marker:
            self.has_first_player_token = True
            to_floor.append(Tile.FIRST_PLAYER)
        return self.floor_line.add(to_floor)

    def move_tiles_to_wall(self) -> tuple[int, bool, list[Tile]]:
        """Flush every full row onto the wall.

        Returns points gained, whether a wall row was completed, and the
        surplus tiles that leave the board.
        """
        gained = 0
        game_over = False
        surplus = []
        for idx, pattern_row in enumerate(self.pattern_rows):
            if not pattern_row.is_full:
                continue
            capacity = pattern_row.capacity
            color = pattern_row.flush()
            result = self.wall.fill_slot(idx, color)
            gained += result.points
            game_over = game_over or result.game_over
            surplus.extend([color] * (capacity - 1))
        return gained, game_over, surplus

    def flush_floorline(self) -> tuple[int, list[Tile]]:
        before = self.wall.points
        removed = self.wall.reset_floorline(self.floor_line)
        return self.wall.points - before, removed

    def clone(self) -> "PlayerBoard":
        return PlayerBoard(
            name=self.name,
            pattern_rows=[r.clone() for r in self.pattern_rows],
            wall=self.wall.clone(),
            floor_line=self.floor_line.clone(),
            has_first_player_token=self.has_first_player_token,
        )
