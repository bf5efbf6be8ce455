from dataclasses import dataclass, field

from .enums import COLORS, Tile
from .errors import InvariantViolation

BOARD_SIZE = 5

BASE_ROW = (Tile.YELLOW, Tile.RED, Tile.BLUE, Tile.WHITE, Tile.GREEN)
# Each row is the base row rotated right by its index.
WALL_PATTERN = [[BASE_ROW[(c - r) % BOARD_SIZE] for c in range(BOARD_SIZE)] for r in range(BOARD_SIZE)]
WALL_COLOR_TO_COL = [{color: col for col, color in enumerate(row)} for row in WALL_PATTERN]

ROW_BONUS = 2
COLUMN_BONUS = 7
COLOR_BONUS = 10


def default_slots():
    return [[False] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass(frozen=True)
class FillResult:
    points: int
    game_over: bool = False


def _run(slots, row, col, dr, dc) -> int:
    """Count filled slots walking from (row, col) in one direction, excluding the start."""
    count = 0
    r = row + dr
    c = col + dc
    while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and slots[r][c]:
        count += 1
        r += dr
        c += dc
    return count


@dataclass
class ScoringWall:
    slots: list[list[bool]] = field(default_factory=default_slots)
    points: int = 0

    def column_for(self, row: int, color: Tile) -> int:
        return WALL_COLOR_TO_COL[row][color]

    def find_slot_for_color(self, row: int, color: Tile) -> tuple[int, bool]:
        col = self.column_for(row, color)
        return col, self.slots[row][col]

    def has_color_in_row(self, row: int, color: Tile) -> bool:
        return self.find_slot_for_color(row, color)[1]

    def fill_slot(self, row: int, color: Tile) -> FillResult:
        col = self.column_for(row, color)
        if self.slots[row][col]:
            raise InvariantViolation(f"wall slot ({row}, {col}) is already filled")
        self.slots[row][col] = True

        adj_row = _run(self.slots, row, col, 0, -1) + _run(self.slots, row, col, 0, 1)
        adj_col = _run(self.slots, row, col, -1, 0) + _run(self.slots, row, col, 1, 0)

        gained = 0
        if adj_row == 0 and adj_col == 0:
            gained = 1
        if adj_row > 0:
            gained += 1 + adj_row
        if adj_col > 0:
            gained += 1 + adj_col
        if adj_col == BOARD_SIZE - 1:
            gained += COLUMN_BONUS
        game_over = adj_row == BOARD_SIZE - 1
        if game_over:
            gained += ROW_BONUS
        if self._color_complete(color):
            gained += COLOR_BONUS

        self.points += gained
        return FillResult(points=gained, game_over=game_over)

    def reset_floorline(self, track) -> list[Tile]:
        """Charge the penalty track against the score (never below zero) and empty it."""
        self.points = max(0, self.points - track.penalty())
        return track.clear()

    def _color_complete(self, color: Tile) -> bool:
        return all(self.slots[r][self.column_for(r, color)] for r in range(BOARD_SIZE))

    def completed_rows(self) -> int:
        return sum(1 for row in self.slots if all(row))

    def completed_columns(self) -> int:
        return sum(1 for c in range(BOARD_SIZE) if all(self.slots[r][c] for r in range(BOARD_SIZE)))

    def completed_colors(self) -> list[Tile]:
        return [color for color in COLORS if self._color_complete(color)]

    def filled_count(self) -> int:
        return sum(sum(row) for row in self.slots)

    def clone(self) -> "ScoringWall":
        return ScoringWall(slots=[list(row) for row in self.slots], points=self.points)
