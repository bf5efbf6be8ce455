"""Selection helpers shared by factories, the common pool, sources and rows."""

from typing import Sequence, TypeVar

from .enums import TILE_RANK, Direction, Tile

T = TypeVar("T")


def cycle(items: Sequence[T], current: T, direction: Direction) -> T:
    """Step to the neighbour of ``current`` in ``items``, wrapping at both ends.

    A ``current`` that is not among ``items`` snaps to the first item.
    """
    if not items:
        raise ValueError("cannot cycle over an empty selection")
    if current not in items:
        return items[0]
    idx = list(items).index(current)
    step = 1 if direction == Direction.NEXT else -1
    return items[(idx + step) % len(items)]


def distinct_colors(tiles: Sequence[Tile]) -> list[Tile]:
    return sorted({t for t in tiles if not t.is_marker}, key=TILE_RANK.__getitem__)


class TileCollection:
    """Read-only inspection shared by every tile source."""

    @property
    def tiles(self) -> list[Tile]:
        raise NotImplementedError

    def distinct_colors(self) -> list[Tile]:
        return distinct_colors(self.tiles)

    def count_of(self, tile: Tile) -> int:
        return sum(1 for t in self.tiles if t == tile)

    def first_tile(self) -> Tile | None:
        colors = self.distinct_colors()
        return colors[0] if colors else None

    def adjacent_tile(self, tile: Tile, direction: Direction) -> Tile:
        colors = self.distinct_colors()
        if tile not in colors:
            raise ValueError(f"{tile.value} is not in this source")
        return cycle(colors, tile, direction)

    def has_colors(self) -> bool:
        return any(not t.is_marker for t in self.tiles)
