from dataclasses import dataclass
from typing import ClassVar, Union

from .enums import Tile


@dataclass(frozen=True)
class TileSource:
    factory_index: int | None = None  # None addresses the common pool

    @classmethod
    def factory(cls, index: int) -> "TileSource":
        return cls(factory_index=index)

    @classmethod
    def common_pool(cls) -> "TileSource":
        return cls(factory_index=None)

    @property
    def is_common_pool(self) -> bool:
        return self.factory_index is None

    def sort_key(self) -> tuple[int, int]:
        if self.factory_index is None:
            return (1, 0)
        return (0, self.factory_index)

    def __str__(self) -> str:
        return "common pool" if self.is_common_pool else f"factory {self.factory_index}"


@dataclass(frozen=True)
class Draft:
    source: TileSource
    color: Tile
    row: int  # 0-4 for pattern rows, FLOOR for the penalty track

    FLOOR: ClassVar[int] = -1

    def __str__(self) -> str:
        dest = "floor" if self.row == Draft.FLOOR else f"row {self.row}"
        return f"{self.color.value} from {self.source} to {dest}"


@dataclass(frozen=True)
class PickSource:
    pass


@dataclass(frozen=True)
class PickTileFromSource:
    tile: Tile


@dataclass(frozen=True)
class PickRowToPutTiles:
    tile: Tile
    row: int


TurnState = Union[PickSource, PickTileFromSource, PickRowToPutTiles]
