import logging
import random
from dataclasses import dataclass, field

from .collection import TileCollection
from .enums import COLORS, TILE_RANK, Tile
from .errors import IllegalDraft, InvariantViolation

LOGGER = logging.getLogger(__name__)

TILES_PER_COLOR = 20
FACTORY_SIZE = 4


@dataclass
class TileBag:
    """Draw pile plus discard pile; running dry is a normal condition."""

    drawable: list[Tile] = field(default_factory=list)
    discarded: list[Tile] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @classmethod
    def standard(cls, rng: random.Random | None = None, tiles_per_color: int = TILES_PER_COLOR) -> "TileBag":
        rng = rng or random.Random()
        drawable = []
        for color in COLORS:
            drawable.extend([color] * tiles_per_color)
        rng.shuffle(drawable)
        return cls(drawable=drawable, discarded=[], rng=rng)

    def __len__(self) -> int:
        return len(self.drawable) + len(self.discarded)

    def draw(self, count: int) -> list[Tile]:
        drawn = self.drawable[:count]
        del self.drawable[:count]
        return drawn

    def reshuffle(self) -> None:
        pile = list(self.discarded)
        self.rng.shuffle(pile)
        self.drawable.extend(pile)
        self.discarded.clear()
        LOGGER.debug("reshuffled %d discarded tiles into the bag", len(pile))

    def discard(self, tiles) -> None:
        self.discarded.extend(t for t in tiles if not t.is_marker)

    def fill_factory(self, factory: "Factory") -> None:
        if not factory.is_empty():
            raise InvariantViolation("cannot refill a factory that still holds tiles")
        drawn = self.draw(FACTORY_SIZE)
        if len(drawn) < FACTORY_SIZE:
            self.reshuffle()
            drawn.extend(self.draw(FACTORY_SIZE - len(drawn)))
        if len(drawn) < FACTORY_SIZE:
            LOGGER.debug("bag exhausted: factory filled with %d tiles", len(drawn))
        factory.install(drawn)

    def clone(self) -> "TileBag":
        clone_rng = random.Random()
        clone_rng.setstate(self.rng.getstate())
        return TileBag(drawable=list(self.drawable), discarded=list(self.discarded), rng=clone_rng)


class Factory(TileCollection):
    def __init__(self, tiles=None) -> None:
        self._tiles: list[Tile] = []
        if tiles:
            self.install(tiles)

    def __repr__(self) -> str:
        return f"Factory({[t.value for t in self._tiles]})"

    @property
    def tiles(self) -> list[Tile]:
        return list(self._tiles)

    def is_empty(self) -> bool:
        return not self._tiles

    def install(self, tiles) -> None:
        tiles = list(tiles)
        if len(tiles) > FACTORY_SIZE:
            raise InvariantViolation(f"a factory holds at most {FACTORY_SIZE} tiles")
        if any(t.is_marker for t in tiles):
            raise InvariantViolation("the first player marker never sits on a factory")
        self._tiles = sorted(tiles, key=TILE_RANK.__getitem__)

    def pick(self, color: Tile, pool: "CommonPool") -> int:
        """Take every ``color`` tile; the rest slides into ``pool``."""
        if self.is_empty():
            raise IllegalDraft("cannot pick from an empty factory")
        if color not in self._tiles:
            raise IllegalDraft(f"factory does not hold {color.value}")
        picked = [t for t in self._tiles if t == color]
        remainder = [t for t in self._tiles if t != color]
        pool.add(remainder)
        self._tiles = []
        return len(picked)

    def clone(self) -> "Factory":
        return Factory(self._tiles)


class CommonPool(TileCollection):
    def __init__(self, tiles=None) -> None:
        self._tiles: list[Tile] = list(tiles or [])
        self.claimed_by: int | None = None

    def __repr__(self) -> str:
        return f"CommonPool({[t.value for t in self._tiles]}, claimed_by={self.claimed_by})"

    @property
    def tiles(self) -> list[Tile]:
        return list(self._tiles)

    def has_marker(self) -> bool:
        return Tile.FIRST_PLAYER in self._tiles

    def add(self, tiles) -> None:
        tiles = list(tiles)
        if any(t.is_marker for t in tiles):
            raise InvariantViolation("the first player marker only enters the pool on reseed")
        self._tiles.extend(tiles)

    def reseed(self) -> None:
        self._tiles = [Tile.FIRST_PLAYER]
        self.claimed_by = None

    def pick(self, color: Tile) -> tuple[int, bool]:
        if color.is_marker or color not in self._tiles:
            raise IllegalDraft(f"common pool does not hold {color.value}")
        count = self.count_of(color)
        took_marker = self.has_marker()
        self._tiles = [t for t in self._tiles if t != color and not t.is_marker]
        return count, took_marker

    def clone(self) -> "CommonPool":
        pool = CommonPool()
        pool._tiles = list(self._tiles)
        pool.claimed_by = self.claimed_by
        return pool
