from dataclasses import dataclass

from .supply import TILES_PER_COLOR

MIN_FACTORIES = 4


@dataclass
class MatchConfig:
    player_names: tuple[str, ...] = ("Alice", "Bob")
    factory_count: int | None = None  # defaults to 2 * players + 1
    tiles_per_color: int = TILES_PER_COLOR
    seed: int | None = None

    def __post_init__(self) -> None:
        self.player_names = tuple(self.player_names)
        if len(self.player_names) < 2:
            raise ValueError("a match needs at least 2 players")
        if self.factory_count is not None and self.factory_count < MIN_FACTORIES:
            raise ValueError(f"factory_count must be at least {MIN_FACTORIES}")
        if self.tiles_per_color < 1:
            raise ValueError("tiles_per_color must be positive")

    @property
    def num_players(self) -> int:
        return len(self.player_names)

    @property
    def factories(self) -> int:
        if self.factory_count is not None:
            return self.factory_count
        return 2 * self.num_players + 1
