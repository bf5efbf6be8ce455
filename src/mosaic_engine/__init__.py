from .actions import UserInput
from .agents import Agent, FirstLegalAgent, GreedyFillAgent, RandomAgent
from .config import MatchConfig
from .engine import MatchEngine
from .enums import COLORS, Direction, GamePhase, InputKind, Tile
from .errors import IllegalDraft, InvariantViolation, MosaicError
from .player import PATTERN_LINE_SIZES, PatternRow, PenaltyTrack, PlayerBoard
from .simulation import GameResult, play_game, play_series
from .state import Draft, PickRowToPutTiles, PickSource, PickTileFromSource, TileSource
from .supply import CommonPool, Factory, TileBag
from .wall import WALL_PATTERN, FillResult, ScoringWall

__all__ = [
    "Agent",
    "COLORS",
    "CommonPool",
    "Direction",
    "Draft",
    "Factory",
    "FillResult",
    "FirstLegalAgent",
    "GamePhase",
    "GameResult",
    "GreedyFillAgent",
    "IllegalDraft",
    "InputKind",
    "InvariantViolation",
    "MatchConfig",
    "MatchEngine",
    "MosaicError",
    "PATTERN_LINE_SIZES",
    "PatternRow",
    "PenaltyTrack",
    "PickRowToPutTiles",
    "PickSource",
    "PickTileFromSource",
    "PlayerBoard",
    "RandomAgent",
    "ScoringWall",
    "Tile",
    "TileBag",
    "TileSource",
    "UserInput",
    "WALL_PATTERN",
    "play_game",
    "play_series",
]
