"""Match orchestration: the turn state machine, draft execution and round advance."""

import logging
import random

from .actions import UserInput
from .collection import TileCollection, cycle
from .config import MatchConfig
from .enums import Direction, GamePhase, InputKind, Tile
from .errors import IllegalDraft, InvariantViolation
from .player import PlayerBoard
from .state import (
    Draft,
    PickRowToPutTiles,
    PickSource,
    PickTileFromSource,
    TileSource,
    TurnState,
)
from .supply import CommonPool, Factory, TileBag

LOGGER = logging.getLogger(__name__)


class MatchEngine:
    """Sole owner of match state.

    Presentation layers read through the query methods and mutate only via
    :meth:`apply_input`; programmatic players can use :meth:`apply_draft`,
    which enforces the same rules.
    """

    def __init__(self, config: MatchConfig | None = None, *, rng: random.Random | None = None) -> None:
        self.config = config or MatchConfig()
        rng = rng or random.Random(self.config.seed)
        self.bag = TileBag.standard(rng, self.config.tiles_per_color)
        self.factories = [Factory() for _ in range(self.config.factories)]
        self.pool = CommonPool()
        self.boards = [PlayerBoard(name=name) for name in self.config.player_names]
        self.current_player = 0
        self.current_source = TileSource.factory(0)
        self.turn_state: TurnState = PickSource()
        self.phase = GamePhase.DRAFTING
        self.round_number = 1
        self.round_log: list[dict[str, int]] = []
        self.exited = False
        self._deal()

    @classmethod
    def for_players(cls, names, *, seed: int | None = None, factory_count: int | None = None) -> "MatchEngine":
        return cls(MatchConfig(player_names=tuple(names), seed=seed, factory_count=factory_count))

    # Queries

    @property
    def active_board(self) -> PlayerBoard:
        return self.boards[self.current_player]

    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_END

    def scores(self) -> list[int]:
        return [b.score for b in self.boards]

    def collection(self, source: TileSource) -> TileCollection:
        if source.is_common_pool:
            return self.pool
        if not 0 <= source.factory_index < len(self.factories):
            raise IllegalDraft(f"no such source: {source}")
        return self.factories[source.factory_index]

    def tiles_in(self, source: TileSource) -> list[Tile]:
        return self.collection(source).tiles

    def pickable_sources(self) -> list[TileSource]:
        sources = [TileSource.factory(i) for i, f in enumerate(self.factories) if not f.is_empty()]
        if self.pool.has_colors():
            sources.append(TileSource.common_pool())
        return sources

    def eligible_rows(self, tile: Tile, player: int | None = None) -> list[int]:
        board = self.active_board if player is None else self.boards[player]
        return board.rows_that_can_accept(tile)

    def row_choices(self, tile: Tile, player: int | None = None) -> list[int]:
        """Rows offered for ``tile``; the floor only when no row can take it."""
        return self.eligible_rows(tile, player) or [Draft.FLOOR]

    def legal_drafts(self) -> list[Draft]:
        if self.is_over():
            return []
        drafts = []
        for source in self.pickable_sources():
            for color in self.collection(source).distinct_colors():
                for row in self.row_choices(color):
                    drafts.append(Draft(source=source, color=color, row=row))
        return drafts

    def standings(self) -> list[int]:
        """Player indices ordered best first; completed wall rows break score ties."""
        return sorted(range(len(self.boards)), key=self._standing_key)

    def winners(self) -> list[int]:
        order = self.standings()
        best = self._standing_key(order[0])[:2]
        return [idx for idx in order if self._standing_key(idx)[:2] == best]

    def _standing_key(self, idx: int) -> tuple[int, int, int]:
        board = self.boards[idx]
        return (-board.score, -board.wall.completed_rows(), idx)

    # Mutation

    def apply_input(self, user_input: UserInput) -> TurnState:
        if self.is_over():
            LOGGER.warning("ignoring %s input: match is over", user_input.kind.value)
            return self.turn_state
        kind = user_input.kind
        if kind == InputKind.EXIT:
            self.exited = True
            self.phase = GamePhase.GAME_END
            LOGGER.info("match exited in round %d", self.round_number)
        elif kind == InputKind.DIRECTION:
            self._on_direction(user_input.direction)
        elif kind == InputKind.CONFIRM:
            self._on_confirm()
        elif kind == InputKind.BACK:
            self._on_back()
        return self.turn_state

    def apply_draft(self, draft: Draft) -> TurnState:
        if self.is_over():
            raise IllegalDraft("match is over")
        self._execute(draft)
        return self.turn_state

    def _on_direction(self, direction: Direction) -> None:
        state = self.turn_state
        if isinstance(state, PickSource):
            self.current_source = cycle(self.pickable_sources(), self.current_source, direction)
        elif isinstance(state, PickTileFromSource):
            tile = self.collection(self.current_source).adjacent_tile(state.tile, direction)
            self._transition(PickTileFromSource(tile))
        elif isinstance(state, PickRowToPutTiles):
            row = cycle(self.row_choices(state.tile), state.row, direction)
            self._transition(PickRowToPutTiles(state.tile, row))

    def _on_confirm(self) -> None:
        state = self.turn_state
        if isinstance(state, PickSource):
            tile = self.collection(self.current_source).first_tile()
            if tile is None:
                raise InvariantViolation(f"{self.current_source} is highlighted but holds no tiles")
            self._transition(PickTileFromSource(tile))
        elif isinstance(state, PickTileFromSource):
            self._transition(PickRowToPutTiles(state.tile, self.row_choices(state.tile)[0]))
        elif isinstance(state, PickRowToPutTiles):
            self._execute(Draft(source=self.current_source, color=state.tile, row=state.row))

    def _on_back(self) -> None:
        state = self.turn_state
        if isinstance(state, PickTileFromSource):
            self._transition(PickSource())
        elif isinstance(state, PickRowToPutTiles):
            self._transition(PickTileFromSource(state.tile))

    def _transition(self, new_state: TurnState) -> None:
        LOGGER.debug("turn state %s -> %s", self.turn_state, new_state)
        self.turn_state = new_state

    def _check_draft(self, draft: Draft) -> None:
        source = self.collection(draft.source)
        if draft.color.is_marker or source.count_of(draft.color) == 0:
            raise IllegalDraft(f"{draft.source} does not hold {draft.color.value}")
        if draft.row not in self.row_choices(draft.color):
            raise IllegalDraft(f"row {draft.row} cannot take {draft.color.value}")

    def _execute(self, draft: Draft) -> None:
        self._check_draft(draft)
        player = self.current_player
        board = self.boards[player]
        took_marker = False
        if draft.source.is_common_pool:
            count, took_marker = self.pool.pick(draft.color)
            if took_marker:
                self.pool.claimed_by = player
        else:
            count = self.factories[draft.source.factory_index].pick(draft.color, self.pool)
        lost = board.place(draft.color, count, draft.row, with_marker=took_marker)
        self.bag.discard(lost)
        LOGGER.debug("%s drafts %d x %s", board.name, count, draft)

        self._transition(PickSource())
        if self.pickable_sources():
            self.current_player = (player + 1) % len(self.boards)
            self._normalize_source()
        else:
            self._advance_round()

    def _normalize_source(self) -> None:
        sources = self.pickable_sources()
        if not sources or self.current_source in sources:
            return
        current = self.current_source.sort_key()
        later = [s for s in sources if s.sort_key() > current]
        self.current_source = later[0] if later else sources[0]

    def _round_starter(self) -> int:
        """Marker holder, cross-checked against the pool's claim record."""
        holders = [idx for idx, b in enumerate(self.boards) if b.has_first_player_token]
        if len(holders) > 1:
            raise InvariantViolation(f"first player marker must be held by exactly one player, found {len(holders)}")
        claimed = [] if self.pool.claimed_by is None else [self.pool.claimed_by]
        if holders != claimed:
            raise InvariantViolation(f"marker held by {holders} but the pool records a claim by {claimed}")
        if holders:
            return holders[0]
        # A short supply can deal only single-color factories, so nothing reaches the pool.
        starter = (self.current_player + 1) % len(self.boards)
        LOGGER.warning(
            "round %d ended with the marker unclaimed; %s starts next", self.round_number, self.boards[starter].name
        )
        return starter

    def _advance_round(self) -> None:
        starter = self._round_starter()

        gained = []
        game_over = False
        for board in self.boards:
            points, completed_row, surplus = board.move_tiles_to_wall()
            self.bag.discard(surplus)
            gained.append(points)
            game_over = game_over or completed_row

        for idx, board in enumerate(self.boards):
            penalty, removed = board.flush_floorline()
            self.bag.discard(removed)
            board.has_first_player_token = False
            self.round_log.append(
                {
                    "round": self.round_number,
                    "player": idx,
                    "gained": gained[idx],
                    "floor_penalty": penalty,
                    "score_after": board.score,
                }
            )
        LOGGER.info("round %d scored: %s", self.round_number, self.scores())

        self.current_player = starter
        if game_over:
            self.phase = GamePhase.GAME_END
            LOGGER.info("wall row completed; match over with scores %s", self.scores())
        else:
            self.round_number += 1
        self._deal()

    def _deal(self) -> None:
        for factory in self.factories:
            self.bag.fill_factory(factory)
        self.pool.reseed()
        self.current_source = TileSource.factory(0)
        self._normalize_source()
        self.turn_state = PickSource()
        if not self.is_over() and not self.pickable_sources():
            self.phase = GamePhase.GAME_END
            LOGGER.warning("tile supply exhausted in round %d; ending match", self.round_number)

    def clone(self) -> "MatchEngine":
        other = MatchEngine.__new__(MatchEngine)
        other.config = self.config
        other.bag = self.bag.clone()
        other.factories = [f.clone() for f in self.factories]
        other.pool = self.pool.clone()
        other.boards = [b.clone() for b in self.boards]
        other.current_player = self.current_player
        other.current_source = self.current_source
        other.turn_state = self.turn_state
        other.phase = self.phase
        other.round_number = self.round_number
        other.round_log = [dict(entry) for entry in self.round_log]
        other.exited = self.exited
        return other
