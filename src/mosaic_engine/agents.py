"""Baseline players that choose drafts from the legal set."""

import random
from dataclasses import dataclass, field
from typing import Iterable

from .engine import MatchEngine
from .enums import TILE_RANK
from .player import FLOOR_PENALTIES
from .state import Draft


class Agent:
    def select_draft(self, engine: MatchEngine) -> Draft:
        raise NotImplementedError


def _sorted_drafts(drafts: Iterable[Draft]) -> list[Draft]:
    def row_order(d: Draft) -> int:
        return 99 if d.row == Draft.FLOOR else d.row

    return sorted(drafts, key=lambda d: (d.source.sort_key(), TILE_RANK[d.color], row_order(d)))


def _floor_cost(engine: MatchEngine, extra: int) -> int:
    track = engine.active_board.floor_line
    start = len(track.tiles())
    return sum(FLOOR_PENALTIES[start : start + extra])


def score_draft(engine: MatchEngine, draft: Draft) -> float:
    """Cheap one-ply heuristic: finish rows, avoid the penalty track."""
    board = engine.active_board
    count = engine.collection(draft.source).count_of(draft.color)
    marker = 1 if draft.source.is_common_pool and engine.pool.has_marker() else 0
    if draft.row == Draft.FLOOR:
        return -2.0 * _floor_cost(engine, count + marker)

    row = board.pattern_rows[draft.row]
    space = row.capacity - row.filled
    spill = max(count - space, 0)
    score = -2.0 * _floor_cost(engine, spill + marker)
    if count >= space:
        score += 3.0 + min(count, space)
    else:
        score += count / row.capacity
    if not row.is_free:
        score += 0.5
    return score


@dataclass
class RandomAgent:
    """Chooses uniformly among legal drafts."""

    rng: random.Random = field(default_factory=random.Random)

    def select_draft(self, engine: MatchEngine) -> Draft:
        drafts = engine.legal_drafts()
        if not drafts:
            raise RuntimeError("no legal drafts available")
        return self.rng.choice(drafts)


class FirstLegalAgent:
    """Picks the first draft under a stable ordering."""

    def select_draft(self, engine: MatchEngine) -> Draft:
        drafts = _sorted_drafts(engine.legal_drafts())
        if not drafts:
            raise RuntimeError("no legal drafts available")
        return drafts[0]


class GreedyFillAgent:
    """
    Prefers completing pattern rows without spilling onto the floor.

    Ties fall back to the stable draft order.
    """

    def select_draft(self, engine: MatchEngine) -> Draft:
        drafts = _sorted_drafts(engine.legal_drafts())
        if not drafts:
            raise RuntimeError("no legal drafts available")
        return max(drafts, key=lambda d: score_draft(engine, d))


AGENTS = {
    "random": RandomAgent,
    "first": FirstLegalAgent,
    "greedy": GreedyFillAgent,
}
