from dataclasses import dataclass, field

from .actions import UserInput
from .agents import Agent
from .config import MatchConfig
from .engine import MatchEngine
from .state import Draft, PickRowToPutTiles, PickTileFromSource


@dataclass
class GameResult:
    final_state: MatchEngine
    scores: list[int]
    drafts: list[Draft] = field(default_factory=list)
    score_history: list[list[int]] = field(default_factory=list)


def _steps(items, start, target) -> list[UserInput]:
    items = list(items)
    distance = (items.index(target) - items.index(start)) % len(items)
    return [UserInput.next()] * distance


def plan_inputs(engine: MatchEngine, draft: Draft) -> list[UserInput]:
    """Intents that walk the turn state machine from its current state to ``draft``."""
    inputs = []
    state = engine.turn_state
    if isinstance(state, PickRowToPutTiles):
        inputs += [UserInput.back(), UserInput.back()]
    elif isinstance(state, PickTileFromSource):
        inputs.append(UserInput.back())

    inputs += _steps(engine.pickable_sources(), engine.current_source, draft.source)
    inputs.append(UserInput.confirm())
    colors = engine.collection(draft.source).distinct_colors()
    inputs += _steps(colors, colors[0], draft.color)
    inputs.append(UserInput.confirm())
    rows = engine.row_choices(draft.color)
    inputs += _steps(rows, rows[0], draft.row)
    inputs.append(UserInput.confirm())
    return inputs


def play_game(
    agents: list[Agent],
    *,
    seed: int | None = None,
    names: tuple[str, ...] | None = None,
    via_inputs: bool = False,
) -> GameResult:
    names = names or tuple(f"Player {i}" for i in range(len(agents)))
    engine = MatchEngine(MatchConfig(player_names=names, seed=seed))
    result = GameResult(final_state=engine, scores=[], score_history=[engine.scores()])
    while not engine.is_over():
        agent = agents[engine.current_player]
        # Clone to protect the match from accidental mutation by agent code.
        draft = agent.select_draft(engine.clone())
        if via_inputs:
            for user_input in plan_inputs(engine, draft):
                engine.apply_input(user_input)
        else:
            engine.apply_draft(draft)
        result.drafts.append(draft)
        result.score_history.append(engine.scores())
    result.scores = engine.scores()
    return result


def play_series(agents: list[Agent], games: int, *, seed: int | None = None) -> list[GameResult]:
    results = []
    for i in range(games):
        game_seed = None if seed is None else seed + i
        results.append(play_game(agents, seed=game_seed))
    return results
