"""Plain-text front end: decodes keys into intents and prints the match."""

import argparse
import json
import logging
import random
import sys

from .actions import UserInput
from .agents import AGENTS
from .config import MatchConfig
from .engine import MatchEngine
from .serialization import draft_to_dict, engine_to_dict
from .simulation import plan_inputs
from .state import Draft, PickRowToPutTiles, PickTileFromSource, TileSource
from .wall import WALL_PATTERN

LOGGER = logging.getLogger(__name__)

KEYMAP = {
    "j": UserInput.next,
    "k": UserInput.prev,
    "\n": UserInput.confirm,
    "\r": UserInput.confirm,
    "\x7f": UserInput.back,
    "\b": UserInput.back,
    "b": UserInput.back,
    "q": UserInput.exit,
}

HELP = "keys: j/k move, empty line confirms, b goes back, q quits"


def decode_key(key: str) -> UserInput:
    factory = KEYMAP.get(key)
    return factory() if factory else UserInput.noop()


def _pattern_row(row, selected: bool) -> str:
    symbol = row.color.symbol if row.color else ""
    text = "." * (row.capacity - row.filled) + symbol * row.filled
    prefix = "->" if selected else "  "
    return f"{prefix}{text:>5}"


def _wall_row(board, r: int) -> str:
    return "".join(
        "#" if filled else WALL_PATTERN[r][c].symbol.lower() for c, filled in enumerate(board.wall.slots[r])
    )


def render_text(engine: MatchEngine) -> str:
    state = engine.turn_state
    lines = [f"Round {engine.round_number} | {engine.phase.value}"]
    for idx, board in enumerate(engine.boards):
        active = idx == engine.current_player
        marker = " [1]" if board.has_first_player_token else ""
        lines.append(f"{'*' if active else ' '} {board.name}: {board.score}{marker}")
        selected_row = state.row if active and isinstance(state, PickRowToPutTiles) else None
        for r, row in enumerate(board.pattern_rows):
            lines.append(f"  {_pattern_row(row, r == selected_row)} | {_wall_row(board, r)}")
        floor = "".join("_" if t is None else t.symbol for t in board.floor_line.slots)
        floor_arrow = "->" if active and selected_row == Draft.FLOOR else "  "
        lines.append(f"  {floor_arrow}floor {floor}")

    sources = [TileSource.factory(i) for i in range(len(engine.factories))] + [TileSource.common_pool()]
    selected_tile = state.tile if isinstance(state, (PickTileFromSource, PickRowToPutTiles)) else None
    for source in sources:
        tiles = engine.tiles_in(source)
        highlighted = source == engine.current_source
        text = "".join(
            f"|{t.symbol}|" if highlighted and t == selected_tile else t.symbol for t in tiles
        )
        lines.append(f"{'-->' if highlighted else '   '} {source}: {text}")
    lines.append(f"state: {type(state).__name__}")
    return "\n".join(lines)


def _autoplay(engine: MatchEngine, agent_name: str, seed: int | None) -> list[Draft]:
    agent_cls = AGENTS[agent_name]
    agent = agent_cls(rng=random.Random(seed)) if agent_name == "random" else agent_cls()
    drafts = []
    while not engine.is_over():
        draft = agent.select_draft(engine.clone())
        LOGGER.debug("%s plays %s", engine.active_board.name, draft)
        for user_input in plan_inputs(engine, draft):
            engine.apply_input(user_input)
        drafts.append(draft)
    return drafts


def _interactive(engine: MatchEngine, stdin, stdout) -> None:
    print(HELP, file=stdout)
    print(render_text(engine), file=stdout)
    for line in stdin:
        keys = line.rstrip("\r\n") or "\n"
        for key in keys:
            engine.apply_input(decode_key(key))
            if engine.is_over():
                break
        print(render_text(engine), file=stdout)
        if engine.is_over():
            break


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a tile-drafting match in the terminal.")
    parser.add_argument("--players", nargs="+", default=["Alice", "Bob"], help="Player names (at least two).")
    parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic bag shuffles.")
    parser.add_argument("--factories", type=int, default=None, help="Factory count (default 2 * players + 1).")
    parser.add_argument("--autoplay", choices=sorted(AGENTS), help="Let a baseline agent play every seat.")
    parser.add_argument("--json", action="store_true", help="Print a JSON snapshot when the match ends.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    return parser


def main(argv=None, *, stdin=None, stdout=None) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = MatchConfig(player_names=tuple(args.players), factory_count=args.factories, seed=args.seed)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    engine = MatchEngine(config)

    drafts = []
    if args.autoplay:
        drafts = _autoplay(engine, args.autoplay, args.seed)
        print(render_text(engine), file=stdout)
    else:
        _interactive(engine, stdin, stdout)

    if engine.is_over() and not engine.exited:
        names = [engine.boards[i].name for i in engine.winners()]
        print(f"winner: {', '.join(names)}", file=stdout)
    if args.json:
        snapshot = engine_to_dict(engine, include_round_log=True)
        snapshot["drafts"] = [draft_to_dict(d) for d in drafts]
        print(json.dumps(snapshot, indent=2), file=stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
