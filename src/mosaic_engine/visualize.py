import matplotlib.pyplot as plt
from matplotlib import patches

from .engine import MatchEngine
from .enums import Tile
from .player import PlayerBoard
from .wall import WALL_PATTERN

COLOR_MAP = {
    Tile.BLUE: "#4A90E2",
    Tile.GREEN: "#5DAE5B",
    Tile.RED: "#D64045",
    Tile.WHITE: "#E5E5E5",
    Tile.YELLOW: "#F5D547",
    Tile.FIRST_PLAYER: "#2C2C2C",
}
EMPTY = "#FFFFFF"


def _cell(ax: plt.Axes, x: float, y: float, face: str) -> None:
    ax.add_patch(patches.Rectangle((x, y), 0.9, 0.9, linewidth=1, edgecolor="gray", facecolor=face))


def plot_board(ax: plt.Axes, board: PlayerBoard, *, active: bool = False) -> None:
    marker = " *" if active else ""
    ax.set_title(f"{board.name} (score {board.score}){marker}")
    ax.set_xlim(0, 11)
    ax.set_ylim(0, 7)
    ax.invert_yaxis()
    ax.axis("off")

    # Pattern rows fill right to left, toward the wall.
    for r, row in enumerate(board.pattern_rows):
        for c in range(row.capacity):
            face = COLOR_MAP[row.color] if c < row.filled else EMPTY
            _cell(ax, 4 - c, r, face)

    for r, slots in enumerate(board.wall.slots):
        for c, filled in enumerate(slots):
            color = COLOR_MAP[WALL_PATTERN[r][c]]
            face = color if filled else EMPTY
            _cell(ax, 5.5 + c, r, face)
            if not filled:
                ax.text(5.95 + c, r + 0.5, WALL_PATTERN[r][c].symbol, ha="center", va="center", fontsize=7, color=color)

    for i, slot in enumerate(board.floor_line.slots):
        _cell(ax, i, 5.5, EMPTY if slot is None else COLOR_MAP[slot])


def plot_match(engine: MatchEngine) -> plt.Figure:
    boards = engine.boards
    fig, axes = plt.subplots(1, len(boards), figsize=(5 * len(boards), 4))
    for idx, ax in enumerate(axes):
        plot_board(ax, boards[idx], active=idx == engine.current_player)
    fig.suptitle(f"Round {engine.round_number} | Phase: {engine.phase.value}")
    fig.tight_layout()
    return fig


def plot_score_history(score_history: list[list[int]], names: list[str] | None = None) -> plt.Figure:
    fig, ax = plt.subplots(figsize=(6, 4))
    players = len(score_history[0])
    for p in range(players):
        label = names[p] if names else f"Player {p}"
        ax.plot([s[p] for s in score_history], label=label)
    ax.set_xlabel("Draft")
    ax.set_ylabel("Score")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig
