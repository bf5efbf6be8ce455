import pytest

from mosaic_engine import (
    FillResult,
    IllegalDraft,
    InvariantViolation,
    PatternRow,
    PenaltyTrack,
    PlayerBoard,
    ScoringWall,
    Tile,
    WALL_PATTERN,
)


def wall_from_string(text: str) -> ScoringWall:
    """Digits give fill order, 0 leaves a slot empty."""
    wall = ScoringWall()
    steps = {}
    for r, line in enumerate(text.strip().splitlines()):
        for c, ch in enumerate(line):
            if ch != "0":
                steps.setdefault(int(ch), (r, c))
    for _, (r, c) in sorted(steps.items()):
        wall.fill_slot(r, WALL_PATTERN[r][c])
    return wall


def test_wall_layout_rotates_each_row():
    assert WALL_PATTERN[0] == [Tile.YELLOW, Tile.RED, Tile.BLUE, Tile.WHITE, Tile.GREEN]
    assert WALL_PATTERN[1] == [Tile.GREEN, Tile.YELLOW, Tile.RED, Tile.BLUE, Tile.WHITE]
    for c in range(5):
        assert len({WALL_PATTERN[r][c] for r in range(5)}) == 5


@pytest.mark.parametrize(
    "layout, expected",
    [
        ("12300\n00000\n00000\n00000\n00000", 6),
        ("10203\n00000\n00000\n00000\n00000", 3),
        ("01300\n00200\n00000\n00000\n00000", 6),
        ("13500\n00200\n00400\n00000\n00000", 12),
        ("00100\n00200\n04756\n00300\n00000", 16),
        ("10000\n20000\n30000\n40000\n50000", 22),
        ("12345\n00000\n00000\n00000\n00000", 17),
        ("10000\n02000\n00300\n00040\n00005", 15),
    ],
)
def test_wall_scoring(layout, expected):
    assert wall_from_string(layout).points == expected


def test_completing_a_row_ends_the_game():
    wall = wall_from_string("12340\n00000\n00000\n00000\n00000")
    result = wall.fill_slot(0, WALL_PATTERN[0][4])
    assert result == FillResult(points=7, game_over=True)


def test_completing_a_column_does_not_end_the_game():
    wall = wall_from_string("10000\n20000\n30000\n40000\n00000")
    result = wall.fill_slot(4, WALL_PATTERN[4][0])
    assert result == FillResult(points=12, game_over=False)
    assert wall.completed_columns() == 1


def test_color_bonus_only_on_completing_placement():
    wall = wall_from_string("10000\n02000\n00300\n00040\n00005")
    assert wall.completed_colors() == [Tile.YELLOW]
    # A later isolated placement scores 1, not another color bonus.
    assert wall.fill_slot(0, WALL_PATTERN[0][3]).points == 1


def test_filling_a_filled_slot_is_fatal():
    wall = ScoringWall()
    wall.fill_slot(2, Tile.RED)
    with pytest.raises(InvariantViolation, match="already filled"):
        wall.fill_slot(2, Tile.RED)


def test_find_slot_for_color():
    wall = ScoringWall()
    assert wall.find_slot_for_color(1, Tile.BLUE) == (3, False)
    wall.fill_slot(1, Tile.BLUE)
    assert wall.find_slot_for_color(1, Tile.BLUE) == (3, True)


def test_penalty_weights():
    track = PenaltyTrack()
    assert track.add([Tile.YELLOW] * 7) == []
    assert track.penalty() == 14


def test_penalty_track_overflow_returns_extra_tiles():
    track = PenaltyTrack()
    assert track.add([Tile.YELLOW] * 9) == [Tile.YELLOW, Tile.YELLOW]
    track = PenaltyTrack()
    track.add([Tile.YELLOW] * 6)
    assert track.add([Tile.RED, Tile.BLUE, Tile.GREEN]) == [Tile.BLUE, Tile.GREEN]


def test_reset_floorline_clamps_at_zero_and_clears():
    wall = wall_from_string("12000\n00000\n00000\n00000\n00000")
    assert wall.points == 3
    track = PenaltyTrack()
    track.add([Tile.RED] * 6 + [Tile.FIRST_PLAYER])
    removed = wall.reset_floorline(track)
    assert wall.points == 0
    assert len(removed) == 7
    assert track.tiles() == []


def test_reset_floorline_partial_penalty():
    wall = wall_from_string("12345\n00000\n00000\n00000\n00000")
    track = PenaltyTrack()
    track.add([Tile.RED, Tile.BLUE, Tile.GREEN])
    wall.reset_floorline(track)
    assert wall.points == 17 - 4


def test_pattern_row_can_accept():
    row = PatternRow(4, Tile.YELLOW, 2)
    assert row.can_accept(Tile.YELLOW)
    assert not row.can_accept(Tile.RED)
    assert not PatternRow(4, Tile.YELLOW, 4).can_accept(Tile.YELLOW)
    assert PatternRow(4).can_accept(Tile.RED)


@pytest.mark.parametrize(
    "start, count, expected_overflow, expected_row",
    [
        (PatternRow(4), 2, 0, PatternRow(4, Tile.YELLOW, 2)),
        (PatternRow(4, Tile.YELLOW, 2), 1, 0, PatternRow(4, Tile.YELLOW, 3)),
        (PatternRow(4, Tile.YELLOW, 2), 3, 1, PatternRow(4, Tile.YELLOW, 4)),
        (PatternRow(3), 5, 2, PatternRow(3, Tile.YELLOW, 3)),
    ],
)
def test_pattern_row_overflow(start, count, expected_overflow, expected_row):
    assert start.accept(Tile.YELLOW, count) == expected_overflow
    assert start == expected_row


def test_pattern_row_rejects_other_color():
    row = PatternRow(3, Tile.BLUE, 1)
    with pytest.raises(IllegalDraft, match="taken by blue"):
        row.accept(Tile.RED, 1)
    assert row == PatternRow(3, Tile.BLUE, 1)


def test_pattern_row_over_capacity_is_fatal():
    with pytest.raises(InvariantViolation):
        PatternRow(2, Tile.RED, 3)


def test_pattern_row_flush():
    row = PatternRow(2, Tile.RED, 2)
    assert row.flush() == Tile.RED
    assert row.is_free
    with pytest.raises(InvariantViolation):
        PatternRow(2, Tile.RED, 1).flush()


def test_board_skips_rows_whose_wall_color_is_placed():
    board = PlayerBoard(name="Ada")
    board.wall.fill_slot(0, Tile.BLUE)
    board.pattern_rows[1] = PatternRow(2, Tile.RED, 1)
    assert board.rows_that_can_accept(Tile.BLUE) == [2, 3, 4]
    assert board.rows_that_can_accept(Tile.RED) == [0, 1, 2, 3, 4]


def test_board_place_sends_overflow_and_marker_to_floor():
    board = PlayerBoard(name="Ada")
    lost = board.place(Tile.RED, 3, 0, with_marker=True)
    assert lost == []
    assert board.pattern_rows[0] == PatternRow(1, Tile.RED, 1)
    assert board.floor_line.tiles() == [Tile.RED, Tile.RED, Tile.FIRST_PLAYER]
    assert board.has_first_player_token is True


def test_board_move_tiles_to_wall_discards_surplus():
    board = PlayerBoard(name="Ada")
    board.pattern_rows[2] = PatternRow(3, Tile.RED, 3)
    board.pattern_rows[3] = PatternRow(4, Tile.RED, 2)
    gained, game_over, surplus = board.move_tiles_to_wall()
    assert gained == 1
    assert game_over is False
    assert surplus == [Tile.RED, Tile.RED]
    assert board.wall.has_color_in_row(2, Tile.RED)
    assert board.pattern_rows[2].is_free
    assert board.pattern_rows[3] == PatternRow(4, Tile.RED, 2)
