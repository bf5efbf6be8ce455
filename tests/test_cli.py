import io
import json

from mosaic_engine import InputKind, MatchEngine, UserInput
from mosaic_engine.cli import decode_key, main, render_text


def test_decode_key():
    assert decode_key("j") == UserInput.next()
    assert decode_key("k") == UserInput.prev()
    assert decode_key("\n") == UserInput.confirm()
    assert decode_key("\x7f") == UserInput.back()
    assert decode_key("q") == UserInput.exit()
    assert decode_key("x").kind == InputKind.NOOP


def test_render_text_highlights_current_source():
    engine = MatchEngine.for_players(["Ada", "Bo"], seed=0)
    text = render_text(engine)
    assert text.startswith("Round 1 | drafting")
    assert "--> factory 0:" in text
    assert "common pool: 1" in text
    assert text.endswith("state: PickSource")


def test_autoplay_prints_json_snapshot():
    out = io.StringIO()
    assert main(["--autoplay", "first", "--seed", "1", "--json"], stdout=out) == 0
    text = out.getvalue()
    assert "winner:" in text
    snapshot = json.loads(text[text.index("{") :])
    assert snapshot["phase"] == "game_end"
    assert snapshot["exited"] is False
    assert snapshot["drafts"]
    assert snapshot["round_log"]


def test_interactive_quit():
    out = io.StringIO()
    assert main(["--seed", "2"], stdin=io.StringIO("jj\nq\n"), stdout=out) == 0
    text = out.getvalue()
    assert "--> factory 2:" in text
    assert "winner:" not in text


def test_bad_config_returns_error_code(capsys):
    assert main(["--players", "Solo"], stdout=io.StringIO()) == 2
    assert "at least 2 players" in capsys.readouterr().err
