import pytest

from constants import DARK
from main import ConsoleGame, main
from reversi import Outcome, Reversi


def _console(inputs=(), auto=False, max_depth=1):
    out = []
    feed = iter(inputs)

    def fake_input(prompt):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError

    game = Reversi(log=out.append, config={"max_depth": max_depth})
    console = ConsoleGame(game, delay=0.0, auto=auto, input_fn=fake_input, output=out.append)
    return console, out


def test_auto_game_runs_to_the_end():
    console, out = _console(auto=True)
    result = console.run(DARK)
    assert result.outcome is Outcome.ENDED
    assert any(line.startswith("The game is over.") for line in out)
    assert any(line.startswith("H: ") for line in out)
    assert any(line.startswith("C: ") for line in out)


def test_scripted_human_moves():
    console, out = _console(["zz", "a1", "?", "d3", "q"])
    assert console.run(DARK) is None
    assert "Type a square like d3." in out
    assert "Illegal move." in out
    assert "Legal: d3 c4 f5 e6" in out
    assert any(line.startswith("Computer plays ") for line in out)
    assert out[-1] == "Bye."


def test_end_of_input_quits():
    console, out = _console([])
    assert console.run(DARK) is None
    assert out[-1] == "Bye."


def test_main_auto(tmp_path, capsys):
    config = tmp_path / "config.json"
    config.write_text('{"max_depth": 1}', encoding="utf-8")
    assert main(["--auto", "--config", str(config)]) == 0
    assert "The game is over." in capsys.readouterr().out


def test_main_rejects_bad_alpha(tmp_path):
    with pytest.raises(SystemExit):
        main(["--auto", "--alpha", "3", "--config", str(tmp_path / "none.json")])
