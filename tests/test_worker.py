import queue
import threading

import pytest

from constants import DARK
from errors import ContractViolation
from reversi import Outcome, Reversi
from worker import ThinkWorker


def _collect():
    results = queue.Queue()
    return results, lambda result, error: results.put((result, error))


def test_runs_task_in_background_thread():
    worker = ThinkWorker()
    results, on_done = _collect()
    seen = []
    worker.submit(lambda: seen.append(threading.current_thread().name) or 42, on_done)
    assert results.get(timeout=5) == (42, None)
    assert worker.join(timeout=5)
    assert seen and seen[0] != threading.current_thread().name


def test_errors_are_delivered_to_callback():
    worker = ThinkWorker()
    results, on_done = _collect()

    def boom():
        raise RuntimeError("bad")

    worker.submit(boom, on_done)
    result, error = results.get(timeout=5)
    assert result is None
    assert isinstance(error, RuntimeError)


def test_only_one_task_at_a_time():
    worker = ThinkWorker()
    release = threading.Event()
    results, on_done = _collect()
    worker.submit(lambda: release.wait(5), on_done)
    assert worker.busy
    with pytest.raises(ContractViolation):
        worker.submit(lambda: None, on_done)
    release.set()
    results.get(timeout=5)
    assert worker.join(timeout=5)
    assert not worker.busy


def test_init_and_think_on_worker():
    game = Reversi(log=lambda line: None, config={"max_depth": 2})
    game.set_human_color(DARK)
    worker = ThinkWorker()
    results, on_done = _collect()

    worker.init(game, on_done)
    assert results.get(timeout=30) == (None, None)
    worker.join(timeout=5)
    assert game.in_game

    assert game.play(2, 3)
    worker.think(game, on_done)
    result, error = results.get(timeout=30)
    assert error is None
    assert result.outcome is Outcome.CONTINUE


def test_think_contract_violation_reaches_callback():
    game = Reversi(log=lambda line: None, config={"max_depth": 1})
    game.set_human_color(DARK)
    game.init()
    worker = ThinkWorker()
    results, on_done = _collect()
    worker.think(game, on_done)
    _, error = results.get(timeout=5)
    assert isinstance(error, ContractViolation)
