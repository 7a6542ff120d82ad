# worker.py
# Runs the engine's background steps (init / think) off the caller's thread.

import logging
import threading

from errors import ContractViolation

logger = logging.getLogger(__name__)


class ThinkWorker:
    """One background task at a time.

    ``on_done(result, error)`` is called on the worker thread when the task
    finishes: ``result`` is whatever the task returned, ``error`` the exception
    it raised (or None). A driver with an event loop should hop back to its own
    thread from there, the way a Tk app uses ``root.after(0, ...)``.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._thread = None

    @property
    def busy(self):
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def submit(self, task, on_done, name="think"):
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                raise ContractViolation(f"cannot start {name!r}: a background task is still running")

            def run():
                try:
                    result = task()
                except Exception as e:
                    logger.debug(f"[Worker] {name} raised {e!r}")
                    on_done(None, e)
                    return
                on_done(result, None)

            self._thread = threading.Thread(target=run, name=f"reversi-{name}", daemon=True)
            self._thread.start()

    def init(self, game, on_done):
        self.submit(game.init, on_done, name="init")

    def think(self, game, on_done):
        self.submit(game.think, on_done, name="think")

    def join(self, timeout=None):
        """Wait for the current task; True when nothing is left running."""
        with self._lock:
            thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()
