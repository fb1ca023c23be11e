"""Caller-side debounce for re-running the engine after input settles."""

import threading


class Debouncer:
    """Run callback once, delay seconds after the last trigger().

    Each trigger() cancels the pending call and schedules a new one with the
    latest arguments, so a burst of changes results in a single run.
    """

    def __init__(self, delay: float, callback):
        self.delay = delay
        self.callback = callback
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def trigger(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire, args=args, kwargs=kwargs)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def _fire(self, *args, **kwargs) -> None:
        with self._lock:
            self._timer = None
        self.callback(*args, **kwargs)
