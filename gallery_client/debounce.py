import threading


class Debouncer:
    """
    Collapse rapid calls into one deferred call.

    Each ``trigger()`` cancels the pending timer and starts a new one, so only
    the last call in a burst fires, ``delay`` seconds after it. There is no
    cap on the total delay. One instance per owner; nothing is shared.
    """

    def __init__(self, delay, callback, timer_factory=threading.Timer):
        self.delay = delay
        self.callback = callback
        self._timer_factory = timer_factory
        self._timer = None
        self._lock = threading.Lock()

    def trigger(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = None

            def fire():
                self._fire(timer)

            timer = self._timer_factory(self.delay, fire)
            if hasattr(timer, "daemon"):
                timer.daemon = True
            self._timer = timer
            timer.start()

    def _fire(self, timer):
        with self._lock:
            # A superseded timer whose callback was already running
            if self._timer is not timer:
                return
            self._timer = None
        self.callback()

    def cancel(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self):
        return self._timer is not None
