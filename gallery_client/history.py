"""
Detail view with mobile back-gesture handling.

On narrow viewports opening the detail view pushes a synthetic history
entry, so the device back gesture pops that entry and closes the view
instead of leaving the gallery.
"""
MOBILE_MAX_WIDTH = 768
DIALOG_STATE = {"dialog": True}


class HistoryStack:
    """In-process stand-in for a browser history: push, back, popstate listeners."""

    def __init__(self):
        self._entries = [None]
        self._listeners = []

    @property
    def state(self):
        return self._entries[-1]

    def __len__(self):
        return len(self._entries)

    def push_state(self, state):
        self._entries.append(state)

    def back(self):
        if len(self._entries) > 1:
            self._entries.pop()
            for listener in list(self._listeners):
                listener(self.state)

    def add_listener(self, listener):
        self._listeners.append(listener)

    def remove_listener(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)


class DetailView:
    def __init__(self, history=None, viewport_width=1280, on_close=None):
        self.history = history if history is not None else HistoryStack()
        self.viewport_width = viewport_width
        self.on_close = on_close
        self.item = None
        self._pushed = False

    @property
    def is_open(self):
        return self.item is not None

    @property
    def is_mobile(self):
        return self.viewport_width < MOBILE_MAX_WIDTH

    def open(self, item):
        if self.is_open:
            self.item = item
            return
        self.item = item
        if self.is_mobile:
            self.history.push_state(dict(DIALOG_STATE))
            self.history.add_listener(self._on_popstate)
            self._pushed = True

    def close(self):
        """Close by any means; pops the synthetic entry if it is still on top."""
        if not self.is_open:
            return
        if self._pushed:
            self._pushed = False
            self.history.remove_listener(self._on_popstate)
            state = self.history.state
            if isinstance(state, dict) and state.get("dialog"):
                self.history.back()
        self._finish_close()

    def _on_popstate(self, state):
        # Back gesture already removed our entry
        self._pushed = False
        self.history.remove_listener(self._on_popstate)
        self._finish_close()

    def _finish_close(self):
        item, self.item = self.item, None
        if self.on_close is not None and item is not None:
            self.on_close(item)
