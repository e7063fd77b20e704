"""Single mutable slot holding the current session snapshot."""

from __future__ import annotations

import logging
import threading
from typing import Callable

import numpy as np

from .state import Event, SessionState, Settings, new_session, reduce

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]


class SessionStore:
    """Owns the session and replaces it wholesale on every event.

    Writers are serialised by a lock; readers take ``snapshot()`` and always
    see a complete state, old or new.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []
        self._state = new_session(settings, self._rng)

    def snapshot(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def dispatch(self, event: Event) -> SessionState:
        """Apply *event*, publish the new snapshot and return it.

        Errors raised by the transition leave the current snapshot in place.
        """
        with self._lock:
            previous = self._state
            state = reduce(previous, event, self._rng)
            self._state = state

        if state is not previous:
            logger.debug(
                "Session event %s: hand %d/%d, score %d",
                type(event).__name__,
                state.current_hand,
                state.total_hands,
                state.score,
            )
            for listener in self._listeners:
                listener(state)
        return state
