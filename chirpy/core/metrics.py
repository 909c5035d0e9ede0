"""Process-wide hit counter owned by the application instance."""

from __future__ import annotations

import threading

from flask import Flask, current_app

EXTENSION_KEY = "hit_counter"


class HitCounter:
    """
    Thread-safe monotonically increasing counter.

    The counter is created (or injected) by the application factory and only
    exposes atomic increment/read/reset operations; handlers reach it through
    ``app.extensions`` rather than a module-level global.
    """

    def __init__(self, initial: int = 0) -> None:
        self._value = int(initial)
        self._lock = threading.Lock()

    def increment(self, amount: int = 1) -> int:
        """Add ``amount`` and return the new value."""
        with self._lock:
            self._value += amount
            return self._value

    def value(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


def init_app(app: Flask, counter: HitCounter | None = None) -> HitCounter:
    """Attach ``counter`` (or a fresh one) to the application."""
    owned = counter if counter is not None else HitCounter()
    app.extensions[EXTENSION_KEY] = owned
    return owned


def get_hit_counter() -> HitCounter:
    """Return the counter bound to the current application."""
    counter = current_app.extensions.get(EXTENSION_KEY)
    if counter is None:
        raise RuntimeError("Hit counter is not initialized. Call init_app() first.")
    return counter
