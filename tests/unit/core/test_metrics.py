"""Unit tests for the hit counter."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from chirpy.core.metrics import HitCounter


def test_increment_returns_new_value() -> None:
    counter = HitCounter()
    assert counter.increment() == 1
    assert counter.increment(2) == 3
    assert counter.value() == 3


def test_concurrent_increments_are_not_lost() -> None:
    counter = HitCounter()

    def _bump(_):
        for _ in range(1000):
            counter.increment()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(_bump, range(8)))

    assert counter.value() == 8000


def test_reset() -> None:
    counter = HitCounter(initial=41)
    counter.reset()
    assert counter.value() == 0


def test_app_owns_injected_counter() -> None:
    from chirpy.core.config import TestingConfig
    from chirpy.factory import create_app

    injected = HitCounter(initial=5)
    app = create_app(TestingConfig, hit_counter=injected, instance_relative_config=False)

    assert app.extensions["hit_counter"] is injected
