"""
app/services/rate_limiter.py

Per-actor fixed-window request limiter for expensive endpoints.

State lives in an InMemoryRateLimitStore created once per process and kept for
its lifetime. Windows expire lazily: a key's window is only re-evaluated
when that key is checked again. The store is bounded by ``max_keys`` and
evicts the least recently checked key when full.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class RateLimitConfig:
    max_requests: int
    window_ms: int


@dataclass(frozen=True)
class RateLimitResult:
    """
    Outcome of one limiter check. ``reset_at_ms`` is epoch milliseconds.
    """

    allowed: bool
    remaining: int
    reset_at_ms: int


@dataclass
class RateLimitState:
    window_start_ms: int
    count: int


class InMemoryRateLimitStore:
    """
    Key -> RateLimitState map with LRU eviction.

    Not thread-safe on its own; FixedWindowRateLimiter serializes access.
    """

    def __init__(self, *, max_keys: int = 10_000) -> None:
        self._max_keys = max(1, max_keys)
        self._states: OrderedDict[str, RateLimitState] = OrderedDict()

    def get(self, key: str) -> RateLimitState | None:
        state = self._states.get(key)
        if state is not None:
            self._states.move_to_end(key)
        return state

    def put(self, key: str, state: RateLimitState) -> None:
        self._states[key] = state
        self._states.move_to_end(key)
        while len(self._states) > self._max_keys:
            self._states.popitem(last=False)

    def sweep_expired(self, *, now_ms: int, window_ms: int) -> int:
        """
        Drop every state whose window has ended; returns the number removed.
        """

        expired = [
            key
            for key, state in self._states.items()
            if now_ms >= state.window_start_ms + window_ms
        ]
        for key in expired:
            del self._states[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._states)


class FixedWindowRateLimiter:
    """
    Counts requests per key inside a window that resets wholesale.

    The lookup, window roll-over and increment happen inside one lock, so
    concurrent callers can never jointly exceed ``max_requests``.
    """

    def __init__(
        self,
        config: RateLimitConfig,
        *,
        store: InMemoryRateLimitStore | None = None,
        clock_ms: Callable[[], int] | None = None,
    ) -> None:
        if config.max_requests < 1:
            raise ValueError("max_requests must be at least 1.")
        if config.window_ms < 1:
            raise ValueError("window_ms must be at least 1.")
        self._config = config
        self._store = store if store is not None else InMemoryRateLimitStore()
        self._clock_ms = clock_ms or _wall_clock_ms
        self._lock = threading.Lock()

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    def check(self, key: str) -> RateLimitResult:
        max_requests = self._config.max_requests
        window_ms = self._config.window_ms

        with self._lock:
            now = self._clock_ms()
            state = self._store.get(key)

            if state is None or now >= state.window_start_ms + window_ms:
                state = RateLimitState(window_start_ms=now, count=1)
                self._store.put(key, state)
                return RateLimitResult(
                    allowed=True,
                    remaining=max_requests - 1,
                    reset_at_ms=now + window_ms,
                )

            reset_at = state.window_start_ms + window_ms
            if state.count < max_requests:
                state.count += 1
                return RateLimitResult(
                    allowed=True,
                    remaining=max_requests - state.count,
                    reset_at_ms=reset_at,
                )

            return RateLimitResult(allowed=False, remaining=0, reset_at_ms=reset_at)

    def sweep_expired(self) -> int:
        with self._lock:
            return self._store.sweep_expired(
                now_ms=self._clock_ms(),
                window_ms=self._config.window_ms,
            )
