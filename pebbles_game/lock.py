from __future__ import annotations

from contextlib import contextmanager

import redis


class GameBusy(RuntimeError):
    pass


@contextmanager
def game_lock(*, r: redis.Redis, game_id: str, ttl_ms: int = 5_000):
    """Best-effort per-game lock so at most one action is applied at a time.

    Release is a plain DEL; a holder that outlives `ttl_ms` can drop a lock it
    no longer owns.
    """

    key = f"lock:game:{game_id}"
    acquired = r.set(key, "1", nx=True, px=ttl_ms)
    if not acquired:
        raise GameBusy("Game is busy")
    try:
        yield
    finally:
        r.delete(key)
