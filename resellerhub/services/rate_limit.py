import time
from flask import current_app


class FixedWindowRateLimiter:
    """Counts hits per client in fixed windows kept in the shared cache.

    Backed by Flask-Caching, so every app instance pointing at the same
    Redis sees the same counters.
    """

    def __init__(self, cache, limit, window_seconds, clock=None):
        self.cache = cache
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock or time.time

    def _key(self, client_id):
        window = int(self.clock() // self.window_seconds)
        return f"ratelimit:{client_id}:{window}"

    def hit(self, client_id):
        """Record one request; False when the client is over the limit."""
        key = self._key(client_id)
        # Counters live on the cachelib backend; the Flask-Caching facade has no inc()
        backend = self.cache.cache
        # add() is a no-op when the key already exists
        backend.add(key, 0, timeout=self.window_seconds)
        count = backend.inc(key)
        if count is None:
            # Backend without atomic increment
            count = (backend.get(key) or 0) + 1
            backend.set(key, count, timeout=self.window_seconds)

        if count > self.limit:
            current_app.logger.warning(f"Rate limit exceeded for {client_id} ({count}/{self.limit})")
            return False
        return True

    def remaining(self, client_id):
        count = self.cache.cache.get(self._key(client_id)) or 0
        return max(self.limit - count, 0)
