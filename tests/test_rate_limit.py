from resellerhub.extensions import cache
from resellerhub.services.rate_limit import FixedWindowRateLimiter


class FakeTime:
    def __init__(self, t):
        self.t = t

    def __call__(self):
        return self.t


def test_blocks_after_limit(app):
    limiter = FixedWindowRateLimiter(cache, limit=3, window_seconds=60, clock=FakeTime(1000))
    assert [limiter.hit("1.2.3.4") for _ in range(4)] == [True, True, True, False]
    assert limiter.remaining("1.2.3.4") == 0


def test_clients_counted_separately(app):
    limiter = FixedWindowRateLimiter(cache, limit=1, window_seconds=60, clock=FakeTime(1000))
    assert limiter.hit("a") is True
    assert limiter.hit("b") is True
    assert limiter.hit("a") is False


def test_new_window_resets(app):
    now = FakeTime(1000)
    limiter = FixedWindowRateLimiter(cache, limit=1, window_seconds=60, clock=now)
    assert limiter.hit("a") is True
    assert limiter.hit("a") is False
    now.t = 1080
    assert limiter.hit("a") is True
    assert limiter.remaining("a") == 0


def test_counter_stored_on_cache_backend(app):
    limiter = FixedWindowRateLimiter(cache, limit=5, window_seconds=60, clock=FakeTime(1000))
    limiter.hit("9.9.9.9")
    limiter.hit("9.9.9.9")
    assert cache.cache.get("ratelimit:9.9.9.9:16") == 2
    assert limiter.remaining("9.9.9.9") == 3


def test_write_route_not_blocked_under_limit(client):
    resp = client.post("/api/orders", json={"reseller_id": "res-1", "items": [{"name": "Kaos", "quantity": 1, "price": 1000}]})
    assert resp.status_code == 201
    assert resp.get_json()["success"] is True


def test_api_returns_429(app, client):
    app.config["RATE_LIMIT_REQUESTS"] = 2
    app.extensions.pop("rate_limiter", None)
    codes = [client.delete("/api/orders/1").status_code for _ in range(3)]
    assert codes == [404, 404, 429]
    assert client.delete("/api/orders/1").get_json()["error_type"] == "rate_limited"
