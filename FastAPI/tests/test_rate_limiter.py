from app.core.rate_limiter import FixedWindowLimiter


class _Clock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def test_rate_limiter_allows_then_blocks_then_recovers():
    clock = _Clock()
    limiter = FixedWindowLimiter(clock=clock)
    key = "ip:/auth/sign-in"

    ok1, retry1 = limiter.hit(key, limit=2, window_seconds=60)
    ok2, retry2 = limiter.hit(key, limit=2, window_seconds=60)
    clock.now = 15
    ok3, retry3 = limiter.hit(key, limit=2, window_seconds=60)

    assert ok1 is True and retry1 == 0
    assert ok2 is True and retry2 == 0
    assert ok3 is False
    assert retry3 == 45

    clock.now = 61
    ok4, retry4 = limiter.hit(key, limit=2, window_seconds=60)
    assert ok4 is True
    assert retry4 == 0


def test_rate_limiter_keys_are_independent_and_reset_clears():
    limiter = FixedWindowLimiter(clock=_Clock())
    assert limiter.hit("a", limit=1)[0] is True
    assert limiter.hit("a", limit=1)[0] is False
    assert limiter.hit("b", limit=1)[0] is True
    limiter.reset()
    assert limiter.hit("a", limit=1)[0] is True
