"""Tests for the login throttle."""

import asyncio
from datetime import timedelta

import pytest

from modules.throttle import InMemoryThrottleStore, LoginThrottle, LoginThrottledError

KEY = LoginThrottle.key_for("10.0.0.1")


@pytest.fixture
def store():
    return InMemoryThrottleStore()


@pytest.fixture
def throttle(store, clock):
    return LoginThrottle(store, max_attempts=5, window=timedelta(minutes=15), clock=clock)


async def _fail(throttle, times):
    for _ in range(times):
        await throttle.check(KEY)
        await throttle.record_failure(KEY)


class TestKey:
    def test_key_from_ip(self):
        assert LoginThrottle.key_for("10.0.0.1") == "login:10.0.0.1"

    def test_key_without_ip(self):
        assert LoginThrottle.key_for(None) == "login:unknown"


class TestLockout:
    @pytest.mark.asyncio
    async def test_allows_attempts_below_threshold(self, throttle):
        await _fail(throttle, 4)
        await throttle.check(KEY)

    @pytest.mark.asyncio
    async def test_locks_out_at_threshold(self, throttle):
        await _fail(throttle, 5)

        with pytest.raises(LoginThrottledError) as exc_info:
            await throttle.check(KEY)

        error = exc_info.value
        assert error.code == "RATE_LIMIT_EXCEEDED"
        assert error.message == "Too many failed login attempts. Please try again after 15 minutes."
        assert error.retry_after == 15 * 60

    @pytest.mark.asyncio
    async def test_retry_after_counts_down(self, throttle, clock):
        await _fail(throttle, 5)
        clock.advance(minutes=10, seconds=30)

        with pytest.raises(LoginThrottledError) as exc_info:
            await throttle.check(KEY)
        assert exc_info.value.retry_after == 270

    @pytest.mark.asyncio
    async def test_lockout_ends_with_window(self, throttle, clock):
        await _fail(throttle, 5)
        clock.advance(minutes=15)

        await throttle.check(KEY)

    @pytest.mark.asyncio
    async def test_failure_after_window_starts_fresh(self, throttle, store, clock):
        await _fail(throttle, 5)
        clock.advance(minutes=16)

        entry = await throttle.record_failure(KEY)

        assert entry.attempts == 1
        assert entry.window_start == clock.now()
        await throttle.check(KEY)

    @pytest.mark.asyncio
    async def test_window_is_fixed_from_first_failure(self, throttle, clock):
        """Failures late in a window do not extend it."""
        await _fail(throttle, 1)
        clock.advance(minutes=14)
        await _fail(throttle, 4)

        with pytest.raises(LoginThrottledError):
            await throttle.check(KEY)

        clock.advance(minutes=1)
        await throttle.check(KEY)

    @pytest.mark.asyncio
    async def test_success_clears_counter(self, throttle, store):
        await _fail(throttle, 4)

        await throttle.record_success(KEY)

        assert await store.get(KEY) is None
        await _fail(throttle, 4)
        await throttle.check(KEY)

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, throttle):
        await _fail(throttle, 5)

        await throttle.check(LoginThrottle.key_for("10.0.0.2"))


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_failures_are_all_counted(self, throttle, store):
        await asyncio.gather(*(throttle.record_failure(KEY) for _ in range(50)))

        entry = await store.get(KEY)
        assert entry.attempts == 50

    @pytest.mark.asyncio
    async def test_concurrent_failures_from_threads(self, store, clock):
        """The store lock also holds across threads."""
        window = timedelta(minutes=15)

        def fail_many():
            for _ in range(100):
                asyncio.run(store.record_failure(KEY, clock.now(), window))

        await asyncio.gather(*(asyncio.to_thread(fail_many) for _ in range(4)))

        assert (await store.get(KEY)).attempts == 400


class TestPurge:
    @pytest.mark.asyncio
    async def test_stale_entries_are_purged(self, throttle, store, clock):
        await throttle.record_failure(KEY)
        await throttle.record_failure(LoginThrottle.key_for("10.0.0.2"))
        assert len(store) == 2

        clock.advance(minutes=31)
        await throttle.check(LoginThrottle.key_for("10.0.0.3"))

        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_recent_entries_survive_purge(self, throttle, store, clock):
        await throttle.record_failure(KEY)
        clock.advance(minutes=20)
        await throttle.record_failure(LoginThrottle.key_for("10.0.0.2"))

        clock.advance(minutes=11)
        await throttle.check(KEY)

        assert await store.get(KEY) is None
        assert await store.get(LoginThrottle.key_for("10.0.0.2")) is not None
