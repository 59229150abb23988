"""
Tests for the per-user request rate against thread polling.
"""
from types import SimpleNamespace
from django.conf import settings
from django.core.cache.backends.locmem import LocMemCache
from django.test import SimpleTestCase
from rest_framework.throttling import UserRateThrottle

POLL_INTERVAL_SECONDS = 5
# thread fetch, mark read, conversation refresh
REQUESTS_PER_POLL = 3


class UserRateThrottleTestCase(SimpleTestCase):

    def setUp(self):
        self.cache = LocMemCache('throttle-tests', {})
        self.request = SimpleNamespace(user=SimpleNamespace(is_authenticated=True, pk=1))
        self.now = 0.0

    def tearDown(self):
        self.cache.clear()

    def make_throttle(self):
        throttle = UserRateThrottle()
        throttle.cache = self.cache
        throttle.timer = lambda: self.now
        return throttle

    def test_rate_covers_polling(self):
        rate = settings.REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['user']
        num_requests, duration = UserRateThrottle().parse_rate(rate)

        self.assertGreaterEqual(
            num_requests / duration,
            REQUESTS_PER_POLL / POLL_INTERVAL_SECONDS,
        )

    def test_hour_of_polling_is_not_throttled(self):
        polls_per_hour = 3600 // POLL_INTERVAL_SECONDS

        for poll in range(polls_per_hour):
            self.now = float(poll * POLL_INTERVAL_SECONDS)
            for _ in range(REQUESTS_PER_POLL):
                allowed = self.make_throttle().allow_request(self.request, None)
                self.assertTrue(allowed, f"throttled at poll {poll}")
