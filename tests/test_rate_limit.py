"""Unit tests for app.core.rate_limit: the sliding window and client keying."""

import unittest
from unittest.mock import MagicMock, patch

from app.core.config import settings
from app.core.rate_limit import SlidingWindowLimiter, client_ip


class TestSlidingWindowLimiter(unittest.TestCase):
    def test_allows_up_to_max_then_blocks(self) -> None:
        limiter = SlidingWindowLimiter(max_requests=5, window_seconds=300)
        results = [limiter.allow("10.0.0.1", now=100.0 + i) for i in range(6)]
        self.assertEqual(results, [True, True, True, True, True, False])

    def test_window_slides(self) -> None:
        limiter = SlidingWindowLimiter(max_requests=2, window_seconds=10)
        self.assertTrue(limiter.allow("ip", now=0.0))
        self.assertTrue(limiter.allow("ip", now=1.0))
        self.assertFalse(limiter.allow("ip", now=5.0))
        self.assertTrue(limiter.allow("ip", now=10.5))

    def test_keys_are_independent(self) -> None:
        limiter = SlidingWindowLimiter(max_requests=1, window_seconds=60)
        self.assertTrue(limiter.allow("a", now=0.0))
        self.assertTrue(limiter.allow("b", now=0.0))
        self.assertFalse(limiter.allow("a", now=1.0))

    def test_reset(self) -> None:
        limiter = SlidingWindowLimiter(max_requests=1, window_seconds=60)
        limiter.allow("a", now=0.0)
        limiter.reset()
        self.assertTrue(limiter.allow("a", now=1.0))

    def test_expired_keys_are_dropped(self) -> None:
        limiter = SlidingWindowLimiter(max_requests=5, window_seconds=60)
        for i in range(10_000):
            limiter.allow(f"10.0.{i // 256}.{i % 256}", now=0.0)
        self.assertEqual(len(limiter), 10_000)

        self.assertTrue(limiter.allow("192.168.1.1", now=61.0))
        self.assertEqual(len(limiter), 1)

    def test_blocked_key_is_kept(self) -> None:
        limiter = SlidingWindowLimiter(max_requests=1, window_seconds=60)
        limiter.allow("a", now=0.0)
        self.assertFalse(limiter.allow("a", now=30.0))
        self.assertEqual(len(limiter), 1)
        self.assertFalse(limiter.allow("a", now=59.0))


def _request(host: str, forwarded: str | None = None) -> MagicMock:
    request = MagicMock()
    request.client.host = host
    request.headers = {"x-forwarded-for": forwarded} if forwarded is not None else {}
    return request


class TestClientIp(unittest.TestCase):
    def test_forwarded_header_ignored_by_default(self) -> None:
        with patch.object(settings, "TRUST_FORWARDED_FOR", False):
            self.assertEqual(client_ip(_request("10.0.0.7", "203.0.113.9")), "10.0.0.7")

    def test_forwarded_header_used_behind_trusted_proxy(self) -> None:
        with patch.object(settings, "TRUST_FORWARDED_FOR", True):
            ip = client_ip(_request("10.0.0.7", "203.0.113.9, 10.0.0.7"))
        self.assertEqual(ip, "203.0.113.9")

    def test_blank_forwarded_header_falls_back_to_peer(self) -> None:
        with patch.object(settings, "TRUST_FORWARDED_FOR", True):
            self.assertEqual(client_ip(_request("10.0.0.7", " ")), "10.0.0.7")

    def test_missing_client(self) -> None:
        request = _request("unused")
        request.client = None
        with patch.object(settings, "TRUST_FORWARDED_FOR", False):
            self.assertEqual(client_ip(request), "unknown")


if __name__ == "__main__":
    unittest.main()
