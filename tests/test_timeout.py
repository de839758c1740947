"""Unit tests for app.core.timeout.with_timeout: deadline, cancellation and default duration."""

import asyncio
import unittest
from unittest.mock import MagicMock, patch

from app.core.errors import RequestTimeoutError
from app.core.timeout import with_timeout


class TestWithTimeout(unittest.TestCase):
    def test_returns_result_when_fast(self) -> None:
        async def fast() -> str:
            await asyncio.sleep(0)
            return "rows"

        self.assertEqual(asyncio.run(with_timeout(fast(), timeout_ms=1000)), "rows")

    def test_slow_operation_raises_408(self) -> None:
        async def slow() -> str:
            await asyncio.sleep(5)
            return "too late"

        with self.assertRaises(RequestTimeoutError) as ctx:
            asyncio.run(with_timeout(slow(), timeout_ms=20))
        self.assertEqual(ctx.exception.status_code, 408)
        self.assertEqual(ctx.exception.message, "Request took too long")

    def test_slow_operation_is_cancelled(self) -> None:
        state: dict[str, bool] = {"cancelled": False, "finished": False}

        async def slow() -> None:
            try:
                await asyncio.sleep(5)
                state["finished"] = True
            except asyncio.CancelledError:
                state["cancelled"] = True
                raise

        async def run() -> None:
            with self.assertRaises(RequestTimeoutError):
                await with_timeout(slow(), timeout_ms=20)
            # Give any abandoned work a chance to run; none should exist.
            await asyncio.sleep(0.05)

        asyncio.run(run())
        self.assertTrue(state["cancelled"])
        self.assertFalse(state["finished"])

    def test_operation_errors_propagate(self) -> None:
        async def broken() -> None:
            raise ValueError("boom")

        with self.assertRaises(ValueError):
            asyncio.run(with_timeout(broken(), timeout_ms=1000))

    @patch("app.core.timeout.get_settings")
    def test_default_duration_from_settings(self, mock_get_settings: MagicMock) -> None:
        settings = MagicMock()
        settings.DB_TIMEOUT_MS = 20
        mock_get_settings.return_value = settings

        async def slow() -> None:
            await asyncio.sleep(5)

        with self.assertRaises(RequestTimeoutError):
            asyncio.run(with_timeout(slow()))
        mock_get_settings.assert_called_once()

    def test_default_is_ten_seconds(self) -> None:
        from app.core.config import Settings

        self.assertEqual(Settings.model_fields["DB_TIMEOUT_MS"].default, 10_000)


if __name__ == "__main__":
    unittest.main()
