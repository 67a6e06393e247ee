import unittest
from unittest.mock import Mock

from ai_chat.cache import ReadThroughCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ReadThroughCacheTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.cache: ReadThroughCache[str] = ReadThroughCache(
            "models", ttl_seconds=300, clock=self.clock
        )

    def test_first_read_calls_store(self) -> None:
        refresh = Mock(return_value="S1")

        self.assertEqual(self.cache.get_or_refresh(refresh), "S1")
        refresh.assert_called_once_with()

    def test_fresh_entry_is_served_without_store_call(self) -> None:
        self.cache.get_or_refresh(Mock(return_value="S1"))
        self.clock.advance(299)
        refresh = Mock(return_value="S2")

        self.assertEqual(self.cache.get_or_refresh(refresh), "S1")
        refresh.assert_not_called()

    def test_entry_expires_at_ttl(self) -> None:
        self.cache.get_or_refresh(Mock(return_value="S1"))
        self.clock.advance(300)

        self.assertEqual(self.cache.get_or_refresh(Mock(return_value="S2")), "S2")

    def test_refreshed_entry_restarts_ttl(self) -> None:
        self.cache.get_or_refresh(Mock(return_value="S1"))
        self.clock.advance(301)
        self.cache.get_or_refresh(Mock(return_value="S2"))
        self.clock.advance(100)

        self.assertEqual(self.cache.get_or_refresh(Mock(return_value="S3")), "S2")

    def test_invalidate_forces_refresh(self) -> None:
        self.cache.get_or_refresh(Mock(return_value="S1"))

        with self.assertLogs("ai_chat.cache", level="INFO"):
            self.cache.invalidate()

        self.assertEqual(self.cache.get_or_refresh(Mock(return_value="S2")), "S2")

    def test_failed_refresh_propagates_and_keeps_cache_empty(self) -> None:
        with self.assertRaises(RuntimeError):
            self.cache.get_or_refresh(Mock(side_effect=RuntimeError("store down")))

        self.assertEqual(self.cache.get_or_refresh(Mock(return_value="S1")), "S1")

    def test_instances_are_independent(self) -> None:
        other: ReadThroughCache[str] = ReadThroughCache("characters", clock=self.clock)
        self.cache.get_or_refresh(Mock(return_value="models"))

        self.assertEqual(other.get_or_refresh(Mock(return_value="characters")), "characters")
        self.assertEqual(other.name, "characters")


if __name__ == "__main__":
    unittest.main()
