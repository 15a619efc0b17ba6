# -*- coding: utf-8 -*-

from __future__ import annotations

import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest import mock

from healthtrack.ai.models import ChatContext
from healthtrack.chat import storage as chat_store
from healthtrack.config import settings

USER = "alice"
NOW = datetime(2024, 3, 13, 12, 0, tzinfo=timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat(timespec="seconds").replace("+00:00", "Z")


class TestChatStorage(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory(prefix="healthtrack-test-")
        self.addCleanup(self._tmp.cleanup)
        patcher = mock.patch.object(settings, "data_root", Path(self._tmp.name))
        patcher.start()
        self.addCleanup(patcher.stop)

    def _at(self, dt: datetime, role: str, content: str):
        with mock.patch.object(chat_store, "utc_now_iso", return_value=_iso(dt)):
            return chat_store.create(USER, role, content)

    def test_recent_is_oldest_first(self) -> None:
        self._at(NOW - timedelta(minutes=1), "assistant", "second")
        self._at(NOW - timedelta(minutes=2), "user", "first")
        self._at(NOW, "user", "third")

        self.assertEqual([m.content for m in chat_store.get_recent(USER)], ["first", "second", "third"])
        self.assertEqual([m.content for m in chat_store.get_history(USER, limit=2)], ["second", "third"])
        self.assertEqual(chat_store.get_recent(USER, limit=0), [])

    def test_context_is_stored(self) -> None:
        chat_store.create(USER, "user", "hello", context=ChatContext(goal_calories=2000))
        [message] = chat_store.get_all(USER)
        self.assertTrue(message.id.startswith("msg"))
        self.assertEqual(message.context.goal_calories, 2000)

    def test_delete_older_than(self) -> None:
        self._at(NOW - timedelta(days=40), "user", "old")
        self._at(NOW - timedelta(days=31), "assistant", "older reply")
        self._at(NOW - timedelta(days=2), "user", "recent")

        removed = chat_store.delete_older_than(USER, 30, now=NOW)

        self.assertEqual(removed, 2)
        self.assertEqual([m.content for m in chat_store.get_all(USER)], ["recent"])

    def test_today_message_count_counts_user_messages(self) -> None:
        chat_store.create(USER, "user", "one")
        chat_store.create(USER, "assistant", "reply")
        chat_store.create(USER, "user", "two")
        self._at(datetime.now(timezone.utc) - timedelta(days=3), "user", "old")

        self.assertEqual(chat_store.get_today_message_count(USER), 2)
        self.assertEqual(chat_store.get_today_message_count("bob"), 0)

    def test_clear_all(self) -> None:
        chat_store.create(USER, "user", "hello")
        chat_store.clear_all(USER)
        self.assertEqual(chat_store.get_all(USER), [])


if __name__ == "__main__":
    unittest.main()
