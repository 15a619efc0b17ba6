# -*- coding: utf-8 -*-
"""Chat — per-user message storage."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from .. import blobstore
from ..ai.models import ChatContext
from ..utils import new_id, parse_timestamp, utc_now_iso
from .models import ChatMessage, ChatRole

ENTITY = "chat_messages"


def _load(user_id: str) -> List[ChatMessage]:
    return blobstore.load_models(user_id, ENTITY, ChatMessage)


def _save(user_id: str, messages: List[ChatMessage]) -> None:
    blobstore.save_models(user_id, ENTITY, messages, ChatMessage)


def _oldest_first(messages: List[ChatMessage]) -> List[ChatMessage]:
    # Stable sort keeps insertion order for equal timestamps.
    return sorted(messages, key=lambda m: m.timestamp)


def create(user_id: str, role: ChatRole, content: str, context: Optional[ChatContext] = None) -> ChatMessage:
    messages = _load(user_id)
    message = ChatMessage(
        id=new_id("msg"),
        user_id=user_id,
        role=role,
        content=content,
        timestamp=utc_now_iso(),
        context=context,
    )
    messages.append(message)
    _save(user_id, messages)
    return message


def get_all(user_id: str) -> List[ChatMessage]:
    return _load(user_id)


def get_recent(user_id: str, limit: int = 50) -> List[ChatMessage]:
    """The ``limit`` newest messages, returned oldest first for display."""
    ordered = _oldest_first(_load(user_id))
    return ordered[-limit:] if limit > 0 else []


def get_history(user_id: str, limit: int = 10) -> List[ChatMessage]:
    ordered = _oldest_first(_load(user_id))
    return ordered[-limit:] if limit > 0 else []


def clear_all(user_id: str) -> None:
    blobstore.remove_item(user_id, ENTITY)


def delete_older_than(user_id: str, days: int, now: Optional[datetime] = None) -> int:
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=days)
    messages = _load(user_id)
    kept = []
    for m in messages:
        ts = parse_timestamp(m.timestamp)
        if ts is None or ts >= cutoff:
            kept.append(m)
    _save(user_id, kept)
    return len(messages) - len(kept)


def get_today_message_count(user_id: str, today: Optional[date] = None) -> int:
    """Number of user-role messages sent today (local calendar day)."""
    target = today or date.today()
    count = 0
    for m in _load(user_id):
        ts = parse_timestamp(m.timestamp)
        if m.role == "user" and ts is not None and ts.astimezone().date() == target:
            count += 1
    return count
