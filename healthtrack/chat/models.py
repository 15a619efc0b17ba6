# -*- coding: utf-8 -*-
"""Chat — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

from ..ai.models import ChatContext

ChatRole = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    id: str
    user_id: str
    role: ChatRole
    content: str
    timestamp: str
    context: Optional[ChatContext] = None


class ChatHistoryResponse(BaseModel):
    messages: List[ChatMessage]
