# -*- coding: utf-8 -*-
"""Auth — current-user resolution for FastAPI handlers.

Data is namespaced per user id. The id is taken from the ``X-User-Id`` header
and falls back to the configured default user.
"""

from __future__ import annotations

import re
from typing import Any, Dict

from fastapi import Depends, HTTPException, Request

from ..config import settings

USER_HEADER = "x-user-id"

_USER_ID_RE = re.compile(r"^[A-Za-z0-9_.@-]{1,128}$")


def get_user_id_from_request(request: Request) -> str:
    raw = request.headers.get(USER_HEADER) or ""
    return raw.strip() or settings.default_user_id


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    # Reuse the user cached by an earlier dependency on the same request.
    user = getattr(request.state, "user", None)
    if user:
        return user

    user_id = get_user_id_from_request(request)
    if not _USER_ID_RE.match(user_id) or user_id.strip(".") == "":
        raise HTTPException(status_code=400, detail="Invalid user id")

    user = {"id": user_id}
    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
