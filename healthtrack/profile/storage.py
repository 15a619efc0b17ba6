# -*- coding: utf-8 -*-
"""Profile — single-object per-user storage."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from .. import blobstore
from ..utils import utc_now_iso
from .models import ProfileCreateRequest, ProfileUpdateRequest, UserProfile

log = logging.getLogger(__name__)

ENTITY = "user_profile"


def get(user_id: str) -> Optional[UserProfile]:
    raw = blobstore.load_object(user_id, ENTITY)
    if raw is None:
        return None
    try:
        return UserProfile.model_validate(raw)
    except ValidationError as exc:
        log.warning("invalid profile for %s: %s", user_id, exc)
        return None


def _save(user_id: str, profile: UserProfile) -> None:
    blobstore.save_object(user_id, ENTITY, profile.model_dump(mode="json"))


def create(user_id: str, req: ProfileCreateRequest) -> UserProfile:
    """Create (or replace) the profile."""
    now = utc_now_iso()
    profile = UserProfile(user_id=user_id, created_at=now, updated_at=now, **req.model_dump())
    _save(user_id, profile)
    return profile


def update(user_id: str, req: ProfileUpdateRequest) -> Optional[UserProfile]:
    profile = get(user_id)
    if profile is None:
        return None
    patch = {k: v for k, v in req.model_dump(exclude_unset=True).items() if v is not None or k == "goal_weight"}
    updated = UserProfile.model_validate({**profile.model_dump(), **patch, "updated_at": utc_now_iso()})
    _save(user_id, updated)
    return updated


def delete(user_id: str) -> bool:
    return blobstore.remove_item(user_id, ENTITY)


def exists(user_id: str) -> bool:
    return get(user_id) is not None
