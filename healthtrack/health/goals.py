# -*- coding: utf-8 -*-
"""Health — long-term health goals with milestones.

A goal moves from ``start_value`` toward ``target_value``; the direction
(up or down) is fixed at creation. Progress updates complete the goal once
the target is reached and mark every milestone crossed by the update.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from .. import blobstore
from ..utils import day_str, drop_nulls, new_id, to_day, utc_now_iso
from .models import (
    HealthGoal,
    HealthGoalCreateRequest,
    HealthGoalUpdateRequest,
    Milestone,
    MilestoneRequest,
)

log = logging.getLogger(__name__)

ENTITY = "health_goals"
_REQUIRED = ("title", "target_value", "current_value", "target_date", "status")


def _load(user_id: str) -> List[HealthGoal]:
    return blobstore.load_models(user_id, ENTITY, HealthGoal)


def _save(user_id: str, goals: List[HealthGoal]) -> None:
    blobstore.save_models(user_id, ENTITY, goals, HealthGoal)


def _milestone(goal_id: str, req: MilestoneRequest) -> Milestone:
    return Milestone(
        id=new_id("milestone"),
        goal_id=goal_id,
        title=req.title,
        target_value=req.target_value,
        reward=req.reward,
    )


def is_increasing(goal: HealthGoal) -> bool:
    return goal.target_value >= goal.start_value


def create(user_id: str, req: HealthGoalCreateRequest) -> HealthGoal:
    goals = _load(user_id)
    goal_id = new_id("goal")
    now = utc_now_iso()
    goal = HealthGoal(
        id=goal_id,
        user_id=user_id,
        category=req.category,
        title=req.title,
        description=req.description,
        start_value=req.current_value,
        target_value=req.target_value,
        current_value=req.current_value,
        unit=req.unit,
        start_date=date.today().isoformat(),
        target_date=day_str(req.target_date),
        milestones=[_milestone(goal_id, m) for m in req.milestones],
        created_at=now,
        updated_at=now,
    )
    goals.append(goal)
    _save(user_id, goals)
    return goal


def get_all(user_id: str) -> List[HealthGoal]:
    """Newest first."""
    return sorted(_load(user_id), key=lambda g: g.created_at, reverse=True)


def get_by_id(user_id: str, goal_id: str) -> Optional[HealthGoal]:
    for goal in _load(user_id):
        if goal.id == goal_id:
            return goal
    return None


def get_by_status(user_id: str, status: str) -> List[HealthGoal]:
    return [g for g in get_all(user_id) if g.status == status]


def get_active(user_id: str) -> List[HealthGoal]:
    return get_by_status(user_id, "active")


def get_by_category(user_id: str, category: str) -> List[HealthGoal]:
    return [g for g in get_all(user_id) if g.category == category]


def _replace(user_id: str, goal_id: str, fn) -> Optional[HealthGoal]:
    goals = _load(user_id)
    for idx, goal in enumerate(goals):
        if goal.id == goal_id:
            updated = fn(goal)
            goals[idx] = updated
            _save(user_id, goals)
            return updated
    return None


def update(user_id: str, goal_id: str, req: HealthGoalUpdateRequest) -> Optional[HealthGoal]:
    patch = drop_nulls(req.model_dump(exclude_unset=True), _REQUIRED)
    if "target_date" in patch:
        patch["target_date"] = day_str(patch["target_date"])

    def apply(goal: HealthGoal) -> HealthGoal:
        changes = dict(patch, updated_at=utc_now_iso())
        if changes.get("status") == "completed" and goal.completed_at is None:
            changes["completed_at"] = changes["updated_at"]
        return goal.model_copy(update=changes)

    return _replace(user_id, goal_id, apply)


def update_progress(user_id: str, goal_id: str, current_value: float) -> Optional[HealthGoal]:
    """Record a new current value; complete the goal and milestones it reaches."""

    def apply(goal: HealthGoal) -> HealthGoal:
        now = utc_now_iso()
        previous = goal.current_value
        up = is_increasing(goal)
        changes = {"current_value": current_value, "updated_at": now}

        reached = current_value >= goal.target_value if up else current_value <= goal.target_value
        if reached and goal.status == "active":
            changes["status"] = "completed"
            changes["completed_at"] = now
            log.info("user %s completed goal %s", user_id, goal.id)

        milestones: List[Milestone] = []
        for m in goal.milestones:
            if not m.achieved:
                if up:
                    crossed = current_value >= m.target_value and previous < m.target_value
                else:
                    crossed = current_value <= m.target_value and previous > m.target_value
                if crossed:
                    m = m.model_copy(update={"achieved": True, "achieved_at": now})
            milestones.append(m)
        changes["milestones"] = milestones
        return goal.model_copy(update=changes)

    return _replace(user_id, goal_id, apply)


def add_milestone(user_id: str, goal_id: str, req: MilestoneRequest) -> Optional[HealthGoal]:
    def apply(goal: HealthGoal) -> HealthGoal:
        return goal.model_copy(
            update={"milestones": goal.milestones + [_milestone(goal.id, req)], "updated_at": utc_now_iso()}
        )

    return _replace(user_id, goal_id, apply)


def delete(user_id: str, goal_id: str) -> bool:
    goals = _load(user_id)
    kept = [g for g in goals if g.id != goal_id]
    if len(kept) == len(goals):
        return False
    _save(user_id, kept)
    return True


def progress_percentage(goal: HealthGoal) -> float:
    """Share of the way from start to target, clamped to 0-100."""
    total = goal.target_value - goal.start_value
    if total == 0:
        return 100.0
    done = (goal.current_value - goal.start_value) / total * 100
    return round(min(100.0, max(0.0, done)), 1)


def days_remaining(goal: HealthGoal, today: Optional[date] = None) -> int:
    """Negative once the target date has passed."""
    return (to_day(goal.target_date) - (today or date.today())).days


def get_achieved_milestones(user_id: str, goal_id: str) -> List[Milestone]:
    goal = get_by_id(user_id, goal_id)
    return [m for m in goal.milestones if m.achieved] if goal else []


def get_pending_milestones(user_id: str, goal_id: str) -> List[Milestone]:
    goal = get_by_id(user_id, goal_id)
    return [m for m in goal.milestones if not m.achieved] if goal else []
