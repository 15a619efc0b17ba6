# -*- coding: utf-8 -*-
"""Per-user key/value blob store.

Every logical entity of a user lives under a single string key
(``<entity>_<user_id>``) whose value is a JSON document. Writers always
replace the whole blob; the last write wins.

Blobs are kept as one file per key: ``<data_root>/users/<user_id>/<entity>.json``.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .config import settings

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _safe_segment(value: str) -> str:
    return value.replace("/", "_").replace("\\", "_").replace("..", "_") or "_"


def _user_root(user_id: str) -> Path:
    return settings.data_root / "users" / _safe_segment(user_id)


def _blob_path(user_id: str, entity: str) -> Path:
    return _user_root(user_id) / f"{_safe_segment(entity)}.json"


def storage_key(user_id: str, entity: str) -> str:
    return f"{entity}_{user_id}"


def get_item(user_id: str, entity: str) -> Optional[str]:
    fp = _blob_path(user_id, entity)
    if not fp.exists():
        return None
    return fp.read_text(encoding="utf-8")


def set_item(user_id: str, entity: str, value: str) -> None:
    fp = _blob_path(user_id, entity)
    fp.parent.mkdir(parents=True, exist_ok=True)
    fp.write_text(value, encoding="utf-8")


def remove_item(user_id: str, entity: str) -> bool:
    fp = _blob_path(user_id, entity)
    if not fp.exists():
        return False
    fp.unlink()
    return True


def clear(user_id: str) -> None:
    root = _user_root(user_id)
    if root.exists():
        shutil.rmtree(root)


def _load_json(user_id: str, entity: str) -> Any:
    raw = get_item(user_id, entity)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        log.warning("corrupt blob %s: %s", storage_key(user_id, entity), exc)
        return None


def load_list(user_id: str, entity: str) -> List[Dict[str, Any]]:
    data = _load_json(user_id, entity)
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict)]


def save_list(user_id: str, entity: str, items: List[Dict[str, Any]]) -> None:
    set_item(user_id, entity, json.dumps(items, ensure_ascii=False, indent=2))


def load_object(user_id: str, entity: str) -> Optional[Dict[str, Any]]:
    data = _load_json(user_id, entity)
    return data if isinstance(data, dict) else None


def save_object(user_id: str, entity: str, obj: Dict[str, Any]) -> None:
    set_item(user_id, entity, json.dumps(obj, ensure_ascii=False, indent=2))


def load_models(user_id: str, entity: str, model: Type[M]) -> List[M]:
    out: List[M] = []
    for raw in load_list(user_id, entity):
        try:
            out.append(model.model_validate(raw))
        except ValidationError as exc:
            log.warning("skipping invalid %s record in %s: %s", model.__name__, storage_key(user_id, entity), exc)
            continue
    return out


def _unreadable(user_id: str, entity: str, model: Type[BaseModel]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for raw in load_list(user_id, entity):
        try:
            model.model_validate(raw)
        except ValidationError:
            out.append(raw)
    return out


def save_models(user_id: str, entity: str, items: Iterable[BaseModel], model: Type[BaseModel]) -> None:
    """Replace the blob with ``items``.

    Stored records that ``load_models`` skipped as invalid are written back
    untouched, so a repository write never drops them.
    """
    kept = _unreadable(user_id, entity, model)
    save_list(user_id, entity, [item.model_dump(mode="json") for item in items] + kept)
