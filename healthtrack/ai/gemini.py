# -*- coding: utf-8 -*-
"""Gemini — text / vision generation over the REST API."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

import httpx

from ..config import settings

log = logging.getLogger(__name__)


class GeminiConfigError(RuntimeError):
    """Raised when the Gemini API key is not configured."""


@dataclass(frozen=True)
class GeminiSettings:
    base_url: str
    model: str
    api_key: str
    timeout: float


def resolve_gemini_settings() -> GeminiSettings:
    api_key = (settings.gemini_api_key or "").strip()
    if not api_key:
        raise GeminiConfigError("GEMINI_API_KEY is not configured (API key missing)")
    return GeminiSettings(
        base_url=settings.gemini_base_url.rstrip("/"),
        model=settings.gemini_model,
        api_key=api_key,
        timeout=settings.gemini_timeout,
    )


def _outside_strings(text: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(index, char)`` for every character that is not inside a JSON string.

    The opening quote of a string is yielded, its body and closing quote are not.
    """
    in_str = False
    escaped = False
    for i, ch in enumerate(text):
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == "\"":
                in_str = False
            continue
        if ch == "\"":
            in_str = True
        yield i, ch


def _remove_trailing_commas(text: str) -> str:
    dropped = set()
    comma: Optional[int] = None
    for i, ch in _outside_strings(text):
        if ch in " \t\r\n":
            continue
        if comma is not None and ch in "}]":
            dropped.add(comma)
        comma = i if ch == "," else None
    return "".join(ch for i, ch in enumerate(text) if i not in dropped)


def _strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    cleaned = re.sub(r"^```(?:json)?\s*", "", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"\s*```$", "", cleaned)
    return cleaned


def _object_spans(text: str) -> List[str]:
    """Balanced top-level ``{...}`` spans of ``text``."""
    spans: List[str] = []
    depth = 0
    start = 0
    for i, ch in _outside_strings(text):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
            if depth == 0:
                spans.append(text[start : i + 1])
    return spans


def _sanitize_json_like(text: str) -> str:
    # Common model output issues: curly quotes, trailing commas and non-finite floats.
    cleaned = text
    cleaned = cleaned.replace("“", "\"").replace("”", "\"").replace("‘", "'").replace("’", "'")
    cleaned = _remove_trailing_commas(cleaned)
    cleaned = re.sub(r"\bNaN\b", "null", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"\b-?Infinity\b", "null", cleaned, flags=re.IGNORECASE)
    return cleaned


def extract_json_object(text: str) -> Dict[str, Any]:
    """Parse the first JSON object found in free-form model output.

    Raises ``ValueError`` when no object can be parsed.
    """
    cleaned = _strip_code_fences(text or "")
    last_error: Optional[json.JSONDecodeError] = None
    for candidate in _object_spans(cleaned):
        for attempt in (candidate, _sanitize_json_like(candidate)):
            try:
                parsed = json.loads(attempt)
            except json.JSONDecodeError as exc:
                last_error = exc
                continue
            if isinstance(parsed, dict):
                return parsed

    # Outermost braces as a last resort.
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        try:
            parsed = json.loads(_sanitize_json_like(cleaned[start : end + 1]))
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError as exc:
            last_error = exc

    if last_error is None:
        raise ValueError("Model output does not contain a JSON object")
    raise ValueError(f"Failed to parse model JSON: {last_error}") from last_error


def _extract_text(data: object) -> str:
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list):
        return ""
    out: List[str] = []
    for cand in candidates:
        if not isinstance(cand, dict):
            continue
        content = cand.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            continue
        for part in parts:
            if isinstance(part, dict) and isinstance(part.get("text"), str):
                out.append(part["text"])
        if out:
            break
    return "".join(out)


def _extract_error(data: object) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if isinstance(err, dict):
        message = err.get("message")
        status = err.get("status") or err.get("code")
        if isinstance(message, str) and message.strip():
            return f"Gemini error ({status}): {message.strip()}" if status else f"Gemini error: {message.strip()}"
    return None


def generate_content(prompt: str, image_base64: Optional[str] = None, image_mime: str = "image/jpeg") -> str:
    """Send one prompt (optionally with an inline image) and return the generated text.

    Raises ``GeminiConfigError`` without an API key and ``RuntimeError`` on
    transport errors, API errors or empty output.
    """
    cfg = resolve_gemini_settings()
    url = f"{cfg.base_url}/models/{cfg.model}:generateContent"

    parts: List[Dict[str, Any]] = [{"text": prompt}]
    if image_base64:
        parts.append({"inline_data": {"mime_type": image_mime, "data": image_base64}})
    payload = {"contents": [{"role": "user", "parts": parts}]}

    try:
        with httpx.Client(timeout=cfg.timeout) as client:
            resp = client.post(url, params={"key": cfg.api_key}, json=payload)
    except httpx.HTTPError as exc:
        raise RuntimeError(f"Gemini request failed: {exc}") from exc

    try:
        data = resp.json()
    except ValueError:
        data = None

    api_error = _extract_error(data)
    if resp.status_code >= 400:
        raise RuntimeError(api_error or f"Gemini HTTP {resp.status_code}")
    if api_error:
        raise RuntimeError(api_error)

    text = _extract_text(data)
    if not text.strip():
        raise RuntimeError("Gemini returned no candidates")
    return text


def generate_json(prompt: str, image_base64: Optional[str] = None, image_mime: str = "image/jpeg") -> Dict[str, Any]:
    return extract_json_object(generate_content(prompt, image_base64=image_base64, image_mime=image_mime))
