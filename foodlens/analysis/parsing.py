# -*- coding: utf-8 -*-
"""Analysis: pull a JSON object out of free-form model text.

Models wrap JSON in prose or code fences and sometimes emit several objects.
The scanner below walks the text once, tracks brace depth outside string
literals, and yields each balanced top-level ``{...}`` span. Braces inside
string values are therefore harmless.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterator

from .errors import ModelOutputError

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    cleaned = _FENCE_OPEN.sub("", cleaned)
    return _FENCE_CLOSE.sub("", cleaned)


def iter_object_spans(text: str) -> Iterator[str]:
    """Yield balanced top-level ``{...}`` spans, respecting string literals."""
    in_str = False
    escaped = False
    depth = 0
    start = -1

    for i, ch in enumerate(text):
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue

        if ch == '"':
            # Quotes only open strings inside an object; prose apostrophes/quotes are ignored.
            if depth > 0:
                in_str = True
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                yield text[start : i + 1]
                start = -1


def remove_trailing_commas(text: str) -> str:
    out: list[str] = []
    in_str = False
    escaped = False
    n = len(text)
    for i, ch in enumerate(text):
        if in_str:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == ",":
            j = i + 1
            while j < n and text[j] in " \t\r\n":
                j += 1
            if j < n and text[j] in "}]":
                continue
        out.append(ch)
    return "".join(out)


def sanitize_json_like(text: str) -> str:
    cleaned = text.replace("“", '"').replace("”", '"')
    cleaned = cleaned.replace("‘", "'").replace("’", "'")
    cleaned = remove_trailing_commas(cleaned)
    cleaned = re.sub(r"\bNaN\b", "null", cleaned)
    cleaned = re.sub(r"-?\bInfinity\b", "null", cleaned)
    return cleaned


def parse_model_json(content: str) -> Dict[str, Any]:
    """Return the first span in ``content`` that parses as a JSON object."""
    text = strip_code_fences(content or "")
    last_error: Exception | None = None
    found = False

    for span in iter_object_spans(text):
        found = True
        sanitized = sanitize_json_like(span)
        for attempt in (span, sanitized) if sanitized != span else (span,):
            try:
                parsed = json.loads(attempt)
            except ValueError as exc:
                last_error = exc
                continue
            if isinstance(parsed, dict):
                return parsed

    if not found:
        raise ModelOutputError("No valid JSON found in response")
    raise ModelOutputError(f"Failed to parse model JSON: {last_error}") from last_error
