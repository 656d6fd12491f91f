# -*- coding: utf-8 -*-
"""Analysis: Gemini ``generateContent`` call over plain REST."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from .errors import API_KEY_ENV, MissingApiKeyError, ModelCallError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeminiSettings:
    api_key: Optional[str]
    base_url: str
    model: str
    timeout: float


def resolve_gemini_settings() -> GeminiSettings:
    """Read credentials at call time so a missing key is reported per request, not at startup."""
    api_key = (os.environ.get(API_KEY_ENV) or "").strip() or None
    base_url = (os.environ.get("FOODLENS_GEMINI_BASE_URL") or settings.gemini_base_url).rstrip("/")
    model = (os.environ.get("FOODLENS_GEMINI_MODEL") or settings.gemini_model).strip()
    timeout = float(os.environ.get("FOODLENS_GEMINI_TIMEOUT") or settings.gemini_timeout)
    return GeminiSettings(api_key=api_key, base_url=base_url, model=model, timeout=timeout)


def _text_part(text: str) -> Dict[str, Any]:
    return {"text": text}


def _image_part(mime: str, data_b64: str) -> Dict[str, Any]:
    return {"inline_data": {"mime_type": mime, "data": data_b64}}


def extract_text(data: object) -> str:
    """Concatenate the text parts of the first candidate."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    if not isinstance(first, dict):
        return ""
    content = first.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    out: List[str] = []
    for part in parts:
        if isinstance(part, dict):
            text = part.get("text")
            if isinstance(text, str):
                out.append(text)
    return "".join(out)


def extract_error(data: object) -> Optional[str]:
    """Human-readable message from a Gemini error body, or None."""
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if isinstance(err, dict):
        message = err.get("message")
        if not isinstance(message, str) or not message.strip():
            return None
        status = err.get("status")
        code = err.get("code")
        prefix = status if isinstance(status, str) and status else "GeminiError"
        if isinstance(code, int):
            prefix = f"{prefix} ({code})"
        return f"{prefix}: {message.strip()}"
    if isinstance(err, str) and err.strip():
        return err.strip()
    return None


def _blocked_reason(data: object) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    feedback = data.get("promptFeedback")
    if isinstance(feedback, dict):
        reason = feedback.get("blockReason")
        if isinstance(reason, str) and reason:
            return reason
    return None


class GeminiClient:
    """Minimal synchronous Gemini client; one request per call, no retries."""

    def __init__(
        self,
        config: Optional[GeminiSettings] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport

    @property
    def config(self) -> GeminiSettings:
        return self._config or resolve_gemini_settings()

    def generate(self, prompt: str, *, image_b64: Optional[str] = None, image_mime: str = "image/jpeg") -> str:
        cfg = self.config
        if not cfg.api_key:
            logger.error("%s not found in environment variables", API_KEY_ENV)
            raise MissingApiKeyError()

        parts: List[Dict[str, Any]] = [_text_part(prompt)]
        if image_b64 is not None:
            parts.append(_image_part(image_mime, image_b64))
        payload = {"contents": [{"role": "user", "parts": parts}]}

        url = f"{cfg.base_url}/models/{cfg.model}:generateContent"
        headers = {"Content-Type": "application/json", "x-goog-api-key": cfg.api_key}

        try:
            with httpx.Client(timeout=cfg.timeout, transport=self._transport) as client:
                resp = client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            raise ModelCallError(f"Gemini request failed: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        message = extract_error(data)
        if message:
            raise ModelCallError(message)
        if resp.status_code >= 400:
            snippet = (resp.text or "").replace("\n", " ").strip()[:200]
            raise ModelCallError(f"Gemini API returned HTTP {resp.status_code}: {snippet}")
        if data is None:
            raise ModelCallError("Gemini API returned a non-JSON response")

        text = extract_text(data)
        if not text:
            reason = _blocked_reason(data)
            if reason:
                raise ModelCallError(f"Gemini blocked the prompt: {reason}")
        return text


def get_gemini_client() -> GeminiClient:
    """FastAPI dependency; overridden in tests."""
    return GeminiClient()
