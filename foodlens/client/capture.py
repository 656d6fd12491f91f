# -*- coding: utf-8 -*-
"""Client: exclusive capture session producing image data URIs."""

from __future__ import annotations

import base64
import logging
import mimetypes
from pathlib import Path
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)

DEFAULT_MIME = "image/jpeg"


class CaptureError(RuntimeError):
    pass


def guess_image_mime(path: Path) -> str:
    mime, _ = mimetypes.guess_type(path.name)
    if mime and mime.startswith("image/"):
        return mime
    return DEFAULT_MIME


def to_data_uri(mime: str, image_bytes: bytes) -> str:
    b64 = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime};base64,{b64}"


class CaptureSession:
    """Holds at most one open source stream.

    ``start`` tears down any previous stream first; ``stop`` is idempotent and
    the context-manager exit always releases the handle.
    """

    def __init__(self) -> None:
        self._stream: Optional[BinaryIO] = None
        self._mime: str = DEFAULT_MIME
        self._source: Optional[Path] = None

    @property
    def active(self) -> bool:
        return self._stream is not None

    @property
    def source(self) -> Optional[Path]:
        return self._source

    def start(self, source: Path | str) -> None:
        self.stop()
        path = Path(source).expanduser()
        try:
            self._stream = path.open("rb")
        except OSError as exc:
            raise CaptureError(f"cannot open capture source {path}: {exc}") from exc
        self._source = path
        self._mime = guess_image_mime(path)
        logger.debug("capture stream started: %s", path)

    def capture(self) -> str:
        if self._stream is None:
            raise CaptureError("no active capture stream")
        self._stream.seek(0)
        data = self._stream.read()
        if not data:
            raise CaptureError(f"capture source {self._source} is empty")
        return to_data_uri(self._mime, data)

    def stop(self) -> None:
        if self._stream is None:
            return
        try:
            self._stream.close()
        finally:
            logger.debug("capture stream released: %s", self._source)
            self._stream = None
            self._source = None

    def __enter__(self) -> "CaptureSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
