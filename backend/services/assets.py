"""Short-lived on-disk artifacts for one composition job."""

from __future__ import annotations

import asyncio
import logging
import re
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_UNSAFE_NAME = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class AssetHandle:
    path: Path
    logical_name: str


class TempAssetStore:
    """
    Each handle gets a unique path under ``root`` (``<uuid>-<logical_name>``),
    so concurrent jobs never share a file and need no locking.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def reserve(self, logical_name: str) -> AssetHandle:
        """Allocate a unique path without writing to it (e.g. encoder output)."""
        self._root.mkdir(parents=True, exist_ok=True)
        safe = _UNSAFE_NAME.sub("_", logical_name).strip("._") or "asset"
        return AssetHandle(path=self._root / f"{uuid.uuid4().hex}-{safe}", logical_name=logical_name)

    def acquire(self, data: bytes, logical_name: str) -> AssetHandle:
        handle = self.reserve(logical_name)
        handle.path.write_bytes(data)
        logger.debug("[assets] acquired %s (%d bytes)", handle.path.name, len(data))
        return handle

    def release(self, handle: AssetHandle) -> None:
        """Delete the handle's file; releasing twice is a no-op."""
        handle.path.unlink(missing_ok=True)
        logger.debug("[assets] released %s", handle.path.name)

    @asynccontextmanager
    async def scoped(self, data: bytes, logical_name: str) -> AsyncIterator[AssetHandle]:
        handle = await asyncio.to_thread(self.acquire, data, logical_name)
        try:
            yield handle
        finally:
            self.release(handle)

    @asynccontextmanager
    async def scoped_output(self, logical_name: str) -> AsyncIterator[AssetHandle]:
        handle = self.reserve(logical_name)
        try:
            yield handle
        finally:
            self.release(handle)
