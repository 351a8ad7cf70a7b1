from __future__ import annotations

import asyncio

import pytest

from services.assets import TempAssetStore


def test_acquire_writes_unique_paths(tmp_path) -> None:
    store = TempAssetStore(tmp_path / "assets")
    a = store.acquire(b"one", "image.jpg")
    b = store.acquire(b"two", "image.jpg")
    assert a.path != b.path
    assert a.path.read_bytes() == b"one"
    assert b.path.read_bytes() == b"two"
    assert a.path.name.endswith("-image.jpg")


def test_release_is_idempotent(tmp_path) -> None:
    store = TempAssetStore(tmp_path)
    handle = store.acquire(b"data", "audio.webm")
    store.release(handle)
    assert not handle.path.exists()
    store.release(handle)


def test_logical_name_cannot_escape_root(tmp_path) -> None:
    store = TempAssetStore(tmp_path / "root")
    handle = store.acquire(b"x", "../../etc/passwd")
    assert handle.path.parent == tmp_path / "root"


@pytest.mark.anyio
async def test_scoped_releases_on_error(tmp_path) -> None:
    store = TempAssetStore(tmp_path)
    with pytest.raises(RuntimeError):
        async with store.scoped(b"data", "image.png") as handle:
            assert handle.path.exists()
            raise RuntimeError("boom")
    assert list(tmp_path.iterdir()) == []


@pytest.mark.anyio
async def test_concurrent_scopes_do_not_collide(tmp_path) -> None:
    store = TempAssetStore(tmp_path)

    async def job(i: int) -> bytes:
        payload = f"payload-{i}".encode()
        async with store.scoped(payload, "image.jpg") as handle:
            await asyncio.sleep(0)
            return handle.path.read_bytes()

    results = await asyncio.gather(*(job(i) for i in range(20)))
    assert results == [f"payload-{i}".encode() for i in range(20)]
    assert list(tmp_path.iterdir()) == []
