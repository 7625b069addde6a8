import pytest

from orderdesk.utils.storage import LocalImageStorage

pytestmark = pytest.mark.anyio


async def test_local_save_and_delete(tmp_path):
    storage = LocalImageStorage(str(tmp_path / "uploads"), "uploads/")

    url = await storage.save("abc.png", b"img", "image/png")

    assert url == "/uploads/abc.png"
    assert (tmp_path / "uploads" / "abc.png").read_bytes() == b"img"

    await storage.delete(url)
    assert not (tmp_path / "uploads" / "abc.png").exists()


async def test_local_delete_missing_file_is_quiet(tmp_path):
    storage = LocalImageStorage(str(tmp_path))

    await storage.delete("/uploads/never-saved.png")
    await storage.delete(None)
