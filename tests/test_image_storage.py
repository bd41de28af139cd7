"""Upload storage, public URL formatting and staged uploads."""

import io

import pytest
from starlette.datastructures import Headers, UploadFile

from app.errors import ValidationError
from app.services.image_storage import (
    CAROUSEL_IMAGE_DIR,
    has_file,
    public_image_url,
    stored_image_path,
)
from tests.conftest import make_upload, stored_files


@pytest.mark.parametrize(
    ("stored", "public"),
    [
        ("carousel_images/a.png", "/uploads/carousel_images/a.png"),
        ("/uploads/carousel_images/a.png", "/uploads/carousel_images/a.png"),
        ("uploads\\hero_images\\b.jpg", "/uploads/hero_images/b.jpg"),
        ("https://cdn.example.com/c.png", "https://cdn.example.com/c.png"),
        (None, None),
        ("", None),
    ],
)
def test_public_image_url(stored, public):
    assert public_image_url(stored) == public


def test_stored_image_path_inverts_public_url():
    assert stored_image_path("/uploads/presentation_images/x.png") == "presentation_images/x.png"
    assert stored_image_path("presentation_images/x.png") == "presentation_images/x.png"
    assert stored_image_path("http://example.org/x.png") == "http://example.org/x.png"


def test_has_file_ignores_empty_parts():
    assert not has_file(None)
    assert not has_file(make_upload(filename=""))
    assert has_file(make_upload())


async def test_save_writes_under_folder(storage):
    path = await storage.save(make_upload("Group Photo!.PNG"), CAROUSEL_IMAGE_DIR)

    assert path.startswith("carousel_images/Group-Photo-")
    assert path.endswith(".png")
    assert storage.resolve(path).read_bytes().startswith(b"\x89PNG")


async def test_save_gives_distinct_names(storage):
    first = await storage.save(make_upload(), CAROUSEL_IMAGE_DIR)
    second = await storage.save(make_upload(), CAROUSEL_IMAGE_DIR)

    assert first != second
    assert len(stored_files(storage)) == 2


async def test_save_rejects_non_images(storage):
    with pytest.raises(ValidationError, match="Only image files"):
        await storage.save(make_upload("a.pdf", b"%PDF", "application/pdf"), CAROUSEL_IMAGE_DIR)
    assert stored_files(storage) == []


def test_resolve_refuses_escaping_paths(storage):
    with pytest.raises(ValidationError):
        storage.resolve("../../etc/passwd")


async def test_delete_is_quiet_for_missing_and_external(storage):
    assert storage.delete(None) is False
    assert storage.delete("https://example.org/x.png") is False
    assert storage.delete("carousel_images/missing.png") is False

    path = await storage.save(make_upload(), CAROUSEL_IMAGE_DIR)
    assert storage.delete(f"/uploads/{path}") is True
    assert stored_files(storage) == []


async def test_staged_upload_is_removed_unless_committed(storage):
    with pytest.raises(RuntimeError):
        async with storage.stage(make_upload(), CAROUSEL_IMAGE_DIR) as staged:
            assert staged.path in stored_files(storage)
            raise RuntimeError("database write failed")

    assert stored_files(storage) == []

    async with storage.stage(make_upload(), CAROUSEL_IMAGE_DIR) as staged:
        pass
    assert stored_files(storage) == []

    async with storage.stage(make_upload(), CAROUSEL_IMAGE_DIR) as staged:
        staged.commit()
    assert stored_files(storage) == [staged.path]


async def test_stage_without_file_has_no_path(storage):
    async with storage.stage(None, CAROUSEL_IMAGE_DIR) as staged:
        assert staged.path is None


class CountingUpload(UploadFile):
    """Records how many bytes each read asked for."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.requested: list[int] = []

    async def read(self, size: int = -1) -> bytes:
        self.requested.append(size)
        return await super().read(size)


def counting_upload(content: bytes) -> CountingUpload:
    return CountingUpload(
        file=io.BytesIO(content),
        filename="big.png",
        headers=Headers({"content-type": "image/png"}),
    )


async def test_oversized_upload_is_not_read_whole(storage):
    upload = counting_upload(b"\x00" * (storage.max_bytes * 10))

    with pytest.raises(ValidationError, match="maximum size"):
        await storage.save(upload, CAROUSEL_IMAGE_DIR)

    assert upload.requested == [storage.max_bytes + 1]
    assert stored_files(storage) == []


async def test_upload_at_exact_limit_is_accepted(storage):
    path = await storage.save(counting_upload(b"\x00" * storage.max_bytes), CAROUSEL_IMAGE_DIR)
    assert storage.resolve(path).stat().st_size == storage.max_bytes
