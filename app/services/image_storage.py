"""Image upload storage on the local filesystem."""

import logging
import re
import time
import uuid
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

from app.config import settings
from app.errors import ValidationError

logger = logging.getLogger(__name__)

CAROUSEL_IMAGE_DIR = "carousel_images"
HERO_IMAGE_DIR = "hero_images"
PRESENTATION_IMAGE_DIR = "presentation_images"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def is_external_url(path: str | None) -> bool:
    return bool(path) and path.startswith(("http://", "https://"))


def _clean_relative_path(path: str) -> str:
    """Normalize a stored path to ``<dir>/<file>`` relative to the upload root."""
    clean = path.replace("\\", "/").lstrip("/")
    if clean.startswith("uploads/"):
        clean = clean[len("uploads/"):]
    return clean


def public_image_url(path: str | None) -> str | None:
    """Turn a stored image path into the URL the site serves it at.

    External URLs are returned unchanged.
    """
    if not path:
        return None
    if is_external_url(path):
        return path
    prefix = settings.upload_url_prefix.rstrip("/")
    return f"{prefix}/{_clean_relative_path(path)}"


def stored_image_path(url: str | None) -> str | None:
    """Inverse of :func:`public_image_url` for URLs the editor sends back."""
    if not url or is_external_url(url):
        return url
    prefix = settings.upload_url_prefix.strip("/")
    clean = url.replace("\\", "/").lstrip("/")
    if prefix and clean.startswith(prefix + "/"):
        clean = clean[len(prefix) + 1:]
    return _clean_relative_path(clean)


def has_file(upload: UploadFile | None) -> bool:
    """Browsers send an empty part for untouched file inputs."""
    return upload is not None and bool(upload.filename)


class ImageStorage:
    """Saves uploaded images under ``root/<folder>/`` and deletes them again."""

    def __init__(
        self,
        root: str | Path | None = None,
        max_bytes: int | None = None,
    ):
        self.root = Path(root or settings.upload_root).resolve()
        self.max_bytes = max_bytes or settings.max_upload_bytes

    def _filename(self, original: str) -> str:
        name = PurePosixPath(original.replace("\\", "/")).name
        stem, dot, suffix = name.rpartition(".")
        if not dot:
            stem, suffix = name, ""
        stem = _UNSAFE_CHARS.sub("-", stem).strip("-") or "image"
        suffix = f".{_UNSAFE_CHARS.sub('', suffix).lower()}" if suffix else ""
        return f"{stem}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}{suffix}"

    def resolve(self, stored_path: str) -> Path:
        """Absolute location of a stored image; refuses paths outside the root."""
        target = (self.root / _clean_relative_path(stored_path)).resolve()
        if not target.is_relative_to(self.root):
            raise ValidationError(f"Invalid image path: {stored_path}")
        return target

    async def save(self, upload: UploadFile, folder: str) -> str:
        """Validate and write an upload, returning its stored relative path."""
        content_type = upload.content_type or ""
        if not content_type.startswith("image/"):
            raise ValidationError("Only image files are allowed.")

        data = await upload.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            raise ValidationError(
                f"Image exceeds the maximum size of {self.max_bytes // (1024 * 1024)} MB."
            )

        relative = f"{folder}/{self._filename(upload.filename or 'image')}"
        destination = self.resolve(relative)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(data)
        logger.info(f"Stored image {relative} ({len(data)} bytes)")
        return relative

    def delete(self, stored_path: str | None) -> bool:
        """Remove a stored image. External URLs and missing files are ignored."""
        if not stored_path or is_external_url(stored_path):
            return False
        try:
            target = self.resolve(stored_path)
            target.unlink()
        except FileNotFoundError:
            return False
        except (OSError, ValidationError) as e:
            logger.warning(f"Could not delete image {stored_path}: {e}")
            return False
        logger.info(f"Deleted image {stored_path}")
        return True

    def stage(self, upload: UploadFile | None, folder: str) -> "StagedUpload":
        return StagedUpload(self, upload, folder)


class StagedUpload:
    """An uploaded image that is removed again unless the caller commits.

    Usage::

        async with storage.stage(upload, CAROUSEL_IMAGE_DIR) as staged:
            item.image_url = staged.path
            await db.commit()
            staged.commit()

    ``path`` is ``None`` when no file was uploaded.
    """

    def __init__(self, storage: ImageStorage, upload: UploadFile | None, folder: str):
        self.storage = storage
        self.upload = upload
        self.folder = folder
        self.path: str | None = None
        self.committed = False

    async def __aenter__(self) -> "StagedUpload":
        if has_file(self.upload):
            self.path = await self.storage.save(self.upload, self.folder)
        return self

    def commit(self) -> None:
        self.committed = True

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.path and not self.committed:
            logger.info(f"Discarding uncommitted upload {self.path}")
            self.storage.delete(self.path)
