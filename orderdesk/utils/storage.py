"""
Image storage backends.

Uploaded logos, banners and product photos go through an ``ImageStorage``
instance held on ``app.state.storage``:

    LocalImageStorage   writes into a directory served by a reverse proxy
    SpacesImageStorage  pushes public-read objects to an S3-compatible bucket

Both return the public location that gets saved on the tenant/product row.
"""

import logging
from pathlib import Path
from typing import Optional

import aioboto3
import anyio
from fastapi import Request

from orderdesk.core.config import Settings

log = logging.getLogger(__name__)


class ImageStorage:
    async def save(self, filename: str, body: bytes, content_type: str) -> str:
        raise NotImplementedError

    async def delete(self, filename: Optional[str]) -> None:
        raise NotImplementedError

    def public_url(self, filename: Optional[str]) -> Optional[str]:
        raise NotImplementedError


class LocalImageStorage(ImageStorage):
    def __init__(self, directory: str, url_prefix: str = "/uploads"):
        self.directory = Path(directory)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.directory.mkdir(parents=True, exist_ok=True)

    async def save(self, filename: str, body: bytes, content_type: str) -> str:
        path = self.directory / filename
        await anyio.to_thread.run_sync(path.write_bytes, body)
        log.info("Stored upload %s (%d bytes)", path, len(body))
        return self.public_url(filename)

    async def delete(self, filename: Optional[str]) -> None:
        if not filename:
            return
        path = self.directory / Path(filename).name
        try:
            await anyio.to_thread.run_sync(path.unlink)
            log.info("Deleted upload %s", path)
        except FileNotFoundError:
            pass
        except OSError:
            log.warning("Could not delete upload %s", path, exc_info=True)

    def public_url(self, filename: Optional[str]) -> Optional[str]:
        if not filename:
            return None
        if filename.startswith(("/", "http://", "https://")):
            return filename
        return f"{self.url_prefix}/{filename}"


class SpacesImageStorage(ImageStorage):
    def __init__(self, *, key: str, secret: str, region: str, bucket: str, endpoint: str, cdn_base: str, prefix: str = ""):
        self.key = key
        self.secret = secret
        self.region = region
        self.bucket = bucket
        self.endpoint = endpoint
        self.cdn_base = cdn_base.rstrip("/")
        self.prefix = prefix.strip("/")
        self._session = aioboto3.Session()

    def _client(self):
        return self._session.client(
            "s3",
            region_name=self.region,
            endpoint_url=self.endpoint,
            aws_access_key_id=self.key,
            aws_secret_access_key=self.secret,
        )

    def object_key(self, filename: str) -> str:
        filename = filename.lstrip("/")
        return f"{self.prefix}/uploads/{filename}" if self.prefix else f"uploads/{filename}"

    async def save(self, filename: str, body: bytes, content_type: str) -> str:
        key = self.object_key(filename)
        async with self._client() as s3:
            await s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type or "application/octet-stream",
                ACL="public-read",
            )
        log.info("Uploaded %s to bucket %s", key, self.bucket)
        return self.public_url(filename)

    async def delete(self, filename: Optional[str]) -> None:
        if not filename:
            return
        filename = filename.rsplit("/", 1)[-1]
        async with self._client() as s3:
            await s3.delete_object(Bucket=self.bucket, Key=self.object_key(filename))

    def public_url(self, filename: Optional[str]) -> Optional[str]:
        if not filename:
            return None
        if filename.startswith(("http://", "https://")):
            return filename
        return f"{self.cdn_base}/{self.object_key(filename.rsplit('/', 1)[-1])}"


def build_storage(settings: Settings) -> ImageStorage:
    if settings.storage_backend == "spaces":
        required = [
            settings.spaces_key,
            settings.spaces_secret,
            settings.spaces_bucket,
            settings.spaces_endpoint,
            settings.spaces_cdn_base,
        ]
        if not all(required):
            raise RuntimeError("Spaces env vars not fully configured")
        return SpacesImageStorage(
            key=settings.spaces_key,
            secret=settings.spaces_secret,
            region=settings.spaces_region,
            bucket=settings.spaces_bucket,
            endpoint=settings.spaces_endpoint,
            cdn_base=settings.spaces_cdn_base,
            prefix=settings.spaces_prefix,
        )
    return LocalImageStorage(settings.uploads_dir, settings.uploads_url_prefix)


def get_storage(request: Request) -> ImageStorage:
    return request.app.state.storage
