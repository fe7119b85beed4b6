"""
Relay of uploaded hotel images to Cloudinary.

Uploaded files arrive as raw bytes.  Each one is turned into a
``data:`` URI and handed to ``cloudinary.uploader.upload``; the hosted
URLs come back in the order the files were given.  A batch is all or
nothing: if one upload fails (or the batch misses its deadline) the
caller gets an exception and must not persist anything.

The Cloudinary SDK is synchronous, so every upload runs in a worker
thread and the batch is joined with ``asyncio.gather``.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import cloudinary
import cloudinary.uploader

from .errors import RelayError, RelayTimeoutError


logger = logging.getLogger(__name__)

Uploader = Callable[..., Dict[str, Any]]

# Path of a delivery URL after ``/upload/``: optional transformation-free
# version segment, then the public id and the file extension.
_PUBLIC_ID_RE = re.compile(r"/upload/(?:v\d+/)?(?P<public_id>.+?)(?:\.[A-Za-z0-9]+)?$")


@dataclass
class ImageUpload:
    """An uploaded image file held in memory."""

    filename: str
    content_type: str
    data: bytes

    def to_data_uri(self) -> str:
        payload = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{payload}"


def configure_cloudinary(cloud_name: str, api_key: str, api_secret: str) -> None:
    """Set Cloudinary credentials when they are configured explicitly.

    Without explicit credentials the SDK keeps whatever it read from
    ``CLOUDINARY_URL``.
    """
    if cloud_name and api_key and api_secret:
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )


def public_id_from_url(url: str) -> Optional[str]:
    """Extract the Cloudinary public id from a delivery URL.

    >>> public_id_from_url("https://res.cloudinary.com/demo/image/upload/v1712/hotels/abc.jpg")
    'hotels/abc'
    """
    match = _PUBLIC_ID_RE.search(url)
    if not match:
        return None
    return match.group("public_id")


class MediaRelay:
    """Uploads image batches and returns their hosted URLs."""

    def __init__(
        self,
        *,
        folder: str = "hotels",
        timeout: Optional[float] = 30.0,
        uploader: Optional[Uploader] = None,
        destroyer: Optional[Uploader] = None,
    ) -> None:
        self.folder = folder
        self.timeout = timeout
        self._uploader = uploader or cloudinary.uploader.upload
        self._destroyer = destroyer or cloudinary.uploader.destroy

    async def relay(self, files: Sequence[ImageUpload]) -> List[str]:
        """Upload ``files`` and return their URLs, ``result[i]`` for ``files[i]``.

        Raises ``RelayTimeoutError`` if the batch does not finish within
        ``self.timeout`` seconds and ``RelayError`` if any upload fails.
        """
        if not files:
            return []
        logger.debug("Relaying %d image(s) to folder '%s'", len(files), self.folder)
        batch = asyncio.gather(*(self._upload_one(f) for f in files))
        try:
            urls = await asyncio.wait_for(batch, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            logger.error(
                "Image relay timed out after %s seconds; uploads still in flight may "
                "land in folder '%s' unreferenced: %s",
                self.timeout,
                self.folder,
                ", ".join(f.filename for f in files),
            )
            raise RelayTimeoutError(
                f"Image upload did not finish within {self.timeout} seconds"
            ) from exc
        return list(urls)

    async def _upload_one(self, image: ImageUpload) -> str:
        try:
            result = await asyncio.to_thread(
                self._uploader, image.to_data_uri(), folder=self.folder
            )
        except Exception as exc:
            logger.exception("Upload of '%s' failed", image.filename)
            raise RelayError(f"Upload of '{image.filename}' failed") from exc
        url = result.get("secure_url") or result.get("url")
        if not url:
            raise RelayError(f"Media host returned no URL for '{image.filename}'")
        return url

    async def discard(self, urls: Sequence[str]) -> None:
        """Remove hosted images.  Failures are logged and ignored."""
        for url in urls:
            public_id = public_id_from_url(url)
            if public_id is None:
                logger.warning("Cannot derive public id from %s; image left in place", url)
                continue
            try:
                await asyncio.to_thread(self._destroyer, public_id)
            except Exception:
                logger.exception("Failed to remove hosted image %s", public_id)
