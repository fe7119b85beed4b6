"""Client for the owner hotel endpoints.

``MyHotelsClient`` wraps the ``/api/v1/my-hotels`` routes with the
``requests`` library.  Every method returns a tuple ``(data, error)``:
on success ``data`` holds the parsed JSON body and ``error`` is
``None``; on failure ``data`` is ``None`` and ``error`` is a dict with
the keys ``status_code`` and ``message``.  Network problems are
reported the same way with ``status_code`` set to ``None``.

Example::

    client = MyHotelsClient(base_url="http://localhost:8000", token=token)
    hotels, error = client.list_hotels()
"""

from __future__ import annotations

import logging
import mimetypes
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class MyHotelsClient:
    """Client for the authenticated owner's hotels."""

    prefix = "/api/v1/my-hotels"

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:8000``.
            token: Bearer token identifying the owner.
            session: Optional requests session.  A new one is created
                when omitted.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        data: Any | None = None,
        files: Any | None = None,
    ) -> Result:
        url = f"{self.base_url}{self.prefix}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                data=data,
                files=files,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    detail = exc.response.json().get("detail")
                    if isinstance(detail, list):
                        message = "; ".join(
                            f"{item.get('field')}: {item.get('message')}" for item in detail
                        )
                    else:
                        message = detail or ""
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _form(fields: Dict[str, Any]) -> List[Tuple[str, str]]:
        """Flatten hotel fields into multipart pairs, repeating list keys."""
        pairs: List[Tuple[str, str]] = []
        for key, value in fields.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                pairs.extend((key, str(item)) for item in value)
            else:
                pairs.append((key, str(value)))
        return pairs

    @staticmethod
    def _files(paths: Sequence[str]) -> List[Tuple[str, Tuple[str, bytes, str]]]:
        files = []
        for path in paths:
            content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
            with open(path, "rb") as fh:
                files.append(("image_files", (os.path.basename(path), fh.read(), content_type)))
        return files

    # ------------------------------------------------------------------
    # Hotel operations
    # ------------------------------------------------------------------
    def list_hotels(self) -> Result:
        return self._request("GET", "")

    def get_hotel(self, hotel_id: str) -> Result:
        return self._request("GET", f"/{hotel_id}")

    def create_hotel(self, fields: Dict[str, Any], image_paths: Sequence[str] = ()) -> Result:
        """Create a hotel from ``fields`` and the image files at ``image_paths``."""
        return self._request(
            "POST", "", data=self._form(fields), files=self._files(image_paths) or None
        )

    def update_hotel(
        self,
        hotel_id: str,
        fields: Dict[str, Any],
        image_paths: Sequence[str] = (),
    ) -> Result:
        """Update a hotel.

        Pass the hosted images to keep as ``fields["image_urls"]``;
        images not listed there are dropped.
        """
        return self._request(
            "PUT",
            f"/{hotel_id}",
            data=self._form(fields),
            files=self._files(image_paths) or None,
        )

    def delete_hotel(self, hotel_id: str) -> Result:
        return self._request("DELETE", f"/{hotel_id}")
