from __future__ import annotations

import base64
import threading
import time
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from hotel_booking_api.app.core.config import Settings
from hotel_booking_api.app.core.db import init_db
from hotel_booking_api.app.core.security import create_access_token
from hotel_booking_api.app.main import create_app
from hotel_booking_api.app.services.hotel_service import HotelService
from hotel_booking_api.app.services.hotel_store import HotelStore
from hotel_booking_api.app.services.media_service import ImageUpload, MediaRelay

SECRET = "test-secret"
CDN = "https://res.cloudinary.com/demo/image/upload/v1700000000/hotels"


class FakeUploader:
    """Stands in for ``cloudinary.uploader.upload``.

    The hosted URL is derived from the uploaded bytes, so a file with
    content ``b"lobby"`` comes back as ``<CDN>/lobby.png``.
    """

    def __init__(self, fail_on: Optional[bytes] = None, delays: Optional[Dict[bytes, float]] = None):
        self.fail_on = fail_on
        self.delays = delays or {}
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def __call__(self, data_uri: str, **options: Any) -> Dict[str, Any]:
        with self._lock:
            self.calls.append((data_uri, options))
        payload = base64.b64decode(data_uri.split(",", 1)[1])
        time.sleep(self.delays.get(payload, 0))
        if payload == self.fail_on:
            raise RuntimeError("media host unavailable")
        url = f"{CDN}/{payload.decode()}.png"
        return {"public_id": f"hotels/{payload.decode()}", "url": url.replace("https", "http"), "secure_url": url}


class FakeDestroyer:
    def __init__(self):
        self.public_ids: List[str] = []

    def __call__(self, public_id: str, **options: Any) -> Dict[str, Any]:
        self.public_ids.append(public_id)
        return {"result": "ok"}


def hosted(name: str) -> str:
    return f"{CDN}/{name}.png"


def image(content: bytes, filename: str = "", content_type: str = "image/png") -> ImageUpload:
    return ImageUpload(filename=filename or f"{content.decode()}.png", content_type=content_type, data=content)


def hotel_fields(**overrides: Any) -> Dict[str, Any]:
    fields: Dict[str, Any] = {
        "name": "Lotus Inn",
        "city": "Pokhara",
        "country": "Nepal",
        "description": "Lakeside rooms with a mountain view",
        "type": "Boutique",
        "star_rating": "4",
        "price_per_night": "100",
        "adult_count": "2",
        "child_count": "1",
        "facilities": ["wifi"],
    }
    fields.update(overrides)
    return {key: value for key, value in fields.items() if value is not None}


def image_files(*names: str) -> List[tuple]:
    return [("image_files", (f"{name}.png", name.encode(), "image/png")) for name in names]


def auth(owner_id: str) -> Dict[str, str]:
    token = create_access_token({"sub": owner_id}, secret_key=SECRET)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=str(tmp_path / "hotels.db"), secret_key=SECRET)


@pytest.fixture
def uploader() -> FakeUploader:
    return FakeUploader()


@pytest.fixture
def destroyer() -> FakeDestroyer:
    return FakeDestroyer()


@pytest.fixture
def relay(uploader, destroyer) -> MediaRelay:
    return MediaRelay(folder="hotels", timeout=5, uploader=uploader, destroyer=destroyer)


@pytest.fixture
def client(settings, relay):
    app = create_app(settings, relay=relay)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store(settings) -> HotelStore:
    init_db(settings.database_url)
    return HotelStore(settings.database_url)


@pytest.fixture
def service(store, relay) -> HotelService:
    return HotelService(store, relay)
