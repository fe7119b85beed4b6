"""
Business logic for owner-managed hotels.

Every operation is scoped to the owner identity injected by the
authentication dependency.  Validation runs before any side effect:
a rejected request never reaches the media host or the store.  Image
relays run before the store is written, so a failed upload leaves no
partial record behind.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..schemas.hotel import FieldError, HotelCreate, HotelRead, HotelUpdate
from .errors import HotelNotFoundError, HotelValidationError
from .hotel_store import HotelStore
from .media_service import ImageUpload, MediaRelay


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Messages reported when a required field is absent or blank.
_REQUIRED_MESSAGES = {
    "name": "Name is required",
    "city": "City is required",
    "country": "Country is required",
    "description": "Description is required",
    "type": "Hotel type is required",
    "price_per_night": "Price is required and must be a number",
    "facilities": "Facilities are required",
}

_REQUIRED_ERROR_TYPES = {"missing", "string_too_short", "too_short", "float_parsing", "float_type"}


def _field_errors(exc: ValidationError) -> List[FieldError]:
    errors: List[FieldError] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = loc[0] if loc else "__root__"
        if field in _REQUIRED_MESSAGES and err.get("type") in _REQUIRED_ERROR_TYPES:
            message = _REQUIRED_MESSAGES[field]
        else:
            message = err.get("msg", "Invalid value")
        errors.append(FieldError(field=".".join(loc) or field, message=message))
    return errors


def validate_fields(model: Type[ModelT], fields: Mapping[str, Any]) -> ModelT:
    """Validate raw request fields into ``model``.

    Raises ``HotelValidationError`` listing every rejected field.
    """
    try:
        return model.model_validate(dict(fields))
    except ValidationError as exc:
        raise HotelValidationError(_field_errors(exc)) from exc


def check_images(files: Sequence[ImageUpload], max_count: int, max_bytes: int) -> List[FieldError]:
    """Return the problems with a batch of uploaded images, if any."""
    errors: List[FieldError] = []
    if len(files) > max_count:
        errors.append(FieldError(field="image_files", message=f"At most {max_count} images are allowed"))
    for image in files:
        if len(image.data) > max_bytes:
            errors.append(
                FieldError(
                    field="image_files",
                    message=f"'{image.filename}' exceeds the {max_bytes} byte limit",
                )
            )
        if not image.content_type.startswith("image/"):
            errors.append(
                FieldError(field="image_files", message=f"'{image.filename}' is not an image")
            )
    return errors


class HotelService:
    """Create, list, fetch, update and delete the caller's hotels."""

    def __init__(
        self,
        store: HotelStore,
        relay: MediaRelay,
        *,
        max_image_count: int = 6,
        max_image_bytes: int = 5 * 1024 * 1024,
        cleanup_images_on_delete: bool = False,
    ) -> None:
        self.store = store
        self.relay = relay
        self.max_image_count = max_image_count
        self.max_image_bytes = max_image_bytes
        self.cleanup_images_on_delete = cleanup_images_on_delete

    def _validate(self, model: Type[ModelT], fields: Mapping[str, Any], files: Sequence[ImageUpload]) -> ModelT:
        image_errors = check_images(files, self.max_image_count, self.max_image_bytes)
        try:
            data = validate_fields(model, fields)
        except HotelValidationError as exc:
            raise HotelValidationError(exc.errors + image_errors) from exc
        if image_errors:
            raise HotelValidationError(image_errors)
        return data

    async def create_hotel(
        self,
        owner_id: str,
        fields: Mapping[str, Any],
        files: Sequence[ImageUpload] = (),
    ) -> HotelRead:
        """Validate, relay images and store a new hotel owned by ``owner_id``.

        Any owner-like value in ``fields`` is ignored; ownership always
        comes from the authenticated caller.
        """
        data = self._validate(HotelCreate, fields, files)
        image_urls = await self.relay.relay(files)
        record: Dict[str, Any] = data.model_dump()
        record["image_urls"] = image_urls
        record["owner_id"] = owner_id
        record["last_updated"] = datetime.now(timezone.utc)
        hotel = self.store.insert(record)
        logger.info("Owner %s created hotel %s ('%s')", owner_id, hotel.id, hotel.name)
        return hotel

    async def list_hotels(self, owner_id: str) -> List[HotelRead]:
        return self.store.find_many(owner_id)

    async def get_hotel(self, hotel_id: str, owner_id: str) -> HotelRead:
        hotel = self.store.find_one(hotel_id, owner_id)
        if hotel is None:
            raise HotelNotFoundError(hotel_id)
        return hotel

    async def update_hotel(
        self,
        hotel_id: str,
        owner_id: str,
        fields: Mapping[str, Any],
        files: Sequence[ImageUpload] = (),
    ) -> HotelRead:
        """Apply a patch to an owned hotel.

        The resulting ``image_urls`` are the URLs of the newly uploaded
        files followed by the URLs the patch keeps, each group in the
        order given.  Nothing is uploaded for a hotel the caller does
        not own.
        """
        data = self._validate(HotelUpdate, fields, files)
        if self.store.find_one(hotel_id, owner_id) is None:
            raise HotelNotFoundError(hotel_id)

        new_urls = await self.relay.relay(files)
        patch = data.model_dump(exclude_none=True)
        patch["image_urls"] = new_urls + list(data.image_urls or [])
        patch["last_updated"] = datetime.now(timezone.utc)

        hotel = self.store.update_one(hotel_id, owner_id, patch)
        if hotel is None:
            # Deleted between the ownership check and the write
            if new_urls:
                logger.warning(
                    "Hotel %s vanished during update; orphaned images: %s",
                    hotel_id,
                    ", ".join(new_urls),
                )
            raise HotelNotFoundError(hotel_id)
        logger.info("Owner %s updated hotel %s", owner_id, hotel_id)
        return hotel

    async def delete_hotel(self, hotel_id: str, owner_id: str) -> HotelRead:
        """Hard-delete an owned hotel and return the removed record."""
        hotel = self.store.delete_one(hotel_id, owner_id)
        if hotel is None:
            raise HotelNotFoundError(hotel_id)
        logger.info("Owner %s deleted hotel %s", owner_id, hotel_id)
        if self.cleanup_images_on_delete and hotel.image_urls:
            await self.relay.discard(hotel.image_urls)
        return hotel
