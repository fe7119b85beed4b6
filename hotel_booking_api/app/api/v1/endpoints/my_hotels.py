"""
Owner hotel endpoints for API v1.

These routes let an authenticated owner create, list, fetch, update
and delete their own hotels.  Create and update take multipart form
data: the hotel fields, repeated ``facilities`` and ``image_urls``
fields for lists, and up to six ``image_files``.

Service exceptions are translated here: validation problems become
400 with per-field details, missing or foreign hotels become 404 and
everything else is logged and reported as a generic 500 so no
internals leak to the client.  A relay timeout is reported separately
as 504.  Malformed or oversized multipart bodies are rejected with 400 by the
form parser before the service is called.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData, UploadFile

from hotel_booking_api.app.core.security import get_current_owner
from hotel_booking_api.app.schemas.hotel import DeleteAck, HotelRead
from hotel_booking_api.app.services.errors import (
    HotelNotFoundError,
    HotelValidationError,
    RelayTimeoutError,
)
from hotel_booking_api.app.services.hotel_service import HotelService
from hotel_booking_api.app.services.media_service import ImageUpload


logger = logging.getLogger(__name__)

router = APIRouter()

LIST_FIELDS = {"facilities", "image_urls"}
FILE_FIELD = "image_files"


def get_hotel_service(request: Request) -> HotelService:
    return request.app.state.hotel_service


def _form_fields(form: FormData) -> Dict[str, Any]:
    """Collect text fields of a multipart form into a plain dict.

    List fields are gathered from repeated keys.  Blank scalar values
    count as absent.
    """
    fields: Dict[str, Any] = {}
    for key in form.keys():
        if key == FILE_FIELD:
            continue
        if key in LIST_FIELDS:
            fields[key] = [v for v in form.getlist(key) if isinstance(v, str)]
            continue
        value = form.get(key)
        if isinstance(value, str) and value.strip():
            fields[key] = value
    return fields


async def _form_images(form: FormData) -> List[ImageUpload]:
    images: List[ImageUpload] = []
    for item in form.getlist(FILE_FIELD):
        if not isinstance(item, UploadFile) or not item.filename:
            continue
        data = await item.read()
        images.append(
            ImageUpload(
                filename=item.filename,
                content_type=item.content_type or "application/octet-stream",
                data=data,
            )
        )
    return images


def _validation_response(exc: HotelValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": [error.model_dump() for error in exc.errors]},
    )


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Hotel not found")


def _relay_timeout() -> HTTPException:
    return HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail="Image upload timed out")


@router.post(
    "",
    response_model=HotelRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid hotel fields"}},
)
async def create_my_hotel(
    request: Request,
    owner_id: str = Depends(get_current_owner),
    service: HotelService = Depends(get_hotel_service),
):
    """Create a hotel owned by the caller."""
    form = await request.form()
    try:
        hotel = await service.create_hotel(owner_id, _form_fields(form), await _form_images(form))
    except HotelValidationError as exc:
        return _validation_response(exc)
    except RelayTimeoutError as exc:
        raise _relay_timeout() from exc
    except Exception as exc:
        logger.exception("Creating hotel for owner %s failed", owner_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong",
        ) from exc
    return hotel


@router.get("", response_model=List[HotelRead])
async def list_my_hotels(
    owner_id: str = Depends(get_current_owner),
    service: HotelService = Depends(get_hotel_service),
) -> List[HotelRead]:
    """Return every hotel of the caller; an empty list if there are none."""
    try:
        return await service.list_hotels(owner_id)
    except Exception as exc:
        logger.exception("Listing hotels for owner %s failed", owner_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching hotels",
        ) from exc


@router.get("/{hotel_id}", response_model=HotelRead)
async def get_my_hotel(
    hotel_id: str,
    owner_id: str = Depends(get_current_owner),
    service: HotelService = Depends(get_hotel_service),
) -> HotelRead:
    """Return one of the caller's hotels.

    A hotel owned by someone else is reported as not found.
    """
    try:
        return await service.get_hotel(hotel_id, owner_id)
    except HotelNotFoundError as exc:
        raise _not_found() from exc
    except Exception as exc:
        logger.exception("Fetching hotel %s failed", hotel_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching hotel",
        ) from exc


@router.put(
    "/{hotel_id}",
    response_model=HotelRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid hotel fields"}, 404: {"description": "Hotel not found"}},
)
async def update_my_hotel(
    hotel_id: str,
    request: Request,
    owner_id: str = Depends(get_current_owner),
    service: HotelService = Depends(get_hotel_service),
):
    """Update one of the caller's hotels.

    Newly attached ``image_files`` are uploaded and placed before the
    ``image_urls`` the owner keeps.
    """
    form = await request.form()
    try:
        hotel = await service.update_hotel(
            hotel_id, owner_id, _form_fields(form), await _form_images(form)
        )
    except HotelValidationError as exc:
        return _validation_response(exc)
    except HotelNotFoundError as exc:
        raise _not_found() from exc
    except RelayTimeoutError as exc:
        raise _relay_timeout() from exc
    except Exception as exc:
        logger.exception("Updating hotel %s failed", hotel_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating hotel",
        ) from exc
    return hotel


@router.delete("/{hotel_id}", response_model=DeleteAck)
async def delete_my_hotel(
    hotel_id: str,
    owner_id: str = Depends(get_current_owner),
    service: HotelService = Depends(get_hotel_service),
) -> DeleteAck:
    """Permanently delete one of the caller's hotels."""
    try:
        await service.delete_hotel(hotel_id, owner_id)
    except HotelNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Hotel not found or not owned by user",
        ) from exc
    except Exception as exc:
        logger.exception("Deleting hotel %s failed", hotel_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong",
        ) from exc
    return DeleteAck(message="Hotel deleted successfully")
