# app/routes/media.py

"""
Media Routes.

Admins upload images (JPEG, PNG, GIF, WebP up to ``MEDIA_MAX_SIZE_MB``) into
the blob store and delete them. Anyone can fetch a stored file by key; the
response carries an ETag and a one year ``Cache-Control`` so clients and
CDNs revalidate with ``If-None-Match``.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Header, UploadFile
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_304_NOT_MODIFIED

from app.auth import AdminDep
from app.configs import settings
from app.dependencies import MediaServiceDep, rate_limit
from app.schemas import envelope

router = APIRouter(
    prefix="/api/media",
    tags=["🖼️ Media"],
    dependencies=[Depends(rate_limit("media"))],
)


@router.post(
    "/upload",
    response_class=ORJSONResponse,
    status_code=HTTP_201_CREATED,
    summary="Upload an image",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "key": "uploads/1700000000000-3f9a1c2b7d4e.png",
                            "url": "/api/media/uploads/1700000000000-3f9a1c2b7d4e.png",
                            "filename": "cover.png",
                            "size": 48213,
                            "type": "image/png",
                        },
                        "message": "File uploaded successfully",
                    },
                },
            },
        },
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "File too large. Maximum size is 5MB"},
                },
            },
        },
    },
    operation_id="media_upload",
)
async def upload_media(
    _admin: AdminDep,
    media: MediaServiceDep,
    file: Annotated[UploadFile | None, File(description="Image to upload")] = None,
) -> dict[str, Any]:
    """
    Upload an image.

    Parameters
    ----------
    media : MediaService
        Media service dependency.
    file : UploadFile | None
        Multipart ``file`` field.

    Returns
    -------
    dict[str, Any]
        Envelope with key, public URL, original filename, size and type.
    """
    uploaded = await media.upload(file)
    return envelope(data=uploaded, message="File uploaded successfully")


@router.get(
    "/{key:path}",
    summary="Fetch a stored file",
    responses={
        200: {"content": {"image/png": {}}, "description": "The stored bytes"},
        304: {"description": "Not modified"},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"success": False, "error": "File not found"}}},
        },
    },
    operation_id="media_get",
)
async def get_media(
    key: str,
    media: MediaServiceDep,
    response: Response,
    if_none_match: Annotated[str | None, Header()] = None,
) -> Response:
    stored = await media.get(key)
    # keeps the X-RateLimit-* headers rate_limit() set on the injected response
    headers = {
        **response.headers,
        "ETag": stored.etag,
        "Cache-Control": settings.MEDIA_CACHE_CONTROL,
    }
    if if_none_match and stored.etag in {tag.strip() for tag in if_none_match.split(",")}:
        return Response(status_code=HTTP_304_NOT_MODIFIED, headers=headers)
    return Response(content=stored.body, media_type=stored.content_type, headers=headers)


@router.delete(
    "/{key:path}",
    response_class=ORJSONResponse,
    summary="Delete a stored file",
    operation_id="media_delete",
)
async def delete_media(key: str, _admin: AdminDep, media: MediaServiceDep) -> dict[str, Any]:
    await media.delete(key)
    return envelope(message="File deleted successfully")
