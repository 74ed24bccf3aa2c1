"""Storage routes - uploads and signed object URLs."""
import logging
from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse

from app.config import settings
from app.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.responses import Envelope, ok
from app.schemas.storage import SignedUrl, SignedUrlRequest, UploadResult
from app.services.storage import ObjectStorage, StorageError, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storage", tags=["Storage"])


@router.post("/signed-urls", response_model=Envelope[List[SignedUrl]])
async def create_signed_urls(
    request: SignedUrlRequest,
    storage: ObjectStorage = Depends(get_storage),
):
    """Issue time-limited URLs for stored objects."""
    if not request.paths:
        raise BadRequestError("Invalid paths. Must be a non-empty array.")

    expires_in = request.expires_in or settings.SIGNED_URL_DEFAULT_TTL
    return ok(storage.create_signed_urls(request.paths, expires_in))


@router.post("/upload", response_model=Envelope[UploadResult])
async def upload_file(
    file: UploadFile = File(None),
    folder: str = Form("images"),
    storage: ObjectStorage = Depends(get_storage),
):
    """Upload an image (jpeg, png, gif or webp, 5MB max)."""
    if file is None or not file.filename:
        raise BadRequestError("No file provided")

    content = await file.read()
    content_type = file.content_type or ""
    try:
        path = storage.upload(content, file.filename, content_type, folder)
    except StorageError as e:
        raise BadRequestError(str(e))

    return ok({
        "path": path,
        "publicUrl": storage.object_url(path),
        "fileName": file.filename,
        "size": len(content),
        "type": content_type,
    })


@router.get("/object/{path:path}")
async def get_object(
    path: str,
    expires: int,
    token: str,
    storage: ObjectStorage = Depends(get_storage),
):
    """Serve an object to the holder of a valid signed URL."""
    if not storage.verify(path, expires, token):
        raise ForbiddenError("Invalid or expired signature")
    try:
        target = storage.resolve(path)
    except StorageError as e:
        raise BadRequestError(str(e))
    if not target.is_file():
        raise NotFoundError("Object not found")
    return FileResponse(target, headers={"Cache-Control": "private, max-age=60"})
