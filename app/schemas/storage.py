"""Storage schemas."""
from typing import List, Optional
from pydantic import BaseModel, Field


class SignedUrlRequest(BaseModel):
    """Body of a signed URL request."""
    paths: Optional[List[str]] = None
    expires_in: Optional[int] = Field(
        None, gt=0, alias="expiresIn"
    )

    model_config = {"populate_by_name": True}


class SignedUrl(BaseModel):
    """Signed URL for one stored object."""
    path: str
    signedUrl: Optional[str] = None
    error: Optional[str] = None


class UploadResult(BaseModel):
    """Stored upload metadata."""
    path: str
    publicUrl: str
    fileName: str
    size: int
    type: str
