"""Object storage on the local filesystem with HMAC-signed URLs.

Objects live under ``<STORAGE_ROOT>/<STORAGE_BUCKET>``. The bucket is
private: objects are served only through signed URLs carrying an expiry
timestamp and a token over ``bucket:path:expires``.
"""
import hashlib
import hmac
import logging
import secrets
import time
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional
from urllib.parse import quote

from app.config import settings

logger = logging.getLogger(__name__)

# Upload content type to stored file extension
IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


class StorageError(Exception):
    """Raised for invalid object paths or uploads."""


class ObjectStorage:
    """A single private bucket."""

    def __init__(
        self,
        root: str = settings.STORAGE_ROOT,
        bucket: str = settings.STORAGE_BUCKET,
        secret: str = settings.SIGNING_SECRET,
        base_url: str = settings.STORAGE_PUBLIC_URL,
    ):
        self.bucket = bucket
        self.bucket_dir = Path(root) / bucket
        self.secret = secret.encode("utf-8")
        self.base_url = base_url.rstrip("/")

    def ensure_bucket(self) -> bool:
        """Create the bucket directory. Returns False if it already existed."""
        if self.bucket_dir.is_dir():
            return False
        self.bucket_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Bucket %s created at %s", self.bucket, self.bucket_dir)
        return True

    def resolve(self, path: str) -> Path:
        """Map an object path to its file, refusing anything outside the bucket."""
        clean = PurePosixPath(path.strip().lstrip("/"))
        if not clean.parts or ".." in clean.parts:
            raise StorageError(f"Invalid object path: {path}")
        return self.bucket_dir.joinpath(*clean.parts)

    def exists(self, path: str) -> bool:
        try:
            return self.resolve(path).is_file()
        except StorageError:
            return False

    def _sign(self, path: str, expires: int) -> str:
        payload = f"{self.bucket}:{path}:{int(expires)}".encode("utf-8")
        return hmac.new(self.secret, payload, digestmod=hashlib.sha256).hexdigest()

    def object_url(self, path: str) -> str:
        return f"{self.base_url}/{quote(path)}"

    def create_signed_url(self, path: str, expires_in: int, now: Optional[float] = None) -> str:
        expires = int(now if now is not None else time.time()) + int(expires_in)
        return f"{self.object_url(path)}?expires={expires}&token={self._sign(path, expires)}"

    def create_signed_urls(self, paths: List[str], expires_in: int) -> List[Dict[str, Optional[str]]]:
        """Sign each path; missing objects get an error instead of a URL."""
        now = time.time()
        results = []
        for path in paths:
            if not self.exists(path):
                results.append({"path": path, "signedUrl": None, "error": "Object not found"})
                continue
            results.append({"path": path, "signedUrl": self.create_signed_url(path, expires_in, now), "error": None})
        return results

    def verify(self, path: str, expires: int, token: str, now: Optional[float] = None) -> bool:
        current = int(now if now is not None else time.time())
        if int(expires) < current:
            return False
        return hmac.compare_digest(self._sign(path, expires), str(token or ""))

    def upload(self, content: bytes, filename: str, content_type: str, folder: str = "images") -> str:
        """Store an image upload under a unique name and return its path."""
        if content_type not in IMAGE_EXTENSIONS:
            raise StorageError("Invalid file type. Only images are allowed.")
        if len(content) > settings.UPLOAD_MAX_BYTES:
            raise StorageError(f"File size exceeds {settings.UPLOAD_MAX_BYTES // (1024 * 1024)}MB limit")

        ext = IMAGE_EXTENSIONS[content_type]
        path = f"{folder.strip('/') or 'images'}/{int(time.time() * 1000)}_{secrets.token_hex(6)}.{ext}"
        target = self.resolve(path)
        if target.exists():
            raise StorageError(f"Object already exists: {path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.info("Stored %s as %s (%d bytes)", filename, path, len(content))
        return path


def get_storage() -> ObjectStorage:
    """Request dependency returning the configured bucket."""
    return ObjectStorage()
