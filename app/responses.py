"""Response envelope shared by every API route."""
from typing import Any, Generic, Optional, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Successful response wrapper."""
    success: bool = True
    data: Optional[T] = None


def ok(data: Any = None) -> dict:
    """Wrap a payload in the success envelope."""
    return {"success": True, "data": data}


def error_response(message: str, status_code: int, **metadata: Any) -> JSONResponse:
    body = {"success": False, "message": message}
    body.update(metadata)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
