"""Request helpers shared by the /v1 routes."""

import secrets

from fastapi import Header, HTTPException, Request, status

from api.models.responses import ErrorCodes, error_body
from core import config


def get_client_ip(request: Request) -> str:
    """First X-Forwarded-For hop when behind a proxy, else the peer address."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """
    Check the X-API-Key header against TASKS_API_KEY.

    A server without a configured key refuses every request (500) rather
    than accepting any key. FastAPI itself answers 422 when the header is
    absent.
    """
    expected = config.TASKS_API_KEY
    if not expected:
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_body(ErrorCodes.INTERNAL_ERROR, "TASKS_API_KEY is not set on the server"),
        )
    if not secrets.compare_digest(x_api_key.encode(), expected.encode()):
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            error_body(ErrorCodes.UNAUTHORIZED, "Invalid API key"),
        )
    return x_api_key
