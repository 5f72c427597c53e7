"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["system"])


@router.get("/", response_class=PlainTextResponse)
async def read_root() -> str:
    """Plaintext acknowledgement used by smoke tests; never touches the store."""

    return "Products API is running"
