"""Shared API dependencies."""

from fastapi import Header, HTTPException


def get_caller(x_caller_id: str | None = Header(default=None)) -> str:
    """Opaque caller identifier supplied by the identity layer."""
    if not x_caller_id:
        raise HTTPException(status_code=401, detail="Missing X-Caller-Id header")
    return x_caller_id
