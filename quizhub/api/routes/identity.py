from __future__ import annotations

from fastapi import Header, HTTPException


def parse_user_id(raw: str | None) -> int | None:
    if raw is None:
        return None
    candidate = raw.strip()
    if not candidate.isdigit():
        return None
    user_id = int(candidate)
    return user_id if user_id > 0 else None


def require_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> int:
    """Caller identity as established by the upstream auth layer."""
    user_id = parse_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(
            status_code=401,
            detail={"code": "E_UNAUTHENTICATED", "message": "X-User-Id header is required"},
        )
    return user_id


def optional_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> int | None:
    return parse_user_id(x_user_id)
