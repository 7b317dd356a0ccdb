"""Shared request dependencies for routes."""

from fastapi import Header


def get_acting_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    """Return the acting user id forwarded by the auth layer, if any."""

    if x_user_id is None:
        return None
    return x_user_id.strip() or None
