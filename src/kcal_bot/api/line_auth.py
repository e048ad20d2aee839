"""LINE webhook signature verification."""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from kcal_bot.containers import AppContainer


def compute_signature(channel_secret: str, body: bytes) -> str:
    """Return the base64 HMAC-SHA256 signature LINE sends for a body."""
    digest = hmac.new(channel_secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def _get_channel_secret(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.line_channel_secret


async def require_line_signature(
    request: Request,
    x_line_signature: str | None = Header(default=None),
    channel_secret: str = Depends(_get_channel_secret),
) -> bytes:
    """Ensure the delivery is signed by LINE and return the raw body."""
    body = await request.body()
    expected = compute_signature(channel_secret, body).encode("utf-8")
    if not x_line_signature or not hmac.compare_digest(
        expected, x_line_signature.encode("utf-8")
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Bad signature"
        )
    return body
