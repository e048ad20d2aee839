"""Supabase Storage adapter for meal photos."""

import time
from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient

from kcal_bot.services.photos import ImageStorage

_EXTENSIONS = {"image/jpeg": "jpg", "image/png": "png", "image/webp": "webp"}


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Stores photos in a public Supabase Storage bucket."""

    client: AsyncClient
    bucket: str

    async def upload(self, user_id: UUID, data: bytes, content_type: str) -> str:
        """Upload bytes under the user's folder and return the public URL."""
        extension = _EXTENSIONS.get(content_type, "jpg")
        path = f"{user_id}/{int(time.time() * 1000)}.{extension}"
        bucket = self.client.storage.from_(self.bucket)
        await bucket.upload(path, data, {"content-type": content_type})
        return await bucket.get_public_url(path)
