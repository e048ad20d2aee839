"""LINE Messaging API client adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx

LINE_API_URL = "https://api.line.me/v2/bot"
LINE_DATA_API_URL = "https://api-data.line.me/v2/bot"


class LineClient(Protocol):
    """Interface for LINE Messaging API interactions."""

    async def reply(self, reply_token: str, texts: list[str]) -> None:
        """Reply to an inbound event with text messages."""

    async def push(self, to: str, texts: list[str]) -> None:
        """Push text messages to a LINE user."""

    async def get_profile(self, line_user_id: str) -> dict[str, object] | None:
        """Return the user's LINE profile, if available."""

    async def get_message_content(self, message_id: str) -> bytes:
        """Download the binary content of a message."""


@dataclass
class HttpxLineClient(LineClient):
    """LINE client implemented with httpx."""

    access_token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, access_token: str) -> "HttpxLineClient":
        """Create a LINE client with a managed httpx session."""
        return cls(access_token=access_token, http_client=httpx.AsyncClient())

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    async def reply(self, reply_token: str, texts: list[str]) -> None:
        """Send messages with the reply API."""
        payload = {"replyToken": reply_token, "messages": _text_messages(texts)}
        response = await self.http_client.post(
            f"{LINE_API_URL}/message/reply",
            json=payload,
            headers=self._headers,
            timeout=10,
        )
        response.raise_for_status()

    async def push(self, to: str, texts: list[str]) -> None:
        """Send messages with the push API."""
        payload = {"to": to, "messages": _text_messages(texts)}
        response = await self.http_client.post(
            f"{LINE_API_URL}/message/push",
            json=payload,
            headers=self._headers,
            timeout=10,
        )
        response.raise_for_status()

    async def get_profile(self, line_user_id: str) -> dict[str, object] | None:
        """Fetch a user profile, returning None when LINE refuses."""
        response = await self.http_client.get(
            f"{LINE_API_URL}/profile/{line_user_id}",
            headers=self._headers,
            timeout=10,
        )
        if response.is_error:
            return None
        return response.json()

    async def get_message_content(self, message_id: str) -> bytes:
        """Download message content from the data API."""
        response = await self.http_client.get(
            f"{LINE_DATA_API_URL}/message/{message_id}/content",
            headers=self._headers,
            timeout=20,
        )
        response.raise_for_status()
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()


def _text_messages(texts: list[str]) -> list[dict[str, str]]:
    return [{"type": "text", "text": text} for text in texts]
