"""OpenAI Responses API client for text and vision generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from kcal_bot.services.generation import GenerativeClient


@dataclass
class OpenAIGenerativeClient(GenerativeClient):
    """Generative client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIGenerativeClient":
        """Create an OpenAI generative client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        image_data_url: str | None = None,
    ) -> str:
        """Call OpenAI Responses API and return the raw output text."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url is not None:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        return (response.output_text or "").strip()

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP client."""
        await self.client.close()
