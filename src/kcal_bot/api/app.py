"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from kcal_bot.api.line_auth import require_line_signature
from kcal_bot.api.line_models import LineEvent, LineWebhookPayload
from kcal_bot.app_logging import configure_logging
from kcal_bot.containers import AppContainer
from kcal_bot.services.photos import ANALYZING_MESSAGE


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/line/webhook", response_class=PlainTextResponse)
    async def line_webhook_probe() -> str:
        """Answer LINE's webhook verification probe."""
        return "LINE KCal Bot is running ✅"

    @app.post("/line/webhook", response_class=PlainTextResponse)
    async def line_webhook(
        request: Request,
        background_tasks: BackgroundTasks,
        raw_body: bytes = Depends(require_line_signature),
    ) -> str:
        """Handle a signed LINE webhook delivery."""
        state_container: AppContainer = request.app.state.container
        try:
            payload = LineWebhookPayload.model_validate_json(raw_body)
        except ValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Malformed webhook payload",
            ) from exc

        results = await asyncio.gather(
            *(
                _handle_event(state_container, event, background_tasks)
                for event in payload.events
            ),
            return_exceptions=True,
        )
        for event, result in zip(payload.events, results, strict=True):
            if isinstance(result, BaseException):
                logger.error(
                    "Failed to handle LINE event",
                    exc_info=result,
                    extra={"event_type": event.type},
                )
        return "OK"

    return app


async def _handle_event(
    container: AppContainer, event: LineEvent, background_tasks: BackgroundTasks
) -> None:
    """Reply to one message event; image work continues in the background."""
    if event.type != "message" or event.message is None or not event.reply_token:
        return
    line_user_id = event.source.user_id if event.source else None
    if not line_user_id:
        return
    user = await container.user_service.ensure_user(line_user_id)

    if event.message.type == "text":
        reply = await container.text_command_handler.handle(
            line_user_id, event.message.text or ""
        )
        await container.line_client.reply(event.reply_token, [reply])
        return

    if event.message.type == "image":
        await container.line_client.reply(event.reply_token, [ANALYZING_MESSAGE])
        background_tasks.add_task(
            container.photo_log_service.process_photo,
            line_user_id=line_user_id,
            user_id=user.id,
            message_id=event.message.id,
        )
