"""Tests for background photo processing."""

import asyncio
import logging
from uuid import uuid4

import httpx
import pytest

from kcal_bot.services.formatters import NO_DISHES_IDENTIFIED
from kcal_bot.services.meals import MealPipeline
from kcal_bot.services.photos import (
    PHOTO_ERROR_MESSAGE,
    PhotoLogService,
    format_photo_error,
)
from tests.conftest import (
    FakeGenerativeClient,
    FakeImageStorage,
    FakeLineClient,
    InMemoryMealRepository,
    make_analyzer,
    make_estimator,
)


def _service(
    line_client: FakeLineClient,
    client: FakeGenerativeClient,
    repository: InMemoryMealRepository | None = None,
    storage: FakeImageStorage | None = None,
    environment: str = "test",
) -> PhotoLogService:
    pipeline = MealPipeline(
        analyzer=make_analyzer(client),
        estimator=make_estimator(client),
        repository=repository or InMemoryMealRepository(),
    )
    return PhotoLogService(
        line_client=line_client,
        storage=storage or FakeImageStorage(),
        pipeline=pipeline,
        environment=environment,
    )


def test_process_photo_uploads_logs_and_pushes() -> None:
    line_client = FakeLineClient()
    storage = FakeImageStorage()
    repository = InMemoryMealRepository()
    user_id = uuid4()
    service = _service(line_client, FakeGenerativeClient(), repository, storage)

    asyncio.run(
        service.process_photo(line_user_id="U1", user_id=user_id, message_id="m-1")
    )

    assert storage.uploads == [(user_id, line_client.content, "image/jpeg")]
    assert len(repository.batches[0]) == 2
    to, texts = line_client.pushes[0]
    assert to == "U1"
    lines = texts[0].splitlines()
    assert lines[0] == "Logged 2 items — Total ~850 kcal"
    assert "• Pad Thai — ~600 kcal" in lines
    assert "• Green curry — ~250 kcal" in lines


def test_process_photo_with_only_unknown_dishes() -> None:
    line_client = FakeLineClient()
    repository = InMemoryMealRepository()
    client = FakeGenerativeClient(vision_output="Sorry, I can't tell what this is.")
    service = _service(line_client, client, repository)

    asyncio.run(
        service.process_photo(line_user_id="U1", user_id=uuid4(), message_id="m-2")
    )

    assert line_client.pushes == [("U1", [NO_DISHES_IDENTIFIED])]
    assert repository.batches[0][0].dish_name == "unknown"
    assert "Logged 0 items" not in line_client.pushes[0][1][0]


def test_process_photo_failure_pushes_apology(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("kcal_bot"), "propagate", True)
    line_client = FakeLineClient(content_error=httpx.ConnectError("offline"))
    storage = FakeImageStorage()
    service = _service(line_client, FakeGenerativeClient(), storage=storage)

    with caplog.at_level(logging.ERROR, logger="kcal_bot"):
        asyncio.run(
            service.process_photo(line_user_id="U1", user_id=uuid4(), message_id="m-3")
        )

    assert line_client.pushes == [("U1", [PHOTO_ERROR_MESSAGE])]
    assert storage.uploads == []
    record = next(r for r in caplog.records if r.msg == "Meal photo pipeline failed")
    assert record.line_message_id == "m-3"  # type: ignore[attr-defined]


def test_process_photo_persistence_failure_pushes_apology() -> None:
    line_client = FakeLineClient()
    service = _service(
        line_client, FakeGenerativeClient(), InMemoryMealRepository(fail=True)
    )

    asyncio.run(
        service.process_photo(line_user_id="U1", user_id=uuid4(), message_id="m-4")
    )

    assert line_client.pushes == [("U1", [PHOTO_ERROR_MESSAGE])]


def test_process_photo_push_failure_is_logged(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("kcal_bot"), "propagate", True)
    class FailingPushClient(FakeLineClient):
        async def push(self, to: str, texts: list[str]) -> None:
            raise httpx.ConnectError("offline")

    service = _service(FailingPushClient(), FakeGenerativeClient())

    with caplog.at_level(logging.ERROR, logger="kcal_bot"):
        asyncio.run(
            service.process_photo(line_user_id="U1", user_id=uuid4(), message_id="m-5")
        )

    assert any(
        record.msg == "Failed to push meal photo result" for record in caplog.records
    )


def test_format_photo_error_adds_debug_locally() -> None:
    exc = RuntimeError("boom")

    assert format_photo_error("production", exc, "Oops") == "Oops"
    assert format_photo_error("local", exc, "Oops") == (
        "Oops (debug: RuntimeError: boom)"
    )
