"""FastAPI application factory."""

import json
import logging
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from birthday_board.api.models import (
    BirthdayImageRequest,
    BirthdayImageResponse,
    DateRange,
)
from birthday_board.app_logging import configure_logging
from birthday_board.containers import AppContainer
from birthday_board.domain.errors import (
    AssetMissingError,
    BirthdayBoardError,
    ImageUploadError,
    InvalidRequestError,
)

_HEALTH_CHECK_AGENTS = ("AlwaysOn", "Azure-Functions", "HealthCheck")
_TEXT_DAY_MONTH = re.compile(r"(\d{1,2})\D+(\d{1,2})")
_CANVAS_CHECK_SIZE = 10


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

    @app.exception_handler(InvalidRequestError)
    async def invalid_request(_: Request, exc: InvalidRequestError) -> JSONResponse:
        return _error_response(container, 400, "Invalid request", exc)

    @app.exception_handler(AssetMissingError)
    async def asset_missing(_: Request, exc: AssetMissingError) -> JSONResponse:
        logger.error("Rendering aborted: %s", exc)
        return _error_response(container, 500, "Rendering assets unavailable", exc)

    @app.exception_handler(ImageUploadError)
    async def upload_failed(_: Request, exc: ImageUploadError) -> JSONResponse:
        return _error_response(container, 502, "Failed to upload image", exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/birthday-image", response_class=PlainTextResponse)
    async def birthday_image_peek() -> str:
        """GET only confirms the function is alive."""
        return "OK"

    @app.post("/api/birthday-image", response_model=None)
    async def birthday_image(
        request: Request,
    ) -> JSONResponse | PlainTextResponse:
        """Render the weekly board, upload it and return a summary."""
        state_container: AppContainer = request.app.state.container
        raw_body = (await request.body()).decode("utf-8", errors="replace")
        query_day = request.query_params.get("day")
        query_month = request.query_params.get("month")
        has_query_date = bool(query_day and query_month)

        user_agent = request.headers.get("user-agent", "")
        if _is_health_check(user_agent) and not has_query_date and not raw_body:
            return PlainTextResponse("OK")

        body = _parse_body(raw_body, request.headers.get("content-type", ""))
        if has_query_date:
            day_month = _parse_day_month(query_day, query_month)
        else:
            day_month = _parse_day_month(body.day, body.month)
        day, month = day_month if day_month else (None, None)

        csv_url = request.query_params.get("csvUrl") or body.csv_url
        roster = await state_container.roster_service.load(body.csv_text, csv_url)
        board = await state_container.birthday_service.publish(
            roster.employees, day=day, month=month
        )
        logger.info(
            "Published %s with %d celebrants",
            board.blob_name,
            board.celebrant_count,
        )
        summary = BirthdayImageResponse(
            date_range=DateRange(**board.date_range()),
            celebrants=board.celebrant_count,
            uploaded_url=board.url,
            source=roster.source,
            degraded_photos=board.image.degraded_photos,
        )
        return JSONResponse(content=summary.model_dump(by_alias=True))

    @app.get("/api/canvas-check", response_class=PlainTextResponse)
    async def canvas_check(request: Request) -> str:
        """Probe that the rendering backend can create and encode a canvas."""
        state_container: AppContainer = request.app.state.container
        surface = state_container.surface_factory(
            _CANVAS_CHECK_SIZE,
            _CANVAS_CHECK_SIZE,
            state_container.settings.render_assets(),
        )
        surface.encode_png()
        return f"canvas OK {_CANVAS_CHECK_SIZE}x{_CANVAS_CHECK_SIZE}"

    return app


def _is_health_check(user_agent: str) -> bool:
    """Return true for warm-up and platform probes."""
    if not user_agent:
        return True
    return any(marker in user_agent for marker in _HEALTH_CHECK_AGENTS)


def _parse_body(raw_body: str, content_type: str) -> BirthdayImageRequest:
    """Parse a JSON body, or a plain "day,month" text body."""
    if not raw_body:
        return BirthdayImageRequest()
    if "application/json" in content_type.lower():
        try:
            payload = json.loads(raw_body)
        except ValueError:
            return BirthdayImageRequest()
        if not isinstance(payload, dict):
            return BirthdayImageRequest()
        try:
            return BirthdayImageRequest.model_validate(payload)
        except ValidationError as exc:
            raise InvalidRequestError(f"Invalid request body: {exc}") from exc
    match = _TEXT_DAY_MONTH.search(raw_body)
    if not match:
        return BirthdayImageRequest()
    return BirthdayImageRequest(day=match.group(1), month=match.group(2))


def _parse_day_month(
    day: int | str | None, month: int | str | None
) -> tuple[int, int] | None:
    """Parse a day/month pair; None when either part is missing."""
    if _is_blank(day) or _is_blank(month):
        return None
    try:
        return int(str(day).strip()), int(str(month).strip())
    except ValueError as exc:
        raise InvalidRequestError(
            f"day and month must be integers, got {day!r} and {month!r}"
        ) from exc


def _is_blank(value: int | str | None) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _error_response(
    container: AppContainer, status_code: int, error: str, exc: BirthdayBoardError
) -> JSONResponse:
    """Build an error body, adding the exception type in local environments."""
    detail = str(exc)
    if container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}"
    return JSONResponse(
        status_code=status_code, content={"error": error, "detail": detail}
    )
