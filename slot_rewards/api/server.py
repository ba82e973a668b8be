"""HTTP API for slot rewards and sync-committee duties.

Endpoints:
    GET /blockreward/{slot}  block reward, MEV flag and MEV reward (Gwei)
    GET /syncduties/{slot}   public keys of sync-committee members

Usage:
    # Development
    python -m slot_rewards.api.server

    # Production with uvicorn
    uvicorn slot_rewards.api.server:app --host 0.0.0.0 --port 8080
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from slot_rewards.helpers.config import load_settings
from slot_rewards.helpers.errors import (
    InvalidSlotError,
    SlotInFutureError,
    UpstreamError,
    parse_slot,
)
from slot_rewards.helpers.logging import get_logger
from slot_rewards.services import Services, build_services


logger = get_logger(__name__)


def _error(status_code: int, msg: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"msg": msg})


def _default_services() -> Services:
    return build_services(load_settings())


def create_app(services_factory: Callable[[], Services] = _default_services) -> FastAPI:
    """Build the FastAPI application.

    Services are created when the application starts; a failure there (for
    example an unreadable builder registry) aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        services = services_factory()
        app.state.services = services
        try:
            yield
        finally:
            await services.aclose()

    app = FastAPI(
        title="Slot Rewards API",
        description="Execution-layer block rewards, MEV status and sync-committee duties per slot",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.exception_handler(InvalidSlotError)
    async def invalid_slot_handler(request: Request, exc: InvalidSlotError) -> JSONResponse:
        return _error(400, "Invalid slot")

    @app.exception_handler(SlotInFutureError)
    async def future_slot_handler(request: Request, exc: SlotInFutureError) -> JSONResponse:
        return _error(400, "Slot is in the future")

    @app.exception_handler(UpstreamError)
    async def upstream_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        logger.error("Upstream failure in %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "Upstream chain data unavailable")

    @app.get("/blockreward/{slot}")
    async def block_reward(slot: str, request: Request) -> JSONResponse:
        """Block reward, MEV status and MEV reward for a slot."""
        services: Services = request.app.state.services
        slot_number = parse_slot(slot)
        client = services.http_client

        await services.resolver.ensure_not_future(client, slot_number)
        outcome = await services.rewards.reward_for_slot(client, slot_number)
        if outcome.not_found:
            return _error(404, "Slot does not exist or was skipped")

        return JSONResponse(content=outcome.result.model_dump(by_alias=True))

    @app.get("/syncduties/{slot}")
    async def sync_duties(slot: str, request: Request) -> JSONResponse:
        """Public keys of validators with sync-committee duty at a slot."""
        services: Services = request.app.state.services
        slot_number = parse_slot(slot)
        client = services.http_client

        await services.resolver.ensure_not_future(client, slot_number)
        pubkeys = await services.committees.sync_duty_pubkeys(client, slot_number)
        return JSONResponse(content=pubkeys)

    return app


app = create_app()


if __name__ == "__main__":
    settings = load_settings()
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        use_colors=settings.log_color,
    )
