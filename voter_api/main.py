import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from voter_api.application.handlers import build_buses
from voter_api.config import settings
from voter_api.infrastructure.voter_repo import VoterRepository
from voter_api.interfaces.voter_controller import router as voter_router
from voter_api.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(repo: Optional[VoterRepository] = None) -> FastAPI:
    """Build a FastAPI app that owns its own voter store.

    Passing ``repo`` lets callers share or pre-populate the store; by
    default every app starts with an empty one.
    """
    setup_logging(settings.effective_log_level, settings.LOG_FILE)

    app = FastAPI(title="Voter API", version=settings.API_VERSION, debug=settings.DEBUG)

    repo = repo if repo is not None else VoterRepository()
    command_bus, query_bus = build_buses(repo, settings.API_VERSION)
    app.state.voter_repo = repo
    app.state.command_bus = command_bus
    app.state.query_bus = query_bus

    # Malformed ids and bodies are a 400, not FastAPI's default 422
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    app.include_router(voter_router)

    logger.info("%s %s ready", settings.SERVICE_NAME, settings.API_VERSION)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
