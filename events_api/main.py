"""
Application factory for the Event Management API.

``create_app`` wires settings, logging, the database engine and the
routers together.  The engine and session factory are built once per
application and kept on ``app.state``; request handlers reach them only
through the ``get_db`` dependency.  A module level ``app`` built from
environment settings is provided for ASGI servers::

    uvicorn events_api.main:app
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from events_api.core.config import Settings, settings as default_settings
from events_api.core.errors import DomainError
from events_api.core.logging_config import setup_logging
from events_api.database.db import Base, build_engine, build_session_factory
import events_api.models.registrations  # noqa: F401  registers every mapped table
from events_api.routes import events, registrations, users

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    content = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    engine = build_engine(settings.database_url, echo=settings.sql_echo)
    # Create all tables (in production, use migrations such as Alembic)
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def liveness() -> str:
        return "Event Management API is running"

    # Include the routers.  users goes first so /events/user is never
    # shadowed by a path parameter route.
    app.include_router(users.router)
    app.include_router(events.router)
    app.include_router(registrations.router)

    logger.info("Application configured with database %s", engine.url.render_as_string(hide_password=True))
    return app


app = create_app()
