import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from .config import Settings, get_settings
from .database import create_engine, create_sessionmaker, init_models
from .infrastructure.mailer import Mailer, SmtpMailer
from .infrastructure.slot_locks import SlotLocks
from .routers import admin, bookings
from .utils.log_config import configure_logging
from .utils.request_id import REQUEST_ID_HEADER, generate_request_id, set_request_id

logger = logging.getLogger(__name__)


async def request_id_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
    set_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        set_request_id(None)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.info("Rejected invalid request to %s: %s", request.url.path, errors)
    if any(err.get("loc", ("",))[0] == "body" for err in errors):
        message = "All fields are required"
    else:
        message = "Invalid request parameters"
    return JSONResponse(status_code=400, content={"error": message})


def _log_email_configuration(settings: Settings) -> None:
    logger.info(
        "Email configuration: user=%s pass=%s",
        "Set" if settings.email_user else "Not set",
        "Set" if settings.email_pass else "Not set",
    )
    if not settings.email_enabled:
        logger.warning("Confirmation emails are disabled. Set EMAIL_USER and EMAIL_PASS to enable them.")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    engine = create_engine(settings)
    try:
        await init_models(engine)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)

        _log_email_configuration(settings)
        mailer = app.state.mailer
        if isinstance(mailer, SmtpMailer) and mailer.enabled:
            await run_in_threadpool(mailer.verify)

        yield
    finally:
        await engine.dispose()


def create_app(settings: Optional[Settings] = None, *, mailer: Optional[Mailer] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Spa Booking API", lifespan=lifespan)
    app.state.settings = settings
    app.state.mailer = mailer if mailer is not None else SmtpMailer.from_settings(settings)
    app.state.slot_locks = SlotLocks()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_id_middleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "Spa Booking API is running"

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(bookings.router)
    app.include_router(admin.router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("Server running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
