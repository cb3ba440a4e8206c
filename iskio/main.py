"""In-memory reference implementation of the ISKIO REST API.

Run with ``uvicorn iskio.main:app``. State lives in memory and is lost on exit.
"""
import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iskio.api.routes import auth, citas, disponibilidad, servicios
from iskio.api.store import Store, seeded_store
from iskio.core.config import _ENV_FILE, settings

if os.getenv("ENV") != "production":
    logging.basicConfig(level=logging.DEBUG)
else:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
    )
logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _cors_headers(origin: str | None) -> dict[str, str]:
    """Add CORS headers to error responses so the browser doesn't block them."""
    headers = {
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Authorization, Content-Type",
    }
    if origin and origin in settings.cors_origins_list:
        headers["Access-Control-Allow-Origin"] = origin
    elif settings.cors_origins_list:
        headers["Access-Control-Allow-Origin"] = settings.cors_origins_list[0]
    return headers


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return the error as JSON, with CORS so 500s are not blocked by the browser."""
    headers = _cors_headers(request.headers.get("origin"))
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers={**headers, **(exc.headers or {})},
        )
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": f"{type(exc).__name__}: {exc}"},
        headers=headers,
    )


def create_app(store: Store | None = None) -> FastAPI:
    app = FastAPI(
        title="ISKIO Spa API",
        description="Reference backend for ISKIO Spa: auth, availability, citas, servicios",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.store = store if store is not None else seeded_store()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(disponibilidad.router, prefix=API_PREFIX)
    app.include_router(citas.router, prefix=API_PREFIX)
    app.include_router(servicios.router, prefix=API_PREFIX)
    app.add_exception_handler(Exception, global_exception_handler)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    logger.debug("Loading .env from: %s (exists: %s)", _ENV_FILE, _ENV_FILE.exists())
    return app


app = create_app()
