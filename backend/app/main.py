# backend/app/main.py

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.api.auth import router as auth_router
from app.api.reference import router as reference_router
from app.api.search import router as search_router
from app.config import settings
from app.core.logging import setup_logging
from app.db import init_db
from app.errors import register_error_handlers

setup_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("app.access")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Read-only aggregate queries over Queensland offence records.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def access_log(request: Request, call_next):
    """One log line per request, plus the standard security headers."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000

    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)

    client = request.client.host if request.client else "-"
    access_logger.info(
        '%s "%s %s" %s %.1fms',
        client,
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


register_error_handlers(app)

app.include_router(reference_router)
app.include_router(search_router)
app.include_router(auth_router)


@app.get("/", tags=["system"], response_class=PlainTextResponse)
def root():
    return "Welcome to the Queensland Criminal Records API"


@app.get("/health", tags=["system"])
def health_check():
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    run()
