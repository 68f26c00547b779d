"""
Posts Lambda entry point.

Local dev:
    PYTHONPATH=src uv run uvicorn posts.handler:app --reload --port 8001

Lambda handler:
    posts.handler.handler
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from mangum import Mangum

from posts.routes import admin, public
from shared.config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(
    title="Posts API",
    description="Public post listings plus an admin editor for creating and updating posts.",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Admin first: /posts/admin must not be captured by /posts/{slug}.
app.include_router(admin.router)
app.include_router(public.router)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


@app.get("/health", include_in_schema=False)
def health():
    return {"status": "ok"}


# Mangum adapts the FastAPI ASGI app for AWS Lambda + API Gateway (HTTP API).
handler = Mangum(app, lifespan="off")
