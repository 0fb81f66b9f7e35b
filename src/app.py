"""Campus Eats FastAPI application.

Processes commands synchronously over HTTP; every request runs inside the
campus domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# PROTEAN_ENV controls which config overlay is applied:
#   - unset/"test" → in-memory store, sync event processing
#   - "production" → PostgreSQL, async event processing via the Engine
from campus.domain import campus, logger  # noqa: E402
from campus.utils.logging import add_context, clear_context  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

campus.init()

app = FastAPI(
    title="Campus Eats API",
    description="Cafeteria vendor onboarding and student pre-ordering",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the campus domain context and bind the caller to the log context."""
    add_context(
        method=request.method,
        path=request.url.path,
        user_id=request.headers.get("x-user-id"),
    )
    try:
        with campus.domain_context():
            response = await call_next(request)
        logger.info("Request handled", status_code=response.status_code)
        return response
    finally:
        clear_context()

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from campus.api import (  # noqa: E402
    cafeteria_router,
    feedback_router,
    order_router,
    profile_router,
    register_error_handlers,
    registration_router,
)

app.include_router(profile_router)
app.include_router(registration_router)
app.include_router(cafeteria_router)
app.include_router(order_router)
app.include_router(feedback_router)
register_error_handlers(app)


@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": campus.name})
