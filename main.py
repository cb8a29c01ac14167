# type: ignore
# pyright: reportGeneralTypeIssues=false
"""
Donor Service
=============
Tracks blood donors and their donation records: donor profile CRUD,
donation history with summary statistics, and re-donation eligibility.

Eligibility bands (days since the last donation):
    < 14        recently_donated
    14 .. 56    not_yet_eligible  (progress toward the 56-day window)
    > 56        eligible
    never       ready_to_donate

Port: 8000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from donor_service.controllers import donation_controller, donor_controller, system_controller
from donor_service.core.config import settings
from donor_service.core.dependencies import get_donor_repo, get_donor_service
from donor_service.core.logging import get_logger, request_context
from donor_service.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    repo = get_donor_repo()
    try:
        if settings.CREATE_SCHEMA_ON_STARTUP:
            repo.create_schema()
        get_donor_service().seed_gauges()
    except Exception:
        logger.warning("Could not prepare database, it may not be ready yet")
    logger.info("Service started version=%s", settings.SERVICE_VERSION)
    yield
    repo.dispose()
    logger.info("Shutting down, connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Donor Service",
    description="Blood donor registry with donation history and eligibility tracking.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    context = request_context(request)
    logger.exception("Unhandled exception", extra=context)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "detail": "An unexpected error occurred",
            "request_id": context["request_id"],
        },
    )


app.include_router(system_controller.router)
app.include_router(donor_controller.router)
app.include_router(donation_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
