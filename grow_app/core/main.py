# grow_app/core/main.py

import logging
import os
import sys

from grow_app.config.settings import settings
from grow_app.core.logging_tracking import configure_logging, log_once_per_session

configure_logging(settings.LOG_LEVEL, settings.ERROR_LOG_PATH)
logger = logging.getLogger(__name__)

# --- FastAPI Imports ---
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grow_app.core.feature_flags import Feature, is_enabled

# --- Initialize Container ---
from grow_app.core.containers import Container
container = Container()

# --- Wire Container ---
try:
    container.wire(modules=Container.wiring_config.modules)
    logger.info("DI Container wiring applied successfully.")
except Exception as wire_err:
    logger.critical(f"CRITICAL: Failed to apply DI container wiring: {wire_err}", exc_info=True)
    sys.exit(f"CRITICAL: DI Container wiring failed: {wire_err}")

# --- Sentry Integration Imports ---
import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

# --------------------------------------------------------------------------
# Sentry Integration
# --------------------------------------------------------------------------
if settings.SENTRY_DSN:
    try:
        sentry_logging = LoggingIntegration(
            level=logging.INFO,
            event_level=logging.ERROR
        )
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            integrations=[sentry_logging],
            environment=settings.APP_ENV,
            release=settings.APP_VERSION,
        )
        logger.info("Sentry SDK initialized successfully.")
    except Exception as sentry_init_e:
        logger.exception("Failed to initialize Sentry SDK: %s", sentry_init_e)
else:
    log_once_per_session('warning', "SENTRY_DSN not configured. Sentry integration skipped.")

# --------------------------------------------------------------------------
# FastAPI Application Instance Creation
# --------------------------------------------------------------------------
logger.info("Creating FastAPI application instance...")
app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    description="API for tracking habits, goals, tasks and challenges as a growing tree.",
)

app.state.container = container

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Import and Include Routers ---
from grow_app.routers import habits, goals, tasks, challenges, tree

routers = [
    (habits.router, "/habits", ["habits"]),
    (goals.router, "/goals", ["goals"]),
    (tasks.router, "/tasks", ["tasks"]),
    (challenges.router, "/challenges", ["challenges"]),
    (tree.router, "/tree", ["tree"]),
]
for router, prefix, tags in routers:
    app.include_router(router, prefix=prefix, tags=tags)
    logger.debug(f"Successfully included router at {prefix}")
logger.info("All routers included successfully.")

# --------------------------------------------------------------------------
# Startup / Shutdown Events
# --------------------------------------------------------------------------
@app.on_event("startup")
async def startup_event():
    logger.info("Application startup event executing...")
    logger.info("--- Verifying Feature Flag Status (from settings) ---")
    for feature in Feature:
        logger.info(f"Feature: {feature.name:<35} Status: {'ENABLED' if is_enabled(feature) else 'DISABLED'}")
    logger.info("-----------------------------------------------------")
    logger.info("Store ready: %r", container.store())
    logger.info("Startup event complete.")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown event executing...")
    logger.info("Shutdown event complete.")


# --------------------------------------------------------------------------
# Root Endpoint
# --------------------------------------------------------------------------
@app.get("/", tags=["Status"], include_in_schema=False)
async def read_root():
    """ Basic status endpoint """
    return {"message": f"Welcome to the {app.title} (Version {app.version})"}


# --------------------------------------------------------------------------
# Local Development Run Hook
# --------------------------------------------------------------------------
def run():
    import uvicorn
    logger.info("Starting Uvicorn development server...")
    reload_flag = settings.APP_ENV == "development" and \
                 os.getenv("UVICORN_RELOAD", "True").lower() in ("true", "1")
    uvicorn.run(
        "grow_app.core.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=reload_flag,
        log_level=os.getenv("UVICORN_LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    run()
