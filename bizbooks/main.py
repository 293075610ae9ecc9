import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bizbooks.api.routes import health_router
from bizbooks.api.v1 import v1_router
from bizbooks.api.v1.envelope import error
from bizbooks.core import db as core_db
from bizbooks.core.config import settings
from bizbooks.core.logging_config import setup_logging
from bizbooks.domain.services.demo_fixtures import seed_demo_data
from bizbooks.infrastructure.db.repositories import StorageError

setup_logging()
logger = logging.getLogger("main")

app = FastAPI(title=settings.APP_NAME)


@app.on_event("startup")
async def startup():
    await core_db.init_models(core_db.engine)
    if settings.SEED_DEMO_DATA:
        async with core_db.AsyncSessionLocal() as session:
            await seed_demo_data(session)
    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENVIRONMENT)


@app.on_event("shutdown")
async def shutdown():
    await core_db.engine.dispose()


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content=error("Could not save changes. Please try again."),
    )


app.include_router(health_router)
app.include_router(v1_router)
