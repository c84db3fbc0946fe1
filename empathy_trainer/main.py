"""Empathy Trainer - FastAPI app entry point."""
import logging
import random
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from empathy_trainer.core.config import get_settings
from empathy_trainer.core.errors import InvalidInput, PersistenceError
from empathy_trainer.db.base import Base
from empathy_trainer.db.session import AsyncSessionLocal, engine
from empathy_trainer.routers import api
from empathy_trainer.services.localization import CatalogResolver
from empathy_trainer.services.trainer import EmpathyTrainer

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    trainer = EmpathyTrainer(
        AsyncSessionLocal,
        rng=random.Random(settings.random_seed),
        daily_cap=settings.daily_response_cap,
    )
    # seeds the catalog and the progress row on first start
    await trainer.initialize()
    app.state.trainer = trainer
    app.state.resolver = CatalogResolver()
    logger.info("%s ready", settings.app_name)

    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Daily empathy scenarios with streak and progress tracking",
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(api.router)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    return JSONResponse(status_code=503, content={"detail": "Could not save, please retry"})


@app.get("/health")
async def health():
    return {"status": "ok"}
