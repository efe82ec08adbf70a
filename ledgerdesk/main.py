import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from ledgerdesk.api.routes import api_router
from ledgerdesk.config import settings
from ledgerdesk.database import create_tables, engine, get_db
from ledgerdesk.seed import run_seed

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _init_db():
    """Retry DB connection and create tables. Runs in background so the app can bind its port."""
    for attempt in range(30):
        try:
            await create_tables(engine)
            logger.info("Database initialized successfully")
            return
        except Exception as e:
            wait = min(2**attempt, 30)
            logger.warning("DB init failed (attempt %d/30), retrying in %ds: %s", attempt + 1, wait, e)
            await asyncio.sleep(wait)
    logger.error("Database initialization failed after 30 attempts")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_task = asyncio.create_task(_init_db())
    yield
    init_task.cancel()
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Balance ledger with administrator-reviewed deposit and withdrawal requests.",
    lifespan=lifespan,
)
app.include_router(api_router, prefix="/api/v1")


@app.post("/seed", summary="Seed database")
async def seed_db(db=Depends(get_db)):
    """Seed an administrator and two users with starting balances. Idempotent."""
    msg = await run_seed(db)
    return {"status": "ok", "message": msg}


@app.get("/health")
def health():
    return {"status": "ok"}
