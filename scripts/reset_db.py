# scripts/reset_db.py

import asyncio
import os
import sys
from loguru import logger

# Ensure project root (the folder containing 'bizbooks') is on sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from bizbooks.core.config import settings
from bizbooks.core.db import AsyncSessionLocal, engine
from bizbooks.domain.services.demo_fixtures import seed_demo_data
from bizbooks.infrastructure.db import models  # noqa: F401
from bizbooks.infrastructure.db.base import Base


async def reset_db(seed: bool = True):
    logger.info("Resetting schema on {} (drop_all + create_all)...", settings.DATABASE_URL)

    async with engine.begin() as conn:
        logger.info("Dropping all tables...")
        await conn.run_sync(Base.metadata.drop_all)

        logger.info("Creating all tables from current models...")
        await conn.run_sync(Base.metadata.create_all)

    if seed:
        async with AsyncSessionLocal() as session:
            await seed_demo_data(session)
        logger.info("Demo firms, clients, invoices and expenses loaded.")

    await engine.dispose()
    logger.success("DB reset complete.")


if __name__ == "__main__":
    asyncio.run(reset_db(seed="--empty" not in sys.argv))
