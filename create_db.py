# create_db.py
import asyncio
import sys

from shared.config import get_settings
from shared.db import create_database
from shared.logger import get_logger

# Import all models here so they are registered with SQLAlchemy's metadata
import services.advocate_directory.models

logger = get_logger(component="create_db")


async def init_models() -> int:
    database = create_database(get_settings())
    if database is None:
        return 1
    try:
        logger.info("Creating tables...")
        await database.create_all()
        logger.info("Tables created.")
    finally:
        await database.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(init_models()))
