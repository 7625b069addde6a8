# scripts/init_db.py
import asyncio

from orderdesk.core.config import get_settings, setup_logging
from orderdesk.db import Database


async def create_tables():
    settings = get_settings()
    setup_logging(settings)

    db = Database(settings.database_url, echo=settings.database_echo)
    try:
        await db.create_all()
    finally:
        await db.dispose()
    print("All missing tables created.")


if __name__ == "__main__":
    asyncio.run(create_tables())
