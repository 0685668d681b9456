"""
Create the schema and verify database connectivity.

Run with ``python -m app.db.init_db``. Deployed databases should prefer
``alembic upgrade head``.
"""

from asyncio import run as asyncio_run
from logging import getLogger

from sqlalchemy.exc import SQLAlchemyError

from app.configs import file_logger
from app.db.database import close_db, init_db
from app.errors.database import DatabaseConnectionError

logger = file_logger(getLogger(__name__))


async def main() -> None:
    try:
        logger.info("Verifying database connection...")
        await init_db()
        logger.info("Database ready!")
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Failed to connect to database")
        raise DatabaseConnectionError from e
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio_run(main())
