from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import time
import logging

from cargoplan.config import DATABASE_URL, DB_CONNECT_RETRIES, DB_RETRY_INTERVAL

logger = logging.getLogger(__name__)


def create_db_engine(
    database_url: str,
    max_retries: int = DB_CONNECT_RETRIES,
    retry_interval: int = DB_RETRY_INTERVAL,
):
    """
    Create database engine with retry logic
    """
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool

    for attempt in range(max_retries):
        try:
            engine = create_engine(database_url, **kwargs)
            # Test the connection
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connection established successfully")
            return engine
        except Exception as e:
            if attempt < max_retries - 1:
                wait_time = retry_interval * (attempt + 1)  # Progressive wait time
                logger.warning(
                    f"Database connection failed (attempt {attempt + 1}/{max_retries}): {str(e)}"
                )
                logger.info(f"Retrying in {wait_time} seconds...")
                time.sleep(wait_time)
            else:
                logger.error(
                    f"Failed to connect to database after {max_retries} attempts"
                )
                raise


engine = create_db_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
