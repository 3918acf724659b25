# control-plane/store/session.py
"""
Database Session Management
"""

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from config import settings
from .models import Base

logger = logging.getLogger(__name__)

# Create engine based on database URL
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite specific settings
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=settings.DEBUG,
    )
else:
    # PostgreSQL or other databases
    engine = create_engine(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=settings.DEBUG,
    )

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db() -> None:
    """
    Initialize database tables
    Call this on application startup
    """
    logger.info("Initializing object store...")
    Base.metadata.create_all(bind=engine)
    logger.info("Object store initialized successfully")


class DatabaseManager:
    """
    Database manager for health checks
    """

    def __init__(self, bind=None):
        self.bind = bind if bind is not None else engine

    def check_connection(self) -> bool:
        """Check if database connection is healthy"""
        try:
            with self.bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}")
            return False


# Export
db_manager = DatabaseManager()
