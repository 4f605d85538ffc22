#!/usr/bin/env python3
"""
Database configuration and session management
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from supplycast.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str):
    """Create an engine; in-memory SQLite shares one connection across threads"""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False
        )
    return create_engine(url, echo=False, pool_pre_ping=True)


# Create engine
engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """Get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_database(bind=None) -> bool:
    """Initialize database tables"""
    bind = bind or engine
    try:
        # Test connection
        with bind.connect():
            logger.info("Database connection successful")

        # Import all models to ensure they're registered
        from supplycast import models  # noqa: F401

        Base.metadata.create_all(bind=bind)
        logger.info("Database tables verified/created successfully")
        return True
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        return False
