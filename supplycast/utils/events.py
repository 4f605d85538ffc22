#!/usr/bin/env python3
"""
Application startup and shutdown event handlers
"""

import logging
from fastapi import FastAPI
from supplycast.core.config import settings
from supplycast.core.database import SessionLocal, init_database
from supplycast.core.scheduler_background import JobScheduler

logger = logging.getLogger(__name__)

def configure_logging():
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

async def startup_handler(app: FastAPI):
    """Handle application startup"""
    configure_logging()
    logger.info(f"Starting {settings.APP_TITLE}...")

    if init_database():
        logger.info("Database initialization successful")
    else:
        logger.warning("Database initialization failed - some features may not work")

    app.state.scheduler = None
    if settings.SCHEDULER_ENABLED:
        scheduler = JobScheduler(SessionLocal, settings)
        scheduler.start()
        app.state.scheduler = scheduler
    else:
        logger.info("Job scheduler disabled")

async def shutdown_handler(app: FastAPI):
    """Handle application shutdown"""
    logger.info("Shutting down application...")

    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        scheduler.stop()
        app.state.scheduler = None
