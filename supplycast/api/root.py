#!/usr/bin/env python3
"""
Root-level API routes
"""

from fastapi import APIRouter
from supplycast.core.config import settings

router = APIRouter(tags=["Root"])

@router.get("/")
async def health_check():
    """Health check endpoint"""
    return {
        "message": f"{settings.APP_TITLE} is running",
        "status": "healthy",
        "version": settings.APP_VERSION
    }
