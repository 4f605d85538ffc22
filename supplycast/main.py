#!/usr/bin/env python3
"""
Main FastAPI application with modular router structure
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from supplycast.core.config import settings
from supplycast.api import admin, auth, demand, forecast, root, scheduler
from supplycast.utils.events import startup_handler, shutdown_handler

app = FastAPI(title=settings.APP_TITLE, version=settings.APP_VERSION)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    await startup_handler(app)

@app.on_event("shutdown")
async def shutdown_event():
    await shutdown_handler(app)

# Register Routers
app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(demand.router)
app.include_router(forecast.router)
app.include_router(scheduler.router)
app.include_router(root.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("supplycast.main:app", host="0.0.0.0", port=8000)
