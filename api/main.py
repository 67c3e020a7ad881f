"""
FastAPI main application for the AgroGuard climate risk service.
"""
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agroguard.utils.helpers import load_yaml
from agroguard.utils.logger import get_logger
from api.dependencies import (
    config_path,
    get_detector,
    get_monitored_locations,
    get_roster,
    get_settings,
    get_weather_service,
)
from api.routes import alerts, fields, health, risks
from api.services.risk_monitor import RiskMonitor


# Load API configuration
def load_api_config():
    return load_yaml(config_path("api.yaml"))['api']


api_config = load_api_config()
logger = get_logger("agroguard.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Starts and stops the background risk monitor.
    """
    logger.section("AgroGuard risk service")
    logger.info("🚀 Starting up API...")
    settings = get_settings()
    monitor_settings = settings["monitor"]

    monitor = None
    if monitor_settings.get("enabled", True) and not os.getenv("AGROGUARD_DISABLE_MONITOR"):
        monitor = RiskMonitor(
            weather_service=get_weather_service(),
            detector=get_detector(),
            roster=get_roster(),
            interval_seconds=monitor_settings["interval_seconds"],
        )

        for location_id, location_data in get_monitored_locations()["locations"].items():
            if location_data.get('active', True):
                monitor.add_location(
                    location_data['latitude'],
                    location_data['longitude'],
                    location_data.get('name', location_id)
                )
                logger.info(f"  ✓ Monitoring: {location_data.get('name', location_id)}")

        await monitor.start()

    app.state.risk_monitor = monitor

    yield

    if monitor is not None:
        await monitor.stop()
    logger.info("👋 Shutting down API...")


# Create FastAPI application
app = FastAPI(
    title=api_config['title'],
    version=api_config['version'],
    description=api_config['description'],
    lifespan=lifespan,
)

# Configure CORS
if api_config['cors']['enabled']:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config['cors']['origins'],
        allow_credentials=api_config['cors']['allow_credentials'],
        allow_methods=api_config['cors']['allow_methods'],
        allow_headers=api_config['cors']['allow_headers'],
    )

# Include routers
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(risks.router, prefix="/api/v1", tags=["Risks"])
app.include_router(fields.router, prefix="/api/v1", tags=["Fields"])
app.include_router(alerts.router, prefix="/api/v1", tags=["Alerts"])


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": api_config['title'],
        "version": api_config['version'],
        "description": api_config['description'],
        "docs": "/docs",
        "health": "/api/v1/health"
    }
