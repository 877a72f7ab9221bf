"""
SlideScript Backend - Unified Application Entry Point
Mounts the script planner service under a single FastAPI application
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from services.script_planner import __version__
from services.script_planner import app as script_planner_module
from shared.utils import config, setup_logging

logger = setup_logging("slidescript-backend")

script_planner_app = script_planner_module.app

app = FastAPI(
    title="SlideScript Backend API",
    description="""
    Turns uploaded presentation decks into editable, time-budgeted speaking scripts.

    All endpoints are documented below. Service routes are organized by tag.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Health",
            "description": "Service health and status endpoints",
        },
        {
            "name": "Script Planner",
            "description": "Slide segmentation, script drafting and timing - mounted at /api/v1/script-planner",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes to exclude (internal FastAPI docs routes)
EXCLUDED_PATHS = {"/openapi.json", "/docs", "/docs/oauth2-redirect", "/redoc"}

for route in script_planner_app.routes:
    if hasattr(route, "path") and hasattr(route, "endpoint"):
        if route.path in EXCLUDED_PATHS:
            continue
        route_kwargs = {
            "path": f"/api/v1/script-planner{route.path}",
            "endpoint": route.endpoint,
            "methods": route.methods,
            "tags": ["Script Planner"],
        }
        if hasattr(route, "name"):
            route_kwargs["name"] = f"script_planner_{route.name}"
        if hasattr(route, "response_model"):
            route_kwargs["response_model"] = route.response_model
        app.add_api_route(**route_kwargs)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with service information and API navigation"""
    return {
        "service": "SlideScript Backend API",
        "version": __version__,
        "services": {
            "script_planner": {
                "base_url": "/api/v1/script-planner",
                "health": "/api/v1/script-planner/health",
            },
        },
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for all services"""
    return {
        "status": "healthy",
        "services": {
            "api_gateway": "operational",
            "script_planner": "operational",
        },
    }


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting SlideScript Backend on http://0.0.0.0:8000")
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
