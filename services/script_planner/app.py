"""Script planner service API endpoints."""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from services.script_planner import __version__
from services.script_planner.planner import DeckFetchError, NotFoundError, ScriptPlanner
from shared.enums import ExportFormat
from shared.models import (
    ExportScriptResponse,
    IngestRequest,
    IngestTextRequest,
    PatchSlideRequest,
    RebalanceRequest,
    SynthesizeRequest,
)
from shared.response_models import APIResponse, HealthResponse, SnapshotResponse
from shared.utils import config, setup_logging

logger = setup_logging("script-planner-service")

app = FastAPI(
    title="Script Planner Service",
    description="Time-budgeted speaking scripts for uploaded presentation decks",
    version=__version__,
    debug=config.get("debug", False),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

planner = ScriptPlanner()


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for the script planner service."""
    return HealthResponse(
        status="ok",
        message="Script Planner Service is healthy",
        version=__version__,
        projects=len(planner.repository.list_ids()),
    )


@app.post("/projects/ingest", response_model=SnapshotResponse)
async def ingest_deck(request: IngestRequest) -> SnapshotResponse:
    """Download an uploaded deck and split it into slides."""
    try:
        snapshot = await planner.ingest_from_url(
            request.deck_file, title=request.title, settings=request.settings
        )
        return SnapshotResponse(
            message=f"Parsed '{snapshot.project.title}': {len(snapshot.slides)} slides detected",
            data=snapshot,
        )
    except DeckFetchError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to ingest deck: {e}")
        raise HTTPException(status_code=500, detail=f"Deck ingestion failed: {e!s}") from e


@app.post("/projects/ingest-text", response_model=SnapshotResponse)
async def ingest_text(request: IngestTextRequest) -> SnapshotResponse:
    """Create a project from already decoded deck text."""
    try:
        snapshot = planner.ingest(
            request.text.encode("utf-8"),
            request.source_format,
            title=request.title,
            settings=request.settings,
        )
        return SnapshotResponse(
            message=f"Parsed '{snapshot.project.title}': {len(snapshot.slides)} slides detected",
            data=snapshot,
        )
    except Exception as e:
        logger.error(f"Failed to ingest text: {e}")
        raise HTTPException(status_code=500, detail=f"Text ingestion failed: {e!s}") from e


@app.get("/projects/{project_id}", response_model=SnapshotResponse)
async def get_project(project_id: str) -> SnapshotResponse:
    try:
        return SnapshotResponse(message="Project loaded", data=planner.get_project(project_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.delete("/projects/{project_id}", response_model=APIResponse)
async def delete_project(project_id: str) -> APIResponse:
    try:
        planner.delete_project(project_id)
        return APIResponse(message=f"Project {project_id} deleted")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.post("/projects/{project_id}/synthesize", response_model=SnapshotResponse)
async def synthesize_script(project_id: str, request: SynthesizeRequest | None = None) -> SnapshotResponse:
    """Generate draft scripts and time allocations for every slide."""
    try:
        settings = request.settings if request else None
        snapshot = planner.synthesize(project_id, settings)
        stats = snapshot.project.stats
        return SnapshotResponse(
            message=(
                f"Script generated. Total: {stats.allocated_seconds}s / "
                f"{snapshot.project.settings.total_seconds}s"
            ),
            data=snapshot,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to synthesize script for {project_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Script generation failed: {e!s}") from e


@app.patch("/projects/{project_id}/slides/{slide_id}", response_model=SnapshotResponse)
async def patch_slide(project_id: str, slide_id: str, request: PatchSlideRequest) -> SnapshotResponse:
    """Update a slide's timing, script or manual flags.

    Fields left out of the patch keep their current values; unknown fields
    are ignored.
    """
    try:
        snapshot = planner.patch_slide(project_id, slide_id, request.patch)
        return SnapshotResponse(message="Slide updated", data=snapshot)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False)) from e


@app.post("/projects/{project_id}/rebalance", response_model=SnapshotResponse)
async def rebalance_timing(project_id: str, request: RebalanceRequest | None = None) -> SnapshotResponse:
    """Redistribute the time budget; locked slides keep their time."""
    try:
        total_seconds = request.total_seconds if request else None
        snapshot, result = planner.rebalance_with_result(project_id, total_seconds)
        message = f"Timing rebalanced. Total: {snapshot.project.stats.allocated_seconds}s"
        if not result.redistributed:
            message += " (no time left to redistribute)"
        return SnapshotResponse(message=message, data=snapshot)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.get("/projects/{project_id}/export")
async def export_script(
    project_id: str,
    format: ExportFormat = Query(default=ExportFormat.MARKDOWN),
    raw: bool = Query(default=False, description="Return the document as plain text"),
):
    """Export the speaking script as Markdown or plain text."""
    try:
        content = planner.export_text(project_id, format)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    if raw:
        media_type = "text/markdown" if format == ExportFormat.MARKDOWN else "text/plain"
        return PlainTextResponse(content=content, media_type=media_type)
    return ExportScriptResponse(project_id=project_id, format=format, content=content)


if __name__ == "__main__":
    try:
        import uvicorn
    except ImportError as e:
        raise RuntimeError("uvicorn must be installed to run this service.") from e
    uvicorn.run(app, host="0.0.0.0", port=8010)
