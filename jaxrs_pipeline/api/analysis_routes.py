from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from jaxrs_pipeline.core.containers import build_analysis_service
from jaxrs_pipeline.core.errors import InvalidConfiguration, PipelineError
from jaxrs_pipeline.domain.schemas import AnalyzerOptions, ProjectModel

router = APIRouter(prefix="/api", tags=["analysis"])

# Build once at module level
_analysis_service = build_analysis_service()


# ── Request / Response schemas ────────────────────────────────────
class AnalyzeRequest(BaseModel):
    """Request body for one analysis run."""

    project: ProjectModel = Field(..., description="Build tool view of the project to analyse.")
    options: AnalyzerOptions = Field(
        default_factory=AnalyzerOptions,
        description="Plugin options (backend, swagger settings, ignored root resources).",
    )


class BackendInfo(BaseModel):
    name: str
    file_name: str


class AnalyzeResponse(BaseModel):
    """Outcome of a run. ``status`` is ``skipped`` when nothing was compiled yet."""

    status: str
    backend: str | None = None
    output_path: str | None = None
    elapsed_ms: int | None = None
    phases: list[str]


# ── Endpoints ─────────────────────────────────────────────────────
@router.get(
    "/backends",
    summary="List output backends",
    response_model=list[BackendInfo],
)
def list_backends() -> list[BackendInfo]:
    """Return every backend with the file name its report is written to."""
    return [BackendInfo(name=d.name, file_name=d.file_name) for d in _analysis_service.registry.descriptors()]


@router.post(
    "/analyze",
    summary="Run the analysis pipeline",
    response_model=AnalyzeResponse,
)
def analyze(body: AnalyzeRequest) -> dict:
    """Resolve the analyzer, assemble the classpath, run the engine and write the report.

    Configuration errors return **400**; resolution, filesystem and engine
    failures return **500**. Both carry the phase the run stopped in.
    """
    try:
        outcome = _analysis_service.run(body.project, body.options)
    except InvalidConfiguration as e:
        raise HTTPException(status_code=400, detail={"error": e.message, "key": e.key, "phase": e.phase})
    except PipelineError as e:
        raise HTTPException(status_code=500, detail={"error": e.message, "phase": e.phase})
    return outcome.to_dict()
