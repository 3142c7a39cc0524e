"""Error taxonomy of the analysis pipeline.

Every fatal condition is a ``PipelineError``. The orchestrator stamps the
phase it failed in onto ``phase`` before re-raising, so callers can report
where a run stopped without parsing messages.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jaxrs_pipeline.domain.models import ArtifactCoordinate


class PipelineError(Exception):
    """Base class for all fatal pipeline errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.phase: str | None = None


class InvalidConfiguration(PipelineError, ValueError):
    """A user-supplied value is outside its enumeration or range."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class ResolutionFailure(PipelineError):
    """A required artifact could not be fetched from any repository."""

    def __init__(self, coordinate: ArtifactCoordinate, cause: str | BaseException) -> None:
        super().__init__(f"Could not resolve artifact {coordinate}: {cause}")
        self.coordinate = coordinate
        self.cause = cause


class FilesystemError(PipelineError):
    """Directory creation or report write failed."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class AnalysisFailure(PipelineError):
    """The analysis engine (or the backend rendering its result) failed."""
