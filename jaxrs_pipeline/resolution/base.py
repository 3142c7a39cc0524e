from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from jaxrs_pipeline.domain.models import ArtifactCoordinate, ResolvedArtifact


class ArtifactResolver(ABC):
    @abstractmethod
    def resolve(self, coordinate: ArtifactCoordinate, repositories: Sequence[str]) -> ResolvedArtifact:
        """Return the local file of ``coordinate`` or raise ``ResolutionFailure``."""
