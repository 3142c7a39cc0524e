from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from jaxrs_pipeline.core.config import Settings, settings as default_settings
from jaxrs_pipeline.domain.models import SCOPE_TEST, ArtifactCoordinate, ClasspathSet, normalize_path
from jaxrs_pipeline.domain.schemas import ProjectArtifact, ProjectModel
from jaxrs_pipeline.resolution.base import ArtifactResolver

logger = logging.getLogger(__name__)

ANALYZER_GROUP = "com.sebastian-daschner"
ANALYZER_ARTIFACT = "jaxrs-analyzer"


class ClasspathService:
    """
    Builds the project and dependency class paths handed to the engine.
    """

    def __init__(self, resolver: ArtifactResolver, settings: Settings | None = None):
        self.resolver = resolver
        self.settings = settings or default_settings

    def runtime_coordinates(self) -> list[ArtifactCoordinate]:
        """Artifacts the embedded analyzer needs on its own class path."""
        coords = []
        if self.settings.PLATFORM_API_COORDINATE.strip():
            coords.append(ArtifactCoordinate.parse(self.settings.PLATFORM_API_COORDINATE))
        coords.append(ArtifactCoordinate(ANALYZER_GROUP, ANALYZER_ARTIFACT, self.settings.ANALYZER_VERSION))
        return coords

    def resolve_runtime(
        self, coordinates: Iterable[ArtifactCoordinate], repositories: Sequence[str]
    ) -> frozenset[Path]:
        return frozenset(normalize_path(self.resolver.resolve(c, repositories).path) for c in coordinates)

    @staticmethod
    def project_artifact_paths(
        artifacts: Sequence[ProjectArtifact], declared_dependencies: Sequence[ProjectArtifact]
    ) -> frozenset[Path]:
        # A project that has not gone through full resolution only has its declared list
        if not artifacts:
            artifacts = declared_dependencies

        return frozenset(
            normalize_path(a.file)
            for a in artifacts
            if a.scope != SCOPE_TEST and a.file is not None
        )

    def assemble_dependency_paths(
        self,
        artifacts: Sequence[ProjectArtifact],
        declared_dependencies: Sequence[ProjectArtifact],
        runtime_coordinates: Iterable[ArtifactCoordinate],
        repositories: Sequence[str],
    ) -> frozenset[Path]:
        return self.project_artifact_paths(artifacts, declared_dependencies) | self.resolve_runtime(
            runtime_coordinates, repositories
        )

    @staticmethod
    def assemble_project_paths(output_directory: Path) -> frozenset[Path]:
        return frozenset({normalize_path(output_directory)})

    def repositories_for(self, project: ProjectModel) -> list[str]:
        return list(project.remote_repositories) or self.settings.remote_repositories()

    def assemble(self, project: ProjectModel) -> ClasspathSet:
        repositories = self.repositories_for(project)
        runtime = self.resolve_runtime(self.runtime_coordinates(), repositories)
        dependencies = self.project_artifact_paths(project.artifacts, project.dependency_artifacts) | runtime

        sources: frozenset[Path] = frozenset()
        if project.source_directory is not None and project.source_directory.is_dir():
            sources = frozenset({normalize_path(project.source_directory)})

        classpath = ClasspathSet(
            project_paths=self.assemble_project_paths(project.output_directory),
            dependency_paths=dependencies,
            runtime_paths=runtime,
            source_paths=sources,
        )
        logger.debug("Dependency class paths are: %s", sorted(map(str, classpath.dependency_paths)))
        logger.debug("Project paths are: %s", sorted(map(str, classpath.project_paths)))
        logger.debug("Source paths are: %s", sorted(map(str, classpath.source_paths)))
        return classpath
