from __future__ import annotations

import logging

from jaxrs_pipeline.backends.cli import CliBackend
from jaxrs_pipeline.backends.registry import BackendRegistry
from jaxrs_pipeline.engine.jar import JarAnalysisEngine
from jaxrs_pipeline.resolution.maven import MavenRepositoryResolver
from jaxrs_pipeline.services.analysis_service import AnalysisService
from jaxrs_pipeline.services.backend_service import BackendService


def build_backend_registry() -> BackendRegistry:
    return BackendRegistry()


def build_analysis_service(logger: logging.Logger | None = None) -> AnalysisService:
    """Wire the default pipeline: Maven resolution, out-of-process analyzer.

    To plug in another engine, pass an ``AnalysisEngine`` and a matching
    backend factory to ``AnalysisService`` directly.
    """
    return AnalysisService(
        registry=build_backend_registry(),
        resolver=MavenRepositoryResolver(),
        engine=JarAnalysisEngine(),
        backends=BackendService(factory=CliBackend),
        logger=logger,
    )
