from __future__ import annotations

import logging
import time

from jaxrs_pipeline.backends.base import Backend
from jaxrs_pipeline.backends.registry import BackendRegistry
from jaxrs_pipeline.core.config import Settings
from jaxrs_pipeline.core.errors import AnalysisFailure, PipelineError
from jaxrs_pipeline.domain.models import (
    AnalysisConfig,
    AnalysisOutcome,
    ClasspathSet,
    Phase,
    Project,
)
from jaxrs_pipeline.domain.schemas import AnalyzerOptions, ProjectModel
from jaxrs_pipeline.engine.base import AnalysisEngine
from jaxrs_pipeline.resolution.base import ArtifactResolver
from jaxrs_pipeline.services.backend_service import BackendService
from jaxrs_pipeline.services.classpath_service import ClasspathService
from jaxrs_pipeline.services.output_service import OutputService


class AnalysisService:
    """
    Orchestrates one analysis run:
    validate → assemble classpath → configure backend → prepare output → analyze → write.

    Each run is independent; nothing is kept on the instance between calls.
    """

    def __init__(
        self,
        registry: BackendRegistry,
        resolver: ArtifactResolver,
        engine: AnalysisEngine,
        backends: BackendService | None = None,
        logger: logging.Logger | None = None,
        settings: Settings | None = None,
    ):
        self.registry = registry
        self.engine = engine
        self.backends = backends or BackendService()
        self.classpath = ClasspathService(resolver, settings)
        self.log = logger or logging.getLogger(__name__)

    def run(self, project: ProjectModel, options: AnalyzerOptions) -> AnalysisOutcome:
        phases: list[Phase] = [Phase.IDLE]

        def enter(phase: Phase) -> None:
            phases.append(phase)
            self.log.debug("Entering %s", phase.value, extra={"phase": phase.value})

        try:
            enter(Phase.VALIDATING)
            # nothing compiled yet: a normal no-op, not an error
            if not project.output_directory.is_dir():
                self.log.info("skipping non existing directory %s", project.output_directory)
                phases.append(Phase.SKIPPED)
                return AnalysisOutcome(status="skipped", phases=phases)

            descriptor = self.registry.resolve(options.backend)
            self.backends.validate(descriptor, options)
            OutputService.validate_sub_path(options.resources_dir)
            ignored = self._ignored_resources(options)

            enter(Phase.ASSEMBLING_CLASSPATH)
            classpath = self.classpath.assemble(project)

            enter(Phase.CONFIGURING_BACKEND)
            backend = self.backends.configure(descriptor, options)
            self.log.info(
                "analyzing JAX-RS resources, using %s backend",
                backend.name(),
                extra={"backend": descriptor.name},
            )

            enter(Phase.PREPARING_OUTPUT)
            directory = OutputService.ensure_output_directory(project.build_directory, options.resources_dir)
            output_path = OutputService.output_file_path(directory, descriptor)
            config = AnalysisConfig(
                backend=descriptor.name,
                options=self.backends.build_option_map(descriptor, options),
                ignored_resources=ignored,
                project_name=project.name,
                project_version=project.version,
                output_path=output_path,
                encoding=project.encoding,
            )
            self.log.info("Generating resources at %s", output_path.absolute())

            enter(Phase.ANALYZING)
            start = time.perf_counter()
            try:
                text = self._analyze(backend, classpath, config)
            finally:
                elapsed_ms = int((time.perf_counter() - start) * 1000)
                self.log.info("Analysis took %d ms", elapsed_ms, extra={"phase": Phase.ANALYZING.value})

            enter(Phase.WRITING)
            OutputService.write_report(output_path, text)

            phases.append(Phase.DONE)
            return AnalysisOutcome(
                status="done",
                backend=descriptor.name,
                output_path=output_path,
                elapsed_ms=elapsed_ms,
                phases=phases,
            )
        except PipelineError as e:
            e.phase = phases[-1].value
            phases.append(Phase.FAILED)
            self.log.error("JAX-RS analysis failed while %s: %s", e.phase, e.message, extra={"phase": e.phase})
            raise

    def _ignored_resources(self, options: AnalyzerOptions) -> frozenset[str]:
        ignored = [r.strip() for r in options.ignored_root_resources if r and r.strip()]
        for name in ignored:
            self.log.info("Class %s will be ignored as root resource.", name)
        return frozenset(ignored)

    def _analyze(self, backend: Backend, classpath: ClasspathSet, config: AnalysisConfig) -> str:
        try:
            resources = self.engine.analyze(classpath, config)
            return backend.render(Project(config.project_name, config.project_version, resources))
        except PipelineError:
            raise
        except Exception as e:
            raise AnalysisFailure(f"Analysis of {config.project_name} failed: {e}") from e
