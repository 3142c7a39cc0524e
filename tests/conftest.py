import logging
from pathlib import Path

import pytest

from jaxrs_pipeline.backends.registry import BackendRegistry
from jaxrs_pipeline.core.config import Settings
from jaxrs_pipeline.core.errors import ResolutionFailure
from jaxrs_pipeline.domain.models import ResolvedArtifact, Resources
from jaxrs_pipeline.domain.schemas import ProjectModel
from jaxrs_pipeline.engine.base import AnalysisEngine
from jaxrs_pipeline.resolution.base import ArtifactResolver
from jaxrs_pipeline.services.analysis_service import AnalysisService


class FakeResolver(ArtifactResolver):
    """Resolves every coordinate to <root>/<file name> unless told to fail."""

    def __init__(self, root: Path, failing: set[str] | None = None):
        self.root = root
        self.failing = failing or set()
        self.calls: list[tuple[str, list[str]]] = []

    def resolve(self, coordinate, repositories):
        self.calls.append((str(coordinate), list(repositories)))
        if coordinate.artifact in self.failing:
            raise ResolutionFailure(coordinate, "not found in any repository")
        path = self.root / coordinate.file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"PK")
        return ResolvedArtifact(coordinate, path, "https://repo.example/maven2")


class FakeEngine(AnalysisEngine):
    """Deterministic engine: the document lists what it was given."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    def analyze(self, classpath, config):
        self.calls.append((classpath, config))
        if self.error is not None:
            raise self.error
        lines = [
            f"REST resources of {config.project_name}:",
            config.project_version,
            *sorted(config.ignored_resources),
        ]
        return Resources(document="\n".join(lines) + "\n", format=config.backend)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        ANALYZER_VERSION="0.17",
        PLATFORM_API_COORDINATE="",
        REMOTE_REPOSITORIES="https://repo.example/maven2",
    )


@pytest.fixture
def resolver(tmp_path) -> FakeResolver:
    return FakeResolver(tmp_path / "m2")


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def project(tmp_path) -> ProjectModel:
    """A compiled project with one class and no dependencies."""
    classes = tmp_path / "target" / "classes"
    (classes / "com" / "example").mkdir(parents=True)
    (classes / "com" / "example" / "UsersResource.class").write_bytes(b"\xca\xfe\xba\xbe")
    return ProjectModel(
        name="users-service",
        version="1.0.0",
        output_directory=classes,
        build_directory=tmp_path / "target",
    )


@pytest.fixture
def service(resolver, engine, test_settings) -> AnalysisService:
    return AnalysisService(
        registry=BackendRegistry(),
        resolver=resolver,
        engine=engine,
        logger=logging.getLogger("tests.pipeline"),
        settings=test_settings,
    )


@pytest.fixture
def failing_resolver(tmp_path) -> FakeResolver:
    return FakeResolver(tmp_path / "m2", failing={"jaxrs-analyzer"})


@pytest.fixture
def failing_engine() -> FakeEngine:
    return FakeEngine(error=RuntimeError("class file com/example/Broken.class is corrupt"))
