from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Literal, Mapping

from jaxrs_pipeline.core.errors import InvalidConfiguration

OptionValue = str | bool | int

SCOPE_TEST = "test"


def normalize_path(p: str | Path) -> Path:
    """Absolute, lexically normalized path used for classpath equality."""
    return Path(os.path.normpath(os.path.abspath(p)))


@dataclass(frozen=True)
class ArtifactCoordinate:
    group: str
    artifact: str
    version: str
    extension: str = "jar"
    classifier: str = ""

    @classmethod
    def parse(cls, value: str) -> ArtifactCoordinate:
        """Parse ``group:artifact[:extension[:classifier]]:version``."""
        parts = [p.strip() for p in value.strip().split(":")]
        if len(parts) < 3 or len(parts) > 5 or not all(parts):
            raise InvalidConfiguration(
                f"Bad artifact coordinates {value!r}, expected format is "
                "<groupId>:<artifactId>[:<extension>[:<classifier>]]:<version>",
                key="coordinate",
            )
        group, artifact, *middle, version = parts
        extension = middle[0] if middle else "jar"
        classifier = middle[1] if len(middle) > 1 else ""
        return cls(group, artifact, version, extension, classifier)

    @property
    def file_name(self) -> str:
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.artifact}-{self.version}{suffix}.{self.extension}"

    def repository_path(self) -> str:
        """Relative location inside a Maven repository layout."""
        return "/".join([*self.group.split("."), self.artifact, self.version, self.file_name])

    def __str__(self) -> str:
        middle = [self.extension]
        if self.classifier:
            middle.append(self.classifier)
        return ":".join([self.group, self.artifact, *middle, self.version])


@dataclass(frozen=True)
class ResolvedArtifact:
    coordinate: ArtifactCoordinate
    path: Path
    repository: str


@dataclass(frozen=True)
class ClasspathSet:
    project_paths: frozenset[Path]
    dependency_paths: frozenset[Path]
    # subset of dependency_paths: the analyzer's own runtime artifacts
    runtime_paths: frozenset[Path] = frozenset()
    source_paths: frozenset[Path] = frozenset()


@dataclass(frozen=True)
class AnalysisConfig:
    backend: str
    options: Mapping[str, OptionValue]
    ignored_resources: frozenset[str]
    project_name: str
    project_version: str
    output_path: Path
    encoding: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


@dataclass(frozen=True)
class Resources:
    """Opaque engine result; ``document`` is what the engine produced for ``format``."""

    document: str
    format: str


@dataclass(frozen=True)
class Project:
    name: str
    version: str
    resources: Resources


class Phase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    ASSEMBLING_CLASSPATH = "assembling_classpath"
    CONFIGURING_BACKEND = "configuring_backend"
    PREPARING_OUTPUT = "preparing_output"
    ANALYZING = "analyzing"
    WRITING = "writing"
    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class AnalysisOutcome:
    status: Literal["done", "skipped"]
    backend: str | None = None
    output_path: Path | None = None
    elapsed_ms: int | None = None
    phases: list[Phase] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "backend": self.backend,
            "output_path": str(self.output_path) if self.output_path else None,
            "elapsed_ms": self.elapsed_ms,
            "phases": [p.value for p in self.phases],
        }
