from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from jaxrs_pipeline.core.config import settings


class _CamelModel(BaseModel):
    # Accept the build tool's camelCase parameter names as well as snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AnalyzerOptions(_CamelModel):
    """User-facing configuration, one field per plugin parameter."""

    backend: str = "plaintext"
    deployed_domain: str = ""
    swagger_schemes: list[str] = ["http"]
    render_swagger_tags: bool = False
    swagger_tags_path_offset: int = 0
    inline_prettify: bool = True
    ignored_root_resources: list[str] = []
    resources_dir: str = Field(default_factory=lambda: settings.RESOURCES_DIR)

    @field_validator("swagger_schemes", "ignored_root_resources", mode="before")
    @classmethod
    def _split_comma_separated(cls, v):
        if isinstance(v, str):
            return [s.strip() for s in v.split(",")]
        return v


class ProjectArtifact(_CamelModel):
    group_id: str
    artifact_id: str
    version: str = ""
    scope: str = "compile"
    file: Path | None = None


class ProjectModel(_CamelModel):
    """Read-only view of the host build tool's project."""

    name: str
    version: str = ""
    output_directory: Path
    build_directory: Path
    source_directory: Path | None = None
    encoding: str | None = None
    artifacts: list[ProjectArtifact] = []
    dependency_artifacts: list[ProjectArtifact] = []
    remote_repositories: list[str] = []
