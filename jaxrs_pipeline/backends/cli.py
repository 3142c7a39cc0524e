from __future__ import annotations

from typing import Mapping

from jaxrs_pipeline.core.errors import AnalysisFailure
from jaxrs_pipeline.domain.models import OptionValue, Project

from .base import Backend, BackendDescriptor


class CliBackend(Backend):
    """Backend paired with ``JarAnalysisEngine``.

    The analyzer CLI renders the report itself, so this backend only holds
    its options and hands back the document the engine produced.
    """

    def __init__(self, descriptor: BackendDescriptor):
        self.descriptor = descriptor
        self.options: dict[str, OptionValue] = {}

    def configure(self, options: Mapping[str, OptionValue]) -> None:
        self.options = dict(options)

    def name(self) -> str:
        return self.descriptor.name

    def render(self, project: Project) -> str:
        resources = project.resources
        if resources.format != self.descriptor.name:
            raise AnalysisFailure(
                f"Engine rendered a {resources.format} document, expected {self.descriptor.name}"
            )
        return resources.document
