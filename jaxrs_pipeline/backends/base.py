"""Backend contract.

A backend turns an analysed ``Project`` into report text. Backends are
configured once with an option map and are otherwise stateless.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping

from jaxrs_pipeline.domain.models import OptionValue, Project

# Option keys understood by backends
INLINE_PRETTIFY = "inlinePrettify"
SWAGGER_SCHEMES = "swaggerSchemes"
DOMAIN = "domain"
RENDER_SWAGGER_TAGS = "renderSwaggerTags"
SWAGGER_TAGS_PATH_OFFSET = "swaggerTagsPathOffset"


@dataclass(frozen=True)
class BackendDescriptor:
    name: str
    file_name: str


class Backend(ABC):
    @abstractmethod
    def configure(self, options: Mapping[str, OptionValue]) -> None: ...

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def render(self, project: Project) -> str: ...
