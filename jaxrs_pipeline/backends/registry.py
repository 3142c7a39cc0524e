from __future__ import annotations

from typing import Iterable

from jaxrs_pipeline.core.errors import InvalidConfiguration

from .base import BackendDescriptor

PLAINTEXT = BackendDescriptor("plaintext", "rest-resources.txt")
ASCIIDOC = BackendDescriptor("asciidoc", "rest-resources.adoc")
MARKDOWN = BackendDescriptor("markdown", "rest-resources.md")
SWAGGER = BackendDescriptor("swagger", "swagger.json")

DEFAULT_BACKENDS = (PLAINTEXT, ASCIIDOC, MARKDOWN, SWAGGER)


class BackendRegistry:
    def __init__(self, descriptors: Iterable[BackendDescriptor] = DEFAULT_BACKENDS):
        self._by_name: dict[str, BackendDescriptor] = {}
        for d in descriptors:
            if d.name.lower() in self._by_name:
                raise ValueError(f"Duplicate backend '{d.name}'")
            self._by_name[d.name.lower()] = d

        file_names = [d.file_name for d in self._by_name.values()]
        if len(set(file_names)) != len(file_names):
            raise ValueError(f"Backend output file names must be unique: {file_names}")

    def list(self) -> list[str]:
        """Canonical names in declaration order."""
        return [d.name for d in self._by_name.values()]

    def resolve(self, name: str) -> BackendDescriptor:
        d = self._by_name.get((name or "").strip().lower())
        if d is None:
            raise InvalidConfiguration(
                f"Backend {name} not valid! Valid values are: {', '.join(self.list())}",
                key="backend",
            )
        return d

    def descriptors(self) -> list[BackendDescriptor]:
        return list(self._by_name.values())
