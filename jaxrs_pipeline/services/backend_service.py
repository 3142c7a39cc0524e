from __future__ import annotations

from typing import Callable

from jaxrs_pipeline.backends.base import (
    DOMAIN,
    INLINE_PRETTIFY,
    RENDER_SWAGGER_TAGS,
    SWAGGER_SCHEMES,
    SWAGGER_TAGS_PATH_OFFSET,
    Backend,
    BackendDescriptor,
)
from jaxrs_pipeline.backends.cli import CliBackend
from jaxrs_pipeline.backends.registry import SWAGGER
from jaxrs_pipeline.core.errors import InvalidConfiguration
from jaxrs_pipeline.domain.models import OptionValue
from jaxrs_pipeline.domain.schemas import AnalyzerOptions

VALID_SCHEMES = ("http", "https", "ws", "wss")

BackendFactory = Callable[[BackendDescriptor], Backend]


class BackendService:
    """
    Translates user options into a configured backend.
    """

    def __init__(self, factory: BackendFactory = CliBackend):
        self.factory = factory

    @staticmethod
    def normalize_schemes(schemes: list[str]) -> list[str]:
        tokens = [s.strip().lower() for s in schemes if s and s.strip()]
        if not tokens:
            raise InvalidConfiguration(
                f"swaggerSchemes must not be empty. Valid values are: {', '.join(VALID_SCHEMES)}",
                key="swaggerSchemes",
            )

        normalized: list[str] = []
        for t in tokens:
            if t not in VALID_SCHEMES:
                raise InvalidConfiguration(
                    f"Swagger scheme {t} not valid! Valid values are: {', '.join(VALID_SCHEMES)}",
                    key="swaggerSchemes",
                )
            if t not in normalized:
                normalized.append(t)
        return normalized

    def validate(self, descriptor: BackendDescriptor, options: AnalyzerOptions) -> None:
        self.build_option_map(descriptor, options)

    def build_option_map(self, descriptor: BackendDescriptor, options: AnalyzerOptions) -> dict[str, OptionValue]:
        config: dict[str, OptionValue] = {INLINE_PRETTIFY: options.inline_prettify}

        if descriptor.name != SWAGGER.name:
            return config

        if options.swagger_tags_path_offset < 0:
            raise InvalidConfiguration(
                f"swaggerTagsPathOffset must be 0 or greater, got {options.swagger_tags_path_offset}",
                key="swaggerTagsPathOffset",
            )

        config[SWAGGER_SCHEMES] = ",".join(self.normalize_schemes(options.swagger_schemes))
        config[DOMAIN] = options.deployed_domain or ""
        config[RENDER_SWAGGER_TAGS] = options.render_swagger_tags
        config[SWAGGER_TAGS_PATH_OFFSET] = options.swagger_tags_path_offset
        return config

    def configure(self, descriptor: BackendDescriptor, options: AnalyzerOptions) -> Backend:
        config = self.build_option_map(descriptor, options)
        backend = self.factory(descriptor)
        backend.configure(config)
        return backend
