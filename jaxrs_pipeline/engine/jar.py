from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from jaxrs_pipeline.backends.base import (
    DOMAIN,
    INLINE_PRETTIFY,
    RENDER_SWAGGER_TAGS,
    SWAGGER_SCHEMES,
    SWAGGER_TAGS_PATH_OFFSET,
)
from jaxrs_pipeline.core.config import settings
from jaxrs_pipeline.core.errors import AnalysisFailure
from jaxrs_pipeline.core.util import run_cmd
from jaxrs_pipeline.domain.models import AnalysisConfig, ClasspathSet, Resources

from .base import AnalysisEngine

logger = logging.getLogger(__name__)

MAIN_CLASS = "com.sebastian_daschner.jaxrs_analyzer.Main"
# report is read from stdout as UTF-8 regardless of the platform default
JVM_ENCODING_FLAGS = ("-Dfile.encoding=UTF-8", "-Dstdout.encoding=UTF-8")


def _joined(paths: Iterable[Path]) -> str:
    return os.pathsep.join(sorted(str(p) for p in paths))


class JarAnalysisEngine(AnalysisEngine):
    """Runs the analyzer's command line entry point in a separate JVM.

    The resolved runtime artifacts form the JVM classpath; the remaining
    dependency paths are handed to the analyzer as the project's class path.
    The rendered report is read from stdout.
    """

    def __init__(self, java_bin: str | None = None):
        self.java_bin = java_bin or settings.JAVA_BIN

    def build_command(self, classpath: ClasspathSet, config: AnalysisConfig) -> list[str]:
        if not classpath.runtime_paths:
            raise AnalysisFailure("No analyzer runtime on the classpath")

        cmd = [self.java_bin, *JVM_ENCODING_FLAGS, "-cp", _joined(classpath.runtime_paths), MAIN_CLASS]
        cmd += ["-b", config.backend, "-n", config.project_name, "-v", config.project_version]

        libraries = classpath.dependency_paths - classpath.runtime_paths
        if libraries:
            cmd += ["-cp", _joined(libraries)]
        if classpath.source_paths:
            cmd += ["-sp", _joined(classpath.source_paths)]
        if config.encoding:
            cmd += ["-e", config.encoding]
        if logger.isEnabledFor(logging.DEBUG):
            cmd.append("-X")

        opts = config.options
        if opts.get(DOMAIN):
            cmd += ["-d", str(opts[DOMAIN])]
        if SWAGGER_SCHEMES in opts:
            cmd += ["--swaggerSchemes", str(opts[SWAGGER_SCHEMES])]
        if opts.get(RENDER_SWAGGER_TAGS):
            cmd.append("--renderSwaggerTags")
        if SWAGGER_TAGS_PATH_OFFSET in opts:
            cmd += ["--swaggerTagsPathOffset", str(opts[SWAGGER_TAGS_PATH_OFFSET])]
        if opts.get(INLINE_PRETTIFY) is False:
            cmd.append("--noPrettyPrint")
        if config.ignored_resources:
            cmd += ["--ignoredRootResources", ",".join(sorted(config.ignored_resources))]

        cmd += sorted(str(p) for p in classpath.project_paths)
        return cmd

    def analyze(self, classpath: ClasspathSet, config: AnalysisConfig) -> Resources:
        cmd = self.build_command(classpath, config)
        try:
            r = run_cmd(cmd, cwd=config.output_path.parent, encoding="utf-8")
        except OSError as e:
            raise AnalysisFailure(f"Could not start analyzer with {self.java_bin}: {e}") from e

        if r.stderr:
            logger.debug("Analyzer stderr: %s", r.stderr_tail())
        if r.exit_code != 0:
            raise AnalysisFailure(f"Analyzer exited with code {r.exit_code}: {r.stderr_tail()}")

        return Resources(document=r.stdout, format=config.backend)
