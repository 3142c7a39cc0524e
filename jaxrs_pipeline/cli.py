from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from jaxrs_pipeline.core.containers import build_analysis_service, build_backend_registry
from jaxrs_pipeline.core.errors import PipelineError
from jaxrs_pipeline.core.logging import setup_logging
from jaxrs_pipeline.domain.schemas import AnalyzerOptions, ProjectModel

# CLI flag dest -> model field; only flags actually given override the project file
_PROJECT_FLAGS = ("name", "version", "output_directory", "build_directory", "source_directory", "encoding")
_OPTION_FLAGS = (
    "backend",
    "deployed_domain",
    "swagger_schemes",
    "render_swagger_tags",
    "swagger_tags_path_offset",
    "inline_prettify",
    "ignored_root_resources",
    "resources_dir",
)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="jaxrs-pipeline",
        description="Analyze the JAX-RS resources of a compiled project and write the report to the build directory.",
    )
    p.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL env or INFO)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("backends", help="List available backends and their output files")

    an = sub.add_parser("analyze", help="Run the analysis pipeline once")
    an.add_argument("--project", type=Path, help="JSON file describing the project (build tool export)")

    proj = an.add_argument_group("project")
    proj.add_argument("--name")
    proj.add_argument("--version")
    proj.add_argument("--output-directory", type=Path, help="Compiled classes root")
    proj.add_argument("--build-directory", type=Path, help="Parent of the report directory")
    proj.add_argument("--source-directory", type=Path)
    proj.add_argument("--encoding", help="Source file encoding")
    proj.add_argument(
        "--dependency",
        action="append",
        default=[],
        metavar="PATH",
        help="Dependency jar or directory (repeatable)",
    )
    proj.add_argument("--repository", action="append", default=[], metavar="URL", help="Remote repository (repeatable)")

    opts = an.add_argument_group("options")
    opts.add_argument("--backend", help="plaintext, asciidoc, markdown or swagger (default: plaintext)")
    opts.add_argument("--deployed-domain")
    opts.add_argument("--swagger-schemes", help="Comma separated, e.g. http,https")
    opts.add_argument("--render-swagger-tags", action=argparse.BooleanOptionalAction, default=None)
    opts.add_argument("--swagger-tags-path-offset", type=int)
    opts.add_argument("--inline-prettify", action=argparse.BooleanOptionalAction, default=None)
    opts.add_argument("--ignored-root-resources", help="Comma separated fully-qualified class names")
    opts.add_argument("--resources-dir")
    return p


def _given(args: argparse.Namespace, names: tuple[str, ...]) -> dict:
    return {to_camel(n): getattr(args, n) for n in names if getattr(args, n) is not None}


def load_inputs(args: argparse.Namespace) -> tuple[ProjectModel, AnalyzerOptions]:
    project_data: dict = {}
    options_data: dict = {}
    if args.project:
        doc = json.loads(args.project.read_text(encoding="utf-8"))
        if not isinstance(doc, dict):
            raise ValueError(f"{args.project} must hold a JSON object, got {type(doc).__name__}")
        # either {"project": {...}, "options": {...}} or a bare project
        if "project" in doc:
            if not isinstance(doc["project"], dict) or not isinstance(doc.get("options") or {}, dict):
                raise ValueError(f"{args.project}: \"project\" and \"options\" must be JSON objects")
            project_data = dict(doc["project"])
            options_data = dict(doc.get("options") or {})
        else:
            project_data = dict(doc)

    project_data.update(_given(args, _PROJECT_FLAGS))
    if args.dependency:
        extra = [{"groupId": "cli", "artifactId": Path(d).name, "file": d} for d in args.dependency]
        project_data["artifacts"] = list(project_data.get("artifacts", [])) + extra
    if args.repository:
        project_data["remoteRepositories"] = args.repository
    options_data.update(_given(args, _OPTION_FLAGS))

    return ProjectModel.model_validate(project_data), AnalyzerOptions.model_validate(options_data)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.cmd == "backends":
        for d in build_backend_registry().descriptors():
            print(f"{d.name}\t{d.file_name}")
        return 0

    try:
        project, options = load_inputs(args)
    except (OSError, ValueError, ValidationError) as e:
        print(f"error: invalid input: {e}", file=sys.stderr)
        return 2

    try:
        outcome = build_analysis_service().run(project, options)
    except PipelineError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    if outcome.output_path:
        print(outcome.output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
