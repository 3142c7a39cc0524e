from __future__ import annotations

import os
import tempfile
from pathlib import Path

from jaxrs_pipeline.backends.base import BackendDescriptor
from jaxrs_pipeline.core.errors import FilesystemError, InvalidConfiguration


class OutputService:
    """
    Owns the report location under the build directory.
    """

    @staticmethod
    def validate_sub_path(sub_path: str) -> Path:
        rel = Path(sub_path)
        if rel.is_absolute() or ".." in rel.parts:
            raise InvalidConfiguration(
                f"resourcesDir must be a path relative to the build directory, got {sub_path!r}",
                key="resourcesDir",
            )
        return rel

    @staticmethod
    def ensure_output_directory(build_directory: Path, sub_path: str) -> Path:
        directory = Path(build_directory) / OutputService.validate_sub_path(sub_path)
        try:
            # exist_ok also covers another process creating it first
            directory.mkdir(parents=True, exist_ok=True)
        except FileExistsError as e:
            raise FilesystemError(f"Could not create directory {directory}: a file is in the way", directory) from e
        except OSError as e:
            raise FilesystemError(f"Could not create directory {directory}: {e}", directory) from e
        return directory

    @staticmethod
    def output_file_path(directory: Path, descriptor: BackendDescriptor) -> Path:
        return directory / descriptor.file_name

    @staticmethod
    def write_report(path: Path, text: str) -> None:
        """Replace ``path`` with ``text``; on failure the previous file (if any) is untouched."""
        tmp: Path | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            tmp = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            os.chmod(tmp, 0o644)
            os.replace(tmp, path)
        except OSError as e:
            raise FilesystemError(f"Could not write {path}: {e}", path) from e
        finally:
            if tmp is not None:
                tmp.unlink(missing_ok=True)
