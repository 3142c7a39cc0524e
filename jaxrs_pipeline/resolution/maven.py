"""Resolve artifacts from Maven repositories.

Lookup order: the local repository cache, then each remote repository in
the order given. ``file:`` repositories are read in place; HTTP(S)
repositories are downloaded with ``httpx`` into the local cache.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from jaxrs_pipeline.core.config import settings
from jaxrs_pipeline.core.errors import ResolutionFailure
from jaxrs_pipeline.domain.models import ArtifactCoordinate, ResolvedArtifact

from .base import ArtifactResolver

logger = logging.getLogger(__name__)


class MavenRepositoryResolver(ArtifactResolver):
    def __init__(
        self,
        local_repository: Path | str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.local_repository = Path(local_repository or settings.LOCAL_REPOSITORY).expanduser()
        self.timeout = timeout if timeout is not None else settings.RESOLVER_TIMEOUT
        self._client = client

    def resolve(self, coordinate: ArtifactCoordinate, repositories: Sequence[str]) -> ResolvedArtifact:
        logger.debug("Resolving artifact %s from %s", coordinate, list(repositories))

        result = self._from_cache(coordinate) or self._from_remotes(coordinate, repositories)

        logger.debug("Resolved artifact %s to %s from %s", coordinate, result.path, result.repository)
        return result

    def _from_cache(self, coordinate: ArtifactCoordinate) -> ResolvedArtifact | None:
        cached = self.local_repository / coordinate.repository_path()
        if cached.is_file():
            return ResolvedArtifact(coordinate, cached, self.local_repository.as_uri())
        return None

    def _from_remotes(self, coordinate: ArtifactCoordinate, repositories: Sequence[str]) -> ResolvedArtifact:
        if not repositories:
            raise ResolutionFailure(coordinate, "no remote repositories configured")

        errors: list[str] = []
        with self._open_client() as client:
            for repo in repositories:
                if urlparse(repo).scheme == "file":
                    path = Path(url2pathname(urlparse(repo).path)) / coordinate.repository_path()
                    if path.is_file():
                        return ResolvedArtifact(coordinate, path, repo)
                    errors.append(f"{repo}: not found")
                    continue

                url = f"{repo.rstrip('/')}/{coordinate.repository_path()}"
                try:
                    path = self._download(client, url, coordinate)
                except httpx.HTTPError as e:
                    errors.append(f"{repo}: {e}")
                    continue
                if path is None:
                    errors.append(f"{repo}: not found")
                    continue
                return ResolvedArtifact(coordinate, path, repo)

        raise ResolutionFailure(coordinate, "; ".join(errors))

    def _open_client(self):
        if self._client is not None:
            return contextlib.nullcontext(self._client)
        return httpx.Client(timeout=self.timeout, follow_redirects=True)

    def _download(self, client: httpx.Client, url: str, coordinate: ArtifactCoordinate) -> Path | None:
        target = self.local_repository / coordinate.repository_path()
        with client.stream("GET", url) as r:
            if r.status_code == 404:
                return None
            r.raise_for_status()

            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".part")
            except OSError as e:
                raise ResolutionFailure(coordinate, f"cannot write to local repository: {e}") from e

            tmp = Path(tmp_name)
            try:
                with os.fdopen(fd, "wb") as f:
                    for chunk in r.iter_bytes():
                        f.write(chunk)
                os.replace(tmp, target)
            except OSError as e:
                raise ResolutionFailure(coordinate, f"cannot write to local repository: {e}") from e
            finally:
                # only left behind when the transfer or rename failed
                tmp.unlink(missing_ok=True)

        return target
