from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass
class CmdResult:
    exit_code: int
    stdout: str
    stderr: str

    def stderr_tail(self, lines: int = 20) -> str:
        return "\n".join(self.stderr.strip().splitlines()[-lines:])


def run_cmd(
    cmd: Sequence[str],
    cwd: Path,
    timeout_sec: int | None = None,
    env: Mapping[str, str] | None = None,
    encoding: str | None = None,
) -> CmdResult:
    logger.debug("Running %s in %s", shlex.join(cmd), cwd)
    p = subprocess.run(
        list(cmd),
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding=encoding,
        timeout=timeout_sec,
        env=dict(env) if env is not None else None,
    )
    return CmdResult(p.returncode, p.stdout or "", p.stderr or "")
