"""Version-control history lookup used to autofill header dates"""

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from hexosrc.core.errors import HistoryUnavailable


logger = logging.getLogger(__name__)


class HistoryProvider(Protocol):
    def history(self, path: Path) -> list[str]:
        """Return commit timestamps touching path, most recent first.

        Raises HistoryUnavailable when there is no usable history.
        """
        ...


class GitHistory:
    """HistoryProvider backed by `git log`, run from the repository root."""

    def __init__(self, root: Path, binary: str = "git", date_format: str = "%Y-%m-%d %H:%M:%S"):
        self.root = Path(root)
        self.binary = binary
        self.date_format = date_format

    def command(self, path: Path) -> list[str]:
        rel = Path(path)
        if rel.is_absolute():
            rel = rel.relative_to(self.root)
        return [
            self.binary, "log",
            "--pretty=format:%ad", f"--date=format:{self.date_format}",
            "--", rel.as_posix(),
        ]

    def history(self, path: Path) -> list[str]:
        cmd = self.command(path)
        logger.debug("running %s in %s", " ".join(cmd), self.root)
        try:
            proc = subprocess.run(cmd, cwd=self.root, capture_output=True, text=True, check=False)
        except OSError as e:
            raise HistoryUnavailable(f"cannot run {self.binary}: {e}") from e
        if proc.returncode != 0 or proc.stderr.strip():
            raise HistoryUnavailable(
                f"{self.binary} log failed (exit {proc.returncode}): {proc.stderr.strip()}"
            )
        stamps = [line.strip() for line in proc.stdout.splitlines() if line.strip()]
        if not stamps:
            raise HistoryUnavailable(f"no commit history for {path}")
        return stamps
