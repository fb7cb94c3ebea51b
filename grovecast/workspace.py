"""Per-run temporary file namespace."""

import re
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Iterable, List, Optional

from rich.console import Console

console = Console()

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class RunWorkspace:
    """
    Temp directory owned by a single pipeline run.

    Every file name is prefixed with the run id and lives in a directory
    named after it, so concurrent runs never touch each other's segments.
    """

    def __init__(self, temp_root: Optional[Path] = None, run_id: Optional[str] = None) -> None:
        self.run_id = run_id or uuid.uuid4().hex[:12]
        root = Path(temp_root) if temp_root else Path(tempfile.gettempdir())
        self.directory = root / f"grovecast-{self.run_id}"
        self.directory.mkdir(parents=True, exist_ok=True)
        self._tracked: List[Path] = []

    def path_for(self, name: str, extension: str) -> Path:
        """Reserve a tracked path for ``name`` within this run."""
        safe_name = _UNSAFE_NAME_CHARS.sub("_", name)
        path = self.directory / f"{self.run_id}_{safe_name}.{extension.lstrip('.')}"
        self.track(path)
        return path

    def track(self, path: Path) -> None:
        if path not in self._tracked:
            self._tracked.append(path)

    def release(self, path: Path) -> None:
        """Stop tracking a file that has left the workspace."""
        if path in self._tracked:
            self._tracked.remove(path)

    def discard(self, paths: Iterable[Path]) -> None:
        """Delete files now; missing files are ignored."""
        for path in list(paths):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                console.print(f"[yellow]Could not delete {path.name}: {e}[/yellow]")
            self.release(path)

    def cleanup(self) -> None:
        """Best-effort removal of every file and the run directory."""
        self.discard(self._tracked)
        shutil.rmtree(self.directory, ignore_errors=True)
