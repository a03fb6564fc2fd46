"""
Dataclass for tracking the statistics of a retrieval run.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class RunStats:
    """Tracks what a run has resolved, written and persisted."""

    links_resolved: int = 0
    files_downloaded: int = 0
    bytes_downloaded: int = 0
    last_persisted: int | None = None
    downloaded_paths: list[Path] = field(default_factory=list)
    started_at: float = field(default_factory=time.monotonic, repr=False)

    def record_download(self, path: Path, size: int) -> None:
        self.files_downloaded += 1
        self.bytes_downloaded += size
        self.downloaded_paths.append(path)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started_at
