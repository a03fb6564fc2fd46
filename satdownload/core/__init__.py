"""
Core retrieval engine.

`start` decides which file a run begins with; `sequence` walks the chain of
link resolution, download and progress tracking until the server has no
further files.
"""

from .sequence import RetrievalState, RetrievalStep, SequenceRunner, exit_status_for
from .start import apply_overrides, build_start_request, resolve_start

__all__ = [
    "RetrievalState",
    "RetrievalStep",
    "SequenceRunner",
    "apply_overrides",
    "build_start_request",
    "exit_status_for",
    "resolve_start",
]
