"""
Data Models Layer.

This package contains the Pydantic configuration model and the small value
types passed between the resolver, the downloader and the sequence runner.
"""

from .config import RetrievalConfig
from .identifier import DownloadLink, FileIdentifier, StartMode, StartRequest
from .stats import RunStats

__all__ = [
    "DownloadLink",
    "FileIdentifier",
    "RetrievalConfig",
    "RunStats",
    "StartMode",
    "StartRequest",
]
