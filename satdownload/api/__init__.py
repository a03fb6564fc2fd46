"""
Score Download API Layer.

This package handles all communication with the vendor's link-issuance API.
"""

from .client import ScoreDownloadClient

__all__ = ["ScoreDownloadClient"]
