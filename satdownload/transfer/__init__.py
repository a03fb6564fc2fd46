"""
Transfer Layer.

This package streams resolved download links to local storage.
"""

from .downloader import Downloader

__all__ = ["Downloader"]
