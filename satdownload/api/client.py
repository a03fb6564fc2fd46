"""
Async client for the score-download API's link-issuance endpoint.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from satdownload.exceptions import (
    LinkResolutionError,
    RequestTimeoutError,
    TransportError,
)
from satdownload.models.config import RetrievalConfig
from satdownload.models.identifier import DownloadLink, FileIdentifier

log = logging.getLogger(__name__)


class ScoreDownloadClient:
    """
    Exchanges file names for short-lived download links.

    Every request carries the static username and password in its JSON body.
    The file is addressed by name only; the server maps the name to the
    organization's storage and answers with a signed URL and the canonical path.
    """

    LINK_ENDPOINT = "/pascoredwnld/file"
    RESOLVE_TIMEOUT = 12  # seconds, whole request

    def __init__(self, config: RetrievalConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=1,
                ssl=self.config.verify_ssl,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.RESOLVE_TIMEOUT),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "ScoreDownloadClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _credentials(self) -> Dict[str, Any]:
        return {"username": self.config.username, "password": self.config.password}

    async def resolve_link(self, identifier: FileIdentifier) -> DownloadLink:
        """
        Requests a download link for a single file.

        Args:
            identifier: The file to request, addressed by its bare name.

        Returns:
            The one-time download URL and the remote file path.

        Raises:
            LinkResolutionError: If the server answers with anything but a
                usable 200 response (no such file, or the sequence is exhausted).
            RequestTimeoutError: If no answer arrives within RESOLVE_TIMEOUT.
            TransportError: If the connection itself fails.
        """
        await self._initialize_session()
        file_name = identifier.file_name
        log.info(f"Getting download link for {file_name}")

        try:
            async with self._session.post(
                self.config.base_url + self.LINK_ENDPOINT,
                params={"filename": file_name},
                json=self._credentials(),
            ) as r:
                if r.status != 200:
                    log.info(f"Getting download link failed: {r.status}")
                    raise LinkResolutionError(file_name, r.status)

                try:
                    body = await r.json(content_type=None)
                    link = DownloadLink(
                        remote_url=str(body["fileUrl"]),
                        remote_file_path=str(body["filePath"]),
                    )
                    if link.local_name in ("", ".", ".."):
                        raise ValueError(f"no file name in path {link.remote_file_path!r}")
                except (ValueError, KeyError, TypeError) as e:
                    log.error(f"[red]Unexpected link response for {file_name}: {e}[/red]")
                    raise LinkResolutionError(
                        file_name, r.status, "malformed response body"
                    ) from e

        except asyncio.TimeoutError as e:
            log.warning(f"Getting download link for {file_name} timed out")
            raise RequestTimeoutError(
                f"No download link for '{file_name}' after {self.RESOLVE_TIMEOUT}s."
            ) from e
        except aiohttp.ClientError as e:
            log.debug(f"Link request for {file_name} failed: {e}")
            raise TransportError(f"Could not reach {self.config.host}: {e}") from e

        log.info(f"Getting download link succeeded: {link.remote_file_path}")
        return link
