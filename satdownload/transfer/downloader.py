"""
Handles the low-level streaming of a resolved download link to local storage.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiofiles
import aiohttp

from satdownload.exceptions import (
    DownloadRefusedError,
    LocalStorageError,
    RequestTimeoutError,
    TransportError,
)
from satdownload.models.identifier import DownloadLink

log = logging.getLogger(__name__)


class Downloader:
    """Streams one download link at a time into a local directory."""

    CHUNK_SIZE = 131072  # 128 KB
    DOWNLOAD_TIMEOUT = 30  # seconds, connect and between reads

    def __init__(self, verify_ssl: bool = True):
        self.verify_ssl = verify_ssl
        self._session: aiohttp.ClientSession | None = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available for downloads."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=1,
                ssl=self.verify_ssl,
                keepalive_timeout=30,
                enable_cleanup_closed=True,
            )
            # No total limit: large files may take longer than the idle timeout.
            timeout = aiohttp.ClientTimeout(
                total=None,
                sock_connect=self.DOWNLOAD_TIMEOUT,
                sock_read=self.DOWNLOAD_TIMEOUT,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers={"Accept": "application/octet-stream"},
            )
            log.debug("Created download session.")

    async def close(self) -> None:
        """Gracefully closes the download session."""
        if self._session and not self._session.closed:
            await self._session.close()
            log.debug("Download session closed.")

    async def __aenter__(self) -> "Downloader":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def download(
        self, link: DownloadLink, local_directory: str | Path
    ) -> tuple[Path, int]:
        """
        Downloads the file behind `link` into `local_directory`.

        The local file is named after the last segment of the remote path and is
        written chunk by chunk, so the payload is never held in memory as a whole.

        Returns:
            The path of the written file and the number of bytes written.

        Raises:
            DownloadRefusedError: If the file host answers with a non-200 status.
            RequestTimeoutError: If connecting or reading stalls for DOWNLOAD_TIMEOUT.
            TransportError: If the connection fails.
            LocalStorageError: If the file cannot be written locally.
        """
        directory = Path(local_directory).expanduser()
        destination_path = directory / link.local_name

        await self._initialize_session()
        writing = False
        bytes_downloaded = 0
        try:
            await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
            async with self._session.get(link.remote_url, allow_redirects=True) as response:
                if response.status != 200:
                    log.error(
                        f"[red]Download of {link.remote_file_path} failed with status"
                        f" code {response.status}[/red]"
                    )
                    raise DownloadRefusedError(link.remote_file_path, response.status)

                writing = True
                async with aiofiles.open(destination_path, "wb") as f:
                    async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                        await f.write(chunk)
                        bytes_downloaded += len(chunk)

        except asyncio.TimeoutError as e:
            log.warning(f"Download of {link.remote_file_path} timed out")
            if writing:
                await self._discard_partial(destination_path)
            raise RequestTimeoutError(
                f"Download of '{link.remote_file_path}' stalled for"
                f" {self.DOWNLOAD_TIMEOUT}s."
            ) from e
        except aiohttp.ClientError as e:
            log.debug(f"Download of '{link.remote_file_path}' failed: {e}")
            if writing:
                await self._discard_partial(destination_path)
            raise TransportError(f"Download of '{link.remote_file_path}' failed: {e}") from e
        except OSError as e:
            if writing:
                await self._discard_partial(destination_path)
            raise LocalStorageError(f"Cannot write '{destination_path}': {e}") from e

        log.info(f"File Downloaded: {destination_path} ({bytes_downloaded} bytes)")
        return destination_path, bytes_downloaded

    @staticmethod
    async def _discard_partial(path: Path) -> None:
        """Removes a partially written file left behind by an aborted transfer."""
        try:
            exists = await asyncio.to_thread(os.path.isfile, path)
            if exists:
                await asyncio.to_thread(os.remove, path)
                log.debug(f"Removed partial file '{path.name}'.")
        except OSError as e:
            log.warning(f"Could not remove partial file '{path}': {e}")
