"""
The retrieval loop: resolve a link, download it, record progress, move to the next file.

Each pass produces a new immutable `RetrievalStep`; the loop ends when a step
reaches a terminal state, which `exit_status_for` turns into a process exit code.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from satdownload.api.client import ScoreDownloadClient
from satdownload.exceptions import (
    CounterWriteError,
    DownloadRefusedError,
    ExitStatus,
    LinkResolutionError,
    LocalStorageError,
    RequestTimeoutError,
    TransportError,
)
from satdownload.models.config import RetrievalConfig
from satdownload.models.identifier import DownloadLink, FileIdentifier
from satdownload.models.stats import RunStats
from satdownload.storage.counter import CounterStore
from satdownload.transfer.downloader import Downloader

log = logging.getLogger(__name__)


class RetrievalState(str, Enum):
    RESOLVING = "resolving"
    DOWNLOADING = "downloading"
    ADVANCING = "advancing"
    # Terminal states
    EXHAUSTED = "exhausted"
    COMPLETED = "completed"
    HALTED = "halted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {
        RetrievalState.EXHAUSTED,
        RetrievalState.COMPLETED,
        RetrievalState.HALTED,
        RetrievalState.FAILED,
    }
)


@dataclass(frozen=True)
class RetrievalStep:
    """The state of the chain between two transitions."""

    state: RetrievalState
    identifier: FileIdentifier
    link: Optional[DownloadLink] = None
    downloaded: int = 0
    error: Optional[Exception] = None


def exit_status_for(step: RetrievalStep) -> ExitStatus:
    """
    Maps a terminal step to the process exit status.

    Running out of files after at least one download is the normal end of a
    sequence; being refused the very first file of a run is an error.
    """
    if step.state is RetrievalState.EXHAUSTED:
        return ExitStatus.SUCCESS if step.downloaded > 0 else ExitStatus.FAILURE
    if step.state is RetrievalState.FAILED:
        return getattr(step.error, "exit_status", ExitStatus.FAILURE)
    return ExitStatus.SUCCESS


class SequenceRunner:
    """Drives a run from its first identifier to a terminal state, one request at a time."""

    def __init__(
        self,
        config: RetrievalConfig,
        client: ScoreDownloadClient,
        downloader: Downloader,
        counter: CounterStore,
        stats: RunStats | None = None,
    ):
        self.config = config
        self.client = client
        self.downloader = downloader
        self.counter = counter
        self.stats = stats or RunStats()

    @property
    def _persisting(self) -> bool:
        return self.config.consecutive_mode and self.config.persist_progress

    async def run(self, start: FileIdentifier) -> RetrievalStep:
        """Runs the chain starting at `start` and returns its terminal step."""
        step = RetrievalStep(RetrievalState.RESOLVING, start)
        while not step.state.is_terminal:
            step = await self.advance(step)
        log.debug(f"Retrieval finished in state '{step.state.value}'.")
        return step

    async def advance(self, step: RetrievalStep) -> RetrievalStep:
        """Performs the single transition out of `step`."""
        handlers = {
            RetrievalState.RESOLVING: self._resolve,
            RetrievalState.DOWNLOADING: self._download,
            RetrievalState.ADVANCING: self._next_file,
        }
        try:
            return await handlers[step.state](step)
        except (
            RequestTimeoutError,
            TransportError,
            LocalStorageError,
            CounterWriteError,
        ) as e:
            log.error(f"[red]{e}[/red]")
            return replace(step, state=RetrievalState.FAILED, error=e)

    async def _resolve(self, step: RetrievalStep) -> RetrievalStep:
        try:
            link = await self.client.resolve_link(step.identifier)
        except LinkResolutionError as e:
            if step.downloaded > 0:
                log.info(f"No more files after {step.downloaded} download(s).")
            return replace(step, state=RetrievalState.EXHAUSTED, error=e)

        self.stats.links_resolved += 1
        if self._persisting and not self.config.persist_after_download:
            await self._persist(step.identifier)
        return replace(step, state=RetrievalState.DOWNLOADING, link=link)

    async def _download(self, step: RetrievalStep) -> RetrievalStep:
        try:
            path, size = await self.downloader.download(
                step.link, self.config.local_directory
            )
        except DownloadRefusedError as e:
            # The chain stops here without touching the counter.
            return replace(step, state=RetrievalState.HALTED, link=None, error=e)

        self.stats.record_download(path, size)
        step = replace(step, link=None, downloaded=step.downloaded + 1)

        if not self.config.consecutive_mode or not step.identifier.is_derived:
            return replace(step, state=RetrievalState.COMPLETED)
        if self._persisting and self.config.persist_after_download:
            await self._persist(step.identifier)
        return replace(step, state=RetrievalState.ADVANCING)

    async def _next_file(self, step: RetrievalStep) -> RetrievalStep:
        identifier = step.identifier.next(self.config)
        return replace(step, state=RetrievalState.RESOLVING, identifier=identifier)

    async def _persist(self, identifier: FileIdentifier) -> None:
        if identifier.sequence_number is None:
            return
        await asyncio.to_thread(self.counter.store, identifier.sequence_number)
        self.stats.last_persisted = identifier.sequence_number
