"""
Turns the command-line start request into the first file identifier of a run.
"""

import logging
from datetime import date

from satdownload.models.config import RetrievalConfig
from satdownload.models.identifier import FileIdentifier, StartMode, StartRequest
from satdownload.storage.counter import CounterStore
from satdownload.utils.formatting import parse_reference_date, strip_quotes

log = logging.getLogger(__name__)


def build_start_request(
    date_value: str | None,
    file_num: int | None = None,
    file_name: str | None = None,
    today: date | None = None,
) -> StartRequest:
    """
    Validates the raw command-line values describing where a run starts.

    Raises:
        InvalidDateError: If the date cannot be parsed.
        InvalidFileNumberError: If the file number is negative.
    """
    if file_name is not None:
        file_name = strip_quotes(file_name).strip() or None
    return StartRequest(
        reference_date=parse_reference_date(date_value, today=today),
        file_name=file_name,
        file_num=file_num,
    )


def apply_overrides(config: RetrievalConfig, request: StartRequest) -> RetrievalConfig:
    """
    Returns the configuration adjusted for how the run was started.

    An explicit file name downloads exactly that file, so both consecutive mode
    and progress persistence are switched off. An explicit file number still
    walks the sequence but must not overwrite the counter.
    """
    if request.mode is StartMode.FILENAME:
        return config.model_copy(
            update={"consecutive_mode": False, "persist_progress": False}
        )
    if request.mode is StartMode.FILENUM:
        return config.model_copy(update={"persist_progress": False})
    return config


def resolve_start(
    request: StartRequest, config: RetrievalConfig, counter: CounterStore
) -> FileIdentifier:
    """
    Picks the first file to request.

    Raises:
        CounterReadError: If resuming and the counter file cannot be read.
    """
    mode = request.mode
    if mode is StartMode.FILENAME:
        return FileIdentifier.explicit(request.file_name)

    if mode is StartMode.FILENUM:
        sequence_number = request.file_num
    else:
        last = counter.load()
        sequence_number = last + 1
        log.debug(f"Resuming after file number {last} from '{counter.path}'.")

    return FileIdentifier.derive(config, request.reference_date, sequence_number)
