"""
Value types describing which file to fetch and where to fetch it from.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from satdownload.exceptions import InvalidFileNumberError
from satdownload.utils.formatting import format_file_date, pad_number

from .config import RetrievalConfig


@dataclass(frozen=True)
class FileIdentifier:
    """
    Names one remote file.

    A derived identifier is built from the organization ID, a reference date
    and a sequence number, and can be advanced to the next file of the same
    day. An explicit identifier is a bare file name and cannot be advanced.
    """

    file_name: str
    sequence_number: int | None = None
    reference_date: date | None = None

    @classmethod
    def explicit(cls, file_name: str) -> "FileIdentifier":
        return cls(file_name=file_name)

    @classmethod
    def derive(
        cls, config: RetrievalConfig, reference_date: date, sequence_number: int
    ) -> "FileIdentifier":
        """Builds `{org_id}_{YYYYMMDD}_{padded number}.{extension}`."""
        file_name = (
            f"{config.org_id}_{format_file_date(reference_date)}_"
            f"{pad_number(sequence_number, config.file_num_padding)}"
            f".{config.file_extension}"
        )
        return cls(
            file_name=file_name,
            sequence_number=sequence_number,
            reference_date=reference_date,
        )

    @property
    def is_derived(self) -> bool:
        return self.sequence_number is not None

    def next(self, config: RetrievalConfig) -> "FileIdentifier":
        """Returns the identifier of the following file for the same date."""
        if self.sequence_number is None or self.reference_date is None:
            raise ValueError(f"'{self.file_name}' is not part of a numbered sequence.")
        return FileIdentifier.derive(
            config, self.reference_date, self.sequence_number + 1
        )

    def __str__(self) -> str:
        return self.file_name


@dataclass(frozen=True)
class DownloadLink:
    """A short-lived, single-use download URL issued by the API."""

    remote_url: str
    remote_file_path: str

    @property
    def local_name(self) -> str:
        """The trailing segment of the remote path, used as the local file name."""
        return self.remote_file_path.rsplit("/", 1)[-1]


class StartMode(str, Enum):
    FILENAME = "filename"
    FILENUM = "filenum"
    RESUME = "resume"


@dataclass(frozen=True)
class StartRequest:
    """Where a run begins, as requested on the command line."""

    reference_date: date
    file_name: str | None = None
    file_num: int | None = None

    def __post_init__(self):
        if self.file_num is not None and self.file_num < 0:
            raise InvalidFileNumberError(
                "File number must be equal to or greater than 0."
            )

    @property
    def mode(self) -> StartMode:
        # An explicit file name takes precedence over a file number.
        if self.file_name:
            return StartMode.FILENAME
        if self.file_num is not None:
            return StartMode.FILENUM
        return StartMode.RESUME
