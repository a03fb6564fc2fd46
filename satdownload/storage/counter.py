"""
Persists the number of the last file retrieved so the next run can resume after it.
"""

import logging
from pathlib import Path

from satdownload.exceptions import CounterReadError, CounterWriteError

log = logging.getLogger(__name__)


class CounterStore:
    """
    A single decimal number kept in a text file.

    There is no locking: one process is expected to own a counter file at a time.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> int:
        """
        Reads the persisted counter.

        Returns:
            The stored number, or 0 if the counter file does not exist yet.

        Raises:
            CounterReadError: If the file exists but cannot be read or parsed.
        """
        try:
            text = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            log.debug(f"Counter file '{self.path}' not found, starting from 0.")
            return 0
        except (OSError, UnicodeDecodeError) as e:
            raise CounterReadError(
                f"Error reading counter file '{self.path}': {e}"
            ) from e

        # isdigit alone admits digits such as "²" that int() rejects.
        if not (text.isascii() and text.isdigit()):
            raise CounterReadError(
                f"Invalid number in counter file '{self.path}': {text!r}"
            )
        return int(text)

    def store(self, value: int) -> None:
        """
        Overwrites the counter file with `value`.

        Raises:
            CounterWriteError: If the file cannot be written.
        """
        if value < 0:
            raise ValueError(f"Counter value cannot be negative: {value}")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(f"{value}\n", encoding="utf-8")
        except OSError as e:
            raise CounterWriteError(
                f"Error writing to counter file '{self.path}': {e}"
            ) from e
        log.debug(f"Counter file '{self.path}' set to {value}.")
