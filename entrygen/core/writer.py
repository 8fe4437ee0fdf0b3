"""Generated entry persistence."""

import logging
import os
import time
from typing import Dict, List, Optional

from .constants import ENTRY_EXTENSION, INITIAL_ENTRY_BACKDATE_SECONDS
from .errors import EntryWriteError

logger = logging.getLogger(__name__)


def _well_formed(source: str) -> str:
    """Replace lone surrogates, which JavaScript strings may hold, with U+FFFD."""
    return source.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")


class EntryWriter:
    """Writes rendered entries to `<temp_dir>/<kind>-entry.<ext>`.

    Attributes:
        temp_dir: Directory that receives the entry files
        extension: Entry file extension without the dot
    """

    def __init__(
        self,
        temp_dir: str,
        extension: str = ENTRY_EXTENSION,
        backdate_seconds: int = INITIAL_ENTRY_BACKDATE_SECONDS,
    ):
        self.temp_dir = temp_dir
        self.extension = extension
        self._backdate_seconds = backdate_seconds

    def entry_path(self, kind: str) -> str:
        return os.path.join(self.temp_dir, f"{kind}-entry.{self.extension}")

    def write(self, entries: Dict[str, str], init: bool = False, now: Optional[float] = None) -> List[str]:
        """Write every entry, replacing previous content.

        On the first generation the files are backdated: dev servers that
        watch the entries otherwise treat a file written just before they
        start as unchanged and skip the first rebuild.

        Args:
            entries: {kind: source text}
            init: True for the first generation of the process
            now: Current time, for tests

        Returns:
            Written file paths

        Raises:
            EntryWriteError: If the temp dir or a file cannot be written
        """
        written: List[str] = []
        try:
            os.makedirs(self.temp_dir, exist_ok=True)
            for kind, source in entries.items():
                path = self.entry_path(kind)
                with open(path, "w", encoding="utf-8") as f:
                    f.write(_well_formed(source))
                if init:
                    past = (time.time() if now is None else now) - self._backdate_seconds
                    os.utime(path, (past, past))
                written.append(path)
        except OSError as e:
            raise EntryWriteError(f"Failed to write entry files to {self.temp_dir}: {e}") from e

        logger.debug(f"Wrote {len(written)} entries to {self.temp_dir}")
        return written
