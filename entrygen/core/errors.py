"""Generation errors and the per-pass error collector.

Recoverable problems found while scanning components are collected as
GenerationError records and reported together at the end of a pass.
Conditions that make a pass impossible are raised as EntryGenError
subclasses and propagate to the caller.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterator, List, MutableSequence

logger = logging.getLogger(__name__)


class EntryGenError(Exception):
    """Base class for fatal entry generation errors."""


class ConfigError(EntryGenError):
    """Project configuration is missing or invalid."""


class DiscoveryError(EntryGenError):
    """The component source root could not be traversed."""


class RouteCompileError(EntryGenError):
    """A page path could not be compiled into a route matcher."""


class EntryWriteError(EntryGenError):
    """A generated entry file could not be written."""


@dataclass(frozen=True)
class GenerationError:
    """A recoverable problem tied to one file."""

    file: str  # Relative to the project dir
    message: str

    def __str__(self) -> str:
        return f"{self.file}: {self.message}"


class ErrorCollector:
    """Ordered list of errors for a single generation pass.

    Errors keep the order in which they were added so that reports are
    stable across runs over the same tree.
    """

    def __init__(self, project_dir: str):
        self._project_dir = project_dir
        self._errors: List[GenerationError] = []

    def add(self, file_path: str, message: str) -> GenerationError:
        """Record an error for an absolute file path."""
        error = GenerationError(
            file=os.path.relpath(file_path, self._project_dir),
            message=message,
        )
        self._errors.append(error)
        logger.warning(f"{error.file}: {message}")
        return error

    def reset(self) -> None:
        self._errors = []

    def push(self, channel: MutableSequence) -> None:
        """Append every collected error onto an externally owned channel."""
        channel.extend(self._errors)

    @property
    def errors(self) -> List[GenerationError]:
        return list(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[GenerationError]:
        return iter(list(self._errors))
