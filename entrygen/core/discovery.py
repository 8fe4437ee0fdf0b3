"""Component file discovery.

Finds every `<project>/src/**/*.<ext>` file. Hidden directories and files
are not matched, the same as a shell glob.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Tuple

from .constants import COMPONENT_EXTENSION
from .errors import DiscoveryError

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Matched component paths plus directories that could not be read."""

    paths: List[str] = field(default_factory=list)
    # (absolute directory path, reason)
    unreadable: List[Tuple[str, str]] = field(default_factory=list)


def component_pattern(project_dir: str, extension: str = COMPONENT_EXTENSION) -> str:
    return os.path.join(project_dir, "src", "**", f"*.{extension}")


def is_component_path(file_path: str, project_dir: str, extension: str = COMPONENT_EXTENSION) -> bool:
    """Check whether a path matches the component pattern.

    Args:
        file_path: Absolute path
        project_dir: Project root

    Returns:
        True if the path is a non-hidden `.<ext>` file under src/
    """
    src_dir = os.path.join(os.path.abspath(project_dir), "src")
    rel = os.path.relpath(os.path.abspath(file_path), src_dir)
    if rel.startswith(os.pardir):
        return False
    parts = rel.split(os.sep)
    if any(part.startswith(".") for part in parts):
        return False
    return parts[-1].endswith(f".{extension}")


def discover_components(project_dir: str, extension: str = COMPONENT_EXTENSION) -> DiscoveryResult:
    """Find all component files under the project's src/ directory.

    Args:
        project_dir: Absolute project root
        extension: Component file extension without the dot

    Returns:
        DiscoveryResult with sorted absolute paths

    Raises:
        DiscoveryError: If src/ exists but cannot be read
    """
    src_dir = os.path.join(os.path.abspath(project_dir), "src")
    result = DiscoveryResult()

    if not os.path.isdir(src_dir):
        logger.debug(f"No src directory at {src_dir}")
        return result

    try:
        os.listdir(src_dir)
    except OSError as e:
        raise DiscoveryError(f"Cannot read component directory {src_dir}: {e}") from e

    def on_error(error: OSError) -> None:
        path = error.filename or src_dir
        logger.warning(f"Skipping unreadable directory {path}: {error.strerror}")
        result.unreadable.append((path, error.strerror or str(error)))

    suffix = f".{extension}"
    for dirpath, dirnames, filenames in os.walk(src_dir, onerror=on_error):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for name in filenames:
            if name.endswith(suffix) and not name.startswith("."):
                result.paths.append(os.path.join(dirpath, name))

    result.paths.sort()
    logger.debug(f"Discovered {len(result.paths)} component files under {src_dir}")
    return result
