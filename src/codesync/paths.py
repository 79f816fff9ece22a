"""Filesystem path utilities with no knowledge of repositories."""

import logging
import os
from pathlib import Path

from codesync.exceptions import PathLike, RepositoryIOError

logger = logging.getLogger(__name__)


def path_exists(path: PathLike) -> bool:
    """Check if a path exists (file, directory or anything else).

    Args:
        path: Path to check.

    Returns:
        True if the path can be stat'ed, False otherwise.
    """
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def is_directory(path: PathLike) -> bool:
    """Check if a path exists and is a directory."""
    return Path(path).is_dir()


def join_paths(base: PathLike, segment: str) -> Path:
    """Join a segment onto a base path with exactly one separator.

    The join is purely lexical: ``.`` and ``..`` are kept as written.

    Args:
        base: Base path, with or without a trailing separator.
        segment: Segment to append.

    Returns:
        The joined path.
    """
    return Path(base) / segment


def make_directories(path: PathLike) -> Path:
    """Create every missing directory along path (mkdir -p).

    Directories created before a failure are left in place.

    Args:
        path: Directory path to create.

    Returns:
        The directory path.

    Raises:
        RepositoryIOError: If a component cannot be created.
    """
    target = Path(path)
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RepositoryIOError(e.filename or target, e) from e
    logger.debug("Ensured directory %s", target)
    return target


def is_directory_empty(path: PathLike) -> bool:
    """Check whether a directory has no entries.

    Raises:
        RepositoryIOError: If path cannot be opened as a directory.
    """
    try:
        with os.scandir(path) as entries:
            return next(entries, None) is None
    except OSError as e:
        raise RepositoryIOError(path, e) from e
