"""Path computation for files and directories under a repository's .codesync directory."""

from pathlib import Path
from typing import TYPE_CHECKING

from codesync.exceptions import PathMissingError, PathNotDirectoryError
from codesync.paths import is_directory, join_paths, make_directories, path_exists

if TYPE_CHECKING:
    from codesync.repository import Repository


def _resolve_directory(path: Path, mkdir: bool) -> Path:
    if path_exists(path):
        if is_directory(path):
            return path
        raise PathNotDirectoryError(path)

    if not mkdir:
        raise PathMissingError(path)

    return make_directories(path)


def repo_path(repo: "Repository", *segments: str) -> Path:
    """Compute a path under the repository's .codesync directory.

    Never touches the filesystem.

    Args:
        repo: Repository whose .codesync directory is the base.
        *segments: One or more path segments, joined in order.

    Returns:
        The joined path.

    Raises:
        ValueError: If no segments are given.
    """
    if not segments:
        raise ValueError("At least one path segment is required")

    path = repo.codesync_dir
    for segment in segments:
        path = join_paths(path, segment)
    return path


def repo_dir(repo: "Repository", *segments: str, mkdir: bool = False) -> Path:
    """Resolve a directory under .codesync, optionally creating it.

    Args:
        repo: Repository whose .codesync directory is the base.
        *segments: Directory path segments.
        mkdir: Create the directory (and parents) if it is missing.

    Returns:
        Path to the existing or newly created directory.

    Raises:
        PathNotDirectoryError: If the path exists but is not a directory.
        PathMissingError: If the path is missing and mkdir is False.
        RepositoryIOError: If the directory cannot be created.
    """
    return _resolve_directory(repo_path(repo, *segments), mkdir)


def repo_file(repo: "Repository", *segments: str, mkdir: bool = False) -> Path:
    """Resolve a file path under .codesync, resolving its parent directory first.

    The file itself is neither created nor checked.

    Raises:
        ValueError: If no segments are given.
        PathNotDirectoryError: If the parent exists but is not a directory.
        PathMissingError: If the parent is missing and mkdir is False.
        RepositoryIOError: If the parent cannot be created.
    """
    if not segments:
        raise ValueError("At least one path segment is required")

    *parents, leaf = segments
    parent = repo_path(repo, *parents) if parents else repo.codesync_dir
    return join_paths(_resolve_directory(parent, mkdir), leaf)
