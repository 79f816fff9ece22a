"""Repository discovery, opening and bootstrap.

A repository is a work tree with a ``.codesync`` directory at its root::

    .codesync/
        branches/
        objects/
        refs/heads/
        refs/tags/
        HEAD
        config
        description
"""

import logging
from pathlib import Path
from typing import Callable, Optional, TextIO, Tuple

from codesync.config import ConfigStore
from codesync.exceptions import (
    ConfigParseError,
    MissingConfigError,
    NotARepositoryError,
    NotEmptyError,
    PathLike,
    PathNotDirectoryError,
    RepositoryIOError,
    RepositoryNotFoundError,
    UnsupportedFormatVersionError,
)
from codesync.location import repo_dir, repo_file, repo_path
from codesync.paths import (
    is_directory,
    is_directory_empty,
    join_paths,
    make_directories,
    path_exists,
)

logger = logging.getLogger(__name__)

CODESYNC_DIRNAME = ".codesync"

FORMAT_VERSION_KEY = "core.repository_format_version"
SUPPORTED_FORMAT_VERSIONS = {0}

SKELETON_DIRECTORIES = (
    ("branches",),
    ("objects",),
    ("refs", "tags"),
    ("refs", "heads"),
)

DEFAULT_DESCRIPTION = "Unnamed repository; edit this file 'description' to name the repository.\n"
DEFAULT_HEAD = "ref: refs/heads/master\n"


class Repository:
    """An opened CodeSync repository.

    Owns its config store. Call :meth:`close` (or use the repository as a
    context manager) to release it; closing twice is harmless.
    """

    def __init__(self, worktree: PathLike):
        self._worktree = Path(worktree)
        self._codesync_dir = join_paths(self._worktree, CODESYNC_DIRNAME)
        self._config: Optional[ConfigStore] = ConfigStore()

    @property
    def worktree(self) -> Path:
        return self._worktree

    @property
    def codesync_dir(self) -> Path:
        return self._codesync_dir

    @property
    def config(self) -> ConfigStore:
        if self._config is None:
            raise RuntimeError(f"Repository at {self._worktree} is closed")
        return self._config

    @property
    def closed(self) -> bool:
        return self._config is None

    def close(self) -> None:
        """Release the config store."""
        if self._config is not None:
            self._config.clear()
            self._config = None

    def __enter__(self) -> "Repository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = " closed" if self.closed else ""
        return f"<Repository {self._worktree}{state}>"


def _load_config(repo: Repository, force: bool) -> None:
    config_file = repo_path(repo, "config")

    if path_exists(config_file):
        repo.config.read_file(config_file)
    elif not force:
        raise MissingConfigError(config_file)

    if not force:
        try:
            version = repo.config.lookup_int(FORMAT_VERSION_KEY)
        except ConfigParseError:
            raise ConfigParseError(config_file, repo.config.error_text) from None
        if version is not None and version not in SUPPORTED_FORMAT_VERSIONS:
            raise UnsupportedFormatVersionError(version, config_file)


def _open(worktree: Path, force: bool) -> Repository:
    if not force and not is_directory(join_paths(worktree, CODESYNC_DIRNAME)):
        raise NotARepositoryError(worktree)

    repo = Repository(worktree)
    try:
        _load_config(repo, force)
    except Exception:
        repo.close()
        raise
    return repo


def open_repository(path: PathLike, force: bool = False) -> Repository:
    """Open the repository whose work tree is path.

    Args:
        path: Work tree root.
        force: Skip the .codesync, config file and format version checks.
            Used when bootstrapping a new repository.

    Returns:
        The opened repository.

    Raises:
        NotARepositoryError: If path has no .codesync directory.
        MissingConfigError: If .codesync/config does not exist.
        ConfigParseError: If the config file cannot be parsed.
        UnsupportedFormatVersionError: If the format version is not supported.
    """
    return _open(Path(path).resolve(), force)


def discover_repository(
    start_path: Optional[PathLike] = None,
    required: bool = True,
) -> Optional[Repository]:
    """Find the repository enclosing start_path by walking up the tree.

    Args:
        start_path: Where to start. Defaults to the current working directory.
        required: Raise instead of returning None when nothing is found.

    Returns:
        The nearest enclosing repository, or None if there is none and
        required is False.

    Raises:
        RepositoryNotFoundError: If no repository is found and required is True.
        CodeSyncError: If the repository found cannot be opened.
    """
    start = Path.cwd() if start_path is None else Path(start_path)

    if path_exists(start):
        # Canonicalize once so the root check below is a plain comparison
        current = start.resolve()
        while True:
            if is_directory(join_paths(current, CODESYNC_DIRNAME)):
                logger.debug("Found %s in %s", CODESYNC_DIRNAME, current)
                return _open(current, force=False)

            parent = current.parent
            if parent == current or not path_exists(parent):
                break
            current = parent

    logger.debug("No repository found at or above %s", start)
    if required:
        raise RepositoryNotFoundError(start)
    return None


def write_default_config(repo: Repository, stream: TextIO) -> None:
    """Set the default core settings on repo's config and serialize it to stream."""
    config = repo.config
    if not config.has_section("core"):
        config.add_section("core")

    config.set_value(FORMAT_VERSION_KEY, 0)
    config.set_value("core.filemode", False)
    config.set_value("core.bare", False)

    config.write(stream)


def _write_metadata_file(repo: Repository, name: str, writer: Callable[[TextIO], object]) -> Path:
    path = repo_file(repo, name)
    try:
        with open(path, "w", encoding="utf-8") as f:
            writer(f)
    except OSError as e:
        raise RepositoryIOError(path, e) from e
    logger.debug("Wrote %s", path)
    return path


def _create_layout(repo: Repository) -> None:
    worktree = repo.worktree
    codesync_dir = repo.codesync_dir

    if path_exists(worktree):
        if not is_directory(worktree):
            raise PathNotDirectoryError(worktree)
        if path_exists(codesync_dir):
            if not is_directory(codesync_dir):
                raise PathNotDirectoryError(codesync_dir)
            if not is_directory_empty(codesync_dir):
                raise NotEmptyError(codesync_dir)
    else:
        make_directories(worktree)
        logger.info("Created work tree %s", worktree)

    for segments in SKELETON_DIRECTORIES:
        repo_dir(repo, *segments, mkdir=True)

    _write_metadata_file(repo, "description", lambda f: f.write(DEFAULT_DESCRIPTION))
    _write_metadata_file(repo, "HEAD", lambda f: f.write(DEFAULT_HEAD))
    _write_metadata_file(repo, "config", lambda f: write_default_config(repo, f))


def bootstrap_repository(path: PathLike) -> Repository:
    """Create a new repository at path.

    The work tree is created if needed. An existing .codesync directory must
    be empty. Directories created before a failure are left in place.

    Args:
        path: Work tree root for the new repository.

    Returns:
        The new repository, with the default config loaded.

    Raises:
        PathNotDirectoryError: If path or its .codesync entry is not a directory.
        NotEmptyError: If .codesync already has content.
        RepositoryIOError: If a directory or file cannot be created.
    """
    repo = open_repository(path, force=True)
    try:
        _create_layout(repo)
    except Exception:
        repo.close()
        raise
    logger.info("Initialized empty repository in %s", repo.codesync_dir)
    return repo


def initialize_repository(path: PathLike) -> Tuple[Repository, bool]:
    """Return the repository at or above path, bootstrapping one if there is none.

    Returns:
        Tuple of (repository, created). created is False when an existing
        repository was found and nothing on disk was touched.

    Raises:
        CodeSyncError: If an existing repository cannot be opened or
            bootstrapping fails.
    """
    try:
        repo = discover_repository(path, required=True)
    except (RepositoryNotFoundError, NotARepositoryError):
        logger.debug("No repository at or above %s, bootstrapping", path)
        return bootstrap_repository(path), True
    return repo, False
