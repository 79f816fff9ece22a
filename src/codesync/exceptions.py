"""Custom exceptions for CodeSync repository operations."""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class CodeSyncError(Exception):
    """Base exception for CodeSync operations."""

    pass


class RepositoryNotFoundError(CodeSyncError):
    """Raised when no repository can be discovered and one was required."""

    def __init__(self, start_path: PathLike):
        self.start_path = Path(start_path)
        self.message = (
            f"No CodeSync repository found at or above {start_path}. "
            "Run 'codesync init' first."
        )
        super().__init__(self.message)


class NotARepositoryError(CodeSyncError):
    """Raised when a path has no .codesync directory."""

    def __init__(self, path: PathLike):
        self.path = Path(path)
        self.message = f"Not a CodeSync repository: {path}"
        super().__init__(self.message)


class PathNotDirectoryError(CodeSyncError):
    """Raised when a path that must be a directory is something else."""

    def __init__(self, path: PathLike):
        self.path = Path(path)
        self.message = f"Not a directory: {path}"
        super().__init__(self.message)


class NotEmptyError(CodeSyncError):
    """Raised when bootstrapping over a non-empty .codesync directory."""

    def __init__(self, path: PathLike):
        self.path = Path(path)
        self.message = f"Directory is not empty: {path}"
        super().__init__(self.message)


class MissingConfigError(CodeSyncError):
    """Raised when a repository has no config file."""

    def __init__(self, path: PathLike):
        self.path = Path(path)
        self.message = f"Configuration file missing: {path}"
        super().__init__(self.message)


class ConfigParseError(CodeSyncError):
    """Raised when a config file cannot be read or holds a malformed value."""

    def __init__(self, path: Optional[PathLike], error_text: str):
        self.path = Path(path) if path is not None else None
        self.error_text = error_text
        where = f" {path}" if path is not None else ""
        self.message = f"Error reading config file{where}: {error_text}"
        super().__init__(self.message)


class UnsupportedFormatVersionError(CodeSyncError):
    """Raised when core.repository_format_version is not understood."""

    def __init__(self, version: int, path: Optional[PathLike] = None):
        self.version = version
        self.path = Path(path) if path is not None else None
        where = f" in {path}" if path is not None else ""
        self.message = f"Unsupported repository_format_version: {version}{where}"
        super().__init__(self.message)


class RepositoryIOError(CodeSyncError):
    """Raised when a directory or file cannot be created, opened or written."""

    def __init__(self, path: PathLike, cause: Optional[OSError] = None, message: Optional[str] = None):
        self.path = Path(path)
        self.cause = cause
        if message is None:
            reason = (cause.strerror or str(cause)) if cause is not None else "I/O error"
            message = f"{reason}: {path}"
        self.message = message
        super().__init__(self.message)


class PathMissingError(RepositoryIOError):
    """Raised when a repository directory does not exist and was not created."""

    def __init__(self, path: PathLike):
        super().__init__(path, message=f"No such directory: {path}")
