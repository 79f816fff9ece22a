"""CodeSync: repository discovery and bootstrap for a small version control system."""

__version__ = "0.1.0"

# Export exceptions for easy access
from codesync.exceptions import (
    CodeSyncError,
    ConfigParseError,
    MissingConfigError,
    NotARepositoryError,
    NotEmptyError,
    PathMissingError,
    PathNotDirectoryError,
    RepositoryIOError,
    RepositoryNotFoundError,
    UnsupportedFormatVersionError,
)

__all__ = [
    "__version__",
    "CodeSyncError",
    "ConfigParseError",
    "MissingConfigError",
    "NotARepositoryError",
    "NotEmptyError",
    "PathMissingError",
    "PathNotDirectoryError",
    "RepositoryIOError",
    "RepositoryNotFoundError",
    "UnsupportedFormatVersionError",
]
