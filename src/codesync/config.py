"""Repository configuration store.

A thin typed layer over :mod:`configparser`. Keys are addressed as
``"section.option"``, e.g. ``core.repository_format_version``.
"""

import configparser
import logging
from typing import Optional, TextIO, Tuple, Union

from codesync.exceptions import ConfigParseError, PathLike

logger = logging.getLogger(__name__)

ConfigValue = Union[bool, int, str]


def _split_key(key: str) -> Tuple[str, str]:
    section, sep, option = key.partition(".")
    if not sep or not section or not option:
        raise ValueError(f"Config key must look like 'section.option', got: {key!r}")
    return section, option


class ConfigStore:
    """Typed key/value store backed by an INI file."""

    def __init__(self) -> None:
        self._parser = configparser.ConfigParser(interpolation=None)
        self.error_text = ""

    def read_file(self, path: PathLike) -> None:
        """Load a config file into the store.

        Args:
            path: Path to the config file.

        Raises:
            ConfigParseError: If the file cannot be read or parsed. The
                diagnostic is also kept in ``error_text``.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                self._parser.read_file(f, source=str(path))
        except (OSError, UnicodeDecodeError, configparser.Error) as e:
            self.error_text = str(e)
            raise ConfigParseError(path, self.error_text) from e
        self.error_text = ""
        logger.debug("Read config %s", path)

    def write(self, stream: TextIO) -> None:
        """Serialize the whole store to a text stream."""
        self._parser.write(stream)

    def has_section(self, section: str) -> bool:
        return self._parser.has_section(section)

    def add_section(self, section: str) -> None:
        self._parser.add_section(section)

    def lookup(self, key: str) -> Optional[str]:
        """Return the raw string stored under key, or None if absent."""
        section, option = _split_key(key)
        return self._parser.get(section, option, fallback=None)

    def lookup_int(self, key: str) -> Optional[int]:
        """Return the integer stored under key, or None if absent.

        Raises:
            ConfigParseError: If the value is present but not an integer.
        """
        raw = self.lookup(key)
        if raw is None:
            return None
        try:
            return int(raw.strip())
        except ValueError:
            self.error_text = f"{key} is not an integer: {raw!r}"
            raise ConfigParseError(None, self.error_text) from None

    def lookup_bool(self, key: str) -> Optional[bool]:
        """Return the boolean stored under key, or None if absent.

        Raises:
            ConfigParseError: If the value is present but not a boolean.
        """
        raw = self.lookup(key)
        if raw is None:
            return None
        value = raw.strip().lower()
        if value not in configparser.ConfigParser.BOOLEAN_STATES:
            self.error_text = f"{key} is not a boolean: {raw!r}"
            raise ConfigParseError(None, self.error_text)
        return configparser.ConfigParser.BOOLEAN_STATES[value]

    def set_value(self, key: str, value: ConfigValue) -> None:
        """Store a typed value under key, creating the section if needed."""
        section, option = _split_key(key)
        if not self._parser.has_section(section):
            self._parser.add_section(section)
        if isinstance(value, bool):
            text = "true" if value else "false"
        else:
            text = str(value)
        self._parser.set(section, option, text)

    def clear(self) -> None:
        """Drop every section."""
        for section in self._parser.sections():
            self._parser.remove_section(section)
        self.error_text = ""
