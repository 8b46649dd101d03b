"""Translation of file path inputs to absolute paths."""

import ntpath
import posixpath
from typing import Optional

from ..core.logging_ import get_logger
from ..core.platform import Platform
from ..extensions.registry import ExtensionRegistry
from .context import ExecutionContext

logger = get_logger(__name__)

WINDOWS_INVALID_PATH_CHARS = frozenset('"<>|' + "".join(chr(i) for i in range(32)))
POSIX_INVALID_PATH_CHARS = frozenset("\0")


def strip_quotes(value: str) -> str:
    """Remove one pair of surrounding double quotes."""
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def has_invalid_path_chars(value: str, platform: Platform) -> bool:
    invalid = WINDOWS_INVALID_PATH_CHARS if platform.is_windows else POSIX_INVALID_PATH_CHARS
    return any(c in invalid for c in value)


def is_path_rooted(value: str, platform: Platform) -> bool:
    if not value:
        return False
    if platform.is_windows:
        if value[0] in "\\/":
            return True
        return len(value) >= 2 and value[1] == ":" and value[0].isalpha()
    return value.startswith("/")


def canonicalize(value: str, platform: Platform) -> str:
    """Normalize a rooted path.

    Raises:
        ValueError: the path is rooted but not fully qualified, e.g. ``C:dir``.
    """
    if platform.is_windows:
        drive, rest = ntpath.splitdrive(value)
        if drive and not drive.startswith(("\\\\", "//")) and not rest.startswith(("\\", "/")):
            raise ValueError(f"Path is not fully qualified: {value}")
        return ntpath.normpath(value)
    return posixpath.normpath(value)


class PathResolver:
    """Resolves a raw input value to an absolute path, best effort.

    Already rooted values are canonicalized. Anything else is offered to the
    root resolvers registered for the run's host type, first result wins.
    Unresolvable values come back unchanged, the handler validates them.
    """

    def __init__(self, extensions: ExtensionRegistry, platform: Optional[Platform] = None):
        self.extensions = extensions
        self.platform = platform or Platform.current()

    def resolve(self, value: Optional[str], context: ExecutionContext) -> str:
        value = value or ""

        if self.platform.is_windows:
            value = strip_quotes(value)

        if (
            value
            and not has_invalid_path_chars(value, self.platform)
            and is_path_rooted(value, self.platform)
        ):
            try:
                full_path = canonicalize(value, self.platform)
            except ValueError as e:
                logger.warning(f"Rooted path cannot be canonicalized, using it as is: {value} ({e})")
                return value
            logger.debug(f"Input is a rooted path, return absolute path: {full_path}")
            return full_path

        host_type = context.variables.host_type
        for resolver in self.extensions.get_root_resolvers(host_type):
            full_path = resolver.get_rooted_path(context, value)
            if full_path and is_path_rooted(full_path, self.platform):
                logger.debug(f"{resolver.host_type} root resolver resolved a rooted path: {full_path}")
                return full_path

        logger.debug("Cannot root path with any root resolver, return original input")
        return value
