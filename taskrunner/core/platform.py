"""Target operating system detection."""

import sys
from enum import Enum
from typing import Optional


class Platform(Enum):
    """Operating systems a task handler can target."""
    WINDOWS = "windows"
    LINUX = "linux"
    DARWIN = "darwin"

    @classmethod
    def current(cls) -> "Platform":
        if sys.platform.startswith(("win32", "cygwin")):
            return cls.WINDOWS
        if sys.platform == "darwin":
            return cls.DARWIN
        return cls.LINUX

    @classmethod
    def parse(cls, value: Optional[str]) -> "Platform":
        """Parse a platform name; an empty value means the current host."""
        if not value:
            return cls.current()

        name = value.strip().lower()
        aliases = {"win": "windows", "win32": "windows", "macos": "darwin", "osx": "darwin"}
        name = aliases.get(name, name)

        for platform in cls:
            if platform.value == name:
                return platform

        raise ValueError(f"Unknown platform: {value}")

    @property
    def is_windows(self) -> bool:
        return self is Platform.WINDOWS
