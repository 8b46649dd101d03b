"""Host-type specific resolution of relative paths to a rooted path."""

import ntpath
import posixpath
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from ..core.logging_ import get_logger
from ..core.platform import Platform
from ..variables import BUILD_SOURCES_DIRECTORY, SYSTEM_DEFAULT_WORKING_DIRECTORY

if TYPE_CHECKING:
    from ..tasks.context import ExecutionContext

logger = get_logger(__name__)


class RootResolver(ABC):
    """Maps a relative input value to an absolute path for one host type."""

    @property
    @abstractmethod
    def host_type(self) -> str:
        ...

    @abstractmethod
    def get_rooted_path(self, context: "ExecutionContext", value: str) -> Optional[str]:
        """Return a rooted path for ``value`` or ``None`` when it cannot."""
        ...


class VariableRootResolver(RootResolver):
    """Joins the value onto a directory read from the variable store."""

    root_variable: str = ""

    def __init__(self, platform: Optional[Platform] = None):
        self._platform = platform or Platform.current()

    def get_rooted_path(self, context: "ExecutionContext", value: str) -> Optional[str]:
        root = context.variables.get(self.root_variable)
        if not root:
            logger.debug(f"Variable '{self.root_variable}' is not set, cannot root path")
            return None

        pathmod = ntpath if self._platform.is_windows else posixpath
        if not pathmod.isabs(root):
            return None

        return pathmod.normpath(pathmod.join(root, value or ""))


class BuildRootResolver(VariableRootResolver):
    root_variable = BUILD_SOURCES_DIRECTORY

    @property
    def host_type(self) -> str:
        return "build"


class ReleaseRootResolver(VariableRootResolver):
    root_variable = SYSTEM_DEFAULT_WORKING_DIRECTORY

    @property
    def host_type(self) -> str:
        return "release"
