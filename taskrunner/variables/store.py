"""Job-wide variable store shared by every step of a run."""

import threading
from typing import Dict, Mapping, Optional

from requests.structures import CaseInsensitiveDict

from ..core.logging_ import get_logger
from .expansion import expand_values

logger = get_logger(__name__)

TASK_DISPLAY_NAME = "task.displayname"
SYSTEM_HOST_TYPE = "system.hosttype"
BUILD_SOURCES_DIRECTORY = "build.sourcesdirectory"
SYSTEM_DEFAULT_WORKING_DIRECTORY = "system.defaultworkingdirectory"


class Variables:
    """Case-insensitive variable store.

    Other steps of the job may read the store while a task is dispatched, so
    every access goes through the store's lock.
    """

    def __init__(self, initial: Optional[Mapping[str, Optional[str]]] = None):
        self._lock = threading.RLock()
        self._values: CaseInsensitiveDict = CaseInsensitiveDict()
        for name, value in (initial or {}).items():
            self._values[name] = value

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        with self._lock:
            return self._values.get(name, default)

    def set(self, name: str, value: Optional[str]) -> None:
        with self._lock:
            self._values[name] = value
        logger.debug(f"Set variable '{name}'")

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._values

    def snapshot(self) -> Dict[str, Optional[str]]:
        """Return a point-in-time copy of every variable."""
        with self._lock:
            return dict(self._values.items())

    @property
    def host_type(self) -> str:
        return self.get(SYSTEM_HOST_TYPE) or ""

    def expand_values(self, target: Mapping[str, Optional[str]]) -> CaseInsensitiveDict:
        """Return a copy of ``target`` with ``$(variable)`` references expanded."""
        with self._lock:
            source = CaseInsensitiveDict(self._values)
        return expand_values(source, target)
