"""Variable store and macro expansion."""

from .expansion import expand_environment_variables, expand_value, expand_values
from .store import (
    BUILD_SOURCES_DIRECTORY,
    SYSTEM_DEFAULT_WORKING_DIRECTORY,
    SYSTEM_HOST_TYPE,
    TASK_DISPLAY_NAME,
    Variables,
)

__all__ = [
    "Variables",
    "expand_value",
    "expand_values",
    "expand_environment_variables",
    "TASK_DISPLAY_NAME",
    "SYSTEM_HOST_TYPE",
    "BUILD_SOURCES_DIRECTORY",
    "SYSTEM_DEFAULT_WORKING_DIRECTORY",
]
