"""Core infrastructure packages."""

from .config import Config, get_config, settings
from .errors import (
    DefinitionLoadError,
    ExtensionLoadError,
    HandlerNotRegisteredError,
    NoMatchingHandlerError,
    PreconditionError,
    TaskRunnerError,
    UnknownConditionEvaluatorError,
)
from .logging_ import LoggingMixin, get_logger

__all__ = [
    "Config",
    "get_config",
    "settings",
    "LoggingMixin",
    "get_logger",
    "TaskRunnerError",
    "PreconditionError",
    "DefinitionLoadError",
    "NoMatchingHandlerError",
    "UnknownConditionEvaluatorError",
    "HandlerNotRegisteredError",
    "ExtensionLoadError",
]
