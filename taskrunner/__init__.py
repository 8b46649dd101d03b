"""taskrunner - handler selection and dispatch core of a pipeline agent."""

__version__ = "0.1.0"

from .core import (
    Config,
    LoggingMixin,
    NoMatchingHandlerError,
    PreconditionError,
    TaskRunnerError,
    UnknownConditionEvaluatorError,
    get_logger,
    settings,
)
from .core.platform import Platform
from .extensions import ConditionEvaluator, ExtensionRegistry, RootResolver
from .handlers import Handler, HandlerFactory
from .tasks import (
    Definition,
    ExecutionContext,
    HandlerData,
    PathResolver,
    TaskDispatcher,
    TaskInstance,
    TaskStep,
)
from .variables import Variables

__all__ = [
    "__version__",
    "Config",
    "settings",
    "LoggingMixin",
    "get_logger",
    "TaskRunnerError",
    "PreconditionError",
    "NoMatchingHandlerError",
    "UnknownConditionEvaluatorError",
    "Platform",
    "ConditionEvaluator",
    "RootResolver",
    "ExtensionRegistry",
    "Handler",
    "HandlerFactory",
    "Definition",
    "ExecutionContext",
    "HandlerData",
    "PathResolver",
    "TaskDispatcher",
    "TaskInstance",
    "TaskStep",
    "Variables",
]
