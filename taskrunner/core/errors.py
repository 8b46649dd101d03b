"""Exception hierarchy for task dispatch."""

from typing import Optional, Sequence


class TaskRunnerError(Exception):
    """Base class for every error raised by taskrunner."""


class PreconditionError(TaskRunnerError, ValueError):
    """A required collaborator or argument was missing."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Required argument is missing: {name}")


class DefinitionLoadError(TaskRunnerError):
    """The task definition could not be loaded."""


class NoMatchingHandlerError(TaskRunnerError):
    """No handler variant qualified for the current run."""

    def __init__(self, platform: str, supported_kinds: Sequence[str]):
        self.platform = platform
        self.supported_kinds = tuple(supported_kinds)
        super().__init__(
            "A supported task execution handler was not found. The task does "
            f"not carry an implementation compatible with the '{platform}' "
            f"platform. Supported handlers: {', '.join(self.supported_kinds)}"
        )


class UnknownConditionEvaluatorError(TaskRunnerError):
    """A handler condition names an evaluator that is not registered."""

    def __init__(self, name: str, handler_kind: Optional[str] = None):
        self.name = name
        self.handler_kind = handler_kind
        message = f"Unknown condition evaluator: '{name}'"
        if handler_kind:
            message += f" (declared by handler '{handler_kind}')"
        super().__init__(message)


class HandlerNotRegisteredError(TaskRunnerError):
    """The handler factory has no implementation for a handler kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"No handler registered for kind: {kind}")


class ExtensionLoadError(TaskRunnerError):
    """A configured extension class path could not be imported."""
