"""Selection of the one handler variant a task runs with.

Two disjoint algorithms, picked by ``ExecutionData.support_condition``:

Condition mode
    Only variants that declare conditions are candidates. Each condition is
    evaluated by the registered evaluator of the same name; a variant
    qualifies when all of its conditions match. The lowest priority wins and
    declaration order breaks ties.

Static mode
    Variants preferred on the current platform sort first, then by priority.
"""

from typing import List, Optional, Tuple

from ..core.errors import NoMatchingHandlerError, UnknownConditionEvaluatorError
from ..core.logging_ import get_logger
from ..core.platform import Platform
from ..extensions.registry import ExtensionRegistry
from .definition import ExecutionData, HandlerData

logger = get_logger(__name__)

WINDOWS_HANDLER_KINDS = (
    "Node",
    "PowerShell3",
    "PowerShell",
    "AzurePowerShell",
    "PowerShellExe",
    "Process",
)
DEFAULT_HANDLER_KINDS = ("Node",)


def supported_handler_kinds(platform: Platform) -> Tuple[str, ...]:
    """Handler kinds the agent can run on ``platform``."""
    if platform.is_windows:
        return WINDOWS_HANDLER_KINDS
    return DEFAULT_HANDLER_KINDS


class HandlerSelector:
    """Chooses a handler variant for a task."""

    def __init__(self, extensions: ExtensionRegistry):
        self.extensions = extensions

    def select(self, execution: ExecutionData, platform: Platform) -> HandlerData:
        for handler in execution.handlers:
            for key, value in handler.conditions.items():
                logger.debug(f"{handler.kind}: {key} = {value}")

        if execution.support_condition:
            selected = self._select_by_condition(execution.handlers)
        else:
            selected = self._select_by_platform(execution.handlers, platform)

        if selected is None:
            raise NoMatchingHandlerError(platform.value, supported_handler_kinds(platform))

        logger.info(f"Selected handler: {selected.kind} (priority {selected.priority})")
        return selected

    def _select_by_condition(self, handlers: Tuple[HandlerData, ...]) -> Optional[HandlerData]:
        matched: List[HandlerData] = []

        for handler in handlers:
            if not handler.conditions:
                logger.debug(f"Skip {handler.kind} which has empty conditions")
                continue

            if self._conditions_match(handler):
                logger.debug(f"Add candidate: {handler.kind}")
                matched.append(handler)

        if not matched:
            return None

        # sorted() is stable: declaration order breaks priority ties
        return sorted(matched, key=lambda h: h.priority)[0]

    def _conditions_match(self, handler: HandlerData) -> bool:
        for key, value in handler.conditions.items():
            evaluator = self.extensions.get_condition_evaluator(key)
            if evaluator is None:
                raise UnknownConditionEvaluatorError(key, handler.kind)

            logger.debug(f"Testing condition: {key} = {value}")
            if not evaluator.is_condition_match(value):
                return False

        return True

    def _select_by_platform(
        self, handlers: Tuple[HandlerData, ...], platform: Platform
    ) -> Optional[HandlerData]:
        if not handlers:
            return None

        ordered = sorted(
            handlers,
            key=lambda h: (not h.preferred_on(platform), h.priority),
        )
        return ordered[0]


def select_handler(
    execution: ExecutionData,
    platform: Platform,
    extensions: ExtensionRegistry,
) -> HandlerData:
    return HandlerSelector(extensions).select(execution, platform)
