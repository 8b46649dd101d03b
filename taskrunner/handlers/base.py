"""Execution strategy abstraction."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Mapping

from ..core.logging_ import LoggingMixin

if TYPE_CHECKING:
    from ..tasks.context import ExecutionContext
    from ..tasks.definition import HandlerData


class Handler(LoggingMixin, ABC):
    """Runs a task through one runtime (Node, PowerShell, a process...).

    Implementations own any process they spawn and must stop it promptly
    when ``context.cancellation`` is set or the awaiting task is cancelled.
    """

    def __init__(
        self,
        context: "ExecutionContext",
        handler_data: "HandlerData",
        inputs: Mapping[str, str],
        task_directory: str,
        file_path_input_root: str,
    ):
        self.context = context
        self.handler_data = handler_data
        self.inputs = inputs
        self.task_directory = task_directory
        self.file_path_input_root = file_path_input_root

    @abstractmethod
    async def run(self) -> None:
        ...
