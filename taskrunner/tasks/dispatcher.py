"""Task dispatcher: from a task instance to a running handler."""

from dataclasses import dataclass
from typing import Optional

from requests.structures import CaseInsensitiveDict

from ..core.errors import DefinitionLoadError, PreconditionError
from ..core.logging_ import get_logger
from ..core.platform import Platform
from ..extensions.registry import ExtensionRegistry
from ..handlers.factory import HandlerFactory
from ..variables import TASK_DISPLAY_NAME
from .context import ExecutionContext
from .definition import Definition, HandlerData, TaskInstance
from .inputs import InputMerger, expand_handler_inputs, resolve_file_path_inputs
from .manager import TaskManager
from .paths import PathResolver
from .selector import HandlerSelector

logger = get_logger(__name__)


@dataclass
class PreparedTask:
    """What the handler factory receives for one run."""
    definition: Definition
    handler_data: HandlerData
    inputs: CaseInsensitiveDict
    file_path_input_root: str


class TaskDispatcher:
    """Selects a handler for a task, prepares its inputs and runs it.

    The steps run in a fixed order; each consumes the exact strings the
    previous one produced.
    """

    def __init__(
        self,
        task_manager: TaskManager,
        handler_factory: HandlerFactory,
        extensions: ExtensionRegistry,
        platform: Optional[Platform] = None,
    ):
        self.task_manager = task_manager
        self.handler_factory = handler_factory
        self.extensions = extensions
        self.platform = platform or Platform.current()
        self.selector = HandlerSelector(extensions)
        self.path_resolver = PathResolver(extensions, self.platform)

    async def run(
        self,
        execution_context: Optional[ExecutionContext],
        task_instance: Optional[TaskInstance],
    ) -> None:
        prepared = self.prepare(execution_context, task_instance)

        handler = self.handler_factory.create(
            execution_context,
            prepared.handler_data,
            prepared.inputs,
            task_directory=prepared.definition.directory,
            file_path_input_root=prepared.file_path_input_root,
        )

        logger.info(f"Running task {task_instance.name} with {prepared.handler_data.kind} handler")
        await handler.run()

    def prepare(
        self,
        execution_context: Optional[ExecutionContext],
        task_instance: Optional[TaskInstance],
    ) -> PreparedTask:
        """Everything up to handler construction: selection and inputs."""
        if execution_context is None:
            raise PreconditionError("execution_context")
        if execution_context.variables is None:
            raise PreconditionError("execution_context.variables")
        if task_instance is None:
            raise PreconditionError("task_instance")

        variables = execution_context.variables
        variables.set(TASK_DISPLAY_NAME, task_instance.display_name)

        definition = self.load_definition(task_instance)

        handler_data = self.selector.select(definition.data.execution, self.platform)

        merger = InputMerger(variables, execution_context.environment, self.platform)
        inputs = merger.merge(definition.data.inputs, task_instance.inputs)

        inputs = resolve_file_path_inputs(
            definition.data.inputs,
            inputs,
            lambda value: self.path_resolver.resolve(value, execution_context),
        )

        handler_data = expand_handler_inputs(handler_data, inputs, variables)

        return PreparedTask(
            definition=definition,
            handler_data=handler_data,
            inputs=inputs,
            file_path_input_root=self.path_resolver.resolve("", execution_context),
        )

    def load_definition(self, task_instance: TaskInstance) -> Definition:
        try:
            definition = self.task_manager.load(task_instance)
        except DefinitionLoadError:
            raise
        except (OSError, ValueError) as e:
            raise DefinitionLoadError(f"Cannot load task {task_instance.name}: {e}") from e

        if definition is None:
            raise DefinitionLoadError(f"Task definition not found: {task_instance.name}")
        return definition


class TaskStep:
    """A task instance bound to its dispatcher, as seen by the step runner."""

    critical = False
    finally_ = False

    def __init__(
        self,
        dispatcher: TaskDispatcher,
        execution_context: ExecutionContext,
        task_instance: TaskInstance,
    ):
        self.dispatcher = dispatcher
        self.execution_context = execution_context
        self.task_instance = task_instance

    @property
    def display_name(self) -> Optional[str]:
        return self.task_instance.display_name if self.task_instance else None

    @property
    def enabled(self) -> bool:
        return bool(self.task_instance and self.task_instance.enabled)

    @property
    def always_run(self) -> bool:
        return bool(self.task_instance and self.task_instance.always_run)

    @property
    def continue_on_error(self) -> bool:
        return bool(self.task_instance and self.task_instance.continue_on_error)

    async def run(self) -> None:
        await self.dispatcher.run(self.execution_context, self.task_instance)
