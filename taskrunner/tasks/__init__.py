"""Task selection, input preparation and dispatch."""

from .context import ExecutionContext
from .definition import (
    FILE_PATH_INPUT_TYPE,
    Definition,
    DefinitionData,
    ExecutionData,
    HandlerData,
    TaskInputDefinition,
    TaskInstance,
)
from .dispatcher import PreparedTask, TaskDispatcher, TaskStep
from .inputs import InputMerger, collect_inputs, expand_handler_inputs, resolve_file_path_inputs
from .manager import DirectoryTaskManager, StaticTaskManager, TaskManager, load_definition
from .paths import PathResolver
from .selector import HandlerSelector, select_handler, supported_handler_kinds

__all__ = [
    "ExecutionContext",
    "FILE_PATH_INPUT_TYPE",
    "Definition",
    "DefinitionData",
    "ExecutionData",
    "HandlerData",
    "TaskInputDefinition",
    "TaskInstance",
    "PreparedTask",
    "TaskDispatcher",
    "TaskStep",
    "InputMerger",
    "collect_inputs",
    "expand_handler_inputs",
    "resolve_file_path_inputs",
    "TaskManager",
    "DirectoryTaskManager",
    "StaticTaskManager",
    "load_definition",
    "PathResolver",
    "HandlerSelector",
    "select_handler",
    "supported_handler_kinds",
]
