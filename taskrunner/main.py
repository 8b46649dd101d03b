"""Main entry point for taskrunner."""

import asyncio
import json
import os
import sys
from typing import Dict, List, Optional

from .core.config import Config, get_config
from .core.errors import TaskRunnerError
from .core.logging_ import get_logger
from .core.platform import Platform
from .extensions.registry import ExtensionRegistry
from .handlers.factory import HandlerFactory
from .tasks.context import ExecutionContext
from .tasks.definition import TaskInstance
from .tasks.dispatcher import TaskDispatcher
from .tasks.manager import DirectoryTaskManager, StaticTaskManager, TaskManager
from .tasks.selector import supported_handler_kinds
from .variables import (
    BUILD_SOURCES_DIRECTORY,
    SYSTEM_DEFAULT_WORKING_DIRECTORY,
    SYSTEM_HOST_TYPE,
    Variables,
)

logger = get_logger(__name__)

USAGE = """
taskrunner - select and dispatch pipeline task handlers

Usage: python -m taskrunner [command]

Commands:
    plan <task> [name=value ...]        Show the selected handler and effective inputs
    run <task> [name=value ...]         Run the task with the configured handlers
    kinds [platform]                    List handler kinds supported on a platform

<task> is a task directory, or name[@version] looked up under agent.tasks_dir

Options:
    --help, -h    Show this help message
"""


def parse_assignments(args: List[str]) -> Dict[str, str]:
    """Parse ``name=value`` arguments into task inputs."""
    inputs: Dict[str, str] = {}
    for arg in args:
        name, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"Expected name=value, got: {arg}")
        inputs[name] = value
    return inputs


def build_task_manager(task: str, config: Config) -> TaskManager:
    """An existing directory is served as-is; anything else is looked up under ``agent.tasks_dir``."""
    if os.path.isdir(task):
        return StaticTaskManager(task)
    return DirectoryTaskManager(config.agent.tasks_dir)


def build_dispatcher(task: str, config: Config, context: ExecutionContext) -> TaskDispatcher:
    platform = Platform.parse(config.agent.platform)
    return TaskDispatcher(
        task_manager=build_task_manager(task, config),
        handler_factory=HandlerFactory.from_config(config),
        extensions=ExtensionRegistry.from_config(config, platform, context.environment),
        platform=platform,
    )


def build_context(config: Config) -> ExecutionContext:
    variables = Variables({
        SYSTEM_HOST_TYPE: config.agent.host_type,
        BUILD_SOURCES_DIRECTORY: os.getenv("BUILD_SOURCESDIRECTORY", os.getcwd()),
        SYSTEM_DEFAULT_WORKING_DIRECTORY: os.getenv("SYSTEM_DEFAULTWORKINGDIRECTORY", os.getcwd()),
    })
    return ExecutionContext(variables=variables)


def build_instance(task: str, inputs: Dict[str, str]) -> TaskInstance:
    """``<task-dir>`` names the task after the directory; ``name[@version]`` is taken literally."""
    if os.path.isdir(task):
        name = os.path.basename(os.path.normpath(task))
        version = ""
    else:
        name, _, version = task.partition("@")
        if not name:
            raise ValueError(f"Invalid task reference: {task}")
    return TaskInstance(name=name, version=version, display_name=name, inputs=inputs)


def plan(task: str, inputs: Dict[str, str], config: Optional[Config] = None) -> Dict:
    """Select the handler and compute inputs without running anything."""
    config = config or get_config()
    context = build_context(config)
    dispatcher = build_dispatcher(task, config, context)
    prepared = dispatcher.prepare(context, build_instance(task, inputs))

    return {
        "handler": prepared.handler_data.kind,
        "priority": prepared.handler_data.priority,
        "handler_inputs": dict(prepared.handler_data.inputs),
        "inputs": dict(prepared.inputs.items()),
        "task_directory": prepared.definition.directory,
        "file_path_input_root": prepared.file_path_input_root,
    }


async def run_task(task: str, inputs: Dict[str, str], config: Optional[Config] = None) -> None:
    config = config or get_config()
    context = build_context(config)
    dispatcher = build_dispatcher(task, config, context)
    await dispatcher.run(context, build_instance(task, inputs))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        logger.info("No command specified. Use 'plan', 'run' or 'kinds'")
        return 1

    command = argv[0].lower()

    if command in ("--help", "-h", "help"):
        print(USAGE)
        return 0

    try:
        if command == "kinds":
            platform = Platform.parse(argv[1] if len(argv) > 1 else None)
            print("\n".join(supported_handler_kinds(platform)))
            return 0

        if command in ("plan", "run"):
            if len(argv) < 2:
                logger.error(f"Missing task for '{command}'")
                return 1

            inputs = parse_assignments(argv[2:])
            if command == "plan":
                print(json.dumps(plan(argv[1], inputs), indent=2))
            else:
                asyncio.run(run_task(argv[1], inputs))
            return 0

    except (TaskRunnerError, ValueError) as e:
        logger.error(str(e))
        return 1

    logger.error(f"Unknown command: {command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
