"""Loading task definitions from extracted task directories."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

import yaml

from ..core.errors import DefinitionLoadError
from ..core.logging_ import get_logger
from .definition import Definition, TaskInstance

logger = get_logger(__name__)

MANIFEST_NAMES = ("task.json", "task.yaml", "task.yml")


class TaskManager(ABC):
    """Produces the definition for a task instance."""

    @abstractmethod
    def load(self, task_instance: TaskInstance) -> Optional[Definition]:
        ...


def load_definition(directory: Union[str, Path]) -> Definition:
    """Read the task manifest found in ``directory``."""
    directory = Path(directory)

    for manifest_name in MANIFEST_NAMES:
        manifest = directory / manifest_name
        if not manifest.is_file():
            continue

        logger.debug(f"Loading task manifest: {manifest}")
        try:
            with open(manifest, "r", encoding="utf-8-sig") as f:
                if manifest.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise DefinitionLoadError(f"Cannot read task manifest {manifest}: {e}") from e

        if not isinstance(data, dict):
            raise DefinitionLoadError(f"Task manifest is not a mapping: {manifest}")

        try:
            return Definition.from_dict(data, directory=str(directory.resolve()))
        except (AttributeError, TypeError, ValueError) as e:
            raise DefinitionLoadError(f"Invalid task manifest {manifest}: {e}") from e

    raise DefinitionLoadError(f"No task manifest found in {directory}")


class DirectoryTaskManager(TaskManager):
    """Looks tasks up under ``<tasks_dir>/<name>/<version>``.

    Tasks must already be extracted there; nothing is downloaded.
    """

    def __init__(self, tasks_dir: Union[str, Path]):
        self.tasks_dir = Path(tasks_dir)

    def get_directory(self, task_instance: TaskInstance) -> Path:
        directory = self.tasks_dir / task_instance.name
        if task_instance.version:
            directory = directory / task_instance.version
        return directory

    def load(self, task_instance: TaskInstance) -> Definition:
        return load_definition(self.get_directory(task_instance))


class StaticTaskManager(TaskManager):
    """Serves one task directory whatever the instance asks for."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def load(self, task_instance: TaskInstance) -> Definition:
        return load_definition(self.directory)
