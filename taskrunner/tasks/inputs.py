"""Building the effective input map of a task run.

Each stage returns a new map. Later stages win on conflict:
defaults, instance inputs, variable expansion, environment expansion,
then file path translation.
"""

from typing import Callable, Iterable, Mapping, Optional

from requests.structures import CaseInsensitiveDict

from ..core.logging_ import get_logger
from ..core.platform import Platform
from ..variables import Variables, expand_environment_variables, expand_values
from .definition import HandlerData, TaskInputDefinition

logger = get_logger(__name__)


def collect_inputs(
    declarations: Iterable[TaskInputDefinition],
    instance_inputs: Optional[Mapping[str, Optional[str]]] = None,
) -> CaseInsensitiveDict:
    """Default values overlaid with instance inputs, names and values trimmed."""
    inputs = CaseInsensitiveDict()

    logger.debug("Loading default inputs")
    for declaration in declarations or ():
        key = declaration.key
        if key:
            inputs[key] = (declaration.default_value or "").strip()

    logger.debug("Loading instance inputs")
    for name, value in (instance_inputs or {}).items():
        key = (name or "").strip()
        if key:
            inputs[key] = (value or "").strip()

    return inputs


class InputMerger:
    """Merges declared defaults, instance inputs and expansion."""

    def __init__(
        self,
        variables: Variables,
        environment: Optional[Mapping[str, str]] = None,
        platform: Optional[Platform] = None,
    ):
        self.variables = variables
        self.environment = environment
        self.platform = platform or Platform.current()

    def merge(
        self,
        declarations: Iterable[TaskInputDefinition],
        instance_inputs: Optional[Mapping[str, Optional[str]]] = None,
    ) -> CaseInsensitiveDict:
        inputs = collect_inputs(declarations, instance_inputs)

        logger.debug("Expanding inputs")
        inputs = self.variables.expand_values(inputs)
        return expand_environment_variables(inputs, self.environment, self.platform)


def resolve_file_path_inputs(
    declarations: Iterable[TaskInputDefinition],
    inputs: Mapping[str, str],
    resolve: Callable[[str], str],
) -> CaseInsensitiveDict:
    """Replace every ``filePath`` typed input with its resolved path."""
    resolved = CaseInsensitiveDict(inputs)

    for declaration in declarations or ():
        key = declaration.key
        if not key or not declaration.is_file_path:
            continue

        value = resolved.get(key) or ""
        logger.debug(f"Translating file path input '{key}': '{value}'")
        resolved[key] = resolve(value)
        logger.debug(f"Translated file path input '{key}': '{resolved[key]}'")

    return resolved


def expand_handler_inputs(
    handler_data: HandlerData,
    inputs: Mapping[str, str],
    variables: Variables,
) -> HandlerData:
    """Expand the handler's own inputs from the task inputs, then from variables."""
    logger.debug("Expanding handler inputs")
    expanded = expand_values(inputs, handler_data.inputs)
    expanded = variables.expand_values(expanded)
    return handler_data.with_inputs(expanded)
