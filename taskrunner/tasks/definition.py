"""Task instances, definitions and handler data."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from ..core.platform import Platform

FILE_PATH_INPUT_TYPE = "filePath"

# Handler kinds that run natively on Windows and win static ordering there.
WINDOWS_PREFERRED_KINDS = frozenset(
    k.lower() for k in ("PowerShell3", "PowerShell", "AzurePowerShell", "PowerShellExe", "Process")
)

DEFAULT_HANDLER_PRIORITIES = {
    "node": 1,
    "powershell3": 2,
    "powershell": 3,
    "azurepowershell": 4,
    "powershellexe": 5,
    "process": 6,
}
FALLBACK_HANDLER_PRIORITY = 100

RESERVED_HANDLER_KEYS = frozenset(("conditions", "priority", "platforms"))


@dataclass(frozen=True)
class TaskInstance:
    """A declared unit of work inside a pipeline step."""
    name: str
    version: str = ""
    id: str = ""
    display_name: Optional[str] = None
    enabled: bool = True
    always_run: bool = False
    continue_on_error: bool = False
    inputs: Mapping[str, Optional[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class TaskInputDefinition:
    """A declared task input."""
    name: Optional[str]
    default_value: Optional[str] = None
    input_type: str = "string"

    @property
    def key(self) -> str:
        return (self.name or "").strip()

    @property
    def is_file_path(self) -> bool:
        return (self.input_type or "").lower() == FILE_PATH_INPUT_TYPE.lower()


@dataclass(frozen=True)
class HandlerData:
    """Declarative metadata for one execution strategy of a task."""
    kind: str
    conditions: Mapping[str, str] = field(default_factory=dict)
    priority: int = FALLBACK_HANDLER_PRIORITY
    platforms: Optional[Tuple[Platform, ...]] = None
    inputs: Mapping[str, Optional[str]] = field(default_factory=dict)

    def preferred_on(self, platform: Platform) -> bool:
        """Whether this variant natively fits ``platform``."""
        if self.platforms is not None:
            return platform in self.platforms
        return platform.is_windows and self.kind.lower() in WINDOWS_PREFERRED_KINDS

    def with_inputs(self, inputs: Mapping[str, Optional[str]]) -> "HandlerData":
        return replace(self, inputs=dict(inputs))

    @classmethod
    def from_dict(cls, kind: str, data: Optional[Dict[str, Any]]) -> "HandlerData":
        """Build handler data from one ``execution`` block of a task manifest.

        Raises:
            ValueError: the block or one of its reserved keys has the wrong shape.
        """
        data = _mapping(data, f"execution.{kind}")

        priority = data.get("priority")
        if priority is None:
            priority = DEFAULT_HANDLER_PRIORITIES.get(kind.lower(), FALLBACK_HANDLER_PRIORITY)

        platforms = data.get("platforms")
        if platforms is not None:
            if isinstance(platforms, str) or not isinstance(platforms, (list, tuple)):
                raise ValueError(f"execution.{kind}.platforms must be a list")
            platforms = tuple(Platform.parse(str(p)) for p in platforms)

        conditions = {
            str(key): "" if value is None else str(value)
            for key, value in _mapping(data.get("conditions"), f"execution.{kind}.conditions").items()
        }
        inputs = {
            str(key): None if value is None else str(value)
            for key, value in data.items()
            if key not in RESERVED_HANDLER_KEYS
        }

        return cls(
            kind=kind,
            conditions=conditions,
            priority=int(priority),
            platforms=platforms,
            inputs=inputs,
        )


@dataclass(frozen=True)
class ExecutionData:
    """Every handler variant a task declares."""
    handlers: Tuple[HandlerData, ...] = ()
    support_condition: bool = False


@dataclass(frozen=True)
class DefinitionData:
    inputs: Tuple[TaskInputDefinition, ...] = ()
    execution: ExecutionData = field(default_factory=ExecutionData)


@dataclass(frozen=True)
class Definition:
    """A loaded task: its directory on disk plus its manifest data."""
    directory: str
    data: DefinitionData

    @classmethod
    def from_dict(cls, data: Dict[str, Any], directory: str) -> "Definition":
        """Build a definition from a parsed task manifest.

        Raises:
            ValueError: the manifest does not have the expected shape.
        """
        data = _mapping(data, "manifest")

        items = data.get("inputs") or []
        if not isinstance(items, list):
            raise ValueError("inputs must be a list")

        inputs = []
        for item in items:
            item = _mapping(item, "inputs[]")
            name = item.get("name")
            default_value = item.get("defaultValue")
            inputs.append(TaskInputDefinition(
                name=None if name is None else str(name),
                default_value=None if default_value is None else str(default_value),
                input_type=str(item.get("type") or "string"),
            ))

        handlers = tuple(
            HandlerData.from_dict(str(kind), handler)
            for kind, handler in _mapping(data.get("execution"), "execution").items()
        )

        execution = ExecutionData(
            handlers=handlers,
            support_condition=bool(data.get("supportCondition", False)),
        )

        return cls(directory=directory, data=DefinitionData(inputs=tuple(inputs), execution=execution))


def _mapping(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{where} must be a mapping, got {type(value).__name__}")
    return value
