"""Construction of handlers from the selected handler data."""

from typing import TYPE_CHECKING, Dict, List, Mapping, Type

from ..core.config import Config
from ..core.errors import HandlerNotRegisteredError
from ..core.logging_ import get_logger
from ..extensions.registry import import_object
from .base import Handler

if TYPE_CHECKING:
    from ..tasks.context import ExecutionContext
    from ..tasks.definition import HandlerData

logger = get_logger(__name__)


class HandlerFactory:
    """Maps handler kinds, ignoring case, to handler classes."""

    def __init__(self):
        self._handlers: Dict[str, Type[Handler]] = {}

    @classmethod
    def from_config(cls, config: Config) -> "HandlerFactory":
        factory = cls()
        for kind, path in config.extensions.handlers.items():
            factory.register_handler(kind, import_object(path))
        return factory

    def register_handler(self, kind: str, handler_cls: Type[Handler]) -> None:
        """Register a handler class for a handler kind."""
        self._handlers[kind.lower()] = handler_cls
        logger.info(f"Registered handler for kind: {kind}")

    @property
    def kinds(self) -> List[str]:
        return sorted(self._handlers)

    def create(
        self,
        context: "ExecutionContext",
        handler_data: "HandlerData",
        inputs: Mapping[str, str],
        task_directory: str,
        file_path_input_root: str,
    ) -> Handler:
        handler_cls = self._handlers.get(handler_data.kind.lower())
        if handler_cls is None:
            raise HandlerNotRegisteredError(handler_data.kind)

        logger.debug(f"Creating {handler_cls.__name__} for kind {handler_data.kind}")
        return handler_cls(
            context,
            handler_data,
            inputs,
            task_directory,
            file_path_input_root,
        )
