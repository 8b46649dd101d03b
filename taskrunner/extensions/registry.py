"""Registry of condition evaluators and root resolvers."""

import importlib
from typing import Any, Dict, List, Mapping, Optional

from ..core.config import Config
from ..core.errors import ExtensionLoadError
from ..core.logging_ import get_logger
from ..core.platform import Platform
from .conditions import (
    ConditionEvaluator,
    EnvironmentConditionEvaluator,
    PlatformConditionEvaluator,
)
from .roots import BuildRootResolver, ReleaseRootResolver, RootResolver

logger = get_logger(__name__)


def import_object(path: str) -> Any:
    """Import ``package.module:Name`` or ``package.module.Name``."""
    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")

    if not module_name or not attr:
        raise ExtensionLoadError(f"Invalid extension path: {path}")

    try:
        module = importlib.import_module(module_name)
        return getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ExtensionLoadError(f"Cannot load extension '{path}': {e}") from e


class ExtensionRegistry:
    """Name-keyed condition evaluators and host-type keyed root resolvers.

    Populated once at startup. Lookups return ``None`` or an empty list
    rather than raising so callers decide how to report a miss.
    """

    def __init__(self):
        self._evaluators: Dict[str, ConditionEvaluator] = {}
        self._root_resolvers: List[RootResolver] = []

    @classmethod
    def with_builtins(
        cls,
        platform: Optional[Platform] = None,
        environment: Optional[Mapping[str, str]] = None,
    ) -> "ExtensionRegistry":
        """Built-in evaluators and resolvers.

        ``environment`` is what the ``env`` condition reads; pass the
        execution context's environment so conditions and input expansion
        see the same variables. ``None`` falls back to ``os.environ``.
        """
        registry = cls()
        registry.register_condition_evaluator(PlatformConditionEvaluator(platform))
        registry.register_condition_evaluator(EnvironmentConditionEvaluator(environment))
        registry.register_root_resolver(BuildRootResolver(platform))
        registry.register_root_resolver(ReleaseRootResolver(platform))
        return registry

    @classmethod
    def from_config(
        cls,
        config: Config,
        platform: Optional[Platform] = None,
        environment: Optional[Mapping[str, str]] = None,
    ) -> "ExtensionRegistry":
        """Built-in extensions plus the classes listed under ``extensions``."""
        registry = cls.with_builtins(platform, environment)

        for path in config.extensions.condition_evaluators:
            registry.register_condition_evaluator(import_object(path)())

        for path in config.extensions.root_resolvers:
            registry.register_root_resolver(import_object(path)())

        return registry

    def register_condition_evaluator(self, evaluator: ConditionEvaluator) -> None:
        key = evaluator.name.lower()
        if key in self._evaluators:
            logger.warning(f"Replacing condition evaluator: {evaluator.name}")
        self._evaluators[key] = evaluator
        logger.debug(f"Registered condition evaluator: {evaluator.name}")

    def register_root_resolver(self, resolver: RootResolver) -> None:
        self._root_resolvers.append(resolver)
        logger.debug(f"Registered root resolver for host type: {resolver.host_type}")

    def get_condition_evaluator(self, name: str) -> Optional[ConditionEvaluator]:
        return self._evaluators.get((name or "").lower())

    def get_root_resolvers(self, host_type: str) -> List[RootResolver]:
        """Resolvers for ``host_type`` in registration order."""
        host_type = (host_type or "").lower()
        return [r for r in self._root_resolvers if (r.host_type or "").lower() == host_type]

    @property
    def condition_evaluators(self) -> List[ConditionEvaluator]:
        return list(self._evaluators.values())
