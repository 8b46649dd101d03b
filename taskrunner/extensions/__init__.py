"""Pluggable condition evaluators and path root resolvers."""

from .conditions import (
    ConditionEvaluator,
    EnvironmentConditionEvaluator,
    PlatformConditionEvaluator,
)
from .registry import ExtensionRegistry, import_object
from .roots import BuildRootResolver, ReleaseRootResolver, RootResolver, VariableRootResolver

__all__ = [
    "ConditionEvaluator",
    "PlatformConditionEvaluator",
    "EnvironmentConditionEvaluator",
    "RootResolver",
    "VariableRootResolver",
    "BuildRootResolver",
    "ReleaseRootResolver",
    "ExtensionRegistry",
    "import_object",
]
