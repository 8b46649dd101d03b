"""Named predicates that decide handler eligibility in condition mode."""

import os
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from ..core.platform import Platform


class ConditionEvaluator(ABC):
    """A stateless, named condition predicate.

    A handler condition ``{key: value}`` is evaluated by the evaluator whose
    ``name`` matches ``key`` ignoring case.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def is_condition_match(self, value: str) -> bool:
        ...


class PlatformConditionEvaluator(ConditionEvaluator):
    """Matches when the agent platform is in a comma separated list."""

    def __init__(self, platform: Optional[Platform] = None):
        self._platform = platform or Platform.current()

    @property
    def name(self) -> str:
        return "platform"

    def is_condition_match(self, value: str) -> bool:
        for item in (value or "").split(","):
            if not item.strip():
                continue
            try:
                if Platform.parse(item) is self._platform:
                    return True
            except ValueError:
                continue
        return False


class EnvironmentConditionEvaluator(ConditionEvaluator):
    """``NAME`` matches when the variable is set, ``NAME=value`` on equality."""

    def __init__(self, environment: Optional[Mapping[str, str]] = None):
        self._environment = environment

    @property
    def name(self) -> str:
        return "env"

    def is_condition_match(self, value: str) -> bool:
        environment = os.environ if self._environment is None else self._environment
        name, sep, expected = (value or "").partition("=")
        name = name.strip()
        if not name:
            return False
        if name not in environment:
            return False
        if not sep:
            return True
        return environment[name] == expected
