"""Macro expansion of ``$(name)`` references inside input values."""

import os
from typing import Mapping, MutableMapping, Optional

from requests.structures import CaseInsensitiveDict

from ..core.platform import Platform

PREFIX = "$("
SUFFIX = ")"


def expand_value(value: Optional[str], source: Mapping[str, Optional[str]]) -> str:
    """Expand every ``$(name)`` found in ``value`` from ``source``.

    Scans once from left to right. Substituted text is not scanned again and
    references that are missing from ``source`` are left as written.
    """
    value = value or ""
    start = 0

    while start < len(value):
        prefix_index = value.find(PREFIX, start)
        if prefix_index < 0:
            break
        suffix_index = value.find(SUFFIX, prefix_index + len(PREFIX))
        if suffix_index < 0:
            break

        name = value[prefix_index + len(PREFIX):suffix_index]
        if name and name in source:
            replacement = source[name] or ""
            value = value[:prefix_index] + replacement + value[suffix_index + len(SUFFIX):]
            start = prefix_index + len(replacement)
        else:
            start = suffix_index + len(SUFFIX)

    return value


def expand_values(
    source: Mapping[str, Optional[str]],
    target: Mapping[str, Optional[str]],
) -> CaseInsensitiveDict:
    """Return a copy of ``target`` with every value expanded from ``source``."""
    expanded = CaseInsensitiveDict()
    for key, value in target.items():
        expanded[key] = expand_value(value, source)
    return expanded


def environment_source(
    environment: Optional[Mapping[str, str]] = None,
    platform: Optional[Platform] = None,
) -> Mapping[str, str]:
    """Build a lookup over environment variables with the platform's casing rules."""
    environment = os.environ if environment is None else environment
    platform = platform or Platform.current()

    source: MutableMapping[str, str]
    if platform.is_windows:
        source = CaseInsensitiveDict()
    else:
        source = {}

    for name, value in environment.items():
        source[name] = value
    return source


def expand_environment_variables(
    target: Mapping[str, Optional[str]],
    environment: Optional[Mapping[str, str]] = None,
    platform: Optional[Platform] = None,
) -> CaseInsensitiveDict:
    """Expand ``$(NAME)`` references against process or job environment."""
    return expand_values(environment_source(environment, platform), target)
