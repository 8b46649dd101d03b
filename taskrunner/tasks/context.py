"""Per-step execution context."""

import asyncio
import os
from dataclasses import dataclass, field
from typing import Dict

from ..variables import Variables


@dataclass
class ExecutionContext:
    """State a task run shares with its handler.

    ``cancellation`` is set by the step runner on cancel or timeout and is
    handed to the handler untouched.
    """
    variables: Variables
    environment: Dict[str, str] = field(default_factory=lambda: dict(os.environ))
    cancellation: asyncio.Event = field(default_factory=asyncio.Event)

    @property
    def cancelled(self) -> bool:
        return self.cancellation.is_set()

    def cancel(self) -> None:
        self.cancellation.set()
