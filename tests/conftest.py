from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import pytest

from taskrunner.core.platform import Platform
from taskrunner.extensions import ConditionEvaluator, ExtensionRegistry, RootResolver
from taskrunner.handlers import Handler, HandlerFactory
from taskrunner.tasks import (
    Definition,
    DefinitionData,
    ExecutionContext,
    ExecutionData,
    HandlerData,
    TaskInputDefinition,
    TaskInstance,
    TaskManager,
)
from taskrunner.variables import Variables


class StaticEvaluator(ConditionEvaluator):
    """Evaluator answering from a fixed table of values."""

    def __init__(self, name: str, answers: Optional[Dict[str, bool]] = None):
        self._name = name
        self.answers = answers or {}
        self.calls: List[str] = []

    @property
    def name(self) -> str:
        return self._name

    def is_condition_match(self, value: str) -> bool:
        self.calls.append(value)
        return self.answers.get(value, False)


class FixedRootResolver(RootResolver):
    """Resolver that always answers with the same value."""

    def __init__(self, host_type: str, answer: Optional[str]):
        self._host_type = host_type
        self.answer = answer
        self.calls: List[str] = []

    @property
    def host_type(self) -> str:
        return self._host_type

    def get_rooted_path(self, context, value):
        self.calls.append(value)
        return self.answer


class RecordingHandler(Handler):
    runs: List["RecordingHandler"] = []

    async def run(self) -> None:
        RecordingHandler.runs.append(self)


class FailingHandler(Handler):
    async def run(self) -> None:
        raise RuntimeError("process exited with code 2")


class BlockingHandler(Handler):
    started: Optional[asyncio.Event] = None

    async def run(self) -> None:
        BlockingHandler.started.set()
        await asyncio.Event().wait()


class InMemoryTaskManager(TaskManager):
    def __init__(self, definition: Optional[Definition]):
        self.definition = definition
        self.loaded: List[TaskInstance] = []

    def load(self, task_instance: TaskInstance) -> Optional[Definition]:
        self.loaded.append(task_instance)
        return self.definition


def make_definition(
    handlers,
    inputs=(),
    support_condition: bool = False,
    directory: str = "/agent/_tasks/Sample/1.0.0",
) -> Definition:
    return Definition(
        directory=directory,
        data=DefinitionData(
            inputs=tuple(inputs),
            execution=ExecutionData(handlers=tuple(handlers), support_condition=support_condition),
        ),
    )


@pytest.fixture(autouse=True)
def reset_recording_handler():
    RecordingHandler.runs = []
    yield
    RecordingHandler.runs = []


@pytest.fixture
def variables() -> Variables:
    return Variables({"system.hosttype": "build"})


@pytest.fixture
def context(variables) -> ExecutionContext:
    return ExecutionContext(variables=variables, environment={})


@pytest.fixture
def registry() -> ExtensionRegistry:
    return ExtensionRegistry()


@pytest.fixture
def factory() -> HandlerFactory:
    factory = HandlerFactory()
    factory.register_handler("Node", RecordingHandler)
    factory.register_handler("Process", RecordingHandler)
    return factory


@pytest.fixture
def linux() -> Platform:
    return Platform.LINUX


@pytest.fixture
def node_handler() -> HandlerData:
    return HandlerData(kind="Node", priority=5, platforms=(Platform.LINUX,), inputs={"target": "index.js"})


@pytest.fixture
def process_handler() -> HandlerData:
    return HandlerData(kind="Process", priority=10, platforms=(), inputs={"target": "run.sh"})


@pytest.fixture
def file_path_input() -> TaskInputDefinition:
    return TaskInputDefinition(name="path", default_value="sub/dir", input_type="filePath")
