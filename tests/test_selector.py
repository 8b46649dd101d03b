import pytest

from conftest import StaticEvaluator
from taskrunner.core.errors import NoMatchingHandlerError, UnknownConditionEvaluatorError
from taskrunner.core.platform import Platform
from taskrunner.tasks import ExecutionData, HandlerData, HandlerSelector, select_handler, supported_handler_kinds


def test_static_mode_prefers_platform_native_handler(registry, node_handler, process_handler, linux):
    execution = ExecutionData(handlers=(process_handler, node_handler))

    selected = select_handler(execution, linux, registry)

    assert selected.kind == "Node"


def test_static_mode_preference_beats_priority(registry, linux):
    preferred = HandlerData(kind="Node", priority=100, platforms=(Platform.LINUX,))
    cheaper = HandlerData(kind="Process", priority=1, platforms=(Platform.WINDOWS,))

    selected = select_handler(ExecutionData(handlers=(cheaper, preferred)), linux, registry)

    assert selected is preferred


def test_static_mode_orders_by_priority_without_preference(registry, linux):
    low = HandlerData(kind="Node", priority=1)
    high = HandlerData(kind="Process", priority=2)

    assert select_handler(ExecutionData(handlers=(high, low)), linux, registry) is low


def test_static_mode_windows_kind_defaults(registry):
    node = HandlerData(kind="Node", priority=1)
    powershell = HandlerData(kind="PowerShell3", priority=2)
    execution = ExecutionData(handlers=(node, powershell))

    assert select_handler(execution, Platform.WINDOWS, registry) is powershell
    assert select_handler(execution, Platform.LINUX, registry) is node


def test_static_mode_empty_candidates_lists_supported_kinds(registry):
    with pytest.raises(NoMatchingHandlerError) as exc_info:
        select_handler(ExecutionData(handlers=()), Platform.WINDOWS, registry)

    assert exc_info.value.supported_kinds == supported_handler_kinds(Platform.WINDOWS)
    assert "PowerShell3" in str(exc_info.value)
    assert "Process" in str(exc_info.value)


def test_condition_mode_skips_unconditional_handlers(registry, node_handler, process_handler, linux):
    registry.register_condition_evaluator(StaticEvaluator("feature", {"x": False}))
    node = HandlerData(kind="Node", priority=5, platforms=(Platform.LINUX,), conditions={"feature": "x"})
    execution = ExecutionData(handlers=(process_handler, node), support_condition=True)

    with pytest.raises(NoMatchingHandlerError) as exc_info:
        select_handler(execution, linux, registry)

    assert exc_info.value.supported_kinds == ("Node",)


def test_condition_mode_picks_lowest_priority_match(registry, linux):
    registry.register_condition_evaluator(StaticEvaluator("feature", {"a": True, "b": True, "c": False}))
    first = HandlerData(kind="Node", priority=20, conditions={"feature": "a"})
    second = HandlerData(kind="Process", priority=10, conditions={"feature": "b"})
    rejected = HandlerData(kind="PowerShell", priority=1, conditions={"feature": "c"})
    execution = ExecutionData(handlers=(first, second, rejected), support_condition=True)

    assert select_handler(execution, linux, registry) is second


def test_condition_mode_breaks_ties_by_declaration_order(registry, linux):
    registry.register_condition_evaluator(StaticEvaluator("feature", {"on": True}))
    first = HandlerData(kind="Node", priority=3, conditions={"feature": "on"})
    second = HandlerData(kind="Process", priority=3, conditions={"feature": "on"})
    execution = ExecutionData(handlers=(first, second), support_condition=True)

    assert select_handler(execution, linux, registry) is first
    # deterministic on repeat
    assert select_handler(execution, linux, registry) is first


def test_condition_mode_requires_every_condition(registry, linux):
    registry.register_condition_evaluator(StaticEvaluator("feature", {"on": True}))
    registry.register_condition_evaluator(StaticEvaluator("pool", {"hosted": False}))
    partial = HandlerData(kind="Node", priority=1, conditions={"feature": "on", "pool": "hosted"})
    full = HandlerData(kind="Process", priority=9, conditions={"feature": "on"})
    execution = ExecutionData(handlers=(partial, full), support_condition=True)

    assert select_handler(execution, linux, registry) is full


def test_condition_keys_match_evaluator_names_ignoring_case(registry, linux):
    evaluator = StaticEvaluator("SelfHosted", {"true": True})
    registry.register_condition_evaluator(evaluator)
    handler = HandlerData(kind="Node", conditions={"selfhosted": "true"})

    selected = select_handler(ExecutionData(handlers=(handler,), support_condition=True), linux, registry)

    assert selected is handler
    assert evaluator.calls == ["true"]


def test_condition_evaluation_stops_at_first_mismatch(registry, linux):
    evaluator = StaticEvaluator("feature", {"on": True})
    registry.register_condition_evaluator(evaluator)
    handler = HandlerData(kind="Node", conditions={"feature": "off", "missing": "x"})

    with pytest.raises(NoMatchingHandlerError):
        select_handler(ExecutionData(handlers=(handler,), support_condition=True), linux, registry)

    assert evaluator.calls == ["off"]


def test_unknown_condition_evaluator_is_reported(registry, linux):
    handler = HandlerData(kind="Node", conditions={"gpu": "required"})
    selector = HandlerSelector(registry)

    with pytest.raises(UnknownConditionEvaluatorError) as exc_info:
        selector.select(ExecutionData(handlers=(handler,), support_condition=True), linux)

    assert exc_info.value.name == "gpu"
    assert exc_info.value.handler_kind == "Node"


@pytest.mark.parametrize(
    "platform, expected",
    [
        (Platform.WINDOWS, ("Node", "PowerShell3", "PowerShell", "AzurePowerShell", "PowerShellExe", "Process")),
        (Platform.LINUX, ("Node",)),
        (Platform.DARWIN, ("Node",)),
    ],
)
def test_supported_handler_kinds(platform, expected):
    assert supported_handler_kinds(platform) == expected
