import json

import pytest
import yaml

from taskrunner.core.errors import DefinitionLoadError
from taskrunner.core.platform import Platform
from taskrunner.tasks import Definition, DirectoryTaskManager, HandlerData, TaskInstance, load_definition

MANIFEST = {
    "inputs": [
        {"name": "scriptPath", "type": "filePath", "defaultValue": "scripts/run.sh"},
        {"name": "retries", "defaultValue": 3},
    ],
    "supportCondition": False,
    "execution": {
        "Node": {"target": "index.js", "argumentFormat": ""},
        "PowerShell3": {"target": "run.ps1", "platforms": ["windows"], "priority": 9},
        "Process": {"target": "run.sh", "conditions": {"pool": "selfhosted"}},
    },
}


def test_definition_from_dict():
    definition = Definition.from_dict(MANIFEST, directory="/tasks/Sample")

    inputs = definition.data.inputs
    assert [i.key for i in inputs] == ["scriptPath", "retries"]
    assert inputs[0].is_file_path
    assert inputs[1].default_value == "3"
    assert not inputs[1].is_file_path

    node, powershell, process = definition.data.execution.handlers
    assert node.kind == "Node"
    assert node.priority == 1
    assert node.inputs == {"target": "index.js", "argumentFormat": ""}
    assert powershell.priority == 9
    assert powershell.platforms == (Platform.WINDOWS,)
    assert "platforms" not in powershell.inputs
    assert process.conditions == {"pool": "selfhosted"}
    assert "conditions" not in process.inputs
    assert definition.data.execution.support_condition is False


def test_unknown_kind_gets_fallback_priority():
    assert HandlerData.from_dict("Docker", {}).priority == 100


def test_preferred_on_defaults_by_kind():
    assert HandlerData(kind="PowerShell3").preferred_on(Platform.WINDOWS)
    assert not HandlerData(kind="PowerShell3").preferred_on(Platform.LINUX)
    assert not HandlerData(kind="Node").preferred_on(Platform.WINDOWS)
    assert HandlerData(kind="Node", platforms=(Platform.DARWIN,)).preferred_on(Platform.DARWIN)


def test_directory_task_manager_loads_json(tmp_path):
    task_dir = tmp_path / "Sample" / "1.0.0"
    task_dir.mkdir(parents=True)
    (task_dir / "task.json").write_text(json.dumps(MANIFEST))

    definition = DirectoryTaskManager(tmp_path).load(TaskInstance(name="Sample", version="1.0.0"))

    assert definition.directory == str(task_dir.resolve())
    assert len(definition.data.execution.handlers) == 3


def test_load_definition_reads_yaml(tmp_path):
    (tmp_path / "task.yaml").write_text(yaml.safe_dump(MANIFEST))

    definition = load_definition(tmp_path)

    assert definition.data.inputs[0].key == "scriptPath"


def test_load_definition_without_manifest(tmp_path):
    with pytest.raises(DefinitionLoadError):
        load_definition(tmp_path)


def test_load_definition_with_broken_manifest(tmp_path):
    (tmp_path / "task.json").write_text("{not json")

    with pytest.raises(DefinitionLoadError):
        load_definition(tmp_path)


def test_load_definition_rejects_non_mapping(tmp_path):
    (tmp_path / "task.json").write_text("[]")

    with pytest.raises(DefinitionLoadError):
        load_definition(tmp_path)


@pytest.mark.parametrize("manifest", [
    {"execution": {"Node": "index.js"}},
    {"execution": {"Process": {"target": "run.sh", "conditions": ["pool"]}}},
    {"execution": ["Node"]},
    {"inputs": {"name": "script"}},
    {"inputs": ["script"]},
    {"execution": {"Node": {"platforms": "linux"}}},
    {"execution": {"Node": {"priority": "high"}}},
])
def test_load_definition_rejects_malformed_manifest(tmp_path, manifest):
    (tmp_path / "task.json").write_text(json.dumps(manifest))

    with pytest.raises(DefinitionLoadError):
        load_definition(tmp_path)


def test_non_string_input_name_is_kept_as_text():
    definition = Definition.from_dict({"inputs": [{"name": 7}]}, directory="/tasks/Sample")

    assert definition.data.inputs[0].key == "7"
