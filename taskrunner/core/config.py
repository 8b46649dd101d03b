"""Configuration loader with environment variable support."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()


@dataclass
class AppConfig:
    name: str = "taskrunner"
    debug: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class AgentConfig:
    platform: Optional[str] = None
    host_type: str = "build"
    tasks_dir: str = "_tasks"


@dataclass
class ExtensionsConfig:
    """Dotted class paths registered on top of the built-in extensions."""
    condition_evaluators: List[str] = field(default_factory=list)
    root_resolvers: List[str] = field(default_factory=list)
    handlers: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    app: AppConfig = field(default_factory=AppConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    extensions: ExtensionsConfig = field(default_factory=ExtensionsConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        config = cls()

        if "app" in data:
            config.app = AppConfig(**data["app"])

        if "agent" in data:
            config.agent = AgentConfig(**data["agent"])

        if "extensions" in data:
            config.extensions = ExtensionsConfig(**data["extensions"])

        return config

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        if config_path is None:
            config_path = os.getenv("CONFIG_PATH", "taskrunner.yaml")

        path = Path(config_path)

        if path.exists():
            with open(path, "r") as f:
                data = yaml.safe_load(f)
            return cls.from_dict(data or {})

        return cls()


def get_config() -> Config:
    return Config.load()


settings = get_config()
