"""User configuration, stored as YAML under the XDG config directory.

Files (in ``$XDG_CONFIG_HOME/snipe``, default ``~/.config/snipe``):
    scan_config.yaml      where to look for C++ and Python tests
    command_config.yaml   command templates used to build and run a test
    command_env.yaml      extra environment for those commands

A missing file is created with defaults on first use.
"""

import logging
import os
from pathlib import Path
from typing import ClassVar, TypeVar

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

APP_NAME = "snipe"

DEFAULT_COMMANDS = {
    "duck": 'task rp:run-ducktape-tests DUCKTAPE_ARGS="{{test_path}} {{test_args}}"',
    "compile": "ninja -C vbuild/{{build_type}}/clang -j 25 bin/{{test_obj}}",
    "run": (
        "./tools/cmake_test.py --binary {{pwd}}/vbuild/{{build_type}}/clang/bin/{{test_obj}}"
        " {{test_tag_arg}} -- -c1"
    ),
}

DEFAULT_ENV = {
    "RP_TRIM_LOGS": "false",
    "ENABLE_GIT_VERSION": "OFF",
    "ENABLE_GIT_HASH": "OFF",
    "REDPANDA_LOG_LEVEL": "trace",
}


class ConfigError(Exception):
    pass


def config_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_NAME


def data_dir() -> Path:
    base = os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(base) / APP_NAME


class ScanConfig(BaseModel):
    filename: ClassVar[str] = "scan_config.yaml"

    cc_test_root: str = "src/v"
    py_test_root: str = "tests/rptest"


class CommandRunConfig(BaseModel):
    filename: ClassVar[str] = "command_config.yaml"

    command_mappings: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COMMANDS))
    wrapper: list[str] = Field(default_factory=lambda: ["teetty", "-s", "--"])


class CommandEnv(BaseModel):
    filename: ClassVar[str] = "command_env.yaml"

    envs: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ENV))


ConfigT = TypeVar("ConfigT", ScanConfig, CommandRunConfig, CommandEnv)


def read_config(model: type[ConfigT], path: Path) -> ConfigT:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return model.model_validate(data)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise ConfigError(f"invalid configuration {path}: {e}") from e


def write_config(config: BaseModel, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(config.model_dump(), sort_keys=False), encoding="utf-8")


def load_configuration(model: type[ConfigT], custom_path: str | Path | None = None) -> ConfigT:
    """Load a config model, seeding the default location when needed.

    A custom path is read and copied to the default location so later runs
    pick it up without the flag.
    """
    default_path = config_dir() / model.filename
    if custom_path is not None:
        config = read_config(model, Path(custom_path))
        write_config(config, default_path)
        logger.info(f"copied configuration from {custom_path} to {default_path}")
        return config
    if default_path.exists():
        logger.debug(f"loading configuration from {default_path}")
        return read_config(model, default_path)
    logger.info(f"storing default configuration in {default_path}")
    config = model()
    write_config(config, default_path)
    return config


def parse_env_file(path: str | Path = ".env") -> dict[str, str | None]:
    """Read a dotenv file. A missing file yields an empty mapping."""
    return dict(dotenv_values(path, encoding="utf-8"))


def load_build_type(path: str | Path = ".env") -> str:
    return parse_env_file(path).get("BUILD_TYPE") or "DEBUG"
