"""Render build/run commands from templates and execute them."""

import logging
import os
import shlex
import subprocess
from pathlib import Path

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError

from .config import CommandRunConfig, load_build_type
from .models import PythonTestClass, SuiteDecl

logger = logging.getLogger(__name__)


class CommandError(Exception):
    pass


def render(command_config: CommandRunConfig, template: str, **values: str) -> str:
    env = Environment(
        loader=DictLoader(command_config.command_mappings),
        undefined=StrictUndefined,
        autoescape=False,
    )
    try:
        return env.get_template(template).render(**values)
    except TemplateError as e:
        raise CommandError(f"cannot render command {template!r}: {e}") from e


def build_cc_commands(
    suite: SuiteDecl,
    test_name: str,
    command_config: CommandRunConfig,
    build_type: str | None = None,
    cwd: Path | None = None,
) -> list[str]:
    """Compile the suite's binary, then run only ``test_name`` from it."""
    build_type = build_type or load_build_type()
    test_obj = suite.test_target
    return [
        render(command_config, "compile", build_type=build_type, test_obj=test_obj),
        render(
            command_config,
            "run",
            build_type=build_type,
            test_obj=test_obj,
            test_tag_arg=f"-t {test_name}",
            pwd=str(cwd or Path.cwd()),
        ),
    ]


def build_py_commands(
    test_class: PythonTestClass, test_name: str, command_config: CommandRunConfig
) -> list[str]:
    test_path = f"{test_class.source_path}::{test_class.class_name}.{test_name}"
    return [render(command_config, "duck", test_path=test_path, test_args="--repeat=1")]


def edit_commands(commands: list[str]) -> list[str]:
    """Let the user edit each command on a prompt pre-filled with it."""
    import readline

    edited = []
    for command in commands:
        readline.set_startup_hook(lambda c=command: readline.insert_text(c))
        try:
            edited.append(input("Edit command >> "))
        finally:
            readline.set_startup_hook()
    return edited


def run_shell_commands(
    commands: list[str],
    edit: bool = False,
    envs: dict[str, str] | None = None,
    wrapper: list[str] | None = None,
) -> None:
    """Run commands in order, streaming output; stop at the first failure."""
    if edit:
        commands = edit_commands(commands)
    env = {**os.environ, **(envs or {})}

    for command in commands:
        argv = [*(wrapper or []), *shlex.split(command)]
        logger.info(f"running: {command}")
        try:
            proc = subprocess.Popen(
                argv, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, env=env
            )
        except OSError as e:
            raise CommandError(f"failed to start {argv[0]}: {e}") from e
        with proc:
            for line in proc.stdout:
                print(line, end="")
        if proc.returncode != 0:
            raise CommandError(f"command exited with {proc.returncode}: {command}")
