"""Find a test by name and run it.

Usage:
    snipe --cc test_produce_consume
    snipe --py test_leadership_transfer --edit
    snipe --cc test_append -c ./scan_config.yaml -v
"""

import argparse
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from . import cache
from .cache import CacheError
from .collect import (
    collect_cmake_test_definitions,
    collect_python_test_definitions,
    collect_python_test_files,
)
from .commands import CommandError, build_cc_commands, build_py_commands, run_shell_commands
from .config import CommandEnv, CommandRunConfig, ConfigError, ScanConfig, load_configuration
from .errors import ParseError
from .models import PythonTestClass, SuiteDecl

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )


def select_from_list(
    items: list, name: str, ask: Callable[[str], str] | None = None
) -> Any | None:
    """Ask the user to pick one of several matches. Returns None on quit."""
    ask = ask or input
    print(f"Multiple matches found for {name}")
    while True:
        print("Please select one of the following matching items (q to quit): ")
        for index, item in enumerate(items, start=1):
            print(f"[{index}] {item}")
        answer = ask(">> ").strip().lower()
        if answer == "q":
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(items):
            return items[int(answer) - 1]
        print("that is an invalid choice!")


@dataclass
class SearchAndExecute:
    kind: str  # "cc" or "py"
    name: str
    edit: bool
    scan_config: ScanConfig
    command_config: CommandRunConfig
    command_env: CommandEnv

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SearchAndExecute":
        kind, name = ("cc", args.cc) if args.cc is not None else ("py", args.py)
        return cls(
            kind=kind,
            name=name,
            edit=args.edit,
            scan_config=load_configuration(ScanConfig, args.config_file),
            command_config=load_configuration(CommandRunConfig),
            command_env=load_configuration(CommandEnv),
        )

    @property
    def file_name(self) -> str:
        return cache.CC_DB if self.kind == "cc" else cache.PY_DB

    def scan_and_store_definitions(self) -> None:
        if self.kind == "cc":
            definitions = collect_cmake_test_definitions(self.scan_config.cc_test_root)
        else:
            paths = collect_python_test_files(self.scan_config.py_test_root)
            definitions = collect_python_test_definitions(paths)
        cache.store_definitions(self.file_name, definitions)

    def ensure_db_exists(self) -> None:
        if not cache.cache_exists(self.file_name):
            self.scan_and_store_definitions()

    def find_matching_tests(self) -> list[SuiteDecl | PythonTestClass]:
        return [t for t in cache.load_definitions(self.file_name) if self.name in t.tests]

    def find_test(self) -> SuiteDecl | PythonTestClass | None:
        matching = self.find_matching_tests()
        if not matching:
            logger.info("test not found in cache, rescanning...")
            self.scan_and_store_definitions()
            matching = self.find_matching_tests()
        if not matching:
            return None
        if len(matching) == 1:
            return matching[0]
        return select_from_list(matching, self.name)

    def run_test(self, test: SuiteDecl | PythonTestClass | None) -> None:
        if test is None:
            print("no test found")
            return
        if isinstance(test, SuiteDecl):
            commands = build_cc_commands(test, self.name, self.command_config)
        else:
            commands = build_py_commands(test, self.name, self.command_config)
        run_shell_commands(
            commands,
            edit=self.edit,
            envs=self.command_env.envs,
            wrapper=self.command_config.wrapper,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snipe", description="Find a test by name and run it")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--cc", metavar="NAME", help="C++ test name")
    group.add_argument("--py", metavar="NAME", help="Ducktape test name")
    parser.add_argument(
        "-e", "--edit", action="store_true", help="Edit command before running test"
    )
    parser.add_argument(
        "-c",
        "--config-file",
        default=None,
        help="Seed defaults from config file (and copy to default location for future runs)",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        context = SearchAndExecute.from_args(args)
        context.ensure_db_exists()
        context.run_test(context.find_test())
    except (ParseError, ConfigError, CacheError, CommandError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
