"""Walk source trees and gather test definitions.

C++ suites come from ``CMakeLists.txt`` files in directories named
``tests``; each suite's test cases are read from its source files.
Python tests come from every ``.py`` file under the root.
"""

import logging
from pathlib import Path

from .expander import parse_suites_from_file
from .models import PythonTestClass, SuiteDecl
from .py_parser import find_tests_in_source
from .sources import find_tests_in_cc_source

logger = logging.getLogger(__name__)


def collect_cmake_test_definitions(root: str | Path) -> list[SuiteDecl]:
    collected: list[SuiteDecl] = []
    for path in sorted(Path(root).rglob("CMakeLists.txt")):
        if not path.is_file() or path.parent.name != "tests":
            continue
        logger.info(f"collecting tests from {path}")
        suites = parse_suites_from_file(path)
        logger.info(f"found {len(suites)} test suites")
        for suite in suites:
            for source in sorted(suite.sources):
                source_path = path.parent / source
                if not source_path.is_file():
                    logger.warning(f"{suite.name}: source {source_path} not found, skipping")
                    continue
                logger.debug(f"looking for tests in {source_path}")
                suite.tests |= find_tests_in_cc_source(source_path)
            logger.debug(f"found {len(suite.tests)} tests in {suite.name}")
        collected.extend(suites)
    return collected


def collect_python_test_files(root: str | Path) -> set[Path]:
    return {p for p in Path(root).rglob("*.py") if p.is_file()}


def collect_python_test_definitions(paths: set[Path]) -> list[PythonTestClass]:
    classes: list[PythonTestClass] = []
    for path in sorted(paths):
        try:
            classes.extend(find_tests_in_source(path))
        except SyntaxError as e:
            logger.warning(f"skipping {path}: {e}")
    return classes
