"""Find test-case names inside C++ test sources by scanning for test macros."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .errors import ParseError

logger = logging.getLogger(__name__)

TEST_MACROS = (
    "FIXTURE_TEST",
    "SEASTAR_THREAD_TEST_CASE",
    "BOOST_AUTO_TEST_CASE",
)


@dataclass
class CcTest:
    tag: str
    name: str


def parse_test_names(data: str, tags: tuple[str, ...] = TEST_MACROS) -> list[CcTest]:
    """Return the first argument of every ``TAG(...)`` call that opens a line.

    Calls may span several lines; they are joined until a ``)`` shows up.
    """
    pattern = re.compile(rf"(?P<tag>{'|'.join(map(re.escape, tags))})\s*\(")
    found = []
    lines = iter(data.splitlines())
    for line in lines:
        line = line.strip()
        m = pattern.match(line)
        if m is None:
            continue
        buf = line
        while ")" not in buf:
            try:
                buf += next(lines).strip()
            except StopIteration:
                raise ParseError(f"{m.group('tag')}: missing closing ')'") from None
        args = buf[m.end():].split(")", 1)[0]
        found.append(CcTest(tag=m.group("tag"), name=args.split(",")[0].strip()))
    return found


def find_tests_in_cc_source(path: Path) -> set[str]:
    tests = set()
    for test in parse_test_names(path.read_text(encoding="utf-8", errors="replace")):
        logger.debug(f"found test {test.name} of type: {test.tag}")
        tests.add(test.name)
    return tests
