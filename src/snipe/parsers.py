"""Parsers for the CMake constructs recognized by the tag scanner.

Every parser takes the text that follows its keyword (as returned by
``skip_to_next_tag``) and returns ``(remaining_text, result)``.

Grammar (within the call parentheses):
    set         = IDENT IDENT* ")"
    rp_test     = KIND (IDENT)* ")"          # BINARY_NAME <name>, SOURCES <src>...
    foreach     = IDENT WS "${" NAME "}" ")"
    get_filename_component = IDENT ... ")"
"""

import re
from dataclasses import dataclass

from .binding import Transform
from .context import EvaluationContext
from .errors import MalformedConstructError
from .models import SourceSet, SuiteDecl, SuiteKind

IDENTIFIER = re.compile(r'[A-Za-z0-9#${}_:."\-/=]*')
LOOP_SOURCE = re.compile(r"\s+\$\{(?P<name>[A-Za-z0-9_]*)\}\s*\)")

KIND_KEYWORDS = {
    "UNIT_TEST": SuiteKind.UNIT,
    "FIXTURE_TEST": SuiteKind.FIXTURE,
    "BENCHMARK_TEST": SuiteKind.BENCH,
}

NAME_MARKER = "BINARY_NAME"
SOURCES_MARKER = "SOURCES"


@dataclass
class LoopHeader:
    variable: str
    source_set: SourceSet


@dataclass
class DerivedName:
    name: str
    transform: Transform = Transform.STRIP_CC_SUFFIX


def parse_identifier(text: str) -> tuple[str, str]:
    """Read an identifier; may be empty."""
    m = IDENTIFIER.match(text)
    return text[m.end():], m.group(0)


def parse_arguments(text: str, construct: str) -> tuple[str, list[str]]:
    """Read whitespace-separated identifiers up to the closing parenthesis."""
    tokens: list[str] = []
    while True:
        text = text.lstrip()
        if not text:
            raise MalformedConstructError(construct, "missing closing ')'")
        if text[0] == ")":
            return text[1:], tokens
        text, token = parse_identifier(text)
        if not token:
            raise MalformedConstructError(construct, f"unexpected character {text[0]!r}")
        tokens.append(token)


def parse_set_sources(text: str) -> tuple[str, SourceSet]:
    rem, tokens = parse_arguments(text, "set")
    if not tokens:
        raise MalformedConstructError("set", "missing set name")
    return rem, SourceSet.from_tokens(tokens)


def is_stop_word(token: str) -> bool:
    # Marks the start of the next keyed group (e.g. LIBRARIES, LABELS).
    # An all-uppercase source path would stop the source list too.
    return all(c.isupper() or c == "_" for c in token)


def find_test_name(tokens: list[str]) -> str:
    if NAME_MARKER not in tokens:
        raise MalformedConstructError("rp_test", f"missing {NAME_MARKER}")
    index = tokens.index(NAME_MARKER)
    if index + 1 >= len(tokens):
        raise MalformedConstructError("rp_test", f"missing value after {NAME_MARKER}")
    return tokens[index + 1]


def find_test_sources(tokens: list[str]) -> set[str]:
    if SOURCES_MARKER not in tokens:
        raise MalformedConstructError("rp_test", f"missing {SOURCES_MARKER}")
    sources = set()
    for token in tokens[tokens.index(SOURCES_MARKER) + 1:]:
        if is_stop_word(token):
            break
        sources.add(token)
    return sources


def parse_rp_test(text: str) -> tuple[str, SuiteDecl]:
    rem, tokens = parse_arguments(text, "rp_test")
    if not tokens:
        raise MalformedConstructError("rp_test", "missing test kind")
    kind = KIND_KEYWORDS.get(tokens[0])
    if kind is None:
        raise MalformedConstructError("rp_test", f"unexpected test kind {tokens[0]!r}")
    suite = SuiteDecl(
        name=find_test_name(tokens),
        kind=kind,
        sources=find_test_sources(tokens),
    )
    return rem, suite


def parse_foreach(text: str, ctx: EvaluationContext) -> tuple[str, LoopHeader]:
    """Parse ``VAR ${SET})``; SET must already be declared in ctx."""
    rem, variable = parse_identifier(text.lstrip())
    if not variable:
        raise MalformedConstructError("foreach", "missing loop variable")
    m = LOOP_SOURCE.match(rem)
    if m is None:
        raise MalformedConstructError("foreach", "expected '${SET})' after loop variable")
    source_set = ctx.lookup_set(m.group("name"))
    return rem[m.end():], LoopHeader(variable=variable, source_set=source_set)


def parse_derived_name(text: str) -> tuple[str, DerivedName]:
    """Parse the output variable of ``get_filename_component`` and skip the rest."""
    rem, name = parse_identifier(text.lstrip())
    if not name:
        raise MalformedConstructError("get_filename_component", "missing output variable")
    end = rem.find(")")
    if end < 0:
        raise MalformedConstructError("get_filename_component", "missing closing ')'")
    return rem[end + 1:], DerivedName(name=name)
