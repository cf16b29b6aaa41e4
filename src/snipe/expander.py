"""Dispatch scanned tags to their parsers and expand foreach loops.

Example:
    from snipe import parse_suites

    suites = parse_suites('''
        set(SRC a.cc b.cc)
        foreach(F ${SRC})
          get_filename_component(STEM ${F} NAME_WE)
          rp_test(UNIT_TEST BINARY_NAME test_${STEM} SOURCES ${F})
        endforeach()
    ''')
    # -> test_a (sources {"a.cc"}), test_b (sources {"b.cc"})
"""

import logging
from pathlib import Path

from .binding import BindingTable
from .context import EvaluationContext
from .errors import MalformedConstructError, ParseError
from .models import SuiteDecl
from .parsers import parse_derived_name, parse_foreach, parse_rp_test, parse_set_sources
from .scanner import Tag, skip_to_next_tag

logger = logging.getLogger(__name__)


def expand_foreach(text: str, ctx: EvaluationContext) -> tuple[str, list[SuiteDecl]]:
    """Parse a loop (header through endforeach) and resolve it once per set member."""
    rem, header = parse_foreach(text, ctx)

    table = BindingTable()
    table.declare(header.variable)

    rem, tag = skip_to_next_tag(rem)
    if tag is Tag.GET_FILENAME_COMPONENT:
        rem, derived = parse_derived_name(rem)
        table.declare_derived(derived.name, header.variable, derived.transform)
        rem, tag = skip_to_next_tag(rem)

    if tag is not Tag.RP_TEST:
        raise MalformedConstructError(
            "foreach", f"expected rp_test() in loop body, found {tag.value}"
        )
    rem, template = parse_rp_test(rem)

    rem, tag = skip_to_next_tag(rem)
    if tag is not Tag.ENDFOREACH:
        raise MalformedConstructError("foreach", f"expected endforeach(), found {tag.value}")

    suites = []
    for member in sorted(ctx.resolve_set(header.source_set.name)):
        table.bind(header.variable, member)
        suites.append(template.evaluate(table.materialize(), ctx))
    return rem, suites


def dispatch_tag_parse(text: str, ctx: EvaluationContext, tag: Tag) -> str:
    """Handle one scanned tag, updating ctx. Returns the remaining text."""
    match tag:
        case Tag.SET:
            rem, source_set = parse_set_sources(text)
            ctx.declare_set(source_set)
            return rem
        case Tag.FOREACH:
            rem, suites = expand_foreach(text, ctx)
            for suite in suites:
                ctx.install(suite)
            return rem
        case Tag.ENDFOREACH:
            raise MalformedConstructError("endforeach", "no matching foreach()")
        case Tag.RP_TEST:
            rem, suite = parse_rp_test(text)
            if suite.needs_source_expansion():
                suite.expand_sources(ctx)
            ctx.install(suite)
            return rem
        case Tag.GET_FILENAME_COMPONENT:
            # only meaningful inside a foreach body
            return text
        case Tag.EOF:
            return text
        case _:
            raise ValueError(f"unhandled tag: {tag!r}")


def parse_unit(source: str) -> EvaluationContext:
    """Parse one CMake file's content into a fresh evaluation context."""
    ctx = EvaluationContext()
    text = source
    while text:
        text, tag = skip_to_next_tag(text)
        if tag is Tag.EOF:
            break
        try:
            text = dispatch_tag_parse(text, ctx, tag)
        except ParseError as e:
            offset = len(source) - len(text)
            e.locate(source.count("\n", 0, offset) + 1)
            raise
    return ctx


def parse_suites(source: str) -> list[SuiteDecl]:
    """Resolved suites of one CMake file, in discovery order."""
    return list(parse_unit(source).suites.values())


def parse_suites_from_file(filepath: str | Path) -> list[SuiteDecl]:
    filepath = Path(filepath)
    suites = parse_suites(filepath.read_text(encoding="utf-8"))
    logger.debug(f"{filepath}: {len(suites)} suites")
    return suites
