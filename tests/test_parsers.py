"""Tests for the per-construct parsers."""

import pytest

from snipe import (
    EvaluationContext,
    MalformedConstructError,
    SourceSet,
    SuiteKind,
    Transform,
    UnknownSymbolError,
)
from snipe.parsers import (
    find_test_sources,
    is_stop_word,
    parse_derived_name,
    parse_foreach,
    parse_identifier,
    parse_rp_test,
    parse_set_sources,
)


class TestIdentifier:
    def test_placeholder_and_paths(self):
        assert parse_identifier("${SRC} rest") == (" rest", "${SRC}")
        assert parse_identifier('v::kafka/"a-b.cc"=1)') == (")", 'v::kafka/"a-b.cc"=1')

    def test_stops_at_foreign_character(self):
        assert parse_identifier("(x") == ("(x", "")


class TestSetParser:
    def test_name_and_members(self):
        rem, source_set = parse_set_sources("SRC a.cc b.cc a.cc)\nrest")
        assert rem == "\nrest"
        assert source_set == SourceSet(name="SRC", files={"a.cc", "b.cc"})

    def test_multiline(self):
        _, source_set = parse_set_sources("SRC\n  a.cc\n  ${OTHER}\n)")
        assert source_set.files == {"a.cc", "${OTHER}"}

    def test_empty_set(self):
        _, source_set = parse_set_sources("EMPTY)")
        assert source_set.files == set()

    def test_unterminated(self):
        with pytest.raises(MalformedConstructError, match="missing closing"):
            parse_set_sources("SRC a.cc")

    def test_missing_name(self):
        with pytest.raises(MalformedConstructError, match="missing set name"):
            parse_set_sources(")")

    def test_unexpected_character(self):
        with pytest.raises(MalformedConstructError) as exc:
            parse_set_sources("SRC $<TARGET_FILE:x>)")
        assert exc.value.construct == "set"


RP_TEST = """
  UNIT_TEST
  BINARY_NAME test_kafka
  SOURCES
    produce_test.cc
    consume_test.cc
  LIBRARIES v::kafka
  LABELS kafka
)
after"""


class TestRpTestParser:
    def test_parse(self):
        rem, suite = parse_rp_test(RP_TEST)
        assert rem == "\nafter"
        assert suite.kind is SuiteKind.UNIT
        assert suite.name == "test_kafka"
        assert suite.sources == {"produce_test.cc", "consume_test.cc"}
        assert suite.tests == set()

    @pytest.mark.parametrize(
        "keyword, kind",
        [
            ("UNIT_TEST", SuiteKind.UNIT),
            ("FIXTURE_TEST", SuiteKind.FIXTURE),
            ("BENCHMARK_TEST", SuiteKind.BENCH),
        ],
    )
    def test_kinds(self, keyword, kind):
        _, suite = parse_rp_test(f"{keyword} BINARY_NAME t SOURCES t.cc)")
        assert suite.kind is kind

    def test_unknown_kind(self):
        with pytest.raises(MalformedConstructError, match="INTEGRATION_TEST"):
            parse_rp_test("INTEGRATION_TEST BINARY_NAME t SOURCES t.cc)")

    def test_missing_binary_name(self):
        with pytest.raises(MalformedConstructError, match="BINARY_NAME"):
            parse_rp_test("UNIT_TEST SOURCES t.cc)")

    def test_binary_name_without_value(self):
        with pytest.raises(MalformedConstructError, match="missing value"):
            parse_rp_test("UNIT_TEST SOURCES t.cc BINARY_NAME)")

    def test_missing_sources(self):
        with pytest.raises(MalformedConstructError, match="SOURCES"):
            parse_rp_test("UNIT_TEST BINARY_NAME t)")

    def test_empty_call(self):
        with pytest.raises(MalformedConstructError, match="missing test kind"):
            parse_rp_test(")")

    def test_placeholders_are_kept_raw(self):
        _, suite = parse_rp_test("UNIT_TEST BINARY_NAME test_${STEM} SOURCES ${F})")
        assert suite.name == "test_${STEM}"
        assert suite.sources == {"${F}"}


class TestStopWords:
    def test_uppercase_groups_stop_sources(self):
        assert is_stop_word("LIBRARIES")
        assert is_stop_word("ARGS")
        assert not is_stop_word("a.cc")
        assert not is_stop_word("V2")

    def test_all_uppercase_path_ends_the_list(self):
        # known sharp edge: README looks like the next keyed group
        tokens = ["UNIT_TEST", "SOURCES", "a.cc", "README", "b.cc"]
        assert find_test_sources(tokens) == {"a.cc"}


class TestForeachParser:
    def test_header(self):
        ctx = EvaluationContext()
        ctx.declare_set(SourceSet(name="SRC", files={"a.cc"}))
        rem, header = parse_foreach("F ${SRC})\nbody", ctx)
        assert rem == "\nbody"
        assert header.variable == "F"
        assert header.source_set.name == "SRC"

    def test_unknown_set(self):
        with pytest.raises(UnknownSymbolError) as exc:
            parse_foreach("F ${NOPE})", EvaluationContext())
        assert exc.value.name == "NOPE"

    def test_unsupported_loop_form(self):
        with pytest.raises(MalformedConstructError) as exc:
            parse_foreach("F IN LISTS SRC)", EvaluationContext())
        assert exc.value.construct == "foreach"


class TestDerivedNameParser:
    def test_reads_output_variable(self):
        rem, derived = parse_derived_name("STEM ${F} NAME_WE)\nrest")
        assert rem == "\nrest"
        assert derived.name == "STEM"
        assert derived.transform is Transform.STRIP_CC_SUFFIX

    def test_unterminated(self):
        with pytest.raises(MalformedConstructError, match="missing closing"):
            parse_derived_name("STEM ${F} NAME_WE")
