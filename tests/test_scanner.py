"""Tests for the tag scanner."""

from snipe import Tag, skip_to_next_tag


class TestSkipToNextTag:
    def test_set(self):
        assert skip_to_next_tag("set(SRC a.cc)") == ("SRC a.cc)", Tag.SET)

    def test_optional_space_before_paren(self):
        assert skip_to_next_tag("set (SRC a.cc)") == ("SRC a.cc)", Tag.SET)
        assert skip_to_next_tag("rp_test (UNIT_TEST)") == ("UNIT_TEST)", Tag.RP_TEST)

    def test_two_spaces_are_not_a_keyword(self):
        assert skip_to_next_tag("set  (SRC a.cc)") == ("", Tag.EOF)

    def test_skips_unrelated_content(self):
        text = "cmake_minimum_required(VERSION 3.20)\nv_cc_library(NAME x)\nforeach(F ${S})"
        assert skip_to_next_tag(text) == ("F ${S})", Tag.FOREACH)

    def test_endforeach_is_not_read_as_foreach(self):
        assert skip_to_next_tag("  endforeach()\nrest") == ("\nrest", Tag.ENDFOREACH)
        assert skip_to_next_tag("endforeach ()") == ("", Tag.ENDFOREACH)

    def test_get_filename_component(self):
        rem, tag = skip_to_next_tag("get_filename_component (STEM ${F} NAME_WE)")
        assert tag is Tag.GET_FILENAME_COMPONENT
        assert rem == "STEM ${F} NAME_WE)"

    def test_keyword_must_start_an_identifier(self):
        assert skip_to_next_tag("unset(FOO)") == ("", Tag.EOF)
        assert skip_to_next_tag("add_rp_test(x)") == ("", Tag.EOF)

    def test_returns_first_keyword_only(self):
        rem, tag = skip_to_next_tag("x set(A) rp_test(B)")
        assert tag is Tag.SET
        assert rem == "A) rp_test(B)"

    def test_end_of_input(self):
        assert skip_to_next_tag("") == ("", Tag.EOF)
        assert skip_to_next_tag("nothing to see here") == ("", Tag.EOF)
