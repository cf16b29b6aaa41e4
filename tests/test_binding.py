"""Tests for deferred loop bindings."""

import pytest

from snipe import (
    BindingInvariantError,
    BindingTable,
    Concrete,
    Derived,
    Transform,
    UnknownSymbolError,
)


def make_table() -> BindingTable:
    table = BindingTable()
    table.declare("F")
    table.declare_derived("STEM", "F", Transform.STRIP_CC_SUFFIX)
    return table


class TestTransform:
    def test_strips_suffix(self):
        assert Transform.STRIP_CC_SUFFIX.apply("a.cc") == "a"

    def test_absent_suffix_leaves_value(self):
        assert Transform.STRIP_CC_SUFFIX.apply("main.cpp") == "main.cpp"
        assert Transform.STRIP_CC_SUFFIX.apply("noext") == "noext"

    def test_strips_every_occurrence(self):
        assert Transform.STRIP_CC_SUFFIX.apply("x.cc_gen.cc") == "x_gen"


class TestBindingTable:
    def test_materialize_concrete_and_derived(self):
        table = make_table()
        table.bind("F", "a.cc")
        assert table.materialize() == {"F": "a.cc", "STEM": "a"}

    def test_materialize_keeps_declaration_order(self):
        table = make_table()
        table.bind("F", "a.cc")
        assert list(table.materialize()) == ["F", "STEM"]

    def test_rebinding_replaces_value(self):
        table = make_table()
        table.bind("F", "a.cc")
        table.bind("F", "b.cc")
        assert table.materialize() == {"F": "b.cc", "STEM": "b"}

    def test_materialize_is_idempotent(self):
        table = make_table()
        table.bind("F", "kafka/a.cc")
        before = table.model_dump()
        assert table.materialize() == table.materialize()
        assert table.model_dump() == before

    def test_entries_are_typed(self):
        table = make_table()
        table.bind("F", "a.cc")
        assert table.entries["F"] == Concrete(value="a.cc")
        assert table.entries["STEM"] == Derived(target="F", transform=Transform.STRIP_CC_SUFFIX)

    def test_table_can_be_cloned(self):
        table = make_table()
        clone = BindingTable.model_validate(table.model_dump())
        clone.bind("F", "c.cc")
        assert clone.materialize() == {"F": "c.cc", "STEM": "c"}
        # the source table is untouched
        with pytest.raises(BindingInvariantError):
            table.materialize()


class TestBindingErrors:
    def test_derived_onto_unknown_key(self):
        table = BindingTable()
        with pytest.raises(UnknownSymbolError) as exc:
            table.declare_derived("STEM", "F", Transform.STRIP_CC_SUFFIX)
        assert exc.value.name == "F"

    def test_bind_unknown_key(self):
        with pytest.raises(UnknownSymbolError, match="X"):
            BindingTable().bind("X", "a.cc")

    def test_unset_entry_is_an_invariant_violation(self):
        table = BindingTable()
        table.declare("F")
        with pytest.raises(BindingInvariantError, match="F was never bound"):
            table.materialize()

    def test_derived_from_unset_target(self):
        with pytest.raises(BindingInvariantError):
            make_table().materialize()

    def test_invariant_violation_is_an_assertion(self):
        assert issubclass(BindingInvariantError, AssertionError)
