"""
Tests for the record generator.

These tests verify:
    - Generated constructor, copier and accessors and their names
    - Namespaces keep families with the same name apart
    - Structural equality with independent ownership
    - Printed form and rebuilding after a sexp round trip
"""

import pytest
from wgutil.errors import RecordError
from wgutil.forms import Pair, Symbol
from wgutil.records import (
    RecordField,
    RecordRegistry,
    define_record,
    record_to_form,
    record_from_form,
    restore_records,
)
from wgutil.sexp import print_form, read_form_string


@pytest.fixture
def registry():
    return RecordRegistry()


@pytest.fixture
def workgroup(registry):
    return define_record(
        "wg", "workgroup",
        "uid", "name", ("dirty", False), ("buffers", []),
        registry=registry,
    )


class TestDefinition:
    """Test record family generation."""

    def test_generated_names(self, workgroup):
        names = workgroup.exports()
        assert "WgWorkgroup" in names
        assert "make_wg_workgroup" in names
        assert "copy_wg_workgroup" in names
        assert "wg_workgroup_uid" in names
        assert "wg_workgroup_buffers" in names

    def test_tag(self, workgroup):
        assert workgroup.tag == Symbol("wg-workgroup")

    def test_install(self, workgroup):
        target = {}
        workgroup.install(target)
        record = target["make_wg_workgroup"](name="main")
        assert target["wg_workgroup_name"](record) == "main"

    def test_namespaces_do_not_collide(self, registry, workgroup):
        other = define_record("ewg", "workgroup", "name", registry=registry)
        assert set(workgroup.exports()).isdisjoint(other.exports())
        assert registry.get("wg", "workgroup") is workgroup
        assert registry.get("ewg", "workgroup") is other
        wg = workgroup.make(name="x")
        ewg = other.make(name="x")
        assert wg != ewg

    def test_redefinition_warns(self, registry, workgroup):
        with pytest.warns(UserWarning, match="Redefining record wg-workgroup"):
            replacement = define_record("wg", "workgroup", "name", registry=registry)
        assert registry.get("wg", "workgroup") is replacement

    def test_record_field_spec(self, registry):
        family = define_record("wg", "buf", RecordField("point", int, 1), registry=registry)
        assert family.make().point == 1

    @pytest.mark.parametrize("fields", [
        ("name", "name"),
        ("not-valid",),
        ("class",),
        ("to_form",),
        (("a", 1, 2),),
        (),
    ])
    def test_invalid_fields(self, registry, fields):
        with pytest.raises(RecordError):
            define_record("wg", "bad", *fields, registry=registry)

    def test_empty_namespace(self, registry):
        with pytest.raises(RecordError):
            define_record("", "bad", "a", registry=registry)


class TestInstances:
    """Test constructing, copying and accessing records."""

    def test_defaults(self, workgroup):
        record = workgroup.make()
        assert record.uid is None
        assert record.dirty is False
        assert record.buffers == []

    def test_keyword_only(self, workgroup):
        with pytest.raises(TypeError):
            workgroup.cls("uid-1")

    def test_unknown_field(self, workgroup):
        with pytest.raises(RecordError):
            workgroup.make(colour="red")

    def test_accessors(self, workgroup):
        record = workgroup.make(uid="A1", name="main")
        assert workgroup.accessors["uid"](record) == "A1"
        assert workgroup.exports()["wg_workgroup_name"](record) == "main"

    def test_structural_equality(self, workgroup):
        a = workgroup.make(uid="A1", name="main")
        b = workgroup.make(uid="A1", name="main")
        assert a == b
        assert a is not b

    def test_independent_ownership(self, workgroup):
        a = workgroup.make(name="main")
        b = workgroup.make(name="main")
        a.name = "changed"
        a.buffers.append("scratch")
        assert b.name == "main"
        assert b.buffers == []

    def test_copy_is_shallow(self, workgroup):
        original = workgroup.make(name="main", buffers=["a"])
        copied = workgroup.copy(original)
        assert copied == original
        assert copied is not original
        assert copied.buffers is original.buffers

    def test_copy_with_changes(self, workgroup):
        original = workgroup.make(name="main")
        renamed = workgroup.copy(original, name="other")
        assert renamed.name == "other"
        assert original.name == "main"

    def test_copy_rejects_other_records(self, registry, workgroup):
        other = define_record("ewg", "workgroup", "name", registry=registry)
        with pytest.raises(RecordError):
            workgroup.copy(other.make(name="x"))


class TestForms:
    """Test printed forms of records."""

    def test_to_form(self, workgroup):
        record = workgroup.make(uid="A1", name="main")
        assert record_to_form(record) == [
            Symbol("wg-workgroup"),
            Pair(Symbol("uid"), "A1"),
            Pair(Symbol("name"), "main"),
            Pair(Symbol("dirty"), False),
            Pair(Symbol("buffers"), []),
        ]

    def test_unset_fields_omitted(self, workgroup):
        form = record_to_form(workgroup.make(name="main"))
        assert Symbol("uid") not in [p.key for p in form[1:]]

    def test_printed(self, workgroup):
        record = workgroup.make(uid="A1", name="main", dirty=True)
        expected = '(wg-workgroup (uid . "A1") (name . "main") (dirty . t) (buffers . nil))'
        assert print_form(record) == expected

    def test_round_trip(self, registry, workgroup):
        record = workgroup.make(uid="A1", name="main", buffers=["a", Symbol("b")])
        restored = record_from_form(read_form_string(print_form(record)), registry)
        assert restored == record

    def test_nested_records(self, registry, workgroup):
        session = define_record("wg", "session", "name", ("workgroups", []), registry=registry)
        value = session.make(
            name="s",
            workgroups=[workgroup.make(name="one"), workgroup.make(name="two", dirty=True)],
        )
        restored = restore_records(read_form_string(print_form(value)), registry)
        assert restored == value
        assert workgroup.is_instance(restored.workgroups[0])

    def test_none_and_nil_round_trip(self, registry):
        """None, empty lists and False survive regardless of field defaults."""
        session = define_record(
            "wg", "session",
            ("version", "1.0"), "params", ("flag", True), ("items", []),
            registry=registry,
        )
        value = session.make(version=None, params=[], flag=False, items=None)
        restored = restore_records(read_form_string(print_form(value)), registry)
        assert restored == value
        assert restored.version is None
        assert restored.params == []
        assert restored.flag is False
        assert restored.items is None

    def test_all_fields_none(self, registry, workgroup):
        """A record with nothing set still prints at least one field."""
        record = workgroup.make(dirty=None, buffers=None)
        form = record_to_form(record)
        assert form == [Symbol("wg-workgroup"), Pair(Symbol("uid"), None)]
        restored = restore_records(read_form_string(print_form([record])), registry)
        assert workgroup.is_instance(restored[0])

    def test_restore_leaves_plain_lists(self, registry, workgroup):
        form = [Symbol("not-a-record"), Pair(Symbol("a"), 1)]
        assert restore_records(form, registry) == form

    def test_bare_tag_is_not_a_record(self, registry, workgroup):
        """A registered tag with no fields after it stays plain data."""
        form = [[Symbol("wg-workgroup")], [Symbol("wg-workgroup"), 1]]
        assert restore_records(form, registry) == form

    def test_deep_nesting_restores(self, registry, workgroup):
        """Nesting deeper than the recursion limit is rebuilt."""
        depth = 5000
        value = workgroup.make(name="leaf")
        for _ in range(depth):
            value = [value, 1]
        result = restore_records(read_form_string(print_form(value)), registry)
        for _ in range(depth):
            assert result[1] == 1
            result = result[0]
        assert result == workgroup.make(name="leaf")

    def test_unknown_tag(self, registry):
        with pytest.raises(RecordError, match="Unknown record tag"):
            record_from_form([Symbol("wg-mystery"), Pair(Symbol("a"), 1)], registry)

    def test_malformed_field(self, registry, workgroup):
        with pytest.raises(RecordError):
            record_from_form([Symbol("wg-workgroup"), 5], registry)

    def test_unknown_field_in_form(self, registry, workgroup):
        with pytest.raises(RecordError):
            record_from_form([Symbol("wg-workgroup"), Pair(Symbol("colour"), "red")], registry)

    def test_not_a_record(self):
        with pytest.raises(RecordError):
            record_to_form({"uid": 1})
