"""Tests for the property accessor dispatcher."""
import pytest

from controltree import PropertyType, read_live_property
from conftest import FakeViewModelInstance


class NoEnumInstance(FakeViewModelInstance):
    enum = None


class NoTriggerInstance(FakeViewModelInstance):
    trigger = None


class TestPropertyType:
    """PropertyType parsing."""

    @pytest.mark.parametrize("raw, expected", [
        ("boolean", PropertyType.BOOLEAN),
        ("enumType", PropertyType.ENUM),
        ("enum", PropertyType.ENUM),
        ("viewModel", PropertyType.VIEW_MODEL),
        ("Color", PropertyType.COLOR),
    ])
    def test_known_strings(self, raw, expected):
        """Runtime type strings map to members."""
        assert PropertyType.parse(raw) is expected

    def test_unknown_is_none(self):
        """Unknown or non-string types parse to None."""
        assert PropertyType.parse("list") is None
        assert PropertyType.parse(None) is None

    def test_scalar_kinds(self):
        """Only boolean, number and string are scalar."""
        assert {t for t in PropertyType if t.is_scalar} == {
            PropertyType.BOOLEAN, PropertyType.NUMBER, PropertyType.STRING,
        }


class TestReadLiveProperty:
    """read_live_property dispatch."""

    @pytest.mark.parametrize("prop_type, accessor", [
        ("boolean", "boolean"),
        ("number", "number"),
        ("string", "string"),
        ("color", "color"),
        ("enumType", "enum"),
        ("trigger", "trigger"),
    ])
    def test_dispatches_to_matching_accessor(self, prop_type, accessor):
        """Each type calls its own accessor and returns the exact handle."""
        instance = FakeViewModelInstance('VM', [('P', prop_type, 1)])
        handle = read_live_property(instance, {'name': 'P', 'type': prop_type})
        assert handle is instance.handle('P')
        assert instance.calls == [(accessor, 'P')]

    def test_view_model_never_dispatched(self):
        """viewModel entries return None without touching accessors."""
        instance = FakeViewModelInstance('VM', [('Sub', 'viewModel', object())])
        assert read_live_property(instance, {'name': 'Sub', 'type': 'viewModel'}) is None
        assert instance.calls == []

    def test_unknown_type_is_noop(self):
        """Unknown types yield None."""
        instance = FakeViewModelInstance('VM', [('P', 'boolean', True)])
        assert read_live_property(instance, {'name': 'P', 'type': 'list'}) is None
        assert instance.calls == []

    def test_accessor_error_yields_none(self):
        """A raising accessor is contained."""
        instance = FakeViewModelInstance('VM', [('P', 'number', 1)], raising={'P'})
        assert read_live_property(instance, {'name': 'P', 'type': 'number'}) is None

    def test_missing_handle_yields_none(self):
        """Accessor returning nothing yields None."""
        instance = FakeViewModelInstance('VM')
        assert read_live_property(instance, {'name': 'Ghost', 'type': 'string'}) is None

    def test_enum_falls_back_to_string_when_enum_raises(self):
        """Enum accessor failure falls back to string()."""
        class FlakyEnum(FakeViewModelInstance):
            def enum(self, name):
                raise RuntimeError("no enums here")

        instance = FlakyEnum('VM', [('Mood', 'enumType', 'Happy')])
        handle = read_live_property(instance, {'name': 'Mood', 'type': 'enumType'})
        assert handle is instance.handle('Mood')
        assert ('string', 'Mood') in instance.calls

    def test_enum_falls_back_to_string_when_capability_missing(self):
        """Instances without enum() are read through string()."""
        instance = NoEnumInstance('VM', [('Mood', 'enumType', 'Happy')])
        assert read_live_property(instance, {'name': 'Mood', 'type': 'enumType'}) is instance.handle('Mood')
        assert instance.calls == [('string', 'Mood')]

    def test_trigger_requires_capability(self):
        """Triggers are skipped when the instance has no trigger()."""
        instance = NoTriggerInstance('VM', [('Fire', 'trigger', None)])
        assert read_live_property(instance, {'name': 'Fire', 'type': 'trigger'}) is None

    def test_object_entries(self):
        """Property-list entries may be objects with name/type attributes."""
        class Entry:
            name = 'Speed'
            type = 'number'

        handle = object()

        class Runtime:
            def number(self, name):
                return handle

        assert read_live_property(Runtime(), Entry()) is handle
