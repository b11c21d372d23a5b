"""Pytest configuration, runtime fakes and shared fixtures."""
import pytest
from types import SimpleNamespace

import controltree.config as config_module
from controltree.inspection import InspectionRegistry


class FakeProperty:
    """Live property handle: a plain mutable value."""

    def __init__(self, value=None):
        self.value = value


class StuckProperty:
    """Live property handle that silently ignores writes."""

    def __init__(self, value=None):
        self._value = value
        self.write_attempts = 0

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, new_value):
        self.write_attempts += 1


class CountingProperty:
    """Live property handle that counts writes."""

    def __init__(self, value=None):
        self._value = value
        self.writes = 0

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, new_value):
        self.writes += 1
        self._value = new_value


class FakeViewModelInstance:
    """Live view-model instance exposing the runtime capability set.

    ``properties`` is a list of (name, type, value) tuples; for 'viewModel'
    entries the value is the nested FakeViewModelInstance. Names listed in
    ``raising`` make every accessor raise for that name.
    """

    def __init__(self, name, properties=(), raising=()):
        self.name = name
        self._entries = []
        self._handles = {}
        self._nested = {}
        self._raising = set(raising)
        for prop_name, prop_type, value in properties:
            self._entries.append({'name': prop_name, 'type': prop_type})
            if prop_type == 'viewModel':
                self._nested[prop_name] = value
            elif hasattr(value, 'value'):
                self._handles[prop_name] = value
            else:
                self._handles[prop_name] = FakeProperty(value)
        self.calls = []

    @property
    def properties(self):
        return list(self._entries)

    def handle(self, name):
        return self._handles[name]

    def _lookup(self, kind, name):
        self.calls.append((kind, name))
        if name in self._raising:
            raise RuntimeError(f"{kind}('{name}') exploded")
        return self._handles.get(name)

    def boolean(self, name):
        return self._lookup('boolean', name)

    def number(self, name):
        return self._lookup('number', name)

    def string(self, name):
        return self._lookup('string', name)

    def color(self, name):
        return self._lookup('color', name)

    def enum(self, name):
        return self._lookup('enum', name)

    def trigger(self, name):
        return self._lookup('trigger', name)

    def viewModel(self, name):
        self.calls.append(('viewModel', name))
        if name in self._raising:
            raise RuntimeError(f"viewModel('{name}') exploded")
        return self._nested.get(name)


def make_runtime(root=None, inputs=None, **extra):
    """Runtime handle bound to ``root``; ``inputs`` maps state machine name → live inputs."""
    inputs = inputs or {}
    return SimpleNamespace(
        viewModelInstance=root,
        stateMachineInputs=lambda name: inputs.get(name, []),
        **extra,
    )


@pytest.fixture(autouse=True)
def reset_connector_state():
    """Reset thread-local config and the inspection registry around each test."""
    config_module.reset_connector_config()
    original_expose = list(InspectionRegistry._on_expose_callbacks)
    original_clear = list(InspectionRegistry._on_clear_callbacks)

    yield

    config_module.reset_connector_config()
    InspectionRegistry._entries.clear()
    InspectionRegistry._on_expose_callbacks[:] = original_expose
    InspectionRegistry._on_clear_callbacks[:] = original_clear


@pytest.fixture
def document():
    """Parser output for a document with artboard 'Main', one state machine and nested view models."""
    return {
        'artboards': [
            {
                'name': 'Main',
                'stateMachines': [
                    {'name': 'State Machine 1', 'inputs': [
                        {'name': 'Hover', 'type': 'boolean', 'value': False},
                        {'name': 'Level', 'type': 'number', 'value': 0},
                    ]},
                ],
                'viewModels': [
                    {
                        'instanceName': 'Instance',
                        'sourceBlueprintName': 'Hero',
                        'inputs': [
                            {'name': 'Active', 'type': 'boolean', 'value': True},
                            {'name': 'Mood', 'type': 'enumType', 'value': 'Happy', 'enumTypeName': 'Moods'},
                            {'name': 'Tint', 'type': 'color', 'value': 0xFF3366CC},
                        ],
                        'nestedViewModels': [
                            {
                                'instanceName': 'Sub',
                                'sourceBlueprintName': 'Badge',
                                'inputs': [{'name': 'Label', 'type': 'string', 'value': 'hi'}],
                                'nestedViewModels': [],
                            },
                        ],
                    },
                ],
            },
        ],
        'allViewModelDefinitionsAndInstances': [
            {'blueprintName': 'Hero', 'blueprintProperties': [
                {'name': 'Active', 'type': 'boolean'},
                {'name': 'Mood', 'type': 'enumType', 'enumTypeName': 'Moods'},
            ]},
            {'blueprintName': 'Badge', 'blueprintProperties': [
                {'name': 'Label', 'type': 'string'},
                {'name': 'Shape', 'type': 'enumType', 'enumTypeName': 'BadgeShape'},
            ]},
        ],
        'globalEnums': [
            {'_dataEnum': {'name': 'Moods', 'values': ['Happy', 'Sad']}},
            {'name': 'BadgeShape', 'values': ['Round', 'Square']},
        ],
        'defaultElements': {'artboardName': 'Main', 'stateMachineNames': ['State Machine 1']},
    }


@pytest.fixture
def descriptor(document):
    from controltree import StaticDescriptor
    return StaticDescriptor.from_dict(document)


@pytest.fixture
def badge_instance():
    """Nested 'Badge' instance."""
    return FakeViewModelInstance('Badge', [
        ('Label', 'string', 'hi'),
        ('Shape', 'enumType', 'Round'),
    ])


@pytest.fixture
def hero_instance(badge_instance):
    """Root 'Hero' instance with one nested 'Sub' view model."""
    return FakeViewModelInstance('Hero', [
        ('Active', 'boolean', False),
        ('Mood', 'enumType', 'Happy'),
        ('Speed', 'number', 1.5),
        ('Tint', 'color', 0xFF3366CC),
        ('Fire', 'trigger', None),
        ('Sub', 'viewModel', badge_instance),
    ])
