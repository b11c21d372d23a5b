"""
Static descriptor dataclasses.

Typed, immutable view of the document description produced by the design-time
parser. The parser emits a camelCase JSON-like mapping; ``StaticDescriptor.from_dict``
turns it into these dataclasses and ``to_dict`` goes back.

Design Philosophy:
- Frozen dataclasses: the descriptor never changes during a build
- Tuples instead of lists so the whole structure is hashable-by-identity and safe to share
- Lookups return None instead of raising; absence is normal for this data
"""

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple


class DescriptorError(ValueError):
    """Raised when a descriptor mapping has the wrong shape."""


def _require_mapping(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise DescriptorError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _sequence(data: Mapping, *keys: str) -> List[Any]:
    """First present key among ``keys`` as a list (missing/None → empty)."""
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, (str, bytes, Mapping)):
            raise DescriptorError(f"'{key}' must be a list, got {type(value).__name__}")
        try:
            return list(value)
        except TypeError:
            raise DescriptorError(f"'{key}' must be a list, got {type(value).__name__}") from None
    return []


@dataclass(frozen=True)
class PropertyDescriptor:
    """One declared view-model property (or state-machine input)."""
    name: str
    type: str
    value: Any = None
    enum_type_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> 'PropertyDescriptor':
        data = _require_mapping(data, "property")
        if 'name' not in data:
            raise DescriptorError(f"property entry has no 'name': {dict(data)!r}")
        return cls(
            name=data['name'],
            type=data.get('type', ''),
            value=data.get('value'),
            enum_type_name=data.get('enumTypeName') or None,
        )

    def to_dict(self) -> Dict:
        result = {'name': self.name, 'type': self.type}
        if self.value is not None:
            result['value'] = self.value
        if self.enum_type_name:
            result['enumTypeName'] = self.enum_type_name
        return result


@dataclass(frozen=True)
class StateMachineDescriptor:
    name: str
    inputs: Tuple[PropertyDescriptor, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping) -> 'StateMachineDescriptor':
        data = _require_mapping(data, "state machine")
        return cls(
            name=data.get('name', ''),
            inputs=tuple(PropertyDescriptor.from_dict(i) for i in _sequence(data, 'inputs')),
        )

    def find_input(self, name: str) -> Optional[PropertyDescriptor]:
        return next((i for i in self.inputs if i.name == name), None)

    def to_dict(self) -> Dict:
        return {'name': self.name, 'inputs': [i.to_dict() for i in self.inputs]}


@dataclass(frozen=True)
class ViewModelDescriptor:
    """A parsed view-model instance together with its blueprint's declared properties."""
    instance_name: Optional[str]
    blueprint_name: Optional[str]
    properties: Tuple[PropertyDescriptor, ...] = ()
    nested_view_models: Tuple['ViewModelDescriptor', ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping) -> 'ViewModelDescriptor':
        data = _require_mapping(data, "view model")
        return cls(
            instance_name=data.get('instanceName'),
            blueprint_name=data.get('sourceBlueprintName') or data.get('blueprintName'),
            properties=tuple(PropertyDescriptor.from_dict(p) for p in _sequence(data, 'inputs', 'properties')),
            nested_view_models=tuple(cls.from_dict(n) for n in _sequence(data, 'nestedViewModels')),
        )

    def find_property(self, name: str) -> Optional[PropertyDescriptor]:
        return next((p for p in self.properties if p.name == name), None)

    def to_dict(self) -> Dict:
        return {
            'instanceName': self.instance_name,
            'sourceBlueprintName': self.blueprint_name,
            'inputs': [p.to_dict() for p in self.properties],
            'nestedViewModels': [n.to_dict() for n in self.nested_view_models],
        }


@dataclass(frozen=True)
class BlueprintDefinition:
    """Entry of the document-wide view-model definitions catalog."""
    blueprint_name: str
    properties: Tuple[PropertyDescriptor, ...] = ()
    instance_names: Tuple[str, ...] = ()
    instance_count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> 'BlueprintDefinition':
        data = _require_mapping(data, "view model definition")
        return cls(
            blueprint_name=data.get('blueprintName', ''),
            properties=tuple(PropertyDescriptor.from_dict(p) for p in _sequence(data, 'blueprintProperties', 'properties')),
            instance_names=tuple(_sequence(data, 'instanceNamesFromDefinition')),
            instance_count=data.get('instanceCountFromDefinition'),
        )

    def find_property(self, name: str) -> Optional[PropertyDescriptor]:
        return next((p for p in self.properties if p.name == name), None)

    def to_dict(self) -> Dict:
        return {
            'blueprintName': self.blueprint_name,
            'blueprintProperties': [p.to_dict() for p in self.properties],
            'instanceNamesFromDefinition': list(self.instance_names),
            'instanceCountFromDefinition': self.instance_count,
        }


@dataclass(frozen=True)
class EnumDefinition:
    name: str
    values: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping) -> 'EnumDefinition':
        data = _require_mapping(data, "enum")
        # The parser may wrap each enum as {'_dataEnum': {...}}
        inner = data.get('_dataEnum', data)
        inner = _require_mapping(inner, "enum")
        return cls(name=inner.get('name', ''), values=tuple(_sequence(inner, 'values')))

    def to_dict(self) -> Dict:
        return {'name': self.name, 'values': list(self.values)}


@dataclass(frozen=True)
class ArtboardDescriptor:
    name: str
    state_machines: Tuple[StateMachineDescriptor, ...] = ()
    view_models: Tuple[ViewModelDescriptor, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping) -> 'ArtboardDescriptor':
        data = _require_mapping(data, "artboard")
        return cls(
            name=data.get('name', ''),
            state_machines=tuple(StateMachineDescriptor.from_dict(s) for s in _sequence(data, 'stateMachines')),
            view_models=tuple(ViewModelDescriptor.from_dict(v) for v in _sequence(data, 'viewModels')),
        )

    def find_state_machine(self, name: str) -> Optional[StateMachineDescriptor]:
        return next((sm for sm in self.state_machines if sm.name == name), None)

    def find_view_model(self, blueprint_name: Optional[str] = None) -> Optional[ViewModelDescriptor]:
        """View model with the given blueprint name, or the first one when no name is given."""
        if blueprint_name is None:
            return self.view_models[0] if self.view_models else None
        return next((vm for vm in self.view_models if vm.blueprint_name == blueprint_name), None)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'stateMachines': [sm.to_dict() for sm in self.state_machines],
            'viewModels': [vm.to_dict() for vm in self.view_models],
        }


@dataclass(frozen=True)
class DefaultElements:
    """What the loader selected as active when the document was opened."""
    artboard_name: Optional[str] = None
    state_machine_names: Tuple[str, ...] = ()
    view_model_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> 'DefaultElements':
        if not data:
            return cls()
        data = _require_mapping(data, "defaultElements")
        return cls(
            artboard_name=data.get('artboardName'),
            state_machine_names=tuple(_sequence(data, 'stateMachineNames')),
            view_model_name=data.get('viewModelName'),
        )

    def to_dict(self) -> Dict:
        return {
            'artboardName': self.artboard_name,
            'stateMachineNames': list(self.state_machine_names),
            'viewModelName': self.view_model_name,
        }


@dataclass(frozen=True)
class StaticDescriptor:
    """Immutable design-time description of one loaded document."""
    artboards: Tuple[ArtboardDescriptor, ...] = ()
    definitions: Tuple[BlueprintDefinition, ...] = ()
    enums: Tuple[EnumDefinition, ...] = ()
    default_elements: DefaultElements = field(default_factory=DefaultElements)

    @classmethod
    def from_dict(cls, data: Mapping) -> 'StaticDescriptor':
        """Build from the parser's output mapping.

        Raises:
            DescriptorError: if the mapping (or a nested entry) has the wrong shape
        """
        data = _require_mapping(data, "descriptor")
        return cls(
            artboards=tuple(ArtboardDescriptor.from_dict(a) for a in _sequence(data, 'artboards')),
            definitions=tuple(BlueprintDefinition.from_dict(d) for d in _sequence(data, 'allViewModelDefinitionsAndInstances')),
            enums=tuple(EnumDefinition.from_dict(e) for e in _sequence(data, 'globalEnums')),
            default_elements=DefaultElements.from_dict(data.get('defaultElements')),
        )

    @classmethod
    def coerce(cls, data: Any) -> 'StaticDescriptor':
        """Accept either an existing descriptor or a raw mapping."""
        if isinstance(data, cls):
            return data
        return cls.from_dict(data)

    def find_artboard(self, name: Optional[str]) -> Optional[ArtboardDescriptor]:
        if not name:
            return None
        return next((a for a in self.artboards if a.name == name), None)

    def find_state_machine(self, artboard_name: Optional[str], state_machine_name: str) -> Optional[StateMachineDescriptor]:
        artboard = self.find_artboard(artboard_name)
        return artboard.find_state_machine(state_machine_name) if artboard else None

    def find_definition(self, blueprint_name: Optional[str]) -> Optional[BlueprintDefinition]:
        if not blueprint_name:
            return None
        return next((d for d in self.definitions if d.blueprint_name == blueprint_name), None)

    def to_dict(self) -> Dict:
        """Export to the parser's camelCase mapping shape."""
        return {
            'artboards': [a.to_dict() for a in self.artboards],
            'allViewModelDefinitionsAndInstances': [d.to_dict() for d in self.definitions],
            'globalEnums': [e.to_dict() for e in self.enums],
            'defaultElements': self.default_elements.to_dict(),
        }
