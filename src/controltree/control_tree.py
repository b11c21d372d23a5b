"""
Control tree dataclasses: the connector's output.

The UI layer binds directly to the live handles stored here, so entries keep
references, never copies. A ControlNode is either live or a placeholder for
its whole lifetime; the two factory classmethods are the only intended
constructors, and ``add_property`` / ``add_nested`` refuse entries of the
other kind.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from controltree.descriptor import PropertyDescriptor
from controltree.property_types import PropertyType


@dataclass
class LivePropertyEntry:
    """Scalar property bound to a live runtime handle."""
    name: str
    type: str
    live_property: Any
    enum_type_name: Optional[str] = None

    is_placeholder = False

    def to_dict(self) -> Dict:
        result = {'name': self.name, 'type': self.type, 'liveProperty': self.live_property}
        if self.enum_type_name is not None:
            result['enumTypeName'] = self.enum_type_name
        return result


@dataclass
class PlaceholderPropertyEntry:
    """Scalar property carrying a static value from the descriptor."""
    name: str
    type: str
    value: Any = None
    enum_type_name: Optional[str] = None

    is_placeholder = True

    def to_dict(self) -> Dict:
        result = {'name': self.name, 'type': self.type, 'value': self.value, 'isPlaceholder': True}
        if self.enum_type_name is not None:
            result['enumTypeName'] = self.enum_type_name
        return result


PropertyEntry = Union[LivePropertyEntry, PlaceholderPropertyEntry]


@dataclass
class ControlNode:
    """One view-model instance in the control tree."""
    instance_name: str
    blueprint_name: str
    live_instance: Any = None
    properties: List[PropertyEntry] = field(default_factory=list)
    nested_view_models: List['ControlNode'] = field(default_factory=list)
    is_placeholder: bool = False
    truncated: bool = False

    @classmethod
    def live(cls, instance_name: str, blueprint_name: str, live_instance: Any) -> 'ControlNode':
        if live_instance is None:
            raise ValueError(f"Live node '{instance_name}' needs a live instance")
        return cls(instance_name=instance_name, blueprint_name=blueprint_name,
                   live_instance=live_instance, is_placeholder=False)

    @classmethod
    def placeholder(cls, instance_name: str, blueprint_name: str) -> 'ControlNode':
        return cls(instance_name=instance_name, blueprint_name=blueprint_name,
                   live_instance=None, is_placeholder=True)

    def add_property(self, entry: PropertyEntry) -> None:
        if entry.is_placeholder != self.is_placeholder:
            kind = "placeholder" if self.is_placeholder else "live"
            raise ValueError(f"Cannot add {type(entry).__name__} '{entry.name}' to {kind} node '{self.instance_name}'")
        if PropertyType.parse(entry.type) is PropertyType.VIEW_MODEL:
            raise ValueError(f"View-model property '{entry.name}' belongs in nested_view_models")
        self.properties.append(entry)

    def add_nested(self, node: 'ControlNode') -> None:
        if node.is_placeholder != self.is_placeholder:
            raise ValueError(f"Cannot nest '{node.instance_name}' under '{self.instance_name}': live/placeholder mismatch")
        self.nested_view_models.append(node)

    def iter_nodes(self) -> Iterator['ControlNode']:
        """Depth-first traversal starting with this node."""
        yield self
        for nested in self.nested_view_models:
            yield from nested.iter_nodes()

    def find(self, path: str) -> Optional['ControlNode']:
        """Find a nested node by dotted instance-name path, e.g. ``"Sub.Inner"``."""
        node = self
        for part in path.split('.'):
            node = next((n for n in node.nested_view_models if n.instance_name == part), None)
            if node is None:
                return None
        return node

    def get_property(self, name: str) -> Optional[PropertyEntry]:
        return next((p for p in self.properties if p.name == name), None)

    def to_dict(self) -> Dict:
        result = {
            'instanceName': self.instance_name,
            'blueprintName': self.blueprint_name,
            'liveInstance': self.live_instance,
            'properties': [p.to_dict() for p in self.properties],
            'nestedViewModels': [n.to_dict() for n in self.nested_view_models],
            'isPlaceholder': self.is_placeholder,
        }
        if self.truncated:
            result['truncated'] = True
        return result


@dataclass
class StateMachineInputControl:
    name: str
    type: Any
    live_input: Any
    parsed_info: Optional[PropertyDescriptor] = None

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'type': self.type,
            'liveInput': self.live_input,
            'parsedInfo': self.parsed_info.to_dict() if self.parsed_info else None,
        }


@dataclass
class StateMachineControl:
    name: str
    inputs: List[StateMachineInputControl] = field(default_factory=list)
    is_active: bool = True

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'isActive': self.is_active,
            'inputs': [i.to_dict() for i in self.inputs],
        }


@dataclass
class ControlTree:
    """Everything the UI builder needs for one loaded document."""
    active_artboard_name: Optional[str]
    active_state_machine_names: List[str] = field(default_factory=list)
    active_view_model_name: Optional[str] = None
    state_machine_controls: List[StateMachineControl] = field(default_factory=list)
    view_model_controls: List[ControlNode] = field(default_factory=list)

    @property
    def is_live(self) -> bool:
        return bool(self.view_model_controls) and not self.view_model_controls[0].is_placeholder

    def to_dict(self) -> Dict:
        """Export in the camelCase output shape. Live references are kept as-is."""
        return {
            'activeArtboardName': self.active_artboard_name,
            'activeStateMachineNames': list(self.active_state_machine_names),
            'activeViewModelName': self.active_view_model_name,
            'stateMachineControls': [c.to_dict() for c in self.state_machine_controls],
            'viewModelControls': [n.to_dict() for n in self.view_model_controls],
        }


def _format_value(value: Any) -> str:
    if value is None:
        return "(none)"
    if isinstance(value, str) and len(value) > 20:
        return f"{value[:17]}..."
    return str(value)


def summarize_node(node: ControlNode) -> str:
    """One-line summary of a node for log output."""
    kind = "placeholder" if node.is_placeholder else "live"
    field_summaries = []
    for entry in node.properties:
        if entry.is_placeholder:
            field_summaries.append(f"{entry.name}={_format_value(entry.value)}")
        else:
            try:
                field_summaries.append(f"{entry.name}={_format_value(entry.live_property.value)}")
            except Exception:
                field_summaries.append(f"{entry.name}=?")
    summary = ", ".join(field_summaries) if field_summaries else "(no properties)"
    nested = f", {len(node.nested_view_models)} nested" if node.nested_view_models else ""
    truncated = ", truncated" if node.truncated else ""
    return f"{node.instance_name} <{node.blueprint_name}> [{kind}{nested}{truncated}]: {summary}"
