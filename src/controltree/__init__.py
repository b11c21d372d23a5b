"""
Runtime graph connector for interactive-animation documents.

Turns a loaded document into a control-ready tree: state-machine inputs and
view-model properties (including nested view models), each bound to the live
handle the UI writes to.

Key Features:
- Ordered root-resolution strategies for locating the bound view-model instance
- Binding self-test (mutate → verify → restore) before the tree is trusted
- Closed property-type dispatch with per-property failure isolation
- Enum metadata recovered from the static descriptor, with a deterministic fallback
- Read-only placeholder tree when no live instance is reachable
- Cycle guard for self-nesting view-model blueprints

Quick Start:
    >>> from controltree import process_data_for_controls
    >>>
    >>> tree = process_data_for_controls(parsed_document, runtime)
    >>> root = tree.view_model_controls[0]
    >>> for entry in root.properties:
    ...     print(entry.name, entry.type)

Architecture:
    descriptor + runtime handle
        → resolve_root (resolver)
        → TreeBuilder (builder) using read_live_property (dispatcher),
          resolve_enum_type_name (metadata) and verify_binding (verifier)
        → or PlaceholderService (placeholder)
        + build_state_machine_controls (state_machines)

Modules:
    - connector: RuntimeGraphConnector entry point
    - resolver: Root resolution strategies
    - builder: Recursive live tree builder
    - dispatcher: Property type → live accessor
    - verifier: Binding self-test
    - metadata: Enum type name and enum definition lookup
    - placeholder: Static placeholder tree
    - state_machines: State-machine input controls
    - descriptor: Static descriptor dataclasses
    - control_tree: Output dataclasses
    - config: ConnectorConfig and thread-local current config
    - inspection: Opt-in registry of exposed live roots
    - log_setup: TRACE level and package logger setup
"""

from controltree.property_types import PropertyType

from controltree.descriptor import (
    StaticDescriptor,
    ArtboardDescriptor,
    StateMachineDescriptor,
    ViewModelDescriptor,
    PropertyDescriptor,
    BlueprintDefinition,
    EnumDefinition,
    DefaultElements,
    DescriptorError,
)

from controltree.control_tree import (
    ControlTree,
    ControlNode,
    LivePropertyEntry,
    PlaceholderPropertyEntry,
    StateMachineControl,
    StateMachineInputControl,
    summarize_node,
)

from controltree.config import (
    ConnectorConfig,
    DEFAULT_CONFIG,
    set_connector_config,
    get_connector_config,
    reset_connector_config,
    connector_config,
)

from controltree.dispatcher import read_live_property
from controltree.verifier import BindingCheck, check_binding, verify_binding
from controltree.metadata import resolve_enum_type_name, resolve_enum_definition
from controltree.resolver import resolve_root, ROOT_STRATEGIES
from controltree.builder import TreeBuilder, build_node
from controltree.placeholder import PlaceholderService, build_placeholder
from controltree.state_machines import build_state_machine_controls
from controltree.inspection import InspectionRegistry, InspectionEntry
from controltree.connector import RuntimeGraphConnector, process_data_for_controls
from controltree.log_setup import TRACE, configure_logging, set_module_level

__all__ = [
    # Types
    'PropertyType',
    # Descriptor
    'StaticDescriptor',
    'ArtboardDescriptor',
    'StateMachineDescriptor',
    'ViewModelDescriptor',
    'PropertyDescriptor',
    'BlueprintDefinition',
    'EnumDefinition',
    'DefaultElements',
    'DescriptorError',
    # Output
    'ControlTree',
    'ControlNode',
    'LivePropertyEntry',
    'PlaceholderPropertyEntry',
    'StateMachineControl',
    'StateMachineInputControl',
    'summarize_node',
    # Config
    'ConnectorConfig',
    'DEFAULT_CONFIG',
    'set_connector_config',
    'get_connector_config',
    'reset_connector_config',
    'connector_config',
    # Components
    'read_live_property',
    'verify_binding',
    'check_binding',
    'BindingCheck',
    'resolve_enum_type_name',
    'resolve_enum_definition',
    'resolve_root',
    'ROOT_STRATEGIES',
    'TreeBuilder',
    'build_node',
    'PlaceholderService',
    'build_placeholder',
    'build_state_machine_controls',
    'InspectionRegistry',
    'InspectionEntry',
    # Entry point
    'RuntimeGraphConnector',
    'process_data_for_controls',
    # Logging
    'TRACE',
    'configure_logging',
    'set_module_level',
]

__version__ = "0.1.0"
