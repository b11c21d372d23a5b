"""
Placeholder tree service.

When no live root instance can be resolved, the UI still gets a tree to show:
a read-only copy of the first view model the static descriptor records for
the active artboard, with static values instead of live handles.
"""

from typing import Any, Optional
import logging

from controltree.config import ConnectorConfig, get_connector_config
from controltree.control_tree import ControlNode, PlaceholderPropertyEntry
from controltree.descriptor import PropertyDescriptor, StaticDescriptor, ViewModelDescriptor
from controltree.metadata import resolve_enum_type_name
from controltree.property_types import PropertyType

logger = logging.getLogger(__name__)


class PlaceholderService:
    """
    Builds placeholder ControlNodes from static view-model descriptors.

    Every node and entry it produces is flagged as a placeholder; no live
    reference is ever attached.
    """

    @staticmethod
    def build(descriptor: Optional[StaticDescriptor], artboard_name: Optional[str],
              config: Optional[ConnectorConfig] = None) -> Optional[ControlNode]:
        """
        Build the placeholder root for the active artboard.

        Args:
            descriptor: Static descriptor of the document
            artboard_name: Name of the active artboard
            config: Supplies default instance/blueprint names (thread config when None)

        Returns:
            Placeholder root node, or None if the artboard or its view models are absent
        """
        if descriptor is None:
            return None
        config = config or get_connector_config()

        artboard = descriptor.find_artboard(artboard_name)
        if artboard is None:
            logger.info(f"No placeholder: artboard '{artboard_name}' not in descriptor")
            return None

        view_model = artboard.find_view_model()
        if view_model is None:
            logger.info(f"No placeholder: artboard '{artboard_name}' declares no view models")
            return None

        blueprint_name = (view_model.blueprint_name
                          or descriptor.default_elements.view_model_name
                          or config.unknown_blueprint_name)
        return PlaceholderService._build_node(descriptor, view_model, blueprint_name, config)

    @staticmethod
    def _build_node(descriptor: StaticDescriptor, view_model: ViewModelDescriptor,
                    blueprint_name: str, config: ConnectorConfig) -> ControlNode:
        node = ControlNode.placeholder(
            instance_name=view_model.instance_name or config.default_instance_name,
            blueprint_name=blueprint_name,
        )
        for prop in view_model.properties:
            entry = PlaceholderService._build_entry(descriptor, blueprint_name, prop)
            if entry is not None:
                node.add_property(entry)

        for nested in view_model.nested_view_models:
            node.add_nested(PlaceholderService._build_node(
                descriptor, nested, nested.blueprint_name or config.unknown_blueprint_name, config,
            ))
        return node

    @staticmethod
    def _build_entry(descriptor: StaticDescriptor, blueprint_name: str,
                     prop: PropertyDescriptor) -> Optional[PlaceholderPropertyEntry]:
        property_type = PropertyType.parse(prop.type)
        if property_type is PropertyType.VIEW_MODEL:
            return None

        enum_type_name = None
        if property_type is PropertyType.ENUM:
            enum_type_name = prop.enum_type_name or resolve_enum_type_name(descriptor, blueprint_name, prop.name)

        return PlaceholderPropertyEntry(
            name=prop.name,
            type=prop.type,
            value=PlaceholderService.format_value(property_type, prop.value),
            enum_type_name=enum_type_name,
        )

    @staticmethod
    def format_value(property_type: Optional[PropertyType], value: Any) -> Any:
        """Normalize a static value for display; ARGB colors become ``#RRGGBB``."""
        if property_type is PropertyType.COLOR and isinstance(value, int) and not isinstance(value, bool):
            return f"#{value & 0xFFFFFF:06X}"
        return value


def build_placeholder(descriptor: Optional[StaticDescriptor], artboard_name: Optional[str],
                      config: Optional[ConnectorConfig] = None) -> Optional[ControlNode]:
    """Module-level wrapper for PlaceholderService.build."""
    return PlaceholderService.build(descriptor, artboard_name, config)
