"""
Tree builder.

Walks a live view-model instance and produces a ControlNode per instance:
scalar properties first (bound through the dispatcher), then nested
view-models, recursively. Failures are contained per property and per nested
instance.

Recursion is guarded by the chain of blueprint names currently being
expanded (unnamed instances count under the property name they were reached
through): meeting a blueprint already on the chain, or going deeper than
``max_depth``, produces a node whose properties are bound but whose nested
view-models are cut off (``truncated=True``).
"""

import logging
from typing import Any, Dict, Optional, Tuple

from controltree.capabilities import entry_field, get_attribute, get_capability, property_entries
from controltree.config import ConnectorConfig, get_connector_config
from controltree.control_tree import ControlNode, LivePropertyEntry
from controltree.descriptor import StaticDescriptor
from controltree.dispatcher import read_live_property
from controltree.log_setup import trace
from controltree.metadata import resolve_enum_type_name
from controltree.property_types import PropertyType
from controltree.verifier import check_binding

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Builds live ControlNodes for one document.

    Args:
        descriptor: Static descriptor used for enum metadata
        artboard_name: Active artboard; enables artboard-level metadata lookup for the root
        config: Build settings (thread config when None)
    """

    def __init__(self, descriptor: Optional[StaticDescriptor], artboard_name: Optional[str] = None,
                 config: Optional[ConnectorConfig] = None):
        self.descriptor = descriptor
        self.artboard_name = artboard_name
        self.config = config or get_connector_config()

    def build_root(self, instance: Any, instance_name: str, blueprint_name: Optional[str] = None) -> ControlNode:
        """Build the root node; runs the binding self-test first."""
        checked: Dict[str, Any] = {}
        if self.config.verify_bindings:
            check = check_binding(instance, config=self.config)
            if not check.passed:
                logger.warning("View-model binding test FAILED for root instance - controls may not update the animation")
            if check.handle is not None:
                checked[check.property_name] = check.handle
        return self._build(instance, instance_name, blueprint_name, chain=(), is_root=True, checked=checked)

    def _build(self, instance: Any, instance_name: str, blueprint_label: Optional[str],
               chain: Tuple[str, ...], is_root: bool, checked: Dict[str, Any]) -> ControlNode:
        live_name = get_attribute(instance, "name")
        if not isinstance(live_name, str) or not live_name:
            live_name = None
        node = ControlNode.live(
            instance_name=instance_name,
            blueprint_name=blueprint_label or live_name or instance_name,
            live_instance=instance,
        )

        properties = property_entries(instance)
        if properties is None:
            logger.warning(f"View model '{instance_name}' exposes no property list")
            return node
        logger.debug(f"Processing {len(properties)} properties on view model '{instance_name}'")

        lookup_blueprint = live_name or node.blueprint_name
        for entry in properties:
            try:
                self._add_scalar(node, instance, entry, lookup_blueprint, is_root, checked)
            except Exception as e:
                logger.warning(f"Error processing property on view model '{instance_name}': {e}")

        # Unnamed instances are keyed by the property they were reached through
        chain_key = live_name or f"<{instance_name}>"
        if self.config.guard_cycles and chain_key in chain:
            logger.warning(
                f"View model '{instance_name}' re-enters blueprint '{chain_key}' "
                f"(chain: {' > '.join(chain)}); nested view models truncated"
            )
            node.truncated = True
            return node
        if self.config.max_depth is not None and len(chain) >= self.config.max_depth:
            logger.warning(f"View model '{instance_name}' is {len(chain)} levels deep; nested view models truncated")
            node.truncated = True
            return node

        nested_chain = chain + (chain_key,)
        for entry in properties:
            if PropertyType.parse(entry_field(entry, "type")) is PropertyType.VIEW_MODEL:
                self._add_nested(node, instance, entry_field(entry, "name"), nested_chain)
        return node

    def _add_scalar(self, node: ControlNode, instance: Any, entry: Any,
                    lookup_blueprint: str, is_root: bool, checked: Dict[str, Any]) -> None:
        raw_type = entry_field(entry, "type")
        property_type = PropertyType.parse(raw_type)
        if property_type is PropertyType.VIEW_MODEL:
            return

        name = entry_field(entry, "name")
        live_property = checked.get(name) if name in checked else read_live_property(instance, entry)
        if live_property is None:
            return

        enum_type_name = None
        if property_type is PropertyType.ENUM:
            enum_type_name = resolve_enum_type_name(
                self.descriptor, lookup_blueprint, name,
                artboard_name=self.artboard_name if is_root else None,
            )
        node.add_property(LivePropertyEntry(
            name=name,
            type=raw_type if isinstance(raw_type, str) else property_type.value,
            live_property=live_property,
            enum_type_name=enum_type_name,
        ))
        trace(logger, f"Added property {node.instance_name}.{name} ({raw_type})")

    def _add_nested(self, node: ControlNode, instance: Any, name: str, chain: Tuple[str, ...]) -> None:
        try:
            view_model = get_capability(instance, "viewModel")
            if view_model is None:
                logger.warning(f"View model '{node.instance_name}' has no viewModel capability for '{name}'")
                return
            nested_instance = view_model(name)
            if nested_instance is None:
                logger.warning(f"Nested view model '{name}' not available on '{node.instance_name}'")
                return

            logger.debug(f"Processing nested view model: {name}")
            checked: Dict[str, Any] = {}
            if self.config.verify_nested_bindings:
                check = check_binding(nested_instance, config=self.config)
                if not check.passed:
                    logger.warning(f"Binding test failed for nested view model '{name}'")
                if check.handle is not None:
                    checked[check.property_name] = check.handle
            node.add_nested(self._build(nested_instance, name, None, chain, is_root=False, checked=checked))
        except Exception as e:
            logger.warning(f"Error processing nested view model '{name}' on '{node.instance_name}': {e}")


def build_node(instance: Any, instance_name: str, descriptor: Optional[StaticDescriptor],
               artboard_name: Optional[str] = None, config: Optional[ConnectorConfig] = None) -> ControlNode:
    """Build a live ControlNode tree rooted at ``instance``.

    The call is treated as a root invocation: the binding self-test runs on
    ``instance`` before its properties are walked.
    """
    return TreeBuilder(descriptor, artboard_name=artboard_name, config=config).build_root(instance, instance_name)
