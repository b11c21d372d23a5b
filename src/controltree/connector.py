"""
Runtime graph connector.

Reconciles the static descriptor of a loaded document with the live runtime
handle and produces one ControlTree snapshot per call:

    descriptor + handle
        → resolve_root            (ordered strategies)
        → TreeBuilder.build_root  (binding self-test, dispatch, enum metadata, nested walk)
        → or PlaceholderService   (static, read-only tree)
        + build_state_machine_controls

Nothing raises past ``RuntimeGraphConnector.build``; every failure below the
whole-build level is logged and contained.
"""

import logging
from typing import Any, List, Optional

from controltree.builder import TreeBuilder
from controltree.capabilities import entry_field, get_attribute
from controltree.config import ConnectorConfig, get_connector_config
from controltree.control_tree import ControlTree, summarize_node
from controltree.descriptor import DescriptorError, StaticDescriptor
from controltree.inspection import InspectionRegistry
from controltree.placeholder import PlaceholderService
from controltree.resolver import resolve_root
from controltree.state_machines import build_state_machine_controls

logger = logging.getLogger(__name__)


class RuntimeGraphConnector:
    """Builds control trees for UI binding.

    Args:
        config: Settings for every build of this connector; the thread's
            current config is read at build time when None
    """

    def __init__(self, config: Optional[ConnectorConfig] = None):
        self._config = config

    @property
    def config(self) -> ConnectorConfig:
        return self._config or get_connector_config()

    def build(self, descriptor: Any, handle: Any) -> Optional[ControlTree]:
        """Build the control tree for one document load.

        Args:
            descriptor: StaticDescriptor or the parser's raw mapping
            handle: Live runtime handle, or None when no document is running

        Returns:
            ControlTree, or None if the descriptor is missing or unusable
        """
        if descriptor is None:
            logger.error("Missing static descriptor; no controls built")
            return None
        try:
            static = StaticDescriptor.coerce(descriptor)
        except DescriptorError as e:
            logger.error(f"Invalid static descriptor: {e}")
            return None

        try:
            return self._build(static, handle, self.config)
        except Exception:
            logger.exception("Unexpected error while building control tree")
            return None

    def _build(self, descriptor: StaticDescriptor, handle: Any, config: ConnectorConfig) -> ControlTree:
        defaults = descriptor.default_elements
        artboard_name = self._active_artboard_name(descriptor, handle)
        state_machine_names = self._active_state_machine_names(descriptor, handle)
        view_model_name = defaults.view_model_name

        logger.info(f"Active artboard: {artboard_name}")
        logger.info(f"Active state machines: {', '.join(state_machine_names)}")
        logger.info(f"Active view model: {view_model_name}")

        tree = ControlTree(
            active_artboard_name=artboard_name,
            active_state_machine_names=state_machine_names,
            active_view_model_name=view_model_name,
        )
        tree.state_machine_controls = build_state_machine_controls(
            handle, descriptor, artboard_name, state_machine_names,
        )

        root_instance = resolve_root(handle, artboard_name)
        if root_instance is not None:
            live_name = get_attribute(root_instance, "name")
            if not isinstance(live_name, str):
                live_name = None
            builder = TreeBuilder(descriptor, artboard_name=artboard_name, config=config)
            root = builder.build_root(
                root_instance,
                instance_name=view_model_name or config.default_instance_name,
                blueprint_name=view_model_name or live_name or config.unknown_blueprint_name,
            )
            tree.view_model_controls.append(root)
            logger.debug(summarize_node(root))
            if config.expose_for_inspection:
                InspectionRegistry.expose(artboard_name, root_instance, tree)
        else:
            logger.warning("No live view-model instance found - using placeholders")
            placeholder = PlaceholderService.build(descriptor, artboard_name, config)
            if placeholder is not None:
                tree.view_model_controls.append(placeholder)
                logger.debug(summarize_node(placeholder))

        logger.info(f"Control tree has {len(tree.view_model_controls)} view-model root(s) "
                    f"and {len(tree.state_machine_controls)} state machine(s)")
        return tree

    @staticmethod
    def _active_artboard_name(descriptor: StaticDescriptor, handle: Any) -> Optional[str]:
        """Default artboard → handle's current artboard → first artboard in the descriptor."""
        if descriptor.default_elements.artboard_name:
            return descriptor.default_elements.artboard_name
        artboard_name = get_attribute(get_attribute(handle, "artboard"), "name")
        if isinstance(artboard_name, str) and artboard_name:
            return artboard_name
        return descriptor.artboards[0].name if descriptor.artboards else None

    @staticmethod
    def _active_state_machine_names(descriptor: StaticDescriptor, handle: Any) -> List[str]:
        """Default state machines, else the ones the handle is running."""
        if descriptor.default_elements.state_machine_names:
            return list(descriptor.default_elements.state_machine_names)
        running = get_attribute(handle, "stateMachines") or []
        if isinstance(running, str):
            return [running]
        names = []
        try:
            for sm in running:
                name = sm if isinstance(sm, str) else entry_field(sm, "name")
                if name:
                    names.append(name)
        except Exception as e:
            logger.warning(f"Could not list running state machines: {e}")
        return names


def process_data_for_controls(descriptor: Any, handle: Any,
                              config: Optional[ConnectorConfig] = None) -> Optional[ControlTree]:
    """Build a control tree with a one-off connector."""
    return RuntimeGraphConnector(config).build(descriptor, handle)
