"""
Property accessor dispatcher.

Maps a declared property type to the live accessor that returns its binding
handle. Each PropertyType has one handler; a failure in any handler yields
None for that single property and never escapes.
"""

import logging
from typing import Any, Callable, Dict, Optional

from controltree.capabilities import entry_field, get_capability
from controltree.log_setup import trace
from controltree.property_types import PropertyType

logger = logging.getLogger(__name__)


def _call_capability(instance: Any, capability: str, name: str) -> Any:
    accessor = get_capability(instance, capability)
    if accessor is None:
        logger.debug(f"Instance has no '{capability}' capability for property '{name}'")
        return None
    return accessor(name)


def _read_enum(instance: Any, name: str) -> Any:
    """Enum accessor with fallback to the string accessor."""
    if get_capability(instance, "enum") is not None:
        try:
            handle = _call_capability(instance, "enum", name)
            if handle is not None:
                return handle
        except Exception as e:
            logger.warning(f"enum('{name}') failed, falling back to string(): {e}")
    else:
        logger.warning(f"Instance has no 'enum' capability, reading '{name}' via string()")
    return _call_capability(instance, "string", name)


def _read_trigger(instance: Any, name: str) -> Any:
    if get_capability(instance, "trigger") is None:
        return None
    return _call_capability(instance, "trigger", name)


_HANDLERS: Dict[PropertyType, Callable[[Any, str], Any]] = {
    PropertyType.BOOLEAN: lambda instance, name: _call_capability(instance, "boolean", name),
    PropertyType.NUMBER: lambda instance, name: _call_capability(instance, "number", name),
    PropertyType.STRING: lambda instance, name: _call_capability(instance, "string", name),
    PropertyType.COLOR: lambda instance, name: _call_capability(instance, "color", name),
    PropertyType.ENUM: _read_enum,
    PropertyType.TRIGGER: _read_trigger,
}


def read_live_property(instance: Any, property_entry: Any) -> Optional[Any]:
    """Fetch the live handle for one property entry.

    Args:
        instance: Live view-model instance
        property_entry: Entry of the instance's property list ({name, type})

    Returns:
        The exact handle returned by the runtime accessor, or None when the
        property cannot be bound (unknown type, view-model type, missing
        capability, accessor error, or accessor returned nothing).
    """
    name = entry_field(property_entry, "name")
    raw_type = entry_field(property_entry, "type")
    property_type = PropertyType.parse(raw_type)

    if property_type is None:
        logger.debug(f"Skipping property '{name}' with unknown type {raw_type!r}")
        return None
    if property_type is PropertyType.VIEW_MODEL:
        return None

    try:
        handle = _HANDLERS[property_type](instance, name)
    except Exception as e:
        logger.warning(f"Error accessing {property_type.value} property '{name}': {e}")
        return None

    if handle is None:
        logger.warning(f"No live handle for {property_type.value} property '{name}'")
        return None

    trace(logger, f"Bound {property_type.value} property '{name}'")
    return handle
