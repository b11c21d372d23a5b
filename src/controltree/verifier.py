"""
Binding verifier.

Checks that writes through a live property handle actually reach the runtime
by perturbing one scalar property, reading it back, and restoring it.
Restoration happens on every path, including failures.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from controltree.capabilities import entry_field, property_entries
from controltree.config import ConnectorConfig, get_connector_config
from controltree.dispatcher import read_live_property
from controltree.log_setup import trace
from controltree.property_types import PropertyType

logger = logging.getLogger(__name__)


def _select_probe(properties: list, property_name: Optional[str]) -> Optional[Any]:
    """Explicitly named scalar property if given, else the first scalar one."""
    for entry in properties:
        property_type = PropertyType.parse(entry_field(entry, "type"))
        if property_type is None or not property_type.is_scalar:
            continue
        if property_name is None or entry_field(entry, "name") == property_name:
            return entry
    return None


def _perturb(property_type: PropertyType, value: Any, suffix: str) -> Any:
    if property_type is PropertyType.BOOLEAN:
        return not value
    if property_type is PropertyType.NUMBER:
        return (value or 0) + 1
    return (value or '') + suffix


@dataclass(frozen=True)
class BindingCheck:
    """Outcome of one binding self-test.

    ``handle`` is the live handle that was exercised (None when none could be
    obtained); callers can bind it directly instead of fetching it again.
    """
    passed: bool
    property_name: Optional[str] = None
    handle: Any = None


def check_binding(instance: Any, property_name: Optional[str] = None,
                  config: Optional[ConnectorConfig] = None) -> BindingCheck:
    """Run a mutate/verify/restore cycle on one scalar property.

    Args:
        instance: Live view-model instance
        property_name: Property to probe; the first boolean/number/string one when None
        config: Supplies the string probe suffix (thread config when None)

    Returns:
        BindingCheck with the result, the probed property name and its handle
    """
    if instance is None:
        logger.error("Cannot verify binding: no instance provided")
        return BindingCheck(False)

    config = config or get_connector_config()
    properties = property_entries(instance)
    if properties is None:
        logger.error("Cannot verify binding: instance has no property list")
        return BindingCheck(False)

    probe = _select_probe(properties, property_name)
    if probe is None:
        logger.warning("Cannot verify binding: no scalar property found")
        return BindingCheck(False)

    name = entry_field(probe, "name")
    property_type = PropertyType.parse(entry_field(probe, "type"))
    trace(logger, f"Probing binding with {property_type.value} property '{name}'")

    handle = read_live_property(instance, probe)
    if handle is None:
        logger.error(f"Cannot verify binding: no live handle for '{name}'")
        return BindingCheck(False, name)

    try:
        original = handle.value
    except Exception as e:
        logger.error(f"Cannot read '{name}' for binding test: {e}")
        return BindingCheck(False, name, handle)

    changed = False
    try:
        expected = _perturb(property_type, original, config.probe_string_suffix)
        handle.value = expected
        changed = handle.value == expected
    except Exception as e:
        logger.error(f"Error modifying property '{name}' during binding test: {e}")
    finally:
        try:
            handle.value = original
            trace(logger, f"Restored '{name}' to {original!r}")
        except Exception as e:
            logger.error(f"Could not restore '{name}' to {original!r}: {e}")

    if changed:
        logger.debug(f"Binding test passed on '{name}'")
    else:
        logger.warning(f"Binding test failed on '{name}': property does not accept changes")
    return BindingCheck(changed, name, handle)


def verify_binding(instance: Any, property_name: Optional[str] = None,
                   config: Optional[ConnectorConfig] = None) -> bool:
    """Boolean form of :func:`check_binding`: True if the perturbed value round-tripped."""
    return check_binding(instance, property_name, config).passed
