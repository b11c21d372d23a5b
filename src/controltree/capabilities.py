"""
Capability lookup on live runtime objects.

The runtime handle and its view-model instances are opaque: the connector only
asks "do you have a callable called X?" and "what is your attribute Y?".
Runtimes reached through a JS bridge spell capabilities in camelCase
(``viewModel``), native Python runtimes in snake_case (``view_model``);
both spellings are accepted.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def _spellings(name: str) -> List[str]:
    snake = _CAMEL_BOUNDARY.sub('_', name).lower()
    return [name] if snake == name else [name, snake]


def get_attribute(obj: Any, name: str, default: Any = None) -> Any:
    """Read an attribute (or mapping key) under either spelling.

    A getter that raises is treated like a missing attribute: the failure is
    logged and ``default`` is returned.
    """
    if obj is None:
        return default
    for spelling in _spellings(name):
        try:
            if isinstance(obj, Mapping):
                if spelling in obj:
                    return obj[spelling]
                continue
            return getattr(obj, spelling)
        except AttributeError:
            continue
        except Exception as e:
            logger.warning(f"Reading '{spelling}' from {type(obj).__name__} failed: {e}")
            return default
    return default


def get_capability(obj: Any, name: str) -> Optional[Callable]:
    """Return the callable capability ``name`` on ``obj``, or None if absent."""
    capability = get_attribute(obj, name)
    return capability if callable(capability) else None


def entry_field(entry: Any, key: str, default: Any = None) -> Any:
    """Read ``key`` from a property-list entry (mapping or object); a raising read yields ``default``."""
    try:
        if isinstance(entry, Mapping):
            return entry.get(key, default)
        return getattr(entry, key, default)
    except Exception as e:
        logger.warning(f"Reading '{key}' from property entry failed: {e}")
        return default


def property_entries(instance: Any) -> Optional[List[Any]]:
    """Return the instance's ordered property list, or None if it has none.

    Some runtimes expose ``properties`` as a method rather than an attribute;
    both are handled. Anything that is not a sequence is treated as missing.
    """
    try:
        properties = get_attribute(instance, "properties")
        if callable(properties):
            properties = properties()
    except Exception as e:
        logger.warning(f"Could not read property list: {e}")
        return None
    if properties is None or isinstance(properties, (str, bytes, Mapping)):
        return None
    try:
        return list(properties)
    except TypeError:
        return None
