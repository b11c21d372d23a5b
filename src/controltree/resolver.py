"""
Root resolver.

Locates the single view-model instance bound to the active artboard. The
runtime offers several routes to it, some more trustworthy than others, so
resolution walks an ordered list of strategies:

    1. bound_instance            handle.viewModelInstance
    2. artboard_named_field      handle.<artboard name>
    3. artboard_default_instance handle.artboard.defaultViewModel().defaultInstance()
    4. handle_default_instance   handle.defaultViewModel().defaultInstance() / .getInstance(0)

Each strategy runs in its own failure boundary; an exception or a falsy
result moves on to the next one.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Sequence, Tuple

from controltree.capabilities import get_attribute, get_capability

logger = logging.getLogger(__name__)

RootStrategy = Callable[[Any, Optional[str]], Any]


def _bound_instance(handle: Any, artboard_name: Optional[str]) -> Any:
    instance = get_attribute(handle, "viewModelInstance")
    return instance() if callable(instance) else instance


def _artboard_named_field(handle: Any, artboard_name: Optional[str]) -> Any:
    if not artboard_name:
        return None
    if isinstance(handle, Mapping):
        return handle.get(artboard_name)
    return getattr(handle, artboard_name, None)


def _instance_from_definition(definition: Any) -> Any:
    """Default instance of a view-model definition, else its first instance."""
    if definition is None:
        return None
    default_instance = get_capability(definition, "defaultInstance")
    if default_instance is not None:
        return default_instance()
    get_instance = get_capability(definition, "getInstance")
    instance_count = get_attribute(definition, "instanceCount", 0)
    if callable(instance_count):
        instance_count = instance_count()
    if get_instance is not None and (instance_count or 0) > 0:
        return get_instance(0)
    return None


def _artboard_default_instance(handle: Any, artboard_name: Optional[str]) -> Any:
    artboard = get_attribute(handle, "artboard")
    default_view_model = get_capability(artboard, "defaultViewModel")
    if default_view_model is None:
        return None
    definition = default_view_model()
    default_instance = get_capability(definition, "defaultInstance")
    return default_instance() if default_instance is not None else None


def _handle_default_instance(handle: Any, artboard_name: Optional[str]) -> Any:
    default_view_model = get_capability(handle, "defaultViewModel")
    if default_view_model is None:
        return None
    return _instance_from_definition(default_view_model())


ROOT_STRATEGIES: List[Tuple[str, RootStrategy]] = [
    ("bound_instance", _bound_instance),
    ("artboard_named_field", _artboard_named_field),
    ("artboard_default_instance", _artboard_default_instance),
    ("handle_default_instance", _handle_default_instance),
]


def resolve_root(handle: Any, artboard_name: Optional[str],
                 strategies: Optional[Sequence[Tuple[str, RootStrategy]]] = None) -> Optional[Any]:
    """Find the root view-model instance for the active artboard.

    Args:
        handle: Live runtime handle (may be None)
        artboard_name: Name of the active artboard
        strategies: Override of ROOT_STRATEGIES, mainly for tests

    Returns:
        The first instance any strategy produces, or None meaning
        "no live binding available" (not an error)
    """
    if handle is None:
        logger.info("No runtime handle; no live root instance")
        return None

    for strategy_name, strategy in (strategies if strategies is not None else ROOT_STRATEGIES):
        try:
            instance = strategy(handle, artboard_name)
            found = bool(instance)
        except Exception as e:
            logger.warning(f"Root strategy '{strategy_name}' failed: {e}")
            continue
        if found:
            logger.info(f"Resolved root view-model instance via '{strategy_name}'")
            return instance
        logger.debug(f"Root strategy '{strategy_name}' found nothing")

    logger.warning(f"No root view-model instance found for artboard '{artboard_name}'")
    return None
