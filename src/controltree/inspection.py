"""
InspectionRegistry: opt-in export of resolved live roots for interactive debugging.

Nothing is published unless the connector runs with
``ConnectorConfig(expose_for_inspection=True)``. Entries are keyed by
artboard name and replaced on every rebuild.

Thread safety: Not thread-safe (builds are expected on one thread).
"""

from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, List, Optional

from controltree.control_tree import ControlTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InspectionEntry:
    artboard_name: str
    root_instance: Any
    tree: ControlTree


class InspectionRegistry:
    """Class-level registry of the last exposed build per artboard."""
    _entries: Dict[str, InspectionEntry] = {}

    # Callbacks receive (artboard_name, entry)
    _on_expose_callbacks: List[Callable[[str, InspectionEntry], None]] = []
    _on_clear_callbacks: List[Callable[[str, InspectionEntry], None]] = []

    @classmethod
    def add_expose_callback(cls, callback: Callable[[str, InspectionEntry], None]) -> None:
        """Subscribe to expose events."""
        if callback not in cls._on_expose_callbacks:
            cls._on_expose_callbacks.append(callback)

    @classmethod
    def remove_expose_callback(cls, callback: Callable[[str, InspectionEntry], None]) -> None:
        if callback in cls._on_expose_callbacks:
            cls._on_expose_callbacks.remove(callback)

    @classmethod
    def add_clear_callback(cls, callback: Callable[[str, InspectionEntry], None]) -> None:
        """Subscribe to clear events."""
        if callback not in cls._on_clear_callbacks:
            cls._on_clear_callbacks.append(callback)

    @classmethod
    def remove_clear_callback(cls, callback: Callable[[str, InspectionEntry], None]) -> None:
        if callback in cls._on_clear_callbacks:
            cls._on_clear_callbacks.remove(callback)

    @classmethod
    def _fire(cls, callbacks: List[Callable[[str, InspectionEntry], None]], key: str, entry: InspectionEntry) -> None:
        for callback in list(callbacks):
            try:
                callback(key, entry)
            except Exception as e:
                logger.warning(f"Error in inspection callback: {e}")

    @classmethod
    def expose(cls, artboard_name: Optional[str], root_instance: Any, tree: ControlTree) -> InspectionEntry:
        """Publish the root instance and tree of a build."""
        key = artboard_name or ""
        entry = InspectionEntry(artboard_name=key, root_instance=root_instance, tree=tree)
        cls._entries[key] = entry
        logger.info(f"Exposed view-model root for artboard '{key}' for inspection")
        cls._fire(cls._on_expose_callbacks, key, entry)
        return entry

    @classmethod
    def get(cls, artboard_name: Optional[str]) -> Optional[InspectionEntry]:
        return cls._entries.get(artboard_name or "")

    @classmethod
    def keys(cls) -> List[str]:
        return list(cls._entries.keys())

    @classmethod
    def clear(cls, artboard_name: Optional[str] = None) -> None:
        """Remove one artboard's entry, or all entries when no name is given."""
        if artboard_name is None:
            keys = list(cls._entries.keys())
        else:
            keys = [artboard_name] if artboard_name in cls._entries else []
        for key in keys:
            entry = cls._entries.pop(key)
            cls._fire(cls._on_clear_callbacks, key, entry)
        if keys:
            logger.debug(f"Cleared {len(keys)} inspection entr{'y' if len(keys) == 1 else 'ies'}")
