"""
Metadata resolver.

The runtime does not tell us which enum type an enum property uses; the
static descriptor usually does. Both lookups here are ordered chains of
strategies, first hit wins:

    enum type name:   artboard view models (root only) → definitions catalog → property name
    enum definition:  exact → case-insensitive → word overlap → substring
"""

import logging
import re
from typing import Callable, List, Optional, Sequence, Tuple

from controltree.descriptor import EnumDefinition, PropertyDescriptor, StaticDescriptor
from controltree.log_setup import trace

logger = logging.getLogger(__name__)


# =============================================================================
# ENUM TYPE NAME
# =============================================================================

def _from_artboard_view_models(descriptor: StaticDescriptor, blueprint_name: str,
                               property_name: str, artboard_name: Optional[str]) -> Optional[PropertyDescriptor]:
    if artboard_name is None:
        return None
    artboard = descriptor.find_artboard(artboard_name)
    view_model = artboard.find_view_model(blueprint_name) if artboard else None
    return view_model.find_property(property_name) if view_model else None


def _from_definitions(descriptor: StaticDescriptor, blueprint_name: str,
                      property_name: str, artboard_name: Optional[str]) -> Optional[PropertyDescriptor]:
    definition = descriptor.find_definition(blueprint_name)
    return definition.find_property(property_name) if definition else None


BLUEPRINT_CATALOGS: List[Tuple[str, Callable]] = [
    ("artboard_view_models", _from_artboard_view_models),
    ("definitions", _from_definitions),
]


def resolve_enum_type_name(descriptor: Optional[StaticDescriptor], blueprint_name: Optional[str],
                           property_name: str, artboard_name: Optional[str] = None) -> str:
    """Recover the enum type an enum property is declared with.

    Args:
        descriptor: Static descriptor of the document
        blueprint_name: Blueprint the live instance reports
        property_name: Enum property to look up
        artboard_name: Active artboard; set for the root instance only

    Returns:
        The recorded enum type name, or ``property_name`` when none is recorded
    """
    if descriptor is not None and blueprint_name:
        for catalog_name, lookup in BLUEPRINT_CATALOGS:
            declared = lookup(descriptor, blueprint_name, property_name, artboard_name)
            if declared is not None and declared.enum_type_name:
                trace(logger, f"'{blueprint_name}.{property_name}': enum type '{declared.enum_type_name}' from {catalog_name}")
                return declared.enum_type_name

    logger.warning(
        f"No enum type recorded for '{blueprint_name}.{property_name}'; "
        f"using property name as enum type name"
    )
    return property_name


# =============================================================================
# ENUM DEFINITION
# =============================================================================

_STOP_WORDS = frozenset({'the', 'and', 'for', 'with'})
_WORD_SPLIT = re.compile(r'[\s>_\-]+')


def _significant_words(text: str) -> set:
    return {w.lower() for w in _WORD_SPLIT.split(text) if len(w) > 2 and w.lower() not in _STOP_WORDS}


def _exact(enums: Sequence[EnumDefinition], term: str) -> Optional[EnumDefinition]:
    return next((e for e in enums if e.name == term), None)


def _case_insensitive(enums: Sequence[EnumDefinition], term: str) -> Optional[EnumDefinition]:
    lowered = term.lower()
    return next((e for e in enums if e.name.lower() == lowered), None)


def _word_overlap(enums: Sequence[EnumDefinition], term: str) -> Optional[EnumDefinition]:
    words = _significant_words(term)
    if not words:
        return None
    matches = [e for e in enums if words & _significant_words(e.name)]
    if len(matches) > 1:
        logger.debug(f"Ambiguous word match for '{term}': {[m.name for m in matches]}")
        return None
    return matches[0] if matches else None


def _substring(enums: Sequence[EnumDefinition], term: str) -> Optional[EnumDefinition]:
    return next((e for e in enums if e.name and (e.name in term or term in e.name)), None)


ENUM_MATCHERS: List[Tuple[str, Callable]] = [
    ("exact", _exact),
    ("case_insensitive", _case_insensitive),
    ("word_overlap", _word_overlap),
    ("substring", _substring),
]


def resolve_enum_definition(descriptor: Optional[StaticDescriptor], enum_type_name: Optional[str],
                            property_name: str, live_enum_type: Optional[str] = None) -> Optional[EnumDefinition]:
    """Find the enum definition (and so its values) for an enum property.

    Search terms, in priority order: the enum type reported by the live
    handle, the resolved enum type name, the property name. Each matcher is
    tried against every term before moving to the next, looser matcher.
    """
    if descriptor is None or not descriptor.enums:
        return None

    terms: List[str] = []
    for term in (live_enum_type, enum_type_name, property_name):
        if term and term not in terms:
            terms.append(term)

    for matcher_name, matcher in ENUM_MATCHERS:
        for term in terms:
            found = matcher(descriptor.enums, term)
            if found is not None:
                logger.debug(f"Enum for '{property_name}' found via {matcher_name} match on '{term}': '{found.name}'")
                return found

    logger.warning(f"No enum definition found for '{property_name}' (tried {terms})")
    return None
