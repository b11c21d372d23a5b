"""
Closed set of view-model property variants.

The runtime reports property kinds as free-form strings ('boolean', 'enumType',
'viewModel', ...). Everything downstream works on PropertyType members instead,
so an unexpected string is caught once, here, and becomes None.
"""

from enum import Enum
from typing import Any, Optional


class PropertyType(Enum):
    """Property kinds a view-model instance can expose."""
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    COLOR = "color"
    ENUM = "enumType"
    TRIGGER = "trigger"
    VIEW_MODEL = "viewModel"

    @classmethod
    def parse(cls, raw: Any) -> Optional['PropertyType']:
        """Map a runtime type string to a member, or None if unknown."""
        if isinstance(raw, PropertyType):
            return raw
        if not isinstance(raw, str):
            return None
        return _ALIASES.get(raw) or _ALIASES.get(raw.lower())

    @property
    def is_scalar(self) -> bool:
        """True for kinds the binding verifier can perturb."""
        return self in SCALAR_TYPES


_ALIASES = {
    "boolean": PropertyType.BOOLEAN,
    "bool": PropertyType.BOOLEAN,
    "number": PropertyType.NUMBER,
    "string": PropertyType.STRING,
    "color": PropertyType.COLOR,
    "enumType": PropertyType.ENUM,
    "enumtype": PropertyType.ENUM,
    "enum": PropertyType.ENUM,
    "trigger": PropertyType.TRIGGER,
    "viewModel": PropertyType.VIEW_MODEL,
    "viewmodel": PropertyType.VIEW_MODEL,
}

SCALAR_TYPES = frozenset({PropertyType.BOOLEAN, PropertyType.NUMBER, PropertyType.STRING})
