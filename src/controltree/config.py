"""
Connector configuration.

Provides thread-local storage for the active ConnectorConfig so concurrent
builds on different threads can run with different settings.

Resolution order when the connector needs its settings:
    explicit config passed to RuntimeGraphConnector → thread-local config → defaults
"""

import dataclasses
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, Optional


@dataclass(frozen=True)
class ConnectorConfig:
    """Settings that shape a single control-tree build.

    Attributes:
        verify_bindings: Run the binding self-test on the root instance
        verify_nested_bindings: Also self-test every nested instance
        probe_string_suffix: Suffix appended to string properties during the self-test
        default_instance_name: Instance name used when nothing better is known
        unknown_blueprint_name: Blueprint name used when nothing better is known
        guard_cycles: Truncate nested view-models whose blueprint is already being expanded
        max_depth: Nested levels below the root before the walk is truncated (None: unlimited)
        expose_for_inspection: Publish resolved roots and trees to InspectionRegistry
    """
    verify_bindings: bool = True
    verify_nested_bindings: bool = True
    probe_string_suffix: str = "_test"
    default_instance_name: str = "Instance"
    unknown_blueprint_name: str = "Unknown"
    guard_cycles: bool = True
    max_depth: Optional[int] = 32
    expose_for_inspection: bool = False


DEFAULT_CONFIG = ConnectorConfig()

_config_context = threading.local()


def set_connector_config(config: ConnectorConfig) -> None:
    """Set the config used by connectors on this thread."""
    _config_context.value = config


def get_connector_config() -> ConnectorConfig:
    """Get this thread's config, or the defaults when none was set."""
    return getattr(_config_context, 'value', None) or DEFAULT_CONFIG


def reset_connector_config() -> None:
    """Drop this thread's config so the defaults apply again."""
    if hasattr(_config_context, 'value'):
        del _config_context.value


@contextmanager
def connector_config(**overrides) -> Generator[ConnectorConfig, None, None]:
    """Temporarily override fields of the current config.

    Example:
        with connector_config(verify_bindings=False):
            tree = process_data_for_controls(descriptor, runtime)
    """
    previous: Optional[ConnectorConfig] = getattr(_config_context, 'value', None)
    updated = dataclasses.replace(get_connector_config(), **overrides)
    _config_context.value = updated
    try:
        yield updated
    finally:
        if previous is None:
            reset_connector_config()
        else:
            _config_context.value = previous
