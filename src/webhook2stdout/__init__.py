"""webhook2stdout — Config-driven HTTP request to JSON line receiver.

All public types are exported from this module for flat imports:

    from webhook2stdout import Keyed, Root, Source, assemble
"""

__version__ = "0.1.0"

from webhook2stdout._app import ALL_METHODS, SERVER_NAME, create_app, route_forms, route_path
from webhook2stdout._assemble import assemble

# Config — see webhook2stdout._config for details
from webhook2stdout._config import (
    Config,
    ConfigError,
    ConfigParseError,
    InvalidConfigError,
    load_config,
    parse_config,
)
from webhook2stdout._emit import LineEmitter, serialize
from webhook2stdout._logging import configure_logging, parse_log_level

# Mapping rules and errors
from webhook2stdout._mapping import (
    DEFAULT_MAPPINGS,
    Keyed,
    MappingError,
    MappingRule,
    MixedRootError,
    Root,
    RootCollisionError,
    Source,
    UnsupportedSourceError,
)
from webhook2stdout._types import JsonObject, JsonValue, SourceInput

__all__ = [
    # Protocols and values
    "JsonValue",
    "JsonObject",
    "SourceInput",
    # Mapping rules
    "Source",
    "Keyed",
    "Root",
    "MappingRule",
    "DEFAULT_MAPPINGS",
    # Assembly
    "assemble",
    "MappingError",
    "UnsupportedSourceError",
    "RootCollisionError",
    "MixedRootError",
    # App
    "create_app",
    "route_forms",
    "route_path",
    "ALL_METHODS",
    "SERVER_NAME",
    # Emission
    "serialize",
    "LineEmitter",
    # Config
    "Config",
    "ConfigError",
    "ConfigParseError",
    "InvalidConfigError",
    "parse_config",
    "load_config",
    # Logging
    "configure_logging",
    "parse_log_level",
]
