"""Service configuration: file → dict → Config.

Loading path:
  path → load_config() → parse_config() → Config (validated on construction)

Missing keys keep their defaults, so an empty file (or no file at all)
yields a runnable receiver that logs every source under its own name.

| key        | default                              |
|------------|--------------------------------------|
| host       | "0.0.0.0"                            |
| port       | 8080                                 |
| route      | "/"                                  |
| pretty     | false                                |
| log_json   | true                                 |
| log_level  | "info"                               |
| ack_status | 200                                  |
| ack_body   | {"ok": true}                         |
| mappings   | every source, keyed by its own name  |
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from webhook2stdout._logging import parse_log_level
from webhook2stdout._mapping import DEFAULT_MAPPINGS, Keyed, Root, Source

if TYPE_CHECKING:
    from webhook2stdout._mapping import MappingRule
    from webhook2stdout._types import JsonValue


def _default_ack_body() -> JsonValue:
    return {"ok": True}


# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigError(Exception):
    """Base for configuration errors."""


class ConfigParseError(ConfigError):
    """Error reading a config file or converting it into config types."""


class InvalidConfigError(ConfigError):
    """A config value is well-typed but out of range."""


# ═══════════════════════════════════════════════════════════════════════════════
# Config type
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Config:
    """Receiver configuration, shared read-only by every request.

    Validation runs automatically at construction time.
    """

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    route: str = "/"
    pretty: bool = False
    log_json: bool = True
    log_level: str = "info"
    ack_status: int = 200
    ack_body: JsonValue = field(default_factory=_default_ack_body)
    mappings: tuple[MappingRule, ...] = DEFAULT_MAPPINGS

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            InvalidConfigError: If any value is out of range.
        """
        if not 1 <= self.port <= 65535:
            msg = f"port must be in range 1-65535, got {self.port}"
            raise InvalidConfigError(msg)
        if not self.route.startswith("/"):
            msg = f"route must start with '/', got {self.route!r}"
            raise InvalidConfigError(msg)
        if not self.mappings:
            msg = "at least one mapping is required"
            raise InvalidConfigError(msg)
        if not 100 <= self.ack_status <= 599:
            msg = f"ack_status must be a valid HTTP status code, got {self.ack_status}"
            raise InvalidConfigError(msg)
        try:
            json.dumps(self.ack_body, allow_nan=False)
        except (TypeError, ValueError) as exc:
            msg = f"ack_body must be JSON-encodable: {exc}"
            raise InvalidConfigError(msg) from None
        try:
            parse_log_level(self.log_level)
        except ValueError as exc:
            raise InvalidConfigError(str(exc)) from None

    @property
    def level(self) -> int:
        """The stdlib logging level for ``log_level``."""
        return parse_log_level(self.log_level)

    def duplicate_keys(self) -> list[str]:
        """Keyed destinations named by more than one rule.

        Not an error: assembly keeps the last value written.
        """
        seen: set[str] = set()
        duplicates: list[str] = []
        for rule in self.mappings:
            if not isinstance(rule, Keyed):
                continue
            if rule.to in seen and rule.to not in duplicates:
                duplicates.append(rule.to)
            seen.add(rule.to)
        return duplicates


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → Config)
# ═══════════════════════════════════════════════════════════════════════════════

_SOURCE_NAMES = sorted(s.value for s in Source)


def parse_config(data: dict[str, Any]) -> Config:
    """Parse a dict into a Config.

    Unknown keys are ignored; missing keys keep their defaults.

    Raises:
        ConfigParseError: If the dict is malformed.
        InvalidConfigError: If a value is out of range.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    kwargs: dict[str, Any] = {}
    for key, kind in (("host", str), ("route", str), ("log_level", str)):
        if key in data:
            kwargs[key] = _expect(data[key], kind, key)
    for key in ("pretty", "log_json"):
        if key in data:
            kwargs[key] = _expect(data[key], bool, key)
    for key in ("port", "ack_status"):
        if key in data:
            kwargs[key] = _expect_int(data[key], key)

    if data.get("ack_body") is not None:
        kwargs["ack_body"] = data["ack_body"]

    if "mappings" in data:
        raw_mappings = data["mappings"]
        if not isinstance(raw_mappings, list):
            msg = f"'mappings' must be a list, got {type(raw_mappings).__name__}"
            raise ConfigParseError(msg)
        kwargs["mappings"] = tuple(_parse_mapping(m, i) for i, m in enumerate(raw_mappings))

    return Config(**kwargs)


def _expect(value: Any, kind: type, where: str) -> Any:
    if not isinstance(value, kind):
        msg = f"{where!r} must be a {kind.__name__}, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _expect_int(value: Any, where: str) -> int:
    # bool is an int subclass; `port: true` is a mistake, not port 1.
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{where!r} must be an int, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _parse_mapping(data: Any, index: int) -> MappingRule:
    """Parse one ``{from, to, root}`` dict into a Keyed or Root rule.

    Enforces oneof: exactly one of a non-empty 'to' or 'root: true'.
    """
    where = f"mappings[{index}]"
    if not isinstance(data, dict):
        msg = f"{where} must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_source = data.get("from")
    if raw_source is None or raw_source == "":
        msg = f"{where}.from is required"
        raise ConfigParseError(msg)
    if raw_source not in _SOURCE_NAMES:
        msg = f"{where}.from must be one of {_SOURCE_NAMES}, got {raw_source!r}"
        raise ConfigParseError(msg)
    source = Source(raw_source)

    to = data.get("to") or ""
    if not isinstance(to, str):
        msg = f"{where}.to must be a string, got {type(to).__name__}"
        raise ConfigParseError(msg)
    root = data.get("root")
    if root is None:
        root = False
    if not isinstance(root, bool):
        msg = f"{where}.root must be a bool, got {type(root).__name__}"
        raise ConfigParseError(msg)

    if root and to:
        msg = f"{where} cannot set both to and root"
        raise ConfigParseError(msg)
    if not root and not to:
        msg = f"{where} must set to or root: true"
        raise ConfigParseError(msg)

    return Root(source) if root else Keyed(source, to)


# ═══════════════════════════════════════════════════════════════════════════════
# Loading (file → dict)
# ═══════════════════════════════════════════════════════════════════════════════


def load_config(path: str | Path) -> Config:
    """Load a YAML or JSON config file.

    A missing file yields the default Config.

    Raises:
        ConfigParseError: On unreadable or malformed files, or an
            unsupported extension.
        InvalidConfigError: If a value is out of range.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Config()
    except OSError as exc:
        msg = f"read {path}: {exc}"
        raise ConfigParseError(msg) from exc

    ext = path.suffix.lower()
    if ext in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            msg = f"unmarshal yaml: {exc}"
            raise ConfigParseError(msg) from exc
    elif ext == ".json":
        try:
            data = json.loads(text)
        except ValueError as exc:
            msg = f"unmarshal json: {exc}"
            raise ConfigParseError(msg) from exc
    else:
        msg = f"unsupported config extension {ext!r} (use .yaml, .yml, or .json)"
        raise ConfigParseError(msg)

    if data is None:
        return Config()
    return parse_config(data)
