"""Identifier types and the records returned by the New Relic APIs."""

from __future__ import annotations

import base64
import json
import re
from dataclasses import dataclass, field
from typing import Any

_BASE64_CHARS = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/="
)
_NRAK_PREFIX = "NRAK-"
_NRAK_WARNING = "API key does not start with 'NRAK-' (expected for User API keys)"
_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class EntityGUID(str):
    """A base64-encoded entity identifier of the form version|domain|type|id."""

    __slots__ = ()

    def parse(self) -> tuple[str, str, str, str]:
        """Decode the GUID into (version, domain, entity type, entity id)."""
        try:
            decoded = base64.b64decode(str(self), validate=True)
        except ValueError as exc:
            raise ValueError(f"invalid GUID format: {exc}") from exc
        parts = decoded.decode("utf-8", errors="replace").split("|")
        if len(parts) != 4:
            raise ValueError(
                f"invalid GUID format: expected 4 parts, got {len(parts)}"
            )
        version, domain, entity_type, entity_id = parts
        return version, domain, entity_type, entity_id

    def validate(self) -> None:
        """Raise ValueError unless the GUID decodes to four parts."""
        self.parse()

    def domain(self) -> str:
        return self.parse()[1]

    def entity_type(self) -> str:
        return self.parse()[2]

    def entity_id(self) -> str:
        return self.parse()[3]

    def app_id(self) -> str:
        """Return the numeric application ID of an APM application GUID."""
        _, domain, entity_type, entity_id = self.parse()
        if domain != "APM" or entity_type != "APPLICATION":
            raise ValueError(
                f"GUID is not for an APM application (domain={domain}, type={entity_type})"
            )
        return entity_id


def is_valid_entity_guid(s: str) -> bool:
    """Quick check that a string looks like a base64 entity GUID."""
    if len(s.encode("utf-8")) < 40:
        return False
    return all(c in _BASE64_CHARS for c in s)


def _check_api_key(s: str) -> str:
    if not s:
        raise ValueError("API key cannot be empty")
    if len(s.encode("utf-8")) < 16:
        raise ValueError("API key too short: minimum 16 characters")
    return "" if s.startswith(_NRAK_PREFIX) else _NRAK_WARNING


class APIKey(str):
    """A New Relic User API key."""

    __slots__ = ()

    def validate(self) -> str:
        """Raise ValueError on a malformed key; return a warning or ""."""
        return _check_api_key(str(self))

    def has_nrak_prefix(self) -> bool:
        return self.startswith(_NRAK_PREFIX)


def new_api_key(s: str) -> tuple[APIKey, str]:
    """Validate s and return the key together with a warning (or "")."""
    warning = _check_api_key(s)
    return APIKey(s), warning


def _atoi(s: str) -> int | None:
    if not _INTEGER.fullmatch(s):
        return None
    value = int(s)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _check_account_id(s: str) -> int:
    if not s:
        raise ValueError("account ID cannot be empty")
    num = _atoi(s)
    if num is None:
        raise ValueError(f"invalid account ID {json.dumps(s)}: must be numeric")
    if num <= 0:
        raise ValueError(f"invalid account ID {json.dumps(s)}: must be a positive number")
    return num


class AccountID(str):
    """A New Relic account identifier: a positive integer kept as text."""

    __slots__ = ()

    def as_int(self) -> int:
        """The account ID as an integer, or 0 when it is not numeric."""
        num = _atoi(str(self))
        return 0 if num is None else num

    def validate(self) -> None:
        """Raise ValueError unless the ID is a positive integer."""
        _check_account_id(str(self))

    def is_empty(self) -> bool:
        return self == ""


def new_account_id(s: str) -> AccountID:
    """Validate s and return it as an AccountID."""
    _check_account_id(s)
    return AccountID(s)


def _mapping(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _get(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if kind is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, kind)
    if not ok:
        raise TypeError(
            f"field {key!r}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _get_str_list(data: dict[str, Any], key: str) -> list[str]:
    values = _get(data, key, list, [])
    for item in values:
        if not isinstance(item, str):
            raise TypeError(f"field {key!r}: expected a list of strings")
    return list(values)


@dataclass
class Application:
    id: int = 0
    name: str = ""
    language: str = ""
    health_status: str = ""
    reporting: bool = False
    last_reported_at: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Application:
        d = _mapping(data)
        return cls(
            id=_get(d, "id", int, 0),
            name=_get(d, "name", str, ""),
            language=_get(d, "language", str, ""),
            health_status=_get(d, "health_status", str, ""),
            reporting=_get(d, "reporting", bool, False),
            last_reported_at=_get(d, "last_reported_at", str, ""),
        )


@dataclass
class Metric:
    name: str = ""
    values: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Metric:
        d = _mapping(data)
        return cls(name=_get(d, "name", str, ""), values=_get_str_list(d, "values"))


@dataclass
class AlertPolicy:
    id: int = 0
    name: str = ""
    incident_preference: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> AlertPolicy:
        d = _mapping(data)
        return cls(
            id=_get(d, "id", int, 0),
            name=_get(d, "name", str, ""),
            incident_preference=_get(d, "incident_preference", str, ""),
        )


@dataclass
class Dashboard:
    guid: EntityGUID = EntityGUID("")
    name: str = ""
    account_id: int = 0
    description: str = ""


@dataclass
class DashboardWidget:
    id: str = ""
    title: str = ""
    visualization: dict[str, Any] | None = None
    configuration: dict[str, Any] | None = None


@dataclass
class DashboardPage:
    guid: EntityGUID = EntityGUID("")
    name: str = ""
    widgets: list[DashboardWidget] = field(default_factory=list)


@dataclass
class DashboardDetail:
    guid: EntityGUID = EntityGUID("")
    name: str = ""
    description: str = ""
    permissions: str = ""
    pages: list[DashboardPage] = field(default_factory=list)


@dataclass
class User:
    id: str = ""
    name: str = ""
    email: str = ""
    type: str = ""
    groups: list[str] = field(default_factory=list)
    authentication_domain: str = ""


@dataclass
class Entity:
    guid: EntityGUID = EntityGUID("")
    name: str = ""
    type: str = ""
    entity_type: str = ""
    domain: str = ""
    account_id: int = 0
    tags: dict[str, str] = field(default_factory=dict)


@dataclass
class SyntheticMonitor:
    id: str = ""
    name: str = ""
    type: str = ""
    frequency: int = 0
    status: str = ""
    uri: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> SyntheticMonitor:
        d = _mapping(data)
        return cls(
            id=_get(d, "id", str, ""),
            name=_get(d, "name", str, ""),
            type=_get(d, "type", str, ""),
            frequency=_get(d, "frequency", int, 0),
            status=_get(d, "status", str, ""),
            uri=_get(d, "uri", str, ""),
        )


@dataclass
class Deployment:
    id: int = 0
    revision: str = ""
    description: str = ""
    user: str = ""
    timestamp: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Deployment:
        d = _mapping(data)
        return cls(
            id=_get(d, "id", int, 0),
            revision=_get(d, "revision", str, ""),
            description=_get(d, "description", str, ""),
            user=_get(d, "user", str, ""),
            timestamp=_get(d, "timestamp", str, ""),
        )


@dataclass
class NRQLResult:
    results: list[dict[str, Any] | None] = field(default_factory=list)


@dataclass
class LogParsingRule:
    id: str = ""
    description: str = ""
    enabled: bool = False
    grok: str = ""
    lucene: str = ""
    nrql: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> LogParsingRule:
        d = _mapping(data)
        return cls(
            id=_get(d, "id", str, ""),
            description=_get(d, "description", str, ""),
            enabled=_get(d, "enabled", bool, False),
            grok=_get(d, "grok", str, ""),
            lucene=_get(d, "lucene", str, ""),
            nrql=_get(d, "nrql", str, ""),
            updated_at=_get(d, "updatedAt", str, ""),
        )