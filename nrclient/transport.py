"""HTTP transport shared by the New Relic APIs: authentication, JSON and NerdGraph."""

from __future__ import annotations

import json
import math
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import IO, Any, TypeVar

import requests

from .errors import AccountIDRequiredError, APIError, GraphQLError, ResponseError
from .types import AccountID, APIKey

T = TypeVar("T")

DEFAULT_TIMEOUT = 30.0


class Region(str, Enum):
    """A New Relic data centre region."""

    US = "US"
    EU = "EU"


_ENDPOINTS = {
    Region.US: (
        "https://api.newrelic.com/v2",
        "https://api.newrelic.com/graphql",
        "https://synthetics.newrelic.com/synthetics/api/v3",
    ),
    Region.EU: (
        "https://api.eu.newrelic.com/v2",
        "https://api.eu.newrelic.com/graphql",
        "https://synthetics.eu.newrelic.com/synthetics/api/v3",
    ),
}


def as_str(value: Any) -> str:
    """The value if it is a string, otherwise ""."""
    return value if isinstance(value, str) else ""


def as_int(value: Any) -> int:
    """The value truncated to an int if it is a JSON number, otherwise 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return 0


def as_dict(value: Any) -> dict[str, Any] | None:
    """The value if it is a JSON object, otherwise None."""
    return value if isinstance(value, dict) else None


def as_list(value: Any) -> list[Any] | None:
    """The value if it is a JSON array, otherwise None."""
    return value if isinstance(value, list) else None


def _elapsed(start: float) -> str:
    return f"{(time.perf_counter() - start) * 1000:.3f}ms"


class Transport:
    """Authenticated access to the REST, NerdGraph and Synthetics endpoints."""

    def __init__(
        self,
        api_key: str,
        account_id: str = "",
        region: str | Region = Region.US,
        timeout: float = DEFAULT_TIMEOUT,
        verbose: bool = False,
        stderr: IO[str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.account_id = account_id
        self.region = region.value if isinstance(region, Region) else str(region)
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.verbose = verbose
        self.stderr = stderr
        self.session = session if session is not None else requests.Session()
        endpoints = _ENDPOINTS[Region.EU if self.region == "EU" else Region.US]
        self.base_url, self.nerdgraph_url, self.synthetics_url = endpoints

    @property
    def api_key(self) -> APIKey:
        return self._api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        self._api_key = APIKey(value)

    @property
    def account_id(self) -> AccountID:
        return self._account_id

    @account_id.setter
    def account_id(self, value: str) -> None:
        self._account_id = AccountID(value)

    def _debug(self, text: str) -> None:
        if self.verbose and self.stderr is not None:
            print(f"[DEBUG] {text}", file=self.stderr)

    def request(self, method: str, url: str, body: Any = None) -> bytes:
        """Send an authenticated request and return the raw response body.

        Raises APIError for status codes of 400 and above, ResponseError when
        the request cannot be built or sent.
        """
        start = time.perf_counter()
        self._debug(f"{method} {url}")

        payload = None
        if body is not None:
            try:
                payload = json.dumps(body, separators=(",", ":")).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise ResponseError("failed to marshal request body", exc) from exc

        headers = {"Api-Key": str(self.api_key), "Content-Type": "application/json"}
        try:
            response = self.session.request(
                method, url, data=payload, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            self._debug(f"Request failed: {exc} ({_elapsed(start)})")
            raise ResponseError("request failed", exc) from exc

        with response:
            code = response.status_code
            self._debug(f"{code} {code} {response.reason} ({_elapsed(start)})")
            try:
                content = response.content
            except requests.RequestException as exc:
                raise ResponseError("failed to read response", exc) from exc

        if code >= 400:
            raise APIError(code, content.decode("utf-8", errors="replace"))
        return content

    def nerdgraph_query(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a GraphQL query against NerdGraph and return its "data" object."""
        request_body: dict[str, Any] = {"query": query}
        if variables:
            request_body["variables"] = variables
        payload = self._fetch_object("POST", self.nerdgraph_url, request_body)

        errors = payload.get("errors")
        if errors is not None and not isinstance(errors, list):
            raise ResponseError("failed to parse response", TypeError("errors is not a list"))
        if errors:
            first = as_dict(errors[0]) or {}
            raise GraphQLError(as_str(first.get("message")))

        data = payload.get("data")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ResponseError("failed to parse response", TypeError("data is not an object"))
        return data

    def require_account_id(self) -> None:
        """Raise AccountIDRequiredError when no account ID is configured."""
        if self.account_id.is_empty():
            raise AccountIDRequiredError()

    def account_id_int(self) -> int:
        """The configured account ID as an integer."""
        self.require_account_id()
        try:
            self.account_id.validate()
        except ValueError as exc:
            raise ValueError(f"invalid account ID: {self.account_id}") from exc
        return self.account_id.as_int()

    def _fetch_object(self, method: str, url: str, body: Any = None) -> dict[str, Any]:
        data = self.request(method, url, body)
        try:
            payload = json.loads(data)
        except ValueError as exc:
            raise ResponseError("failed to parse response", exc) from exc
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            raise ResponseError(
                "failed to parse response",
                TypeError(f"expected a JSON object, got {type(payload).__name__}"),
            )
        return payload

    @staticmethod
    @contextmanager
    def _parsing() -> Iterator[None]:
        try:
            yield
        except (TypeError, ValueError) as exc:
            raise ResponseError("failed to parse response", exc) from exc

    def _records(self, value: Any, factory: Callable[[Any], T]) -> list[T]:
        if value is None:
            return []
        with self._parsing():
            if not isinstance(value, list):
                raise TypeError(f"expected a JSON array, got {type(value).__name__}")
            return [factory(item) for item in value]

    @staticmethod
    def _descend(node: dict[str, Any], *keys: str) -> dict[str, Any]:
        for key in keys:
            child = as_dict(node.get(key))
            if child is None:
                raise ResponseError(f"unexpected response format: missing {key}")
            node = child
        return node

    @staticmethod
    def _list_at(node: dict[str, Any], key: str) -> list[Any]:
        items = as_list(node.get(key))
        if items is None:
            raise ResponseError(f"unexpected response format: missing {key}")
        return items