"""Resolution of application names, GUIDs and IDs to numeric app IDs."""

from __future__ import annotations

import re

from .entities import EntitiesAPI
from .errors import NewRelicError, NotFoundError
from .types import EntityGUID, is_valid_entity_guid

_DIGITS = re.compile(r"[0-9]+")


def is_numeric(s: str) -> bool:
    """True when s is non-empty and made of ASCII digits only."""
    return _DIGITS.fullmatch(s) is not None


class ResolveAPI(EntitiesAPI):
    """Turns user-supplied application identifiers into numeric app IDs."""

    def resolve_app_id(self, identifier: str) -> str:
        """Accept a numeric app ID, an APM entity GUID or an application name."""
        if is_numeric(identifier):
            return identifier
        if is_valid_entity_guid(identifier):
            try:
                return EntityGUID(identifier).app_id()
            except ValueError:
                pass
        return self._resolve_app_name(identifier)

    def _resolve_app_name(self, name: str) -> str:
        query = f"name = '{name}' AND domain = 'APM' AND type = 'APPLICATION'"
        try:
            entities = self.search_entities(query)
        except NewRelicError as exc:
            raise NewRelicError(f"failed to search for application: {exc}") from exc

        if not entities:
            raise NotFoundError(f"no APM application found with name: {name}")
        if len(entities) > 1:
            raise NewRelicError(
                f"multiple applications found with name '{name}', please use --guid or app ID"
            )

        try:
            return entities[0].guid.app_id()
        except ValueError as exc:
            raise NewRelicError(f"failed to extract app ID from entity: {exc}") from exc