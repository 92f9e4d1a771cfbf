"""Entity search."""

from __future__ import annotations

from .transport import Transport, as_dict, as_int, as_str
from .types import Entity, EntityGUID

_SEARCH_QUERY = """
query($query: String!) {
  actor {
    entitySearch(query: $query) {
      results {
        entities {
          guid name type entityType domain accountId
          tags { key values }
        }
      }
    }
  }
}"""


class EntitiesAPI(Transport):
    """Searching entities through NerdGraph."""

    def search_entities(self, query: str) -> list[Entity]:
        """Return the entities matching an entity search query."""
        result = self.nerdgraph_query(_SEARCH_QUERY, {"query": query})
        results = self._descend(result, "actor", "entitySearch", "results")
        entities = []
        for item in self._list_at(results, "entities"):
            data = as_dict(item)
            if data is None:
                continue
            entities.append(
                Entity(
                    guid=EntityGUID(as_str(data.get("guid"))),
                    name=as_str(data.get("name")),
                    type=as_str(data.get("type")),
                    entity_type=as_str(data.get("entityType")),
                    domain=as_str(data.get("domain")),
                    account_id=as_int(data.get("accountId")),
                )
            )
        return entities