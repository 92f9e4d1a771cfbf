"""Dashboards."""

from __future__ import annotations

from typing import Any

from .errors import NotFoundError
from .transport import Transport, as_dict, as_int, as_list, as_str
from .types import (
    Dashboard,
    DashboardDetail,
    DashboardPage,
    DashboardWidget,
    EntityGUID,
)

_LIST_QUERY = """
query($query: String!) {
  actor {
    entitySearch(query: $query) {
      results {
        entities {
          guid
          name
          accountId
          ... on DashboardEntityOutline { dashboardParentGuid }
        }
      }
    }
  }
}"""

_DETAIL_QUERY = """
query($guid: EntityGuid!) {
  actor {
    entity(guid: $guid) {
      ... on DashboardEntity {
        guid
        name
        description
        permissions
        pages {
          guid
          name
          widgets {
            id
            title
            visualization { id }
            rawConfiguration
          }
        }
      }
    }
  }
}"""


def _objects(value: Any) -> list[dict[str, Any]]:
    """The JSON objects in a JSON array, skipping anything else."""
    return [item for item in map(as_dict, as_list(value) or []) if item is not None]


def _widget(data: dict[str, Any]) -> DashboardWidget:
    return DashboardWidget(
        id=as_str(data.get("id")),
        title=as_str(data.get("title")),
        visualization=as_dict(data.get("visualization")),
        configuration=as_dict(data.get("rawConfiguration")),
    )


def _page(data: dict[str, Any]) -> DashboardPage:
    return DashboardPage(
        guid=EntityGUID(as_str(data.get("guid"))),
        name=as_str(data.get("name")),
        widgets=[_widget(w) for w in _objects(data.get("widgets"))],
    )


class DashboardsAPI(Transport):
    """Operations on dashboards."""

    def list_dashboards(self) -> list[Dashboard]:
        """Return every dashboard of the configured account."""
        self.require_account_id()
        search = f"type = 'DASHBOARD' AND accountId = {self.account_id}"
        result = self.nerdgraph_query(_LIST_QUERY, {"query": search})
        results = self._descend(result, "actor", "entitySearch", "results")
        entities = self._list_at(results, "entities")
        return [
            Dashboard(
                guid=EntityGUID(as_str(entity.get("guid"))),
                name=as_str(entity.get("name")),
                account_id=as_int(entity.get("accountId")),
            )
            for entity in map(as_dict, entities)
            if entity is not None
        ]

    def get_dashboard(self, guid: str) -> DashboardDetail:
        """Return a dashboard with its pages and widgets; raise NotFoundError if absent."""
        result = self.nerdgraph_query(_DETAIL_QUERY, {"guid": str(guid)})
        actor = self._descend(result, "actor")
        entity = as_dict(actor.get("entity"))
        if entity is None:
            raise NotFoundError("dashboard not found")
        return DashboardDetail(
            guid=EntityGUID(as_str(entity.get("guid"))),
            name=as_str(entity.get("name")),
            description=as_str(entity.get("description")),
            permissions=as_str(entity.get("permissions")),
            pages=[_page(p) for p in _objects(entity.get("pages"))],
        )