"""NRQL queries."""

from __future__ import annotations

from .transport import Transport, as_dict
from .types import NRQLResult

_NRQL_QUERY = """
query($accountId: Int!, $nrql: Nrql!) {
  actor {
    account(id: $accountId) {
      nrql(query: $nrql) { results }
    }
  }
}"""


class NRQLAPI(Transport):
    """Execution of NRQL queries through NerdGraph."""

    def query_nrql(self, nrql: str) -> NRQLResult:
        """Run an NRQL query; rows that are not objects come back as None."""
        self.require_account_id()
        variables = {"accountId": self.account_id.as_int(), "nrql": nrql}
        result = self.nerdgraph_query(_NRQL_QUERY, variables)
        node = self._descend(result, "actor", "account", "nrql")
        rows = self._list_at(node, "results")
        return NRQLResult(results=[as_dict(row) for row in rows])