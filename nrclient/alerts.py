"""Alert policies."""

from __future__ import annotations

from .errors import NotFoundError
from .transport import Transport, as_dict, as_int, as_str
from .types import AlertPolicy

_POLICY_QUERY = """
query($accountId: Int!, $policyId: ID!) {
  actor {
    account(id: $accountId) {
      alerts {
        policy(id: $policyId) { id name incidentPreference }
      }
    }
  }
}"""


class AlertsAPI(Transport):
    """Operations on alert policies."""

    def list_alert_policies(self) -> list[AlertPolicy]:
        """Return every alert policy."""
        payload = self._fetch_object("GET", f"{self.base_url}/alerts_policies.json")
        return self._records(payload.get("policies"), AlertPolicy.from_dict)

    def get_alert_policy(self, policy_id: str) -> AlertPolicy:
        """Return one alert policy by ID; raise NotFoundError when there is none."""
        self.require_account_id()
        variables = {"accountId": self.account_id.as_int(), "policyId": policy_id}
        result = self.nerdgraph_query(_POLICY_QUERY, variables)
        alerts = self._descend(result, "actor", "account", "alerts")
        policy = as_dict(alerts.get("policy"))
        if policy is None:
            raise NotFoundError("policy not found")
        return AlertPolicy(
            id=as_int(policy.get("id")),
            name=as_str(policy.get("name")),
            incident_preference=as_str(policy.get("incidentPreference")),
        )