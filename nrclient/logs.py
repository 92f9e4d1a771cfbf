"""Log parsing rules."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any

from .errors import NewRelicError, NotFoundError, ResponseError
from .transport import Transport, as_dict, as_list, as_str
from .types import LogParsingRule

_RULE_FIELDS = "id description enabled grok lucene nrql updatedAt"

_LIST_QUERY = f"""
query($accountId: Int!) {{
  actor {{
    account(id: $accountId) {{
      logConfigurations {{
        parsingRules {{ {_RULE_FIELDS} deleted }}
      }}
    }}
  }}
}}"""

_CREATE_MUTATION = f"""
mutation($accountId: Int!, $rule: LogConfigurationsParsingRuleConfiguration!) {{
  logConfigurationsCreateParsingRule(accountId: $accountId, rule: $rule) {{
    rule {{ {_RULE_FIELDS} }}
    errors {{ message type }}
  }}
}}"""

_UPDATE_MUTATION = f"""
mutation($accountId: Int!, $rule: LogConfigurationsParsingRuleConfiguration!, $id: ID!) {{
  logConfigurationsUpdateParsingRule(accountId: $accountId, rule: $rule, id: $id) {{
    rule {{ {_RULE_FIELDS} }}
    errors {{ message type }}
  }}
}}"""


@dataclass
class LogParsingRuleUpdate:
    """Fields to change on a rule; None leaves a field as it is."""

    description: str | None = None
    enabled: bool | None = None
    grok: str | None = None
    lucene: str | None = None
    nrql: str | None = None


def _rule(data: dict[str, Any]) -> LogParsingRule:
    return LogParsingRule(
        id=as_str(data.get("id")),
        description=as_str(data.get("description")),
        enabled=data.get("enabled") is True,
        grok=as_str(data.get("grok")),
        lucene=as_str(data.get("lucene")),
        nrql=as_str(data.get("nrql")),
        updated_at=as_str(data.get("updatedAt")),
    )


def _first_error(node: dict[str, Any]) -> str | None:
    errors = as_list(node.get("errors"))
    if not errors:
        return None
    return as_str((as_dict(errors[0]) or {}).get("message"))


class LogsAPI(Transport):
    """Operations on log parsing rules."""

    def list_log_parsing_rules(self) -> list[LogParsingRule]:
        """Return the account's parsing rules, leaving out deleted ones."""
        self.require_account_id()
        result = self.nerdgraph_query(
            _LIST_QUERY, {"accountId": self.account_id.as_int()}
        )
        configs = self._descend(result, "actor", "account", "logConfigurations")
        rules = self._list_at(configs, "parsingRules")
        return [
            _rule(data)
            for data in map(as_dict, rules)
            if data is not None and data.get("deleted") is not True
        ]

    def _write_rule(
        self, mutation: str, field_name: str, verb: str, variables: dict[str, Any]
    ) -> LogParsingRule:
        result = self.nerdgraph_query(mutation, variables)
        outcome = as_dict(result.get(field_name))
        if outcome is None:
            raise ResponseError("unexpected response format")
        message = _first_error(outcome)
        if message is not None:
            raise NewRelicError(f"failed to {verb} rule: {message}")
        rule = as_dict(outcome.get("rule"))
        if rule is None:
            raise ResponseError("unexpected response format: missing rule")
        return _rule(rule)

    def create_log_parsing_rule(
        self,
        description: str,
        grok: str,
        nrql: str,
        enabled: bool = True,
        lucene: str = "",
    ) -> LogParsingRule:
        """Create a parsing rule and return it as stored."""
        self.require_account_id()
        variables = {
            "accountId": self.account_id.as_int(),
            "rule": {
                "description": description,
                "enabled": enabled,
                "grok": grok,
                "lucene": lucene,
                "nrql": nrql,
            },
        }
        return self._write_rule(
            _CREATE_MUTATION, "logConfigurationsCreateParsingRule", "create", variables
        )

    def get_log_parsing_rule(self, rule_id: str) -> LogParsingRule:
        """Return one rule by ID; raise NotFoundError when there is none."""
        for rule in self.list_log_parsing_rules():
            if rule.id == rule_id:
                return rule
        raise NotFoundError(f"rule not found: {rule_id}")

    def update_log_parsing_rule(
        self, rule_id: str, update: LogParsingRuleUpdate
    ) -> LogParsingRule:
        """Apply an update; unset fields keep the rule's current values."""
        self.require_account_id()
        existing = self.get_log_parsing_rule(rule_id)
        merged = {
            f.name: (
                getattr(existing, f.name)
                if getattr(update, f.name) is None
                else getattr(update, f.name)
            )
            for f in fields(LogParsingRuleUpdate)
        }
        variables = {
            "accountId": self.account_id.as_int(),
            "rule": merged,
            "id": rule_id,
        }
        return self._write_rule(
            _UPDATE_MUTATION, "logConfigurationsUpdateParsingRule", "update", variables
        )

    def delete_log_parsing_rule(self, rule_id: str) -> None:
        """Delete a rule."""
        self.require_account_id()
        mutation = f"""
mutation {{
  logConfigurationsDeleteParsingRule(accountId: {self.account_id}, id: {json.dumps(rule_id)}) {{
    errors {{ message type }}
  }}
}}"""
        result = self.nerdgraph_query(mutation, None)
        outcome = as_dict(result.get("logConfigurationsDeleteParsingRule"))
        if outcome is None:
            raise ResponseError("unexpected response format")
        message = _first_error(outcome)
        if message is not None:
            raise NewRelicError(f"failed to delete rule: {message}")