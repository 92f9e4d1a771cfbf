# nrclient

A Python client for New Relic. It talks to the REST v2 API, the Synthetics API and
NerdGraph (GraphQL), and returns plain dataclasses.

## Installation

```
pip install nrclient
```

## Quick start

```python
from nrclient.client import Client

with Client(api_key="placeholder", account_id="12345", region="US") as client:
    for app in client.list_applications():
        print(app.id, app.name, app.health_status)

    result = client.query_nrql("SELECT count(*) FROM Transaction FACET name")
    for row in result.results:
        print(row)
```

The `Client` constructor takes these arguments:

| Argument | Meaning |
| --- | --- |
| `api_key` | Sent as the `Api-Key` header. |
| `account_id` | Optional. Needed by the calls that work on one account. |
| `region` | `"EU"` selects the EU endpoints. Any other value selects the US endpoints. |
| `timeout` | Request timeout in seconds. The default is 30. |
| `verbose` and `stderr` | When `verbose` is true and `stderr` is given, each request and its status are written to `stderr` as `[DEBUG]` lines. |
| `session` | An optional `requests.Session` to use. |

When you use the client as a context manager, it closes its session on exit.

## What it covers

- **Applications**: `list_applications()`, `get_application(app_id)` and
  `list_application_metrics(app_id)`.
- **Deployments**: `list_deployments(app_id)` and
  `create_deployment(app_id, revision, description, user, changelog)`. Empty optional
  fields are left out of the request.
- **Alerts**: `list_alert_policies()` and `get_alert_policy(policy_id)`.
- **Synthetics**: `list_synthetic_monitors()` and `get_synthetic_monitor(monitor_id)`.
- **NRQL**: `query_nrql(nrql)`. Result rows that are not objects come back as `None`.
- **Entities**: `search_entities(query)`.
- **App ID resolution**: `resolve_app_id(identifier)` accepts three kinds of identifier:
  - a numeric app ID, which is returned as it is;
  - an APM application entity GUID;
  - an application name, which is looked up through entity search.
- **Dashboards**: `list_dashboards()` and `get_dashboard(guid)`. The result of
  `get_dashboard` includes pages and widgets.
- **Log parsing rules**: `list_log_parsing_rules()`, `get_log_parsing_rule(rule_id)`,
  `create_log_parsing_rule(...)`, `update_log_parsing_rule(rule_id, update)` and
  `delete_log_parsing_rule(rule_id)`.
  - Deleted rules are left out of the list.
  - For a partial update, pass a `nrclient.logs.LogParsingRuleUpdate`. Fields left as
    `None` keep their current values.
- **Users**: `list_users()` and `get_user(user_id)`. The result of `get_user` includes
  the user's groups.

Each area is also available on its own as a class, such as `nrclient.alerts.AlertsAPI`
or `nrclient.logs.LogsAPI`. Each of these classes takes the same constructor arguments
as `Client`.

## Errors

All errors derive from `nrclient.errors.NewRelicError`:

| Error | When it is raised |
| --- | --- |
| `APIError` | An HTTP status of 400 or above. It carries `status_code` and `body`. |
| `GraphQLError` | NerdGraph returned errors. |
| `ResponseError` | The request failed, or the response was malformed or could not be parsed. |
| `AccountIDRequiredError` | The call needs an account ID and none was configured. |
| `NotFoundError` | A policy, dashboard, rule, user or named application was not found. |

`is_not_found(err)` and `is_unauthorized(err)` check an error and the errors it was
raised from:

- `is_not_found(err)` is true for a `NotFoundError` or an HTTP 404.
- `is_unauthorized(err)` is true for an HTTP 401.

```python
from nrclient.errors import is_not_found

try:
    client.get_application("99999")
except Exception as err:
    if is_not_found(err):
        print("no such application")
    else:
        raise
```

## Time helpers

These live in `nrclient.timeutil`.

- `parse_flexible_time(s, now=None)` reads several kinds of value:
  - RFC 3339 timestamps
  - plain dates in the forms `YYYY-MM-DD`, `MM/DD/YYYY` and `Jan 2, 2006`
  - relative phrases such as `"7 days ago"` or `"2 hours ago"`
  - `now`, `today` and `yesterday`
- `parse_deployment_timestamp(s)` parses the timestamps returned by the deployments API.
- `filter_deployments_by_time(deployments, since, until)` keeps only the deployments
  that fall within a time range.
  - A bound given as `None` is not applied.
  - Deployments whose timestamps cannot be parsed are kept.

## Types

`nrclient.types` provides three validated identifier types:

- `EntityGUID` decodes base64 `version|domain|type|id` GUIDs.
- `APIKey` checks the key's length and warns when it lacks the `NRAK-` prefix.
- `AccountID` is a positive integer held as text.

It also provides a dataclass for each resource the API returns.

## What it does not do

This is a library only. It has no command-line tool, and it does not read credentials
from configuration files or the environment. Pass the API key, the account ID and the
region to the constructor yourself.