"""Users of the organization."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .errors import NotFoundError, ResponseError
from .transport import Transport, as_dict, as_list, as_str
from .types import User

_LIST_QUERY = """
{
  actor {
    organization {
      userManagement {
        authenticationDomains {
          authenticationDomains {
            id
            name
            users { users { id name email type { displayName } } }
          }
        }
      }
    }
  }
}"""

_DETAIL_QUERY = """
{
  actor {
    organization {
      userManagement {
        authenticationDomains {
          authenticationDomains {
            name
            users {
              users {
                id name email
                type { displayName }
                groups { groups { displayName } }
              }
            }
          }
        }
      }
    }
  }
}"""

_PATH = ("actor", "organization", "userManagement", "authenticationDomains")


def _domains(result: dict[str, Any], detailed: bool) -> list[Any]:
    node = result
    for key in _PATH:
        child = as_dict(node.get(key))
        if child is None:
            raise ResponseError(
                f"unexpected response format: missing {key}"
                if detailed
                else "unexpected response format"
            )
        node = child
    domains = as_list(node.get("authenticationDomains"))
    if domains is None:
        raise ResponseError(
            "unexpected response format: missing domains list"
            if detailed
            else "unexpected response format"
        )
    return domains


def _domain_users(domains: list[Any]) -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield (domain name, user object) for every user in every domain."""
    for domain in map(as_dict, domains):
        if domain is None:
            continue
        users = as_list((as_dict(domain.get("users")) or {}).get("users"))
        if users is None:
            continue
        name = as_str(domain.get("name"))
        for user in map(as_dict, users):
            if user is not None:
                yield name, user


def _user_type(user: dict[str, Any]) -> str:
    return as_str((as_dict(user.get("type")) or {}).get("displayName"))


def _groups(user: dict[str, Any]) -> list[str]:
    groups = as_list((as_dict(user.get("groups")) or {}).get("groups")) or []
    return [as_str(g.get("displayName")) for g in map(as_dict, groups) if g is not None]


class UsersAPI(Transport):
    """Operations on the users of the organization."""

    def list_users(self) -> list[User]:
        """Return the users of every authentication domain."""
        result = self.nerdgraph_query(_LIST_QUERY, None)
        return [
            User(
                id=as_str(user.get("id")),
                name=as_str(user.get("name")),
                email=as_str(user.get("email")),
                type=_user_type(user),
                authentication_domain=domain,
            )
            for domain, user in _domain_users(_domains(result, detailed=True))
        ]

    def get_user(self, user_id: str) -> User:
        """Return one user with its groups; raise NotFoundError when there is none."""
        result = self.nerdgraph_query(_DETAIL_QUERY, None)
        for domain, user in _domain_users(_domains(result, detailed=False)):
            if as_str(user.get("id")) == user_id:
                return User(
                    id=as_str(user.get("id")),
                    name=as_str(user.get("name")),
                    email=as_str(user.get("email")),
                    type=_user_type(user),
                    groups=_groups(user),
                    authentication_domain=domain,
                )
        raise NotFoundError("user not found")