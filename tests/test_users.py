import pytest
import requests
import responses

from nrclient.errors import NotFoundError, ResponseError, is_unauthorized
from nrclient.users import UsersAPI

BASE = "https://nr.test"
GRAPHQL = BASE + "/graphql"


def _wrap(domains):
    return {
        "data": {
            "actor": {
                "organization": {
                    "userManagement": {
                        "authenticationDomains": {"authenticationDomains": domains}
                    }
                }
            }
        }
    }


USERS_LIST = _wrap(
    [
        {
            "id": "domain-1",
            "name": "Default",
            "users": {
                "users": [
                    {
                        "id": "user-001",
                        "name": "Alice Admin",
                        "email": "alice@example.com",
                        "type": {"displayName": "Full"},
                    },
                    {
                        "id": "user-002",
                        "name": "Bob Developer",
                        "email": "bob@example.com",
                        "type": {"displayName": "Basic"},
                    },
                ]
            },
        }
    ]
)

USER_DETAIL = _wrap(
    [
        {
            "name": "Default",
            "users": {
                "users": [
                    {
                        "id": "user-001",
                        "name": "Alice Admin",
                        "email": "alice@example.com",
                        "type": {"displayName": "Full"},
                        "groups": {
                            "groups": [
                                {"displayName": "Admin"},
                                {"displayName": "Engineering"},
                                {"displayName": "On-Call"},
                            ]
                        },
                    }
                ]
            },
        }
    ]
)


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def client():
    api = UsersAPI(api_key="placeholder", account_id="12345", session=requests.Session())
    api.base_url = BASE
    api.nerdgraph_url = GRAPHQL
    return api


def test_list_users(rsps, client):
    rsps.post(GRAPHQL, json=USERS_LIST)
    users = client.list_users()

    assert len(users) == 2
    assert users[0].id == "user-001"
    assert users[0].name == "Alice Admin"
    assert users[0].email == "alice@example.com"
    assert users[0].type == "Full"
    assert users[0].authentication_domain == "Default"
    assert users[1].id == "user-002"
    assert users[1].name == "Bob Developer"
    assert rsps.calls[-1].request.url == GRAPHQL


def test_list_users_empty(rsps, client):
    rsps.post(GRAPHQL, json=_wrap([]))
    assert client.list_users() == []


def test_list_users_multi_domain(rsps, client):
    rsps.post(
        GRAPHQL,
        json=_wrap(
            [
                {
                    "id": "domain-1",
                    "name": "Default",
                    "users": {
                        "users": [
                            {
                                "id": "user-1",
                                "name": "User One",
                                "email": "one@example.com",
                                "type": {"displayName": "Basic"},
                            }
                        ]
                    },
                },
                {
                    "id": "domain-2",
                    "name": "SSO",
                    "users": {
                        "users": [
                            {
                                "id": "user-2",
                                "name": "User Two",
                                "email": "two@example.com",
                                "type": {"displayName": "Full"},
                            }
                        ]
                    },
                },
            ]
        ),
    )
    users = client.list_users()
    assert [u.authentication_domain for u in users] == ["Default", "SSO"]
    assert [u.type for u in users] == ["Basic", "Full"]


def test_list_users_error(rsps, client):
    rsps.post(GRAPHQL, status=401, json={"error": "unauthorized"})
    with pytest.raises(Exception) as info:
        client.list_users()
    assert is_unauthorized(info.value)


def test_list_users_missing_domains_list(rsps, client):
    rsps.post(
        GRAPHQL,
        json={
            "data": {
                "actor": {
                    "organization": {"userManagement": {"authenticationDomains": {}}}
                }
            }
        },
    )
    with pytest.raises(ResponseError, match="missing domains list"):
        client.list_users()


def test_get_user(rsps, client):
    rsps.post(GRAPHQL, json=USER_DETAIL)
    user = client.get_user("user-001")

    assert user.id == "user-001"
    assert user.name == "Alice Admin"
    assert user.email == "alice@example.com"
    assert user.authentication_domain == "Default"
    assert sorted(user.groups) == ["Admin", "Engineering", "On-Call"]


def test_get_user_not_found(rsps, client):
    rsps.post(
        GRAPHQL,
        json=_wrap(
            [
                {
                    "name": "Default",
                    "users": {
                        "users": [
                            {"id": "other-user", "name": "Other", "email": "other@example.com"}
                        ]
                    },
                }
            ]
        ),
    )
    with pytest.raises(NotFoundError, match="user not found"):
        client.get_user("nonexistent")


def test_get_user_empty_domains(rsps, client):
    rsps.post(GRAPHQL, json=_wrap([]))
    with pytest.raises(NotFoundError, match="user not found"):
        client.get_user("user-001")


def test_get_user_bad_response(rsps, client):
    rsps.post(GRAPHQL, json={"data": {"actor": {}}})
    with pytest.raises(ResponseError) as info:
        client.get_user("user-001")
    assert str(info.value) == "unexpected response format"