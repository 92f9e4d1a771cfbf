"""The complete New Relic API client."""

from __future__ import annotations

from types import TracebackType

from .alerts import AlertsAPI
from .applications import ApplicationsAPI
from .dashboards import DashboardsAPI
from .deployments import DeploymentsAPI
from .logs import LogsAPI
from .nrql import NRQLAPI
from .resolve import ResolveAPI
from .synthetics import SyntheticsAPI
from .users import UsersAPI


class Client(
    AlertsAPI,
    ApplicationsAPI,
    DeploymentsAPI,
    SyntheticsAPI,
    NRQLAPI,
    ResolveAPI,
    DashboardsAPI,
    LogsAPI,
    UsersAPI,
):
    """Client for the New Relic REST, NerdGraph and Synthetics APIs.

    Usable as a context manager, which closes the HTTP session on exit.
    """

    def __enter__(self) -> Client:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.session.close()