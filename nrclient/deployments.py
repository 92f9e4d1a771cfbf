"""Deployment markers."""

from __future__ import annotations

from typing import Any

from .transport import Transport
from .types import Deployment


class DeploymentsAPI(Transport):
    """Operations on application deployment markers."""

    def list_deployments(self, app_id: str) -> list[Deployment]:
        """Return every deployment recorded for an application."""
        payload = self._fetch_object(
            "GET", f"{self.base_url}/applications/{app_id}/deployments.json"
        )
        return self._records(payload.get("deployments"), Deployment.from_dict)

    def create_deployment(
        self,
        app_id: str,
        revision: str,
        description: str = "",
        user: str = "",
        changelog: str = "",
    ) -> Deployment:
        """Record a deployment; empty optional fields are left out of the request."""
        deployment: dict[str, Any] = {"revision": revision}
        optional = {"description": description, "user": user, "changelog": changelog}
        deployment.update({key: value for key, value in optional.items() if value})

        payload = self._fetch_object(
            "POST",
            f"{self.base_url}/applications/{app_id}/deployments.json",
            {"deployment": deployment},
        )
        with self._parsing():
            return Deployment.from_dict(payload.get("deployment"))