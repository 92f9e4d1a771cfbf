"""APM applications."""

from __future__ import annotations

from .transport import Transport
from .types import Application, Metric


class ApplicationsAPI(Transport):
    """Operations on APM applications."""

    def list_applications(self) -> list[Application]:
        """Return every APM application."""
        payload = self._fetch_object("GET", f"{self.base_url}/applications.json")
        return self._records(payload.get("applications"), Application.from_dict)

    def get_application(self, app_id: str) -> Application:
        """Return one application by its numeric ID."""
        payload = self._fetch_object("GET", f"{self.base_url}/applications/{app_id}.json")
        with self._parsing():
            return Application.from_dict(payload.get("application"))

    def list_application_metrics(self, app_id: str) -> list[Metric]:
        """Return the metrics available for an application."""
        payload = self._fetch_object(
            "GET", f"{self.base_url}/applications/{app_id}/metrics.json"
        )
        return self._records(payload.get("metrics"), Metric.from_dict)