"""Synthetic monitors."""

from __future__ import annotations

from .transport import Transport
from .types import SyntheticMonitor


class SyntheticsAPI(Transport):
    """Operations on synthetic monitors."""

    def list_synthetic_monitors(self) -> list[SyntheticMonitor]:
        """Return every synthetic monitor."""
        payload = self._fetch_object("GET", f"{self.synthetics_url}/monitors.json")
        return self._records(payload.get("monitors"), SyntheticMonitor.from_dict)

    def get_synthetic_monitor(self, monitor_id: str) -> SyntheticMonitor:
        """Return one synthetic monitor by ID."""
        payload = self._fetch_object("GET", f"{self.synthetics_url}/monitors/{monitor_id}")
        with self._parsing():
            return SyntheticMonitor.from_dict(payload)