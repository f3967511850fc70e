from __future__ import annotations

from ..client import BillingIOClient
from ..debug import dprint
from ..models import HealthResponse


class HealthAPI:
    """Service health check. The endpoint itself does not require authentication."""

    def __init__(self, client: BillingIOClient):
        self.client = client

    def get(self) -> HealthResponse:
        dprint("health.get()")
        resp = self.client.get("/health")
        return HealthResponse.model_validate(resp)


__all__ = ["HealthAPI"]
