"""HTTP implementation of OrderGateway using ``requests``."""

from __future__ import annotations

import logging

import requests

from checkout.domain.exceptions import GatewayTransportError
from checkout.domain.repository.order_gateway import OrderGateway

logger = logging.getLogger(__name__)


class HttpOrderGateway(OrderGateway):

    def __init__(
        self,
        endpoint: str,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._session = session or requests.Session()

    # --- OrderGateway interface -----------------------------------------------

    def submit(self, payload: dict) -> dict:
        logger.debug("POST %s (timeout=%s)", self._endpoint, self._timeout)
        try:
            response = self._session.post(
                self._endpoint, json=payload, timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise GatewayTransportError(str(exc)) from exc

        body = self._decode(response)
        logger.debug("Order backend replied HTTP %s: %s", response.status_code, body)

        # An HTTP error never counts as success, whatever the body says
        if not response.ok and body.get("status") == "success":
            return {"status": "error", "message": body.get("message")}
        if not response.ok and "status" not in body:
            return {**body, "status": "error"}
        return body

    # --- Decoding helpers -----------------------------------------------------

    @staticmethod
    def _decode(response: requests.Response) -> dict:
        try:
            body = response.json()
        except ValueError as exc:
            raise GatewayTransportError(
                f"Unreadable response from order backend (HTTP {response.status_code})"
            ) from exc
        if not isinstance(body, dict):
            raise GatewayTransportError(
                f"Unexpected response from order backend (HTTP {response.status_code})"
            )
        return body
