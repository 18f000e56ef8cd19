"""Abstract order/payment backend.

Concrete implementations (HTTP, in-memory) live in the infrastructure
layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class OrderGateway(ABC):

    @abstractmethod
    def submit(self, payload: dict) -> dict:
        """Send one order request and return the decoded response body.

        Raises ``GatewayTransportError`` when the backend cannot be
        reached or its reply cannot be decoded.  Business rejections are
        returned as a normal body with a non-"success" status.
        """
