"""Custom exception hierarchy for pyrfid."""

from __future__ import annotations


class RfidError(Exception):
    """Base exception for all pyrfid errors."""

    @property
    def server_message(self) -> str | None:
        """Message supplied by the backend, if the error came from it."""
        return None


class RfidConfigError(RfidError):
    """Invalid or missing configuration."""


class RfidTransportError(RfidError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
        server_message: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self._server_message = server_message
        super().__init__(message)

    @property
    def server_message(self) -> str | None:
        return self._server_message


class RfidApiError(RfidError):
    """API answered with ``success: false`` (application-level error)."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
        server_message: str | None = None,
    ) -> None:
        self.endpoint = endpoint
        self._server_message = server_message
        super().__init__(message)

    @property
    def server_message(self) -> str | None:
        return self._server_message


class RfidBusinessRuleError(RfidError):
    """A local business rule rejected the operation before any request."""


class InsufficientStockError(RfidBusinessRuleError):
    """A cart line would exceed the product's available stock."""

    def __init__(self, product_name: str, available: int) -> None:
        self.product_name = product_name
        self.available = available
        super().__init__(f"insufficient stock for {product_name} (available: {available})")


class EmptyCartError(RfidBusinessRuleError):
    """A sale was requested with nothing in the cart."""

    def __init__(self) -> None:
        super().__init__("the cart is empty, add products first")
