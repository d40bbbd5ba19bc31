"""Custom exception classes for ingestion and the query API.

Each exception carries an error_code defined in errors.py.
"""

from typing import Any


class TransactionApiError(Exception):
    """Base exception for all application errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "CUST_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class MalformedRowError(TransactionApiError):
    """Raised when an ingestion row cannot be turned into a transaction.

    Codes:
    - ING_001: fewer than 8 fields
    - ING_002: unparseable timestamp
    - ING_003: unparseable, over-precise or out-of-range amount
    - ING_004: field longer than its column

    Always recovered by the loader: the row is logged and skipped.
    """

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(error_code, details=details, http_status=400)


class CustomerNotFoundError(TransactionApiError):
    """Raised when a customer id does not resolve to an existing customer."""

    def __init__(self, customer_id: Any):
        super().__init__(
            "CUST_001", details={"customer_id": str(customer_id)}, http_status=404
        )


class AccessDeniedError(TransactionApiError):
    """Raised when a non-admin caller requests another customer's data."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("AUTH_001", details=details, http_status=403)
