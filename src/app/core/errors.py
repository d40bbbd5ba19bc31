"""Error codes and user-friendly messages.

This module defines the error catalog for ingestion and the query API.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    # Ingestion (recovered locally, never returned over HTTP)
    "ING_001": {
        "code": "ING_001",
        "message": "Row has fewer than the required number of fields",
        "user_message": "A transaction record is incomplete.",
        "suggestion": "Each row needs at least 8 comma-separated fields.",
        "retry_allowed": False,
    },
    "ING_002": {
        "code": "ING_002",
        "message": "Row timestamp does not match 'YYYY-MM-DD HH:MM:SS'",
        "user_message": "A transaction record has an invalid timestamp.",
        "suggestion": "Use the format YYYY-MM-DD HH:MM:SS.",
        "retry_allowed": False,
    },
    "ING_003": {
        "code": "ING_003",
        "message": "Row amount is not a valid decimal number",
        "user_message": "A transaction record has an invalid amount.",
        "suggestion": "Amounts must be plain decimal numbers with at most two decimal places, such as 12.50.",
        "retry_allowed": False,
    },
    "ING_004": {
        "code": "ING_004",
        "message": "Row field exceeds its maximum stored length",
        "user_message": "A transaction record has a field that is too long.",
        "suggestion": "Shorten the field to fit its column.",
        "retry_allowed": False,
    },
    # Query API
    "CUST_001": {
        "code": "CUST_001",
        "message": "Customer not found",
        "user_message": "We couldn't find this customer.",
        "suggestion": "Please check the customer ID and try again.",
        "retry_allowed": False,
    },
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Access denied: caller is neither the data owner nor an admin",
        "user_message": "You don't have permission to access this data.",
        "suggestion": "You can only access your own customer data.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request parameters failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred",
        "suggestion": "Please try again later",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists",
        "suggestion": "Please check if the record was already created",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred",
        "suggestion": "Please try again later or contact support",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic definition for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]


def error_body(error_code: str, message: str | None = None) -> dict:
    """Build the JSON error envelope returned by the API for a catalog code."""
    return {
        "error_code": error_code,
        "message": message or get_error(error_code)["message"],
        "user_message": get_user_message(error_code),
        "suggestion": get_suggestion(error_code),
        "retry_allowed": is_retryable(error_code),
    }
