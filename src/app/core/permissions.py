"""Access rules for customer-scoped data."""

from uuid import UUID


def can_access_customer(
    caller_customer_id: UUID | None,
    caller_is_admin: bool,
    target_customer_id: UUID | None,
) -> bool:
    """Decide whether a caller may read data scoped to ``target_customer_id``.

    Admins may read anything. Everyone else may only read the customer their
    account is linked to; a missing target (i.e. "all customers") is admin-only.
    """
    if caller_is_admin:
        return True
    if target_customer_id is None or caller_customer_id is None:
        return False
    return caller_customer_id == target_customer_id
