"""Unit tests for customer data access rules."""

from uuid import uuid4

from app.core.permissions import can_access_customer


class TestCanAccessCustomer:
    def test_admin_reads_any_customer(self):
        assert can_access_customer(None, True, uuid4()) is True

    def test_admin_reads_all_customers(self):
        assert can_access_customer(None, True, None) is True

    def test_user_reads_own_customer(self):
        customer_id = uuid4()
        assert can_access_customer(customer_id, False, customer_id) is True

    def test_user_denied_other_customer(self):
        assert can_access_customer(uuid4(), False, uuid4()) is False

    def test_user_denied_all_customers(self):
        assert can_access_customer(uuid4(), False, None) is False

    def test_unlinked_user_denied(self):
        assert can_access_customer(None, False, uuid4()) is False
