"""Unit tests for the Money column type."""

from decimal import Decimal

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from app.models.types import Money

SQLITE = sqlite.dialect()
POSTGRES = postgresql.dialect()


class TestMoneyOnSqlite:
    def test_stored_as_integer_cents(self):
        assert Money().process_bind_param(Decimal("12345678901234567.89"), SQLITE) == (
            1234567890123456789
        )
        assert Money().process_bind_param(Decimal("-0.01"), SQLITE) == -1
        assert Money().process_bind_param(Decimal("1E+2"), SQLITE) == 10000

    def test_cents_read_back_as_decimal(self):
        value = Money().process_result_value(1234567890123456789, SQLITE)

        assert value == Decimal("12345678901234567.89")
        assert isinstance(value, Decimal)

    def test_sum_of_cents_stays_exact(self):
        # 0.10 + 0.20 as the database adds them.
        assert Money().process_result_value(10 + 20, SQLITE) == Decimal("0.30")

    def test_outside_64_bit_cents_rejected(self):
        with pytest.raises(ValueError):
            Money().process_bind_param(Decimal("92233720368547758.08"), SQLITE)

    def test_none_passes_through(self):
        assert Money().process_bind_param(None, SQLITE) is None
        assert Money().process_result_value(None, SQLITE) is None


class TestMoneyOnPostgres:
    def test_numeric_passes_through(self):
        value = Decimal("9" * 36 + ".99")

        assert Money().process_bind_param(value, POSTGRES) == value
        assert Money().process_result_value(value, POSTGRES) == value
