"""Custom column types."""
from decimal import Context, Decimal

from sqlalchemy import BigInteger, Numeric
from sqlalchemy.types import TypeDecorator

MONEY_PRECISION = 38
MONEY_SCALE = 2

# Wide enough that scaling a NUMERIC(38, 2) value by 100 never rounds.
_EXACT = Context(prec=MONEY_PRECISION + MONEY_SCALE)
# SQLite INTEGER is a signed 64-bit value.
_SQLITE_MAX_CENTS = 2**63 - 1


class Money(TypeDecorator):
    """Exact monetary amount with two decimal places.

    PostgreSQL stores ``NUMERIC(38, 2)``. SQLite has no exact decimal type and
    would fall back to REAL, so there the value is kept as an integer count of
    cents; ``SUM`` over integers stays exact and results are scaled back. The
    SQLite range is therefore limited to what fits in 64 bits of cents.
    """

    impl = Numeric(MONEY_PRECISION, MONEY_SCALE)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(BigInteger())
        return dialect.type_descriptor(Numeric(MONEY_PRECISION, MONEY_SCALE))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        cents = int(
            Decimal(value).scaleb(MONEY_SCALE, context=_EXACT).to_integral_value(context=_EXACT)
        )
        if abs(cents) > _SQLITE_MAX_CENTS:
            raise ValueError(f"Amount {value} is out of range for SQLite storage")
        return cents

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "sqlite":
            return Decimal(int(value)).scaleb(-MONEY_SCALE, context=_EXACT)
        return Decimal(value)
