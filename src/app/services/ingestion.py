"""Transaction ingestion service.

This module loads transaction records from comma-separated text:
1. Discard the header line and blank lines
2. Parse each row (fields, timestamp, amount, category)
3. Resolve or create the owning customer by email
4. Persist the transaction

Malformed rows are logged and skipped; they never abort the load. Each
customer and transaction is committed as soon as it is created, so a failing
row never undoes rows loaded before it.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.categorization.rules import Category, categorize, parse_category
from app.core.exceptions import MalformedRowError
from app.models.customer import Customer
from app.models.transaction import Transaction
from app.models.types import MONEY_PRECISION, MONEY_SCALE
from app.repositories.customer import CustomerRepository
from app.repositories.transaction import TransactionRepository

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
REQUIRED_FIELDS = 8

# Zero-padded "YYYY-MM-DD HH:MM:SS" only; strptime alone accepts "2024-1-5 8:3:0".
_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")
# Plain decimal notation with optional exponent; no "_", "NaN" or "Infinity".
_AMOUNT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_MAX_AMOUNT = Decimal(10) ** (MONEY_PRECISION - MONEY_SCALE)


def _column_length(model, column: str) -> int:
    return model.__table__.c[column].type.length


_FIELD_LIMITS = {
    "external_id": _column_length(Transaction, "external_id"),
    "customer_name": _column_length(Customer, "name"),
    "customer_email": _column_length(Customer, "email"),
    "description": _column_length(Transaction, "description"),
    "merchant": _column_length(Transaction, "merchant"),
    "mcc": _column_length(Transaction, "merchant_category_code"),
}


@dataclass(frozen=True)
class ParsedRow:
    """A validated ingestion row, ready to persist."""

    external_id: str
    customer_name: str
    customer_email: str
    timestamp: datetime
    description: str
    merchant: str
    mcc: str
    amount: Decimal
    category: Category


@dataclass
class IngestionResult:
    """Counters reported at the end of a load."""

    customers_created: int = 0
    transactions_created: int = 0
    rows_skipped: int = 0


def _parse_amount(value: str) -> Decimal:
    if not _AMOUNT_RE.fullmatch(value):
        raise MalformedRowError("ING_003", details={"amount": value})
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise MalformedRowError("ING_003", details={"amount": value})
    # Stored as NUMERIC(38, 2): reject instead of rounding or overflowing.
    _, digits, exponent = amount.as_tuple()
    extra = -MONEY_SCALE - exponent
    if amount.copy_abs() >= _MAX_AMOUNT or (extra > 0 and any(digits[-extra:])):
        raise MalformedRowError("ING_003", details={"amount": value})
    return amount


def parse_row(line: str) -> ParsedRow:
    """Parse one data line.

    Fields: externalId, customerName, customerEmail, timestamp, description,
    merchant, mcc, amount and an optional category. Commas inside fields are
    not supported.

    Raises:
        MalformedRowError: ING_001 (too few fields), ING_002 (timestamp),
            ING_003 (amount) or ING_004 (field too long)
    """
    parts = [part.strip() for part in line.split(",")]
    if len(parts) < REQUIRED_FIELDS:
        raise MalformedRowError("ING_001", details={"fields": len(parts)})

    external_id, name, email, timestamp_str, description, merchant, mcc, amount_str = parts[
        :REQUIRED_FIELDS
    ]
    category_str = parts[REQUIRED_FIELDS] if len(parts) > REQUIRED_FIELDS else ""

    if not _TIMESTAMP_RE.fullmatch(timestamp_str):
        raise MalformedRowError("ING_002", details={"timestamp": timestamp_str})
    try:
        timestamp = datetime.strptime(timestamp_str, TIMESTAMP_FORMAT)
    except ValueError:
        raise MalformedRowError("ING_002", details={"timestamp": timestamp_str})

    amount = _parse_amount(amount_str)

    values = {
        "external_id": external_id,
        "customer_name": name,
        "customer_email": email,
        "description": description,
        "merchant": merchant,
        "mcc": mcc,
    }
    for field, limit in _FIELD_LIMITS.items():
        if len(values[field]) > limit:
            raise MalformedRowError("ING_004", details={"field": field, "limit": limit})

    category = parse_category(category_str) or categorize(description, merchant, mcc)

    return ParsedRow(
        external_id=external_id,
        customer_name=name,
        customer_email=email,
        timestamp=timestamp,
        description=description,
        merchant=merchant,
        mcc=mcc,
        amount=amount,
        category=category,
    )


class TransactionLoader:
    """Loads customers and transactions from delimited text into the store."""

    def __init__(self, db: AsyncSession):
        """Initialize the loader.

        Args:
            db: Database session for persistence
        """
        self.db = db
        self.customer_repo = CustomerRepository(db)
        self.transaction_repo = TransactionRepository(db)

    async def load_file(self, path: Path) -> IngestionResult:
        """Load a CSV file from disk (UTF-8, first line is a header)."""
        with open(path, encoding="utf-8") as handle:
            return await self.load_lines(handle)

    async def load_lines(self, lines: Iterable[str]) -> IngestionResult:
        """Load rows from an iterable of text lines.

        The first line is treated as a header and discarded.

        Args:
            lines: Header line followed by data lines

        Returns:
            IngestionResult with created/skipped counters
        """
        result = IngestionResult()
        # Scoped to this load: email -> customer id. Ids survive a rollback,
        # unlike the ORM instances, which a rollback expires.
        customers: dict[str, UUID] = {}

        iterator = iter(lines)
        next(iterator, None)

        for line_no, raw in enumerate(iterator, start=2):
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue

            try:
                row = parse_row(line)
            except MalformedRowError as exc:
                result.rows_skipped += 1
                logger.warning(
                    f"Skipping malformed row {line_no}: {exc.error_code}",
                    extra={"error_code": exc.error_code, "line_no": line_no},
                )
                continue

            try:
                await self._store(row, customers, result)
            except SQLAlchemyError as exc:
                # Only this row is lost; earlier rows are already committed.
                await self.db.rollback()
                result.rows_skipped += 1
                logger.warning(
                    f"Skipping row {line_no}: database rejected it",
                    extra={
                        "error_code": "DB_001",
                        "error_type": type(exc).__name__,
                        "line_no": line_no,
                    },
                )

        logger.info(
            f"Data loading complete: {result.customers_created} customers, "
            f"{result.transactions_created} transactions, {result.rows_skipped} rows skipped"
        )
        return result

    async def _store(
        self,
        row: ParsedRow,
        customers: dict[str, UUID],
        result: IngestionResult,
    ) -> None:
        customer_id = await self._resolve_customer(row, customers, result)
        await self.transaction_repo.create(
            Transaction(
                customer_id=customer_id,
                external_id=row.external_id,
                timestamp=row.timestamp,
                description=row.description,
                merchant=row.merchant,
                merchant_category_code=row.mcc,
                amount=row.amount,
                category=row.category,
            )
        )
        result.transactions_created += 1

    async def _resolve_customer(
        self,
        row: ParsedRow,
        customers: dict[str, UUID],
        result: IngestionResult,
    ) -> UUID:
        customer_id = customers.get(row.customer_email)
        if customer_id is not None:
            return customer_id

        customer = await self.customer_repo.get_by_email(row.customer_email)
        if customer is None:
            customer = await self.customer_repo.create(
                Customer(name=row.customer_name, email=row.customer_email)
            )
            result.customers_created += 1

        customers[row.customer_email] = customer.id
        return customer.id
